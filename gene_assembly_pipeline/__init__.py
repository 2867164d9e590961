#!/usr/bin/env python3

"""
Gene Assembly Pipeline

Streams sorted genome annotation records (GTF) and assembles them into
Gene -> Transcript -> Exon hierarchies, holding only one gene in memory
at a time.

This modular implementation provides:
- Grouping of contiguous gene and transcript blocks from a feature stream
- Consistency validation of chromosome, strand and codon pairs
- Gene- and transcript-relative coordinate frames with exon merging
- Centralized configuration management and performance monitoring

Modules:
- core: Data structures, builders, readers, parsers, exceptions and configuration
- utils: Performance monitoring
- tests: Unit test suite
"""

__version__ = "1.0.0"
__author__ = "Gene Assembly Pipeline Team"

from .core.data_structures import Feature, Gene, Transcript, Exon
from .core.exceptions import (
    EndOfInput, PipelineError, ParseError, FeaturesError,
    InconsistentLocationError, InconsistentOrientationError, ValidationError,
    IncompleteCodonPairError, OverlappingExonsError, ConfigurationError,
    MemoryLimitError
)
from .core.builders import merge_exons, TranscriptBuilder, GeneBuilder
from .core.readers import GeneReader, Scanner
from .core.parsers import GTFFeatureReader, GTFGeneReader
from .core.config import PipelineConfig, load_config
from .core.pipeline import GeneAssemblyPipeline, AssemblyStats

__all__ = [
    # Main pipeline
    'GeneAssemblyPipeline', 'AssemblyStats',
    # Data structures
    'Feature', 'Gene', 'Transcript', 'Exon',
    # Builders and readers
    'merge_exons', 'TranscriptBuilder', 'GeneBuilder',
    'GeneReader', 'Scanner', 'GTFFeatureReader', 'GTFGeneReader',
    # Exceptions
    'EndOfInput', 'PipelineError', 'ParseError', 'FeaturesError',
    'InconsistentLocationError', 'InconsistentOrientationError', 'ValidationError',
    'IncompleteCodonPairError', 'OverlappingExonsError', 'ConfigurationError',
    'MemoryLimitError',
    # Configuration
    'PipelineConfig', 'load_config'
]
