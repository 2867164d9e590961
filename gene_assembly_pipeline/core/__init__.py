#!/usr/bin/env python3

"""
Core module for the gene assembly pipeline.

Contains the data structures, the gene and transcript builders, the
streaming readers, exception types and configuration management.
"""

from .data_structures import Feature, Gene, Transcript, Exon
from .exceptions import (
    EndOfInput, PipelineError, ParseError, FeaturesError,
    InconsistentLocationError, InconsistentOrientationError, ValidationError,
    IncompleteCodonPairError, OverlappingExonsError, ConfigurationError,
    MemoryLimitError
)
from .builders import merge_exons, TranscriptBuilder, GeneBuilder
from .readers import GeneReader, Scanner
from .parsers import GTFFeatureReader, GTFGeneReader
from .config import PipelineConfig, load_config

__all__ = [
    'Feature', 'Gene', 'Transcript', 'Exon',
    'EndOfInput', 'PipelineError', 'ParseError', 'FeaturesError',
    'InconsistentLocationError', 'InconsistentOrientationError', 'ValidationError',
    'IncompleteCodonPairError', 'OverlappingExonsError', 'ConfigurationError',
    'MemoryLimitError',
    'merge_exons', 'TranscriptBuilder', 'GeneBuilder',
    'GeneReader', 'Scanner',
    'GTFFeatureReader', 'GTFGeneReader',
    'PipelineConfig', 'load_config'
]
