#!/usr/bin/env python3

"""
Main pipeline class for gene assembly.

Streams a GTF file through the gene reader, one gene at a time, while
monitoring memory and collecting summary statistics.
"""

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .config import PipelineConfig
from .data_structures import Gene
from .exceptions import ParseError, PipelineError
from .parsers import GTFGeneReader
from ..utils.performance_monitor import PerformanceMonitor


@dataclass
class AssemblyStats:
    """Counts collected while assembling genes."""
    genes: int = 0
    transcripts: int = 0
    coding_transcripts: int = 0
    non_coding_transcripts: int = 0
    exons: int = 0
    exon_length: int = 0
    cds_length: int = 0
    features: int = 0
    max_transcripts_per_gene: int = 0

    def add_gene(self, gene: Gene) -> None:
        coding = gene.coding_transcripts
        self.genes += 1
        self.transcripts += gene.transcript_count
        self.coding_transcripts += len(coding)
        self.non_coding_transcripts += gene.transcript_count - len(coding)
        self.max_transcripts_per_gene = max(self.max_transcripts_per_gene, gene.transcript_count)
        self.cds_length += sum(t.cds_length for t in coding)
        for transcript in gene.transcripts:
            self.exons += transcript.exon_count
            self.exon_length += transcript.total_exon_length

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class GeneAssemblyPipeline:
    """Assemble genes from a sorted GTF file."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.monitor = PerformanceMonitor(
            memory_limit_mb=self.config.memory_limit_mb,
            enabled=self.config.enable_memory_monitoring
        )
        self.stats = AssemblyStats()

    def iter_genes(self, gene_model_file: str) -> Iterator[Gene]:
        """
        Stream genes from a GTF file.

        Only the gene under construction is held in memory. Memory is checked
        every ``memory_check_interval`` genes and progress is logged every
        ``progress_interval`` genes.
        """
        try:
            handle = open(gene_model_file, 'r')
        except FileNotFoundError:
            raise ParseError(f"Gene model file not found: {gene_model_file}")

        with handle:
            reader = GTFGeneReader(handle, name=gene_model_file)
            reader.set_gene_tag(self.config.gene_tag)
            reader.set_transcript_tag(self.config.transcript_tag)

            count = 0
            for gene in reader:
                count += 1
                self.stats.features = reader.features_read
                self.monitor.record_operations(1)

                if self.config.enable_memory_monitoring and count % self.config.memory_check_interval == 0:
                    self.monitor.check_memory_limit()
                if count % self.config.progress_interval == 0:
                    logging.info(f"Assembled {count:,} genes from {reader.line_number:,} lines")

                yield gene

            self.stats.features = reader.features_read

    def assemble(self, gene_model_file: str) -> List[Gene]:
        """Assemble all genes of a file; any error aborts the whole read."""
        self.stats = AssemblyStats()
        with self.monitor.phase_context("gene_assembly"):
            genes = []
            for gene in self.iter_genes(gene_model_file):
                self.stats.add_gene(gene)
                genes.append(gene)
        return genes

    def run(self, gene_model_file: str, log_file: Optional[str] = None) -> bool:
        """
        Run the assembly over a file without retaining the genes.

        Args:
            gene_model_file: Path to a sorted GTF file
            log_file: Optional file that receives a copy of the log

        Returns:
            True if every gene in the file was assembled
        """
        self.stats = AssemblyStats()
        file_handler = None
        try:
            if log_file:
                file_handler = self._setup_pipeline_logging(log_file)
            if self.config.debug_mode:
                logging.getLogger().setLevel(logging.DEBUG)

            logging.info("Starting Gene Assembly Pipeline")
            logging.info(f"Configuration: {self.config}")
            logging.info(f"Gene model file: {gene_model_file}")

            with self.monitor.phase_context("gene_assembly"):
                for gene in self.iter_genes(gene_model_file):
                    self.stats.add_gene(gene)

            self._log_summary()
            logging.info("Pipeline completed successfully")
            self.monitor.log_performance_report()

            return True

        except PipelineError as e:
            logging.error(f"Pipeline failed: {e}")
            return False
        except Exception as e:
            logging.error(f"Pipeline failed: {e}")
            logging.debug("Full traceback:", exc_info=True)
            return False
        finally:
            if file_handler:
                logging.getLogger().removeHandler(file_handler)
                file_handler.close()

    def _setup_pipeline_logging(self, log_file: str) -> logging.Handler:
        """Set up pipeline-specific logging."""
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        ))

        logging.getLogger().addHandler(file_handler)
        return file_handler

    def _log_summary(self) -> None:
        stats = self.stats
        logging.info(f"Read {stats.features:,} features")
        logging.info(f"Assembled {stats.genes:,} genes with {stats.transcripts:,} transcripts "
                     f"({stats.coding_transcripts:,} coding, {stats.non_coding_transcripts:,} non-coding)")
        logging.info(f"Total exons after merging: {stats.exons:,} ({stats.exon_length:,} bp)")
        logging.info(f"Total CDS span of coding transcripts: {stats.cds_length:,} bp")
        logging.info(f"Most transcripts in one gene: {stats.max_transcripts_per_gene}")
