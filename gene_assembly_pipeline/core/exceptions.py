#!/usr/bin/env python3

"""
Custom exceptions for the gene assembly pipeline.

Provides specific exception types for better error handling and debugging.
"""

from typing import List, Sequence


class EndOfInput(Exception):
    """Raised by readers when the feature stream is exhausted.

    Not a PipelineError: it marks the normal end of a stream and is never
    reported as a failure by read_all() or the Scanner.
    """
    pass


class PipelineError(Exception):
    """Base exception for all pipeline-related errors."""
    pass


class ParseError(PipelineError):
    """Error occurred during file parsing."""

    def __init__(self, message: str, filename: str = "", line_number: int = 0):
        super().__init__(message)
        self.filename = filename
        self.line_number = line_number

    def __str__(self):
        if self.filename and self.line_number:
            return f"Parse error in {self.filename} at line {self.line_number}: {super().__str__()}"
        elif self.line_number:
            return f"Parse error at line {self.line_number}: {super().__str__()}"
        elif self.filename:
            return f"Parse error in {self.filename}: {super().__str__()}"
        return super().__str__()


class FeaturesError(PipelineError):
    """A set of features cannot be assembled into a gene.

    Carries the gene id, the features of the offending gene block and the
    index of the first feature that broke the block's consistency.
    """

    def __init__(self, message: str, gene_id: str, features: Sequence = (), index: int = -1):
        super().__init__(message)
        self.gene_id = gene_id
        self.features: List = list(features)
        self.index = index

    @property
    def offending_feature(self):
        """Get the feature that triggered the error, if known."""
        if 0 <= self.index < len(self.features):
            return self.features[self.index]
        return None

    def __str__(self):
        return f"{super().__str__()} for gene {self.gene_id}"


class InconsistentLocationError(FeaturesError):
    """Features of one gene lie on different chromosomes."""

    def __init__(self, gene_id: str, features: Sequence = (), index: int = -1):
        super().__init__("features on varying location", gene_id, features, index)


class InconsistentOrientationError(FeaturesError):
    """Features of one gene lie on different strands."""

    def __init__(self, gene_id: str, features: Sequence = (), index: int = -1):
        super().__init__("features with varying orientation", gene_id, features, index)


class ValidationError(PipelineError):
    """Error occurred during structural validation of a gene or transcript."""

    def __init__(self, message: str, transcript_id: str = "", gene_id: str = ""):
        super().__init__(message)
        self.transcript_id = transcript_id
        self.gene_id = gene_id

    def __str__(self):
        if self.transcript_id:
            return f"Validation error for transcript {self.transcript_id}: {super().__str__()}"
        elif self.gene_id:
            return f"Validation error for gene {self.gene_id}: {super().__str__()}"
        return super().__str__()


class IncompleteCodonPairError(ValidationError):
    """A transcript carries a start codon without a stop codon or vice versa."""

    def __init__(self, transcript_id: str, gene_id: str = ""):
        super().__init__(f"only one of start/stop codon found for {transcript_id}",
                         transcript_id, gene_id)


class OverlappingExonsError(ValidationError):
    """Exons of a transcript overlap after merging."""

    def __init__(self, transcript_id: str = "", gene_id: str = "", first=None, second=None):
        super().__init__("exons overlap", transcript_id, gene_id)
        self.first = first
        self.second = second


class ConfigurationError(PipelineError):
    """Error in pipeline configuration."""
    pass


class MemoryLimitError(PipelineError):
    """Memory usage exceeded limits."""

    def __init__(self, message: str, current_usage: float, limit: float):
        super().__init__(message)
        self.current_usage = current_usage
        self.limit = limit

    def __str__(self):
        return f"Memory error: {super().__str__()} (current: {self.current_usage:.1f}MB, limit: {self.limit:.1f}MB)"
