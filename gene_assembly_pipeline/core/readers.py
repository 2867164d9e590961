#!/usr/bin/env python3

"""
Streaming gene readers.

GeneReader pulls features one at a time from any iterable, collects the
contiguous block of features sharing a gene ID and emits a Gene each time
the gene ID changes or the stream ends. Only the block under construction
is held in memory.

Input must be sorted so that the features of each gene, and within a gene
the features of each transcript, are contiguous. This is not checked: a
gene ID that reappears after a different one starts a new, unrelated gene.
"""

from typing import Callable, Iterable, Iterator, List, Optional

from .builders import GeneBuilder
from .data_structures import Gene
from .exceptions import EndOfInput


class GeneBlock:
    """Features accumulated for the gene currently being read."""

    def __init__(self, gene_id: str):
        self.gene_id = gene_id
        self.features: List = []

    def add(self, feature) -> None:
        self.features.append(feature)


class GeneReader:
    """Read genes from a stream of features grouped by gene and transcript ID."""

    def __init__(self, features: Iterable, builder: Optional[GeneBuilder] = None):
        self._features = iter(features)
        self.builder = builder or GeneBuilder()
        self._block: Optional[GeneBlock] = None
        self._error: Optional[BaseException] = None
        self._error_traceback = None
        self.features_read = 0
        self.genes_read = 0

    def read(self) -> Gene:
        """
        Read the next gene.

        When read returns, the underlying stream is positioned just past the
        first feature of the following gene (or at its end).

        Raises:
            EndOfInput: No features remain
            FeaturesError, ValidationError: The gene block is inconsistent
            Any exception raised by the feature source, unchanged
        """
        if self._error is not None:
            # Restore the first traceback so repeated calls do not extend it
            raise self._error.with_traceback(self._error_traceback)

        try:
            gene = self._read_gene()
        except Exception as e:
            self._error = e
            self._error_traceback = e.__traceback__
            raise

        self.genes_read += 1
        return gene

    def _read_gene(self) -> Gene:
        while True:
            try:
                feature = next(self._features)
            except StopIteration:
                if self._block is None:
                    raise EndOfInput()
                block, self._block = self._block, None
                return self._finish(block)

            self.features_read += 1

            if self._block is None:
                self._block = GeneBlock(feature.gene_id)
                self._block.add(feature)
                continue

            if self._block.gene_id != feature.gene_id:
                block = self._block
                self._block = GeneBlock(feature.gene_id)
                self._block.add(feature)
                return self._finish(block)

            self._block.add(feature)

    def _finish(self, block: GeneBlock) -> Gene:
        return self.builder.build(block.gene_id, block.features)

    def read_all(self) -> List[Gene]:
        """
        Read all remaining genes.

        End of input is not an error. Any other error is raised and the
        genes read so far are discarded.
        """
        genes = []
        while True:
            try:
                genes.append(self.read())
            except EndOfInput:
                return genes

    def __iter__(self) -> Iterator[Gene]:
        while True:
            try:
                gene = self.read()
            except EndOfInput:
                return
            yield gene


class _FuncReader:
    """Adapt a callable returning genes to the reader interface."""

    def __init__(self, func: Callable[[], Gene]):
        self.func = func

    def read(self) -> Gene:
        return self.func()


class Scanner:
    """
    Loop interface over a gene reader.

    Successive calls to advance() step through the reader's genes; each gene
    is then available as ``scanner.gene``. Scanning stops for good at the end
    of input or at the first error.

    Example:
        scanner = Scanner(reader)
        while scanner.advance():
            handle(scanner.gene)
        if scanner.error:
            raise scanner.error
    """

    def __init__(self, reader):
        self.reader = reader
        self.gene: Optional[Gene] = None
        self._error: Optional[BaseException] = None

    @classmethod
    def from_func(cls, func: Callable[[], Gene]) -> 'Scanner':
        """Create a scanner that reads genes from calls to func."""
        return cls(_FuncReader(func))

    def advance(self) -> bool:
        """Read the next gene, returning False once scanning has stopped."""
        if self._error is not None:
            return False
        try:
            self.gene = self.reader.read()
        except Exception as e:
            self.gene = None
            self._error = e
            return False
        return True

    @property
    def error(self) -> Optional[BaseException]:
        """Get the first error that stopped the scan; None for end of input."""
        if isinstance(self._error, EndOfInput):
            return None
        return self._error

    def __iter__(self) -> Iterator[Gene]:
        while self.advance():
            yield self.gene
