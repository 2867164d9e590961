#!/usr/bin/env python3

"""
GTF (GFF version 2) feature and gene readers.

GTFFeatureReader turns annotation lines into Feature records grouped by
configurable attribute tags. GTFGeneReader feeds those features to a
GeneReader. Entries are expected to be sorted by the gene and transcript
grouping tags, for example:

    Y  .  exon         10  20  0  -  .  gene_id A; transcript_id A1;
    Y  .  exon         50  90  0  -  .  gene_id A; transcript_id A1;
    Y  .  stop_codon   60  62  0  -  .  gene_id A; transcript_id A1;
    Y  .  start_codon  71  73  0  -  .  gene_id A; transcript_id A1;
    Y  .  exon         10 100  0  -  .  gene_id A; transcript_id A2;
"""

from typing import Dict, Iterable, Iterator, List

from .data_structures import Feature, Gene, STRANDS
from .exceptions import ParseError, ConfigurationError, EndOfInput
from .readers import GeneReader

GTF_COLUMNS = 9


class GTFFeatureReader:
    """Parse GTF lines lazily into Feature records."""

    def __init__(self, lines: Iterable[str], gene_tag: str = "gene_id",
                 transcript_tag: str = "transcript_id", name: str = ""):
        self._lines = iter(lines)
        self.gene_tag = gene_tag
        self.transcript_tag = transcript_tag
        self.name = name or getattr(lines, 'name', '')
        self.line_number = 0

    def __iter__(self) -> Iterator[Feature]:
        while True:
            try:
                yield self.read()
            except EndOfInput:
                return

    def read(self) -> Feature:
        """Read the next feature, skipping blank and comment lines."""
        for line in self._lines:
            self.line_number += 1
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            return self.parse_line(line)
        raise EndOfInput()

    def parse_line(self, line: str) -> Feature:
        """Convert one GTF line into a 0-based half-open Feature."""
        parts = line.split('\t')
        if len(parts) != GTF_COLUMNS:
            raise self._error(f"expected {GTF_COLUMNS} tab-separated columns, found {len(parts)}")

        chrom, source, feature_type, start, end, score, strand, frame, attributes = parts

        try:
            start, end = int(start), int(end)
        except ValueError:
            raise self._error(f"invalid coordinates: {parts[3]}-{parts[4]}")

        if strand not in STRANDS:
            raise self._error(f"invalid strand: {strand}")
        if start < 1 or end < start:
            raise self._error(f"invalid coordinates: {start}-{end}")

        attr_dict = self._parse_gtf_attributes(attributes)
        gene_id = attr_dict.get(self.gene_tag, '')
        if not gene_id:
            raise self._error(f"empty grouping {self.gene_tag} field")
        transcript_id = attr_dict.get(self.transcript_tag, '')
        if not transcript_id:
            raise self._error(f"empty grouping {self.transcript_tag} field")

        # GTF is 1-based and closed
        return Feature(
            gene_id=gene_id,
            transcript_id=transcript_id,
            feature_type=feature_type,
            strand=strand,
            chrom=chrom,
            start=start - 1,
            end=end,
            source=source,
            line_number=self.line_number
        )

    def _parse_gtf_attributes(self, attr_string: str) -> Dict[str, str]:
        """Parse GTF attributes of the form 'key "value";' or 'key value;'."""
        attributes = {}
        for attr in attr_string.split(';'):
            attr = attr.strip()
            if not attr:
                continue
            key, _, value = attr.partition(' ')
            attributes[key.strip()] = value.strip().strip('"')
        return attributes

    def _error(self, message: str) -> ParseError:
        return ParseError(message, self.name, self.line_number)


class GTFGeneReader:
    """
    Read genes from GTF lines.

    Features are grouped into transcripts and genes by the transcript and
    gene tags, "transcript_id" and "gene_id" by default. The tags can only
    be changed before the first read.
    """

    def __init__(self, lines: Iterable[str], name: str = ""):
        self.feature_reader = GTFFeatureReader(lines, name=name)
        self.gene_reader = GeneReader(self.feature_reader)
        self._started = False

    def set_gene_tag(self, tag: str) -> None:
        """Set the gene grouping tag."""
        self._check_not_started("gene")
        self.feature_reader.gene_tag = tag

    def set_transcript_tag(self, tag: str) -> None:
        """Set the transcript grouping tag."""
        self._check_not_started("transcript")
        self.feature_reader.transcript_tag = tag

    def _check_not_started(self, level: str) -> None:
        if self._started:
            raise ConfigurationError(f"cannot set {level} tag after first read")

    def read(self) -> Gene:
        self._started = True
        return self.gene_reader.read()

    def read_all(self) -> List[Gene]:
        self._started = True
        return self.gene_reader.read_all()

    def __iter__(self) -> Iterator[Gene]:
        self._started = True
        return iter(self.gene_reader)

    @property
    def features_read(self) -> int:
        return self.gene_reader.features_read

    @property
    def line_number(self) -> int:
        return self.feature_reader.line_number

