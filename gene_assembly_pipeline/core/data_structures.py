#!/usr/bin/env python3

"""
Core data structures for the gene assembly pipeline.

Defines the input feature record and the Gene -> Transcript -> Exon
hierarchy the readers assemble, together with the structural checks each
level enforces when its children are attached.

Coordinates of input features are absolute, 0-based and half-open. A gene
keeps its absolute offset; transcripts are positioned relative to their gene
and exons (and CDS bounds) relative to their transcript.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from intervaltree import IntervalTree

from .exceptions import OverlappingExonsError, ValidationError

FORWARD = '+'
REVERSE = '-'
STRANDS = (FORWARD, REVERSE)

EXON = 'exon'
START_CODON = 'start_codon'
STOP_CODON = 'stop_codon'

CODING = 'coding'
NON_CODING = 'non_coding'


@dataclass(frozen=True)
class Feature:
    """A single annotation record tagged with its gene and transcript group."""
    gene_id: str
    transcript_id: str
    feature_type: str
    strand: str
    chrom: str
    start: int
    end: int
    source: str = ""
    line_number: int = 0

    def __post_init__(self):
        """Validate feature data after initialization."""
        if self.start >= self.end:
            raise ValueError(f"Invalid feature coordinates: {self.start}-{self.end}")
        if self.strand not in STRANDS:
            raise ValueError(f"Invalid strand: {self.strand}")
        if not self.gene_id:
            raise ValueError("Gene ID cannot be empty")
        if not self.transcript_id:
            raise ValueError("Transcript ID cannot be empty")


@dataclass
class Exon:
    """An exon positioned relative to its transcript's origin."""
    offset: int
    length: int

    def __post_init__(self):
        if self.length <= 0:
            raise ValueError(f"Invalid exon length: {self.length}")

    @property
    def end(self) -> int:
        return self.offset + self.length

    def touches(self, other: 'Exon') -> bool:
        """Check if other starts exactly where this exon ends."""
        return self.end == other.offset


@dataclass
class Transcript:
    """A coding or non-coding transcript.

    ``kind`` tags the variant. Coding transcripts carry ``cds_start`` and
    ``cds_end`` relative to the transcript's own origin; non-coding
    transcripts carry neither.
    """
    id: str
    offset: int
    strand: str
    kind: str = NON_CODING
    cds_start: Optional[int] = None
    cds_end: Optional[int] = None
    exons: List[Exon] = field(default_factory=list)
    gene_id: str = ""

    def __post_init__(self):
        """Validate transcript data after initialization."""
        if not self.id:
            raise ValueError("Transcript ID cannot be empty")
        if self.strand not in STRANDS:
            raise ValueError(f"Invalid strand: {self.strand}")
        if self.kind not in (CODING, NON_CODING):
            raise ValueError(f"Invalid transcript kind: {self.kind}")
        if self.kind == CODING and (self.cds_start is None or self.cds_end is None):
            raise ValueError(f"Coding transcript {self.id} requires both CDS bounds")
        if self.kind == NON_CODING and (self.cds_start is not None or self.cds_end is not None):
            raise ValueError(f"Non-coding transcript {self.id} cannot carry CDS bounds")
        if self.exons:
            self.set_exons(self.exons)

    def set_exons(self, exons: Sequence[Exon]) -> None:
        """Attach exons, rejecting any set in which two exons overlap."""
        tree = IntervalTree()
        for exon in exons:
            clashes = tree.overlap(exon.offset, exon.end)
            if clashes:
                other = min(clashes, key=lambda iv: iv.begin).data
                raise OverlappingExonsError(self.id, self.gene_id, other, exon)
            tree.addi(exon.offset, exon.end, exon)
        self.exons = list(exons)

    @property
    def is_coding(self) -> bool:
        return self.kind == CODING

    @property
    def exon_count(self) -> int:
        """Get number of exons."""
        return len(self.exons)

    @property
    def end(self) -> int:
        """Get the transcript end relative to the gene's origin."""
        if not self.exons:
            return self.offset
        return self.offset + max(exon.end for exon in self.exons)

    @property
    def total_exon_length(self) -> int:
        """Get total length of all exons."""
        return sum(exon.length for exon in self.exons)

    @property
    def cds_length(self) -> int:
        """Get the span between the CDS bounds (0 for non-coding)."""
        if not self.is_coding:
            return 0
        return abs(self.cds_end - self.cds_start)


@dataclass
class Gene:
    """A gene holding its transcripts in first-seen order."""
    id: str
    strand: str
    chrom: str
    offset: int
    transcripts: List[Transcript] = field(default_factory=list)

    def __post_init__(self):
        """Validate gene data after initialization."""
        if not self.id:
            raise ValueError("Gene ID cannot be empty")
        if self.strand not in STRANDS:
            raise ValueError(f"Invalid strand: {self.strand}")

    def set_transcripts(self, transcripts: Sequence[Transcript]) -> None:
        """Attach transcripts after checking they fit this gene."""
        for transcript in transcripts:
            if transcript.offset < 0:
                raise ValidationError(
                    f"transcript starts before gene {self.id} (offset {transcript.offset})",
                    transcript.id, self.id)
            if transcript.strand != self.strand:
                raise ValidationError(
                    f"transcript strand {transcript.strand} does not match gene strand {self.strand}",
                    transcript.id, self.id)
            transcript.set_exons(transcript.exons)
        self.transcripts = list(transcripts)

    @property
    def start(self) -> int:
        return self.offset

    @property
    def end(self) -> int:
        """Get the absolute gene end from its furthest transcript."""
        if not self.transcripts:
            return self.offset
        return self.offset + max(t.end for t in self.transcripts)

    @property
    def transcript_count(self) -> int:
        """Get number of transcripts."""
        return len(self.transcripts)

    def get_transcript_by_id(self, transcript_id: str) -> Optional[Transcript]:
        """Get the first transcript with the given ID."""
        for transcript in self.transcripts:
            if transcript.id == transcript_id:
                return transcript
        return None

    @property
    def coding_transcripts(self) -> List[Transcript]:
        return [t for t in self.transcripts if t.is_coding]
