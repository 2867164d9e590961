#!/usr/bin/env python3

"""
Builders that turn a block of grouped features into a Gene.

The GeneBuilder checks a gene block for consistency, splits it into
contiguous transcript runs and hands each run to the TranscriptBuilder,
which computes the transcript's coordinate frame, its CDS bounds and its
merged exon set.
"""

import logging
from itertools import groupby
from typing import List, Optional, Sequence

from .data_structures import (
    Gene, Transcript, Exon, FORWARD, REVERSE, EXON, START_CODON, STOP_CODON,
    CODING, NON_CODING
)
from .exceptions import (
    InconsistentLocationError, InconsistentOrientationError, IncompleteCodonPairError
)


def merge_exons(exons: Sequence[Exon]) -> List[Exon]:
    """Concatenate exons where one ends exactly where the next begins.

    Exons are expected in ascending order. The input is left untouched.
    """
    if len(exons) < 2:
        return list(exons)

    merged = [exons[0]]
    for exon in exons[1:]:
        last = merged[-1]
        if last.touches(exon):
            merged[-1] = Exon(offset=last.offset, length=last.length + exon.length)
        else:
            merged.append(exon)
    return merged


class TranscriptBuilder:
    """Build a transcript from the features sharing one transcript ID."""

    def build(self, transcript_id: str, gene: Gene, features: Sequence) -> Transcript:
        """
        Build a coding or non-coding transcript.

        Args:
            transcript_id: Transcript ID shared by all features
            gene: Gene under construction, supplying offset and strand
            features: Ordered features of the transcript run

        Returns:
            Transcript positioned relative to the gene, with exon offsets
            and CDS bounds relative to the transcript's earliest feature
        """
        types = {f.feature_type for f in features}
        has_start = START_CODON in types
        has_stop = STOP_CODON in types
        if has_start != has_stop:
            raise IncompleteCodonPairError(transcript_id, gene.id)

        local_min = min(f.start for f in features)

        exons = []
        cds_start = cds_end = None
        for f in features:
            if f.feature_type == EXON:
                exons.append(Exon(offset=f.start - local_min, length=f.end - f.start))
            elif not has_start:
                continue
            elif f.feature_type == START_CODON:
                if f.strand == FORWARD:
                    cds_start = f.start - local_min
                elif f.strand == REVERSE:
                    cds_end = f.end - local_min
            elif f.feature_type == STOP_CODON:
                if f.strand == FORWARD:
                    cds_end = f.end - local_min
                elif f.strand == REVERSE:
                    cds_start = f.start - local_min

        transcript = Transcript(
            id=transcript_id,
            offset=local_min - gene.offset,
            strand=gene.strand,
            kind=CODING if has_start else NON_CODING,
            cds_start=cds_start,
            cds_end=cds_end,
            gene_id=gene.id
        )

        merged = merge_exons(exons)
        if len(merged) < len(exons):
            logging.debug(f"Merged {len(exons)} exons into {len(merged)} for transcript {transcript_id}")
        transcript.set_exons(merged)

        return transcript


class GeneBuilder:
    """Build a gene from a contiguous block of features sharing one gene ID."""

    def __init__(self, transcript_builder: Optional[TranscriptBuilder] = None):
        self.transcript_builder = transcript_builder or TranscriptBuilder()

    def build(self, gene_id: str, features: Sequence) -> Gene:
        """Validate the block and assemble its transcripts into a Gene."""
        if not features:
            raise ValueError(f"Cannot build gene {gene_id} from an empty feature block")

        first = features[0]
        gene = Gene(
            id=gene_id,
            strand=first.strand,
            chrom=first.chrom,
            offset=min(f.start for f in features)
        )

        # First feature is authoritative; strand is checked before location
        for index, f in enumerate(features):
            if f.strand != gene.strand:
                raise InconsistentOrientationError(gene_id, features, index)
            if f.chrom != gene.chrom:
                raise InconsistentLocationError(gene_id, features, index)

        transcripts = []
        for transcript_id, run in groupby(features, key=lambda f: f.transcript_id):
            transcripts.append(self.transcript_builder.build(transcript_id, gene, list(run)))

        gene.set_transcripts(transcripts)

        logging.debug(f"Built gene {gene_id} with {len(transcripts)} transcripts "
                      f"from {len(features)} features")
        return gene
