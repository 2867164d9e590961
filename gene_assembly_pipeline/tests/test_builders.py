#!/usr/bin/env python3

"""
Unit tests for exon merging and the transcript and gene builders.

Coordinates in these tests are already 0-based and half-open.
"""

import unittest
import sys
import os

# Add the parent directory to the path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from gene_assembly_pipeline.core.builders import merge_exons, TranscriptBuilder, GeneBuilder
from gene_assembly_pipeline.core.data_structures import Feature, Gene, Exon, CODING, NON_CODING
from gene_assembly_pipeline.core.exceptions import (
    FeaturesError, InconsistentLocationError, InconsistentOrientationError,
    IncompleteCodonPairError, OverlappingExonsError
)


def feat(feature_type, start, end, strand="+", gene_id="A", transcript_id="A1", chrom="X"):
    return Feature(gene_id=gene_id, transcript_id=transcript_id, feature_type=feature_type,
                   strand=strand, chrom=chrom, start=start, end=end)


class TestMergeExons(unittest.TestCase):
    """Test merging of touching exons."""

    def test_empty_and_single(self):
        """Test that short sequences pass through unchanged."""
        self.assertEqual(merge_exons([]), [])
        self.assertEqual(merge_exons([Exon(3, 4)]), [Exon(3, 4)])

    def test_touching_pair(self):
        """Test that a touching pair becomes one exon."""
        a, b = Exon(5, 10), Exon(15, 7)
        self.assertEqual(merge_exons([a, b]), [Exon(5, 17)])

    def test_non_touching_pair(self):
        """Test that separated exons are kept apart."""
        exons = [Exon(0, 10), Exon(40, 40)]
        self.assertEqual(merge_exons(exons), exons)

    def test_chain_of_touching_exons(self):
        """Test that a run of touching exons collapses into one."""
        exons = [Exon(0, 10), Exon(10, 10), Exon(20, 5), Exon(30, 5), Exon(35, 1)]
        self.assertEqual(merge_exons(exons), [Exon(0, 25), Exon(30, 6)])

    def test_input_not_modified(self):
        """Test that merging leaves the input untouched."""
        exons = [Exon(0, 10), Exon(10, 10)]
        merge_exons(exons)
        self.assertEqual(exons, [Exon(0, 10), Exon(10, 10)])

    def test_idempotent(self):
        """Test that merging twice equals merging once."""
        exons = [Exon(0, 2), Exon(2, 3), Exon(7, 1), Exon(8, 8), Exon(20, 4)]
        once = merge_exons(exons)
        self.assertEqual(merge_exons(once), once)


class TestTranscriptBuilder(unittest.TestCase):
    """Test transcript classification, coordinate frames and CDS bounds."""

    def setUp(self):
        self.builder = TranscriptBuilder()

    def test_forward_coding_transcript(self):
        """Test CDS bounds on the forward strand."""
        gene = Gene(id="A", strand="+", chrom="X", offset=10)
        features = [
            feat("exon", 10, 20),
            feat("exon", 50, 90),
            feat("stop_codon", 60, 62),
            feat("start_codon", 71, 73),
        ]

        transcript = self.builder.build("A1", gene, features)

        self.assertEqual(transcript.kind, CODING)
        self.assertEqual(transcript.offset, 0)
        self.assertEqual(transcript.cds_start, 61)
        self.assertEqual(transcript.cds_end, 52)
        self.assertEqual(transcript.exons, [Exon(0, 10), Exon(40, 40)])
        self.assertEqual(transcript.strand, "+")
        self.assertEqual(transcript.gene_id, "A")

    def test_reverse_coding_transcript(self):
        """Test CDS bounds on the reverse strand."""
        gene = Gene(id="I", strand="-", chrom="X", offset=10)
        features = [
            feat("exon", 10, 100, strand="-"),
            feat("stop_codon", 40, 42, strand="-"),
            feat("start_codon", 91, 93, strand="-"),
        ]

        transcript = self.builder.build("I1", gene, features)

        self.assertTrue(transcript.is_coding)
        self.assertEqual(transcript.cds_start, 30)
        self.assertEqual(transcript.cds_end, 83)
        self.assertEqual(transcript.exons, [Exon(0, 90)])

    def test_transcript_offset_relative_to_gene(self):
        """Test that offsets are relative to the gene, exons to the transcript."""
        gene = Gene(id="A", strand="+", chrom="X", offset=100)
        features = [feat("exon", 130, 150), feat("exon", 160, 170)]

        transcript = self.builder.build("A2", gene, features)

        self.assertEqual(transcript.offset, 30)
        self.assertEqual(transcript.exons, [Exon(0, 20), Exon(30, 10)])

    def test_non_coding_transcript(self):
        """Test that a transcript without codons is non-coding."""
        gene = Gene(id="H", strand="-", chrom="X", offset=29)
        features = [feat("exon", 29, 50, strand="-"), feat("exon", 50, 99, strand="-")]

        transcript = self.builder.build("H1", gene, features)

        self.assertEqual(transcript.kind, NON_CODING)
        self.assertIsNone(transcript.cds_start)
        self.assertIsNone(transcript.cds_end)
        self.assertEqual(transcript.exons, [Exon(0, 70)])

    def test_other_feature_types_only_shift_the_frame(self):
        """Test that unknown feature types count toward the origin but add no exons."""
        gene = Gene(id="B", strand="-", chrom="Y", offset=40)
        features = [feat("five_prime_utr", 40, 49, strand="-"), feat("exon", 49, 90, strand="-")]

        transcript = self.builder.build("B1", gene, features)

        self.assertEqual(transcript.offset, 0)
        self.assertEqual(transcript.exons, [Exon(9, 41)])

    def test_start_codon_without_stop_codon(self):
        """Test that a lone start codon fails."""
        gene = Gene(id="F", strand="+", chrom="X", offset=1)
        features = [feat("exon", 1, 70), feat("exon", 70, 90), feat("start_codon", 59, 62)]

        with self.assertRaises(IncompleteCodonPairError) as context:
            self.builder.build("F1", gene, features)
        self.assertEqual(context.exception.transcript_id, "F1")
        self.assertIn("only one of start/stop codon found for F1", str(context.exception))

    def test_stop_codon_without_start_codon(self):
        """Test that a lone stop codon fails."""
        gene = Gene(id="F", strand="+", chrom="X", offset=1)
        features = [feat("exon", 1, 70), feat("stop_codon", 80, 83)]

        with self.assertRaises(IncompleteCodonPairError):
            self.builder.build("F1", gene, features)

    def test_lone_codon_without_exons(self):
        """Test that the codon pair check does not depend on exon count."""
        gene = Gene(id="F", strand="-", chrom="X", offset=1)
        with self.assertRaises(IncompleteCodonPairError):
            self.builder.build("F1", gene, [feat("start_codon", 5, 8, strand="-")])

    def test_overlapping_exons(self):
        """Test that overlapping exons are surfaced from the transcript."""
        gene = Gene(id="F", strand="+", chrom="X", offset=1)
        features = [feat("exon", 1, 70), feat("exon", 69, 90)]

        with self.assertRaises(OverlappingExonsError) as context:
            self.builder.build("F1", gene, features)
        self.assertEqual(context.exception.transcript_id, "F1")


class TestGeneBuilder(unittest.TestCase):
    """Test gene assembly from a feature block."""

    def setUp(self):
        self.builder = GeneBuilder()

    def test_gene_offset_and_transcript_order(self):
        """Test the gene offset and first-seen transcript order."""
        features = [
            feat("exon", 20, 45, transcript_id="A3"),
            feat("exon", 9, 20, transcript_id="A1"),
            feat("exon", 14, 30, transcript_id="A2"),
        ]

        gene = self.builder.build("A", features)

        self.assertEqual(gene.offset, 9)
        self.assertEqual(gene.strand, "+")
        self.assertEqual(gene.chrom, "X")
        self.assertEqual([t.id for t in gene.transcripts], ["A3", "A1", "A2"])
        self.assertEqual([t.offset for t in gene.transcripts], [11, 0, 5])
        self.assertEqual(gene.end, 45)

    def test_offsets_match_minimum_starts(self):
        """Test offsets against the minimum starts of the block and its runs."""
        features = [
            feat("exon", 300, 310, transcript_id="T1"),
            feat("exon", 200, 220, transcript_id="T1"),
            feat("exon", 250, 260, transcript_id="T2"),
            feat("CDS", 240, 255, transcript_id="T2"),
        ]

        gene = self.builder.build("A", features)

        self.assertEqual(gene.offset, min(f.start for f in features))
        self.assertEqual(gene.transcripts[0].offset, 200 - gene.offset)
        self.assertEqual(gene.transcripts[1].offset, 240 - gene.offset)

    def test_inconsistent_location(self):
        """Test that features on different chromosomes fail."""
        features = [
            feat("exon", 29, 50, strand="-", gene_id="F", transcript_id="F1", chrom="X"),
            feat("exon", 79, 99, strand="-", gene_id="F", transcript_id="F1", chrom="Y"),
        ]

        with self.assertRaises(InconsistentLocationError) as context:
            self.builder.build("F", features)

        error = context.exception
        self.assertIsInstance(error, FeaturesError)
        self.assertEqual(error.gene_id, "F")
        self.assertEqual(error.index, 1)
        self.assertIs(error.offending_feature, features[1])
        self.assertEqual(str(error), "features on varying location for gene F")

    def test_inconsistent_orientation(self):
        """Test that features on different strands fail."""
        features = [
            feat("exon", 29, 50, strand="-", gene_id="G", transcript_id="G1"),
            feat("exon", 79, 99, strand="+", gene_id="G", transcript_id="G1"),
        ]

        with self.assertRaises(InconsistentOrientationError) as context:
            self.builder.build("G", features)
        self.assertEqual(str(context.exception), "features with varying orientation for gene G")

    def test_single_disagreeing_feature_fails(self):
        """Test that one disagreeing feature fails the gene even if the rest agree."""
        features = [feat("exon", i * 10, i * 10 + 5) for i in range(5)]
        features.insert(3, feat("exon", 100, 105, strand="-"))

        with self.assertRaises(InconsistentOrientationError) as context:
            self.builder.build("A", features)
        self.assertEqual(context.exception.index, 3)

    def test_first_feature_is_authoritative(self):
        """Test that the first feature decides the expected strand."""
        features = [feat("exon", 0, 5, strand="-")] + [feat("exon", i * 10, i * 10 + 5) for i in range(1, 5)]

        with self.assertRaises(InconsistentOrientationError) as context:
            self.builder.build("A", features)
        self.assertEqual(context.exception.index, 1)

    def test_orientation_checked_before_location(self):
        """Test which error wins when one feature differs in both."""
        features = [feat("exon", 0, 5), feat("exon", 10, 15, strand="-", chrom="Y")]
        with self.assertRaises(InconsistentOrientationError):
            self.builder.build("A", features)

    def test_other_features_count_toward_consistency(self):
        """Test that unknown feature types still take part in the checks."""
        features = [feat("exon", 0, 5), feat("foo", 10, 15, chrom="Y")]
        with self.assertRaises(InconsistentLocationError):
            self.builder.build("A", features)

    def test_transcript_error_aborts_gene(self):
        """Test that a failing transcript fails the whole gene."""
        features = [
            feat("exon", 0, 10, transcript_id="A1"),
            feat("exon", 20, 30, transcript_id="A2"),
            feat("start_codon", 20, 23, transcript_id="A2"),
        ]
        with self.assertRaises(IncompleteCodonPairError):
            self.builder.build("A", features)

    def test_repeated_transcript_id_builds_separate_transcripts(self):
        """Test that a transcript ID split by another ID yields two transcripts."""
        features = [
            feat("exon", 0, 10, transcript_id="A1"),
            feat("exon", 20, 30, transcript_id="A2"),
            feat("exon", 40, 50, transcript_id="A1"),
        ]

        gene = self.builder.build("A", features)

        self.assertEqual([t.id for t in gene.transcripts], ["A1", "A2", "A1"])
        self.assertEqual([t.offset for t in gene.transcripts], [0, 20, 40])

    def test_empty_block(self):
        """Test that an empty block is rejected."""
        with self.assertRaises(ValueError):
            self.builder.build("A", [])


if __name__ == '__main__':
    unittest.main()
