#!/usr/bin/env python3

"""
Test suite for the gene assembly pipeline.

Unit tests covering all major components including:
- Core data structures and their structural checks
- Exon merging and the transcript and gene builders
- Streaming gene readers, the scanner and GTF parsing
- Configuration management and validation
- End-to-end pipeline runs and error handling
"""
