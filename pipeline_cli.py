#!/usr/bin/env python3

"""
Command-line interface for the gene assembly pipeline.

Reads a sorted GTF file gene by gene and reports what was assembled.
"""

import argparse
import sys
import os
import logging

from gene_assembly_pipeline.core.config import load_config
from gene_assembly_pipeline.core.exceptions import PipelineError
from gene_assembly_pipeline.core.pipeline import GeneAssemblyPipeline


def setup_logging(log_level: str = "INFO") -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Assemble genes, transcripts and exons from a sorted GTF file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage
  python pipeline_cli.py --gene-model annotation.gtf

  # Group by other attribute tags and keep a log file
  python pipeline_cli.py --gene-model annotation.gtf --gene-tag gene_name --transcript-tag transcript_name --log-file run.log
        """
    )

    # Required arguments
    parser.add_argument(
        '--gene-model',
        required=True,
        help='Input gene model file (GTF, sorted by gene and transcript)'
    )

    # Optional parameters
    parser.add_argument(
        '--gene-tag',
        help='Attribute tag grouping features into genes (default: gene_id)'
    )
    parser.add_argument(
        '--transcript-tag',
        help='Attribute tag grouping features into transcripts (default: transcript_id)'
    )
    parser.add_argument(
        '--config',
        help='Configuration file (JSON or YAML)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Logging level (default: INFO)'
    )
    parser.add_argument(
        '--log-file',
        help='Also write the log to this file'
    )

    # Advanced options
    parser.add_argument(
        '--memory-limit',
        type=int,
        help='Memory limit in MB (default: 4096)'
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        if not os.path.exists(args.gene_model):
            raise FileNotFoundError(f"gene-model file not found: {args.gene_model}")

        config = load_config(config_path=args.config, use_env=True)

        # Override config with command line arguments
        if args.gene_tag is not None:
            config.gene_tag = args.gene_tag
        if args.transcript_tag is not None:
            config.transcript_tag = args.transcript_tag
        if args.memory_limit is not None:
            config.memory_limit_mb = args.memory_limit

        # Re-validate after CLI overrides.
        config.validate()

        logger.info(f"Gene model: {args.gene_model}")
        logger.info(f"Grouping tags: {config.gene_tag} / {config.transcript_tag}")

        pipeline = GeneAssemblyPipeline(config)
        success = pipeline.run(gene_model_file=args.gene_model, log_file=args.log_file)

        if success:
            logger.info("Pipeline completed successfully!")
            return 0
        else:
            logger.error("Pipeline failed!")
            return 1

    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1
    except PipelineError as e:
        logger.error(f"Pipeline error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        logger.debug("Full traceback:", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
