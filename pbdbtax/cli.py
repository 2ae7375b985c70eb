#!/usr/bin/env python3
"""Command-line interface for pbdbtax."""

import sys
import argparse
import logging
from typing import List, Optional

from pbdbtax import __version__
from pbdbtax.core.utils import setup_logging
from pbdbtax.models.config import PbdbConfig
from pbdbtax.models.errors import PbdbError

logger = logging.getLogger(__name__)

def create_parser() -> argparse.ArgumentParser:
    """
    Create and return the main argument parser for pbdbtax.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="pbdbtax: higher taxonomy and age ranges for Paleobiology Database genera",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s v{__version__}'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help='pbdbtax commands',
        required=True
    )

    # Format command
    format_parser = subparsers.add_parser(
        "format",
        help="Build lineages and age ranges for all genera and subgenera",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    format_parser.add_argument(
        'input_path',
        type=str,
        nargs='?',
        default=None,
        help='path or URL of PBDB taxa list (csv, vocab=pbdb, show=app)'
    )
    format_parser.add_argument(
        '--base-name',
        type=str,
        nargs='+',
        help='download all taxa under these PBDB names instead of reading input_path, e.g. Metazoa Retaria'
    )
    format_parser.add_argument(
        '--output', '-o',
        type=str,
        default='PBDBformatted.csv',
        help='output lineage table'
    )
    format_parser.add_argument(
        '--limit',
        type=int,
        default=None,
        help='only resolve the first N genera (alphabetically)'
    )
    format_parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='worker processes (default: PBDBTAX_WORKERS or CPU count)'
    )
    format_parser.add_argument(
        '--batch-size',
        type=int,
        default=None,
        help='genera per worker task (default: PBDBTAX_BATCH_SIZE or spread evenly)'
    )
    format_parser.add_argument(
        '--audit',
        action='store_true',
        help='audit the lineage table after formatting'
    )
    _add_report_arguments(format_parser)

    # Audit command
    audit_parser = subparsers.add_parser(
        "audit",
        help="Check a lineage table for subgenera, homonyms and duplicate genera",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    audit_parser.add_argument(
        'lineage_path',
        type=str,
        help='lineage table written by the format command'
    )
    _add_report_arguments(audit_parser)

    # Intervals command
    intervals_parser = subparsers.add_parser(
        "intervals",
        help="Summarize PBDB stratigraphic intervals with midpoint ages",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    intervals_parser.add_argument(
        '--source',
        type=str,
        default=None,
        help='path or URL of PBDB interval list (default: download from PBDB)'
    )
    intervals_parser.add_argument(
        '--scale-level',
        type=int,
        choices=[1, 2, 3, 4, 5],
        default=4,
        help='1 = eons, 2 = eras, 3 = periods, 4 = subperiods, 5 = epochs'
    )
    intervals_parser.add_argument(
        '--extra',
        type=str,
        default=None,
        help='name of one more interval to include, e.g. Ediacaran'
    )
    intervals_parser.add_argument(
        '--output', '-o',
        type=str,
        default='PBDBintervals.csv',
        help='output interval table'
    )

    return parser

def _add_report_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        '--report',
        type=str,
        default='multiGenera.txt',
        help='audit report file'
    )
    subparser.add_argument(
        '--report-subgenera',
        action='store_true',
        help='also list genera whose repeats are subgenera'
    )

def run_audit_report(df_lineage, config: PbdbConfig) -> None:
    """
    Audit a lineage table and write the report.

    Args:
        df_lineage: Lineage table
        config: Configuration with report settings
    """
    from pbdbtax.core.audit import audit_lineages, top_multiples
    from pbdbtax.io.writers import write_report

    top = top_multiples(df_lineage)
    if len(top):
        logger.debug("Most repeated genus names:\n" + top.to_string())

    report = audit_lineages(df_lineage, report_subgenera=config.report_subgenera)
    logger.info(report.summary)
    write_report(report, config.report_path)

def run_format(config: PbdbConfig) -> None:
    """
    Run the format command.

    Args:
        config: Configuration for the format command
    """
    from pbdbtax.io.parsers import parse_taxa_file
    from pbdbtax.io.writers import write_lineage_table
    from pbdbtax.core.taxonomy import TaxonTable, select_candidates
    from pbdbtax.core.batch_processing import resolve_all

    df_taxa = parse_taxa_file(config.input_path)
    table = TaxonTable.from_dataframe(df_taxa)
    candidates = select_candidates(table)

    result = resolve_all(
        table,
        candidates,
        workers=config.workers,
        batch_size=config.batch_size,
        limit=config.limit,
        show_progress=config.verbose
    )
    df_lineage = result.to_dataframe()
    write_lineage_table(df_lineage, config.output_path)

    if config.audit:
        run_audit_report(df_lineage, config)

def run_audit(config: PbdbConfig) -> None:
    """
    Run the audit command.

    Args:
        config: Configuration for the audit command
    """
    from pbdbtax.io.parsers import parse_lineage_file

    df_lineage = parse_lineage_file(config.lineage_path)
    run_audit_report(df_lineage, config)

def run_intervals(config: PbdbConfig) -> None:
    """
    Run the intervals command.

    Args:
        config: Configuration for the intervals command
    """
    from pbdbtax.core.intervals import INTERVALS_URL, summarize_intervals
    from pbdbtax.io.writers import write_intervals

    ages = summarize_intervals(config.source or INTERVALS_URL, config.scale_level, config.extra)
    write_intervals(ages, config.output_path)

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for pbdbtax command-line interface.

    Args:
        argv: Arguments to parse; defaults to sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    logger = setup_logging(args.verbose)

    try:
        # Create configuration
        config = PbdbConfig(args)

        # Dispatch to appropriate command handler
        if config.command == 'format':
            run_format(config)
        elif config.command == 'audit':
            run_audit(config)
        elif config.command == 'intervals':
            run_intervals(config)
        else:
            logger.error(f"Unknown command: {config.command}")
            return 1

        return 0

    except PbdbError as e:
        logger.error(f"Error: {str(e)}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {str(e)}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
