"""File writers for pbdbtax."""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from pbdbtax.models.errors import InputError
from pbdbtax.models.taxonomic import LINEAGE_COLUMNS

logger = logging.getLogger(__name__)

def write_lineage_table(lineage_df: pd.DataFrame, output_path: Union[str, Path]) -> Path:
    """
    Write the formatted lineage table as csv.

    Args:
        lineage_df: DataFrame with LINEAGE_COLUMNS
        output_path: Path to output .csv file

    Returns:
        Path written

    Raises:
        InputError: If the table lacks columns or cannot be written
    """
    missing = [column for column in LINEAGE_COLUMNS if column not in lineage_df.columns]
    if missing:
        raise InputError(f"Lineage table is missing columns: {', '.join(missing)}")

    output_path = Path(output_path)
    try:
        lineage_df[LINEAGE_COLUMNS].to_csv(output_path, index=False)
    except Exception as e:
        raise InputError(f"Error writing lineage table: {str(e)}")

    logger.info(f"Wrote {len(lineage_df)} lineages to {output_path}")
    return output_path

def write_report(report, report_path: Union[str, Path]) -> Path:
    """
    Write an audit report as plain text, one line per finding.

    Args:
        report: AuditReport from audit_lineages
        report_path: Path to output text file

    Returns:
        Path written

    Raises:
        InputError: If the report cannot be written
    """
    report_path = Path(report_path)
    try:
        with open(report_path, "w", encoding="utf8") as file:
            for line in report.lines():
                file.write(f"{line}\n")
    except OSError as e:
        raise InputError(f"Error writing audit report: {str(e)}")

    logger.info(f"Wrote audit report with {len(report.findings)} findings to {report_path}")
    return report_path

def write_intervals(intervals_df: pd.DataFrame, output_path: Union[str, Path]) -> Path:
    """
    Write a stratigraphic interval table as csv.

    Args:
        intervals_df: DataFrame of intervals
        output_path: Path to output .csv file

    Returns:
        Path written

    Raises:
        InputError: If the table cannot be written
    """
    output_path = Path(output_path)
    try:
        intervals_df.to_csv(output_path, index=False)
    except Exception as e:
        raise InputError(f"Error writing interval table: {str(e)}")

    logger.info(f"Wrote {len(intervals_df)} intervals to {output_path}")
    return output_path
