"""File format parsers for pbdbtax."""

import logging
from pathlib import Path
from typing import List, Union
from abc import ABC, abstractmethod

import pandas as pd

from pbdbtax.models.errors import InputError
from pbdbtax.models.taxonomic import RANK_COLUMNS, LINEAGE_COLUMNS
from pbdbtax.core.utils import TAXA_COLUMNS

logger = logging.getLogger(__name__)

Source = Union[str, Path]

def _require_columns(df: pd.DataFrame, required: List[str], source: Source) -> None:
    missing = [column for column in required if column not in df.columns]
    if missing:
        raise InputError(f"Missing required columns in {source}: {', '.join(missing)}")

class Parser(ABC):
    """Base parser class for different tables."""

    @abstractmethod
    def parse(self, source: Source):
        """Parse the table at the given path or URL.

        Args:
            source: Path or URL of the table

        Returns:
            Parsed data
        """
        pass

class TaxaParser(Parser):
    """Parser for the PBDB taxa list (vocab=pbdb, show=app)."""

    def parse(self, source: Source) -> pd.DataFrame:
        """Parse the PBDB taxa csv into a DataFrame of strings.

        Empty cells are kept as empty strings, so an empty 'difference'
        marks a valid name.

        Args:
            source: Path or URL of the taxa list

        Returns:
            DataFrame with one row per taxon

        Raises:
            InputError: If the table cannot be read or lacks required columns
        """
        try:
            df_taxa = pd.read_csv(
                source,
                dtype=str,
                keep_default_na=False
            )
        except Exception as e:
            raise InputError(f"Error parsing PBDB taxa table: {str(e)}")

        _require_columns(df_taxa, TAXA_COLUMNS, source)
        logger.info(f"Read {len(df_taxa)} taxa from {source}")
        if len(df_taxa):
            # The first row should hold the most inclusive downloaded taxon
            logger.debug(f"First taxon in table: {df_taxa.at[0, 'accepted_name']}")
        return df_taxa

class LineageParser(Parser):
    """Parser for formatted lineage tables."""

    def parse(self, source: Source) -> pd.DataFrame:
        """Parse a lineage csv written by the format command.

        Args:
            source: Path to the lineage table

        Returns:
            DataFrame with rank columns as strings and numeric ages

        Raises:
            InputError: If the table cannot be read
        """
        try:
            df_lineage = pd.read_csv(
                source,
                dtype={column: str for column in RANK_COLUMNS + ["Species"]},
                keep_default_na=False,
                na_values={"max_ma": [""], "min_ma": [""]}
            )
        except Exception as e:
            raise InputError(f"Error parsing lineage table: {str(e)}")

        for column in ("max_ma", "min_ma"):
            if column in df_lineage.columns:
                df_lineage[column] = pd.to_numeric(df_lineage[column], errors="coerce")
        return df_lineage

class IntervalParser(Parser):
    """Parser for the PBDB stratigraphic interval list."""

    def parse(self, source: Source) -> pd.DataFrame:
        """Parse the PBDB intervals csv.

        Args:
            source: Path or URL of the interval list

        Returns:
            DataFrame with one row per interval

        Raises:
            InputError: If the table cannot be read or lacks required columns
        """
        try:
            df_intervals = pd.read_csv(source)
        except Exception as e:
            raise InputError(f"Error parsing interval table: {str(e)}")

        _require_columns(df_intervals, ['interval_name', 'scale_level', 'max_ma', 'min_ma'], source)
        return df_intervals

# Factory function to get appropriate parser
def get_parser(file_type: str) -> Parser:
    """Get appropriate parser for file type.

    Args:
        file_type: Type of table to parse

    Returns:
        Parser object

    Raises:
        InputError: If no parser handles the file type
    """
    parsers = {
        'taxa': TaxaParser(),
        'lineage': LineageParser(),
        'intervals': IntervalParser()
    }

    if file_type not in parsers:
        raise InputError(f"Unknown table type: {file_type}")
    return parsers[file_type]

def parse_taxa_file(source: Source) -> pd.DataFrame:
    """Parse a PBDB taxa list into a DataFrame.

    Args:
        source: Path or URL of the taxa list

    Returns:
        DataFrame of taxa as strings
    """
    return TaxaParser().parse(source)

def parse_lineage_file(path: Source) -> pd.DataFrame:
    """Parse a formatted lineage table into a DataFrame.

    Args:
        path: Path to the lineage table

    Returns:
        DataFrame of lineages in LINEAGE_COLUMNS order where present
    """
    df_lineage = LineageParser().parse(path)
    ordered = [column for column in LINEAGE_COLUMNS if column in df_lineage.columns]
    extra = [column for column in df_lineage.columns if column not in ordered]
    return df_lineage[ordered + extra]
