"""Stratigraphic intervals used in the Paleobiology Database."""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from pbdbtax.models.errors import IntervalError
from pbdbtax.core.utils import PBDB_DATA_URL

logger = logging.getLogger(__name__)

INTERVALS_URL = f"{PBDB_DATA_URL}/intervals/list.csv?all_records&vocab=pbdb"

# PBDB scale_level values
SCALE_LEVELS = {
    1: "eons",
    2: "eras",
    3: "periods",
    4: "subperiods",
    5: "epochs",
}

def load_intervals(source: Union[str, Path] = INTERVALS_URL) -> pd.DataFrame:
    """
    Read all PBDB stratigraphic intervals.

    Args:
        source: Path or URL of the interval list; downloads from PBDB by default

    Returns:
        DataFrame of intervals
    """
    from pbdbtax.io.parsers import get_parser

    df_intervals = get_parser('intervals').parse(source)
    logger.info(f"Read {len(df_intervals)} intervals from {source}")
    return df_intervals

def select_intervals(
    df_intervals: pd.DataFrame,
    scale_level: int = 4,
    extra: Optional[str] = None
) -> pd.DataFrame:
    """
    Keep intervals at one scale level, optionally adding one named interval.

    Args:
        df_intervals: DataFrame from load_intervals
        scale_level: 1 = eons, 2 = eras, 3 = periods, 4 = subperiods, 5 = epochs
        extra: Name of an interval to append, such as "Ediacaran"

    Returns:
        DataFrame of selected intervals

    Raises:
        IntervalError: If the scale level is unknown or the extra interval is not found
    """
    if scale_level not in SCALE_LEVELS:
        raise IntervalError(f"Scale level must be one of {sorted(SCALE_LEVELS)}, got {scale_level}")

    levels = pd.to_numeric(df_intervals["scale_level"], errors="coerce")
    ages = df_intervals[levels == scale_level]
    logger.debug(f"Selected {len(ages)} {SCALE_LEVELS[scale_level]}")

    if extra:
        added = df_intervals[df_intervals["interval_name"] == extra]
        if added.empty:
            raise IntervalError(f"Interval '{extra}' not found")
        ages = pd.concat([ages, added])

    return ages.reset_index(drop=True)

def add_midpoints(df_intervals: pd.DataFrame) -> pd.DataFrame:
    """
    Add mid_ma, the mean of each interval's max_ma and min_ma.

    Args:
        df_intervals: DataFrame with max_ma and min_ma columns

    Returns:
        Copy of df_intervals with a mid_ma column
    """
    bounds = df_intervals[["max_ma", "min_ma"]].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
    ages = df_intervals.copy()
    ages["mid_ma"] = np.mean(bounds, axis=1)
    return ages

def summarize_intervals(
    source: Union[str, Path] = INTERVALS_URL,
    scale_level: int = 4,
    extra: Optional[str] = None
) -> pd.DataFrame:
    """Load, select and add midpoints in one step."""
    return add_midpoints(select_intervals(load_intervals(source), scale_level, extra))
