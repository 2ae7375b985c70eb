"""Utility functions for pbdbtax."""

import logging
from typing import Iterable, Union
from urllib.parse import quote

# Logger configuration
logger = logging.getLogger(__name__)

# Static global variables
PBDB_DATA_URL = "https://paleobiodb.org/data1.2"
DEFAULT_BASE_NAMES = ("Metazoa",)

# Columns the resolver needs from the PBDB taxa table (vocab=pbdb)
TAXA_COLUMNS = [
    'accepted_no', 'accepted_name', 'accepted_rank', 'parent_no',
    'firstapp_max_ma', 'lastapp_min_ma', 'is_extant', 'difference',
]
AGE_COLUMNS = ['firstapp_max_ma', 'lastapp_min_ma']
EXTANT_FLAG = "extant"
CANDIDATE_RANKS = ("genus", "subgenus")

def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the pbdbtax application.

    Args:
        verbose: Whether to enable verbose (DEBUG) logging

    Returns:
        Logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    return logging.getLogger('pbdbtax')

def taxa_list_url(base_names: Union[str, Iterable[str]] = DEFAULT_BASE_NAMES) -> str:
    """
    Build the PBDB download URL for all taxa under the given base names.

    The list is not restricted in time, so taxa without fossil occurrences
    are included. Use "Metazoa,Retaria" to add forams, "Metazoa,Retaria,Plantae"
    to add plants as well, or "Life" for the entire database.

    Args:
        base_names: One or more PBDB taxon names

    Returns:
        URL of the taxa list as csv
    """
    if isinstance(base_names, str):
        base_names = [base_names]
    names = ",".join(name.strip() for name in base_names if name.strip())
    return f"{PBDB_DATA_URL}/taxa/list.csv?base_name={quote(names, safe=',')}&show=app&vocab=pbdb"
