"""Taxonomy-related functionality: rebuilding genus lineages from the PBDB taxa table."""

import re
import math
import logging
from typing import List, Dict, Tuple, Optional, Sequence, Iterable, Any

import pandas as pd

from pbdbtax.models.errors import InputError, LineageError, MalformedCompoundNameError, CycleDetectedError
from pbdbtax.models.taxonomic import SCALES, TaxonRecord, Lineage, empty_ranks
from pbdbtax.core.utils import TAXA_COLUMNS, AGE_COLUMNS, EXTANT_FLAG, CANDIDATE_RANKS

logger = logging.getLogger(__name__)

SCALE_INDEX = {scale: idx for idx, scale in enumerate(SCALES)}
ID_COLUMNS = ["accepted_no", "parent_no"]
GENUS_IDX = SCALE_INDEX["genus"]
SUBGENUS_IDX = SCALE_INDEX["subgenus"]

def parse_age(value: Any) -> Optional[float]:
    """
    Convert an age cell to float, with empty cells as None.

    Raises:
        InputError: If the cell is not numeric
    """
    if value is None:
        return None
    text = str(value).strip()
    if text == "":
        return None
    try:
        age = float(text)
    except ValueError:
        raise InputError(f"Age '{value}' is not numeric")
    return None if math.isnan(age) else age

def normalize_identifier(value: Any) -> str:
    """
    Convert an identifier cell to a string key.

    Integer-valued floats lose their ".0" so that a column read as float
    because of empty cells still matches one read as int or str.
    """
    if pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()

def first_by_identifier(records: Iterable[TaxonRecord]) -> Dict[str, TaxonRecord]:
    """
    Index records by accepted_no, keeping the first record in table order
    when several rows share an identifier.

    Args:
        records: Taxon records in table order

    Returns:
        Dict mapping accepted_no to its first record
    """
    index = {}
    duplicates = 0
    for record in records:
        if not record.accepted_no:
            continue
        if record.accepted_no in index:
            duplicates += 1
            continue
        index[record.accepted_no] = record
    if duplicates:
        logger.debug(f"{duplicates} rows share an identifier with an earlier row; first match kept")
    return index

class TaxonTable:
    """Read-only view of the PBDB taxa table with an identifier index."""

    def __init__(self, records: Sequence[TaxonRecord]):
        """
        Build the identifier index and the set of extant identifiers.

        Args:
            records: Taxon records in table order
        """
        self.records = tuple(records)
        self.by_id = first_by_identifier(self.records)
        self.extant_ids = frozenset(
            record.accepted_no for record in self.records
            if record.accepted_no and record.is_extant == EXTANT_FLAG
        )

    def __getitem__(self, position: int) -> TaxonRecord:
        return self.records[position]

    def lookup(self, taxon_no: str) -> Optional[TaxonRecord]:
        """Record for an identifier, or None when it is empty or absent."""
        if not taxon_no:
            return None
        return self.by_id.get(taxon_no)

    def is_extant(self, record: TaxonRecord) -> bool:
        """Whether any row for the record's identifier is flagged extant."""
        return record.is_extant == EXTANT_FLAG or record.accepted_no in self.extant_ids

    @classmethod
    def from_dataframe(cls, df_taxa: pd.DataFrame) -> 'TaxonTable':
        """
        Create from a PBDB taxa DataFrame.

        Args:
            df_taxa: DataFrame with TAXA_COLUMNS

        Returns:
            TaxonTable in the DataFrame's row order

        Raises:
            InputError: If required columns are missing or ages are not numeric
        """
        missing = [column for column in TAXA_COLUMNS if column not in df_taxa.columns]
        if missing:
            raise InputError(f"Missing required columns in taxa table: {', '.join(missing)}")

        df_taxa = df_taxa[TAXA_COLUMNS].copy()
        for column in ID_COLUMNS:
            df_taxa[column] = df_taxa[column].map(normalize_identifier)

        records = []
        for row in df_taxa.fillna("").astype(str).itertuples(index=False):
            values = row._asdict()
            for column in AGE_COLUMNS:
                values[column] = parse_age(values[column])
            records.append(TaxonRecord(**values))
        return cls(records)

def select_candidates(table: TaxonTable) -> List[int]:
    """
    Row positions of accepted genus and subgenus names, ordered by name.

    Args:
        table: PBDB taxa table

    Returns:
        Positions into table, sorted by accepted_name
    """
    positions = [
        position for position, record in enumerate(table.records)
        if record.accepted_rank in CANDIDATE_RANKS and record.is_valid
    ]
    positions.sort(key=lambda position: table[position].accepted_name)
    logger.debug(f"Selected {len(positions)} genus and subgenus names")
    return positions

def split_subgenus(name: str) -> Tuple[str, str]:
    """
    Split a subgenus name of the form 'Genus (Subgenus)'.

    Args:
        name: Accepted name of a subgenus-rank taxon

    Returns:
        Tuple of (genus, subgenus)

    Raises:
        MalformedCompoundNameError: If the name is not two tokens
    """
    tokens = name.split()
    if len(tokens) != 2:
        raise MalformedCompoundNameError(f"Subgenus name '{name}' is not of the form 'Genus (Subgenus)'")
    subgenus = re.sub(r"[()]", "", tokens[1])
    if not subgenus:
        raise MalformedCompoundNameError(f"Subgenus name '{name}' has an empty subgenus")
    return tokens[0], subgenus

def resolve_lineage(g: int, candidates: Sequence[int], table: TaxonTable) -> Lineage:
    """
    Build the lineage of one genus or subgenus by walking its parent chain.

    Ranks outside SCALES are skipped; each rank slot keeps the first name
    found. Extant taxa have their youngest age pulled to the present.

    Args:
        g: Index into candidates
        candidates: Row positions from select_candidates
        table: PBDB taxa table

    Returns:
        Lineage for the candidate

    Raises:
        MalformedCompoundNameError: If a subgenus name cannot be split
        CycleDetectedError: If the parent chain revisits a taxon
        LineageError: If the age range is inconsistent
    """
    target = table[candidates[g]]
    ranks = empty_ranks()
    ranks[GENUS_IDX] = target.accepted_name

    max_ma = target.firstapp_max_ma
    min_ma = target.lastapp_min_ma
    # Pull of the recent
    if table.is_extant(target):
        min_ma = 0.0

    if target.accepted_rank == "subgenus":
        ranks[GENUS_IDX], ranks[SUBGENUS_IDX] = split_subgenus(target.accepted_name)

    visited = {target.accepted_no}
    parent = table.lookup(target.parent_no)
    while parent is not None:
        if parent.accepted_no in visited:
            raise CycleDetectedError(
                f"Parent chain of '{target.accepted_name}' revisits taxon {parent.accepted_no}"
            )
        visited.add(parent.accepted_no)
        idx = SCALE_INDEX.get(parent.accepted_rank)
        if idx is not None and not ranks[idx]:
            ranks[idx] = parent.accepted_name
        parent = table.lookup(parent.parent_no)

    if min_ma is not None and min_ma < 0:
        raise LineageError(f"'{target.accepted_name}' has a negative age: {min_ma}")
    if max_ma is not None and min_ma is not None and max_ma < min_ma:
        raise LineageError(
            f"'{target.accepted_name}' has first appearance {max_ma} younger than last appearance {min_ma}"
        )

    return Lineage(*ranks, max_ma=max_ma, min_ma=min_ma)
