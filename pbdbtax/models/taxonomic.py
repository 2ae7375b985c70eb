"""Data models for taxonomy."""

from typing import List, Dict, Tuple, Optional, Any
from dataclasses import dataclass, fields

# PBDB rank names recorded in a lineage, from most to least inclusive
SCALES = [
    "superkingdom", "kingdom", "subkingdom", "superphylum", "phylum",
    "subphylum", "superclass", "class", "subclass", "infraclass",
    "superorder", "order", "suborder", "infraorder", "superfamily",
    "family", "subfamily", "tribe", "subtribe", "genus", "subgenus",
]
RANK_COLUMNS = [scale.capitalize() for scale in SCALES]
# Superkingdom through Subtribe
HIGHER_TAXONOMY = RANK_COLUMNS[:19]
LINEAGE_COLUMNS = RANK_COLUMNS + ["Species", "max_ma", "min_ma"]

SPECIES_PLACEHOLDER = "sp."

@dataclass(frozen=True)
class TaxonRecord:
    """One row of the PBDB taxa table."""
    accepted_no: str
    accepted_name: str
    accepted_rank: str
    parent_no: str = ""
    firstapp_max_ma: Optional[float] = None
    lastapp_min_ma: Optional[float] = None
    is_extant: str = ""
    difference: str = ""

    @property
    def is_valid(self) -> bool:
        """Whether the name is accepted (not flagged as superseded)."""
        return self.difference == ""

@dataclass(frozen=True)
class Lineage:
    """Higher taxonomy and age range for one genus or subgenus."""
    superkingdom: str = ""
    kingdom: str = ""
    subkingdom: str = ""
    superphylum: str = ""
    phylum: str = ""
    subphylum: str = ""
    superclass: str = ""
    class_: str = ""
    subclass: str = ""
    infraclass: str = ""
    superorder: str = ""
    order: str = ""
    suborder: str = ""
    infraorder: str = ""
    superfamily: str = ""
    family: str = ""
    subfamily: str = ""
    tribe: str = ""
    subtribe: str = ""
    genus: str = ""
    subgenus: str = ""
    species: str = SPECIES_PLACEHOLDER
    max_ma: Optional[float] = None
    min_ma: Optional[float] = None

    def ranks(self) -> Tuple[str, ...]:
        """The 21 rank names, Superkingdom first."""
        return tuple(getattr(self, f.name) for f in fields(self)[:len(SCALES)])

    def as_dict(self) -> Dict[str, Any]:
        """Convert to a row keyed by output column name."""
        values = [getattr(self, f.name) for f in fields(self)]
        return dict(zip(LINEAGE_COLUMNS, values))

def empty_ranks() -> List[str]:
    return [""] * len(SCALES)
