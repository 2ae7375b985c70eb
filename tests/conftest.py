"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path
from typing import List

import pandas as pd
import pytest

from pbdbtax.core.utils import TAXA_COLUMNS
from pbdbtax.core.taxonomy import TaxonTable
from pbdbtax.models.taxonomic import Lineage


TAXA_ROWS = [
    # accepted_no, accepted_name, accepted_rank, parent_no, firstapp_max_ma, lastapp_min_ma, is_extant, difference
    ["1", "Animalia", "kingdom", "", "", "", "extant", ""],
    ["2", "Arthropoda", "phylum", "1", "538.8", "0", "extant", ""],
    ["3", "Artiopoda", "subphylum", "2", "538.8", "251.9", "extinct", ""],
    ["4", "Trilobita", "class", "3", "521", "251.9", "extinct", ""],
    ["10", "Eutrilobita", "unranked clade", "4", "521", "251.9", "extinct", ""],
    ["5", "Corynexochida", "order", "10", "521", "358.9", "extinct", ""],
    ["6", "Lichidae", "family", "5", "485.4", "358.9", "extinct", ""],
    ["7", "Acanthopyge", "genus", "6", "410.8", "382.7", "extinct", ""],
    ["8", "Acanthopyge (Acanthopyge)", "subgenus", "7", "410.8", "387.7", "extinct", ""],
    ["9", "Acanthopyge (Lobopyge)", "subgenus", "7", "407.6", "382.7", "extinct", ""],
    ["20", "Mollusca", "phylum", "1", "538.8", "0", "extant", ""],
    ["21", "Cephalopoda", "class", "20", "509", "0", "extant", ""],
    ["22", "Nautilidae", "family", "21", "66", "0", "extant", ""],
    ["23", "Nautilus", "genus", "22", "37.2", "5.3", "extant", ""],
    ["23", "Nautilus", "genus", "22", "37.2", "5.3", "extant", "subjective synonym of"],
    ["24", "Nautiloidea", "subclass", "21", "", "", "", ""],
    ["30", "Orphanus", "genus", "999", "100", "90", "extinct", ""],
    ["31", "Badname (X) extra", "subgenus", "7", "400", "390", "extinct", ""],
]


def make_lineage(genus: str, subgenus: str = "", class_: str = "Trilobita",
                 family: str = "Lichidae", order: str = "Corynexochida") -> Lineage:
    """Lineage with a fixed arthropod backbone."""
    return Lineage(
        kingdom="Animalia",
        phylum="Arthropoda",
        class_=class_,
        order=order,
        family=family,
        genus=genus,
        subgenus=subgenus,
        max_ma=410.0,
        min_ma=380.0,
    )


@pytest.fixture
def taxa_df() -> pd.DataFrame:
    """Small PBDB taxa table read as strings."""
    return pd.DataFrame(TAXA_ROWS, columns=TAXA_COLUMNS, dtype=str)


@pytest.fixture
def taxon_table(taxa_df) -> TaxonTable:
    return TaxonTable.from_dataframe(taxa_df)


@pytest.fixture
def taxa_csv(tmp_path, taxa_df) -> Path:
    """Taxa table written as a PBDB-style csv."""
    path = tmp_path / "pbdb_data.csv"
    taxa_df.to_csv(path, index=False)
    return path


@pytest.fixture
def acanthopyge_lineages() -> List[Lineage]:
    """A genus listed whole plus two subgenera."""
    return [
        make_lineage("Acanthopyge"),
        make_lineage("Acanthopyge", subgenus="Acanthopyge"),
        make_lineage("Acanthopyge", subgenus="Lobopyge"),
    ]


@pytest.fixture
def lineage_factory():
    """Build lineages sharing a fixed arthropod backbone."""
    return make_lineage
