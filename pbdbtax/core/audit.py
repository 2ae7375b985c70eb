"""Checks for subgenera, homonyms and possible duplicate genus entries."""

import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from pbdbtax.models.errors import AuditError
from pbdbtax.models.taxonomic import RANK_COLUMNS, HIGHER_TAXONOMY

logger = logging.getLogger(__name__)

SUBGENERA = "subgenera"
DUPLICATE = "duplicate"
HOMONYM = "homonym"

SUBGENERA_TEMPLATE = "OK: Genus {genus} has {count} subgenera."
DUPLICATE_TEMPLATE = ("WARNING: Genus {genus} may be a duplicate genus entry. "
                      "Investigate and override in PBDB if true.")
HOMONYM_TEMPLATE = "OK: Genus {genus} is a homonym for genera in difference classes: {classes}"
SUMMARY_TEMPLATE = ("The presence of subgenera, homonyms, and possible duplicates equals "
                    "{percent} % of the database")

@dataclass(frozen=True)
class AuditFinding:
    """One classification of a repeated genus name."""
    kind: str
    genus: str
    message: str

@dataclass
class AuditReport:
    """Summary line and findings, in report order."""
    summary: str
    multi_fraction: float
    findings: List[AuditFinding] = field(default_factory=list)

    def lines(self) -> List[str]:
        return [self.summary] + [finding.message for finding in self.findings]

    def by_kind(self, kind: str) -> List[AuditFinding]:
        return [finding for finding in self.findings if finding.kind == kind]

def _check_columns(df_lineage: pd.DataFrame) -> None:
    missing = [column for column in RANK_COLUMNS if column not in df_lineage.columns]
    if missing:
        raise AuditError(f"Lineage table is missing columns required for auditing: {', '.join(missing)}")

def genus_multiples(df_lineage: pd.DataFrame) -> pd.Series:
    """
    Counts of genus names listed two or more times.

    Args:
        df_lineage: Lineage table

    Returns:
        Series of counts indexed by genus, most frequent first (ties in table order)
    """
    counts = df_lineage["Genus"].value_counts(sort=False)
    counts = counts.sort_values(ascending=False, kind="stable")
    return counts[counts >= 2]

def top_multiples(df_lineage: pd.DataFrame, n: int = 20) -> pd.Series:
    """The n most repeated genus names, for a quick look before auditing."""
    _check_columns(df_lineage)
    return genus_multiples(df_lineage).head(n)

def audit_lineages(df_lineage: pd.DataFrame, report_subgenera: bool = False) -> AuditReport:
    """
    Classify every genus name that appears more than once.

    Within a single class, a genus listed once as a whole and once per
    subgenus with identical higher taxonomy is a subgenus set, and any
    difference in higher taxonomy flags a possible duplicate. Both checks
    run for every single-class group. A name shared by two classes is a
    homonym. Groups spanning three or more classes are not classified.

    Args:
        df_lineage: Lineage table with RANK_COLUMNS
        report_subgenera: Whether to report subgenus sets

    Returns:
        AuditReport

    Raises:
        AuditError: If required columns are missing
    """
    _check_columns(df_lineage)

    mults = genus_multiples(df_lineage)
    n_rows = len(df_lineage)
    multi_fraction = float(mults.sum()) / n_rows if n_rows else 0.0
    summary = SUMMARY_TEMPLATE.format(percent=round(100 * multi_fraction, 1))
    report = AuditReport(summary=summary, multi_fraction=multi_fraction)

    grouped = df_lineage.groupby("Genus", sort=False)
    for genus, count in mults.items():
        suspicious = grouped.get_group(genus)
        classes = list(suspicious["Class"].unique())

        if len(classes) == 1:
            constant = bool((suspicious[HIGHER_TAXONOMY].nunique(dropna=False) == 1).all())
            subgenera = suspicious["Subgenus"].tolist()

            # Likely subgenera
            if (report_subgenera and constant and subgenera[0] == ""
                    and all(subgenus != "" for subgenus in subgenera[1:])):
                report.findings.append(AuditFinding(
                    SUBGENERA, genus, SUBGENERA_TEMPLATE.format(genus=genus, count=count - 1)
                ))

            # Likely problematic duplicated entries
            if not constant:
                report.findings.append(AuditFinding(
                    DUPLICATE, genus, DUPLICATE_TEMPLATE.format(genus=genus)
                ))

        elif len(classes) == 2:
            report.findings.append(AuditFinding(
                HOMONYM, genus, HOMONYM_TEMPLATE.format(genus=genus, classes=" ".join(classes))
            ))

        else:
            logger.debug(f"Genus {genus} spans {len(classes)} classes; not classified")

    logger.info(f"Audited {len(mults)} repeated genus names: "
                f"{len(report.by_kind(DUPLICATE))} possible duplicates, "
                f"{len(report.by_kind(HOMONYM))} homonyms")
    return report
