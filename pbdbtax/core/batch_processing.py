"""Batch processing utilities for pbdbtax."""

import math
import time
import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Iterable, Iterator, TypeVar

import pandas as pd

from pbdbtax.models.errors import LineageError
from pbdbtax.models.taxonomic import Lineage, LINEAGE_COLUMNS
from pbdbtax.core.taxonomy import TaxonTable, select_candidates, resolve_lineage

logger = logging.getLogger(__name__)

# Type variables for generics
T = TypeVar("T")

class BatchProcessor:
    """Generic framework for batch processing of any dataset."""

    def __init__(self, batch_size: int = 1000, show_progress: bool = False):
        """Initialize a batch processor.

        Args:
            batch_size: Number of items to process in each batch
            show_progress: Whether to log progress after each batch
        """
        self.batch_size = batch_size
        self.show_progress = show_progress

    def batches(self, items: Iterable[T]) -> Iterator[List[T]]:
        """Split items into lists of at most batch_size."""
        batch = []
        for item in items:
            batch.append(item)
            if len(batch) >= self.batch_size:
                yield batch
                batch = []
        if batch:
            yield batch

@dataclass
class ResolutionResult:
    """Lineages resolved from a set of candidates, plus the candidates that failed."""
    lineages: List[Lineage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return len(self.errors)

    def extend(self, other: 'ResolutionResult') -> None:
        self.lineages.extend(other.lineages)
        self.errors.extend(other.errors)

    def to_dataframe(self) -> pd.DataFrame:
        return lineages_to_dataframe(self.lineages)

def resolve_batch(indices: Sequence[int], candidates: Sequence[int], table: TaxonTable) -> ResolutionResult:
    """
    Resolve a batch of candidate indices, skipping those that fail.

    Args:
        indices: Indices into candidates
        candidates: Row positions from select_candidates
        table: PBDB taxa table

    Returns:
        ResolutionResult with one lineage per successful index
    """
    result = ResolutionResult()
    for g in indices:
        try:
            result.lineages.append(resolve_lineage(g, candidates, table))
        except LineageError as e:
            result.errors.append(f"{table[candidates[g]].accepted_name}: {str(e)}")
    return result

class LineageBatchProcessor(BatchProcessor):
    """Specialized processor that resolves lineages across worker processes."""

    def __init__(self, batch_size: Optional[int] = None, workers: int = 1, show_progress: bool = False):
        """Initialize a lineage batch processor.

        Args:
            batch_size: Candidates per task; None spreads them evenly, a few tasks per worker
            workers: Number of worker processes; 1 resolves in-process
            show_progress: Whether to log progress after each batch
        """
        super().__init__(batch_size or 1, show_progress)
        self.fixed_batch_size = batch_size
        self.workers = max(1, workers)

    def _size_batches(self, n_items: int) -> None:
        if self.fixed_batch_size:
            self.batch_size = self.fixed_batch_size
        else:
            self.batch_size = max(1, math.ceil(n_items / (self.workers * 4)))

    def resolve(self, table: TaxonTable, candidates: Sequence[int],
                indices: Optional[Sequence[int]] = None) -> ResolutionResult:
        """Resolve lineages for the given candidate indices.

        Results are concatenated in batch order, regardless of which worker finishes first.

        Args:
            table: PBDB taxa table
            candidates: Row positions from select_candidates
            indices: Indices into candidates; defaults to all of them

        Returns:
            Combined ResolutionResult
        """
        if indices is None:
            indices = range(len(candidates))
        indices = list(indices)
        self._size_batches(len(indices))
        batches = list(self.batches(indices))

        combined = ResolutionResult()
        if self.workers == 1 or len(batches) <= 1:
            for batch_idx, batch in enumerate(batches):
                combined.extend(resolve_batch(batch, candidates, table))
                self._log_progress(batch_idx, len(batches), len(batch))
            return combined

        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(resolve_batch, batch, candidates, table) for batch in batches]
            for batch_idx, future in enumerate(futures):
                combined.extend(future.result())
                self._log_progress(batch_idx, len(batches), len(batches[batch_idx]))
        return combined

    def _log_progress(self, batch_idx: int, n_batches: int, batch_len: int) -> None:
        if self.show_progress:
            logger.info(f"Processed batch {batch_idx+1}/{n_batches} ({batch_len} candidates)")

def resolve_all(
    table: TaxonTable,
    candidates: Optional[Sequence[int]] = None,
    workers: int = 1,
    batch_size: Optional[int] = None,
    limit: Optional[int] = None,
    show_progress: bool = False
) -> ResolutionResult:
    """
    Resolve lineages for every genus and subgenus candidate.

    Args:
        table: PBDB taxa table
        candidates: Row positions from select_candidates; computed when None
        workers: Number of worker processes
        batch_size: Candidates per task
        limit: Resolve only the first N candidates
        show_progress: Whether to log progress after each batch

    Returns:
        ResolutionResult with lineages and per-candidate failures
    """
    if candidates is None:
        candidates = select_candidates(table)
    indices = range(len(candidates))
    if limit is not None:
        indices = indices[:limit]

    t_start = time.perf_counter()
    processor = LineageBatchProcessor(batch_size=batch_size, workers=workers, show_progress=show_progress)
    result = processor.resolve(table, candidates, indices)
    elapsed = time.perf_counter() - t_start

    logger.info(f"Resolved {len(result.lineages)} of {len(indices)} genera in {elapsed:.1f} s "
                f"using {processor.workers} worker(s)")
    if result.failures:
        for error in result.errors:
            logger.warning(f"Skipped: {error}")
        logger.warning(f"{result.failures} candidates failed to resolve")
    return result

def lineages_to_dataframe(lineages: Iterable[Lineage]) -> pd.DataFrame:
    """
    Concatenate lineages into the output table.

    Args:
        lineages: Lineage records

    Returns:
        DataFrame with LINEAGE_COLUMNS in fixed order
    """
    df_lineage = pd.DataFrame([lineage.as_dict() for lineage in lineages], columns=LINEAGE_COLUMNS)
    for column in ("max_ma", "min_ma"):
        df_lineage[column] = pd.to_numeric(df_lineage[column])
    return df_lineage
