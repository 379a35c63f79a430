"""
Height field construction from activity records.

The calendar is laid out as a dense 7 x N grid: one row per weekday
(Sunday = 0) and one column per week. Cells without a record stay at 0.
"""

import numpy as np
import structlog
from dataclasses import dataclass
from typing import Iterable, List

logger = structlog.get_logger()

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class ActivityRecord:
    """A single day of activity on the calendar."""

    date: str  # ISO calendar date
    count: int
    weekday: int  # 0 = Sunday .. 6 = Saturday
    week_index: int


@dataclass(frozen=True)
class ContributionStats:
    """Summary figures for a set of activity records."""

    total: int
    max_in_day: int
    active_days: int
    total_days: int


def build_grid(records: Iterable[ActivityRecord]) -> np.ndarray:
    """
    Build the dense weekday-by-week count grid.

    Duplicate (weekday, week_index) pairs overwrite each other, last write
    wins. An empty input produces a 7 x 0 grid.

    Args:
        records: Activity records in any order

    Returns:
        Integer array of shape (7, max_week_index + 1)
    """
    records = list(records)
    weeks = max((r.week_index for r in records), default=-1) + 1

    grid = np.zeros((DAYS_PER_WEEK, weeks), dtype=np.int64)
    for record in records:
        grid[record.weekday, record.week_index] = record.count

    logger.debug("Built contribution grid", days=DAYS_PER_WEEK, weeks=weeks, records=len(records))
    return grid


def build_height_field(grid: np.ndarray) -> np.ndarray:
    """Initial height field: a float copy of the raw counts."""
    return np.array(grid, dtype=np.float64, copy=True)


def summarize(records: Iterable[ActivityRecord]) -> ContributionStats:
    """Compute total, busiest day and active day figures."""
    counts: List[int] = [r.count for r in records]
    return ContributionStats(
        total=sum(counts),
        max_in_day=max(counts, default=0),
        active_days=sum(1 for c in counts if c > 0),
        total_days=len(counts),
    )
