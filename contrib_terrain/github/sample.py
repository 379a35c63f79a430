"""
Synthetic contribution calendars for demos and tests.
"""

import datetime as dt
import math

import numpy as np
from typing import List, Optional

from ..core.height_field import DAYS_PER_WEEK, ActivityRecord


def _dates(weeks: int, start: str):
    first = dt.date.fromisoformat(start)
    for week in range(weeks):
        for day in range(DAYS_PER_WEEK):
            yield week, day, first + dt.timedelta(days=week * DAYS_PER_WEEK + day)


def generate_sample_data(
    weeks: int = 52, seed: Optional[int] = None, start: str = "2024-01-01"
) -> List[ActivityRecord]:
    """
    Random calendar with busier weekdays and a yearly seasonal swing.

    Args:
        weeks: Number of week columns
        seed: Seed for reproducible output
        start: ISO date of the first cell

    Returns:
        Activity records, week by week
    """
    rng = np.random.default_rng(seed)
    records = []
    for week, day, date in _dates(weeks, start):
        if day < 5:
            count = max(0, int(rng.integers(0, 8)) - 1)
        else:
            count = max(0, int(rng.integers(0, 4)) - 1)
        seasonality = math.sin((week / 52) * 2 * math.pi) * 2
        count = max(0, int(math.floor(count + seasonality)))
        records.append(ActivityRecord(date=date.isoformat(), count=count, weekday=day, week_index=week))
    return records


def generate_zero_contributions(weeks: int = 52, start: str = "2024-01-01") -> List[ActivityRecord]:
    """Calendar with no activity at all."""
    return [
        ActivityRecord(date=date.isoformat(), count=0, weekday=day, week_index=week)
        for week, day, date in _dates(weeks, start)
    ]
