"""
Quartile-based scaling of raw counts into discrete visual tiers.

Thresholds are computed once per render from the raw (untransformed) field
and shared by the height and color mappings, so a cell's elevation and its
color always agree about relative magnitude.
"""

import math

import numpy as np
import structlog
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

logger = structlog.get_logger()

IQR_FACTOR = 1.5

# Tier indices shared by height and color mapping
TIER_NONE = 0
TIER_SUB_MINIMUM = 1
TIER_Q1 = 2
TIER_Q2 = 3
TIER_Q3 = 4
TIER_PEAK = 5

BASE_TIER_HEIGHT = 8.0
TIER_HEIGHTS = (
    0.0,
    BASE_TIER_HEIGHT * 0.5,
    BASE_TIER_HEIGHT,
    BASE_TIER_HEIGHT * 2,
    BASE_TIER_HEIGHT * 3.5,
    BASE_TIER_HEIGHT * 6,
)
MAX_TIER_HEIGHT = TIER_HEIGHTS[TIER_PEAK]


@dataclass(frozen=True)
class QuartileThresholds:
    """Outlier-trimmed quartile cutoffs of the non-zero counts."""

    q1: float = 0.0
    q2: float = 0.0
    q3: float = 0.0
    max: float = 0.0
    min_non_zero: float = 0.0


def _quartiles(sorted_values: Sequence[float]) -> Tuple[float, float, float]:
    """Q1/Q2/Q3 by floor(n * p) indexing, no interpolation."""
    n = len(sorted_values)
    return (
        sorted_values[int(math.floor(n * 0.25))],
        sorted_values[int(math.floor(n * 0.5))],
        sorted_values[int(math.floor(n * 0.75))],
    )


def iqr_bounds(sorted_values: Sequence[float]) -> Tuple[float, float]:
    """Inclusive [Q1 - 1.5 IQR, Q3 + 1.5 IQR] bounds of a sorted sequence."""
    q1, _, q3 = _quartiles(sorted_values)
    iqr = q3 - q1
    return q1 - IQR_FACTOR * iqr, q3 + IQR_FACTOR * iqr


def trim_outliers(sorted_values: Sequence[float], lower: float, upper: float) -> list:
    """Keep values inside the inclusive [lower, upper] range."""
    return [v for v in sorted_values if lower <= v <= upper]


def compute_thresholds(values: Union[np.ndarray, Sequence[float]]) -> QuartileThresholds:
    """
    Compute robust quartile thresholds from raw counts.

    Only positive values take part. Values outside the interquartile fences
    are trimmed and the quartiles recomputed on what remains; if trimming
    leaves nothing, the untrimmed figures are used.

    Args:
        values: Counts in any shape (flattened)

    Returns:
        QuartileThresholds, all zero when there are no positive values
    """
    flat = np.asarray(values, dtype=np.float64).ravel()
    positive = flat[flat > 0]
    if positive.size == 0:
        return QuartileThresholds()

    ordered = sorted(positive.tolist())
    lower, upper = iqr_bounds(ordered)
    trimmed = trim_outliers(ordered, lower, upper)

    if not trimmed:
        q1, q2, q3 = _quartiles(ordered)
        return QuartileThresholds(q1=q1, q2=q2, q3=q3, max=ordered[-1], min_non_zero=ordered[0])

    q1, q2, q3 = _quartiles(trimmed)
    thresholds = QuartileThresholds(q1=q1, q2=q2, q3=q3, max=trimmed[-1], min_non_zero=trimmed[0])
    logger.debug(
        "Computed quartile thresholds",
        values=len(ordered),
        trimmed=len(ordered) - len(trimmed),
        q1=q1, q2=q2, q3=q3,
    )
    return thresholds


def classify_count(count: float, thresholds: QuartileThresholds) -> int:
    """Bucket a count into one of the shared tier indices."""
    if count <= 0:
        return TIER_NONE
    if count < thresholds.min_non_zero:
        return TIER_SUB_MINIMUM
    if count <= thresholds.q1:
        return TIER_Q1
    if count <= thresholds.q2:
        return TIER_Q2
    if count <= thresholds.q3:
        return TIER_Q3
    return TIER_PEAK


def map_count_to_height_tier(count: float, thresholds: QuartileThresholds) -> float:
    """Discrete terrain height for a count."""
    return TIER_HEIGHTS[classify_count(count, thresholds)]


def map_count_to_color_tier(count: float, thresholds: QuartileThresholds) -> int:
    """Palette index for a count; same boundaries as the height tiers."""
    return classify_count(count, thresholds)


def representative_count(avg_height: float, thresholds: QuartileThresholds) -> float:
    """
    Map a rendered face height back to the threshold count it stands for.

    Used to color faces by their actual elevation rather than by the raw
    count of the quad they belong to.
    """
    if avg_height >= TIER_HEIGHTS[TIER_PEAK]:
        return thresholds.max
    if avg_height >= TIER_HEIGHTS[TIER_Q3]:
        return thresholds.q3
    if avg_height >= TIER_HEIGHTS[TIER_Q2]:
        return thresholds.q2
    if avg_height >= TIER_HEIGHTS[TIER_Q1]:
        return thresholds.q1
    return thresholds.min_non_zero
