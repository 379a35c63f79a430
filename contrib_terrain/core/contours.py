"""
Contour line extraction with marching squares.
"""

import math

import numpy as np
from dataclasses import dataclass
from typing import List

from .lighting import interpolate_colors
from .projection import Point3D

CONTOUR_RAMP = ("#ffffff", "#e1e4e8", "#959da5", "#6a737d", "#444d56")
BASE_LEVELS = (1, 3, 6, 10)
GROWTH_START = 15
GROWTH_FACTOR = 1.5


@dataclass(frozen=True)
class ContourSegment:
    """A contour line piece crossing a single grid cell."""

    a: Point3D
    b: Point3D
    level: float


def calculate_contour_levels(max_value: float) -> List[int]:
    """
    Pick iso-levels adapted to the field's range.

    Up to 5: every integer. Up to 15: 1 plus the even levels. Above that:
    1, 3, 6, 10 and then 15 growing by x1.5 (floored) up to the maximum.
    """
    if max_value <= 0:
        return []

    top = int(math.floor(max_value))
    if max_value <= 5:
        levels = list(range(1, top + 1))
    elif max_value <= 15:
        levels = list(range(2, top + 1, 2))
        if not levels or levels[0] != 1:
            levels.insert(0, 1)
    else:
        levels = list(BASE_LEVELS)
        current = GROWTH_START
        while current <= max_value:
            levels.append(current)
            current = int(math.floor(current * GROWTH_FACTOR))

    return [level for level in levels if level <= max_value]


def extract_contour_segments(
    field: np.ndarray, level: float, cell_size: float = 20.0, z_scale: float = 12.0
) -> List[ContourSegment]:
    """
    Marching squares over every 2x2 quad of the field for one level.

    Corners at or above the level are "inside". Crossing points are linearly
    interpolated along each edge whose corners disagree, visiting the edges
    top, right, bottom, left. Four crossings (saddle) are paired in that
    discovery order without disambiguation.

    Args:
        field: Smoothed height field in count units
        level: Iso-value in count units
        cell_size: Grid spacing in scene units
        z_scale: Vertical scale applied to both field and level

    Returns:
        Segments at height ``level * z_scale``
    """
    days, weeks = field.shape
    z_level = level * z_scale
    segments: List[ContourSegment] = []

    for y in range(days - 1):
        for x in range(weeks - 1):
            h00 = field[y, x] * z_scale
            h10 = field[y, x + 1] * z_scale
            h11 = field[y + 1, x + 1] * z_scale
            h01 = field[y + 1, x] * z_scale

            c0 = int(h00 >= z_level)
            c1 = int(h10 >= z_level)
            c2 = int(h11 >= z_level)
            c3 = int(h01 >= z_level)
            code = (c0 << 3) | (c1 << 2) | (c2 << 1) | c3
            if code == 0 or code == 15:
                continue

            x0, x1 = x * cell_size, (x + 1) * cell_size
            y0, y1 = y * cell_size, (y + 1) * cell_size
            corners = (
                (Point3D(x0, y0, h00), c0),
                (Point3D(x1, y0, h10), c1),
                (Point3D(x1, y1, h11), c2),
                (Point3D(x0, y1, h01), c3),
            )

            crossings = []
            for i in range(4):
                (pa, ca), (pb, cb) = corners[i], corners[(i + 1) % 4]
                if ca ^ cb:
                    t = (z_level - pa.z) / (pb.z - pa.z)
                    crossings.append(Point3D(pa.x + (pb.x - pa.x) * t, pa.y + (pb.y - pa.y) * t, z_level))

            if len(crossings) == 2:
                segments.append(ContourSegment(crossings[0], crossings[1], level))
            elif len(crossings) == 4:
                segments.append(ContourSegment(crossings[0], crossings[1], level))
                segments.append(ContourSegment(crossings[2], crossings[3], level))

    return segments


def contour_color(level: float, max_level: float) -> str:
    """Gray ramp color for a level, light for low levels and dark for high."""
    steps = len(CONTOUR_RAMP) - 1
    normalized = level / max_level
    index = min(int(math.floor(normalized * steps)), steps)
    next_index = min(index + 1, steps)
    t = normalized * steps - index
    return interpolate_colors(CONTOUR_RAMP[index], CONTOUR_RAMP[next_index], t)
