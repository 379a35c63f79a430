"""
Isometric projection with camera rotation.
"""

import math

from dataclasses import dataclass
from typing import Iterable, NamedTuple

COS30 = math.cos(math.pi / 6)
SIN30 = math.sin(math.pi / 6)
BOUNDS_MARGIN = 20.0


class Point3D(NamedTuple):
    """Grid-space point: x along weeks, y along weekdays, z up."""

    x: float
    y: float
    z: float


class ProjectedPoint(NamedTuple):
    """Screen-space point."""

    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    """Document size derived from the projected terrain extent."""

    width: float
    height: float


def isometric(point: Point3D) -> ProjectedPoint:
    """Fixed 30 degree isometric shear; height lifts the point on screen."""
    iso_x = (point.x - point.y) * COS30
    iso_y = (point.x + point.y) * SIN30 - point.z
    return ProjectedPoint(iso_x, iso_y)


def project_point(point: Point3D, rotation_angle: float, padding: float) -> ProjectedPoint:
    """
    Project a 3D grid point to screen space.

    Applies the isometric shear, rotates the result by ``rotation_angle``
    degrees and offsets it by ``padding`` on both axes.
    """
    iso_x, iso_y = isometric(point)
    theta = math.radians(rotation_angle)
    cos_rot = math.cos(theta)
    sin_rot = math.sin(theta)
    return ProjectedPoint(
        iso_x * cos_rot - iso_y * sin_rot + padding,
        iso_x * sin_rot + iso_y * cos_rot + padding,
    )


def unproject_point(point: ProjectedPoint, rotation_angle: float, padding: float) -> ProjectedPoint:
    """Undo the padding offset and rotation, returning isometric coordinates."""
    x = point.x - padding
    y = point.y - padding
    theta = math.radians(rotation_angle)
    cos_rot = math.cos(theta)
    sin_rot = math.sin(theta)
    return ProjectedPoint(x * cos_rot + y * sin_rot, -x * sin_rot + y * cos_rot)


def _extent(points: Iterable[ProjectedPoint]):
    points = list(points)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return max(xs) - min(xs), max(ys) - min(ys)


def calculate_bounds(
    weeks: int,
    days: int,
    max_height: float,
    rotation_angle: float,
    cell_size: float,
    padding: float,
) -> Bounds:
    """
    Size of the document enclosing the whole terrain volume.

    Projects the four ground corners plus the near and far corners lifted
    to ``max_height`` and pads the extent on both sides.
    """
    width = weeks * cell_size
    depth = days * cell_size
    extremes = [
        Point3D(0, 0, 0),
        Point3D(width, 0, 0),
        Point3D(width, depth, 0),
        Point3D(0, depth, 0),
        Point3D(0, 0, max_height),
        Point3D(width, depth, max_height),
    ]
    corners = [project_point(p, rotation_angle, padding) for p in extremes]

    extent_x, extent_y = _extent(corners)
    return Bounds(
        width=extent_x + padding * 2 + BOUNDS_MARGIN,
        height=extent_y + padding * 2 + BOUNDS_MARGIN,
    )
