"""
Face lighting and color utilities.

Faces are lit with an ambient + diffuse model against a single fixed
directional light. Colors are hex strings on input and ``rgb(r, g, b)``
strings on output.
"""

import math
import re

from typing import Optional, Sequence, Tuple

from .projection import Point3D
from .thresholds import MAX_TIER_HEIGHT

Vector3 = Tuple[float, float, float]
RGB = Tuple[int, int, int]

DEFAULT_LIGHT_DIRECTION: Vector3 = (0.3, -0.3, 1.0)
MIN_LIGHT = 0.35
BASE_TILE_AMBIENT = 0.8
BASE_TILE_DIFFUSE = 0.2

_HEX_COLOR = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def normalize3(v: Sequence[float]) -> Vector3:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2]) or 1.0
    return (v[0] / length, v[1] / length, v[2] / length)


def dot3(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def compute_normal(a: Point3D, b: Point3D, c: Point3D) -> Vector3:
    """Unit normal of triangle abc; winding order decides the sign."""
    u = (b.x - a.x, b.y - a.y, b.z - a.z)
    v = (c.x - a.x, c.y - a.y, c.z - a.z)
    return normalize3((
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    ))


def hex_to_rgb(color: str) -> Optional[RGB]:
    """Parse ``#rrggbb``; returns None for anything else."""
    match = _HEX_COLOR.match(color)
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def interpolate_colors(color1: str, color2: str, t: float) -> str:
    """Linear blend between two hex colors, returned as hex."""
    rgb1 = hex_to_rgb(color1)
    rgb2 = hex_to_rgb(color2)
    if rgb1 is None or rgb2 is None:
        return color1
    channels = [int(math.floor(a + (b - a) * t + 0.5)) for a, b in zip(rgb1, rgb2)]
    return "#" + "".join(f"{c:02x}" for c in channels)


def shade_color(color: str, light: float) -> str:
    """Scale each channel by ``light``, clamped to 0-255."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    r, g, b = (int(math.floor(max(0.0, min(255.0, c * light)) + 0.5)) for c in rgb)
    return f"rgb({r}, {g}, {b})"


class LightingModel:
    """
    Ambient + diffuse lighting against a fixed directional light.

    Terrain brightness is attenuated by elevation so low ground reads darker
    than peaks with the same orientation.
    """

    def __init__(
        self,
        ambient: float = 0.3,
        diffuse: float = 0.7,
        light_direction: Sequence[float] = DEFAULT_LIGHT_DIRECTION,
    ):
        self.ambient = ambient
        self.diffuse = diffuse
        self.light_direction = normalize3(light_direction)

    def lambert(self, triangle: Sequence[Point3D]) -> float:
        """max(0, n . L) for a triangle."""
        normal = compute_normal(*triangle)
        return max(0.0, dot3(normal, self.light_direction))

    def total_light(self, brightness: float) -> float:
        """Ambient plus diffuse scaled by ``brightness``, capped at 1."""
        return min(1.0, self.ambient + self.diffuse * brightness)

    def terrain_light(self, triangle: Sequence[Point3D]) -> float:
        """Total light factor for a terrain face, floored at MIN_LIGHT."""
        avg_height = sum(p.z for p in triangle) / 3
        elevation_factor = 0.5 + 0.5 * min(1.0, avg_height / MAX_TIER_HEIGHT)
        return max(self.total_light(self.lambert(triangle) * elevation_factor), MIN_LIGHT)

    def base_light(self, triangle: Sequence[Point3D]) -> float:
        """Light factor for ground tiles, which are always bright."""
        return BASE_TILE_AMBIENT + BASE_TILE_DIFFUSE * self.lambert(triangle)

    def shade_terrain(self, color: str, triangle: Sequence[Point3D]) -> str:
        return shade_color(color, self.terrain_light(triangle))

    def shade_base(self, color: str, triangle: Sequence[Point3D]) -> str:
        return shade_color(color, self.base_light(triangle))
