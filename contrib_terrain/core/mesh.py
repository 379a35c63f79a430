"""
Terrain mesh and ground tile rendering.

Builds triangles for the ground layer and the terrain surface, lights and
projects them, and orders everything back to front with a single depth key
(mean vertex height before projection).
"""

import numpy as np
import structlog
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..svg.primitives import Line, Polygon
from .contours import contour_color, extract_contour_segments
from .lighting import LightingModel
from .projection import Point3D, project_point
from .thresholds import (
    QuartileThresholds,
    map_count_to_color_tier,
    map_count_to_height_tier,
    representative_count,
)
from .transforms import simple_noise

logger = structlog.get_logger()

TIER_COLORS = ("#ebedf0", "#c3e4c8", "#9be9a8", "#40c463", "#30a14e", "#216e39")
BASE_TILE_COLOR = "#c3e4c8"
BASE_TILE_STROKE = "#5a6268"
BASE_TILE_HEIGHT = 0.5

VISIBILITY_THRESHOLD = 1.0
MICRO_NOISE_AMPLITUDE = 0.5
MICRO_NOISE_FREQUENCY = 1.5


@dataclass
class Face:
    """A lit, projected triangle waiting to be depth sorted."""

    vertices: Tuple[Point3D, Point3D, Point3D]
    count: float
    depth: float
    polygon: Polygon
    kind: str  # "base", "top" or "wall"
    cell: Optional[Tuple[int, int]] = None


def depth_key(triangle: Sequence[Point3D]) -> float:
    """Mean z of the triangle's vertices."""
    return (triangle[0].z + triangle[1].z + triangle[2].z) / 3


def depth_sort(faces: Sequence[Face]) -> List[Face]:
    """Back-to-front order; equal keys keep insertion order."""
    return sorted(faces, key=lambda face: face.depth)


class TerrainMeshRenderer:
    """
    Emits ground tiles, terrain faces and contour lines for a height field.

    Args:
        cell_size: Width of one grid cell in scene units
        padding: Screen offset applied after projection
        height_scale: Vertical scale for contour levels
        lighting: Lighting model used to shade faces
    """

    def __init__(
        self,
        cell_size: float = 20.0,
        padding: float = 120.0,
        height_scale: float = 12.0,
        lighting: Optional[LightingModel] = None,
    ):
        self.cell_size = cell_size
        self.padding = padding
        self.height_scale = height_scale
        self.lighting = lighting or LightingModel()

    def _project(self, triangle: Sequence[Point3D], rotation_angle: float):
        return tuple(project_point(p, rotation_angle, self.padding) for p in triangle)

    def _corner(self, x: int, y: int, z: float) -> Point3D:
        return Point3D(x * self.cell_size, y * self.cell_size, z)

    def base_faces(self, days: int, weeks: int, rotation_angle: float) -> List[Face]:
        """Two flat ground triangles for every grid cell."""
        faces: List[Face] = []
        for y in range(days):
            for x in range(weeks):
                c1 = self._corner(x, y, BASE_TILE_HEIGHT)
                c2 = self._corner(x + 1, y, BASE_TILE_HEIGHT)
                c3 = self._corner(x + 1, y + 1, BASE_TILE_HEIGHT)
                c4 = self._corner(x, y + 1, BASE_TILE_HEIGHT)
                for triangle in ((c1, c2, c3), (c1, c3, c4)):
                    polygon = Polygon(
                        points=self._project(triangle, rotation_angle),
                        fill=self.lighting.shade_base(BASE_TILE_COLOR, triangle),
                        stroke=BASE_TILE_STROKE,
                        stroke_width=0.1,
                        opacity=0.9,
                    )
                    faces.append(Face(triangle, 0.0, depth_key(triangle), polygon, "base", (y, x)))
        return faces

    def face_color(self, avg_height: float, count: float, thresholds: QuartileThresholds) -> str:
        """Palette color from the face height, or from the quad count on flat ground."""
        color_count = representative_count(avg_height, thresholds) if avg_height > 0 else count
        return TIER_COLORS[map_count_to_color_tier(color_count, thresholds)]

    def _terrain_face(
        self,
        triangle: Tuple[Point3D, Point3D, Point3D],
        count: float,
        thresholds: QuartileThresholds,
        rotation_angle: float,
        kind: str,
        cell: Tuple[int, int],
    ) -> Face:
        depth = depth_key(triangle)
        color = self.face_color(depth, count, thresholds)
        polygon = Polygon(
            points=self._project(triangle, rotation_angle),
            fill=self.lighting.shade_terrain(color, triangle),
        )
        return Face(triangle, count, depth, polygon, kind, cell)

    def _render_order(self, days: int, weeks: int) -> List[Tuple[int, int]]:
        """Interior quads seeded by diagonal (row + column) sum."""
        order = [(y, x) for y in range(days - 1) for x in range(weeks - 1)]
        order.sort(key=lambda cell: cell[0] + cell[1])
        return order

    def terrain_faces(
        self, field: np.ndarray, thresholds: QuartileThresholds, rotation_angle: float
    ) -> List[Face]:
        """
        Top and wall triangles for every visible quad of the field.

        Each quad joins four neighboring cells. Corner heights come from the
        tier mapping plus a small per-vertex noise. Quads whose tallest
        corner is below the visibility threshold are skipped. A wall is added
        on an edge only where one of its two corners rises above the
        threshold.
        """
        days, weeks = field.shape
        faces: List[Face] = []

        for y, x in self._render_order(days, weeks):
            counts = (field[y, x], field[y, x + 1], field[y + 1, x], field[y + 1, x + 1])
            h00, h10, h01, h11 = (map_count_to_height_tier(c, thresholds) for c in counts)
            if max(h00, h10, h01, h11) < VISIBILITY_THRESHOLD:
                continue

            v00 = h00 + simple_noise(x * 2, y * 2, MICRO_NOISE_FREQUENCY) * MICRO_NOISE_AMPLITUDE
            v10 = h10 + simple_noise((x + 1) * 2, y * 2, MICRO_NOISE_FREQUENCY) * MICRO_NOISE_AMPLITUDE
            v01 = h01 + simple_noise(x * 2, (y + 1) * 2, MICRO_NOISE_FREQUENCY) * MICRO_NOISE_AMPLITUDE
            v11 = h11 + simple_noise((x + 1) * 2, (y + 1) * 2, MICRO_NOISE_FREQUENCY) * MICRO_NOISE_AMPLITUDE

            g00 = self._corner(x, y, 0.0)
            g10 = self._corner(x + 1, y, 0.0)
            g01 = self._corner(x, y + 1, 0.0)
            g11 = self._corner(x + 1, y + 1, 0.0)
            t00 = self._corner(x, y, max(0.0, float(v00)))
            t10 = self._corner(x + 1, y, max(0.0, float(v10)))
            t01 = self._corner(x, y + 1, max(0.0, float(v01)))
            t11 = self._corner(x + 1, y + 1, max(0.0, float(v11)))

            avg_count = float(sum(counts)) / 4
            triangles = [("top", (t00, t10, t11)), ("top", (t00, t11, t01))]
            if v00 > VISIBILITY_THRESHOLD or v10 > VISIBILITY_THRESHOLD:
                triangles += [("wall", (g00, t00, t10)), ("wall", (g00, t10, g10))]
            if v10 > VISIBILITY_THRESHOLD or v11 > VISIBILITY_THRESHOLD:
                triangles += [("wall", (g10, t10, t11)), ("wall", (g10, t11, g11))]
            if v01 > VISIBILITY_THRESHOLD or v11 > VISIBILITY_THRESHOLD:
                triangles += [("wall", (g01, t11, t01)), ("wall", (g01, g11, t11))]
            if v00 > VISIBILITY_THRESHOLD or v01 > VISIBILITY_THRESHOLD:
                triangles += [("wall", (g00, t01, t00)), ("wall", (g00, g01, t01))]

            for kind, triangle in triangles:
                faces.append(self._terrain_face(triangle, avg_count, thresholds, rotation_angle, kind, (y, x)))

        return faces

    def contour_lines(
        self, field: np.ndarray, levels: Sequence[float], rotation_angle: float, max_count: float
    ) -> List[Line]:
        """Projected contour segments for every level, lowest level first."""
        if not levels:
            return []
        max_level = max_count or max(levels)
        lines: List[Line] = []
        for level in levels:
            stroke = contour_color(level, max_level)
            for segment in extract_contour_segments(field, level, self.cell_size, self.height_scale):
                lines.append(Line(
                    start=project_point(segment.a, rotation_angle, self.padding),
                    end=project_point(segment.b, rotation_angle, self.padding),
                    stroke=stroke,
                ))
        return lines

    def render(
        self,
        grid_shape: Tuple[int, int],
        field: np.ndarray,
        thresholds: QuartileThresholds,
        rotation_angle: float,
    ) -> List[Face]:
        """Ground tiles and terrain faces in one back-to-front list."""
        days, weeks = grid_shape
        base = self.base_faces(days, weeks, rotation_angle)
        terrain = self.terrain_faces(field, thresholds, rotation_angle)
        ordered = depth_sort(base + terrain)
        logger.debug("Rendered terrain mesh", base_faces=len(base), terrain_faces=len(terrain))
        return ordered
