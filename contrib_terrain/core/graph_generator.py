"""
Isometric bar graph generation.

Each active day becomes a column whose height follows its raw count; idle
days are flat dark tiles. No smoothing or thresholds are involved.
"""

import numpy as np
import structlog
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..svg.composer import DEFAULT_CREDIT, SvgComposer
from ..svg.primitives import Polygon, Primitive
from .height_field import ActivityRecord, build_grid
from .lighting import LightingModel, shade_color
from .projection import Bounds, Point3D, calculate_bounds, project_point

logger = structlog.get_logger()

GRAPH_TITLE = "GitHub Contribution Graph"
GRAPH_DESCRIPTION = "3D isometric graph of GitHub contributions with proper lighting and depth"

IDLE_TILE_COLOR = "#151B23"
IDLE_TILE_STROKE = "#262C36"

# (max count, color); counts above the last bound use GRAPH_PEAK_COLOR
GRAPH_COLOR_STEPS = ((1, "#9be9a8"), (3, "#40c463"), (6, "#30a14e"), (12, "#216e39"))
GRAPH_PEAK_COLOR = "#0d4429"

OCCLUSION_SCALE = 15.0


@dataclass(frozen=True)
class GraphConfig:
    """Configuration for bar graph rendering."""

    cell_size: float = 20.0
    height_scale: float = 12.0
    padding: float = 120.0
    base_height: float = 4.0
    rotation_angle: float = -30.5
    ambient_light: float = 0.3
    diffuse_light: float = 0.7
    include_credit: bool = True
    credit_text: str = DEFAULT_CREDIT


@dataclass
class GraphScene:
    grid: np.ndarray
    primitives: List[Primitive]
    bounds: Bounds
    max_count: int


def graph_color(count: int) -> str:
    """Base palette color for a day's count."""
    if count <= 0:
        return IDLE_TILE_COLOR
    for bound, color in GRAPH_COLOR_STEPS:
        if count <= bound:
            return color
    return GRAPH_PEAK_COLOR


def stroke_color(brightness: float) -> str:
    """Outline gray, darker strokes on brighter faces."""
    if brightness > 0.8:
        return "#2a2a2a"
    if brightness > 0.6:
        return "#333333"
    if brightness > 0.4:
        return "#404040"
    return "#4a4a4a"


def ambient_occlusion(grid: np.ndarray, day: int, week: int) -> Dict[str, float]:
    """
    Shadowing of a column's top, right and left faces by its neighbors.

    Neighbors outside the grid count as zero.
    """
    days, weeks = grid.shape

    def at(y: int, x: int) -> float:
        if 0 <= y < days and 0 <= x < weeks:
            return float(grid[y, x])
        return 0.0

    current = at(day, week) + 1
    top = at(day - 1, week) + at(day - 1, week - 1) + at(day - 1, week + 1)
    right = at(day, week + 1) + at(day - 1, week + 1) + at(day + 1, week + 1)
    left = at(day, week - 1) + at(day - 1, week - 1) + at(day + 1, week - 1)
    return {
        "top": min(1.0, top / current / OCCLUSION_SCALE),
        "right": min(1.0, right / current / OCCLUSION_SCALE),
        "left": min(1.0, left / current / OCCLUSION_SCALE),
    }


class GraphSvgGenerator:
    """
    Renders activity calendars as isometric bar columns.

    Shares the projection, lighting and document composition of the terrain
    renderer.
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config or GraphConfig()
        self.lighting = LightingModel(
            ambient=self.config.ambient_light,
            diffuse=self.config.diffuse_light,
        )

    def _project(self, x: float, y: float, z: float, rotation_angle: float):
        return project_point(Point3D(x, y, z), rotation_angle, self.config.padding)

    def _face(self, points, count: int, brightness: float, stroke_width: float) -> Polygon:
        return Polygon(
            points=tuple(points),
            fill=shade_color(graph_color(count), self.lighting.total_light(brightness)),
            stroke=stroke_color(brightness),
            stroke_width=stroke_width,
        )

    def idle_tile(self, day: int, week: int, rotation_angle: float) -> Polygon:
        """Flat tile for a day without activity."""
        size = self.config.cell_size
        x, y = week * size, day * size
        corners = ((x, y), (x + size, y), (x + size, y + size), (x, y + size))
        return Polygon(
            points=tuple(self._project(cx, cy, 0.0, rotation_angle) for cx, cy in corners),
            fill=IDLE_TILE_COLOR,
            stroke=IDLE_TILE_STROKE,
            stroke_width=0.6,
        )

    def column(self, grid: np.ndarray, day: int, week: int, rotation_angle: float) -> List[Polygon]:
        """Left, right, front and top faces of one active day's column."""
        count = int(grid[day, week])
        size = self.config.cell_size
        height = count * self.config.height_scale + self.config.base_height
        x, y = week * size, day * size
        footprint = ((x, y), (x + size, y), (x + size, y + size), (x, y + size))
        b1, b2, b3, b4 = (self._project(cx, cy, 0.0, rotation_angle) for cx, cy in footprint)
        t1, t2, t3, t4 = (self._project(cx, cy, height, rotation_angle) for cx, cy in footprint)

        occlusion = ambient_occlusion(grid, day, week)
        return [
            self._face((b1, b4, t4, t1), count, 0.5 * (1.0 - occlusion["left"] * 0.5), 0.6),
            self._face((b2, b3, t3, t2), count, 0.75 * (1.0 - occlusion["right"] * 0.4), 0.6),
            self._face((b3, b4, t4, t3), count, 0.6 * (1.0 - occlusion["right"] * 0.3), 0.5),
            self._face((t1, t2, t3, t4), count, 1.0 - occlusion["top"] * 0.3, 0.8),
        ]

    def build_scene(self, records: Iterable[ActivityRecord], rotation_angle: Optional[float] = None) -> GraphScene:
        """
        Idle tiles first, then columns, each in diagonal order.

        Cells are ordered by week + day, ties broken by count, so nearer and
        taller columns are painted last.
        """
        if rotation_angle is None:
            rotation_angle = self.config.rotation_angle

        grid = build_grid(records)
        days, weeks = grid.shape
        order = sorted(
            ((day, week) for day in range(days) for week in range(weeks)),
            key=lambda cell: (cell[0] + cell[1], grid[cell]),
        )

        primitives: List[Primitive] = [
            self.idle_tile(day, week, rotation_angle) for day, week in order if grid[day, week] == 0
        ]
        for day, week in order:
            if grid[day, week] > 0:
                primitives.extend(self.column(grid, day, week, rotation_angle))

        max_count = int(grid.max()) if grid.size else 0
        max_height = max_count * self.config.height_scale + self.config.base_height if max_count > 0 else 0.0
        bounds = calculate_bounds(
            weeks, days, max_height, rotation_angle, self.config.cell_size, self.config.padding
        )

        logger.debug("Built graph scene", weeks=weeks, max_count=max_count, primitives=len(primitives))
        return GraphScene(grid, primitives, bounds, max_count)

    def generate_svg(
        self,
        records: Iterable[ActivityRecord],
        user_name: str,
        rotation_angle: Optional[float] = None,
        include_credit: Optional[bool] = None,
    ) -> str:
        """Render a calendar as an isometric bar graph SVG document."""
        if include_credit is None:
            include_credit = self.config.include_credit

        scene = self.build_scene(records, rotation_angle)
        composer = SvgComposer(
            include_credit=include_credit,
            credit_text=self.config.credit_text,
            title=GRAPH_TITLE,
            description=GRAPH_DESCRIPTION,
        )
        return composer.compose(scene.primitives, scene.bounds, user_name, scene.max_count > 0)
