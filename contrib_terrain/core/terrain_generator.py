"""
Terrain SVG generation pipeline.

grid -> height field -> transformed field -> mesh + contours ->
projected, lit, depth-sorted primitives -> SVG document.
"""

import numpy as np
import structlog
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..svg.composer import DEFAULT_CREDIT, SvgComposer
from ..svg.primitives import Primitive
from .contours import calculate_contour_levels
from .height_field import ActivityRecord, build_grid, build_height_field
from .lighting import DEFAULT_LIGHT_DIRECTION, LightingModel
from .mesh import Face, TerrainMeshRenderer
from .projection import Bounds, calculate_bounds
from .thresholds import MAX_TIER_HEIGHT, compute_thresholds
from .transforms import add_terrain_noise, apply_radial_influence, gaussian_smooth, preserve_zero_valleys

logger = structlog.get_logger()


@dataclass(frozen=True)
class TerrainConfig:
    """Configuration for terrain rendering."""

    cell_size: float = 20.0
    height_scale: float = 12.0
    padding: float = 120.0
    base_height: float = 4.0  # headroom added above the tallest tier for bounds
    rotation_angle: float = -30.5  # degrees
    ambient_light: float = 0.3
    diffuse_light: float = 0.7
    light_direction: Tuple[float, float, float] = DEFAULT_LIGHT_DIRECTION
    smooth_sigma: float = 0.6
    radial_influence: float = 2.5
    noise_scale: float = 0.3
    noise_frequency: float = 0.4
    contours_enabled: bool = False
    include_credit: bool = True
    credit_text: str = DEFAULT_CREDIT


@dataclass
class TerrainScene:
    """Intermediate results of one render, kept for inspection."""

    grid: np.ndarray
    field: np.ndarray
    faces: List[Face]
    primitives: List[Primitive]
    bounds: Bounds
    max_count: float


class TerrainSvgGenerator:
    """
    Renders activity calendars as isometric terrain SVGs.

    Holds no state between calls beyond its immutable configuration.
    """

    def __init__(self, config: Optional[TerrainConfig] = None):
        self.config = config or TerrainConfig()
        self.lighting = LightingModel(
            ambient=self.config.ambient_light,
            diffuse=self.config.diffuse_light,
            light_direction=self.config.light_direction,
        )
        self.renderer = TerrainMeshRenderer(
            cell_size=self.config.cell_size,
            padding=self.config.padding,
            height_scale=self.config.height_scale,
            lighting=self.lighting,
        )

    def transform_field(self, height_field: np.ndarray) -> np.ndarray:
        """Run the field transform passes in order."""
        influenced = apply_radial_influence(height_field, self.config.radial_influence)
        smoothed = gaussian_smooth(influenced, self.config.smooth_sigma)
        preserved = preserve_zero_valleys(smoothed, height_field)
        return add_terrain_noise(
            preserved, height_field, self.config.noise_scale, self.config.noise_frequency
        )

    def build_scene(
        self,
        records: Iterable[ActivityRecord],
        rotation_angle: Optional[float] = None,
        contours_enabled: Optional[bool] = None,
    ) -> TerrainScene:
        """
        Build the ordered primitives and document bounds for a calendar.

        Args:
            records: Activity records
            rotation_angle: Camera rotation in degrees (config default if None)
            contours_enabled: Overlay contour lines (config default if None)

        Returns:
            TerrainScene with grid, final field, primitives and bounds
        """
        if rotation_angle is None:
            rotation_angle = self.config.rotation_angle
        if contours_enabled is None:
            contours_enabled = self.config.contours_enabled

        grid = build_grid(records)
        height_field = build_height_field(grid)
        thresholds = compute_thresholds(height_field)
        field = self.transform_field(height_field)

        max_count = max(0.0, float(field.max())) if field.size else 0.0

        faces = self.renderer.render(grid.shape, field, thresholds, rotation_angle)
        primitives: List[Primitive] = [face.polygon for face in faces]
        if contours_enabled:
            levels = calculate_contour_levels(max_count)
            primitives.extend(self.renderer.contour_lines(field, levels, rotation_angle, max_count))

        days, weeks = grid.shape
        max_height = MAX_TIER_HEIGHT + self.config.base_height if max_count > 0 else 0.0
        bounds = calculate_bounds(
            weeks, days, max_height, rotation_angle, self.config.cell_size, self.config.padding
        )

        logger.debug(
            "Built terrain scene",
            weeks=weeks,
            max_count=max_count,
            primitives=len(primitives),
            width=bounds.width,
            height=bounds.height,
        )
        return TerrainScene(grid, field, faces, primitives, bounds, max_count)

    def generate_svg(
        self,
        records: Iterable[ActivityRecord],
        user_name: str,
        rotation_angle: Optional[float] = None,
        include_credit: Optional[bool] = None,
        contours_enabled: Optional[bool] = None,
    ) -> str:
        """
        Render a calendar to an SVG document.

        Args:
            records: Activity records
            user_name: Name shown in the title block
            rotation_angle: Camera rotation in degrees (config default if None)
            include_credit: Attribution line (config default if None)
            contours_enabled: Overlay contour lines (config default if None)

        Returns:
            SVG document text
        """
        if include_credit is None:
            include_credit = self.config.include_credit

        scene = self.build_scene(records, rotation_angle, contours_enabled)
        composer = SvgComposer(include_credit=include_credit, credit_text=self.config.credit_text)
        return composer.compose(scene.primitives, scene.bounds, user_name, scene.max_count > 0)
