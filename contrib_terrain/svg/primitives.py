"""
Typed scene primitives.

The renderer emits these in final paint order; they are turned into SVG
markup only by the composer.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..core.projection import ProjectedPoint


@dataclass(frozen=True)
class Polygon:
    """Filled screen-space polygon."""

    points: Tuple[ProjectedPoint, ...]
    fill: str
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    opacity: Optional[float] = None


@dataclass(frozen=True)
class Line:
    """Stroked screen-space line segment."""

    start: ProjectedPoint
    end: ProjectedPoint
    stroke: str
    stroke_width: float = 0.8
    opacity: float = 0.6


Primitive = Union[Polygon, Line]
