"""
Isometric contribution terrain rendering.

Turns a day-by-week activity calendar into a lit, depth-sorted 3D terrain
rendered as a static SVG document, or as isometric bar columns.
"""

from .core import ActivityRecord, GraphConfig, GraphSvgGenerator, TerrainConfig, TerrainSvgGenerator

__version__ = "0.1.0"

__all__ = ["ActivityRecord", "GraphConfig", "GraphSvgGenerator", "TerrainConfig", "TerrainSvgGenerator", "__version__"]
