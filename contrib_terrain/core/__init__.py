"""
Core terrain synthesis and rendering functionality.
"""

from .height_field import ActivityRecord, ContributionStats, build_grid, build_height_field, summarize
from .thresholds import QuartileThresholds, compute_thresholds, map_count_to_height_tier, map_count_to_color_tier
from .terrain_generator import TerrainConfig, TerrainSvgGenerator
from .graph_generator import GraphConfig, GraphSvgGenerator

__all__ = ['ActivityRecord', 'ContributionStats', 'build_grid', 'build_height_field', 'summarize',
           'QuartileThresholds', 'compute_thresholds', 'map_count_to_height_tier', 'map_count_to_color_tier',
           'TerrainConfig', 'TerrainSvgGenerator', 'GraphConfig', 'GraphSvgGenerator']
