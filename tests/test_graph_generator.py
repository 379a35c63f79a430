"""Tests for the isometric bar graph renderer."""

import xml.etree.ElementTree as ET

import numpy as np
import pytest
from contrib_terrain.core.graph_generator import (
    GRAPH_TITLE,
    IDLE_TILE_COLOR,
    GraphConfig,
    GraphSvgGenerator,
    ambient_occlusion,
    graph_color,
    stroke_color,
)
from contrib_terrain.core.height_field import ActivityRecord
from contrib_terrain.core.lighting import shade_color
from contrib_terrain.core.projection import calculate_bounds
from contrib_terrain.github.sample import generate_sample_data, generate_zero_contributions

SVG_NS = "{http://www.w3.org/2000/svg}"


def with_counts(records, counts):
    """Replace the counts of selected (weekday, week) cells."""
    return [
        ActivityRecord(r.date, counts.get((r.weekday, r.week_index), r.count), r.weekday, r.week_index)
        for r in records
    ]


@pytest.fixture
def generator():
    return GraphSvgGenerator()


class TestPalette:
    """Test count and brightness color tables."""

    @pytest.mark.parametrize("count, color", [
        (0, IDLE_TILE_COLOR),
        (1, "#9be9a8"),
        (3, "#40c463"),
        (4, "#30a14e"),
        (6, "#30a14e"),
        (12, "#216e39"),
        (13, "#0d4429"),
    ])
    def test_graph_color(self, count, color):
        assert graph_color(count) == color

    def test_stroke_darkens_with_brightness(self):
        assert stroke_color(1.0) == "#2a2a2a"
        assert stroke_color(0.7) == "#333333"
        assert stroke_color(0.5) == "#404040"
        assert stroke_color(0.2) == "#4a4a4a"


class TestAmbientOcclusion:
    """Test neighbor shadowing."""

    def test_isolated_column(self):
        """A lone column is not occluded."""
        grid = np.zeros((7, 5), dtype=np.int64)
        grid[3, 2] = 4
        assert ambient_occlusion(grid, 3, 2) == {"top": 0.0, "right": 0.0, "left": 0.0}

    def test_neighbors_shadow(self):
        """Taller neighbors on a side shadow that side, capped at 1."""
        grid = np.zeros((7, 5), dtype=np.int64)
        grid[3, 2] = 1
        grid[3, 3] = 6
        grid[2, 2] = 100

        occlusion = ambient_occlusion(grid, 3, 2)
        assert occlusion["right"] == pytest.approx(6 / 2 / 15)
        assert occlusion["top"] == pytest.approx(1.0)
        assert occlusion["left"] == 0.0

    def test_grid_edges_count_as_empty(self):
        """Cells on the border do not wrap around."""
        grid = np.ones((7, 3), dtype=np.int64)
        occlusion = ambient_occlusion(grid, 0, 0)
        assert occlusion["top"] == 0.0
        assert occlusion["left"] == 0.0
        assert occlusion["right"] == pytest.approx(2 / 2 / 15)


class TestGraphSvgGenerator:
    """Test the bar graph pipeline."""

    def test_all_zero_calendar(self, generator):
        """No activity renders one idle tile per day inside flat bounds."""
        scene = generator.build_scene(generate_zero_contributions(52))

        assert len(scene.primitives) == 7 * 52
        assert all(p.fill == IDLE_TILE_COLOR for p in scene.primitives)
        assert scene.bounds == calculate_bounds(52, 7, 0, -30.5, 20, 120)

    def test_single_column(self, generator):
        """An active day becomes four shaded faces drawn after the idle tiles."""
        records = with_counts(generate_zero_contributions(10), {(3, 4): 5})
        scene = generator.build_scene(records)

        assert len(scene.primitives) == 7 * 10 - 1 + 4
        left, right, front, top = scene.primitives[-4:]
        assert top.fill == shade_color("#30a14e", 1.0)
        assert left.fill == shade_color("#30a14e", 0.3 + 0.7 * 0.5)
        assert right.fill == shade_color("#30a14e", 0.3 + 0.7 * 0.75)
        assert front.fill == shade_color("#30a14e", 0.3 + 0.7 * 0.6)
        assert [p.stroke_width for p in (left, right, front, top)] == [0.6, 0.6, 0.5, 0.8]

    def test_column_height_follows_count(self, generator):
        """Top face rises count * height_scale + base_height above the footprint."""
        records = with_counts(generate_zero_contributions(4), {(0, 0): 2})
        left, _, _, top = generator.build_scene(records, rotation_angle=0).primitives[-4:]

        # left face points: base1, base4, top4, top1
        assert left.points[0].y - left.points[3].y == pytest.approx(2 * 12 + 4)
        assert top.points[0] == left.points[3]

    def test_bounds_cover_tallest_column(self, generator):
        records = with_counts(generate_zero_contributions(52), {(2, 20): 9})
        scene = generator.build_scene(records)

        assert scene.max_count == 9
        assert scene.bounds == calculate_bounds(52, 7, 9 * 12 + 4, -30.5, 20, 120)

    def test_columns_painted_in_diagonal_order(self, generator):
        """Nearer columns come later in the document."""
        records = with_counts(generate_zero_contributions(10), {(1, 1): 2, (5, 6): 2, (0, 0): 2})
        columns = generator.build_scene(records).primitives[-12:]
        tops = [columns[i] for i in (3, 7, 11)]

        assert [t.points[0].y for t in tops] == sorted(t.points[0].y for t in tops)

    def test_document(self, generator):
        """The graph document uses its own title and the shared layout."""
        svg = generator.generate_svg(generate_sample_data(seed=4), "octocat")
        root = ET.fromstring(svg.encode("utf-8"))

        assert root.find(f"{SVG_NS}title").text == f"{GRAPH_TITLE} for octocat"
        group = root.find(f"{SVG_NS}g")
        assert group.get("class") == "terrain-group"

    def test_empty_input(self, generator):
        svg = generator.generate_svg([], "nobody", include_credit=False)
        root = ET.fromstring(svg.encode("utf-8"))

        assert list(root.iter(f"{SVG_NS}polygon")) == []
        assert "generated by" not in svg

    def test_rotation_override(self):
        records = generate_sample_data(seed=8)
        generator = GraphSvgGenerator(GraphConfig(rotation_angle=10))

        assert generator.generate_svg(records, "u") != generator.generate_svg(records, "u", rotation_angle=-30.5)
