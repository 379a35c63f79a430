"""Tests for SVG document composition."""

import re
import xml.etree.ElementTree as ET

import pytest
from contrib_terrain.core.projection import Bounds, ProjectedPoint
from contrib_terrain.svg.composer import SvgComposer, DEFAULT_CREDIT, fmt
from contrib_terrain.svg.primitives import Line, Polygon

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def bounds():
    return Bounds(width=800.5, height=400.25)


@pytest.fixture
def polygon():
    return Polygon(
        points=(ProjectedPoint(1, 2), ProjectedPoint(3.5, 4.25), ProjectedPoint(5.004, -6)),
        fill="rgb(10, 20, 30)",
    )


class TestSvgComposer:
    """Test document structure and formatting."""

    def test_document_header(self, bounds):
        """Output is a standalone SVG with declaration, title and description."""
        svg = SvgComposer().compose([], bounds, "octocat", has_activity=False)

        assert svg.startswith("<?xml")
        root = ET.fromstring(svg.encode("utf-8"))
        assert root.tag == f"{SVG_NS}svg"
        assert root.find(f"{SVG_NS}title").text == "GitHub Contribution Terrain for octocat"
        assert root.find(f"{SVG_NS}desc") is not None

    def test_custom_title(self, bounds):
        """Title and description can be replaced per renderer."""
        composer = SvgComposer(title="GitHub Contribution Graph", description="bars")
        root = ET.fromstring(composer.compose([], bounds, "octocat", False).encode("utf-8"))

        assert root.find(f"{SVG_NS}title").text == "GitHub Contribution Graph for octocat"
        assert root.find(f"{SVG_NS}desc").text == "bars"
        assert [t.text for t in root.iter(f"{SVG_NS}text")][0] == "GitHub Contribution Graph"

    def test_size_and_viewbox(self, bounds):
        """Width, height and viewBox follow the bounds."""
        root = ET.fromstring(SvgComposer().compose([], bounds, "u", False).encode("utf-8"))

        assert float(root.get("width")) == pytest.approx(800.5)
        assert float(root.get("height")) == pytest.approx(400.25)
        assert [float(v) for v in re.split(r"[ ,]+", root.get("viewBox"))] == [0, 0, 800.5, 400.25]

    def test_polygon_formatting(self, bounds, polygon):
        """Coordinates use two decimals and fills pass through."""
        svg = SvgComposer().compose([polygon], bounds, "u", True)

        assert 'points="1.00,2.00 3.50,4.25 5.00,-6.00"' in svg
        assert 'fill="rgb(10, 20, 30)"' in svg

    def test_base_tile_attributes(self, bounds):
        """Optional stroke and opacity attributes are written when set."""
        tile = Polygon(
            points=(ProjectedPoint(0, 0), ProjectedPoint(1, 0), ProjectedPoint(1, 1)),
            fill="rgb(1, 2, 3)", stroke="#5a6268", stroke_width=0.1, opacity=0.9,
        )
        root = ET.fromstring(SvgComposer().compose([tile], bounds, "u", True).encode("utf-8"))
        element = next(root.iter(f"{SVG_NS}polygon"))

        assert element.get("stroke") == "#5a6268"
        assert float(element.get("stroke-width")) == pytest.approx(0.1)
        assert float(element.get("opacity")) == pytest.approx(0.9)

    def test_line_formatting(self, bounds):
        """Contour lines keep their stroke styling."""
        line = Line(ProjectedPoint(1, 2), ProjectedPoint(3.333, 4), stroke="#959da5")
        root = ET.fromstring(SvgComposer().compose([line], bounds, "u", True).encode("utf-8"))
        element = next(root.iter(f"{SVG_NS}line"))

        assert element.get("x1") == "1.00"
        assert element.get("x2") == "3.33"
        assert element.get("stroke") == "#959da5"
        assert float(element.get("stroke-width")) == pytest.approx(0.8)

    def test_primitive_order_preserved(self, bounds):
        """Primitives appear in the group in the given order."""
        shapes = [
            Polygon(points=(ProjectedPoint(i, i),) * 3, fill=f"rgb({i}, {i}, {i})")
            for i in range(5)
        ]
        root = ET.fromstring(SvgComposer().compose(shapes, bounds, "u", True).encode("utf-8"))
        fills = [p.get("fill") for p in root.iter(f"{SVG_NS}polygon")]

        assert fills == [s.fill for s in shapes]

    def test_group_class_only_with_activity(self, bounds):
        """The drop-shadow class is applied only when there is activity."""
        active = ET.fromstring(SvgComposer().compose([], bounds, "u", True).encode("utf-8"))
        idle = ET.fromstring(SvgComposer().compose([], bounds, "u", False).encode("utf-8"))

        assert active.find(f"{SVG_NS}g").get("class") == "terrain-group"
        assert idle.find(f"{SVG_NS}g").get("class") is None
        assert active.find(f"{SVG_NS}g").get("transform") == "translate(40, 80)"

    def test_credit_toggle(self, bounds):
        """The attribution line can be switched off."""
        with_credit = SvgComposer(include_credit=True).compose([], bounds, "u", False)
        without_credit = SvgComposer(include_credit=False).compose([], bounds, "u", False)

        assert DEFAULT_CREDIT in with_credit
        assert DEFAULT_CREDIT not in without_credit

    def test_user_name_escaped(self, bounds):
        """Markup in the user name is escaped."""
        svg = SvgComposer().compose([], bounds, "a<b&c", False)

        assert "a&lt;b&amp;c" in svg
        ET.fromstring(svg.encode("utf-8"))


def test_fmt():
    """Two decimal fixed formatting."""
    assert fmt(1) == "1.00"
    assert fmt(-0.125) in ("-0.12", "-0.13")
