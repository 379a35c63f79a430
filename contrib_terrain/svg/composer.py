"""
SVG document composition.

Serializes the ordered scene primitives together with the title block,
inline styles and optional credit line into a single standalone document.
"""

import io

import structlog
import svgwrite
from typing import Iterable

from ..core.projection import Bounds
from .primitives import Line, Polygon, Primitive

logger = structlog.get_logger()

TITLE = "GitHub Contribution Terrain"
DESCRIPTION = "3D isometric visualization of GitHub contributions with proper lighting and depth"
DEFAULT_CREDIT = "generated by github.com/eshahhh/contributions-terrain"
GROUP_OFFSET = (40, 80)

STYLE = """
      .title-text {
        font-family: 'Segoe UI', Arial, sans-serif;
        font-size: 18px;
        font-weight: 600;
        fill: #6e7781;
        text-shadow: 0 1px 2px rgba(0,0,0,0.1);
      }
      .subtitle-text {
        font-family: 'Segoe UI', Arial, sans-serif;
        font-size: 13px;
        fill: #6e7781;
        font-weight: 400;
      }
      .credit-text {
        font-family: 'Segoe UI', Arial, sans-serif;
        font-size: 8px;
        fill: #6e7781;
        opacity: 0.9;
      }
      .terrain-group {
        filter: drop-shadow(0 2px 4px rgba(0,0,0,0.1));
      }
"""


def fmt(value: float) -> str:
    """Fixed two-decimal coordinate formatting."""
    return f"{value:.2f}"


class SvgComposer:
    """
    Builds the final SVG document with svgwrite.

    Args:
        include_credit: Whether to add the attribution line bottom right
        credit_text: Attribution text
        title: Heading text, also used in the document title
        description: Document description
    """

    def __init__(
        self,
        include_credit: bool = True,
        credit_text: str = DEFAULT_CREDIT,
        title: str = TITLE,
        description: str = DESCRIPTION,
    ):
        self.include_credit = include_credit
        self.credit_text = credit_text
        self.title = title
        self.description = description

    def _element(self, dwg: svgwrite.Drawing, primitive: Primitive):
        if isinstance(primitive, Polygon):
            attrs = {"fill": primitive.fill}
            if primitive.stroke is not None:
                attrs["stroke"] = primitive.stroke
            if primitive.stroke_width is not None:
                attrs["stroke_width"] = primitive.stroke_width
            if primitive.opacity is not None:
                attrs["opacity"] = primitive.opacity
            points = [(fmt(p.x), fmt(p.y)) for p in primitive.points]
            return dwg.polygon(points=points, **attrs)
        if isinstance(primitive, Line):
            return dwg.line(
                start=(fmt(primitive.start.x), fmt(primitive.start.y)),
                end=(fmt(primitive.end.x), fmt(primitive.end.y)),
                stroke=primitive.stroke,
                stroke_width=primitive.stroke_width,
                opacity=primitive.opacity,
            )
        raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")

    def compose(
        self,
        primitives: Iterable[Primitive],
        bounds: Bounds,
        user_name: str,
        has_activity: bool,
    ) -> str:
        """
        Serialize primitives into a complete SVG document.

        Args:
            primitives: Shapes in final paint order
            bounds: Document width and height
            user_name: Name shown in the title block
            has_activity: Enables the drop-shadow group style

        Returns:
            SVG document text including the XML declaration
        """
        dwg = svgwrite.Drawing(size=(bounds.width, bounds.height), profile="full", debug=False)
        dwg.viewbox(0, 0, bounds.width, bounds.height)
        dwg.set_desc(title=f"{self.title} for {user_name}", desc=self.description)
        dwg.defs.add(dwg.style(STYLE))

        dwg.add(dwg.text(self.title, insert=(25, 35), class_="title-text"))
        dwg.add(dwg.text(user_name, insert=(25, 52), class_="subtitle-text"))

        group_attrs = {"transform": "translate({}, {})".format(*GROUP_OFFSET)}
        if has_activity:
            group_attrs["class_"] = "terrain-group"
        group = dwg.g(**group_attrs)
        count = 0
        for primitive in primitives:
            group.add(self._element(dwg, primitive))
            count += 1
        dwg.add(group)

        if self.include_credit:
            dwg.add(dwg.text(
                self.credit_text,
                insert=(bounds.width - 8, bounds.height - 8),
                class_="credit-text",
                text_anchor="end",
            ))

        buffer = io.StringIO()
        dwg.write(buffer)
        logger.debug("Composed SVG document", primitives=count, width=bounds.width, height=bounds.height)
        return buffer.getvalue()
