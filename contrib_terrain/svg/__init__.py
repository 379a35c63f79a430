"""
SVG scene primitives and document composition.
"""

from .primitives import Line, Polygon, Primitive
from .composer import SvgComposer

__all__ = ['Line', 'Polygon', 'Primitive', 'SvgComposer']
