"""Regex railroad diagrams - parse a pattern and lay it out as drawing primitives."""

from .errors import PatternSyntaxError
from .layout import LayoutConfig, LayoutEngine, Palette, layout
from .models import Arrowhead, BoundingBox, Box, DashedFrame, Diagram, Path, TextLabel, Vec2
from .parser import parse

__version__ = "0.1.0"

__all__ = [
    "Arrowhead",
    "BoundingBox",
    "Box",
    "DashedFrame",
    "Diagram",
    "LayoutConfig",
    "LayoutEngine",
    "Palette",
    "Path",
    "PatternSyntaxError",
    "TextLabel",
    "Vec2",
    "layout",
    "parse",
]
