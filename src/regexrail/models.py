"""Drawing primitives produced by the diagram layout engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Monospace glyph advance as a fraction of font size
CHAR_WIDTH_RATIO = 0.6


def text_width(text: str, font_size: float) -> float:
    """Estimated advance width of a single line of monospace text."""
    return len(text) * (font_size * CHAR_WIDTH_RATIO)


@dataclass
class Vec2:
    """2D vector for positions and control points."""

    x: float
    y: float


class TextAnchor(str, Enum):
    """Horizontal anchoring of a text label relative to its x coordinate."""

    START = "start"
    MIDDLE = "middle"
    END = "end"


class Direction(str, Enum):
    """Direction an arrowhead points."""

    LEFT = "left"
    RIGHT = "right"


class _Primitive(BaseModel):
    model_config = ConfigDict(frozen=True)


class Box(_Primitive):
    """Labeled terminal: a literal, escape or char-class item."""

    kind: Literal["box"] = "box"
    x: float  # Top-left corner
    y: float
    width: float
    height: float
    corner_radius: float
    label: str
    font_size: float
    fill: str
    stroke: str
    stroke_width: float

    def extent(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class TextLabel(_Primitive):
    """Free-floating caption such as "One of:" or a quantifier."""

    kind: Literal["text"] = "text"
    x: float
    y: float  # Baseline
    text: str
    font_size: float
    anchor: TextAnchor = TextAnchor.START
    fill: str = "#000"

    def extent(self) -> tuple[float, float, float, float]:
        width = text_width(self.text, self.font_size)
        if self.anchor == TextAnchor.MIDDLE:
            left = self.x - width / 2
        elif self.anchor == TextAnchor.END:
            left = self.x - width
        else:
            left = self.x
        # Ascent is roughly the font size, descent a quarter of it
        return (left, self.y - self.font_size, left + width, self.y + self.font_size * 0.25)


class Path(_Primitive):
    """
    Connector between two points of the track.

    A straight path is a polyline through ``points``. A curved path is a
    chain of cubic Bezier segments: ``points[0]`` is the start and every
    following triple is (control 1, control 2, end).
    """

    kind: Literal["path"] = "path"
    points: tuple[Vec2, ...]
    curved: bool = False
    stroke: str
    stroke_width: float

    @property
    def start(self) -> Vec2:
        return self.points[0]

    @property
    def end(self) -> Vec2:
        return self.points[-1]

    def extent(self) -> tuple[float, float, float, float]:
        # A cubic segment stays inside the hull of its control points
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))


class Arrowhead(_Primitive):
    """Small filled triangle whose tip sits at (x, y)."""

    kind: Literal["arrow"] = "arrow"
    x: float
    y: float
    direction: Direction
    size: float
    fill: str

    def extent(self) -> tuple[float, float, float, float]:
        return (self.x - self.size, self.y - self.size, self.x + self.size, self.y + self.size)


class DashedFrame(_Primitive):
    """Dashed rectangle drawn around a group's content."""

    kind: Literal["frame"] = "frame"
    x: float
    y: float
    width: float
    height: float
    stroke: str
    stroke_width: float

    def extent(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


Primitive = Annotated[
    Union[Box, TextLabel, Path, Arrowhead, DashedFrame],
    Field(discriminator="kind"),
]


def primitive_extent(primitive: Primitive) -> Optional[tuple[float, float, float, float]]:
    """(min_x, min_y, max_x, max_y) of a primitive, or None if it has no envelope."""
    if isinstance(primitive, Path) and not primitive.points:
        return None
    return primitive.extent()


class BoundingBox(BaseModel):
    """Axis-aligned extent of a diagram."""

    model_config = ConfigDict(frozen=True)

    min_x: float = 0
    min_y: float = 0
    max_x: float = 0
    max_y: float = 0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def expand(self, margin: float) -> "BoundingBox":
        """Return a copy grown by ``margin`` on every side."""
        return BoundingBox(
            min_x=self.min_x - margin,
            min_y=self.min_y - margin,
            max_x=self.max_x + margin,
            max_y=self.max_y + margin,
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
        )

    @classmethod
    def of(cls, primitives: Iterable[Primitive]) -> Optional["BoundingBox"]:
        """Union of the primitives' extents; None when none has an envelope."""
        extents = [e for e in map(primitive_extent, primitives) if e is not None]
        if not extents:
            return None
        return cls(
            min_x=min(e[0] for e in extents),
            min_y=min(e[1] for e in extents),
            max_x=max(e[2] for e in extents),
            max_y=max(e[3] for e in extents),
        )


class Diagram(BaseModel):
    """Complete layout result: what to draw and how much room it needs."""

    primitives: list[Primitive] = []
    bounds: BoundingBox = BoundingBox()

    def of_kind(self, kind: type) -> list:
        """Primitives of a given class, in draw order."""
        return [p for p in self.primitives if isinstance(p, kind)]
