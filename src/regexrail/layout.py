"""Layout engine for railroad diagrams of regular expressions."""

from dataclasses import dataclass
from typing import Optional

from .ast import (
    AnchorEnd,
    AnchorStart,
    AnyChar,
    CharClass,
    ClassItem,
    ClassRange,
    Choice,
    Empty,
    Escape,
    Group,
    GroupKind,
    Literal,
    Node,
    OneOrMore,
    Repeat,
    Sequence,
    ZeroOrMore,
)
from .ast import Optional as OptionalNode
from .models import (
    Arrowhead,
    BoundingBox,
    Box,
    DashedFrame,
    Diagram,
    Direction,
    Path,
    Primitive,
    TextAnchor,
    TextLabel,
    Vec2,
    text_width,
)


@dataclass
class LayoutConfig:
    """Fixed metrics and spacing (SVG user units, y grows downward)."""

    # Typography
    FONT_SIZE: float = 14.0
    LABEL_FONT_SIZE: float = 11.0  # Captions above the track

    # Terminal boxes
    BOX_PADDING: float = 12.0  # Horizontal padding on each side of a label
    BOX_HEIGHT: float = 32.0
    BOX_RADIUS: float = 6.0
    LINE_WIDTH: float = 2.0

    # Spacing
    SPACING: float = 20.0  # Gap after every element on the track
    CLASS_ITEM_GAP: float = 5.0  # Gap between char-class item boxes
    CHOICE_SPACING: float = 60.0  # Vertical distance between branches
    BRANCH_OFFSET: float = 40.0  # Horizontal room for diverging curves
    CURVE_PULL: float = 20.0  # Control point distance on branch curves

    # Repetition
    BYPASS_HEIGHT: float = 40.0  # Bypass runs this far above the track
    LOOP_HEIGHT: float = 50.0  # Loop-back runs this far below the track
    LOOP_OVERHANG: float = 10.0
    ARROW_SIZE: float = 6.0

    # Captions (baseline distance above the track)
    CLASS_LABEL_OFFSET: float = 32.0
    REPEAT_LABEL_OFFSET: float = 25.0
    GROUP_LABEL_OFFSET: float = 60.0

    # Groups
    GROUP_PADDING: float = 15.0

    # Where the track starts
    ORIGIN_X: float = 20.0
    ORIGIN_Y: float = 100.0


@dataclass
class Palette:
    """Fill and stroke colors per element kind."""

    LITERAL: str = "#dae9e5"
    LITERAL_STROKE: str = "#6b9080"
    ESCAPE: str = "#bada55"
    ESCAPE_STROKE: str = "#769b3b"
    CHARSET: str = "#cbdadb"
    CHARSET_STROKE: str = "#88a5b0"
    ANCHOR: str = "#f5e6d3"
    ANCHOR_STROKE: str = "#c9a66b"
    GROUP_STROKE: str = "#999"
    PATH: str = "#000"
    TEXT: str = "#000"


ESCAPE_LABELS: dict[str, str] = {
    "\\d": "digit 0-9",
    "\\D": "not digit",
    "\\w": "word character",
    "\\W": "not word character",
    "\\s": "whitespace",
    "\\S": "not whitespace",
    "\\b": "word boundary",
    "\\B": "not word boundary",
    "\\n": "line feed",
    "\\r": "carriage return",
    "\\t": "tab",
    "\\0": "null",
}


def escape_label(sequence: str) -> str:
    """Human-readable label for an escape; unknown escapes are shown as typed."""
    return ESCAPE_LABELS.get(sequence, sequence)


def class_item_label(item: ClassItem) -> str:
    """Box label for one char-class member."""
    if isinstance(item, ClassRange):
        return f"{item.start}-{item.end}"
    if isinstance(item, Escape):
        return item.sequence
    return item.char


def group_marker(kind: GroupKind) -> str:
    """Caption for a group; capturing groups have none."""
    if kind == GroupKind.CAPTURING:
        return ""
    return f"({kind.prefix})"


def calculate_box_width(label: str, config: LayoutConfig) -> float:
    """Width of a terminal box: label width plus padding on both sides."""
    return text_width(label, config.FONT_SIZE) + 2 * config.BOX_PADDING


@dataclass(frozen=True)
class Cursor:
    """Current drawing position: x advances along the track, y is the track line."""

    x: float
    y: float

    def at(self, x: float) -> "Cursor":
        return Cursor(x, self.y)


class LayoutEngine:
    """
    Lays an AST out left to right in a single pass.

    Every handler takes the cursor where its node starts and the primitive
    list to append to, and returns the cursor where the next node starts.
    The engine itself holds configuration only, so one instance can serve
    any number of concurrent ``layout`` calls.
    """

    def __init__(self, config: Optional[LayoutConfig] = None, palette: Optional[Palette] = None):
        self.config = config or LayoutConfig()
        self.palette = palette or Palette()

    def layout(self, node: Node) -> Diagram:
        """Lay out a whole pattern and compute its bounding box."""
        primitives: list[Primitive] = []
        self.layout_node(node, Cursor(self.config.ORIGIN_X, self.config.ORIGIN_Y), primitives)
        bounds = BoundingBox.of(primitives) or BoundingBox()
        return Diagram(primitives=primitives, bounds=bounds)

    def layout_node(self, node: Node, cursor: Cursor, out: list[Primitive]) -> Cursor:
        """Render one node at ``cursor`` and return the cursor after it."""
        if isinstance(node, Literal):
            return self._terminal(f'"{node.char}"', self.palette.LITERAL, self.palette.LITERAL_STROKE, cursor, out)
        if isinstance(node, Escape):
            return self._terminal(
                escape_label(node.sequence), self.palette.ESCAPE, self.palette.ESCAPE_STROKE, cursor, out
            )
        if isinstance(node, AnyChar):
            return self._terminal("any character", self.palette.ESCAPE, self.palette.ESCAPE_STROKE, cursor, out)
        if isinstance(node, AnchorStart):
            return self._terminal("start of line", self.palette.ANCHOR, self.palette.ANCHOR_STROKE, cursor, out)
        if isinstance(node, AnchorEnd):
            return self._terminal("end of line", self.palette.ANCHOR, self.palette.ANCHOR_STROKE, cursor, out)
        if isinstance(node, CharClass):
            return self._char_class(node, cursor, out)
        if isinstance(node, Sequence):
            for item in node.items:
                cursor = self.layout_node(item, cursor, out)
            return cursor
        if isinstance(node, Choice):
            return self._choice(node, cursor, out)
        if isinstance(node, OptionalNode):
            return self._optional(node, cursor, out)
        if isinstance(node, ZeroOrMore):
            return self._zero_or_more(node, cursor, out)
        if isinstance(node, OneOrMore):
            return self._one_or_more(node, cursor, out)
        if isinstance(node, Repeat):
            return self._repeat(node, cursor, out)
        if isinstance(node, Group):
            return self._group(node, cursor, out)
        if isinstance(node, Empty):
            return cursor
        raise TypeError(f"Cannot lay out {type(node).__name__}")

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def _box(self, x: float, y: float, width: float, label: str, fill: str, stroke: str) -> Box:
        # y is the track line; boxes are centered on it
        return Box(
            x=x,
            y=y - self.config.BOX_HEIGHT / 2,
            width=width,
            height=self.config.BOX_HEIGHT,
            corner_radius=self.config.BOX_RADIUS,
            label=label,
            font_size=self.config.FONT_SIZE,
            fill=fill,
            stroke=stroke,
            stroke_width=self.config.LINE_WIDTH,
        )

    def _terminal(self, label: str, fill: str, stroke: str, cursor: Cursor, out: list[Primitive]) -> Cursor:
        width = calculate_box_width(label, self.config)
        out.append(self._box(cursor.x, cursor.y, width, label, fill, stroke))
        return cursor.at(cursor.x + width + self.config.SPACING)

    def _char_class(self, node: CharClass, cursor: Cursor, out: list[Primitive]) -> Cursor:
        config = self.config
        prefix = "None of:" if node.negated else "One of:"
        labels = [class_item_label(item) for item in node.items]
        widths = [text_width(label, config.FONT_SIZE) + config.BOX_PADDING for label in labels]

        items_width = sum(widths) + config.CLASS_ITEM_GAP * max(0, len(widths) - 1)
        total_width = max(text_width(prefix, config.FONT_SIZE) + 2 * config.BOX_PADDING, items_width)

        out.append(
            TextLabel(
                x=cursor.x + total_width / 2,
                y=cursor.y - config.CLASS_LABEL_OFFSET,
                text=prefix,
                font_size=config.LABEL_FONT_SIZE,
                anchor=TextAnchor.MIDDLE,
                fill=self.palette.TEXT,
            )
        )

        item_x = cursor.x
        for label, width in zip(labels, widths):
            out.append(self._box(item_x, cursor.y, width, label, self.palette.CHARSET, self.palette.CHARSET_STROKE))
            item_x += width + config.CLASS_ITEM_GAP

        return cursor.at(cursor.x + total_width + config.SPACING)

    # ------------------------------------------------------------------
    # Alternation
    # ------------------------------------------------------------------

    def _choice(self, node: Choice, cursor: Cursor, out: list[Primitive]) -> Cursor:
        config = self.config
        count = len(node.alternatives)

        branches: list[tuple[Cursor, float]] = []  # (branch entry, branch end x)
        max_width = 0.0
        for i, alternative in enumerate(node.alternatives):
            offset = (i - (count - 1) / 2) * config.CHOICE_SPACING
            entry = Cursor(cursor.x + config.BRANCH_OFFSET, cursor.y + offset)
            end = self.layout_node(alternative, entry, out)
            branches.append((entry, end.x))
            max_width = max(max_width, end.x - cursor.x)

        exit_x = cursor.x + max_width
        pull = config.CURVE_PULL
        for entry, end_x in branches:
            if entry.y == cursor.y:
                out.append(self._line(Vec2(cursor.x, cursor.y), Vec2(entry.x, entry.y)))
                out.append(self._line(Vec2(end_x, entry.y), Vec2(exit_x, cursor.y)))
                continue

            out.append(
                self._curve(
                    Vec2(cursor.x, cursor.y),
                    Vec2(cursor.x + pull, cursor.y),
                    Vec2(cursor.x + pull, entry.y),
                    Vec2(entry.x, entry.y),
                )
            )
            out.append(
                self._curve(
                    Vec2(end_x, entry.y),
                    Vec2(exit_x - pull, entry.y),
                    Vec2(exit_x - pull, cursor.y),
                    Vec2(exit_x, cursor.y),
                )
            )

        return cursor.at(exit_x + config.SPACING)

    # ------------------------------------------------------------------
    # Repetition
    # ------------------------------------------------------------------

    def _optional(self, node: OptionalNode, cursor: Cursor, out: list[Primitive]) -> Cursor:
        end = self.layout_node(node.item, cursor.at(cursor.x + self.config.BRANCH_OFFSET), out)
        out.append(self._bypass(cursor.x, end.x, cursor.y))
        return end

    def _zero_or_more(self, node: ZeroOrMore, cursor: Cursor, out: list[Primitive]) -> Cursor:
        item_x = cursor.x + self.config.BRANCH_OFFSET
        end = self.layout_node(node.item, cursor.at(item_x), out)
        out.append(self._bypass(cursor.x, end.x, cursor.y))
        self._loop(item_x, end.x, cursor.y, out)
        return end

    def _one_or_more(self, node: OneOrMore, cursor: Cursor, out: list[Primitive]) -> Cursor:
        end = self.layout_node(node.item, cursor, out)
        self._loop(cursor.x, end.x, cursor.y, out)
        return end

    def _repeat(self, node: Repeat, cursor: Cursor, out: list[Primitive]) -> Cursor:
        out.append(
            TextLabel(
                x=cursor.x,
                y=cursor.y - self.config.REPEAT_LABEL_OFFSET,
                text=node.quantifier,
                font_size=self.config.LABEL_FONT_SIZE,
                anchor=TextAnchor.START,
                fill=self.palette.TEXT,
            )
        )
        return self.layout_node(node.item, cursor, out)

    def _bypass(self, start_x: float, end_x: float, y: float) -> Path:
        """Curve over the item: up from the entry, across, and back down at the exit."""
        top = y - self.config.BYPASS_HEIGHT
        pull = self.config.CURVE_PULL
        return self._curve(
            Vec2(start_x, y),
            Vec2(start_x + pull, y),
            Vec2(start_x + pull, top),
            Vec2(start_x + self.config.BRANCH_OFFSET, top),
            Vec2(end_x - pull, top),
            Vec2(end_x - pull, y),
            Vec2(end_x, y),
        )

    def _loop(self, start_x: float, end_x: float, y: float, out: list[Primitive]) -> None:
        """Curve under the item from its exit back to its entry, with an arrowhead."""
        bottom = y + self.config.LOOP_HEIGHT
        overhang = self.config.LOOP_OVERHANG
        out.append(
            self._curve(
                Vec2(end_x, y),
                Vec2(end_x + overhang, y),
                Vec2(end_x + overhang, bottom),
                Vec2(start_x, bottom),
                Vec2(start_x - overhang, bottom),
                Vec2(start_x - overhang, y),
                Vec2(start_x, y),
            )
        )
        out.append(
            Arrowhead(
                x=start_x + overhang,
                y=bottom,
                direction=Direction.LEFT,
                size=self.config.ARROW_SIZE,
                fill=self.palette.PATH,
            )
        )

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def _group(self, node: Group, cursor: Cursor, out: list[Primitive]) -> Cursor:
        config = self.config
        mark = len(out)

        marker = group_marker(node.kind)
        if marker:
            out.append(
                TextLabel(
                    x=cursor.x + config.GROUP_PADDING,
                    y=cursor.y - config.GROUP_LABEL_OFFSET,
                    text=marker,
                    font_size=config.LABEL_FONT_SIZE,
                    anchor=TextAnchor.START,
                    fill=self.palette.TEXT,
                )
            )

        start_x = cursor.x + config.GROUP_PADDING
        end = self.layout_node(node.content, cursor.at(start_x), out)

        # Enclose the track band plus everything the content drew, loops included
        extent = BoundingBox(
            min_x=start_x,
            min_y=cursor.y - config.BOX_HEIGHT / 2,
            max_x=end.x,
            max_y=cursor.y + config.BOX_HEIGHT / 2,
        )
        content = BoundingBox.of(out[mark:])
        if content is not None:
            extent = extent.union(content)
        frame = extent.expand(config.GROUP_PADDING)

        out.append(
            DashedFrame(
                x=frame.min_x,
                y=frame.min_y,
                width=frame.width,
                height=frame.height,
                stroke=self.palette.GROUP_STROKE,
                stroke_width=config.LINE_WIDTH,
            )
        )

        return cursor.at(frame.max_x + config.SPACING)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _line(self, *points: Vec2) -> Path:
        return Path(points=points, curved=False, stroke=self.palette.PATH, stroke_width=self.config.LINE_WIDTH)

    def _curve(self, *points: Vec2) -> Path:
        return Path(points=points, curved=True, stroke=self.palette.PATH, stroke_width=self.config.LINE_WIDTH)


def layout(node: Node, config: Optional[LayoutConfig] = None, palette: Optional[Palette] = None) -> Diagram:
    """Convenience function: lay out an AST with the given (or default) settings."""
    return LayoutEngine(config, palette).layout(node)
