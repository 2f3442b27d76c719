"""Canonical pattern text for an AST."""

from __future__ import annotations

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
    Literal,
    Node,
    OneOrMore,
    Optional,
    Repeat,
    Sequence,
    ZeroOrMore,
)


def to_pattern(node: Node) -> str:
    """Serialize an AST back to pattern text that parses to the same AST."""
    if isinstance(node, Literal):
        return node.char
    if isinstance(node, Escape):
        return node.sequence
    if isinstance(node, AnyChar):
        return "."
    if isinstance(node, AnchorStart):
        return "^"
    if isinstance(node, AnchorEnd):
        return "$"
    if isinstance(node, CharClass):
        caret = "^" if node.negated else ""
        return f"[{caret}{''.join(_class_item(i) for i in node.items)}]"
    if isinstance(node, Sequence):
        return "".join(to_pattern(item) for item in node.items)
    if isinstance(node, Choice):
        return "|".join(to_pattern(alt) for alt in node.alternatives)
    if isinstance(node, Optional):
        return to_pattern(node.item) + "?"
    if isinstance(node, ZeroOrMore):
        return to_pattern(node.item) + "*"
    if isinstance(node, OneOrMore):
        return to_pattern(node.item) + "+"
    if isinstance(node, Repeat):
        return to_pattern(node.item) + node.quantifier
    if isinstance(node, Group):
        return f"({node.kind.prefix}{to_pattern(node.content)})"
    if isinstance(node, Empty):
        return ""
    raise TypeError(f"Cannot serialize {type(node).__name__}")


def _class_item(item: ClassItem) -> str:
    if isinstance(item, ClassRange):
        return f"{item.start}-{item.end}"
    if isinstance(item, Escape):
        return item.sequence
    return item.char
