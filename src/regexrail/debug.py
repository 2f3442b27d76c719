"""AST tree dump and statistics."""

from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import TextIO

from .ast import (
    CharClass,
    ClassRange,
    Choice,
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


def dump_ast(node: Node, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    _dump(node, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump(node: Node, depth: int, f: TextIO) -> None:
    name = type(node).__name__
    if isinstance(node, Literal):
        f.write(f"{_indent(depth)}Literal({node.char!r})\n")
    elif isinstance(node, Escape):
        f.write(f"{_indent(depth)}Escape({node.sequence!r})\n")
    elif isinstance(node, CharClass):
        negated = " negated" if node.negated else ""
        f.write(f"{_indent(depth)}CharClass{negated}\n")
        for item in node.items:
            if isinstance(item, ClassRange):
                f.write(f"{_indent(depth + 1)}Range({item.start!r}, {item.end!r})\n")
            else:
                _dump(item, depth + 1, f)
    elif isinstance(node, Sequence):
        f.write(f"{_indent(depth)}Sequence\n")
        for item in node.items:
            _dump(item, depth + 1, f)
    elif isinstance(node, Choice):
        f.write(f"{_indent(depth)}Choice\n")
        for alt in node.alternatives:
            _dump(alt, depth + 1, f)
    elif isinstance(node, Repeat):
        f.write(f"{_indent(depth)}Repeat {node.quantifier}\n")
        _dump(node.item, depth + 1, f)
    elif isinstance(node, (Optional, ZeroOrMore, OneOrMore)):
        f.write(f"{_indent(depth)}{name}\n")
        _dump(node.item, depth + 1, f)
    elif isinstance(node, Group):
        f.write(f"{_indent(depth)}Group {node.kind.value}\n")
        _dump(node.content, depth + 1, f)
    else:
        f.write(f"{_indent(depth)}{name}\n")


def children(node: Node) -> tuple[Node, ...]:
    """Direct child nodes (char-class members are not nodes of the tree)."""
    if isinstance(node, Sequence):
        return node.items
    if isinstance(node, Choice):
        return node.alternatives
    if isinstance(node, (Optional, ZeroOrMore, OneOrMore, Repeat)):
        return (node.item,)
    if isinstance(node, Group):
        return (node.content,)
    return ()


@dataclass
class AstStats:
    """Size summary of a parsed pattern."""

    nodes: int = 0
    depth: int = 0
    types: Counter = field(default_factory=Counter)


def ast_stats(node: Node) -> AstStats:
    """Count nodes, measure depth and tally node types."""
    stats = AstStats()
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        stats.nodes += 1
        stats.depth = max(stats.depth, depth)
        stats.types[type(current).__name__] += 1
        stack.extend((child, depth + 1) for child in children(current))
    return stats
