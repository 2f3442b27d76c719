"""AST node types for parsed regular-expression patterns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class GroupKind(str, Enum):
    """Kinds of parenthesized groups."""

    CAPTURING = "capturing"  # (...)
    NON_CAPTURING = "non-capturing"  # (?:...)
    LOOKAHEAD = "lookahead"  # (?=...)
    NEGATIVE_LOOKAHEAD = "negative-lookahead"  # (?!...)
    LOOKBEHIND = "lookbehind"  # (?<=...)
    NEGATIVE_LOOKBEHIND = "negative-lookbehind"  # (?<!...)

    @property
    def prefix(self) -> str:
        """Text that follows '(' for this kind of group."""
        return _GROUP_PREFIXES[self]


_GROUP_PREFIXES = {
    GroupKind.CAPTURING: "",
    GroupKind.NON_CAPTURING: "?:",
    GroupKind.LOOKAHEAD: "?=",
    GroupKind.NEGATIVE_LOOKAHEAD: "?!",
    GroupKind.LOOKBEHIND: "?<=",
    GroupKind.NEGATIVE_LOOKBEHIND: "?<!",
}


@dataclass(frozen=True, slots=True)
class Literal:
    """A single non-special character."""

    char: str


@dataclass(frozen=True, slots=True)
class Escape:
    """Backslash escape, stored with its backslash (e.g. '\\d')."""

    sequence: str


@dataclass(frozen=True, slots=True)
class AnyChar:
    """The '.' metacharacter."""


@dataclass(frozen=True, slots=True)
class AnchorStart:
    """The '^' anchor."""


@dataclass(frozen=True, slots=True)
class AnchorEnd:
    """The '$' anchor."""


@dataclass(frozen=True, slots=True)
class ClassRange:
    """Two-endpoint range inside a character class, e.g. 'a-z'."""

    start: str
    end: str


@dataclass(frozen=True, slots=True)
class CharClass:
    """Bracketed character class."""

    items: tuple[Literal | Escape | ClassRange, ...]
    negated: bool = False


@dataclass(frozen=True, slots=True)
class Sequence:
    """Concatenation of two or more nodes."""

    items: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Choice:
    """Alternation; order is the branch draw order."""

    alternatives: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Optional:
    """'?' quantifier."""

    item: Node


@dataclass(frozen=True, slots=True)
class ZeroOrMore:
    """'*' quantifier."""

    item: Node


@dataclass(frozen=True, slots=True)
class OneOrMore:
    """'+' quantifier."""

    item: Node


@dataclass(frozen=True, slots=True)
class Repeat:
    """Brace quantifier; the braces are kept verbatim, e.g. '{2,5}'."""

    item: Node
    quantifier: str


@dataclass(frozen=True, slots=True)
class Group:
    """Parenthesized group."""

    content: Node
    kind: GroupKind = GroupKind.CAPTURING


@dataclass(frozen=True, slots=True)
class Empty:
    """Zero-width node, e.g. an empty alternative."""


ClassItem = Union[Literal, Escape, ClassRange]

Node = Union[
    Literal,
    Escape,
    AnyChar,
    AnchorStart,
    AnchorEnd,
    CharClass,
    Sequence,
    Choice,
    Optional,
    ZeroOrMore,
    OneOrMore,
    Repeat,
    Group,
    Empty,
]


def make_sequence(items: list[Node]) -> Node:
    """Collapse a run of items: none -> Empty, one -> the item itself."""
    if not items:
        return Empty()
    if len(items) == 1:
        return items[0]
    return Sequence(tuple(items))


def make_choice(alternatives: list[Node]) -> Node:
    """Collapse alternatives: a single alternative is returned unwrapped."""
    if len(alternatives) == 1:
        return alternatives[0]
    return Choice(tuple(alternatives))
