"""Tests for canonical pattern serialization."""

import pytest

from regexrail.ast import CharClass, ClassRange, Escape, Group, GroupKind, Literal, Repeat
from regexrail.parser import parse
from regexrail.unparse import to_pattern

PATTERNS = [
    "",
    "abc",
    "a|b|c",
    "^\\d{2,4}-\\w+$",
    "(?:|ged|gy)",
    "[^a-z0-9_\\-]",
    "[]a-]",
    "colou?r",
    "(a(b(c)*)+)?",
    "(?=x)(?!y)(?<=z)(?<!w)",
    "a{5,2}",
    "a**",
    "(?P<name>x)",
    "{x}",
    ".*?",
]


@pytest.mark.parametrize("pattern", PATTERNS)
def test_reparse_gives_same_tree(pattern: str) -> None:
    """Test that serializing and re-parsing is structurally stable."""
    ast = parse(pattern)
    assert parse(to_pattern(ast)) == ast


@pytest.mark.parametrize("pattern", PATTERNS)
def test_canonical_text_matches_input(pattern: str) -> None:
    """Test that accepted patterns are already in canonical form."""
    assert to_pattern(parse(pattern)) == pattern


def test_serialize_hand_built_tree() -> None:
    """Test serialization of a tree built without the parser."""
    tree = Repeat(
        Group(CharClass((ClassRange("a", "f"), Escape("\\d"), Literal("x")), negated=True), GroupKind.NON_CAPTURING),
        "{3}",
    )
    assert to_pattern(tree) == "(?:[^a-f\\dx]){3}"


def test_rejects_non_nodes() -> None:
    """Test that foreign objects are refused."""
    with pytest.raises(TypeError):
        to_pattern("abc")  # type: ignore[arg-type]
