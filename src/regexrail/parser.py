"""Pattern parser - converts a regular-expression string into an AST."""

from __future__ import annotations

from .ast import (
    AnchorEnd,
    AnchorStart,
    AnyChar,
    CharClass,
    ClassItem,
    ClassRange,
    Escape,
    Group,
    GroupKind,
    Literal,
    Node,
    OneOrMore,
    Optional,
    Repeat,
    ZeroOrMore,
    make_choice,
    make_sequence,
)
from .errors import PatternSyntaxError


class Parser:
    """Recursive descent parser over a cursor offset into the pattern."""

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._pos = 0
        self._depth = 0  # Open groups around the cursor

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str | None:
        idx = self._pos + offset
        if idx < len(self._pattern):
            return self._pattern[idx]
        return None

    def _at_end(self) -> bool:
        return self._pos >= len(self._pattern)

    def _advance(self) -> str:
        ch = self._pattern[self._pos]
        self._pos += 1
        return ch

    def _startswith(self, text: str) -> bool:
        return self._pattern.startswith(text, self._pos)

    # ------------------------------------------------------------------
    # Alternation / sequence
    # ------------------------------------------------------------------

    def parse(self) -> Node:
        node = self._parse_alternation()
        if not self._at_end():
            # The only thing that stops a top-level alternation early is ')'
            raise self._error("unexpected ')'")
        return node

    def _parse_alternation(self) -> Node:
        alternatives = [self._parse_sequence()]
        while self._peek() == "|":
            self._advance()
            alternatives.append(self._parse_sequence())
        return make_choice(alternatives)

    def _parse_sequence(self) -> Node:
        items: list[Node] = []
        while not self._at_end() and self._peek() not in _SEQUENCE_STOP:
            items.append(self._parse_item())
        return make_sequence(items)

    # ------------------------------------------------------------------
    # Items and atoms
    # ------------------------------------------------------------------

    def _parse_item(self) -> Node:
        atom = self._parse_atom()

        ch = self._peek()
        if ch == "*":
            self._advance()
            return ZeroOrMore(atom)
        if ch == "+":
            self._advance()
            return OneOrMore(atom)
        if ch == "?":
            self._advance()
            return Optional(atom)
        if ch == "{":
            return Repeat(atom, self._parse_brace_quantifier())
        return atom

    def _parse_atom(self) -> Node:
        ch = self._peek()

        if ch == "(":
            return self._parse_group()
        if ch == "[":
            return self._parse_char_class()
        if ch == "\\":
            return self._parse_escape()

        self._advance()
        if ch == ".":
            return AnyChar()
        if ch == "^":
            return AnchorStart()
        if ch == "$":
            return AnchorEnd()
        # Anything else, including a quantifier with nothing to quantify
        return Literal(ch)

    def _parse_escape(self) -> Escape:
        self._advance()  # consume '\'
        if self._at_end():
            raise self._error("unexpected end of input after '\\'")
        return Escape("\\" + self._advance())

    def _parse_brace_quantifier(self) -> str:
        start = self._pos
        self._advance()  # consume '{'
        while not self._at_end() and self._peek() != "}":
            self._advance()
        if self._at_end():
            raise self._error("unterminated quantifier")
        self._advance()  # consume '}'
        return self._pattern[start : self._pos]

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def _parse_group(self) -> Group:
        if self._depth >= MAX_NESTING:
            raise self._error("nesting too deep")
        self._advance()  # consume '('
        kind = self._parse_group_prefix()

        self._depth += 1
        content = self._parse_alternation()
        self._depth -= 1

        if self._at_end():
            raise self._error("unterminated group")
        self._advance()  # consume ')'
        return Group(content, kind)

    def _parse_group_prefix(self) -> GroupKind:
        # Longest prefixes first so '?<=' is not read as an unknown '?<'
        for prefix, kind in _GROUP_PREFIXES:
            if self._startswith(prefix):
                self._pos += len(prefix)
                return kind
        return GroupKind.CAPTURING

    # ------------------------------------------------------------------
    # Character classes
    # ------------------------------------------------------------------

    def _parse_char_class(self) -> CharClass:
        self._advance()  # consume '['
        negated = self._peek() == "^"
        if negated:
            self._advance()

        items: list[ClassItem] = []
        # A ']' right after the opening bracket is a literal member
        if self._peek() == "]":
            items.append(Literal(self._advance()))

        while not self._at_end() and self._peek() != "]":
            items.append(self._parse_class_item())

        if self._at_end():
            raise self._error("unterminated character class")
        self._advance()  # consume ']'
        return CharClass(tuple(items), negated)

    def _parse_class_item(self) -> ClassItem:
        if self._peek() == "\\":
            self._advance()
            if self._at_end():
                raise self._error("unterminated character class")
            return Escape("\\" + self._advance())

        end = self._peek(2)
        if self._peek(1) == "-" and end is not None and end not in _RANGE_END_STOP:
            start = self._advance()
            self._advance()  # consume '-'
            self._advance()
            return ClassRange(start, end)

        return Literal(self._advance())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, message: str) -> PatternSyntaxError:
        return PatternSyntaxError(message, self._pos, self._pattern)


# Module-level constants
MAX_NESTING = 100  # Deepest group nesting; keeps every recursive walk inside the stack limit
_SEQUENCE_STOP: frozenset[str] = frozenset({"|", ")"})
_RANGE_END_STOP: frozenset[str] = frozenset({"]", "\\"})
_GROUP_PREFIXES: tuple[tuple[str, GroupKind], ...] = (
    ("?<=", GroupKind.LOOKBEHIND),
    ("?<!", GroupKind.NEGATIVE_LOOKBEHIND),
    ("?:", GroupKind.NON_CAPTURING),
    ("?=", GroupKind.LOOKAHEAD),
    ("?!", GroupKind.NEGATIVE_LOOKAHEAD),
)


def parse(pattern: str) -> Node:
    """Convenience function: parse a pattern string and return its AST."""
    return Parser(pattern).parse()
