"""Tests for parser error messages and offsets."""

import pytest

from regexrail.errors import PatternSyntaxError
from regexrail.parser import MAX_NESTING, parse


def test_unterminated_group() -> None:
    """Test that a missing ')' is reported at end of input."""
    with pytest.raises(PatternSyntaxError, match="unterminated group") as exc_info:
        parse("(a")
    assert exc_info.value.offset == 2
    assert exc_info.value.message == "unterminated group"


def test_unterminated_nested_group() -> None:
    """Test an inner group closing does not close the outer one."""
    with pytest.raises(PatternSyntaxError, match="unterminated group"):
        parse("((a)")


def test_unterminated_char_class() -> None:
    """Test that a missing ']' is reported."""
    with pytest.raises(PatternSyntaxError, match="unterminated character class") as exc_info:
        parse("[abc")
    assert exc_info.value.offset == 4


def test_class_with_only_bracket_is_unterminated() -> None:
    """Test '[]' has no closing bracket because the first ']' is a member."""
    with pytest.raises(PatternSyntaxError, match="unterminated character class"):
        parse("[]")


def test_escape_at_end_of_class() -> None:
    """Test a backslash as the last character inside a class."""
    with pytest.raises(PatternSyntaxError, match="unterminated character class"):
        parse("[a\\")


def test_trailing_backslash() -> None:
    """Test a backslash with nothing to escape."""
    with pytest.raises(PatternSyntaxError, match="unexpected end of input") as exc_info:
        parse("ab\\")
    assert exc_info.value.offset == 3


def test_unterminated_quantifier() -> None:
    """Test a brace quantifier without '}'."""
    with pytest.raises(PatternSyntaxError, match="unterminated quantifier") as exc_info:
        parse("a{2,")
    assert exc_info.value.offset == 4


def test_stray_closing_paren() -> None:
    """Test an unmatched ')' is reported where it appears."""
    with pytest.raises(PatternSyntaxError, match="unexpected '\\)'") as exc_info:
        parse("ab)c")
    assert exc_info.value.offset == 2


def test_unmatched_openers_always_fail() -> None:
    """Test that every pattern with an unclosed '(' or '[' is rejected."""
    for pattern in ["(", "[", "a(b|c", "(?:x", "(?<=a", "x[a-z", "(a[b)", "((a|b)c"]:
        with pytest.raises(PatternSyntaxError):
            parse(pattern)


def test_error_format_points_at_offset() -> None:
    """Test the formatted message shows the pattern and a caret."""
    with pytest.raises(PatternSyntaxError) as exc_info:
        parse("(a")
    formatted = exc_info.value.format()
    assert "error: unterminated group at offset 2" in formatted
    lines = formatted.splitlines()
    assert lines[1] == "  | (a"
    assert lines[2] == "  |   ^"
    assert str(exc_info.value) == formatted


def test_nesting_limit() -> None:
    """Test groups nested past the limit are rejected at the offending '('."""
    depth = MAX_NESTING
    assert parse("(" * depth + "a" + ")" * depth) is not None

    with pytest.raises(PatternSyntaxError, match="nesting too deep") as exc_info:
        parse("(" * (depth + 1) + "a" + ")" * (depth + 1))
    assert exc_info.value.offset == depth


def test_deep_nesting_is_a_syntax_error() -> None:
    """Test a few hundred nested groups fail cleanly instead of exhausting the stack."""
    with pytest.raises(PatternSyntaxError, match="nesting too deep"):
        parse("(" * 249 + "a" + ")" * 249)
