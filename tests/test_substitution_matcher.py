from __future__ import annotations

import pytest

from substitution.matcher import (
    MalformedPatternError,
    _match,
    expand,
    match_substitution,
    pattern_prefix,
    try_match,
)
from symbols.model import Substitution

_MAX_PATTERN = "MAX(%0,%1)"
_MAX_TEMPLATE = "((%0)>(%1)?(%0):(%1))"


def test_max_expansion() -> None:
    result = try_match(_MAX_PATTERN, _MAX_TEMPLATE, "MAX(a,b)")

    assert result is not None
    assert result.expansion == "((a)>(b)?(a):(b))"
    assert result.consumed == len("MAX(a,b)")


def test_nested_group_is_captured_whole() -> None:
    result = try_match(_MAX_PATTERN, _MAX_TEMPLATE, "MAX(f(1,2),3)")

    assert result is not None
    assert result.arguments == {0: "f(1,2)", 1: "3"}
    assert result.consumed == len("MAX(f(1,2),3)")


def test_string_argument_is_captured_whole() -> None:
    result = try_match("PRINT(%0)", "print(%0)", 'PRINT("a)b") + 1')

    assert result is not None
    assert result.arguments == {0: '"a)b"'}


def test_name_boundary() -> None:
    assert try_match("FOO", "1", "FOOBAR") is None
    assert try_match("FOO", "1", "FOO+BAR") is not None


def test_unfilled_placeholder_is_kept() -> None:
    result = try_match("ONE(%0)", "%0 and %2", "ONE(x)")

    assert result is not None
    assert result.expansion == "x and %2"


def test_placeholders_are_filled_inside_strings() -> None:
    assert expand('"%0"', {0: "name"}) == '"name"'


def test_expand_leaves_lone_percent() -> None:
    assert expand("a % b %", {}) == "a % b %"


def test_blanks_before_literal_are_skipped() -> None:
    result = try_match(_MAX_PATTERN, _MAX_TEMPLATE, "MAX (a,b)")

    assert result is not None
    assert result.consumed == len("MAX (a,b)")


def test_identifier_literals_need_adjacent_text() -> None:
    assert try_match("X(%0)to", "", "X(a) to") is not None
    assert try_match("X(%0)to", "", "X(a)t o") is None


def test_repeated_punctuation_is_not_blank_skipped() -> None:
    assert try_match("A;;", "", "A;;") is not None
    assert try_match("A;;", "", "A; ;") is None


def test_capture_stops_at_end_of_line() -> None:
    assert try_match(_MAX_PATTERN, _MAX_TEMPLATE, "MAX(a,\nb)") is None


def test_bracketed_group_in_capture_spans_lines() -> None:
    result = try_match(_MAX_PATTERN, _MAX_TEMPLATE, "MAX(f(1,\n2),3)")

    assert result is not None
    assert result.arguments == {0: "f(1,\n2)", 1: "3"}
    assert result.consumed == len("MAX(f(1,\n2),3)")


def test_text_without_prefix_does_not_match() -> None:
    assert try_match(_MAX_PATTERN, _MAX_TEMPLATE, "MIN(a,b)") is None


def test_escaped_literal_in_pattern() -> None:
    result = try_match("Q\\x28;%0)", "q %0", "Q(z)")

    assert result is not None
    assert result.expansion == "q z"


@pytest.mark.parametrize(
    "pattern",
    ["(%0)", "BAD%x", "BAD%0"],
)
def test_malformed_pattern_raises_internally(pattern: str) -> None:
    with pytest.raises(MalformedPatternError):
        _match(pattern, "BAD%0 text")


@pytest.mark.parametrize("pattern", ["(%0)", "BAD%x", "BAD%0"])
def test_malformed_pattern_is_no_match(pattern: str) -> None:
    assert try_match(pattern, "x", "BAD%0 text") is None


def test_pattern_prefix() -> None:
    assert pattern_prefix(_MAX_PATTERN) == "MAX"
    assert pattern_prefix("@init_%0") == "@init_"
    assert pattern_prefix("(x)") == ""


def test_match_substitution_uses_macro_fields() -> None:
    macro = Substitution(pattern="SQUARE(%0)", match_length=6, substitution="((%0)*(%0))")

    result = match_substitution(macro, "SQUARE(n+1);")

    assert result is not None
    assert result.expansion == "((n+1)*(n+1))"
