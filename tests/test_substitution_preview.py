from __future__ import annotations

from symbols.model import Substitution
from symbols.table import SymbolTable
from substitution.preview import preview_at_cursor, token_start


def _macros() -> list[Substitution]:
    return [
        Substitution(pattern="MAX(%0,%1)", match_length=3, substitution="((%0)>(%1)?(%0):(%1))"),
        Substitution(pattern="SQUARE(%0)", match_length=6, substitution="((%0)*(%0))"),
        Substitution(pattern="VERSION", match_length=7, substitution='"1.0"'),
    ]


def test_expands_macro_under_cursor() -> None:
    document = "new a = MAX(1,2) + 3;"

    assert preview_at_cursor(document, 9, _macros()) == "((1)>(2)?(1):(2)) + 3;"


def test_scans_forward_to_first_macro() -> None:
    document = "new a = MAX(1,2);"

    assert preview_at_cursor(document, 0, _macros()) == "new a = ((1)>(2)?(1):(2));"


def test_no_macro_returns_none() -> None:
    assert preview_at_cursor("new a = 1;", 0, _macros()) is None


def test_only_the_cursor_line_is_previewed() -> None:
    document = "MAX(1,2)\nMAX(3,4)"

    assert preview_at_cursor(document, 0, _macros()) == "((1)>(2)?(1):(2))"


def test_defined_operand_is_not_expanded() -> None:
    document = "#if defined VERSION && VERSION > 1"

    assert preview_at_cursor(document, 0, _macros()) == '#if defined VERSION && "1.0" > 1'


def test_defined_with_parentheses() -> None:
    document = "#if defined(VERSION)"

    assert preview_at_cursor(document, 0, _macros()) is None


def test_string_literals_are_skipped() -> None:
    document = 'print("MAX(1,2)"); MAX(3,4)'

    assert preview_at_cursor(document, 0, _macros()) == 'print("MAX(1,2)"); ((3)>(4)?(3):(4))'


def test_numeric_tokens_are_skipped() -> None:
    assert preview_at_cursor("10MAX(1,2)", 0, _macros()) is None


def test_one_substitution_by_default() -> None:
    document = "MAX(1,2) + SQUARE(3)"

    assert preview_at_cursor(document, 0, _macros()) == "((1)>(2)?(1):(2)) + SQUARE(3)"


def test_more_substitutions_when_allowed() -> None:
    document = "MAX(1,2) + SQUARE(3)"

    preview = preview_at_cursor(document, 0, _macros(), max_substitutions=5)

    assert preview == "((1)>(2)?(1):(2)) + ((3)*(3))"


def test_expansion_is_not_rescanned() -> None:
    macros = [Substitution(pattern="TWICE(%0)", match_length=5, substitution="SQUARE(%0)"), *_macros()]

    preview = preview_at_cursor("TWICE(2)", 0, macros, max_substitutions=5)

    assert preview == "SQUARE(2)"


def test_malformed_macro_does_not_block_others() -> None:
    macros = [Substitution(pattern="MAX%", match_length=3, substitution="x"), *_macros()]

    assert preview_at_cursor("MAX(1,2)", 0, macros) == "((1)>(2)?(1):(2))"


def test_prefix_must_equal_whole_word() -> None:
    assert preview_at_cursor("MAXIMUM(1,2)", 0, _macros()) is None


def test_token_start() -> None:
    assert token_start("new value", 6) == 4
    assert token_start("new value", 0) == 0
    assert token_start("abc def", 7) == 4


def test_fixture_substitutions_preview(table: SymbolTable) -> None:
    preview = preview_at_cursor("SQUARE(x)", 0, table.substitutions)

    assert preview == "((x)*(x))"
