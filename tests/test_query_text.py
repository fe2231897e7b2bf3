from __future__ import annotations

from queries.text import (
    CallSite,
    Token,
    find_call_start,
    is_in_comment,
    is_in_string,
    line_start,
    previous_token,
    word_at,
)


def test_word_at_either_side_of_identifier() -> None:
    document = "foo(bar, baz)"

    assert word_at(document, 3) == Token(start=0, text="foo")
    assert word_at(document, 4) == Token(start=4, text="bar")
    assert word_at(document, 8) is None


def test_previous_token_walks_back_on_the_line() -> None:
    document = "foo(bar,   "

    assert previous_token(document, len(document)) == Token(start=4, text="bar")


def test_previous_token_stops_at_line_start() -> None:
    document = "abc\n   x"

    assert previous_token(document, 6) is None
    assert previous_token(document, 0) == Token(start=0, text="abc")


def test_line_start() -> None:
    assert line_start("ab\ncd", 4) == 3
    assert line_start("ab\ncd", 1) == 0


def test_is_in_string() -> None:
    assert is_in_string('x = "abc', 8)
    assert not is_in_string('x = "abc"', 9)
    assert is_in_string('x = "a\\"b', 9)


def test_is_in_comment() -> None:
    assert is_in_comment("a // b", 5)
    assert not is_in_comment("a // b", 2)
    assert not is_in_comment('"//" x', 5)


def test_find_call_start_counts_top_level_commas() -> None:
    document = "Foo(a, Bar(b, c), d"

    assert find_call_start(document, len(document)) == CallSite(open_paren=3, commas=(5, 16))


def test_find_call_start_spans_lines() -> None:
    document = "Foo(a,\n    b"

    assert find_call_start(document, len(document)) == CallSite(open_paren=3, commas=(5,))


def test_find_call_start_gives_up_after_line_limit() -> None:
    document = "Foo(\n\n\na"

    assert find_call_start(document, len(document), max_lines=2) is None
    assert find_call_start(document, len(document), max_lines=3) is not None


def test_find_call_start_outside_call() -> None:
    assert find_call_start("a = (1); b", 10) is None
    assert find_call_start("Foo(a // b", 10) is None


def test_commas_in_strings_are_ignored() -> None:
    document = 'Foo("a, b", '

    assert find_call_start(document, len(document)) == CallSite(open_paren=3, commas=(10,))
