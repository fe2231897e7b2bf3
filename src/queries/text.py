"""Cursor-relative text helpers over a whole document held as one string."""

from __future__ import annotations

from dataclasses import dataclass

from substitution.literals import is_symbol_char

# Lines walked backwards when looking for the call that encloses the cursor.
MAX_CALL_LOOKBACK_LINES = 30


@dataclass(frozen=True)
class Token:
    start: int
    text: str


@dataclass(frozen=True)
class CallSite:
    """Opening parenthesis of the call around the cursor, and the top-level
    commas between it and the cursor."""

    open_paren: int
    commas: tuple[int, ...] = ()


def line_start(document: str, offset: int) -> int:
    return document.rfind("\n", 0, offset) + 1


def word_at(document: str, offset: int) -> Token | None:
    """Return the identifier touching ``offset`` (on either side)."""
    offset = max(0, min(offset, len(document)))
    start = offset
    while start > 0 and is_symbol_char(document[start - 1]):
        start -= 1
    end = offset
    while end < len(document) and is_symbol_char(document[end]):
        end += 1
    if start >= end:
        return None
    return Token(start=start, text=document[start:end])


def previous_token(document: str, offset: int) -> Token | None:
    """Return the nearest identifier at or before ``offset`` on its line."""
    first = line_start(document, offset)
    while offset >= first:
        token = word_at(document, offset)
        if token is not None:
            return token
        offset -= 1
    return None


def is_in_string(document: str, offset: int) -> bool:
    prefix = document[line_start(document, offset) : offset]
    quotes = prefix.count('"') - prefix.count('\\"')
    return quotes % 2 == 1


def is_in_comment(document: str, offset: int) -> bool:
    """Whether ``offset`` follows a ``//`` comment marker on its line."""
    first = line_start(document, offset)
    marker = document.find("//", first, offset)
    if marker == -1 or offset <= marker:
        return False
    return not is_in_string(document, marker)


def find_call_start(
    document: str, offset: int, max_lines: int = MAX_CALL_LOOKBACK_LINES
) -> CallSite | None:
    """Walk backwards from ``offset`` to the unclosed ``(`` of the current call."""
    if is_in_comment(document, offset):
        return None

    paren_balance = 0
    brace_balance = 0
    lines_walked = 0
    commas: list[int] = []

    index = min(offset, len(document)) - 1
    while index >= 0:
        ch = document[index]
        if ch == "\n":
            lines_walked += 1
            if lines_walked > max_lines:
                return None
        elif ch == "{":
            brace_balance += 1
        elif ch == "}":
            brace_balance -= 1
        elif ch == "(":
            paren_balance -= 1
            if paren_balance < 0:
                return CallSite(open_paren=index, commas=tuple(reversed(commas)))
        elif ch == ")":
            paren_balance += 1
        elif (
            ch == ","
            and paren_balance == 0
            and brace_balance == 0
            and not is_in_string(document, index)
        ):
            commas.append(index)
        index -= 1

    return None


__all__ = [
    "MAX_CALL_LOOKBACK_LINES",
    "CallSite",
    "Token",
    "find_call_start",
    "is_in_comment",
    "is_in_string",
    "line_start",
    "previous_token",
    "word_at",
]
