"""Character-level scanning helpers for macro patterns and source text.

These follow the compiler's lexical rules for identifiers, escape sequences,
string literals (including packed ``!"..."`` and raw ``\\"..."`` forms) and
bracketed groups.
"""

from __future__ import annotations

import string

ESCAPE = "\\"

_SYMBOL_CHARS = frozenset(string.ascii_letters + string.digits + "_@")
_SYMBOL_START_CHARS = frozenset(string.ascii_letters + "_@")

_SIMPLE_ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}
_PASSTHROUGH_ESCAPES = frozenset("\\'\"%")

_STRING_OPENERS = (
    '"',
    "'",
    '!"',
    "!'",
    '!\\"',
    "!\\'",
    '\\"',
    "\\'",
    '\\!"',
    "\\!'",
)

GROUP_CLOSERS: dict[str, str] = {"(": ")", "{": "}", "[": "]", "<": ">"}

_MAX_CODEPOINT = 0x110000


def is_symbol_char(ch: str) -> bool:
    return ch in _SYMBOL_CHARS


def is_symbol_start(ch: str) -> bool:
    return ch in _SYMBOL_START_CHARS


def char_at(text: str, index: int) -> str:
    """Return ``text[index]`` or an empty string past either end."""
    if 0 <= index < len(text):
        return text[index]
    return ""


def decode_literal(text: str, index: int, *, raw: bool = False) -> tuple[str, int]:
    """Decode one possibly escaped character starting at ``index``.

    Returns the decoded character and the index of the next undecoded
    character. Supported escapes: ``\\a \\b \\e \\f \\n \\r \\t \\v``,
    ``\\xHH;`` (hexadecimal), ``\\DDD;`` (decimal), and ``\\\\ \\' \\" \\%``
    which stand for themselves. The trailing ``;`` of numeric escapes is
    optional. An unrecognised escape yields the backslash itself.
    """
    if index >= len(text):
        return "", index

    ch = text[index]
    if raw or ch != ESCAPE:
        return ch, index + 1

    i = index + 1
    if i >= len(text):
        return ESCAPE, i

    ch = text[i]
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch], i + 1
    if ch in _PASSTHROUGH_ESCAPES:
        return ch, i + 1

    if ch == "x":
        i += 1
        value = 0
        while i < len(text) and text[i] in string.hexdigits:
            value = value * 16 + int(text[i], 16)
            i += 1
        return chr(value % _MAX_CODEPOINT), _skip_terminator(text, i)

    if ch in string.digits:
        value = 0
        while i < len(text) and text[i] in string.digits:
            value = value * 10 + int(text[i])
            i += 1
        return chr(value % _MAX_CODEPOINT), _skip_terminator(text, i)

    return ESCAPE, i


def _skip_terminator(text: str, index: int) -> int:
    if index < len(text) and text[index] == ";":
        return index + 1
    return index


def is_string_start(text: str, index: int) -> bool:
    """Whether a string or character literal opens at ``index``."""
    return text.startswith(_STRING_OPENERS, index)


def skip_string(text: str, index: int) -> int:
    """Return the index just past the literal that opens at ``index``.

    Prefix characters ``!`` (packed) and ``\\`` (raw) are consumed first; in
    a raw literal backslashes are ordinary characters. An unterminated
    literal runs to the end of ``text``.
    """
    raw = False
    i = index
    while i < len(text) and text[i] in "!\\":
        if text[i] == ESCAPE:
            raw = True
        i += 1

    quote = char_at(text, i)
    if quote not in ('"', "'"):
        msg = f"No string literal at offset {index}"
        raise ValueError(msg)

    i += 1
    while i < len(text) and text[i] != quote:
        _, i = decode_literal(text, i, raw=raw)

    return min(i + 1, len(text))


def skip_group(text: str, index: int) -> int:
    """Return the index just past the bracketed group opening at ``index``.

    Only the opening bracket's own kind is counted for nesting; string
    literals inside the group are skipped whole. An unbalanced group runs
    to the end of ``text``.
    """
    opener = char_at(text, index)
    closer = GROUP_CLOSERS.get(opener)
    if closer is None:
        msg = f"Unknown group character {opener!r} at offset {index}"
        raise ValueError(msg)

    depth = 0
    i = index + 1
    while i < len(text):
        ch = text[i]
        if ch == closer:
            if depth == 0:
                return i + 1
            depth -= 1
        elif ch == opener:
            depth += 1
        elif is_string_start(text, i):
            i = skip_string(text, i)
            continue
        i += 1

    return len(text)


__all__ = [
    "ESCAPE",
    "GROUP_CLOSERS",
    "char_at",
    "decode_literal",
    "is_string_start",
    "is_symbol_char",
    "is_symbol_start",
    "skip_group",
    "skip_string",
]
