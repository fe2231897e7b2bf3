"""Match a ``#define`` pattern against source text and build its expansion.

A pattern starts with the macro name, followed by literal characters and
``%0``..``%9`` placeholders. Matching walks the pattern and the text side
by side:

- a literal pattern character must equal the next text character, after
  skipping blanks unless the pattern continues an identifier or repeats the
  previous character;
- a placeholder captures text up to the character that follows it in the
  pattern, treating string literals and ``()``/``{}``/``[]`` groups as
  indivisible, and fails at the end of the line.

After the pattern is exhausted the match is rejected if both the last
pattern character and the next text character belong to an identifier, so
``FOO`` never matches the start of ``FOOBAR``.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from substitution.literals import (
    char_at,
    decode_literal,
    is_string_start,
    is_symbol_char,
    skip_group,
    skip_string,
)

if TYPE_CHECKING:
    from symbols.model import Substitution

logger = structlog.get_logger(__name__)

PLACEHOLDER = "%"
_CAPTURE_GROUPS = "({["


class MalformedPatternError(ValueError):
    """Raised when a macro pattern cannot be interpreted."""


@dataclass(frozen=True)
class MatchResult:
    expansion: str
    consumed: int  # characters of the input replaced by the expansion
    arguments: dict[int, str] = field(default_factory=dict)


def pattern_prefix(pattern: str) -> str:
    """Return the macro name at the start of ``pattern``."""
    end = 0
    while end < len(pattern) and is_symbol_char(pattern[end]):
        end += 1
    return pattern[:end]


def _digit_at(text: str, index: int) -> int | None:
    ch = char_at(text, index)
    if ch and ch in string.digits:
        return int(ch)
    return None


def _skip_blanks(text: str, index: int) -> int:
    while index < len(text) and text[index] != "\n" and text[index] <= " ":
        index += 1
    return index


def _scan_argument(text: str, start: int, terminator: str) -> int:
    end = start
    while end < len(text) and text[end] != "\n" and text[end] != terminator:
        if is_string_start(text, end):
            end = skip_string(text, end)
        elif text[end] in _CAPTURE_GROUPS:
            end = skip_group(text, end)
        else:
            end += 1
    return end


def _match(pattern: str, text: str) -> tuple[int, dict[int, str]] | None:
    prefix = pattern_prefix(pattern)
    if not prefix:
        msg = "pattern does not start with a macro name"
        raise MalformedPatternError(msg)
    if not text.startswith(prefix):
        return None

    position = len(prefix)
    offset = len(prefix)
    arguments: dict[int, str] = {}

    while offset < len(pattern):
        if pattern[offset] == PLACEHOLDER:
            slot = _digit_at(pattern, offset + 1)
            if slot is None:
                msg = f"'%' not followed by a digit at offset {offset}"
                raise MalformedPatternError(msg)
            offset += 2
            if offset >= len(pattern):
                msg = f"placeholder %{slot} is not followed by a terminator"
                raise MalformedPatternError(msg)

            terminator, offset = decode_literal(pattern, offset)
            end = _scan_argument(text, position, terminator)
            if char_at(text, end) != terminator:
                return None
            arguments[slot] = text[position:end]
            position = end + 1
            continue

        current = pattern[offset]
        previous = pattern[offset - 1]
        if not (is_symbol_char(previous) and is_symbol_char(current)) and previous != current:
            position = _skip_blanks(text, position)

        literal, offset = decode_literal(pattern, offset)
        if char_at(text, position) != literal:
            return None
        position += 1

    if is_symbol_char(pattern[-1]) and is_symbol_char(char_at(text, position)):
        return None

    return position, arguments


def expand(substitution: str, arguments: dict[int, str]) -> str:
    """Fill the placeholders of ``substitution`` with captured arguments.

    Placeholders are replaced inside string literals as well. A placeholder
    whose slot was never captured is kept as written.
    """
    parts: list[str] = []
    i = 0
    while i < len(substitution):
        slot = (
            _digit_at(substitution, i + 1)
            if substitution[i] == PLACEHOLDER
            else None
        )
        if slot is None:
            parts.append(substitution[i])
            i += 1
            continue
        parts.append(arguments.get(slot, substitution[i : i + 2]))
        i += 2
    return "".join(parts)


def try_match(pattern: str, substitution: str, text: str) -> MatchResult | None:
    """Match ``pattern`` at the start of ``text``.

    ``text`` must begin at the macro name. Returns ``None`` when the text
    does not match or the pattern itself is malformed.
    """
    try:
        matched = _match(pattern, text)
    except MalformedPatternError as exc:
        logger.debug("malformed_substitution_pattern", pattern=pattern, reason=str(exc))
        return None

    if matched is None:
        return None

    consumed, arguments = matched
    return MatchResult(
        expansion=expand(substitution, arguments),
        consumed=consumed,
        arguments=arguments,
    )


def match_substitution(macro: Substitution, text: str) -> MatchResult | None:
    return try_match(macro.pattern, macro.substitution, text)


__all__ = [
    "MalformedPatternError",
    "MatchResult",
    "expand",
    "match_substitution",
    "pattern_prefix",
    "try_match",
]
