"""Preview of what the preprocessor makes of the line at the cursor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from substitution.literals import (
    char_at,
    is_string_start,
    is_symbol_char,
    is_symbol_start,
    skip_string,
)
from substitution.matcher import MatchResult, match_substitution

if TYPE_CHECKING:
    from collections.abc import Sequence

    from symbols.model import Substitution

DEFINED_OPERATOR = "defined"


def token_start(document: str, offset: int) -> int:
    """Return the start of the identifier that contains ``offset``."""
    start = max(0, min(offset, len(document)))
    while start > 0 and is_symbol_char(document[start - 1]):
        start -= 1
    return start


def _skip_defined_operand(text: str, index: int) -> int:
    while index < len(text) and text[index] in " \t(":
        index += 1
    while index < len(text) and is_symbol_char(text[index]):
        index += 1
    return index


def _first_match(
    word: str, text: str, substitutions: Sequence[Substitution]
) -> MatchResult | None:
    for macro in substitutions:
        if macro.prefix != word:
            continue
        result = match_substitution(macro, text)
        if result is not None:
            return result
    return None


def preview_at_cursor(
    document: str,
    offset: int,
    substitutions: Sequence[Substitution],
    *,
    max_substitutions: int = 1,
) -> str | None:
    """Expand the macro use found at or after the cursor.

    Scanning starts at the identifier under ``offset`` and stops at the end
    of that line. Operands of ``defined`` are never expanded. The first
    macro whose pattern matches is replaced by its expansion and the rest of
    the line is kept as written. With ``max_substitutions`` above one,
    scanning resumes after the inserted expansion; expansions themselves
    are never rescanned.

    Returns ``None`` when no macro on the line matches.
    """
    start = token_start(document, offset)
    line_end = document.find("\n", start)
    if line_end == -1:
        line_end = len(document)
    text = document[start:line_end] + "\n"

    applied = 0
    index = 0
    while index < len(text) and applied < max_substitutions:
        ch = text[index]
        if is_string_start(text, index):
            index = skip_string(text, index)
            continue
        if not is_symbol_char(ch):
            index += 1
            continue

        end = index
        while end < len(text) and is_symbol_char(text[end]):
            end += 1
        word = text[index:end]

        if not is_symbol_start(ch):
            index = end  # numeric literal
            continue

        if word == DEFINED_OPERATOR and char_at(text, end) in (" ", "\t", "("):
            index = _skip_defined_operand(text, end)
            continue

        result = _first_match(word, text[index:], substitutions)
        if result is None:
            index = end
            continue

        text = text[:index] + result.expansion + text[index + result.consumed :]
        index += len(result.expansion)
        applied += 1

    if not applied:
        return None
    return text.removesuffix("\n")


__all__ = ["DEFINED_OPERATOR", "preview_at_cursor", "token_start"]
