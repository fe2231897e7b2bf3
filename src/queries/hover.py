"""Hover content for the identifier under the cursor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from queries.text import is_in_comment, is_in_string, previous_token
from substitution.preview import preview_at_cursor
from symbols.model import EnumeratorField, Substitution

if TYPE_CHECKING:
    from symbols.table import SymbolTable

DEFAULT_LANGUAGE = "pawn"


def fenced(body: str, language: str = DEFAULT_LANGUAGE) -> str:
    return f"```{language}\n{body}\n```"


def _field_in_context(table: SymbolTable, enum_field: EnumeratorField) -> str:
    owner = table.enumerator_of(enum_field)
    if owner is None or "{\n" not in owner.detail:
        return enum_field.detail
    header = owner.detail[: owner.detail.index("{\n")]
    return f"{header}{{\n\t...,\n\t{enum_field.detail},\n\t...\n}}"


def hover_markdown(
    table: SymbolTable,
    document: str,
    offset: int,
    file_path: str,
    *,
    language: str = DEFAULT_LANGUAGE,
    max_substitutions: int = 1,
) -> str | None:
    """Markdown shown when hovering at ``offset`` in ``document``.

    Enumeration fields are shown inside an elided view of their enumeration.
    Macros additionally show what the rest of the line expands to.
    """
    if is_in_string(document, offset) or is_in_comment(document, offset):
        return None

    token = previous_token(document, offset)
    if token is None:
        return None

    symbol = table.lookup(token.text, table.file_index_of(file_path))
    if symbol is None:
        return None

    if isinstance(symbol, EnumeratorField):
        return fenced(_field_in_context(table, symbol), language)

    markdown = fenced(symbol.detail, language)
    if isinstance(symbol, Substitution):
        preview = preview_at_cursor(
            document,
            token.start,
            table.substitutions,
            max_substitutions=max_substitutions,
        )
        if preview:
            markdown += f"\n***\nReplaced to:\n{fenced(preview, language)}"
    return markdown


__all__ = ["DEFAULT_LANGUAGE", "fenced", "hover_markdown"]
