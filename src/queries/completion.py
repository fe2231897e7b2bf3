"""Completion candidates visible from a file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from queries.text import is_in_comment, is_in_string

if TYPE_CHECKING:
    from symbols.table import SymbolTable


class CompletionKind(str, Enum):
    ENUM = "enum"
    KEYWORD = "keyword"
    CLASS = "class"
    CONSTANT = "constant"
    VARIABLE = "variable"
    FUNCTION = "function"


@dataclass(frozen=True)
class CompletionItem:
    label: str
    kind: CompletionKind
    detail: str


def completion_items(
    table: SymbolTable, document: str, offset: int, file_path: str
) -> list[CompletionItem]:
    """List every symbol the file at ``file_path`` can refer to.

    Nothing is offered inside strings or comments. Macros are labelled by
    their name and tags carry their trailing colon.
    """
    if is_in_string(document, offset) or is_in_comment(document, offset):
        return []

    scope = table.file_index_of(file_path)
    items = [
        CompletionItem(e.name, CompletionKind.ENUM, e.detail) for e in table.enumerators
    ]
    items.extend(
        CompletionItem(s.prefix, CompletionKind.KEYWORD, s.detail)
        for s in table.visible(table.substitutions, scope)
    )
    items.extend(
        CompletionItem(f"{t.name}:", CompletionKind.CLASS, t.detail)
        for t in table.visible(table.tags, scope)
    )
    items.extend(
        CompletionItem(c.name, CompletionKind.CONSTANT, c.detail)
        for c in table.visible(table.constants, scope)
    )
    items.extend(
        CompletionItem(v.name, CompletionKind.VARIABLE, v.detail)
        for v in table.visible(table.variables, scope)
    )
    items.extend(
        CompletionItem(f.name, CompletionKind.FUNCTION, f.detail)
        for f in table.visible(table.functions, scope)
    )
    return items


__all__ = ["CompletionItem", "CompletionKind", "completion_items"]
