"""Query entry points bound to a ``SymbolStore`` and the project settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from queries.completion import CompletionItem, completion_items
from queries.hover import hover_markdown
from queries.signature import SignatureInfo, signature_help
from settings.config import PawnSenseConfig
from substitution.preview import preview_at_cursor

if TYPE_CHECKING:
    from symbols.model import Substitution, Symbol, Tag
    from symbols.store import SymbolStore


def detail_of(symbol: Substitution | Tag | Symbol | None) -> str:
    return symbol.detail if symbol is not None else ""


class QueryService:
    """Answers editor queries against the published symbol table.

    Each call reads ``store.current`` exactly once, so a table published
    halfway through a request does not affect that request.
    """

    def __init__(
        self, store: SymbolStore, config: PawnSenseConfig | None = None
    ) -> None:
        self.store = store
        self.config = config or PawnSenseConfig()

    def file_index(self, file_path: str) -> int:
        return self.store.current.file_index_of(file_path)

    def best_match(
        self, name: str, file_path: str
    ) -> Substitution | Tag | Symbol | None:
        table = self.store.current
        return table.lookup(name, table.file_index_of(file_path))

    def detail(self, name: str, file_path: str) -> str:
        return detail_of(self.best_match(name, file_path))

    def preview(self, document: str, offset: int) -> str | None:
        return preview_at_cursor(
            document,
            offset,
            self.store.current.substitutions,
            max_substitutions=self.config.preview.max_substitutions,
        )

    def hover(self, document: str, offset: int, file_path: str) -> str | None:
        return hover_markdown(
            self.store.current,
            document,
            offset,
            file_path,
            language=self.config.hover.language,
            max_substitutions=self.config.preview.max_substitutions,
        )

    def completions(
        self, document: str, offset: int, file_path: str
    ) -> list[CompletionItem]:
        return completion_items(self.store.current, document, offset, file_path)

    def signature(
        self, document: str, offset: int, file_path: str
    ) -> SignatureInfo | None:
        return signature_help(self.store.current, document, offset, file_path)


__all__ = ["QueryService", "detail_of"]
