"""Publication point for the current symbol table of an analysis unit."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from symbols.table import SymbolTable, build_table

if TYPE_CHECKING:
    from analysis.reader import AnalysisBatch

logger = structlog.get_logger(__name__)


class SymbolStore:
    """Holds the published ``SymbolTable``.

    Readers take ``current`` once and keep using that snapshot for the whole
    request. A rebuild assembles the next table separately and replaces the
    published reference in one assignment, so a reader never sees a table
    that is only partly ingested.
    """

    def __init__(self, table: SymbolTable | None = None) -> None:
        self._table = table if table is not None else SymbolTable()
        self._generation = 0

    @property
    def current(self) -> SymbolTable:
        return self._table

    @property
    def generation(self) -> int:
        """Number of tables published since the store was created."""
        return self._generation

    def publish(self, table: SymbolTable) -> SymbolTable:
        """Replace the published table; returns the table it superseded."""
        previous = self._table
        self._table = table
        self._generation += 1
        logger.info(
            "symbol_table_published",
            generation=self._generation,
            functions=len(table.functions),
            variables=len(table.variables),
            constants=len(table.constants),
            substitutions=len(table.substitutions),
        )
        return previous

    def rebuild(self, batch: AnalysisBatch, *, carry_over: bool = False) -> SymbolTable:
        """Build a table from ``batch`` and publish it.

        With ``carry_over`` the new table starts from a copy of the current
        one, so merge-policy kinds accumulate across passes. Otherwise the
        new table is built from the batch alone.
        """
        base = self._table if carry_over else None
        table = build_table(batch, base)
        self.publish(table)
        return table

    def clear(self) -> None:
        self.publish(SymbolTable())


__all__ = ["SymbolStore"]
