"""Symbol model, table snapshots and declaration rendering."""

from symbols.detail import DetailRenderer
from symbols.model import (
    Argument,
    ArrayDim,
    Constant,
    DefaultReference,
    Enumerator,
    EnumeratorField,
    Function,
    SourceFile,
    Substitution,
    Symbol,
    Tag,
    Variable,
)
from symbols.store import SymbolStore
from symbols.table import SymbolTable, TableBuilder, build_table

__all__ = [
    "Argument",
    "ArrayDim",
    "Constant",
    "DefaultReference",
    "DetailRenderer",
    "Enumerator",
    "EnumeratorField",
    "Function",
    "SourceFile",
    "Substitution",
    "Symbol",
    "SymbolStore",
    "SymbolTable",
    "Tag",
    "TableBuilder",
    "Variable",
    "build_table",
]
