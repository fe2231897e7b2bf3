"""In-memory symbol variants held by a symbol table.

Each variant carries the compiler's ``ident`` code and ``usage`` bits
explicitly; the record that produced it is classified once, at ingestion.
``detail`` is the cached declaration string and is rewritten by
``symbols.detail.DetailRenderer`` whenever the owning table is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from analysis.kinds import GLOBAL_SCOPE, ArrayType, Ident, Usage


@dataclass(frozen=True)
class SourceFile:
    path: str
    index: int


@dataclass
class Tag:
    name: str
    value: int
    index: int = 0
    detail: str = ""


@dataclass(frozen=True)
class ArrayDim:
    """One array dimension: a literal size or the tag id of an enumerator."""

    kind: ArrayType
    value: int


@dataclass(frozen=True)
class DefaultReference:
    """Tag id and value that identify a named constant used as a default."""

    tag_id: int
    value: int | float


@dataclass
class Symbol:
    name: str
    ident: Ident
    usage: Usage = Usage(0)
    tag_id: int = 0
    file_scope: int = GLOBAL_SCOPE
    detail: str = ""

    @property
    def is_global(self) -> bool:
        return self.file_scope == GLOBAL_SCOPE

    def has(self, flag: Usage) -> bool:
        return (self.usage & flag) == flag


@dataclass
class Variable(Symbol):
    dims: tuple[ArrayDim, ...] = ()


@dataclass
class Constant(Symbol):
    """A plain named constant (no enumeration involvement)."""

    value: int | float = 0
    dims: tuple[ArrayDim, ...] = ()


@dataclass
class EnumeratorField(Constant):
    """A member of an enumeration.

    The owning ``Enumerator`` is not stored here; a table resolves it with
    ``SymbolTable.enumerator_of`` when it is needed.
    """


@dataclass
class Enumerator(Symbol):
    fields: tuple[EnumeratorField, ...] = ()


@dataclass
class Argument(Symbol):
    dimension: int = 0
    tag_list: tuple[int, ...] = ()
    has_default: bool = False
    default_value: int | float | str = 0
    reference: DefaultReference | None = None

    @property
    def tags(self) -> tuple[int, ...]:
        return self.tag_list or (self.tag_id,)


@dataclass
class Function(Symbol):
    arguments: tuple[Argument, ...] = field(default_factory=tuple)


@dataclass
class Substitution:
    """A ``#define`` macro: name prefix plus pattern, and its replacement."""

    pattern: str
    match_length: int
    substitution: str = ""
    detail: str = ""

    @property
    def prefix(self) -> str:
        return self.pattern[: self.match_length]


__all__ = [
    "Argument",
    "ArrayDim",
    "Constant",
    "DefaultReference",
    "Enumerator",
    "EnumeratorField",
    "Function",
    "SourceFile",
    "Substitution",
    "Symbol",
    "Tag",
    "Variable",
]
