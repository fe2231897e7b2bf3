"""Declaration strings shown for symbols in hover and completion.

The declaration is assembled from a fixed sequence of parts:

1. ``static`` for file-scoped symbols
2. the declaration keyword (``enum``, ``native``/``forward``, ``stock``, ``new``)
3. ``const``
4. ``&`` for references
5. the tag annotation (``Float:`` or ``{Float, _}:``)
6. the name
7. array suffixes
8. an argument's default value

Functions and enumerations wrap their arguments or fields around that
declaration. Tag and enumerator names are resolved against the table being
rendered, so details must be refreshed whenever a table is rebuilt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from analysis.kinds import ArrayType, Ident, Usage
from symbols.model import (
    Argument,
    ArrayDim,
    Constant,
    Enumerator,
    EnumeratorField,
    Function,
    Substitution,
    Symbol,
    Tag,
    Variable,
)
from utils import format_number

if TYPE_CHECKING:
    from symbols.table import SymbolTable


def _is_variable(symbol: Symbol) -> bool:
    return isinstance(symbol, Variable) and symbol.ident in (Ident.VARIABLE, Ident.ARRAY)


class DetailRenderer:
    """Render declaration strings against one table's tags and enumerators."""

    def __init__(self, table: SymbolTable) -> None:
        self._table = table
        self._tag_names: dict[int, str] = {}
        for tag in table.tags:
            self._tag_names.setdefault(tag.value, tag.name)
        self._enum_names: dict[int, str] = {}
        for enumerator in table.enumerators:
            self._enum_names.setdefault(enumerator.tag_id, enumerator.name)
        self._constant_names: dict[tuple[int, int | float], str] = {}
        for constant in table.constants:
            if isinstance(constant, Constant):
                self._constant_names.setdefault(
                    (constant.tag_id, constant.value), constant.name
                )

    def render(
        self,
        symbol: Symbol | Substitution | Tag,
        enumerator: Enumerator | None = None,
    ) -> str:
        """Return the declaration string of ``symbol``.

        ``enumerator`` is the enumeration an ``EnumeratorField`` is being
        rendered inside of; an untagged field takes that enumeration's tag.
        """
        if isinstance(symbol, Substitution):
            if symbol.substitution:
                return f"#define {symbol.pattern} {symbol.substitution}"
            return f"#define {symbol.pattern}"
        if isinstance(symbol, Tag):
            return f"{symbol.name}:"
        if isinstance(symbol, Function):
            arguments = ", ".join(self.render(a) for a in symbol.arguments)
            return f"{self._declaration(symbol)}({arguments})"
        if isinstance(symbol, Enumerator):
            header = self._declaration(symbol)
            if not symbol.fields:
                return header
            body = ",\n\t".join(self.render(f, symbol) for f in symbol.fields)
            return f"{header}\n{{\n\t{body}\n}}"
        return self._declaration(symbol, enumerator)

    def refresh(self) -> None:
        """Rewrite the cached ``detail`` of everything in the table."""
        table = self._table
        for enumerator in table.enumerators:
            enumerator.detail = self.render(enumerator)
            for member in enumerator.fields:
                member.detail = self.render(member, enumerator)
        for function in table.functions:
            function.detail = self.render(function)
            for argument in function.arguments:
                argument.detail = self.render(argument)
        for variable in table.variables:
            variable.detail = self.render(variable)
        for substitution in table.substitutions:
            substitution.detail = self.render(substitution)
        for constant in table.constants:
            if isinstance(constant, EnumeratorField):
                constant.detail = self.render(constant, table.enumerator_of(constant))
            else:
                constant.detail = self.render(constant)
        for tag in table.tags:
            tag.detail = self.render(tag)

    def _declaration(
        self, symbol: Symbol, enumerator: Enumerator | None = None
    ) -> str:
        parts: list[str] = []

        if not isinstance(symbol, Argument) and not symbol.is_global:
            parts.append("static ")

        if isinstance(symbol, Enumerator):
            parts.append("enum ")
        else:
            if isinstance(symbol, Function):
                parts.append("native " if symbol.has(Usage.NATIVE) else "forward ")
            if not isinstance(symbol, EnumeratorField) and symbol.has(Usage.STOCK):
                parts.append("stock ")
            if _is_variable(symbol):
                parts.append("new ")

        if not isinstance(symbol, Function) and symbol.has(Usage.CONST):
            parts.append("const ")

        if symbol.ident == Ident.REFERENCE:
            parts.append("&")

        if not isinstance(symbol, Enumerator):
            parts.append(self._tag_annotation(symbol, enumerator))

        parts.append(symbol.name)
        parts.append(self._suffix(symbol))

        if isinstance(symbol, Argument) and symbol.has_default:
            parts.append(f" = {self._default(symbol)}")

        return "".join(parts)

    def _tag_annotation(self, symbol: Symbol, enumerator: Enumerator | None) -> str:
        if isinstance(symbol, Argument):
            tags = symbol.tags
        elif isinstance(symbol, EnumeratorField) and not symbol.tag_id and enumerator:
            tags = (enumerator.tag_id,)
        else:
            tags = (symbol.tag_id,)

        if len(tags) > 1:
            names = [self._tag_names[t] for t in tags if t in self._tag_names]
            return f"{{{', '.join(names)}}}: " if names else ""

        name = self._tag_names.get(tags[0]) if tags[0] else None
        return f"{name}: " if name else ""

    def _suffix(self, symbol: Symbol) -> str:
        if _is_variable(symbol):
            return "".join(self._dimension(d) for d in symbol.dims)  # type: ignore[attr-defined]

        if symbol.ident == Ident.REFARRAY:
            if isinstance(symbol, Argument):
                return "[]" * symbol.dimension
            if isinstance(symbol, Variable):
                return "[]" * len(symbol.dims)
            return ""

        if isinstance(symbol, EnumeratorField) and symbol.dims:
            first = symbol.dims[0]
            if first.kind is ArrayType.INTEGER and first.value <= 1:
                return ""
            return self._dimension(first)

        return ""

    def _dimension(self, dim: ArrayDim) -> str:
        if dim.kind is ArrayType.INTEGER:
            return f"[{dim.value}]"
        name = self._enum_names.get(dim.value)
        return f"[{name}]" if name else ""

    def _default(self, argument: Argument) -> str:
        reference = argument.reference
        if reference is not None:
            name = self._constant_names.get((reference.tag_id, reference.value))
            if name:
                return name

        value = argument.default_value
        if isinstance(value, str):
            return value or '""'
        return format_number(value)


__all__ = ["DetailRenderer"]
