"""Symbol table for one analysis unit.

A ``TableBuilder`` collects the records of a single analysis pass, applying
the replace-or-merge policy of each record kind and removing redefinitions.
``TableBuilder.build`` freezes the result into a ``SymbolTable`` snapshot with
every detail string rendered. Snapshots are never modified after they are
built, so a table can be read while the next one is being assembled.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from analysis.kinds import (
    GLOBAL_SCOPE,
    INGEST_POLICY,
    Ident,
    IngestPolicy,
    RecordKind,
    Usage,
)
from analysis.records import (
    ArgumentRecord,
    ArrayDimRecord,
    ConstantRecord,
    EnumeratorFieldRecord,
    EnumeratorRecord,
    FileRecord,
    FunctionRecord,
    SubstituteRecord,
    TagRecord,
    VariableRecord,
)
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
from utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence

    from pydantic import BaseModel

    from analysis.reader import AnalysisBatch

logger = structlog.get_logger(__name__)

# Patterns the compiler registers for its own bookkeeping; never user macros.
INTERNAL_PATTERN_MARKER = "|||"

ConstantLike = Constant | EnumeratorField | Enumerator

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Record -> symbol conversion
# ---------------------------------------------------------------------------


def _dims(records: Sequence[ArrayDimRecord]) -> tuple[ArrayDim, ...]:
    return tuple(ArrayDim(kind=r.array_type, value=r.array_value) for r in records)


def _field_from_record(record: EnumeratorFieldRecord | ConstantRecord) -> EnumeratorField:
    return EnumeratorField(
        name=record.name,
        ident=record.ident,
        usage=Usage(record.usage),
        tag_id=record.tagid,
        file_scope=record.file_number,
        value=record.value,
        dims=_dims(record.array),
    )


def _enumerator_from_record(record: EnumeratorRecord) -> Enumerator:
    return Enumerator(
        name=record.name,
        ident=record.ident,
        usage=Usage(record.usage),
        tag_id=record.tagid,
        file_scope=record.file_number,
        fields=tuple(_field_from_record(f) for f in record.field),
    )


def _constant_from_record(record: ConstantRecord) -> ConstantLike:
    usage = Usage(record.usage)
    if record.ident == Ident.CONSTEXPR and usage & Usage.ENUMFIELD:
        return _field_from_record(record)
    if record.ident == Ident.CONSTEXPR and usage & Usage.ENUMROOT:
        return Enumerator(
            name=record.name,
            ident=record.ident,
            usage=usage,
            tag_id=record.tagid,
            file_scope=record.file_number,
        )
    return Constant(
        name=record.name,
        ident=record.ident,
        usage=usage,
        tag_id=record.tagid,
        file_scope=record.file_number,
        value=record.value,
        dims=_dims(record.array),
    )


def _argument_from_record(record: ArgumentRecord) -> Argument:
    reference = None
    if isinstance(record.reference, int) and record.reference != 0:
        reference = DefaultReference(
            tag_id=record.reference, value=record.reference_value
        )
    return Argument(
        name=record.name,
        ident=record.ident,
        usage=Usage(record.usage),
        tag_id=record.tagid,
        file_scope=record.file_number,
        dimension=record.dimension,
        tag_list=tuple(record.tag_list),
        has_default=bool(record.hasdefault),
        default_value=record.default_value,
        reference=reference,
    )


def _function_from_record(record: FunctionRecord) -> Function:
    return Function(
        name=record.name,
        ident=record.ident,
        usage=Usage(record.usage),
        tag_id=record.tagid,
        file_scope=record.file_number,
        arguments=tuple(_argument_from_record(a) for a in record.argument),
    )


def _variable_from_record(record: VariableRecord) -> Variable:
    return Variable(
        name=record.name,
        ident=record.ident,
        usage=Usage(record.usage),
        tag_id=record.tagid,
        file_scope=record.file_number,
        dims=_dims(record.array),
    )


def _require(record: BaseModel, model: type[T]) -> T:
    if not isinstance(record, model):
        msg = f"Expected {model.__name__}, got {type(record).__name__}"
        raise TypeError(msg)
    return record


# ---------------------------------------------------------------------------
# Redefinition removal
# ---------------------------------------------------------------------------


def _scope_key(item: Any, key: Callable[[Any], Hashable]) -> Hashable:
    # Scoped records collide only within the same file (or both global).
    if isinstance(item, Symbol):
        return (key(item), item.file_scope)
    return key(item)


def remove_redefinitions(
    items: Iterable[T], key: Callable[[T], Hashable]
) -> list[T]:
    """Keep the first record of every key, dropping later redefinitions."""
    seen: set[Hashable] = set()
    kept: list[T] = []
    for item in items:
        marker = _scope_key(item, key)
        if marker in seen:
            continue
        seen.add(marker)
        kept.append(item)
    return kept


def _combine(
    current: Sequence[T],
    incoming: Sequence[T],
    policy: IngestPolicy,
    key: Callable[[T], Hashable],
) -> list[T]:
    combined = list(incoming) if policy is IngestPolicy.REPLACE else [*current, *incoming]
    return remove_redefinitions(combined, key)


def _by_name(item: Any) -> str:
    return item.name


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SymbolTable:
    """Read-only symbol collections of one analysis unit."""

    files: tuple[SourceFile, ...] = ()
    tags: tuple[Tag, ...] = ()
    constants: tuple[ConstantLike, ...] = ()
    enumerators: tuple[Enumerator, ...] = ()
    variables: tuple[Variable, ...] = ()
    functions: tuple[Function, ...] = ()
    substitutions: tuple[Substitution, ...] = ()
    field_owners: dict[int, Enumerator] = field(
        default_factory=dict, repr=False, compare=False
    )

    def file_index_of(self, path: str) -> int:
        """Return the analysis file index of ``path``, or -1 if unknown."""
        wanted = normalize_path(path)
        for source in self.files:
            if source.path == wanted:
                return source.index
        return GLOBAL_SCOPE

    @staticmethod
    def matches(
        item: Substitution | Tag | Symbol, name: str = "", file_scope: int = GLOBAL_SCOPE
    ) -> bool:
        """Whether ``item`` is ``name`` as seen from file ``file_scope``.

        An empty name matches every item visible from the file.
        """
        if isinstance(item, Substitution):
            return not name or name == item.prefix
        if isinstance(item, Tag) or _is_plain_constant(item):
            return not name or name == item.name
        return (not name or name == item.name) and (
            item.file_scope == GLOBAL_SCOPE or item.file_scope == file_scope
        )

    def _first(
        self, items: Iterable[T], name: str, file_scope: int
    ) -> T | None:
        for item in items:
            if self.matches(item, name, file_scope):  # type: ignore[arg-type]
                return item
        return None

    def find_substitution(self, name: str) -> Substitution | None:
        return self._first(self.substitutions, name, GLOBAL_SCOPE)

    def find_tag(self, name: str) -> Tag | None:
        return self._first(self.tags, name, GLOBAL_SCOPE)

    def find_constant(self, name: str, file_scope: int = GLOBAL_SCOPE) -> ConstantLike | None:
        return self._first(self.constants, name, file_scope)

    def find_enumerator(self, name: str, file_scope: int = GLOBAL_SCOPE) -> Enumerator | None:
        return self._first(self.enumerators, name, file_scope)

    def find_variable(self, name: str, file_scope: int = GLOBAL_SCOPE) -> Variable | None:
        return self._first(self.variables, name, file_scope)

    def find_function(self, name: str, file_scope: int = GLOBAL_SCOPE) -> Function | None:
        return self._first(self.functions, name, file_scope)

    def lookup(
        self, name: str, file_scope: int = GLOBAL_SCOPE
    ) -> Substitution | Tag | Symbol | None:
        """Best match for ``name`` across all collections.

        Collections are searched in a fixed order: substitutions, tags,
        constants, enumerators, variables, functions.
        """
        return (
            self.find_substitution(name)
            or self.find_tag(name)
            or self.find_constant(name, file_scope)
            or self.find_enumerator(name, file_scope)
            or self.find_variable(name, file_scope)
            or self.find_function(name, file_scope)
        )

    def visible(
        self, items: Iterable[T], file_scope: int = GLOBAL_SCOPE
    ) -> Iterator[T]:
        return (item for item in items if self.matches(item, "", file_scope))  # type: ignore[arg-type]

    def enumerator_of(self, enum_field: EnumeratorField) -> Enumerator | None:
        """Return the enumeration ``enum_field`` belongs to, if known."""
        owner = self.field_owners.get(id(enum_field))
        if owner is not None:
            return owner
        for enumerator in self.enumerators:
            for member in enumerator.fields:
                if member.name == enum_field.name and member.file_scope == enum_field.file_scope:
                    return enumerator
        return None

    def all_symbols(self) -> Iterator[Symbol]:
        yield from self.enumerators
        yield from self.functions
        yield from self.variables
        yield from self.constants


def _is_plain_constant(item: Symbol) -> bool:
    return (
        item.ident == Ident.CONSTEXPR
        and not item.usage & (Usage.ENUMROOT | Usage.ENUMFIELD)
    )


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TableBuilder:
    """Mutable arena used to assemble the next ``SymbolTable``.

    Ingestion only rearranges the builder's lists; symbols are copied when
    ``build`` renders them, so neither ``base`` nor a table returned by an
    earlier ``build`` is ever modified.
    """

    def __init__(self, base: SymbolTable | None = None) -> None:
        self.files: list[SourceFile] = []
        self.tags: list[Tag] = []
        self.constants: list[ConstantLike] = []
        self.enumerators: list[Enumerator] = []
        self.variables: list[Variable] = []
        self.functions: list[Function] = []
        self.substitutions: list[Substitution] = []

        if base is not None:
            self.files = list(base.files)
            self.tags = list(base.tags)
            self.constants = list(base.constants)
            self.enumerators = list(base.enumerators)
            self.variables = list(base.variables)
            self.functions = list(base.functions)
            self.substitutions = list(base.substitutions)

    def ingest(
        self,
        kind: RecordKind,
        records: Sequence[BaseModel],
        policy: IngestPolicy | None = None,
    ) -> None:
        """Add one batch of records of a single kind.

        ``policy`` defaults to the documented policy of ``kind``
        (``analysis.kinds.INGEST_POLICY``).
        """
        if kind is RecordKind.ERROR:
            msg = "Error records are not symbols"
            raise ValueError(msg)
        if policy is None:
            policy = INGEST_POLICY[kind]

        if kind is RecordKind.FILES:
            incoming_files = [
                SourceFile(path=normalize_path(r.file_path), index=r.number)
                for r in (_require(rec, FileRecord) for rec in records)
            ]
            self.files = _combine(self.files, incoming_files, policy, lambda f: f.path)
        elif kind is RecordKind.TAGS:
            incoming_tags = [
                Tag(name=r.name, value=r.value, index=r.index)
                for r in (_require(rec, TagRecord) for rec in records)
            ]
            self.tags = _combine(self.tags, incoming_tags, policy, _by_name)
        elif kind is RecordKind.CONSTANTS:
            incoming_constants = [
                _constant_from_record(_require(rec, ConstantRecord)) for rec in records
            ]
            self.constants = _combine(
                self.constants, incoming_constants, policy, _by_name
            )
        elif kind is RecordKind.ENUMERATORS:
            incoming_enums = [
                _enumerator_from_record(_require(rec, EnumeratorRecord))
                for rec in records
            ]
            redeclared = {(e.name, e.file_scope) for e in incoming_enums}
            replaced_keys = {
                (m.name, m.file_scope) for e in self.enumerators for m in e.fields
            } | {
                (e.name, e.file_scope)
                for e in self.enumerators
                if (e.name, e.file_scope) not in redeclared
            }
            self.enumerators = _combine(
                self.enumerators, incoming_enums, policy, _by_name
            )
            if policy is IngestPolicy.REPLACE:
                # Fields and roots reported as constants are separate objects.
                self.constants = [
                    c
                    for c in self.constants
                    if not (
                        isinstance(c, (EnumeratorField, Enumerator))
                        and (c.name, c.file_scope) in replaced_keys
                    )
                ]
            # Fields are also looked up as standalone constants.
            fields = [f for enumerator in self.enumerators for f in enumerator.fields]
            self.constants = _combine(
                self.constants, fields, IngestPolicy.MERGE, _by_name
            )
        elif kind is RecordKind.VARIABLES:
            incoming_vars = [
                _variable_from_record(_require(rec, VariableRecord)) for rec in records
            ]
            self.variables = _combine(self.variables, incoming_vars, policy, _by_name)
        elif kind is RecordKind.FUNCTIONS:
            incoming_funcs = [
                _function_from_record(_require(rec, FunctionRecord)) for rec in records
            ]
            self.functions = _combine(self.functions, incoming_funcs, policy, _by_name)
        elif kind is RecordKind.SUBSTITUTES:
            incoming_subs = [
                Substitution(
                    pattern=r.pattern,
                    match_length=r.match_length,
                    substitution=r.substitution,
                )
                for r in (_require(rec, SubstituteRecord) for rec in records)
                if INTERNAL_PATTERN_MARKER not in r.pattern
            ]
            self.substitutions = _combine(
                self.substitutions, incoming_subs, policy, lambda s: s.pattern
            )
        else:
            raise AssertionError(kind)

    def ingest_batch(self, batch: AnalysisBatch) -> None:
        for kind, records in batch.chunks:
            self.ingest(kind, records)

    def build(self) -> SymbolTable:
        """Freeze the collected records and render every detail string."""
        constants = [
            self._full_enumerator(c) if isinstance(c, Enumerator) else c
            for c in remove_redefinitions(self.constants, _by_name)
        ]
        # One deepcopy call keeps enumerator fields shared with constants.
        files, tags, constants, enumerators, variables, functions, substitutions = (
            copy.deepcopy(
                (
                    self.files,
                    self.tags,
                    constants,
                    self.enumerators,
                    self.variables,
                    self.functions,
                    self.substitutions,
                )
            )
        )
        field_owners = {
            id(member): enumerator
            for enumerator in enumerators
            for member in enumerator.fields
        }
        table = SymbolTable(
            files=tuple(files),
            tags=tuple(tags),
            constants=tuple(constants),
            enumerators=tuple(enumerators),
            variables=tuple(variables),
            functions=tuple(functions),
            substitutions=tuple(substitutions),
            field_owners=field_owners,
        )
        DetailRenderer(table).refresh()
        logger.debug(
            "symbol_table_built",
            files=len(table.files),
            tags=len(table.tags),
            constants=len(table.constants),
            enumerators=len(table.enumerators),
            variables=len(table.variables),
            functions=len(table.functions),
            substitutions=len(table.substitutions),
        )
        return table

    def _full_enumerator(self, root: Enumerator) -> Enumerator:
        # A root reported among the constants has no fields of its own.
        for enumerator in self.enumerators:
            if enumerator.name == root.name and enumerator.file_scope == root.file_scope:
                return enumerator
        return root


def build_table(batch: AnalysisBatch, base: SymbolTable | None = None) -> SymbolTable:
    builder = TableBuilder(base)
    builder.ingest_batch(batch)
    return builder.build()


__all__ = [
    "INTERNAL_PATTERN_MARKER",
    "ConstantLike",
    "SymbolTable",
    "TableBuilder",
    "build_table",
    "remove_redefinitions",
]
