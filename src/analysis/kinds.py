"""Discriminants shared by the compiler's analysis output and the symbol model.

The numeric values are part of the wire format emitted by the analysis
compiler and must not be renumbered.
"""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag

# File index used for symbols that are visible from every file.
GLOBAL_SCOPE = -1


class Ident(IntEnum):
    """Symbol variant codes as reported by the compiler."""

    LABEL = 0
    VARIABLE = 1  # lvalue with an address
    REFERENCE = 2  # VARIABLE that must be dereferenced
    ARRAY = 3
    REFARRAY = 4  # array passed by reference
    ARRAYCELL = 5
    ARRAYCHAR = 6
    EXPRESSION = 7  # rvalue, no address
    CONSTEXPR = 8
    FUNCTION = 9
    REFFUNC = 10
    VARARGS = 11


class Usage(IntFlag):
    """Usage bits.

    The compiler reuses bit positions with a different meaning per symbol
    family (variables, functions, constants), so several members alias the
    same value. Always test the member that matches the symbol family.
    """

    DEFINE = 0x001
    READ = 0x002
    WRITTEN = 0x004
    RETVALUE = 0x004
    CONST = 0x008
    PROTOTYPED = 0x008
    PREDEF = 0x008
    PUBLIC = 0x010
    NATIVE = 0x020
    ENUMROOT = 0x020
    STOCK = 0x040
    ENUMFIELD = 0x040
    MISSING = 0x080
    FORWARD = 0x100


class ArrayType(IntEnum):
    """How an array dimension is expressed."""

    INTEGER = 1
    ENUMERATOR = 2


class ErrorType(IntEnum):
    ERROR = 1
    FATAL_ERROR = 2
    WARNING = 3


class RecordKind(str, Enum):
    """Value of the ``type`` field on each analysis output line."""

    FILES = "files"
    TAGS = "tags"
    CONSTANTS = "constants"
    ENUMERATORS = "enumerators"
    VARIABLES = "variables"
    FUNCTIONS = "functions"
    SUBSTITUTES = "substitutes"
    ERROR = "error"


class IngestPolicy(str, Enum):
    """How a batch of records is combined with what a table already holds."""

    REPLACE = "replace"
    MERGE = "merge"


INGEST_POLICY: dict[RecordKind, IngestPolicy] = {
    RecordKind.FILES: IngestPolicy.REPLACE,
    RecordKind.TAGS: IngestPolicy.REPLACE,
    RecordKind.ENUMERATORS: IngestPolicy.REPLACE,
    RecordKind.FUNCTIONS: IngestPolicy.REPLACE,
    RecordKind.SUBSTITUTES: IngestPolicy.REPLACE,
    RecordKind.VARIABLES: IngestPolicy.MERGE,
    RecordKind.CONSTANTS: IngestPolicy.MERGE,
}


__all__ = [
    "GLOBAL_SCOPE",
    "INGEST_POLICY",
    "ArrayType",
    "ErrorType",
    "Ident",
    "IngestPolicy",
    "RecordKind",
    "Usage",
]
