"""Record models for the compiler's line-oriented analysis output.

Field names follow the wire format so that each ``contents`` entry validates
directly into its model.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from analysis.kinds import (
    GLOBAL_SCOPE,
    ArrayType,
    ErrorType,
    Ident,
    RecordKind,
    Usage,
)


class FileRecord(BaseModel):
    """A source file that took part in the analysis pass."""

    file_path: str
    number: int


class TagRecord(BaseModel):
    """A tag name and the numeric id symbols refer to it by."""

    name: str
    value: int
    index: int = 0


class ArrayDimRecord(BaseModel):
    array_type: ArrayType = ArrayType.INTEGER
    array_value: int = 0


class ConstantRecord(BaseModel):
    """A named constant, including enumerator roots and fields."""

    name: str
    value: int | float = 0
    index: int = 0
    ident: Ident = Ident.CONSTEXPR
    usage: int = 0
    tagid: int = 0
    file_number: int = GLOBAL_SCOPE
    array: list[ArrayDimRecord] = Field(default_factory=list)


class EnumeratorFieldRecord(BaseModel):
    name: str
    value: int | float = 0
    ident: Ident = Ident.CONSTEXPR
    usage: int = Usage.ENUMFIELD.value
    tagid: int = 0
    file_number: int = GLOBAL_SCOPE
    array: list[ArrayDimRecord] = Field(default_factory=list)


class EnumeratorRecord(BaseModel):
    name: str
    tagid: int = 0
    ident: Ident = Ident.CONSTEXPR
    usage: int = Usage.ENUMROOT.value
    file_number: int = GLOBAL_SCOPE
    field: list[EnumeratorFieldRecord] = Field(default_factory=list)


class VariableRecord(BaseModel):
    name: str
    ident: Ident = Ident.VARIABLE
    usage: int = 0
    tagid: int = 0
    file_number: int = GLOBAL_SCOPE
    array: list[ArrayDimRecord] = Field(default_factory=list)


class ArgumentRecord(BaseModel):
    """A function argument.

    ``reference``/``reference_value`` carry the tag id and value of a
    tag-typed default so it can be shown by constant name.
    """

    name: str
    ident: Ident = Ident.VARIABLE
    usage: int = 0
    tagid: int = 0
    file_number: int = GLOBAL_SCOPE
    dimension: int = 0
    tag_list: list[int] = Field(default_factory=list)
    hasdefault: int = 0
    default_value: int | float | str = 0
    reference: int | str = 0
    reference_value: int | float = 0


class FunctionRecord(BaseModel):
    name: str
    ident: Ident = Ident.FUNCTION
    usage: int = 0
    tagid: int = 0
    file_number: int = GLOBAL_SCOPE
    argument: list[ArgumentRecord] = Field(default_factory=list)


class SubstituteRecord(BaseModel):
    """A text-substitution macro as declared with ``#define``."""

    pattern: str
    match_length: int
    substitution: str = ""


_ERROR_LABELS: dict[ErrorType, str] = {
    ErrorType.ERROR: "error",
    ErrorType.WARNING: "warning",
    ErrorType.FATAL_ERROR: "fatal error",
}


class ErrorRecord(BaseModel):
    """A compiler diagnostic; consumed by the diagnostics publisher."""

    file_name: str
    error_id: int
    first_line: int = -1
    last_line: int
    error_type: ErrorType = ErrorType.ERROR
    error_message: str = ""

    def detail(self) -> str:
        """Render the diagnostic the way the compiler prints it."""
        if self.first_line >= 0:
            location = f"{self.file_name}({self.first_line} -- {self.last_line} : "
        else:
            location = f"{self.file_name}({self.last_line}) : "
        message = self.error_message.replace("\n", "")
        label = _ERROR_LABELS[self.error_type]
        return f"{location}{label} {self.error_id:03d}: {message}"


RECORD_MODELS: dict[RecordKind, type[BaseModel]] = {
    RecordKind.FILES: FileRecord,
    RecordKind.TAGS: TagRecord,
    RecordKind.CONSTANTS: ConstantRecord,
    RecordKind.ENUMERATORS: EnumeratorRecord,
    RecordKind.VARIABLES: VariableRecord,
    RecordKind.FUNCTIONS: FunctionRecord,
    RecordKind.SUBSTITUTES: SubstituteRecord,
    RecordKind.ERROR: ErrorRecord,
}


__all__ = [
    "RECORD_MODELS",
    "ArgumentRecord",
    "ArrayDimRecord",
    "ConstantRecord",
    "EnumeratorFieldRecord",
    "EnumeratorRecord",
    "ErrorRecord",
    "FileRecord",
    "FunctionRecord",
    "SubstituteRecord",
    "TagRecord",
    "VariableRecord",
]
