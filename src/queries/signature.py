"""Signature help for the call enclosing the cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from queries.text import find_call_start, is_in_comment, is_in_string, previous_token

if TYPE_CHECKING:
    from symbols.table import SymbolTable


@dataclass(frozen=True)
class SignatureInfo:
    label: str
    parameters: tuple[str, ...] = ()
    active_parameter: int = 0


def signature_help(
    table: SymbolTable, document: str, offset: int, file_path: str
) -> SignatureInfo | None:
    """Describe the function or macro being called at ``offset``.

    A macro with the callee's name takes precedence over a function. The
    active parameter is the number of top-level commas already typed,
    clamped to the last argument.
    """
    if is_in_comment(document, offset) or is_in_string(document, offset):
        return None

    call = find_call_start(document, offset)
    if call is None:
        return None

    callee = previous_token(document, call.open_paren)
    if callee is None:
        return None

    macro = table.find_substitution(callee.text)
    if macro is not None:
        return SignatureInfo(label=macro.detail)

    function = table.find_function(callee.text, table.file_index_of(file_path))
    if function is None:
        return None

    parameters = tuple(argument.detail for argument in function.arguments)
    active = max(0, min(len(call.commas), len(parameters) - 1))
    return SignatureInfo(
        label=function.detail, parameters=parameters, active_parameter=active
    )


__all__ = ["SignatureInfo", "signature_help"]
