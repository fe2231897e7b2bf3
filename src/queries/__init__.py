"""Editor queries over a published symbol table."""

from queries.completion import CompletionItem, CompletionKind, completion_items
from queries.hover import fenced, hover_markdown
from queries.service import QueryService, detail_of
from queries.signature import SignatureInfo, signature_help
from queries.text import (
    CallSite,
    Token,
    find_call_start,
    is_in_comment,
    is_in_string,
    previous_token,
    word_at,
)

__all__ = [
    "CallSite",
    "CompletionItem",
    "CompletionKind",
    "QueryService",
    "SignatureInfo",
    "Token",
    "completion_items",
    "detail_of",
    "fenced",
    "find_call_start",
    "hover_markdown",
    "is_in_comment",
    "is_in_string",
    "previous_token",
    "signature_help",
    "word_at",
]
