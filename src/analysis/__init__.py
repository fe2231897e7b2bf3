"""Ingestion boundary for the compiler's analysis output."""

from analysis.kinds import (
    GLOBAL_SCOPE,
    INGEST_POLICY,
    ArrayType,
    ErrorType,
    Ident,
    IngestPolicy,
    RecordKind,
    Usage,
)
from analysis.reader import (
    AnalysisBatch,
    ReadIssue,
    read_analysis_file,
    read_analysis_output,
)

__all__ = [
    "GLOBAL_SCOPE",
    "INGEST_POLICY",
    "AnalysisBatch",
    "ArrayType",
    "ErrorType",
    "Ident",
    "IngestPolicy",
    "ReadIssue",
    "RecordKind",
    "Usage",
    "read_analysis_file",
    "read_analysis_output",
]
