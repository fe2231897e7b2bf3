"""Read the compiler's analysis output into typed record batches.

Each non-empty output line is a JSON object ``{"type": ..., "contents": ...}``.
A line that cannot be decoded, or a single record that fails validation, is
reported and skipped; the remainder of the output is still ingested.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
import structlog
from pydantic import BaseModel, ValidationError

from analysis.kinds import RecordKind
from analysis.records import RECORD_MODELS, ErrorRecord

if TYPE_CHECKING:
    from pathlib import Path

logger = structlog.get_logger(__name__)

# The compiler prints non-finite floats as a bare token JSON cannot decode.
_INFINITY_TOKEN = re.compile(rb"\bInfinity\b")


@dataclass(frozen=True)
class ReadIssue:
    line: int
    message: str
    record: int | None = None

    def location(self) -> str:
        if self.record is None:
            return f"line {self.line}"
        return f"line {self.line}, record {self.record}"


@dataclass
class AnalysisBatch:
    """Everything one analysis pass produced, in output order."""

    chunks: list[tuple[RecordKind, list[BaseModel]]] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)
    issues: list[ReadIssue] = field(default_factory=list)

    def records_of(self, kind: RecordKind) -> list[BaseModel]:
        records: list[BaseModel] = []
        for chunk_kind, chunk in self.chunks:
            if chunk_kind is kind:
                records.extend(chunk)
        return records


def read_analysis_output(output: str | bytes) -> AnalysisBatch:
    """Parse the full stdout of one analysis run."""
    raw = output.encode("utf-8") if isinstance(output, str) else output
    batch = AnalysisBatch()

    for line_number, raw_line in enumerate(raw.split(b"\n"), 1):
        line = raw_line.replace(b"\r", b"").strip()
        if not line:
            continue
        _read_line(line_number, line, batch)

    logger.debug(
        "analysis_output_read",
        chunks=len(batch.chunks),
        errors=len(batch.errors),
        issues=len(batch.issues),
    )
    return batch


def read_analysis_file(path: Path) -> AnalysisBatch:
    return read_analysis_output(path.read_bytes())


def _read_line(line_number: int, line: bytes, batch: AnalysisBatch) -> None:
    try:
        data = orjson.loads(_INFINITY_TOKEN.sub(b"0.0", line))
    except orjson.JSONDecodeError as exc:
        _skip(batch, line_number, f"Invalid JSON: {exc}.")
        return

    if not isinstance(data, dict) or "type" not in data:
        _skip(batch, line_number, "Expected an object with a 'type' field.")
        return

    try:
        kind = RecordKind(data["type"])
    except ValueError:
        _skip(batch, line_number, f"Unknown record type: {data['type']!r}.")
        return

    contents: Any = data.get("contents", [])
    if isinstance(contents, dict):
        contents = [contents]
    if not isinstance(contents, list):
        _skip(batch, line_number, "Expected 'contents' to be a list or object.")
        return

    model = RECORD_MODELS[kind]
    records: list[BaseModel] = []
    for index, item in enumerate(contents):
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            _skip(
                batch,
                line_number,
                f"Schema validation failed for {kind.value}: {exc}.",
                record=index,
            )

    if kind is RecordKind.ERROR:
        batch.errors.extend(r for r in records if isinstance(r, ErrorRecord))
        return

    batch.chunks.append((kind, records))


def _skip(
    batch: AnalysisBatch, line: int, message: str, *, record: int | None = None
) -> None:
    issue = ReadIssue(line=line, message=message, record=record)
    batch.issues.append(issue)
    logger.warning("analysis_line_skipped", location=issue.location(), reason=message)


__all__ = [
    "AnalysisBatch",
    "ReadIssue",
    "read_analysis_file",
    "read_analysis_output",
]
