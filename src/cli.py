"""Command-line interface for pawnsense."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from analysis.reader import AnalysisBatch, read_analysis_file
from queries.service import QueryService
from settings.config import ConfigError, PawnSenseConfig, load_config
from settings.logging import configure_logging
from symbols.store import SymbolStore
from symbols.table import SymbolTable


def _add_analysis_path(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "analysis",
        help="File holding the compiler's JSON analysis output",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pawnsense")
    parser.add_argument(
        "--root",
        default=".",
        help="Directory containing pawnsense.toml (default: .)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    symbols_parser = subparsers.add_parser(
        "symbols", help="Print the declaration of every symbol"
    )
    _add_analysis_path(symbols_parser)
    symbols_parser.add_argument(
        "--file",
        default=None,
        help="Only print symbols visible from this source file",
    )

    errors_parser = subparsers.add_parser(
        "errors", help="Print compiler diagnostics"
    )
    _add_analysis_path(errors_parser)

    hover_parser = subparsers.add_parser(
        "hover", help="Print hover markdown for a source position"
    )
    _add_analysis_path(hover_parser)
    hover_parser.add_argument("source", help="Source file being hovered")
    hover_parser.add_argument("line", type=int, help="Line number (1-based)")
    hover_parser.add_argument("column", type=int, help="Column number (1-based)")

    expand_parser = subparsers.add_parser(
        "expand", help="Preview macro expansion of a line of text"
    )
    _add_analysis_path(expand_parser)
    expand_parser.add_argument("--text", required=True, help="Text to expand")

    return parser


def _load_store(analysis: str) -> tuple[SymbolStore, AnalysisBatch]:
    batch = read_analysis_file(Path(analysis))
    for issue in batch.issues:
        sys.stderr.write(f"{analysis}:{issue.location()}: {issue.message}\n")
    store = SymbolStore()
    store.rebuild(batch)
    return store, batch


def _position_offset(document: str, line: int, column: int) -> int:
    lines = document.split("\n")
    if not 1 <= line <= len(lines):
        msg = f"line {line} is outside the document (1-{len(lines)})"
        raise ValueError(msg)
    offset = sum(len(text) + 1 for text in lines[: line - 1])
    return offset + min(max(column - 1, 0), len(lines[line - 1]))


def _visible_details(table: SymbolTable, file_path: str | None) -> list[str]:
    scope = table.file_index_of(file_path) if file_path is not None else None
    details = [tag.detail for tag in table.tags]
    details.extend(
        sub.detail
        for sub in (
            table.substitutions
            if scope is None
            else table.visible(table.substitutions, scope)
        )
    )
    for symbol in table.all_symbols():
        if scope is None or table.matches(symbol, "", scope):
            details.append(symbol.detail)
    return details


def _handle_symbols(analysis: str, file_path: str | None) -> int:
    store, _ = _load_store(analysis)
    for detail in _visible_details(store.current, file_path):
        sys.stdout.write(f"{detail}\n")
    return 0


def _handle_errors(analysis: str) -> int:
    batch = read_analysis_file(Path(analysis))
    for error in batch.errors:
        sys.stdout.write(f"{error.detail()}\n")
    return 1 if batch.errors else 0


def _handle_hover(
    analysis: str, source: str, line: int, column: int, config: PawnSenseConfig
) -> int:
    store, _ = _load_store(analysis)
    document = Path(source).read_text(encoding="utf-8")
    try:
        offset = _position_offset(document, line, column)
    except ValueError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    markdown = QueryService(store, config).hover(document, offset, source)
    if markdown is None:
        return 1
    sys.stdout.write(f"{markdown}\n")
    return 0


def _handle_expand(analysis: str, text: str, config: PawnSenseConfig) -> int:
    store, _ = _load_store(analysis)
    preview = QueryService(store, config).preview(text, 0)
    if preview is None:
        return 1
    sys.stdout.write(f"{preview}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    configure_logging(config=config.logging)

    try:
        if args.command == "symbols":
            return _handle_symbols(args.analysis, args.file)

        if args.command == "errors":
            return _handle_errors(args.analysis)

        if args.command == "hover":
            return _handle_hover(
                args.analysis, args.source, args.line, args.column, config
            )

        if args.command == "expand":
            return _handle_expand(args.analysis, args.text, config)
    except (FileNotFoundError, IsADirectoryError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError
