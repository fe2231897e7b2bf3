from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from analysis.reader import AnalysisBatch, read_analysis_file
from symbols.table import SymbolTable, build_table

FIXTURES = Path(__file__).parent / "fixtures"
ANALYSIS_OUTPUT = FIXTURES / "analysis_output.txt"


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    # cli.main installs a handler bound to the captured stderr of one test.
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def analysis_batch() -> AnalysisBatch:
    return read_analysis_file(ANALYSIS_OUTPUT)


@pytest.fixture
def table(analysis_batch: AnalysisBatch) -> SymbolTable:
    return build_table(analysis_batch)
