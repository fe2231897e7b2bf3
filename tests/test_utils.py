from __future__ import annotations

from pathlib import Path

from utils import format_number, normalize_path


def test_normalize_path_collapses_segments() -> None:
    assert normalize_path("include//a_samp.inc") == normalize_path("include/a_samp.inc")
    assert normalize_path("gamemodes/../include/core.inc") == normalize_path(
        "include/core.inc"
    )
    assert normalize_path("./main.pwn") == "main.pwn"


def test_normalize_path_accepts_path_objects() -> None:
    assert normalize_path(Path("include") / "core.inc") == normalize_path(
        "include/core.inc"
    )


def test_format_number() -> None:
    assert format_number(5) == "5"
    assert format_number(-3) == "-3"
    assert format_number(2.0) == "2"
    assert format_number(1.5) == "1.5"
