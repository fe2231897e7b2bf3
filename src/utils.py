"""Shared utilities for pawnsense"""

from __future__ import annotations

import os
from pathlib import PurePath


def normalize_path(file_path: str | PurePath) -> str:
    """Normalize a file path for comparison between compiler and editor.

    Args:
        file_path: Path as reported by the compiler or the editor

    Returns:
        Path with redundant separators and ``.``/``..`` segments collapsed

    Examples:
        >>> normalize_path("include//a_samp.inc")
        'include/a_samp.inc'
        >>> normalize_path("gamemodes/../include/core.inc")
        'include/core.inc'
    """
    return os.path.normpath(os.fspath(file_path))


def format_number(value: int | float) -> str:
    """Format a numeric literal the way the compiler's JSON consumer shows it.

    Integral floats lose their fractional part so that defaults such as
    ``0.0`` print as ``0``.

    Examples:
        >>> format_number(5)
        '5'
        >>> format_number(2.0)
        '2'
        >>> format_number(1.5)
        '1.5'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
