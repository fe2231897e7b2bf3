"""Text-substitution macro matching and expansion previews."""

from substitution.matcher import (
    MalformedPatternError,
    MatchResult,
    expand,
    match_substitution,
    pattern_prefix,
    try_match,
)
from substitution.preview import preview_at_cursor

__all__ = [
    "MalformedPatternError",
    "MatchResult",
    "expand",
    "match_substitution",
    "pattern_prefix",
    "preview_at_cursor",
    "try_match",
]
