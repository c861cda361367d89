"""Candidate matching algorithms, strategies and options."""

from .algorithms import (
    DURATION_TOLERANCE_MS,
    calculate_title_similarity,
    find_same_duration,
    is_same_duration,
)
from .protocols import MatchStrategy
from .selection import select_best_match
from .strategies import (
    CallableMatchStrategy,
    DefaultMatchStrategy,
    MatchOptions,
    PreferOriginalStrategy,
)

__all__ = [
    "DURATION_TOLERANCE_MS",
    "CallableMatchStrategy",
    "DefaultMatchStrategy",
    "MatchOptions",
    "MatchStrategy",
    "PreferOriginalStrategy",
    "calculate_title_similarity",
    "find_same_duration",
    "is_same_duration",
    "select_best_match",
]
