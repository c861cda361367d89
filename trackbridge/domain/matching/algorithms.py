"""Pure algorithms for comparing backend candidates with catalog tracks.

These functions perform no I/O and implement the scoring rules used by the
selection stage and the built-in strategies.
"""

from collections.abc import Iterable

from rapidfuzz import fuzz

from trackbridge.domain.entities import BackendTrack

# Inclusive window, in milliseconds, for treating two durations as the same recording
DURATION_TOLERANCE_MS = 1500

TITLE_SIMILARITY_CONFIG = {
    "variation_similarity_score": 0.6,  # Score when a variation marker is found
    "identical_similarity_score": 1.0,  # Score for identical titles
}

VARIATION_MARKERS = (
    "live",
    "remix",
    "acoustic",
    "demo",
    "cover",
    "karaoke",
    "instrumental",
    "nightcore",
    "sped up",
    "slowed",
    "8d audio",
    "extended",
)


def is_same_duration(
    candidate_ms: int,
    reference_ms: int,
    tolerance_ms: int = DURATION_TOLERANCE_MS,
) -> bool:
    """Check whether two durations lie within tolerance_ms of each other, inclusive."""
    return abs(candidate_ms - reference_ms) <= tolerance_ms


def find_same_duration(
    candidates: Iterable[BackendTrack],
    duration_ms: int,
    tolerance_ms: int = DURATION_TOLERANCE_MS,
) -> BackendTrack | None:
    """Return the first candidate, in the given order, within the duration window.

    The first match wins even when a later candidate is closer.
    """
    return next(
        (c for c in candidates if is_same_duration(c.length, duration_ms, tolerance_ms)),
        None,
    )


def calculate_title_similarity(title1: str, title2: str) -> float:
    """Calculate title similarity accounting for variations like 'Live', 'Remix', etc."""
    title1, title2 = title1.lower(), title2.lower()

    if title1 == title2:
        return TITLE_SIMILARITY_CONFIG["identical_similarity_score"]

    # "Song" vs "Song (Live at Wembley)"
    if title1 in title2:
        remaining = title2.replace(title1, "").strip("- ()[]").strip()
        if any(marker in remaining for marker in VARIATION_MARKERS):
            return TITLE_SIMILARITY_CONFIG["variation_similarity_score"]
    elif title2 in title1:
        remaining = title1.replace(title2, "").strip("- ()[]").strip()
        if any(marker in remaining for marker in VARIATION_MARKERS):
            return TITLE_SIMILARITY_CONFIG["variation_similarity_score"]

    # token_set_ratio tolerates word order and extra words
    return fuzz.token_set_ratio(title1, title2) / 100.0
