"""Best-match selection over an ordered list of backend candidates."""

from collections.abc import Sequence
from functools import cmp_to_key

from trackbridge.domain.entities import BackendTrack, CatalogTrack

from .algorithms import find_same_duration
from .strategies import MatchOptions


def select_best_match(
    candidates: Sequence[BackendTrack],
    catalog_track: CatalogTrack,
    options: MatchOptions | None = None,
) -> BackendTrack | None:
    """Pick at most one candidate for the catalog track.

    1. No candidates: None.
    2. With prioritize_same_duration, the first candidate in the given order
       inside the duration window is returned immediately.
    3. Otherwise candidates are filtered with strategy.accept, stable-sorted
       with strategy.compare, and the head is returned (None if empty).

    The returned object is always one of ``candidates``.
    """
    if not candidates:
        return None

    options = options or MatchOptions()

    if options.prioritize_same_duration and catalog_track.duration_ms is not None:
        same_duration = find_same_duration(
            candidates, catalog_track.duration_ms, options.duration_tolerance_ms
        )
        if same_duration is not None:
            return same_duration

    strategy = options.strategy
    pool = [c for c in candidates if strategy.accept(c, catalog_track)]
    # list.sort is stable, so equal candidates keep backend order
    pool.sort(key=cmp_to_key(lambda a, b: strategy.compare(a, b, catalog_track)))

    return pool[0] if pool else None
