"""Built-in match strategies and per-call match options."""

from collections.abc import Callable

from attrs import converters, define, field

from trackbridge.domain.entities import BackendTrack, CatalogTrack

from .algorithms import DURATION_TOLERANCE_MS, calculate_title_similarity
from .protocols import MatchStrategy

FilterFunc = Callable[[BackendTrack, CatalogTrack], bool]
SortFunc = Callable[[BackendTrack, BackendTrack, CatalogTrack], int]


@define(frozen=True, slots=True)
class DefaultMatchStrategy:
    """Accept every candidate and treat all pairs as equal."""

    def accept(self, candidate: BackendTrack, catalog_track: CatalogTrack) -> bool:
        return True

    def compare(
        self,
        first: BackendTrack,
        second: BackendTrack,
        catalog_track: CatalogTrack,
    ) -> int:
        return 0


@define(frozen=True, slots=True)
class CallableMatchStrategy:
    """Adapt plain filter/sort functions to the MatchStrategy protocol.

    Either function may be omitted; the omitted half behaves like
    DefaultMatchStrategy.

    Example:
        >>> strategy = CallableMatchStrategy(
        ...     filter=lambda candidate, track: not candidate.info.is_stream,
        ...     sort=lambda a, b, track: b.length - a.length,
        ... )
    """

    filter: FilterFunc | None = None
    sort: SortFunc | None = None

    def accept(self, candidate: BackendTrack, catalog_track: CatalogTrack) -> bool:
        if self.filter is None:
            return True
        return bool(self.filter(candidate, catalog_track))

    def compare(
        self,
        first: BackendTrack,
        second: BackendTrack,
        catalog_track: CatalogTrack,
    ) -> int:
        if self.sort is None:
            return 0
        return self.sort(first, second, catalog_track)


@define(frozen=True, slots=True)
class PreferOriginalStrategy:
    """Skip live streams and rank studio versions over variations.

    Candidates are ordered by how closely their title matches the catalog
    track's display title; titles carrying variation markers such as
    "live" or "remix" score lower.
    """

    allow_streams: bool = False

    def accept(self, candidate: BackendTrack, catalog_track: CatalogTrack) -> bool:
        return self.allow_streams or not candidate.info.is_stream

    def compare(
        self,
        first: BackendTrack,
        second: BackendTrack,
        catalog_track: CatalogTrack,
    ) -> int:
        first_score = _title_score(first, catalog_track)
        second_score = _title_score(second, catalog_track)
        # Higher similarity sorts first
        return (second_score > first_score) - (second_score < first_score)


def _title_score(candidate: BackendTrack, catalog_track: CatalogTrack) -> float:
    # Uploads are titled either "Artist - Song" or just "Song"
    return max(
        calculate_title_similarity(candidate.info.title, catalog_track.display_title),
        calculate_title_similarity(candidate.info.title, catalog_track.name),
    )


@define(frozen=True, slots=True)
class MatchOptions:
    """Options for a single resolution call.

    Attributes:
        prioritize_same_duration: Return the first candidate (in backend order)
            whose length is within duration_tolerance_ms of the catalog track
            before consulting the strategy
        strategy: Filter and ordering policy for the general selection stage
        duration_tolerance_ms: Inclusive window for the duration shortcut
    """

    prioritize_same_duration: bool = False
    strategy: MatchStrategy = field(
        factory=DefaultMatchStrategy,
        converter=converters.default_if_none(factory=DefaultMatchStrategy),
    )
    duration_tolerance_ms: int = DURATION_TOLERANCE_MS
