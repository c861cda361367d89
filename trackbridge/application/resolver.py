"""Track resolution use case.

Turns catalog tracks into playable backend tracks:

1. Validate the catalog track (raises before any I/O)
2. Search the backend for "<primary artist> - <track name>"
3. Select at most one candidate with select_best_match

The resolver holds no per-call state, so any number of resolve() calls may
run concurrently on one instance.
"""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from attrs import define, field

from trackbridge.config import get_logger
from trackbridge.domain.entities import BackendTrack, CatalogTrack, coerce_catalog_track
from trackbridge.domain.matching import MatchOptions, select_best_match
from trackbridge.infrastructure.connectors.protocols import SearchConnectorProtocol

logger = get_logger(__name__)

TrackInput = CatalogTrack | Mapping[str, Any] | None


@define(frozen=True, slots=True)
class TrackResolution:
    """Outcome of resolving one track inside a batch.

    Exactly one of three cases holds: a match, no match (both fields None),
    or an error captured from that track's resolution.
    """

    catalog_track: TrackInput
    match: BackendTrack | None = None
    error: Exception | None = None

    @property
    def resolved(self) -> bool:
        return self.match is not None

    @property
    def failed(self) -> bool:
        return self.error is not None


@define(slots=True)
class TrackResolver:
    """Resolve catalog tracks against a search backend.

    Args:
        search_connector: Backend that returns candidates for a display title
        default_options: Used when a call passes no MatchOptions
    """

    search_connector: SearchConnectorProtocol
    default_options: MatchOptions = field(factory=MatchOptions)

    async def resolve(
        self,
        catalog_track: TrackInput,
        options: MatchOptions | None = None,
    ) -> BackendTrack | None:
        """Find the best playable match for one catalog track.

        Args:
            catalog_track: CatalogTrack or raw catalog track mapping
            options: Matching options; defaults to the resolver's defaults

        Returns:
            One of the backend's candidates, or None when nothing is acceptable

        Raises:
            MissingInputError: track, artists or name missing
            WrongShapeError: artists or name of the wrong type
        """
        track = coerce_catalog_track(catalog_track)
        options = options or self.default_options

        candidates = await self.search_connector.search(track.display_title)
        if not candidates:
            logger.debug("No backend candidates for {!r}", track.display_title)
            return None

        match = select_best_match(candidates, track, options)
        if match is None:
            logger.debug(
                "All {} candidates rejected for {!r}",
                len(candidates),
                track.display_title,
            )
        else:
            logger.debug(
                "Matched {!r} to {!r}",
                track.display_title,
                match.info.title,
                identifier=match.info.identifier,
            )
        return match

    async def resolve_many(
        self,
        catalog_tracks: Iterable[TrackInput],
        options: MatchOptions | None = None,
    ) -> list[TrackResolution]:
        """Resolve tracks concurrently, one result per input in input order.

        A failure resolving one track is recorded on its TrackResolution and
        does not affect the others.
        """
        tracks = list(catalog_tracks)
        outcomes = await asyncio.gather(
            *(self.resolve(track, options) for track in tracks),
            return_exceptions=True,
        )

        results = []
        for track, outcome in zip(tracks, outcomes, strict=True):
            if isinstance(outcome, Exception):
                logger.warning(f"Track resolution failed: {outcome!s}")
                results.append(TrackResolution(catalog_track=track, error=outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results.append(TrackResolution(catalog_track=track, match=outcome))

        resolved = sum(1 for r in results if r.resolved)
        logger.info(f"Resolved {resolved}/{len(results)} tracks")
        return results
