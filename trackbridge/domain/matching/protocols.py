"""Protocols for caller-supplied matching hooks.

A strategy decides which backend candidates are acceptable for a catalog
track and how acceptable candidates rank against each other.
"""

from typing import Protocol, runtime_checkable

from trackbridge.domain.entities import BackendTrack, CatalogTrack


@runtime_checkable
class MatchStrategy(Protocol):
    """Filter and ordering policy applied to search candidates."""

    def accept(self, candidate: BackendTrack, catalog_track: CatalogTrack) -> bool:
        """Return True if the candidate may be selected at all."""
        ...

    def compare(
        self,
        first: BackendTrack,
        second: BackendTrack,
        catalog_track: CatalogTrack,
    ) -> int:
        """Three-way comparison: negative if first ranks ahead of second,
        positive if behind, zero if equal."""
        ...
