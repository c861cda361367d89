"""Connector protocol definitions.

These protocols describe what the application layer needs from the catalog
and the audio backend, so the resolver and the facade can be driven by any
implementation (including test doubles) without depending on spotipy or
requests directly.
"""

from typing import Protocol, runtime_checkable

from trackbridge.domain.entities import BackendTrack, CatalogTrack


@runtime_checkable
class CatalogConnectorProtocol(Protocol):
    """Interface for connectors that read track metadata from the catalog."""

    async def get_album_tracks(self, album_id: str) -> list[CatalogTrack]:
        """Fetch all tracks of an album, in album order."""
        ...

    async def get_playlist_tracks(self, playlist_id: str) -> list[CatalogTrack]:
        """Fetch all tracks of a playlist, in playlist order."""
        ...

    async def get_track(self, track_id: str) -> CatalogTrack:
        """Fetch a single track."""
        ...


@runtime_checkable
class SearchConnectorProtocol(Protocol):
    """Interface for audio backends that search playable tracks by title."""

    async def search(self, title: str) -> list[BackendTrack]:
        """Return candidates for a display title, in backend order.

        Args:
            title: Display title in "<artist> - <track>" form
        """
        ...
