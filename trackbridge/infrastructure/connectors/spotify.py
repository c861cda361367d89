"""Spotify catalog connector with domain model conversion.

This module fetches album, playlist and single-track metadata from the Spotify
Web API using the spotipy library (https://spotipy.readthedocs.io/) and
converts the responses into CatalogTrack values.

Authentication is delegated to SpotifyCredentialManager: every request uses
whatever token the manager currently holds. A missing or stale token is not
detected locally; Spotify rejects the request and the SpotifyException
propagates to the caller. spotipy's own retry behaviour is disabled.
"""

import asyncio
from typing import Any

from attrs import define
import spotipy

from trackbridge.config import get_logger, resilient_operation
from trackbridge.domain.entities import CatalogTrack
from trackbridge.domain.errors import MissingInputError, WrongShapeError
from trackbridge.infrastructure.connectors.spotify_auth import SpotifyCredentialManager

# Get contextual logger with service binding
logger = get_logger(__name__).bind(service="spotify")

SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1/"

# Maximum page sizes accepted by the Web API
ALBUM_TRACKS_PAGE_SIZE = 50
PLAYLIST_ITEMS_PAGE_SIZE = 100


def validate_catalog_id(value: Any, kind: str) -> str:
    """Check a catalog ID argument before any request is made."""
    if value is None or value == "":
        raise MissingInputError(f"The {kind} ID was not provided")
    if not isinstance(value, str):
        raise WrongShapeError(
            f"The {kind} ID must be a string, received type {type(value).__name__}"
        )
    return value


@define(slots=True)
class SpotifyCatalogConnector:
    """Read-only access to Spotify tracks, albums and playlists.

    Paginated endpoints are followed to the end so albums and playlists
    are returned whole, in catalog order.
    """

    credentials: SpotifyCredentialManager
    market: str | None = None
    request_timeout: float | None = None
    api_base_url: str = SPOTIFY_API_BASE_URL

    def _client(self) -> spotipy.Spotify:
        """Build a spotipy client bound to the current token."""
        client = spotipy.Spotify(
            auth=self.credentials.access_token,
            requests_timeout=self.request_timeout,
            retries=0,
            status_retries=0,
        )
        client.prefix = self.api_base_url
        return client

    async def get_album_tracks(self, album_id: str) -> list[CatalogTrack]:
        """Fetch every track on an album.

        Args:
            album_id: Spotify album ID

        Returns:
            Album tracks in disc/track order
        """
        return await self._fetch_album_tracks(validate_catalog_id(album_id, "album"))

    @resilient_operation("get_spotify_album_tracks")
    async def _fetch_album_tracks(self, album_id: str) -> list[CatalogTrack]:
        client = self._client()

        first_page = await asyncio.to_thread(
            client.album_tracks,
            album_id,
            limit=ALBUM_TRACKS_PAGE_SIZE,
            market=self.market,
        )
        items = await self._collect_pages(client, first_page)

        logger.debug(f"Fetched {len(items)} tracks for album {album_id}")
        return [CatalogTrack.from_catalog(item) for item in items]

    async def get_playlist_tracks(self, playlist_id: str) -> list[CatalogTrack]:
        """Fetch every track in a playlist.

        Entries without a track object (removed tracks, episodes) are skipped.

        Args:
            playlist_id: Spotify playlist ID

        Returns:
            Playlist tracks in playlist order
        """
        return await self._fetch_playlist_tracks(
            validate_catalog_id(playlist_id, "playlist")
        )

    @resilient_operation("get_spotify_playlist_tracks")
    async def _fetch_playlist_tracks(self, playlist_id: str) -> list[CatalogTrack]:
        client = self._client()

        first_page = await asyncio.to_thread(
            client.playlist_items,
            playlist_id,
            limit=PLAYLIST_ITEMS_PAGE_SIZE,
            market=self.market,
            additional_types=("track",),
        )
        items = await self._collect_pages(client, first_page)

        tracks = []
        for position, item in enumerate(items):
            track = item.get("track") if isinstance(item, dict) else None
            if not isinstance(track, dict) or track.get("type", "track") != "track":
                logger.warning(
                    f"Skipping playlist entry without a track at position {position}",
                    playlist_id=playlist_id,
                )
                continue
            tracks.append(CatalogTrack.from_catalog(track))

        logger.debug(f"Fetched {len(tracks)} tracks for playlist {playlist_id}")
        return tracks

    async def get_track(self, track_id: str) -> CatalogTrack:
        """Fetch a single track.

        Args:
            track_id: Spotify track ID
        """
        return await self._fetch_track(validate_catalog_id(track_id, "track"))

    @resilient_operation("get_spotify_track")
    async def _fetch_track(self, track_id: str) -> CatalogTrack:
        client = self._client()

        raw_track = await asyncio.to_thread(client.track, track_id, market=self.market)
        return CatalogTrack.from_catalog(raw_track)

    async def _collect_pages(
        self, client: spotipy.Spotify, page: Any
    ) -> list[dict[str, Any]]:
        """Follow `next` links from a paging object and gather all items."""
        if not isinstance(page, dict) or not isinstance(page.get("items"), list):
            raise WrongShapeError("Spotify response is not a paging object")

        items = list(page["items"])
        while page.get("next"):
            page = await asyncio.to_thread(client.next, page)
            if not isinstance(page, dict) or "items" not in page:
                logger.warning("Received invalid page data during pagination")
                break
            items.extend(page["items"])

        return items
