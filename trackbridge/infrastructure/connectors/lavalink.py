"""Lavalink search connector.

Queries a Lavalink node's /loadtracks endpoint and decodes the result into
BackendTrack values. Requests authenticate with the node's shared password,
which is unrelated to the Spotify credential.
"""

import asyncio
from typing import Any

from attrs import define
import requests

from trackbridge.config import get_logger, resilient_operation
from trackbridge.domain.entities import BackendEndpoint, BackendTrack, decode_search_result

logger = get_logger(__name__).bind(service="lavalink")

DEFAULT_SEARCH_PREFIX = "ytsearch"


@define(slots=True)
class LavalinkConnector:
    """Thin requests-based client for one Lavalink node."""

    endpoint: BackendEndpoint
    search_prefix: str = DEFAULT_SEARCH_PREFIX
    request_timeout: float | None = None

    def build_query(self, title: str) -> str:
        """Format a free-text search directive, e.g. ``ytsearch: Artist - Song``."""
        return f"{self.search_prefix}: {title}"

    @resilient_operation("lavalink_load_tracks")
    async def load_tracks(self, identifier: str) -> list[BackendTrack]:
        """Run a loadtracks request and return the candidates in node order."""
        payload = await asyncio.to_thread(
            self._get_json, "/loadtracks", {"identifier": identifier}
        )
        tracks = decode_search_result(payload)

        logger.debug(
            "Lavalink returned {} tracks for {!r}",
            len(tracks),
            identifier,
            load_type=payload.get("loadType"),
        )
        return tracks

    async def search(self, title: str) -> list[BackendTrack]:
        """Search the node's default source for a display title."""
        return await self.load_tracks(self.build_query(title))

    def _get_json(self, path: str, params: dict[str, str]) -> Any:
        response = requests.get(
            f"{self.endpoint.base_url}{path}",
            params=params,
            headers={"Authorization": self.endpoint.password},
            timeout=self.request_timeout,
        )
        response.raise_for_status()
        return response.json()
