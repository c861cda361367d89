"""Shared test fixtures - domain values and raw API payloads.

Fast creation, no network, function-scoped for isolation.
"""

import pytest

from tests.fixtures.factories import make_backend_track
from trackbridge.domain.entities import Artist, BackendEndpoint, CatalogTrack


@pytest.fixture
def catalog_track():
    """Catalog track used across resolution scenarios."""
    return CatalogTrack(
        name="Song",
        artists=[Artist(name="Artist A"), Artist(name="Artist B")],
        duration_ms=200000,
        id="4uLU6hMCjMI75M1A2tKUQC",
    )


@pytest.fixture
def raw_catalog_track():
    """Spotify track object as decoded from JSON."""
    return {
        "id": "4uLU6hMCjMI75M1A2tKUQC",
        "uri": "spotify:track:4uLU6hMCjMI75M1A2tKUQC",
        "name": "Song",
        "artists": [{"name": "Artist A"}, {"name": "Artist B"}],
        "duration_ms": 200000,
    }


@pytest.fixture
def candidates():
    """Two candidates in backend order: near-duration first, long second."""
    return [make_backend_track(198000), make_backend_track(250000)]


@pytest.fixture
def endpoint():
    return BackendEndpoint(host="lavalink.local", port=2333, password="youshallnotpass")
