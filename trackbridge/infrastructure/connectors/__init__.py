"""Service connectors for the Spotify catalog and the Lavalink audio backend."""

from trackbridge.infrastructure.connectors.lavalink import LavalinkConnector
from trackbridge.infrastructure.connectors.protocols import (
    CatalogConnectorProtocol,
    SearchConnectorProtocol,
)
from trackbridge.infrastructure.connectors.spotify import SpotifyCatalogConnector
from trackbridge.infrastructure.connectors.spotify_auth import (
    CredentialState,
    SpotifyCredentialManager,
)

__all__ = [
    "CatalogConnectorProtocol",
    "CredentialState",
    "LavalinkConnector",
    "SearchConnectorProtocol",
    "SpotifyCatalogConnector",
    "SpotifyCredentialManager",
]
