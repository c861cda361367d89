"""trackbridge - resolve Spotify catalog tracks into playable Lavalink tracks."""

from trackbridge.application import TrackBridge, TrackResolution, TrackResolver
from trackbridge.domain.entities import (
    Artist,
    BackendEndpoint,
    BackendTrack,
    BackendTrackInfo,
    CatalogTrack,
)
from trackbridge.domain.errors import (
    CredentialExchangeError,
    MissingInputError,
    TrackBridgeError,
    WrongShapeError,
)
from trackbridge.domain.matching import (
    CallableMatchStrategy,
    DefaultMatchStrategy,
    MatchOptions,
    MatchStrategy,
    PreferOriginalStrategy,
)

__version__ = "0.1.0"

__all__ = [
    "Artist",
    "BackendEndpoint",
    "BackendTrack",
    "BackendTrackInfo",
    "CallableMatchStrategy",
    "CatalogTrack",
    "CredentialExchangeError",
    "DefaultMatchStrategy",
    "MatchOptions",
    "MatchStrategy",
    "MissingInputError",
    "PreferOriginalStrategy",
    "TrackBridge",
    "TrackBridgeError",
    "TrackResolution",
    "TrackResolver",
    "WrongShapeError",
]
