"""trackbridge domain layer - pure matching logic and value objects, no I/O."""

from . import entities, errors, matching
from .entities import (
    AccessCredential,
    Artist,
    BackendEndpoint,
    BackendTrack,
    BackendTrackInfo,
    CatalogTrack,
)
from .errors import (
    CredentialExchangeError,
    MissingInputError,
    TrackBridgeError,
    WrongShapeError,
)
from .matching import MatchOptions, MatchStrategy, select_best_match

__all__ = [
    # Modules
    "entities",
    "errors",
    "matching",
    # Entities
    "AccessCredential",
    "Artist",
    "BackendEndpoint",
    "BackendTrack",
    "BackendTrackInfo",
    "CatalogTrack",
    # Errors
    "CredentialExchangeError",
    "MissingInputError",
    "TrackBridgeError",
    "WrongShapeError",
    # Matching
    "MatchOptions",
    "MatchStrategy",
    "select_best_match",
]
