"""Core domain entities for catalog tracks, backend tracks and credentials."""

from .backend import (
    BackendEndpoint,
    BackendTrack,
    BackendTrackInfo,
    decode_search_result,
)
from .credential import AccessCredential
from .track import Artist, CatalogTrack, coerce_catalog_track

__all__ = [
    # Credentials
    "AccessCredential",
    # Catalog entities
    "Artist",
    "CatalogTrack",
    "coerce_catalog_track",
    # Backend entities
    "BackendEndpoint",
    "BackendTrack",
    "BackendTrackInfo",
    "decode_search_result",
]
