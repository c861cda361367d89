"""Application layer: track resolution use case and the TrackBridge facade."""

from .bridge import TrackBridge
from .resolver import TrackResolution, TrackResolver

__all__ = [
    "TrackBridge",
    "TrackResolution",
    "TrackResolver",
]
