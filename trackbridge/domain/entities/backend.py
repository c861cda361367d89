"""Audio backend entities.

Lavalink node addressing and the playable tracks returned by its search
endpoint, with a schema-checking decoder for the raw JSON payload.
"""

from collections.abc import Mapping
from typing import Any

from attrs import define, field

from trackbridge.domain.errors import WrongShapeError


@define(frozen=True, slots=True)
class BackendEndpoint:
    """Address and shared secret of a Lavalink node."""

    host: str
    port: int | str
    password: str = field(repr=False)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@define(frozen=True, slots=True)
class BackendTrackInfo:
    """Metadata the node reports alongside each playable reference."""

    identifier: str
    is_seekable: bool
    author: str
    length: int
    is_stream: bool
    position: int
    title: str
    uri: str | None = None

    @classmethod
    def from_lavalink(cls, data: Mapping[str, Any]) -> "BackendTrackInfo":
        """Decode the `info` object of a loadtracks entry."""
        return cls(
            identifier=_require(data, "identifier", str),
            is_seekable=_require(data, "isSeekable", bool),
            author=_require(data, "author", str),
            length=_require(data, "length", int),
            is_stream=_require(data, "isStream", bool),
            position=data.get("position", 0),
            title=_require(data, "title", str),
            uri=data.get("uri"),
        )


@define(frozen=True, slots=True)
class BackendTrack:
    """One search result: an opaque playable reference plus its info."""

    track: str
    info: BackendTrackInfo

    @property
    def length(self) -> int:
        """Duration in milliseconds."""
        return self.info.length

    @classmethod
    def from_lavalink(cls, data: Any) -> "BackendTrack":
        if not isinstance(data, Mapping):
            raise WrongShapeError(
                f"Search result entries must be objects, received type {type(data).__name__}"
            )
        info = data.get("info")
        if not isinstance(info, Mapping):
            raise WrongShapeError("Search result entry has no info object")
        return cls(
            track=_require(data, "track", str),
            info=BackendTrackInfo.from_lavalink(info),
        )


def decode_search_result(payload: Any) -> list[BackendTrack]:
    """Decode a loadtracks response body into candidates, keeping node order.

    Raises:
        WrongShapeError: payload is not an object with a `tracks` list, or an
            entry does not match the track schema
    """
    if not isinstance(payload, Mapping):
        raise WrongShapeError(
            f"Search response must be an object, received type {type(payload).__name__}"
        )
    tracks = payload.get("tracks")
    if not isinstance(tracks, list):
        raise WrongShapeError("Search response has no tracks list")
    return [BackendTrack.from_lavalink(entry) for entry in tracks]


def _require(data: Mapping[str, Any], key: str, expected: type) -> Any:
    value = data.get(key)
    # bool is a subclass of int; a boolean length is still malformed
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise WrongShapeError(
            f"Expected {key!r} to be {expected.__name__}, received {type(value).__name__}"
        )
    return value
