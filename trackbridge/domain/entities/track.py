"""Track-related domain entities.

Catalog-side track representations and the validating decoder that turns raw
catalog JSON into them. Pure value objects with no I/O.
"""

from collections.abc import Mapping
from typing import Any

from attrs import define, field, validators

from trackbridge.domain.errors import MissingInputError, WrongShapeError


@define(frozen=True, slots=True)
class Artist:
    """Artist credited on a catalog track."""

    name: str = field(validator=validators.instance_of(str))


@define(frozen=True, slots=True)
class CatalogTrack:
    """Immutable track as known to the music catalog.

    The first artist is the primary artist and is the one used when
    building backend search queries.
    """

    name: str = field(validator=[validators.instance_of(str), validators.min_len(1)])
    artists: tuple[Artist, ...] = field(
        converter=tuple,
        validator=validators.deep_iterable(
            member_validator=validators.instance_of(Artist),
            iterable_validator=validators.min_len(1),
        ),
    )
    duration_ms: int | None = field(default=None)
    id: str | None = field(default=None)
    uri: str | None = field(default=None)

    @property
    def primary_artist(self) -> Artist:
        return self.artists[0]

    @property
    def display_title(self) -> str:
        """Title in "<primary artist> - <track name>" form."""
        return f"{self.primary_artist.name} - {self.name}"

    @classmethod
    def from_catalog(cls, data: Mapping[str, Any] | None) -> "CatalogTrack":
        """Decode a raw catalog track object.

        Presence is checked for every required field before any shape
        check, so a track missing its name reports that even when its
        artists are also malformed.

        Raises:
            MissingInputError: track, artists or name absent or empty (any
                falsy value counts as absent)
            WrongShapeError: a field is present with the wrong type
        """
        if data is None:
            raise MissingInputError("The catalog track was not provided")
        if not isinstance(data, Mapping):
            raise WrongShapeError(
                f"The catalog track must be a mapping, received type {type(data).__name__}"
            )

        raw_artists = data.get("artists")
        raw_name = data.get("name")
        raw_duration = data.get("duration_ms")

        if not raw_artists:
            raise MissingInputError("The track artists list was not provided")
        if not raw_name:
            raise MissingInputError("The track name was not provided")

        if not isinstance(raw_artists, list | tuple):
            raise WrongShapeError(
                f"The track artists must be a list, received type {type(raw_artists).__name__}"
            )
        if not isinstance(raw_name, str):
            raise WrongShapeError(
                f"The track name must be a string, received type {type(raw_name).__name__}"
            )
        if raw_duration is not None and (
            isinstance(raw_duration, bool) or not isinstance(raw_duration, int)
        ):
            raise WrongShapeError(
                f"The track duration must be an integer, received type {type(raw_duration).__name__}"
            )

        return cls(
            name=raw_name,
            artists=tuple(_decode_artist(artist) for artist in raw_artists),
            duration_ms=raw_duration,
            id=data.get("id"),
            uri=data.get("uri"),
        )


def _decode_artist(raw: Any) -> Artist:
    if isinstance(raw, Artist):
        return raw
    if isinstance(raw, Mapping) and isinstance(raw.get("name"), str):
        return Artist(name=raw["name"])
    raise WrongShapeError(f"Invalid track artist entry: {raw!r}")


def coerce_catalog_track(track: "CatalogTrack | Mapping[str, Any] | None") -> CatalogTrack:
    """Accept a CatalogTrack or a raw catalog mapping and return a CatalogTrack."""
    if isinstance(track, CatalogTrack):
        return track
    return CatalogTrack.from_catalog(track)
