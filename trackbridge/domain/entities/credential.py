"""Catalog access credential value object."""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from attrs import define, field

from trackbridge.domain.errors import CredentialExchangeError


@define(frozen=True, slots=True)
class AccessCredential:
    """Bearer token issued by the catalog's client-credentials exchange.

    Replaced wholesale on every renewal; never mutated in place.
    """

    access_token: str = field(repr=False)
    expires_in: int  # seconds, as reported by the token endpoint
    token_type: str = "Bearer"
    obtained_at: datetime = field(factory=lambda: datetime.now(UTC))

    @property
    def expires_at(self) -> datetime:
        return self.obtained_at + timedelta(seconds=self.expires_in)

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    @classmethod
    def from_token_response(cls, payload: Any) -> "AccessCredential":
        """Build a credential from the token endpoint's JSON body.

        Raises:
            CredentialExchangeError: the body carries no access token
        """
        if not isinstance(payload, Mapping) or not payload.get("access_token"):
            detail = ""
            if isinstance(payload, Mapping) and payload.get("error"):
                detail = f": {payload.get('error_description') or payload['error']}"
            raise CredentialExchangeError(f"Invalid Spotify client{detail}")

        return cls(
            access_token=payload["access_token"],
            expires_in=int(payload.get("expires_in") or 0),
            token_type=payload.get("token_type") or "Bearer",
        )
