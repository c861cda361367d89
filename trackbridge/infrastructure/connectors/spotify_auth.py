"""Spotify client-credentials token management.

SpotifyCredentialManager owns the single catalog access credential for the
process. It exchanges the client id/secret for a bearer token and keeps it
fresh with a background renewal task:

    UNINITIALIZED -> RENEWING -> VALID -> RENEWING -> VALID -> ...
                        |
                        +-> FAILED  (terminal, no further renewal)

stop() moves any state to STOPPED; start() may be called again afterwards.
Renewals are strictly sequential: the next one is only scheduled once the
current exchange has completed.
"""

import asyncio
import base64
from enum import StrEnum

from attrs import define, field
import requests

from trackbridge.config import get_logger
from trackbridge.domain.entities import AccessCredential
from trackbridge.domain.errors import MissingInputError, WrongShapeError

logger = get_logger(__name__).bind(service="spotify")

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

# Floor for the renewal delay so a zero expires_in cannot spin the loop
MIN_RENEWAL_DELAY_SECONDS = 1.0


class CredentialState(StrEnum):
    UNINITIALIZED = "uninitialized"
    RENEWING = "renewing"
    VALID = "valid"
    FAILED = "failed"
    STOPPED = "stopped"


def encode_client_credentials(client_id: str, client_secret: str) -> str:
    """Encode a client id/secret pair for HTTP Basic authorization."""
    return base64.b64encode(f"{client_id}:{client_secret}".encode()).decode("ascii")


@define(slots=True)
class SpotifyCredentialManager:
    """Keeps a Spotify access token valid for the life of the process.

    Example:
        ```python
        manager = SpotifyCredentialManager(client_id, client_secret)
        manager.start()
        await manager.wait_until_ready()
        headers = {"Authorization": manager.authorization_header}
        ```
    """

    client_id: str = field(repr=False)
    client_secret: str = field(repr=False)
    token_url: str = SPOTIFY_TOKEN_URL
    request_timeout: float | None = None
    renewal_margin_seconds: float = 0.0

    _authorization: str = field(init=False, repr=False)
    _credential: AccessCredential | None = field(init=False, default=None, repr=False)
    _state: CredentialState = field(init=False, default=CredentialState.UNINITIALIZED)
    _task: asyncio.Task | None = field(init=False, default=None, repr=False)
    _ready: asyncio.Event = field(init=False, factory=asyncio.Event, repr=False)

    def __attrs_post_init__(self) -> None:
        for label, value in (("client ID", self.client_id), ("client secret", self.client_secret)):
            if value is None or value == "":
                raise MissingInputError(f"The Spotify {label} was not provided")
            if not isinstance(value, str):
                raise WrongShapeError(
                    f"The Spotify {label} must be a string, received type {type(value).__name__}"
                )
        self._authorization = encode_client_credentials(self.client_id, self.client_secret)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> CredentialState:
        return self._state

    @property
    def credential(self) -> AccessCredential | None:
        return self._credential

    @property
    def access_token(self) -> str | None:
        """Current bearer token, or None before the first successful renewal."""
        return self._credential.access_token if self._credential else None

    @property
    def authorization_header(self) -> str | None:
        return self._credential.authorization_header if self._credential else None

    @property
    def is_valid(self) -> bool:
        return (
            self._state is CredentialState.VALID
            and self._credential is not None
            and not self._credential.is_expired()
        )

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # -------------------------------------------------------------------------
    # Renewal
    # -------------------------------------------------------------------------

    async def renew(self) -> float:
        """Exchange the client credentials for a fresh token.

        Returns:
            Seconds until the next renewal should run

        Raises:
            CredentialExchangeError: the token endpoint returned no access token
        """
        self._state = CredentialState.RENEWING
        try:
            payload = await asyncio.to_thread(self._request_token)
            credential = AccessCredential.from_token_response(payload)
        except Exception:
            self._state = CredentialState.FAILED
            raise

        # Single assignment: readers see the old or the new token, never a mix
        self._credential = credential
        self._state = CredentialState.VALID
        self._ready.set()

        delay = max(
            credential.expires_in - self.renewal_margin_seconds,
            MIN_RENEWAL_DELAY_SECONDS,
        )
        logger.info(
            f"Spotify token renewed, next renewal in {delay:.0f}s",
            expires_in=credential.expires_in,
        )
        return delay

    def _request_token(self) -> object:
        response = requests.post(
            self.token_url,
            data={"grant_type": "client_credentials"},
            headers={"Authorization": f"Basic {self._authorization}"},
            timeout=self.request_timeout,
        )
        return response.json()

    async def _renewal_loop(self) -> None:
        while True:
            delay = await self.renew()
            await asyncio.sleep(delay)

    def _on_renewal_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).critical(
                "Spotify token renewal stopped; catalog requests will fail until restart"
            )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> asyncio.Task:
        """Kick off the renewal task on the running event loop.

        Returns the running task if one is already active.
        """
        if self.is_running:
            return self._task

        logger.debug("Starting Spotify token renewal")
        self._task = asyncio.get_running_loop().create_task(
            self._renewal_loop(), name="spotify-token-renewal"
        )
        self._task.add_done_callback(self._on_renewal_done)
        return self._task

    async def stop(self) -> None:
        """Cancel the renewal task. The last issued token stays readable."""
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        if self._state is not CredentialState.FAILED:
            self._state = CredentialState.STOPPED
        logger.debug("Stopped Spotify token renewal")

    async def wait_until_ready(self) -> None:
        """Wait for the first token.

        Raises:
            CredentialExchangeError: the first renewal failed
            RuntimeError: renewal is not running and no token was ever issued
        """
        if self._ready.is_set():
            return
        task = self._task
        if task is None:
            raise RuntimeError("Credential renewal has not been started")

        waiter = asyncio.ensure_future(self._ready.wait())
        try:
            await asyncio.wait({waiter, task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()

        if self._ready.is_set():
            return
        if task.cancelled():
            raise RuntimeError("Credential renewal was stopped before a token was issued")
        # Re-raises the renewal failure
        task.result()
