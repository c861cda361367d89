"""TrackBridge facade: Spotify catalog in, Lavalink tracks out.

Wires the credential manager, the catalog connector, the search connector
and the resolver together. Typical use:

```python
endpoint = BackendEndpoint(host="localhost", port=2333, password="youshallnotpass")
async with TrackBridge(endpoint, client_id, client_secret) as bridge:
    track = await bridge.resolve_track_id("4uLU6hMCjMI75M1A2tKUQC")
    album = await bridge.resolve_album("6akEvsycLGftJxYudPjmqK")
```
"""

from attrs import define, field

from trackbridge.config import Settings, get_logger
from trackbridge.config import settings as default_settings
from trackbridge.domain.entities import BackendEndpoint, BackendTrack, CatalogTrack
from trackbridge.domain.matching import MatchOptions
from trackbridge.infrastructure.connectors.lavalink import LavalinkConnector
from trackbridge.infrastructure.connectors.protocols import (
    CatalogConnectorProtocol,
    SearchConnectorProtocol,
)
from trackbridge.infrastructure.connectors.spotify import SpotifyCatalogConnector
from trackbridge.infrastructure.connectors.spotify_auth import SpotifyCredentialManager

from .resolver import TrackInput, TrackResolution, TrackResolver

logger = get_logger(__name__)


@define(slots=True, init=False)
class TrackBridge:
    """Convert Spotify albums, playlists and tracks into Lavalink tracks.

    Construction does no I/O. Token renewal begins with start() (or when
    entering the async context, which also waits for the first token).
    Use from_components() to supply collaborators directly.
    """

    credentials: SpotifyCredentialManager
    catalog: CatalogConnectorProtocol
    search: SearchConnectorProtocol
    resolver: TrackResolver = field()

    @resolver.default
    def _default_resolver(self) -> TrackResolver:
        return TrackResolver(search_connector=self.search)

    def __init__(
        self,
        endpoint: BackendEndpoint,
        client_id: str,
        client_secret: str,
        settings: Settings | None = None,
    ) -> None:
        """Build a bridge for one Lavalink node and one Spotify client."""
        settings = settings or default_settings
        credentials = SpotifyCredentialManager(
            client_id=client_id,
            client_secret=client_secret,
            token_url=settings.api.spotify_token_url,
            request_timeout=settings.api.request_timeout,
            renewal_margin_seconds=settings.api.token_renewal_margin_seconds,
        )
        catalog = SpotifyCatalogConnector(
            credentials=credentials,
            market=settings.api.spotify_market,
            request_timeout=settings.api.request_timeout,
            api_base_url=settings.api.spotify_api_base_url,
        )
        search = LavalinkConnector(
            endpoint=endpoint,
            search_prefix=settings.lavalink.search_prefix,
            request_timeout=settings.api.request_timeout,
        )
        resolver = TrackResolver(
            search_connector=search,
            default_options=MatchOptions(
                prioritize_same_duration=settings.matching.prioritize_same_duration,
                duration_tolerance_ms=settings.matching.duration_tolerance_ms,
            ),
        )
        self.__attrs_init__(
            credentials=credentials,
            catalog=catalog,
            search=search,
            resolver=resolver,
        )

    @classmethod
    def from_components(
        cls,
        credentials: SpotifyCredentialManager,
        catalog: CatalogConnectorProtocol,
        search: SearchConnectorProtocol,
        resolver: TrackResolver | None = None,
    ) -> "TrackBridge":
        """Build a bridge around already-constructed collaborators."""
        bridge = cls.__new__(cls)
        if resolver is None:
            bridge.__attrs_init__(credentials=credentials, catalog=catalog, search=search)
        else:
            bridge.__attrs_init__(
                credentials=credentials, catalog=catalog, search=search, resolver=resolver
            )
        return bridge

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TrackBridge":
        """Build a bridge entirely from configuration."""
        settings = settings or default_settings
        endpoint = BackendEndpoint(
            host=settings.lavalink.host,
            port=settings.lavalink.port,
            password=settings.lavalink.password,
        )
        return cls(
            endpoint,
            settings.credentials.spotify_client_id,
            settings.credentials.spotify_client_secret,
            settings=settings,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Kick off token renewal without waiting for the first token."""
        self.credentials.start()

    async def stop(self) -> None:
        await self.credentials.stop()

    async def __aenter__(self) -> "TrackBridge":
        self.start()
        try:
            await self.credentials.wait_until_ready()
        except BaseException:
            await self.stop()
            raise
        logger.info("TrackBridge ready")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # -------------------------------------------------------------------------
    # Catalog metadata
    # -------------------------------------------------------------------------

    async def get_album_tracks(self, album_id: str) -> list[CatalogTrack]:
        return await self.catalog.get_album_tracks(album_id)

    async def get_playlist_tracks(self, playlist_id: str) -> list[CatalogTrack]:
        return await self.catalog.get_playlist_tracks(playlist_id)

    async def get_track(self, track_id: str) -> CatalogTrack:
        return await self.catalog.get_track(track_id)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    async def resolve_track(
        self, track: TrackInput, options: MatchOptions | None = None
    ) -> BackendTrack | None:
        """Resolve an already-fetched catalog track."""
        return await self.resolver.resolve(track, options)

    async def resolve_track_id(
        self, track_id: str, options: MatchOptions | None = None
    ) -> BackendTrack | None:
        """Fetch a catalog track by ID and resolve it."""
        track = await self.catalog.get_track(track_id)
        return await self.resolver.resolve(track, options)

    async def resolve_album(
        self, album_id: str, options: MatchOptions | None = None
    ) -> list[TrackResolution]:
        """Fetch an album and resolve each of its tracks, in album order."""
        tracks = await self.catalog.get_album_tracks(album_id)
        return await self.resolver.resolve_many(tracks, options)

    async def resolve_playlist(
        self, playlist_id: str, options: MatchOptions | None = None
    ) -> list[TrackResolution]:
        """Fetch a playlist and resolve each of its tracks, in playlist order."""
        tracks = await self.catalog.get_playlist_tracks(playlist_id)
        return await self.resolver.resolve_many(tracks, options)
