"""Last.fm HTTP client implementation."""

import logging
import time
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

import httpx

from scrobblekit.config.settings import LastfmSettings, Settings, get_settings
from scrobblekit.domain.entities import (
    Album,
    Artist,
    ChartRange,
    Friend,
    LovedTrack,
    Page,
    PersonalTags,
    RecentTrack,
    SearchResults,
    Tag,
    Track,
    UserInfo,
    WeeklyChartEntry,
)
from scrobblekit.domain.exceptions import (
    APIError,
    AuthenticationFailed,
    ConfigurationError,
    MissingCredentialError,
)
from scrobblekit.domain.ports import ILastfmClient
from scrobblekit.domain.value_objects.endpoints import Endpoint, Period, TaggingType
from scrobblekit.infrastructure.decoding import decode
from scrobblekit.infrastructure.decoding import schemas
from scrobblekit.infrastructure.decoding.shapes import AnyShape
from scrobblekit.infrastructure.integrations.lastfm_auth import (
    SessionManager,
    authenticate,
)
from scrobblekit.infrastructure.integrations.lastfm_http import (
    build_request,
    ensure_encodable,
    error_envelope,
    parse_body,
    raise_for_status,
    send,
)
from scrobblekit.infrastructure.integrations.lastfm_signature import signed

logger = logging.getLogger(__name__)

# Last.fm error code for "Invalid session key - Please re-authenticate"
INVALID_SESSION_KEY = 9


def _params(**values: Any) -> dict[str, str]:
    """Turn keyword arguments into wire strings, dropping the ones left as None."""
    params: dict[str, str] = {}
    for name, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[name] = "1" if value else "0"
        elif isinstance(value, Enum):
            params[name] = str(value.value)
        elif isinstance(value, datetime):
            params[name] = str(int(value.timestamp()))
        else:
            params[name] = str(value)
    return params


class LastfmClient(ILastfmClient):
    """HTTP client for Last.fm API operations."""

    def __init__(
        self,
        settings: LastfmSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
        sessions: SessionManager | None = None,
    ) -> None:
        """
        Initialize Last.fm client.

        Args:
            settings: Last.fm configuration settings
            http_client: Optional pre-built client (e.g. with a MockTransport); the caller
                keeps ownership and must close it
            sessions: Optional session manager; defaults to one built from settings
        """
        self.settings = settings
        self._client = http_client
        self._owns_client = http_client is None
        self.sessions = sessions or SessionManager(settings)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "LastfmClient":
        """Build a client from the LASTFM_* block of the application settings.

        Args:
            settings: Application settings; defaults to the cached environment settings

        Returns:
            A client owning its own HTTP connection
        """
        return cls((settings or get_settings()).lastfm)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.timeout,
                headers={"User-Agent": self.settings.user_agent},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client (only if this instance created it)."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _user(self, user: str | None) -> str:
        resolved = user or self.settings.username
        if not resolved:
            raise MissingCredentialError("username")
        return resolved

    # =========================================================================
    # Request pipeline
    # =========================================================================

    async def execute(
        self,
        endpoint: Endpoint,
        parameters: Mapping[str, str] | None = None,
        *,
        shape: AnyShape | None = None,
        requires_auth: bool = False,
        http_method: str | None = None,
    ) -> Any:
        """
        Run one API call: build, (sign,) send, check for errors, decode.

        Args:
            endpoint: API method
            parameters: Method parameters (exact wire strings)
            shape: Decoder shape for the response; None returns the parsed JSON
            requires_auth: Sign the call and attach a session key
            http_method: Override GET/POST (defaults to POST for signed calls)

        Returns:
            Decoded entity, or the parsed JSON when no shape is given

        Raises:
            ConfigurationError: If no API key is configured
            MissingCredentialError: If a signed call lacks credentials
            InvalidURLError: If the request cannot be encoded
            NetworkError: On transport failures or HTTP errors without an error envelope
            AuthenticationFailed: If Last.fm rejects credentials or the session key
            APIError: If Last.fm answers with an error envelope
            DecodingError: If the body is not JSON or does not fit the shape
        """
        if not self.settings.is_configured():
            raise ConfigurationError("Last.fm API key not configured")

        client = await self._get_client()
        method = http_method or ("POST" if requires_auth else "GET")
        parameters = dict(parameters or {})
        # Checked before the session so unencodable input never reaches auth.getMobileSession
        ensure_encodable(parameters)

        if requires_auth:
            session = await self.sessions.session(client)
            request_params = signed(
                {
                    **parameters,
                    "method": endpoint.value,
                    "api_key": self.settings.api_key,
                    "sk": session.key,
                },
                self.settings.api_secret.get_secret_value(),
            )
            request_params["format"] = "json"
        else:
            request_params = {
                "method": endpoint.value,
                "api_key": self.settings.api_key,
                "format": "json",
                **parameters,
            }

        # Never log request_params, they carry the session key and signature
        logger.debug(f"Last.fm {method} {endpoint.value}")
        request = build_request(client, method, self.settings.base_url, request_params)
        response = await send(client, request)
        payload = parse_body(response)

        # Yo, the error envelope wins over the status code. Last.fm happily answers
        # HTTP 200 with {"error": 6, "message": ...}, and HTTP 403 WITH an envelope is
        # still an API error, not a network one.
        envelope = error_envelope(payload)
        if envelope is not None:
            code, message = envelope
            if requires_auth and code == INVALID_SESSION_KEY:
                self.sessions.invalidate()
                logger.warning(f"Last.fm session rejected for {endpoint.value}: {message}")
                raise AuthenticationFailed(code, message)
            logger.warning(f"Last.fm {endpoint.value} failed (code {code}): {message}")
            raise APIError(code, message)
        raise_for_status(response)

        if shape is None:
            return payload
        return decode(payload, shape)

    # =========================================================================
    # Album
    # =========================================================================

    async def album_info(
        self, artist: str, album: str, mbid: str | None = None
    ) -> Album:
        """
        Get album information including tags and tracks.

        Args:
            artist: Artist name
            album: Album title
            mbid: Optional MusicBrainz ID (takes precedence over names)

        Returns:
            Album information
        """
        params = _params(mbid=mbid) if mbid else _params(artist=artist, album=album)
        result: Album = await self.execute(
            Endpoint.ALBUM_GET_INFO, params, shape=schemas.ALBUM_INFO
        )
        return result

    async def album_tags(
        self,
        artist: str,
        album: str,
        user: str | None = None,
        mbid: str | None = None,
    ) -> Page[Tag]:
        """Get the tags a user applied to an album."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist, album=album)
        params.update(_params(user=self._user(user)))
        result: Page[Tag] = await self.execute(
            Endpoint.ALBUM_GET_TAGS, params, shape=schemas.TAGS
        )
        return result

    async def album_top_tags(
        self, artist: str, album: str, mbid: str | None = None
    ) -> Page[Tag]:
        """Get the most used tags of an album."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist, album=album)
        result: Page[Tag] = await self.execute(
            Endpoint.ALBUM_GET_TOP_TAGS, params, shape=schemas.TOP_TAGS
        )
        return result

    async def search_album(
        self, album: str, page: int = 1, limit: int = 30
    ) -> SearchResults[Album]:
        """Search albums by name."""
        result: SearchResults[Album] = await self.execute(
            Endpoint.ALBUM_SEARCH,
            _params(album=album, page=page, limit=limit),
            shape=schemas.ALBUM_SEARCH,
        )
        return result

    # =========================================================================
    # Artist
    # =========================================================================

    async def artist_info(self, artist: str, mbid: str | None = None) -> Artist:
        """
        Get artist information including bio, stats and tags.

        Args:
            artist: Artist name
            mbid: Optional MusicBrainz ID

        Returns:
            Artist information
        """
        params = _params(mbid=mbid) if mbid else _params(artist=artist)
        result: Artist = await self.execute(
            Endpoint.ARTIST_GET_INFO, params, shape=schemas.ARTIST_INFO
        )
        return result

    async def artist_tags(
        self, artist: str, user: str | None = None, mbid: str | None = None
    ) -> Page[Tag]:
        """Get the tags a user applied to an artist."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist)
        params.update(_params(user=self._user(user)))
        result: Page[Tag] = await self.execute(
            Endpoint.ARTIST_GET_TAGS, params, shape=schemas.TAGS
        )
        return result

    async def artist_top_tags(self, artist: str, mbid: str | None = None) -> Page[Tag]:
        """Get the most used tags of an artist."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist)
        result: Page[Tag] = await self.execute(
            Endpoint.ARTIST_GET_TOP_TAGS, params, shape=schemas.TOP_TAGS
        )
        return result

    async def artist_top_albums(
        self,
        artist: str,
        mbid: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> Page[Album]:
        """Get an artist's most listened albums."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist)
        params.update(_params(page=page, limit=limit))
        result: Page[Album] = await self.execute(
            Endpoint.ARTIST_GET_TOP_ALBUMS, params, shape=schemas.TOP_ALBUMS
        )
        return result

    async def artist_top_tracks(
        self,
        artist: str,
        mbid: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> Page[Track]:
        """Get an artist's most listened tracks."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist)
        params.update(_params(page=page, limit=limit))
        result: Page[Track] = await self.execute(
            Endpoint.ARTIST_GET_TOP_TRACKS, params, shape=schemas.TOP_TRACKS
        )
        return result

    async def similar_artists(
        self, artist: str, mbid: str | None = None, limit: int | None = None
    ) -> Page[Artist]:
        """Get artists similar to the given one, best match first."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist)
        params.update(_params(limit=limit))
        result: Page[Artist] = await self.execute(
            Endpoint.ARTIST_GET_SIMILAR, params, shape=schemas.SIMILAR_ARTISTS
        )
        return result

    async def search_artist(
        self, artist: str, page: int = 1, limit: int = 30
    ) -> SearchResults[Artist]:
        """Search artists by name."""
        result: SearchResults[Artist] = await self.execute(
            Endpoint.ARTIST_SEARCH,
            _params(artist=artist, page=page, limit=limit),
            shape=schemas.ARTIST_SEARCH,
        )
        return result

    # =========================================================================
    # Chart / Geo
    # =========================================================================

    async def chart_top_artists(self, page: int = 1, limit: int = 50) -> Page[Artist]:
        result: Page[Artist] = await self.execute(
            Endpoint.CHART_GET_TOP_ARTISTS,
            _params(page=page, limit=limit),
            shape=schemas.ARTISTS,
        )
        return result

    async def chart_top_tags(self, page: int = 1, limit: int = 50) -> Page[Tag]:
        result: Page[Tag] = await self.execute(
            Endpoint.CHART_GET_TOP_TAGS,
            _params(page=page, limit=limit),
            shape=schemas.TAGS,
        )
        return result

    async def chart_top_tracks(self, page: int = 1, limit: int = 50) -> Page[Track]:
        result: Page[Track] = await self.execute(
            Endpoint.CHART_GET_TOP_TRACKS,
            _params(page=page, limit=limit),
            shape=schemas.TRACKS,
        )
        return result

    async def geo_top_artists(
        self, country: str, page: int = 1, limit: int = 50
    ) -> Page[Artist]:
        """Get the most popular artists in a country (ISO 3166-1 country name)."""
        result: Page[Artist] = await self.execute(
            Endpoint.GEO_GET_TOP_ARTISTS,
            _params(country=country, page=page, limit=limit),
            shape=schemas.TOP_ARTISTS,
        )
        return result

    async def geo_top_tracks(
        self, country: str, page: int = 1, limit: int = 50
    ) -> Page[Track]:
        """Get the most popular tracks in a country (ISO 3166-1 country name)."""
        result: Page[Track] = await self.execute(
            Endpoint.GEO_GET_TOP_TRACKS,
            _params(country=country, page=page, limit=limit),
            shape=schemas.TRACKS,
        )
        return result

    # =========================================================================
    # Tag
    # =========================================================================

    async def tag_info(self, tag: str) -> Tag:
        """Get a tag's wiki and usage counters."""
        result: Tag = await self.execute(
            Endpoint.TAG_GET_INFO, _params(tag=tag), shape=schemas.TAG_INFO
        )
        return result

    async def top_tags(self) -> Page[Tag]:
        """Get the globally most used tags."""
        result: Page[Tag] = await self.execute(
            Endpoint.TAG_GET_TOP_TAGS, shape=schemas.TOP_TAGS
        )
        return result

    async def tag_top_artists(
        self, tag: str, page: int = 1, limit: int = 50
    ) -> Page[Artist]:
        result: Page[Artist] = await self.execute(
            Endpoint.TAG_GET_TOP_ARTISTS,
            _params(tag=tag, page=page, limit=limit),
            shape=schemas.TOP_ARTISTS,
        )
        return result

    async def tag_top_albums(
        self, tag: str, page: int = 1, limit: int = 50
    ) -> Page[Album]:
        result: Page[Album] = await self.execute(
            Endpoint.TAG_GET_TOP_ALBUMS,
            _params(tag=tag, page=page, limit=limit),
            shape=schemas.ALBUMS,
        )
        return result

    async def tag_top_tracks(
        self, tag: str, page: int = 1, limit: int = 50
    ) -> Page[Track]:
        result: Page[Track] = await self.execute(
            Endpoint.TAG_GET_TOP_TRACKS,
            _params(tag=tag, page=page, limit=limit),
            shape=schemas.TRACKS,
        )
        return result

    async def similar_tags(self, tag: str) -> Page[Tag]:
        result: Page[Tag] = await self.execute(
            Endpoint.TAG_GET_SIMILAR, _params(tag=tag), shape=schemas.SIMILAR_TAGS
        )
        return result

    async def tag_weekly_chart_list(self, tag: str) -> Page[ChartRange]:
        result: Page[ChartRange] = await self.execute(
            Endpoint.TAG_GET_WEEKLY_CHART_LIST,
            _params(tag=tag),
            shape=schemas.WEEKLY_CHART_LIST,
        )
        return result

    # =========================================================================
    # Track
    # =========================================================================

    async def track_info(
        self,
        artist: str,
        track: str,
        mbid: str | None = None,
        username: str | None = None,
    ) -> Track:
        """
        Get track information including tags.

        Args:
            artist: Artist name
            track: Track title
            mbid: Optional MusicBrainz ID
            username: If given, the response includes that user's playcount and loved flag

        Returns:
            Track information
        """
        params = _params(mbid=mbid) if mbid else _params(artist=artist, track=track)
        params.update(_params(username=username))
        result: Track = await self.execute(
            Endpoint.TRACK_GET_INFO, params, shape=schemas.TRACK_INFO
        )
        return result

    async def track_tags(
        self,
        artist: str,
        track: str,
        user: str | None = None,
        mbid: str | None = None,
    ) -> Page[Tag]:
        """Get the tags a user applied to a track."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist, track=track)
        params.update(_params(user=self._user(user)))
        result: Page[Tag] = await self.execute(
            Endpoint.TRACK_GET_TAGS, params, shape=schemas.TAGS
        )
        return result

    async def track_top_tags(
        self, artist: str, track: str, mbid: str | None = None
    ) -> Page[Tag]:
        """Get the most used tags of a track."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist, track=track)
        result: Page[Tag] = await self.execute(
            Endpoint.TRACK_GET_TOP_TAGS, params, shape=schemas.TOP_TAGS
        )
        return result

    async def similar_tracks(
        self,
        artist: str,
        track: str,
        mbid: str | None = None,
        limit: int | None = None,
    ) -> Page[Track]:
        """Get tracks similar to the given one, best match first."""
        params = _params(mbid=mbid) if mbid else _params(artist=artist, track=track)
        params.update(_params(limit=limit))
        result: Page[Track] = await self.execute(
            Endpoint.TRACK_GET_SIMILAR, params, shape=schemas.SIMILAR_TRACKS
        )
        return result

    async def search_track(
        self,
        track: str,
        artist: str | None = None,
        page: int = 1,
        limit: int = 30,
    ) -> SearchResults[Track]:
        """Search tracks by title, optionally narrowed to an artist."""
        result: SearchResults[Track] = await self.execute(
            Endpoint.TRACK_SEARCH,
            _params(track=track, artist=artist, page=page, limit=limit),
            shape=schemas.TRACK_SEARCH,
        )
        return result

    # =========================================================================
    # User
    # =========================================================================
    # Hey future me, every user.* method falls back to the configured username when you don't
    # pass one. These are plain reads: no session key, no signature.

    async def user_info(self, user: str | None = None) -> UserInfo:
        result: UserInfo = await self.execute(
            Endpoint.USER_GET_INFO,
            _params(user=self._user(user)),
            shape=schemas.USER_PROFILE,
        )
        return result

    async def user_tags(self, user: str | None = None) -> Page[Tag]:
        result: Page[Tag] = await self.execute(
            Endpoint.USER_GET_TAGS,
            _params(user=self._user(user)),
            shape=schemas.TAGS,
        )
        return result

    async def user_top_tags(
        self, user: str | None = None, limit: int = 50
    ) -> Page[Tag]:
        result: Page[Tag] = await self.execute(
            Endpoint.USER_GET_TOP_TAGS,
            _params(user=self._user(user), limit=limit),
            shape=schemas.TOP_TAGS,
        )
        return result

    async def user_top_artists(
        self,
        user: str | None = None,
        period: Period = Period.OVERALL,
        page: int = 1,
        limit: int = 50,
    ) -> Page[Artist]:
        result: Page[Artist] = await self.execute(
            Endpoint.USER_GET_TOP_ARTISTS,
            _params(user=self._user(user), period=period, page=page, limit=limit),
            shape=schemas.TOP_ARTISTS,
        )
        return result

    async def user_top_albums(
        self,
        user: str | None = None,
        period: Period = Period.OVERALL,
        page: int = 1,
        limit: int = 50,
    ) -> Page[Album]:
        result: Page[Album] = await self.execute(
            Endpoint.USER_GET_TOP_ALBUMS,
            _params(user=self._user(user), period=period, page=page, limit=limit),
            shape=schemas.TOP_ALBUMS,
        )
        return result

    async def user_top_tracks(
        self,
        user: str | None = None,
        period: Period = Period.OVERALL,
        page: int = 1,
        limit: int = 50,
    ) -> Page[Track]:
        result: Page[Track] = await self.execute(
            Endpoint.USER_GET_TOP_TRACKS,
            _params(user=self._user(user), period=period, page=page, limit=limit),
            shape=schemas.TOP_TRACKS,
        )
        return result

    async def user_recent_tracks(
        self,
        user: str | None = None,
        page: int = 1,
        limit: int = 50,
        start: datetime | int | None = None,
        end: datetime | int | None = None,
        extended: bool = False,
    ) -> Page[RecentTrack]:
        """
        Get a user's scrobbles, newest first.

        The first item may be the track currently playing (now_playing=True, no date).

        Args:
            user: Username (defaults to the configured one)
            page: Page number
            limit: Items per page
            start: Only scrobbles after this moment
            end: Only scrobbles before this moment
            extended: Include full artist objects and the loved flag

        Returns:
            One page of recent tracks
        """
        result: Page[RecentTrack] = await self.execute(
            Endpoint.USER_GET_RECENT_TRACKS,
            _params(
                user=self._user(user),
                page=page,
                limit=limit,
                **{"from": start, "to": end},
                extended=extended,
            ),
            shape=schemas.RECENT_TRACKS,
        )
        return result

    async def user_loved_tracks(
        self, user: str | None = None, page: int = 1, limit: int = 50
    ) -> Page[LovedTrack]:
        result: Page[LovedTrack] = await self.execute(
            Endpoint.USER_GET_LOVED_TRACKS,
            _params(user=self._user(user), page=page, limit=limit),
            shape=schemas.LOVED_TRACKS,
        )
        return result

    async def user_friends(
        self, user: str | None = None, page: int = 1, limit: int = 50
    ) -> Page[Friend]:
        result: Page[Friend] = await self.execute(
            Endpoint.USER_GET_FRIENDS,
            _params(user=self._user(user), page=page, limit=limit),
            shape=schemas.FRIENDS,
        )
        return result

    async def user_personal_tags(
        self,
        tag: str,
        tagging_type: TaggingType,
        user: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> PersonalTags:
        """
        Get the artists, albums or tracks a user tagged with one tag.

        Args:
            tag: The tag
            tagging_type: Which kind of item to list
            user: Username (defaults to the configured one)
            page: Page number
            limit: Items per page

        Returns:
            Tagged items (each knows whether it is an artist, album or track)
        """
        result: PersonalTags = await self.execute(
            Endpoint.USER_GET_PERSONAL_TAGS,
            _params(
                user=self._user(user),
                tag=tag,
                taggingtype=tagging_type,
                page=page,
                limit=limit,
            ),
            shape=schemas.PERSONAL_TAGS,
        )
        return result

    async def user_weekly_chart_list(self, user: str | None = None) -> Page[ChartRange]:
        result: Page[ChartRange] = await self.execute(
            Endpoint.USER_GET_WEEKLY_CHART_LIST,
            _params(user=self._user(user)),
            shape=schemas.WEEKLY_CHART_LIST,
        )
        return result

    async def user_weekly_album_chart(
        self,
        user: str | None = None,
        start: datetime | int | None = None,
        end: datetime | int | None = None,
    ) -> Page[WeeklyChartEntry]:
        """Album chart of one week; without start/end Last.fm returns the latest week."""
        result: Page[WeeklyChartEntry] = await self.execute(
            Endpoint.USER_GET_WEEKLY_ALBUM_CHART,
            _params(user=self._user(user), **{"from": start, "to": end}),
            shape=schemas.WEEKLY_ALBUM_CHART,
        )
        return result

    async def user_weekly_artist_chart(
        self,
        user: str | None = None,
        start: datetime | int | None = None,
        end: datetime | int | None = None,
    ) -> Page[WeeklyChartEntry]:
        """Artist chart of one week; without start/end Last.fm returns the latest week."""
        result: Page[WeeklyChartEntry] = await self.execute(
            Endpoint.USER_GET_WEEKLY_ARTIST_CHART,
            _params(user=self._user(user), **{"from": start, "to": end}),
            shape=schemas.WEEKLY_ARTIST_CHART,
        )
        return result

    async def user_weekly_track_chart(
        self,
        user: str | None = None,
        start: datetime | int | None = None,
        end: datetime | int | None = None,
    ) -> Page[WeeklyChartEntry]:
        """Track chart of one week; without start/end Last.fm returns the latest week."""
        result: Page[WeeklyChartEntry] = await self.execute(
            Endpoint.USER_GET_WEEKLY_TRACK_CHART,
            _params(user=self._user(user), **{"from": start, "to": end}),
            shape=schemas.WEEKLY_TRACK_CHART,
        )
        return result

    # =========================================================================
    # Writes (signed, need a session)
    # =========================================================================

    async def scrobble(
        self,
        track: str,
        artist: str,
        *,
        album: str | None = None,
        timestamp: datetime | int | None = None,
    ) -> Any:
        """
        Add a track play to the configured user's profile.

        Args:
            track: Track title
            artist: Artist name
            album: Optional album title
            timestamp: When the track started playing; defaults to now

        Returns:
            Parsed response payload (accepted/ignored counters)
        """
        # The timestamp is part of the signed parameters, so it's fixed ONCE here
        if timestamp is None:
            timestamp = int(time.time())
        return await self.execute(
            Endpoint.TRACK_SCROBBLE,
            _params(artist=artist, track=track, album=album, timestamp=timestamp),
            requires_auth=True,
        )

    async def update_now_playing(
        self, track: str, artist: str, *, album: str | None = None
    ) -> Any:
        """Tell Last.fm the configured user started listening to a track."""
        return await self.execute(
            Endpoint.TRACK_UPDATE_NOW_PLAYING,
            _params(artist=artist, track=track, album=album),
            requires_auth=True,
        )

    async def love(self, track: str, artist: str) -> Any:
        """Love a track for the configured user."""
        return await self.execute(
            Endpoint.TRACK_LOVE,
            _params(artist=artist, track=track),
            requires_auth=True,
        )

    async def check_login(self, username: str, password: str) -> None:
        """
        Verify credentials by requesting a session and throwing it away.

        Bypasses the session cache so the check always hits Last.fm.

        Raises:
            MissingCredentialError: If a credential is empty
            AuthenticationFailed: If Last.fm rejects the credentials
        """
        client = await self._get_client()
        await authenticate(
            client,
            username,
            password,
            self.settings.api_key,
            self.settings.api_secret.get_secret_value(),
            url=self.settings.base_url,
        )

    async def __aenter__(self) -> "LastfmClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
