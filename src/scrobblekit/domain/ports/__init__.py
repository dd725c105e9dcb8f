"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from scrobblekit.domain.entities import Album, Artist, Track
from scrobblekit.domain.value_objects.endpoints import Endpoint


# Hey future me, ILastfmClient is a PORT! Code that scrobbles or looks up metadata should depend
# on this interface, not on the httpx implementation, so tests can hand in a mock. The full
# convenience surface (charts, user lists, ...) lives on LastfmClient; this port only pins the
# calls every implementation must offer.
class ILastfmClient(ABC):
    """Port for Last.fm API client operations."""

    @abstractmethod
    async def execute(
        self,
        endpoint: Endpoint,
        parameters: Mapping[str, str] | None = None,
        *,
        shape: Any = None,
        requires_auth: bool = False,
        http_method: str | None = None,
    ) -> Any:
        """
        Run one API call.

        Args:
            endpoint: API method
            parameters: Method parameters (exact wire strings)
            shape: Decoder shape for the response; None returns the parsed JSON
            requires_auth: Sign the call and attach a session key
            http_method: Override GET/POST (defaults to POST for signed calls)

        Returns:
            Decoded entity, or the parsed JSON when no shape is given
        """
        pass

    @abstractmethod
    async def track_info(
        self, artist: str, track: str, mbid: str | None = None
    ) -> Track:
        """
        Get track information including tags.

        Args:
            artist: Artist name
            track: Track title
            mbid: Optional MusicBrainz ID

        Returns:
            Track information
        """
        pass

    @abstractmethod
    async def artist_info(self, artist: str, mbid: str | None = None) -> Artist:
        """
        Get artist information including tags.

        Args:
            artist: Artist name
            mbid: Optional MusicBrainz ID

        Returns:
            Artist information
        """
        pass

    @abstractmethod
    async def album_info(
        self, artist: str, album: str, mbid: str | None = None
    ) -> Album:
        """
        Get album information including tags.

        Args:
            artist: Artist name
            album: Album title
            mbid: Optional MusicBrainz ID

        Returns:
            Album information
        """
        pass

    @abstractmethod
    async def scrobble(
        self,
        track: str,
        artist: str,
        *,
        album: str | None = None,
        timestamp: datetime | int | None = None,
    ) -> Any:
        """Add a track play to the configured user's profile."""
        pass

    @abstractmethod
    async def update_now_playing(
        self, track: str, artist: str, *, album: str | None = None
    ) -> Any:
        """Tell Last.fm the configured user started listening to a track."""
        pass

    @abstractmethod
    async def love(self, track: str, artist: str) -> Any:
        """Love a track for the configured user."""
        pass

    @abstractmethod
    async def check_login(self, username: str, password: str) -> None:
        """Verify credentials without keeping the session."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the HTTP connection."""
        pass


__all__ = ["ILastfmClient"]
