"""Typed Last.fm entities produced by the response decoder.

Hey future me - these are "dumb data carriers", same idea as the DTOs in a plugin system:
no validation in here, no business logic. ALL the "is this string a number?" mess lives in
the decoding layer (infrastructure/decoding). If an entity exists, its strict fields were
checked; soft counters were defaulted. Don't add __post_init__ validation here or you'll
end up with two places deciding what "valid" means.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Image:
    """One size variant of an artwork image."""

    size: str
    url: str | None = None  # Last.fm sends "" for missing artwork


@dataclass(frozen=True)
class Wiki:
    """Editorial text (album wiki, artist bio, tag wiki)."""

    summary: str = ""
    content: str = ""
    published: str | None = None


@dataclass(frozen=True)
class Tag:
    """A tag (genre-ish label) as returned by tag/top-tags endpoints."""

    name: str
    url: str | None = None
    count: int | None = None
    total: int | None = None
    reach: int | None = None
    wiki: Wiki | None = None


@dataclass(frozen=True)
class ArtistRef:
    """Lightweight artist reference embedded in tracks, albums and scrobbles.

    Last.fm sometimes sends this as a plain string ("artist": "Cher") and sometimes
    as an object with name/#text, mbid and url.
    """

    name: str
    mbid: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Artist:
    """An artist."""

    name: str
    url: str
    mbid: str | None = None
    playcount: float | None = None
    listeners: float | None = None
    streamable: bool | None = None
    match: float | None = None  # similarity score, artist.getSimilar only
    rank: int | None = None
    images: list[Image] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    bio: Wiki | None = None

    @property
    def id(self) -> str:
        """Stable identifier (the Last.fm page URL)."""
        return self.url


@dataclass(frozen=True)
class Track:
    """A track.

    duration/playcount/listeners are soft counters: empty or missing values
    become 0, garbage still fails decoding.
    """

    name: str
    url: str
    artist: ArtistRef
    duration: int = 0
    playcount: float = 0.0
    listeners: float = 0.0
    mbid: str | None = None
    album_title: str | None = None
    match: float | None = None
    rank: int | None = None
    loved: bool | None = None
    images: list[Image] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    wiki: Wiki | None = None

    @property
    def id(self) -> str:
        """Stable identifier (the Last.fm page URL)."""
        return self.url


@dataclass(frozen=True)
class Album:
    """An album."""

    name: str
    artist: ArtistRef
    url: str
    mbid: str | None = None
    playcount: float | None = None
    listeners: float | None = None
    rank: int | None = None
    images: list[Image] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    tracks: list[Track] = field(default_factory=list)
    wiki: Wiki | None = None

    @property
    def id(self) -> str:
        """Stable identifier (the Last.fm page URL)."""
        return self.url


@dataclass(frozen=True)
class Session:
    """An authenticated session from auth.getMobileSession.

    The key has no expiry information; Last.fm keeps it valid until the
    user revokes access.
    """

    key: str
    name: str | None = None
    subscriber: bool = False


@dataclass(frozen=True)
class PageAttributes:
    """The @attr block of a paginated response.

    Counters are informational and default to 0 when Last.fm leaves them out.
    """

    page: int = 0
    per_page: int = 0
    total_pages: int = 0
    total: int = 0
    user: str | None = None
    artist: str | None = None
    tag: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class SearchAttributes:
    """OpenSearch metadata of a search response."""

    query: str | None = None
    start_page: int = 0
    total_results: int = 0
    start_index: int = 0
    items_per_page: int = 0


@dataclass(frozen=True)
class Page(Generic[T]):
    """A decoded list payload together with its @attr metadata."""

    items: list[T]
    attributes: PageAttributes | None = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class SearchResults(Generic[T]):
    """Matches of a *.search call."""

    items: list[T]
    attributes: SearchAttributes

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class RecentTrack:
    """A scrobble from user.getRecentTracks."""

    name: str
    artist: ArtistRef
    url: str | None = None
    mbid: str | None = None
    album: str | None = None
    album_mbid: str | None = None
    date: datetime | None = None  # None while the track is still playing
    now_playing: bool = False
    loved: bool = False
    streamable: bool = False
    images: list[Image] = field(default_factory=list)


@dataclass(frozen=True)
class LovedTrack:
    """An entry of user.getLovedTracks."""

    name: str
    artist: ArtistRef
    url: str
    mbid: str | None = None
    date: datetime | None = None
    images: list[Image] = field(default_factory=list)


@dataclass(frozen=True)
class Friend:
    """An entry of user.getFriends."""

    name: str
    url: str
    realname: str | None = None
    country: str | None = None
    subscriber: bool | None = None
    registered: datetime | None = None
    images: list[Image] = field(default_factory=list)


@dataclass(frozen=True)
class UserInfo:
    """Profile data from user.getInfo."""

    name: str
    url: str
    realname: str | None = None
    country: str | None = None
    gender: str | None = None
    age: int | None = None
    subscriber: bool | None = None
    playcount: float | None = None
    playlists: int | None = None
    registered: datetime | None = None
    images: list[Image] = field(default_factory=list)


@dataclass(frozen=True)
class ChartRange:
    """One week of a weekly chart list."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class WeeklyChartEntry:
    """A row of a weekly album/artist/track chart."""

    name: str
    playcount: float = 0.0
    rank: int | None = None
    artist: ArtistRef | None = None
    mbid: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class TaggedItem:
    """Something a user tagged: kind is "artist", "album" or "track"."""

    kind: str
    item: Artist | Album | Track


@dataclass(frozen=True)
class PersonalTags:
    """Items a user tagged with one particular tag."""

    items: list[TaggedItem]
    attributes: PageAttributes | None = None

    def __iter__(self) -> Iterator[TaggedItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


__all__ = [
    "Album",
    "Artist",
    "ArtistRef",
    "ChartRange",
    "Friend",
    "Image",
    "LovedTrack",
    "Page",
    "PageAttributes",
    "PersonalTags",
    "RecentTrack",
    "SearchAttributes",
    "SearchResults",
    "Session",
    "Tag",
    "TaggedItem",
    "Track",
    "UserInfo",
    "WeeklyChartEntry",
    "Wiki",
]
