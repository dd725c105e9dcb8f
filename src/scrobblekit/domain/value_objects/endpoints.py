"""Last.fm API method names.

Last.fm treats method names case-insensitively. We send the lowercase form
(``artist.getinfo``) everywhere except ``auth.getMobileSession``, which keeps its
documented spelling. The method value is part of the signature input, so the
signed value and the transmitted value must both come from this enum.
"""

from enum import Enum


class Endpoint(str, Enum):
    """API method names, grouped by namespace."""

    # album.*
    ALBUM_GET_INFO = "album.getinfo"
    ALBUM_GET_TAGS = "album.gettags"
    ALBUM_GET_TOP_TAGS = "album.gettoptags"
    ALBUM_SEARCH = "album.search"

    # artist.*
    ARTIST_GET_INFO = "artist.getinfo"
    ARTIST_GET_TAGS = "artist.gettags"
    ARTIST_GET_TOP_TAGS = "artist.gettoptags"
    ARTIST_GET_TOP_ALBUMS = "artist.gettopalbums"
    ARTIST_GET_TOP_TRACKS = "artist.gettoptracks"
    ARTIST_GET_SIMILAR = "artist.getsimilar"
    ARTIST_SEARCH = "artist.search"

    # auth.*
    AUTH_GET_MOBILE_SESSION = "auth.getMobileSession"

    # chart.*
    CHART_GET_TOP_ARTISTS = "chart.gettopartists"
    CHART_GET_TOP_TAGS = "chart.gettoptags"
    CHART_GET_TOP_TRACKS = "chart.gettoptracks"

    # geo.*
    GEO_GET_TOP_ARTISTS = "geo.gettopartists"
    GEO_GET_TOP_TRACKS = "geo.gettoptracks"

    # tag.*
    TAG_GET_INFO = "tag.getinfo"
    TAG_GET_TOP_ARTISTS = "tag.gettopartists"
    TAG_GET_TOP_ALBUMS = "tag.gettopalbums"
    TAG_GET_TOP_TRACKS = "tag.gettoptracks"
    TAG_GET_TOP_TAGS = "tag.gettoptags"
    TAG_GET_SIMILAR = "tag.getsimilar"
    TAG_GET_WEEKLY_CHART_LIST = "tag.getweeklychartlist"

    # track.*
    TRACK_GET_INFO = "track.getinfo"
    TRACK_GET_TAGS = "track.gettags"
    TRACK_GET_TOP_TAGS = "track.gettoptags"
    TRACK_GET_SIMILAR = "track.getsimilar"
    TRACK_SEARCH = "track.search"
    TRACK_SCROBBLE = "track.scrobble"
    TRACK_UPDATE_NOW_PLAYING = "track.updatenowplaying"
    TRACK_LOVE = "track.love"

    # user.*
    USER_GET_INFO = "user.getinfo"
    USER_GET_FRIENDS = "user.getfriends"
    USER_GET_PERSONAL_TAGS = "user.getpersonaltags"
    USER_GET_RECENT_TRACKS = "user.getrecenttracks"
    USER_GET_LOVED_TRACKS = "user.getlovedtracks"
    USER_GET_TAGS = "user.gettags"
    USER_GET_TOP_ARTISTS = "user.gettopartists"
    USER_GET_TOP_ALBUMS = "user.gettopalbums"
    USER_GET_TOP_TRACKS = "user.gettoptracks"
    USER_GET_TOP_TAGS = "user.gettoptags"
    USER_GET_WEEKLY_CHART_LIST = "user.getweeklychartlist"
    USER_GET_WEEKLY_ALBUM_CHART = "user.getweeklyalbumchart"
    USER_GET_WEEKLY_ARTIST_CHART = "user.getweeklyartistchart"
    USER_GET_WEEKLY_TRACK_CHART = "user.getweeklytrackchart"

    @property
    def namespace(self) -> str:
        """Namespace part of the method name ("track" for track.scrobble)."""
        return self.value.split(".", 1)[0]

    @property
    def is_write(self) -> bool:
        """Check if this method mutates account state and must be signed."""
        return self in _WRITE_ENDPOINTS


_WRITE_ENDPOINTS = frozenset(
    {
        Endpoint.TRACK_SCROBBLE,
        Endpoint.TRACK_UPDATE_NOW_PLAYING,
        Endpoint.TRACK_LOVE,
    }
)


class Period(str, Enum):
    """Time ranges accepted by the user.getTop* methods."""

    OVERALL = "overall"
    SEVEN_DAYS = "7day"
    ONE_MONTH = "1month"
    THREE_MONTHS = "3month"
    SIX_MONTHS = "6month"
    TWELVE_MONTHS = "12month"


class TaggingType(str, Enum):
    """Item kinds accepted by user.getPersonalTags."""

    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"
