"""Shape catalog for every Last.fm payload the client understands.

Each entity is declared once here and reused by every endpoint that returns it.
The response wrappers (envelopes) are listed at the bottom, one per root key.
"""

from scrobblekit.domain.entities import (
    Album,
    Artist,
    ArtistRef,
    ChartRange,
    Friend,
    Image,
    LovedTrack,
    PageAttributes,
    PersonalTags,
    RecentTrack,
    SearchAttributes,
    SearchResults,
    Session,
    Tag,
    TaggedItem,
    Track,
    UserInfo,
    WeeklyChartEntry,
    Wiki,
)
from scrobblekit.infrastructure.decoding.fields import (
    flag,
    integer,
    link,
    many,
    nested,
    number,
    text,
    timestamp,
)
from scrobblekit.infrastructure.decoding.shapes import (
    Envelope,
    OneOf,
    Shape,
    Variant,
    Wrapped,
)

# =============================================================================
# Building blocks
# =============================================================================

IMAGE = Shape(
    "image",
    Image,
    (
        text("size", optional=True, default=""),
        link("url", "#text", optional=True),
    ),
    label=("size",),
)

WIKI = Shape(
    "wiki",
    Wiki,
    (
        text("summary", optional=True, default=""),
        text("content", optional=True, default=""),
        text("published", optional=True),
    ),
    label=(),
)

# chart.getTopTags calls the usage counter "taggings", everything else says "count"
TAG = Shape(
    "tag",
    Tag,
    (
        text("name"),
        link("url", optional=True),
        integer("count", optional=True, aliases=("taggings",)),
        integer("total", optional=True),
        integer("reach", optional=True),
        nested("wiki", WIKI, optional=True),
    ),
)

ARTIST_REF = Shape(
    "artist",
    ArtistRef,
    (
        text("name", aliases=("#text",)),
        text("mbid", optional=True),
        link("url", optional=True),
    ),
    label=("name", "#text"),
)

# =============================================================================
# Core entities
# =============================================================================

ARTIST = Shape(
    "artist",
    Artist,
    (
        text("name"),
        link("url"),
        text("mbid", optional=True),
        number("playcount", optional=True, aliases=("stats.playcount",)),
        number("listeners", optional=True, aliases=("stats.listeners",)),
        flag("streamable", default=None),
        number("match", optional=True),
        integer("rank", "@attr.rank", optional=True),
        many("images", IMAGE, "image"),
        many("tags", TAG, "tags.tag"),
        nested("bio", WIKI, optional=True),
    ),
)

# Hey future me, the soft counters (duration/playcount/listeners) default to 0 because half the
# list endpoints send "" for them. Artwork lives under album.image on track.getInfo.
TRACK = Shape(
    "track",
    Track,
    (
        text("name"),
        link("url"),
        nested("artist", ARTIST_REF, from_text="name"),
        integer("duration", optional=True, default=0),
        number("playcount", optional=True, default=0.0),
        number("listeners", optional=True, default=0.0),
        text("mbid", optional=True),
        text("album_title", "album.title", optional=True),
        number("match", optional=True),
        integer("rank", "@attr.rank", optional=True),
        flag("loved", "userloved", default=None),
        many("images", IMAGE, "image", aliases=("album.image",)),
        many("tags", TAG, "toptags.tag"),
        nested("wiki", WIKI, optional=True),
    ),
)

ALBUM = Shape(
    "album",
    Album,
    (
        text("name"),
        nested("artist", ARTIST_REF, from_text="name"),
        link("url"),
        text("mbid", optional=True),
        number("playcount", optional=True),
        number("listeners", optional=True),
        integer("rank", "@attr.rank", optional=True),
        many("images", IMAGE, "image"),
        many("tags", TAG, "tags.tag"),
        many("tracks", TRACK, "tracks.track"),
        nested("wiki", WIKI, optional=True),
    ),
)

SESSION = Shape(
    "session",
    Session,
    (
        text("key"),
        text("name", optional=True),
        flag("subscriber"),
    ),
)

# =============================================================================
# Metadata blocks
# =============================================================================

PAGE_ATTRIBUTES = Shape(
    "page attributes",
    PageAttributes,
    (
        integer("page", optional=True, default=0),
        integer("per_page", "perPage", optional=True, default=0),
        integer("total_pages", "totalPages", optional=True, default=0),
        integer("total", optional=True, default=0),
        text("user", optional=True),
        text("artist", optional=True),
        text("tag", optional=True),
        text("country", optional=True),
    ),
    label=("user", "artist", "tag", "country"),
)

# Search metadata sits next to the matches, not in @attr
SEARCH_ATTRIBUTES = Shape(
    "search attributes",
    SearchAttributes,
    (
        text("query", "opensearch:Query.searchTerms", optional=True, aliases=("@attr.for",)),
        integer("start_page", "opensearch:Query.startPage", optional=True, default=0),
        integer("total_results", "opensearch:totalResults", optional=True, default=0),
        integer("start_index", "opensearch:startIndex", optional=True, default=0),
        integer("items_per_page", "opensearch:itemsPerPage", optional=True, default=0),
    ),
    label=("@attr.for",),
)

# =============================================================================
# User-centric entities
# =============================================================================

RECENT_TRACK = Shape(
    "recent track",
    RecentTrack,
    (
        text("name"),
        nested("artist", ARTIST_REF, from_text="name"),
        link("url", optional=True),
        text("mbid", optional=True),
        text("album", "album.#text", optional=True),
        text("album_mbid", "album.mbid", optional=True),
        timestamp("date"),
        flag("now_playing", "@attr.nowplaying", truthy=("true", "1")),
        flag("loved"),
        flag("streamable"),
        many("images", IMAGE, "image"),
    ),
)

LOVED_TRACK = Shape(
    "loved track",
    LovedTrack,
    (
        text("name"),
        nested("artist", ARTIST_REF, from_text="name"),
        link("url"),
        text("mbid", optional=True),
        timestamp("date"),
        many("images", IMAGE, "image"),
    ),
)

FRIEND = Shape(
    "friend",
    Friend,
    (
        text("name"),
        link("url"),
        text("realname", optional=True),
        text("country", optional=True),
        flag("subscriber", default=None),
        timestamp("registered"),
        many("images", IMAGE, "image"),
    ),
)

USER_INFO = Shape(
    "user",
    UserInfo,
    (
        text("name"),
        link("url"),
        text("realname", optional=True),
        text("country", optional=True),
        text("gender", optional=True),
        integer("age", optional=True),
        flag("subscriber", default=None),
        number("playcount", optional=True),
        integer("playlists", optional=True),
        timestamp("registered"),
        many("images", IMAGE, "image"),
    ),
)

CHART_RANGE = Shape(
    "chart range",
    ChartRange,
    (
        timestamp("start", "from", optional=False),
        timestamp("end", "to", optional=False),
    ),
    label=("from",),
)

WEEKLY_CHART_ENTRY = Shape(
    "chart entry",
    WeeklyChartEntry,
    (
        text("name"),
        number("playcount", optional=True, default=0.0),
        integer("rank", "@attr.rank", optional=True),
        nested("artist", ARTIST_REF, optional=True, from_text="name"),
        text("mbid", optional=True),
        link("url", optional=True),
    ),
)

# Listen up, user.getPersonalTags files its items under taggings.tracks.track,
# taggings.albums.album or taggings.artists.artist, and that container decides the kind.
# The key-based order (track before album before the bare artist) only kicks in for items
# decoded without a container. The chosen variant's errors are NOT swallowed.
TAGGED_ITEM = OneOf(
    "tagged item",
    (
        Variant("track", TRACK, requires=("artist", "duration"), container="tracks.track"),
        Variant("album", ALBUM, requires=("artist",), container="albums.album"),
        Variant("artist", ARTIST, requires=("name",), container="artists.artist"),
    ),
    build=TaggedItem,
)

# =============================================================================
# Response envelopes
# =============================================================================

# Single entities
ALBUM_INFO = Wrapped("album", ALBUM)
ARTIST_INFO = Wrapped("artist", ARTIST)
TRACK_INFO = Wrapped("track", TRACK)
TAG_INFO = Wrapped("tag", TAG)
USER_PROFILE = Wrapped("user", USER_INFO)
SESSION_INFO = Wrapped("session", SESSION)

# Tag lists
TAGS = Envelope("tags", "tags", ("tag",), TAG, PAGE_ATTRIBUTES)
TOP_TAGS = Envelope("top tags", "toptags", ("tag",), TAG, PAGE_ATTRIBUTES)
SIMILAR_TAGS = Envelope("similar tags", "similartags", ("tag",), TAG, PAGE_ATTRIBUTES)

# Artist lists
ARTISTS = Envelope("artists", "artists", ("artist",), ARTIST, PAGE_ATTRIBUTES)
TOP_ARTISTS = Envelope("top artists", "topartists", ("artist",), ARTIST, PAGE_ATTRIBUTES)
SIMILAR_ARTISTS = Envelope(
    "similar artists", "similarartists", ("artist",), ARTIST, PAGE_ATTRIBUTES
)

# Album lists
ALBUMS = Envelope("albums", "albums", ("album",), ALBUM, PAGE_ATTRIBUTES)
TOP_ALBUMS = Envelope("top albums", "topalbums", ("album",), ALBUM, PAGE_ATTRIBUTES)

# Track lists
TRACKS = Envelope("tracks", "tracks", ("track",), TRACK, PAGE_ATTRIBUTES)
TOP_TRACKS = Envelope("top tracks", "toptracks", ("track",), TRACK, PAGE_ATTRIBUTES)
SIMILAR_TRACKS = Envelope(
    "similar tracks", "similartracks", ("track",), TRACK, PAGE_ATTRIBUTES
)

# Search
ALBUM_SEARCH = Envelope(
    "album search",
    "results",
    ("albummatches.album",),
    ALBUM,
    SEARCH_ATTRIBUTES,
    attributes_path=None,
    build=SearchResults,
)
ARTIST_SEARCH = Envelope(
    "artist search",
    "results",
    ("artistmatches.artist",),
    ARTIST,
    SEARCH_ATTRIBUTES,
    attributes_path=None,
    build=SearchResults,
)
TRACK_SEARCH = Envelope(
    "track search",
    "results",
    ("trackmatches.track",),
    TRACK,
    SEARCH_ATTRIBUTES,
    attributes_path=None,
    build=SearchResults,
)

# User
RECENT_TRACKS = Envelope(
    "recent tracks", "recenttracks", ("track",), RECENT_TRACK, PAGE_ATTRIBUTES
)
LOVED_TRACKS = Envelope(
    "loved tracks", "lovedtracks", ("track",), LOVED_TRACK, PAGE_ATTRIBUTES
)
FRIENDS = Envelope("friends", "friends", ("user",), FRIEND, PAGE_ATTRIBUTES)
PERSONAL_TAGS = Envelope(
    "personal tags",
    "taggings",
    ("artists.artist", "albums.album", "tracks.track"),
    TAGGED_ITEM,
    PAGE_ATTRIBUTES,
    build=PersonalTags,
)

# Weekly charts
WEEKLY_CHART_LIST = Envelope(
    "weekly chart list", "weeklychartlist", ("chart",), CHART_RANGE, PAGE_ATTRIBUTES
)
WEEKLY_ALBUM_CHART = Envelope(
    "weekly album chart", "weeklyalbumchart", ("album",), WEEKLY_CHART_ENTRY, PAGE_ATTRIBUTES
)
WEEKLY_ARTIST_CHART = Envelope(
    "weekly artist chart",
    "weeklyartistchart",
    ("artist",),
    WEEKLY_CHART_ENTRY,
    PAGE_ATTRIBUTES,
)
WEEKLY_TRACK_CHART = Envelope(
    "weekly track chart", "weeklytrackchart", ("track",), WEEKLY_CHART_ENTRY, PAGE_ATTRIBUTES
)
