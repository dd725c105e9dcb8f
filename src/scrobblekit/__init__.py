"""scrobblekit - async Last.fm client with resilient response decoding.

Usage:
    from scrobblekit import LastfmClient, LastfmSettings

    async with LastfmClient(LastfmSettings(api_key="...")) as client:
        artist = await client.artist_info("Muse")
"""

from scrobblekit.config import LastfmSettings, Settings, get_settings
from scrobblekit.domain.exceptions import (
    APIError,
    AuthenticationFailed,
    ConfigurationError,
    DecodingError,
    DomainException,
    InvalidURLError,
    MissingCredentialError,
    NetworkError,
)
from scrobblekit.domain.value_objects import Endpoint, Period, TaggingType
from scrobblekit.infrastructure.integrations import LastfmClient
from scrobblekit.infrastructure.observability import (
    configure_logging,
    configure_logging_from_settings,
)

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "AuthenticationFailed",
    "ConfigurationError",
    "DecodingError",
    "DomainException",
    "Endpoint",
    "InvalidURLError",
    "LastfmClient",
    "LastfmSettings",
    "MissingCredentialError",
    "NetworkError",
    "Period",
    "Settings",
    "TaggingType",
    "configure_logging",
    "configure_logging_from_settings",
    "get_settings",
]
