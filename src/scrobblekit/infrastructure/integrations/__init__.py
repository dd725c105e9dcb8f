"""Last.fm integration: signing, authentication and the request pipeline."""

from scrobblekit.infrastructure.integrations.lastfm_auth import (
    SessionCache,
    SessionManager,
    authenticate,
)
from scrobblekit.infrastructure.integrations.lastfm_client import LastfmClient
from scrobblekit.infrastructure.integrations.lastfm_signature import sign, signable, signed

__all__ = [
    "LastfmClient",
    "SessionCache",
    "SessionManager",
    "authenticate",
    "sign",
    "signable",
    "signed",
]
