"""Last.fm mobile-session authentication.

Write calls (scrobble, love, now playing) need a session key ("sk"). We get one
from auth.getMobileSession with username + password, signed with the shared
secret. The key never expires on its own, Last.fm only drops it when the user
revokes access.
"""

import hashlib
import logging

import httpx

from scrobblekit.config.settings import LASTFM_API_URL, LastfmSettings
from scrobblekit.domain.entities import Session
from scrobblekit.domain.exceptions import (
    AuthenticationFailed,
    DecodingError,
    MissingCredentialError,
)
from scrobblekit.domain.value_objects.endpoints import Endpoint
from scrobblekit.infrastructure.decoding import decode
from scrobblekit.infrastructure.decoding.fields import lookup
from scrobblekit.infrastructure.decoding.schemas import SESSION_INFO
from scrobblekit.infrastructure.integrations.lastfm_http import (
    build_request,
    error_envelope,
    parse_body,
    raise_for_status,
    send,
)
from scrobblekit.infrastructure.integrations.lastfm_signature import signed

logger = logging.getLogger(__name__)

SESSION_KEY_MISSING = "session key missing"

CacheKey = tuple[str, str, str]


async def authenticate(
    client: httpx.AsyncClient,
    username: str,
    password: str,
    api_key: str,
    secret: str,
    *,
    url: str = LASTFM_API_URL,
) -> Session:
    """Exchange username + password for a session key.

    Exactly one POST, no retry, no caching.

    Args:
        client: HTTP client used for the exchange
        username: Last.fm username
        password: Plain password (sent over HTTPS, signed with the secret)
        api_key: API key of the application
        secret: Shared secret of the application
        url: API root

    Returns:
        The new session

    Raises:
        MissingCredentialError: If any credential is empty (no request is sent)
        AuthenticationFailed: If Last.fm rejects the credentials or returns no key
        NetworkError: On transport failures
        InvalidURLError: If a credential cannot be encoded
    """
    # Hey future me, check ALL four before touching the network. An empty password would
    # otherwise round-trip to Last.fm just to come back as error 4.
    for field, value in (
        ("username", username),
        ("password", password),
        ("api_key", api_key),
        ("secret", secret),
    ):
        if not value:
            raise MissingCredentialError(field)

    parameters = signed(
        {
            "method": Endpoint.AUTH_GET_MOBILE_SESSION.value,
            "api_key": api_key,
            "password": password,
            "username": username,
        },
        secret,
    )
    parameters["format"] = "json"

    logger.debug(f"Requesting Last.fm session for {username}")
    request = build_request(client, "POST", url, parameters)
    response = await send(client, request)
    payload = parse_body(response)

    envelope = error_envelope(payload)
    if envelope is not None:
        code, message = envelope
        logger.warning(f"Last.fm rejected credentials for {username} (code {code}): {message}")
        raise AuthenticationFailed(code, message)
    raise_for_status(response)

    key = lookup(payload, "session.key")
    if not isinstance(key, str) or not key:
        raise AuthenticationFailed(-1, SESSION_KEY_MISSING)

    try:
        session: Session = decode(payload, SESSION_INFO)
    except DecodingError as e:
        raise AuthenticationFailed(-1, e.message) from e
    logger.info(f"Authenticated Last.fm user {session.name or username}")
    return session


class SessionCache:
    """Session keys remembered per (api_key, username, password).

    The password is only kept as a SHA-256 digest. Owned by one SessionManager,
    never shared between clients.
    """

    def __init__(self) -> None:
        self._sessions: dict[CacheKey, Session] = {}

    @staticmethod
    def key_for(api_key: str, username: str, password: str) -> CacheKey:
        digest = hashlib.sha256(password.encode("utf-8", errors="surrogatepass")).hexdigest()
        return (api_key, username, digest)

    def get(self, api_key: str, username: str, password: str) -> Session | None:
        return self._sessions.get(self.key_for(api_key, username, password))

    def put(self, api_key: str, username: str, password: str, session: Session) -> None:
        self._sessions[self.key_for(api_key, username, password)] = session

    def invalidate(self, api_key: str, username: str, password: str) -> None:
        self._sessions.pop(self.key_for(api_key, username, password), None)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


# Yo, by default there is NO cache: every write authenticates again, one extra round-trip per
# scrobble. Turn on LastfmSettings.reuse_sessions (or pass a cache) to keep keys around; the
# pipeline calls invalidate() as soon as Last.fm says the key is no good.
class SessionManager:
    """Provides session keys for signed calls of one client."""

    def __init__(
        self,
        settings: LastfmSettings,
        *,
        cache: SessionCache | None = None,
    ) -> None:
        """
        Initialize the session manager.

        Args:
            settings: Credentials and behaviour flags
            cache: Explicit cache; defaults to a fresh one when reuse_sessions is on
        """
        self.settings = settings
        if cache is None and settings.reuse_sessions:
            cache = SessionCache()
        self.cache = cache

    def _credentials(
        self, username: str | None, password: str | None
    ) -> tuple[str, str]:
        if username is None:
            username = self.settings.username or ""
        if password is None:
            password = (
                self.settings.password.get_secret_value() if self.settings.password else ""
            )
        return username, password

    async def session(
        self,
        client: httpx.AsyncClient,
        username: str | None = None,
        password: str | None = None,
    ) -> Session:
        """Get a session for the given (or configured) account.

        Raises:
            MissingCredentialError: If a credential is empty
            AuthenticationFailed: If Last.fm rejects the credentials
        """
        username, password = self._credentials(username, password)
        api_key = self.settings.api_key

        if self.cache is not None:
            cached = self.cache.get(api_key, username, password)
            if cached is not None:
                logger.debug(f"Reusing cached Last.fm session for {username}")
                return cached

        session = await authenticate(
            client,
            username,
            password,
            api_key,
            self.settings.api_secret.get_secret_value(),
            url=self.settings.base_url,
        )
        if self.cache is not None:
            self.cache.put(api_key, username, password, session)
        return session

    def invalidate(self, username: str | None = None, password: str | None = None) -> None:
        """Forget the cached session of the given (or configured) account."""
        if self.cache is None:
            return
        username, password = self._credentials(username, password)
        self.cache.invalidate(self.settings.api_key, username, password)
        logger.info(f"Dropped cached Last.fm session for {username}")
