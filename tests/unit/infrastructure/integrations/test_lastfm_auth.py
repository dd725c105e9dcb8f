"""Tests for Last.fm mobile-session authentication."""

from urllib.parse import parse_qsl

import httpx
import pytest

from scrobblekit.config.settings import LastfmSettings
from scrobblekit.domain.entities import Session
from scrobblekit.domain.exceptions import (
    AuthenticationFailed,
    ConfigurationError,
    MissingCredentialError,
    NetworkError,
)
from scrobblekit.infrastructure.integrations.lastfm_auth import (
    SessionCache,
    SessionManager,
    authenticate,
)

API_KEY = "x" * 32
SECRET = "y" * 32
SESSION_SIGNATURE = "5cf13ba18858f734ee065e872c906281"
SESSION_PAYLOAD = {
    "session": {"name": "testuser", "key": "d580d57f32848f5dcf574d1ce18d78b2", "subscriber": 0}
}


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        self.responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        canned = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        # fresh Response per call, a Response object can only be sent once
        return httpx.Response(canned.status_code, headers=canned.headers, content=canned.content)


def ok(payload: dict) -> httpx.Response:
    return httpx.Response(200, json=payload)


@pytest.fixture
def settings() -> LastfmSettings:
    """Settings with the reference credentials."""
    return LastfmSettings(
        api_key=API_KEY,
        api_secret=SECRET,
        username="testuser",
        password="testpassword",
    )


class TestAuthenticate:
    """Test authenticate()."""

    async def test_returns_session(self) -> None:
        """Test a successful exchange."""
        recorder = Recorder(ok(SESSION_PAYLOAD))
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            session = await authenticate(client, "testuser", "testpassword", API_KEY, SECRET)

        assert session == Session(
            key="d580d57f32848f5dcf574d1ce18d78b2", name="testuser", subscriber=False
        )

    async def test_sends_one_signed_form_post(self) -> None:
        """Test method, body encoding and signature of the request."""
        recorder = Recorder(ok(SESSION_PAYLOAD))
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            await authenticate(client, "testuser", "testpassword", API_KEY, SECRET)

        assert len(recorder.requests) == 1
        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://ws.audioscrobbler.com/2.0/"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"

        body = dict(parse_qsl(request.content.decode()))
        assert body == {
            "method": "auth.getMobileSession",
            "api_key": API_KEY,
            "password": "testpassword",
            "username": "testuser",
            "api_sig": SESSION_SIGNATURE,
            "format": "json",
        }

    @pytest.mark.parametrize(
        ("username", "password", "api_key", "secret", "field"),
        [
            ("", "testpassword", API_KEY, SECRET, "username"),
            ("testuser", "", API_KEY, SECRET, "password"),
            ("testuser", "testpassword", "", SECRET, "api_key"),
            ("testuser", "testpassword", API_KEY, "", "secret"),
        ],
    )
    async def test_missing_credentials_fail_without_network(
        self, username: str, password: str, api_key: str, secret: str, field: str
    ) -> None:
        """Test empty credentials are rejected before any HTTP call."""
        recorder = Recorder(ok(SESSION_PAYLOAD))
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            with pytest.raises(MissingCredentialError) as exc_info:
                await authenticate(client, username, password, api_key, secret)

        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.field == field
        assert recorder.requests == []

    async def test_error_envelope(self) -> None:
        """Test rejected credentials keep the remote code and message."""
        recorder = Recorder(
            ok({"error": 4, "message": "Authentication Failed - Invalid username or password"})
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            with pytest.raises(AuthenticationFailed) as exc_info:
                await authenticate(client, "testuser", "wrong", API_KEY, SECRET)

        assert exc_info.value.code == 4
        assert exc_info.value.remote_message == (
            "Authentication Failed - Invalid username or password"
        )

    async def test_error_envelope_on_http_error(self) -> None:
        """Test an envelope on HTTP 403 is still an authentication failure."""
        recorder = Recorder(
            httpx.Response(403, json={"error": 10, "message": "Invalid API key"})
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            with pytest.raises(AuthenticationFailed) as exc_info:
                await authenticate(client, "testuser", "testpassword", API_KEY, SECRET)

        assert exc_info.value.code == 10

    @pytest.mark.parametrize(
        "payload",
        [
            {"session": {"name": "testuser", "key": ""}},
            {"session": {"name": "testuser"}},
            {"session": ""},
            {},
        ],
    )
    async def test_missing_session_key(self, payload: dict) -> None:
        """Test a success response without a usable key."""
        recorder = Recorder(ok(payload))
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            with pytest.raises(AuthenticationFailed) as exc_info:
                await authenticate(client, "testuser", "testpassword", API_KEY, SECRET)

        assert exc_info.value.code == -1
        assert exc_info.value.remote_message == "session key missing"

    async def test_server_error_without_envelope(self) -> None:
        """Test an HTML 502 page is a network error."""
        recorder = Recorder(httpx.Response(502, text="<html>Bad Gateway</html>"))
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            with pytest.raises(NetworkError) as exc_info:
                await authenticate(client, "testuser", "testpassword", API_KEY, SECRET)

        assert exc_info.value.status_code == 502

    async def test_transport_failure(self) -> None:
        """Test connection errors are wrapped, with the cause kept."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(NetworkError) as exc_info:
                await authenticate(client, "testuser", "testpassword", API_KEY, SECRET)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestSessionCache:
    """Test SessionCache."""

    def test_put_get_invalidate(self) -> None:
        """Test the basic lifecycle."""
        cache = SessionCache()
        session = Session(key="abc", name="testuser")

        cache.put(API_KEY, "testuser", "testpassword", session)
        assert cache.get(API_KEY, "testuser", "testpassword") == session
        assert len(cache) == 1

        cache.invalidate(API_KEY, "testuser", "testpassword")
        assert cache.get(API_KEY, "testuser", "testpassword") is None
        assert len(cache) == 0

    def test_password_is_part_of_key(self) -> None:
        """Test another password does not hit the cached entry."""
        cache = SessionCache()
        cache.put(API_KEY, "testuser", "testpassword", Session(key="abc"))

        assert cache.get(API_KEY, "testuser", "other") is None
        assert cache.get("other-key", "testuser", "testpassword") is None

    def test_password_not_stored_in_clear(self) -> None:
        """Test the cache key holds a digest, not the password."""
        key = SessionCache.key_for(API_KEY, "testuser", "testpassword")

        assert "testpassword" not in key
        assert len(key[2]) == 64


class TestSessionManager:
    """Test SessionManager."""

    def test_no_cache_by_default(self, settings: LastfmSettings) -> None:
        """Test re-authentication per call is the default."""
        assert SessionManager(settings).cache is None

    def test_cache_when_reuse_enabled(self, settings: LastfmSettings) -> None:
        """Test reuse_sessions switches the cache on."""
        settings = settings.model_copy(update={"reuse_sessions": True})
        assert isinstance(SessionManager(settings).cache, SessionCache)

    async def test_authenticates_every_time_without_cache(
        self, settings: LastfmSettings
    ) -> None:
        """Test two sessions mean two exchanges."""
        recorder = Recorder(ok(SESSION_PAYLOAD))
        manager = SessionManager(settings)
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            await manager.session(client)
            await manager.session(client)

        assert len(recorder.requests) == 2

    async def test_reuses_cached_session(self, settings: LastfmSettings) -> None:
        """Test the cache short-circuits the exchange until invalidated."""
        recorder = Recorder(ok(SESSION_PAYLOAD))
        manager = SessionManager(settings, cache=SessionCache())
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            first = await manager.session(client)
            second = await manager.session(client)
            assert first is second
            assert len(recorder.requests) == 1

            manager.invalidate()
            await manager.session(client)

        assert len(recorder.requests) == 2

    async def test_explicit_credentials(self, settings: LastfmSettings) -> None:
        """Test credentials passed in override the configured account."""
        recorder = Recorder(ok(SESSION_PAYLOAD))
        manager = SessionManager(settings)
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            await manager.session(client, "someone", "hunter2")

        body = dict(parse_qsl(recorder.requests[0].content.decode()))
        assert body["username"] == "someone"
        assert body["password"] == "hunter2"

    async def test_missing_configured_password(self) -> None:
        """Test an account without password fails locally."""
        manager = SessionManager(LastfmSettings(api_key=API_KEY, api_secret=SECRET, username="testuser"))
        recorder = Recorder(ok(SESSION_PAYLOAD))
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            with pytest.raises(MissingCredentialError, match="password"):
                await manager.session(client)

        assert recorder.requests == []
