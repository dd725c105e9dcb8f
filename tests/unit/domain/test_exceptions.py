"""Tests for domain exceptions."""

import pytest

from scrobblekit.domain.exceptions import (
    APIError,
    AuthenticationError,
    AuthenticationFailed,
    ConfigurationError,
    DecodingError,
    DomainException,
    ExternalServiceError,
    InvalidURLError,
    MissingCredentialError,
    NetworkError,
)


class TestHierarchy:
    """Test what callers can catch."""

    @pytest.mark.parametrize(
        "exc",
        [
            ConfigurationError("x"),
            MissingCredentialError("password"),
            InvalidURLError("x"),
            DecodingError("is missing"),
            AuthenticationFailed(4, "x"),
            APIError(6, "x"),
            NetworkError("x"),
        ],
    )
    def test_everything_is_a_domain_exception(self, exc: Exception) -> None:
        """Test one except clause catches all library errors."""
        assert isinstance(exc, DomainException)

    def test_missing_credential_is_configuration_error(self) -> None:
        """Test local credential problems are configuration problems."""
        assert issubclass(MissingCredentialError, ConfigurationError)

    def test_remote_errors(self) -> None:
        """Test API and network failures share a base class."""
        assert issubclass(APIError, ExternalServiceError)
        assert issubclass(NetworkError, ExternalServiceError)
        assert issubclass(AuthenticationFailed, AuthenticationError)
        assert not issubclass(AuthenticationFailed, ExternalServiceError)


class TestMessages:
    """Test exception messages and attributes."""

    def test_missing_credential_names_field(self) -> None:
        """Test the message says which credential is empty."""
        exc = MissingCredentialError("api_key")
        assert exc.field == "api_key"
        assert str(exc) == "Missing credential: api_key must not be empty"
        assert exc.message == str(exc)

    def test_api_error_keeps_remote_details(self) -> None:
        """Test code and message are kept verbatim."""
        exc = APIError(29, "Rate limit exceeded")
        assert exc.code == 29
        assert exc.remote_message == "Rate limit exceeded"
        assert str(exc) == "API error (code 29): Rate limit exceeded"

    def test_authentication_failed(self) -> None:
        """Test the rejected-credentials message."""
        exc = AuthenticationFailed(4, "Invalid username or password")
        assert exc.code == 4
        assert str(exc) == "Authentication failed (code 4): Invalid username or password"

    def test_network_error_status(self) -> None:
        """Test the HTTP status is optional."""
        assert NetworkError("boom").status_code is None
        assert NetworkError("boom", status_code=503).status_code == 503


class TestDecodingErrorMessage:
    """Test DecodingError message composition."""

    def test_field_and_entity(self) -> None:
        """Test the most specific form."""
        exc = DecodingError("is not a valid number", field="playcount", entity="Muse", shape="artist")
        assert str(exc) == "playcount is not a valid number for artist 'Muse'"
        assert (exc.field, exc.entity, exc.shape) == ("playcount", "Muse", "artist")

    def test_entity_without_shape(self) -> None:
        """Test the generic 'item' wording."""
        exc = DecodingError("is missing", field="name", entity="x")
        assert str(exc) == "name is missing for item 'x'"

    def test_shape_without_entity(self) -> None:
        """Test failures before any label is known."""
        exc = DecodingError("is missing", field="url", shape="track")
        assert str(exc) == "url is missing in track"

    def test_reason_only(self) -> None:
        """Test the bare reason."""
        exc = DecodingError("response body is not valid JSON (JSONDecodeError)")
        assert str(exc) == "response body is not valid JSON (JSONDecodeError)"
        assert exc.reason == str(exc)
