"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all scrobblekit exceptions."""

    # Hey future me, message is stored as an attribute so callers can inspect it without parsing
    # str(exception). Don't raise this directly - pick a subclass so callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


# =============================================================================
# Local errors (detected before any network I/O)
# =============================================================================


class ConfigurationError(DomainException):
    """Required configuration is missing or invalid.

    Raised before any request is sent, never retried.

    Example:
        raise ConfigurationError("Last.fm API key not configured")
    """

    pass


class MissingCredentialError(ConfigurationError):
    """A credential needed for signed calls is empty.

    Example:
        raise MissingCredentialError("password")
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing credential: {field} must not be empty")
        self.field = field


class InvalidURLError(DomainException):
    """The request URL or body could not be constructed.

    Example:
        raise InvalidURLError("Parameter 'artist' cannot be encoded as UTF-8")
    """

    pass


# =============================================================================
# Decoding errors
# =============================================================================


class DecodingError(DomainException):
    """A response payload could not be decoded into the expected shape.

    Carries the offending field and the entity being decoded so the message is
    actionable, e.g. "playcount is not a valid number for artist 'Muse'".
    """

    # Listen up, entity is the human label of the thing being decoded (usually its name field),
    # shape is the kind of thing ("artist", "tag"). Both can be None when the failure happens
    # before we know what we're looking at (e.g. body isn't JSON at all).
    def __init__(
        self,
        reason: str,
        *,
        field: str | None = None,
        entity: str | None = None,
        shape: str | None = None,
    ) -> None:
        super().__init__(self._compose(reason, field, entity, shape))
        self.reason = reason
        self.field = field
        self.entity = entity
        self.shape = shape

    @staticmethod
    def _compose(
        reason: str, field: str | None, entity: str | None, shape: str | None
    ) -> str:
        subject = f"{field} {reason}" if field else reason
        if entity is not None:
            return f"{subject} for {shape or 'item'} '{entity}'"
        if shape:
            return f"{subject} in {shape}"
        return subject


# =============================================================================
# Remote errors
# =============================================================================


class AuthenticationError(DomainException):
    """Authentication is required but was not possible."""

    pass


class AuthenticationFailed(AuthenticationError):
    """Last.fm rejected the credentials or session key.

    Also raised when Last.fm reports success but hands back an empty session
    key (code -1), since such a response is unusable.
    """

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"Authentication failed (code {code}): {message}")
        self.code = code
        self.remote_message = message


class ExternalServiceError(DomainException):
    """The remote service returned an error."""

    pass


class APIError(ExternalServiceError):
    """Last.fm reported an error in the response envelope.

    The remote code and message are kept verbatim (e.g. 6 = invalid
    parameters, 29 = rate limit exceeded).
    """

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"API error (code {code}): {message}")
        self.code = code
        self.remote_message = message


class NetworkError(ExternalServiceError):
    """The HTTP exchange itself failed (connection, timeout, bad status)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "DomainException",
    # Local
    "ConfigurationError",
    "MissingCredentialError",
    "InvalidURLError",
    # Decoding
    "DecodingError",
    # Auth
    "AuthenticationError",
    "AuthenticationFailed",
    # Remote
    "ExternalServiceError",
    "APIError",
    "NetworkError",
]
