"""Wire helpers shared by the request pipeline and the session manager.

Everything that turns parameters into bytes, bytes into JSON, and httpx failures
into domain exceptions lives here, so the auth handshake and regular calls fail
in exactly the same way.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from scrobblekit.domain.exceptions import DecodingError, InvalidURLError, NetworkError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def ensure_encodable(parameters: Mapping[str, str]) -> None:
    """Fail early when a name or value cannot be sent as UTF-8.

    Raises:
        InvalidURLError: For lone surrogates and other unencodable text
    """
    for name, value in parameters.items():
        for part in (name, value):
            try:
                part.encode("utf-8")
            except UnicodeEncodeError as e:
                raise InvalidURLError(
                    f"Parameter '{name}' cannot be encoded as UTF-8"
                ) from e


def encode_form(parameters: Mapping[str, str]) -> bytes:
    """Form-encode parameters for a POST body (application/x-www-form-urlencoded)."""
    ensure_encodable(parameters)
    return urlencode(dict(parameters)).encode("ascii")


def build_request(
    client: httpx.AsyncClient,
    http_method: str,
    url: str,
    parameters: Mapping[str, str],
) -> httpx.Request:
    """Build a GET (query string) or POST (form body) request.

    Raises:
        InvalidURLError: If the URL or the parameters cannot be encoded
    """
    ensure_encodable(parameters)
    try:
        if http_method == "POST":
            return client.build_request(
                "POST",
                url,
                content=encode_form(parameters),
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        return client.build_request("GET", url, params=dict(parameters))
    except httpx.InvalidURL as e:
        raise InvalidURLError(f"Invalid request URL: {e}") from e


async def send(client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
    """Send a request, translating transport failures into NetworkError."""
    try:
        return await client.send(request)
    except httpx.InvalidURL as e:
        raise InvalidURLError(f"Invalid request URL: {e}") from e
    except httpx.HTTPError as e:
        logger.error(f"Last.fm request failed: {e}")
        raise NetworkError(f"Request to Last.fm failed: {e}") from e


def parse_body(response: httpx.Response) -> Any:
    """Parse the response body as JSON.

    Raises:
        NetworkError: Non-JSON body on an HTTP error status
        DecodingError: Non-JSON body on a successful status
    """
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        if response.is_error:
            raise NetworkError(
                f"Last.fm returned HTTP {response.status_code}",
                status_code=response.status_code,
            ) from e
        raise DecodingError(f"response body is not valid JSON ({e.__class__.__name__})") from e


def error_envelope(payload: Any) -> tuple[int, str] | None:
    """Return (code, message) when payload is a Last.fm error envelope.

    Both keys must be present, e.g. {"error": 10, "message": "Invalid API key"}.
    A non-numeric code is kept as -1 so the remote message still surfaces.
    """
    if not isinstance(payload, Mapping):
        return None
    if "error" not in payload or "message" not in payload:
        return None
    raw_code = payload["error"]
    try:
        code = int(raw_code) if not isinstance(raw_code, bool) else -1
    except (TypeError, ValueError):
        code = -1
    return code, str(payload["message"])


def raise_for_status(response: httpx.Response) -> None:
    """HTTP >= 400 without an error envelope is a transport-level failure."""
    if response.is_error:
        logger.warning(f"Last.fm returned HTTP {response.status_code} without error envelope")
        raise NetworkError(
            f"Last.fm returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
