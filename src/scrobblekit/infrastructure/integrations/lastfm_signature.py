"""Canonical Last.fm request signature (api_sig).

Last.fm signs a request by sorting its parameters by name, gluing every
``name + value`` pair together without separators, appending the shared secret
and taking the MD5 hex digest of the UTF-8 bytes. Values are signed exactly as
they go on the wire, NOT url-encoded.
"""

import hashlib
from collections.abc import Mapping

# Never part of the signature input: format is a transport hint, api_sig is the output.
UNSIGNED_PARAMETERS = frozenset({"format", "api_sig"})


def _utf8(value: str) -> bytes:
    return value.encode("utf-8", errors="surrogatepass")


def sign(parameters: Mapping[str, str], secret: str) -> str:
    """Compute the api_sig for a parameter map.

    Args:
        parameters: Exact wire values keyed by parameter name
        secret: Shared secret of the API account

    Returns:
        32 lowercase hex characters
    """
    # Hey future me, sort on the encoded bytes, not on the str. Python compares str by code
    # point which matches UTF-8 byte order EXCEPT around surrogates; bytes are always right.
    names = sorted(parameters, key=_utf8)
    payload = "".join(f"{name}{parameters[name]}" for name in names) + secret

    # MD5 is mandated by the Last.fm API, not used for security purposes
    return hashlib.md5(  # nosec B324
        _utf8(payload), usedforsecurity=False
    ).hexdigest()


def signable(parameters: Mapping[str, str]) -> dict[str, str]:
    """Drop the parameters that never take part in the signature."""
    return {
        name: value
        for name, value in parameters.items()
        if name not in UNSIGNED_PARAMETERS
    }


def signed(parameters: Mapping[str, str], secret: str) -> dict[str, str]:
    """Return a copy of parameters with api_sig attached."""
    result = dict(parameters)
    result["api_sig"] = sign(signable(parameters), secret)
    return result
