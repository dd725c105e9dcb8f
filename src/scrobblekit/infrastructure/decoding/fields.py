"""Field declarations and raw-value readers for the response decoder.

Hey future me - Last.fm's JSON is a MESS. The same counter arrives as "1234", 1234, "" or
not at all depending on the endpoint (and sometimes the phase of the moon). Instead of
sprinkling try/except over every model, each field is declared ONCE with a kind and an
optionality, and the readers in here turn the raw value into a FieldResult:

    Present(value)      parsed fine
    Absent()            missing, null, or "" (Last.fm's favourite way of saying "nothing")
    Malformed(raw, why) something was there and it's garbage

The readers never raise and never apply defaults - that's the policy's job (decoder.py).
"""

import math
import re
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

from scrobblekit.domain.value_objects.field_result import (
    ABSENT,
    FieldResult,
    Malformed,
    Present,
)

if TYPE_CHECKING:
    from scrobblekit.infrastructure.decoding.shapes import ShapeLike

# Marker for "key not in payload". Distinct from None because None is a legit JSON null.
MISSING: Any = object()

NOT_A_NUMBER = "is not a valid number"
NOT_A_STRING = "is not a string"
NOT_A_URL = "is not a valid URL"
NOT_A_TIMESTAMP = "is not a valid timestamp"
NOT_AN_OBJECT = "is not an object"
NOT_A_LIST = "is not a list"

# ASCII digits only. int() and float() on their own would also take "1_000" or "١٢".
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class FieldKind(str, Enum):
    """How a raw JSON value is interpreted."""

    TEXT = "text"
    LINK = "link"
    INTEGER = "integer"
    NUMBER = "number"
    FLAG = "flag"
    TIMESTAMP = "timestamp"
    NESTED = "nested"
    MANY = "many"


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one field of a shape.

    Attributes:
        attr: Keyword passed to the entity constructor
        path: Dotted path into the raw object ("stats.playcount", "@attr.rank")
        kind: How to read the raw value
        optional: Absent values become `default` instead of failing
        default: Value used for optional fields that are absent
        aliases: Alternative paths, tried in order when `path` is absent
        shape: Target shape for NESTED/MANY fields
        from_text: For NESTED/MANY, a bare string is treated as {from_text: string}
        truthy: For FLAG, the string values meaning True
    """

    attr: str
    path: str
    kind: FieldKind
    optional: bool = False
    default: Any = None
    aliases: tuple[str, ...] = ()
    shape: "ShapeLike | None" = None
    from_text: str | None = None
    truthy: frozenset[str] = frozenset({"1"})

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.path, *self.aliases)

    @property
    def label(self) -> str:
        """Name used in error messages."""
        return self.attr


# =============================================================================
# Declaration helpers
# =============================================================================


def text(
    attr: str,
    path: str | None = None,
    *,
    optional: bool = False,
    default: Any = None,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare a string field. Strict text fields reject missing and empty values."""
    return FieldSpec(attr, path or attr, FieldKind.TEXT, optional, default, aliases)


def link(
    attr: str,
    path: str | None = None,
    *,
    optional: bool = False,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare an http(s) URL field."""
    return FieldSpec(attr, path or attr, FieldKind.LINK, optional, None, aliases)


def integer(
    attr: str,
    path: str | None = None,
    *,
    optional: bool = False,
    default: Any = None,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare an integer that may arrive as "12" or 12."""
    return FieldSpec(attr, path or attr, FieldKind.INTEGER, optional, default, aliases)


def number(
    attr: str,
    path: str | None = None,
    *,
    optional: bool = False,
    default: Any = None,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare a decimal counter that may arrive as "12.5" or 12.5."""
    return FieldSpec(attr, path or attr, FieldKind.NUMBER, optional, default, aliases)


def flag(
    attr: str,
    path: str | None = None,
    *,
    default: bool | None = False,
    truthy: Collection[str] = ("1",),
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare a boolean encoded as "0"/"1". Never fails."""
    return FieldSpec(
        attr,
        path or attr,
        FieldKind.FLAG,
        True,
        default,
        aliases,
        truthy=frozenset(truthy),
    )


def timestamp(
    attr: str,
    path: str | None = None,
    *,
    optional: bool = True,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare a Unix timestamp ("1700000000" or {"uts": "1700000000", "#text": ...})."""
    return FieldSpec(attr, path or attr, FieldKind.TIMESTAMP, optional, None, aliases)


def nested(
    attr: str,
    shape: "ShapeLike",
    path: str | None = None,
    *,
    optional: bool = False,
    from_text: str | None = None,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare a nested object decoded with another shape."""
    return FieldSpec(
        attr,
        path or attr,
        FieldKind.NESTED,
        optional,
        None,
        aliases,
        shape=shape,
        from_text=from_text,
    )


def many(
    attr: str,
    shape: "ShapeLike",
    path: str | None = None,
    *,
    optional: bool = True,
    from_text: str | None = None,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare a list of nested objects. A single object is wrapped into a list."""
    return FieldSpec(
        attr,
        path or attr,
        FieldKind.MANY,
        optional,
        None,
        aliases,
        shape=shape,
        from_text=from_text,
    )


# =============================================================================
# Path lookup
# =============================================================================


def lookup(raw: Any, path: str) -> Any:
    """Follow a dotted path through nested objects.

    Returns MISSING as soon as a segment is absent or the current value is not
    an object (Last.fm uses "" for empty containers, which also ends here).
    """
    current = raw
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return MISSING
        current = current[segment]
    return MISSING if current is None else current


def lookup_first(raw: Any, paths: tuple[str, ...]) -> Any:
    """Return the value of the first path holding something non-blank.

    When every path is blank, the first one that exists at all wins, so an
    explicit "" survives for fields that want to keep it.
    """
    fallback = MISSING
    for path in paths:
        value = lookup(raw, path)
        if not is_blank(value):
            return value
        if fallback is MISSING:
            fallback = value
    return fallback


def is_blank(value: Any) -> bool:
    """Missing, null, "" and {} all count as 'nothing here'."""
    if value is MISSING or value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, Mapping):
        return len(value) == 0
    return False


# =============================================================================
# Readers: raw value -> FieldResult
# =============================================================================


def read_text(value: Any, *, keep_empty: bool) -> FieldResult[str]:
    if value is MISSING or value is None:
        return ABSENT
    if isinstance(value, bool):
        return Malformed(value, NOT_A_STRING)
    if isinstance(value, str):
        if not keep_empty and not value.strip():
            return ABSENT
        return Present(value)
    # Artist "1975" sometimes comes back as a JSON number
    if isinstance(value, int):
        return Present(str(value))
    return Malformed(value, NOT_A_STRING)


def read_link(value: Any) -> FieldResult[str]:
    if is_blank(value):
        return ABSENT
    if not isinstance(value, str):
        return Malformed(value, NOT_A_URL)
    try:
        url = httpx.URL(value.strip())
    except httpx.InvalidURL:
        return Malformed(value, NOT_A_URL)
    if url.scheme not in ("http", "https") or not url.host:
        return Malformed(value, NOT_A_URL)
    return Present(value.strip())


# Yo, string FIRST, native number second. Last.fm's primary encoding is string-typed, the
# native branch is the fallback for the handful of endpoints that send real numbers.
# bool is a subclass of int in Python - reject it explicitly or True turns into 1!
def read_integer(value: Any) -> FieldResult[int]:
    if value is MISSING or value is None:
        return ABSENT
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return ABSENT
        if not _INTEGER_RE.fullmatch(stripped):
            return Malformed(value, NOT_A_NUMBER)
        try:
            return Present(int(stripped))
        except ValueError:
            # more digits than int() is allowed to parse
            return Malformed(value, NOT_A_NUMBER)
    if isinstance(value, bool):
        return Malformed(value, NOT_A_NUMBER)
    if isinstance(value, int):
        return Present(value)
    if isinstance(value, float) and value.is_integer():
        return Present(int(value))
    return Malformed(value, NOT_A_NUMBER)


def read_number(value: Any) -> FieldResult[float]:
    if value is MISSING or value is None:
        return ABSENT
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return ABSENT
        if not _DECIMAL_RE.fullmatch(stripped):
            return Malformed(value, NOT_A_NUMBER)
        return _finite(float(stripped), value)
    if isinstance(value, bool):
        return Malformed(value, NOT_A_NUMBER)
    if isinstance(value, (int, float)):
        try:
            return _finite(float(value), value)
        except OverflowError:
            # JSON integers have no size limit, floats do
            return Malformed(value, NOT_A_NUMBER)
    return Malformed(value, NOT_A_NUMBER)


def _finite(parsed: float, raw: Any) -> FieldResult[float]:
    if not math.isfinite(parsed):
        return Malformed(raw, NOT_A_NUMBER)
    return Present(parsed)


def read_flag(value: Any, truthy: frozenset[str]) -> FieldResult[bool]:
    if value is MISSING or value is None:
        return ABSENT
    if value is True:
        return Present(True)
    if isinstance(value, int) and not isinstance(value, bool):
        return Present(value == 1)
    if isinstance(value, str):
        return Present(value.strip() in truthy)
    if isinstance(value, Mapping):
        # track streamable comes as {"#text": "0", "fulltrack": "0"}
        return read_flag(value.get("#text"), truthy)
    return Present(False)


def read_timestamp(value: Any) -> FieldResult[datetime]:
    if is_blank(value):
        return ABSENT
    if isinstance(value, Mapping):
        # {"uts": "1700000000", "#text": "14 Nov 2023, 22:13"} or {"unixtime": ..., "#text": ...}
        inner = lookup_first(value, ("uts", "unixtime"))
        if inner is MISSING:
            return Malformed(value, NOT_A_TIMESTAMP)
        value = inner
    seconds = read_integer(value)
    if isinstance(seconds, Present):
        try:
            return Present(datetime.fromtimestamp(seconds.value, tz=timezone.utc))
        except (OverflowError, OSError, ValueError):
            return Malformed(value, NOT_A_TIMESTAMP)
    if isinstance(seconds, Malformed):
        return Malformed(value, NOT_A_TIMESTAMP)
    return ABSENT
