"""Outcome of decoding a single scalar field.

Hey future me - every field decoder returns ONE of these three, and only the field policy
decides what happens next (default it, fail, or use the value). Keeping the raw outcome
separate from the policy is what lets the same "is this a number?" logic serve both soft
counters and strict identity fields.

    Present(1234)                    -> value found and parsed
    Absent()                         -> key missing, null, or empty string
    Malformed("abc", "is not ...")   -> something was there but it's garbage
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Present(Generic[T]):
    """Field was present and parsed."""

    value: T


@dataclass(frozen=True)
class Absent:
    """Field was missing, null, or an empty string."""


@dataclass(frozen=True)
class Malformed:
    """Field was present but could not be parsed."""

    raw: Any
    reason: str


FieldResult = Union[Present[T], Absent, Malformed]

ABSENT = Absent()

__all__ = ["ABSENT", "Absent", "FieldResult", "Malformed", "Present"]
