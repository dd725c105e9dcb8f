"""Resilient decoding of Last.fm JSON payloads into typed entities."""

from scrobblekit.infrastructure.decoding.decoder import decode, decode_field, decode_items
from scrobblekit.infrastructure.decoding.shapes import (
    Envelope,
    OneOf,
    Shape,
    Variant,
    Wrapped,
)

__all__ = [
    "Envelope",
    "OneOf",
    "Shape",
    "Variant",
    "Wrapped",
    "decode",
    "decode_field",
    "decode_items",
]
