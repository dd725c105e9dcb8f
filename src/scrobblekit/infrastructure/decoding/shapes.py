"""Shape descriptors: what a payload should decode into.

Four kinds of shape:

- ``Shape``: one JSON object -> one entity, field by field.
- ``OneOf``: candidate shapes. A variant pinned to the container the items came
  from wins outright; otherwise the first variant whose discriminating keys are
  all present is decoded (first match wins).
- ``Envelope``: the endpoint wrapper, e.g. ``{"topartists": {"artist": [...], "@attr": {...}}}``.
- ``Wrapped``: a single entity under a root key, e.g. ``{"artist": {...}}``.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from scrobblekit.domain.entities import Page
from scrobblekit.infrastructure.decoding.fields import FieldSpec, lookup

T = TypeVar("T")


@dataclass(frozen=True)
class Shape(Generic[T]):
    """Field-by-field description of an entity.

    Attributes:
        name: Kind of entity, used in error messages ("artist")
        build: Constructor called with the decoded fields as keyword arguments
        fields: Field declarations
        label: Paths whose string value names the entity in error messages
    """

    name: str
    build: Callable[..., T]
    fields: tuple[FieldSpec, ...]
    label: tuple[str, ...] = ("name",)

    def entity_label(self, raw: Any) -> str | None:
        """Best-effort human name of the raw object, for error messages."""
        return _first_string(raw, self.label)


@dataclass(frozen=True)
class Variant(Generic[T]):
    """One candidate of a OneOf.

    Attributes:
        kind: Tag stored on the decoded item ("track")
        shape: Shape of this kind
        requires: Keys that must all be present for a key-based match
        container: Envelope item path that only ever holds this kind ("tracks.track")
    """

    kind: str
    shape: Shape[T]
    requires: tuple[str, ...] = ()
    container: str | None = None

    def matches(self, raw: Mapping[str, Any]) -> bool:
        return all(key in raw for key in self.requires)


@dataclass(frozen=True)
class OneOf(Generic[T]):
    """Tagged union decoded by an explicit, ordered list of variants.

    When the envelope tells which container an item came from, the variant
    pinned to that container is used no matter which keys are present.
    Otherwise variants are checked in order by their `requires` keys; the first
    match is decoded. Either way its errors propagate. Put the most specific
    variant first.
    """

    name: str
    variants: tuple[Variant[Any], ...]
    build: Callable[[str, Any], T]
    label: tuple[str, ...] = ("name",)

    def entity_label(self, raw: Any) -> str | None:
        return _first_string(raw, self.label)

    def select(
        self, raw: Mapping[str, Any], container: str | None = None
    ) -> Variant[Any] | None:
        if container is not None:
            for variant in self.variants:
                if variant.container == container:
                    return variant
        for variant in self.variants:
            if variant.matches(raw):
                return variant
        return None


@dataclass(frozen=True)
class Envelope(Generic[T]):
    """Endpoint wrapper holding a list of items plus metadata.

    Attributes:
        name: Used in error messages ("top artists")
        root: Top-level key ("topartists")
        items: Paths of the item list inside root, first present wins
        item_shape: Shape of one item
        attributes: Shape of the metadata, or None
        attributes_path: Where the metadata lives inside root; None means root itself
        build: Called with (items, attributes)
    """

    name: str
    root: str
    items: tuple[str, ...]
    item_shape: "ShapeLike"
    attributes: Shape[Any] | None = None
    attributes_path: str | None = "@attr"
    build: Callable[[list[Any], Any], T] = Page  # type: ignore[assignment]


@dataclass(frozen=True)
class Wrapped(Generic[T]):
    """A single entity under a top-level key."""

    root: str
    shape: Shape[T]


ShapeLike = Union[Shape[Any], OneOf[Any]]
AnyShape = Union[Shape[Any], OneOf[Any], Envelope[Any], Wrapped[Any]]


def _first_string(raw: Any, paths: tuple[str, ...]) -> str | None:
    for path in paths:
        value = lookup(raw, path)
        if isinstance(value, str) and value:
            return value
    return None
