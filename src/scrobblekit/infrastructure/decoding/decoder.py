"""Resilient decoder: raw JSON + shape -> typed entity or DecodingError.

Hey future me, this is where the fallback POLICY lives. The readers in fields.py only say
what they saw (Present/Absent/Malformed); the rules here decide what that means:

    Present           -> use the value
    Absent + optional -> use the declared default (0, 0.0, None, [] ...) SILENTLY
    Absent + strict   -> DecodingError("name is missing in artist")
    Malformed         -> DecodingError, ALWAYS, optional or not

That last rule is the important one. An optional counter that's missing is fine; an optional
counter that says "not-a-number" means the payload is broken and we refuse to guess. One
strict failure aborts the WHOLE decode - callers never get a half-filled object.
"""

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from scrobblekit.domain.exceptions import DecodingError
from scrobblekit.domain.value_objects.field_result import Absent, FieldResult, Malformed
from scrobblekit.infrastructure.decoding.fields import (
    MISSING,
    NOT_A_LIST,
    NOT_AN_OBJECT,
    FieldKind,
    FieldSpec,
    is_blank,
    lookup,
    lookup_first,
    read_flag,
    read_integer,
    read_link,
    read_number,
    read_text,
    read_timestamp,
)
from scrobblekit.infrastructure.decoding.shapes import (
    AnyShape,
    Envelope,
    OneOf,
    Shape,
    ShapeLike,
    Wrapped,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def decode(raw: Any, shape: AnyShape) -> Any:
    """Decode a parsed JSON value into the entity described by shape.

    Args:
        raw: Parsed JSON (dict/list/str/...)
        shape: Shape, OneOf, Envelope or Wrapped descriptor

    Returns:
        The decoded entity

    Raises:
        DecodingError: If a strict field is missing or any field is malformed
    """
    if isinstance(shape, Envelope):
        return _decode_envelope(raw, shape)
    if isinstance(shape, Wrapped):
        return _decode_wrapped(raw, shape)
    if isinstance(shape, OneOf):
        return _decode_one_of(raw, shape)
    return _decode_object(raw, shape)


def decode_field(
    raw: Mapping[str, Any],
    spec: FieldSpec,
    shape: Shape[Any],
    entity: str | None = None,
) -> Any:
    """Decode a single declared field of raw according to the policy."""
    value = lookup_first(raw, spec.paths) if spec.aliases else lookup(raw, spec.path)

    if spec.kind is FieldKind.NESTED:
        return _decode_nested(value, spec, shape, entity)
    if spec.kind is FieldKind.MANY:
        return _decode_many(value, spec, shape, entity)

    result = _read_scalar(value, spec)
    if isinstance(result, Malformed):
        raise DecodingError(result.reason, field=spec.label, entity=entity, shape=shape.name)
    if isinstance(result, Absent):
        return _absent(spec, shape, entity)
    return result.value


def _read_scalar(value: Any, spec: FieldSpec) -> FieldResult[Any]:
    if spec.kind is FieldKind.TEXT:
        return read_text(value, keep_empty=spec.optional)
    if spec.kind is FieldKind.LINK:
        return read_link(value)
    if spec.kind is FieldKind.INTEGER:
        return read_integer(value)
    if spec.kind is FieldKind.NUMBER:
        return read_number(value)
    if spec.kind is FieldKind.FLAG:
        return read_flag(value, spec.truthy)
    if spec.kind is FieldKind.TIMESTAMP:
        return read_timestamp(value)
    raise ValueError(f"Unsupported scalar field kind: {spec.kind}")


def _absent(spec: FieldSpec, shape: Shape[Any], entity: str | None) -> Any:
    if not spec.optional:
        raise DecodingError("is missing", field=spec.label, entity=entity, shape=shape.name)
    if spec.kind is FieldKind.MANY:
        return []
    logger.debug("Defaulting %s.%s to %r", shape.name, spec.attr, spec.default)
    return spec.default


def _coerce_text(value: Any, spec: FieldSpec) -> Any:
    # "artist": "Cher" -> {"name": "Cher"} for fields that accept a bare string
    if spec.from_text and isinstance(value, str) and value.strip():
        return {spec.from_text: value}
    return value


def _decode_nested(
    value: Any, spec: FieldSpec, shape: Shape[Any], entity: str | None
) -> Any:
    value = _coerce_text(value, spec)
    if is_blank(value):
        return _absent(spec, shape, entity)
    if not isinstance(value, Mapping):
        raise DecodingError(NOT_AN_OBJECT, field=spec.label, entity=entity, shape=shape.name)
    assert spec.shape is not None
    return decode(value, spec.shape)


# Listen up, single-or-array is a classic Last.fm trap: a user with ONE friend gets
# {"user": {...}} instead of {"user": [{...}]}. We normalise to a list before recursing.
def _decode_many(
    value: Any, spec: FieldSpec, shape: Shape[Any], entity: str | None
) -> list[Any]:
    if is_blank(value):
        return _absent(spec, shape, entity)  # type: ignore[no-any-return]
    assert spec.shape is not None
    return decode_items(value, spec.shape, from_text=spec.from_text, field=spec.label)


def decode_items(
    value: Any,
    item_shape: ShapeLike,
    *,
    from_text: str | None = None,
    field: str | None = None,
    container: str | None = None,
) -> list[Any]:
    """Decode a list of items, wrapping a lone object into a one-element list.

    container is the envelope path the list was found at; unions use it to
    pick the variant.
    """
    if is_blank(value):
        return []
    if isinstance(value, Mapping) or (from_text and isinstance(value, str)):
        value = [value]
    if not isinstance(value, list):
        raise DecodingError(NOT_A_LIST, field=field, shape=item_shape.name)

    items = []
    for element in value:
        if from_text and isinstance(element, str):
            element = {from_text: element}
        if isinstance(item_shape, OneOf):
            items.append(_decode_one_of(element, item_shape, container))
        else:
            items.append(decode(element, item_shape))
    return items


def _decode_object(raw: Any, shape: Shape[T]) -> T:
    if not isinstance(raw, Mapping):
        raise DecodingError(NOT_AN_OBJECT, shape=shape.name)
    entity = shape.entity_label(raw)
    values = {spec.attr: decode_field(raw, spec, shape, entity) for spec in shape.fields}
    return shape.build(**values)


def _decode_one_of(raw: Any, union: OneOf[T], container: str | None = None) -> T:
    if not isinstance(raw, Mapping):
        raise DecodingError(NOT_AN_OBJECT, shape=union.name)
    variant = union.select(raw, container)
    if variant is None:
        tried = ", ".join(v.kind for v in union.variants)
        raise DecodingError(
            f"matched no shape (tried {tried})",
            entity=union.entity_label(raw),
            shape=union.name,
        )
    return union.build(variant.kind, _decode_object(raw, variant.shape))


def _find_items(root: Mapping[str, Any], paths: tuple[str, ...]) -> tuple[str, Any]:
    """First item path holding something non-blank, with its value."""
    for path in paths:
        value = lookup(root, path)
        if not is_blank(value):
            return path, value
    return paths[0], MISSING


def _decode_envelope(raw: Any, envelope: Envelope[T]) -> T:
    root = raw.get(envelope.root, MISSING) if isinstance(raw, Mapping) else MISSING
    if root is MISSING or root is None:
        raise DecodingError(f"{envelope.root} is missing", shape=envelope.name)
    if isinstance(root, str) and not root.strip():
        # Some endpoints answer with {"lovedtracks": ""} when there is nothing at all
        root = {}
    if not isinstance(root, Mapping):
        raise DecodingError(NOT_AN_OBJECT, field=envelope.root, shape=envelope.name)

    container, value = _find_items(root, envelope.items)
    items = decode_items(
        value,
        envelope.item_shape,
        field=container,
        container=container,
    )

    attributes = None
    if envelope.attributes is not None:
        if envelope.attributes_path is None:
            attributes = _decode_object(root, envelope.attributes)
        else:
            block = lookup(root, envelope.attributes_path)
            attributes = _decode_object(
                {} if is_blank(block) else block, envelope.attributes
            )
    return envelope.build(items, attributes)


def _decode_wrapped(raw: Any, wrapped: Wrapped[T]) -> T:
    inner = lookup(raw, wrapped.root)
    if is_blank(inner):
        raise DecodingError(f"{wrapped.root} is missing", shape=wrapped.shape.name)
    return _decode_object(inner, wrapped.shape)
