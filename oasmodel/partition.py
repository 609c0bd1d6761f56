"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Partitioned object decoding.

Objects in an API description mix three kinds of keys: reserved fixed
fields, dynamically named entries recognized by a predicate (such as path
templates), and opaque vendor extensions. This module splits an object into
those three buckets in a single pass over its keys and reassembles them on
encode.
"""

import copy
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter, ValidationError

from oasmodel.core.logging import get_logger
from oasmodel.errors import DecodeError, PayloadMismatch, TypeMismatch

logger = get_logger(__name__)

Decoder = Callable[[Any], Any]
Encoder = Callable[[Any], Any]
KeyPredicate = Callable[[str], bool]

_STRING = TypeAdapter(str)


def _identity(value: Any) -> Any:
    return value


def never(key: str) -> bool:
    """Key predicate that matches nothing."""
    return False


def type_name(value: Any) -> str:
    """Describe the JSON kind of a value for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list | tuple):
        return "array"
    return type(value).__name__


@dataclass(frozen=True)
class FieldSpec:
    """
    A reserved field of a record type.

    Attributes:
        name: The key the field is stored under
        kind: Human readable name of the expected payload, used in errors
        decode: Converts the raw value tree into the field's payload
        encode: Converts the payload back into a value tree
        required: Whether the field must be present in the source object
        omit_empty: Treat an empty collection as absent when encoding

    """

    name: str
    kind: str
    decode: Decoder
    encode: Encoder = _identity
    required: bool = False
    omit_empty: bool = False

    def is_absent(self, value: Any) -> bool:
        """Whether a payload value should be left out of the encoded object."""
        if value is None:
            return True
        return self.omit_empty and len(value) == 0


@dataclass
class PartitionedObject:
    """The three buckets an object's keys are routed into."""

    fixed: dict[str, Any] = field(default_factory=dict)
    dynamic: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)


def decode_string(value: Any) -> str:
    """Decode a value that must be a JSON string."""
    return _STRING.validate_python(value, strict=True)


def list_of(decode_item: Decoder) -> Decoder:
    """Build a decoder for a JSON array whose items share one decoder."""

    def decode(value: Any) -> tuple:
        if not isinstance(value, list | tuple):
            raise TypeError(f"expected an array, got {type_name(value)}")
        items = []
        for index, item in enumerate(value):
            try:
                items.append(decode_item(item))
            except DecodeError as exc:
                raise exc.within(str(index))
        return tuple(items)

    return decode


def string_field(name: str, required: bool = False) -> FieldSpec:
    """A fixed field holding a string."""
    return FieldSpec(name=name, kind="string", decode=decode_string, required=required)


def payload_field(name: str, payload_type: type, required: bool = False) -> FieldSpec:
    """A fixed field holding a payload exposing from_value/to_value."""
    return FieldSpec(
        name=name,
        kind=payload_type.__name__,
        decode=payload_type.from_value,
        encode=lambda payload: payload.to_value(),
        required=required,
    )


def list_field(name: str, kind: str, decode_item: Decoder, encode_item: Encoder) -> FieldSpec:
    """An optional fixed field holding an array; an empty array is omitted on encode."""
    return FieldSpec(
        name=name,
        kind=f"array of {kind}",
        decode=list_of(decode_item),
        encode=lambda items: [encode_item(item) for item in items],
        omit_empty=True,
    )


def _decode_fixed(spec: FieldSpec, value: Any) -> Any:
    if value is None and not spec.required:
        return None
    try:
        return spec.decode(value)
    except DecodeError as exc:
        raise exc.within(spec.name)
    except ValidationError as exc:
        raise TypeMismatch(spec.name, spec.kind, f"got {type_name(value)}") from exc
    except (TypeError, ValueError) as exc:
        raise TypeMismatch(spec.name, spec.kind, str(exc)) from exc


def decode_partitioned(
    obj: Any,
    fields: Iterable[FieldSpec],
    predicate: KeyPredicate = never,
    dynamic_decoder: Decoder = _identity,
    kind: str = "object",
) -> PartitionedObject:
    """
    Split an object into fixed fields, dynamic entries and extensions.

    Each key is routed exactly once, first match wins: a fixed field name is
    decoded with that field's decoder, otherwise a key accepted by the
    predicate is decoded with the dynamic decoder, otherwise the raw value is
    kept as an extension. Source order is preserved within each bucket.

    Args:
        obj: The generic object to split
        fields: The record's fixed field set
        predicate: Recognizes dynamic keys among the non-fixed keys
        dynamic_decoder: Decodes the values of dynamic entries
        kind: Name of the record type, used in errors

    Returns:
        The partitioned buckets

    Raises:
        PayloadMismatch: If obj is not an object or has a non-string key
        TypeMismatch: If a fixed field fails to decode or a required one is missing

    """
    if not isinstance(obj, Mapping):
        raise PayloadMismatch(kind, f"expected an object, got {type_name(obj)}")

    specs = {spec.name: spec for spec in fields}
    result = PartitionedObject()

    for key, value in obj.items():
        if not isinstance(key, str):
            raise PayloadMismatch(kind, f"key {key!r} is not a string")

        spec = specs.get(key)
        if spec is not None:
            decoded = _decode_fixed(spec, value)
            if decoded is not None:
                result.fixed[key] = decoded
        elif predicate(key):
            try:
                result.dynamic[key] = dynamic_decoder(value)
            except DecodeError as exc:
                raise exc.within(key)
        else:
            result.extensions[key] = copy.deepcopy(value)

    for spec in specs.values():
        if spec.required and spec.name not in result.fixed:
            raise TypeMismatch(spec.name, spec.kind, "required field is missing")

    logger.debug(
        f"Decoded {kind}: {len(result.fixed)} fixed, "
        f"{len(result.dynamic)} dynamic, {len(result.extensions)} extension keys",
    )
    return result


def encode_partitioned(
    partitioned: PartitionedObject,
    fields: Iterable[FieldSpec],
    dynamic_encoder: Encoder = _identity,
) -> dict[str, Any]:
    """
    Reassemble the three buckets into one object.

    Fixed fields are written in declaration order, skipping absent ones,
    followed by the dynamic entries and then the extensions, each in stored
    order.

    Raises:
        ValueError: If the same key would be written by two buckets

    """
    output: dict[str, Any] = {}

    for spec in fields:
        value = partitioned.fixed.get(spec.name)
        if spec.is_absent(value):
            continue
        output[spec.name] = spec.encode(value)

    for key, value in partitioned.dynamic.items():
        if key in output:
            raise ValueError(f"Dynamic key {key!r} collides with a fixed field")
        output[key] = dynamic_encoder(value)

    for key, value in partitioned.extensions.items():
        if key in output:
            raise ValueError(f"Extension key {key!r} collides with another field")
        output[key] = copy.deepcopy(value)

    return output
