"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Reference-or-inline values.

Almost any embedded object in an API description can be replaced by a
reference object, ``{"$ref": "<locator>"}``, pointing at a shared definition
elsewhere. The two cases are told apart by shape alone: an object whose only
key is ``$ref`` is a reference, anything else is the inline payload. The
shape is inspected once, in :func:`decode_reference_or`; downstream code
checks for :class:`Reference` or :class:`Inline` instead of looking at keys.

Following a reference to its target is not done here.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from oasmodel.errors import PayloadMismatch
from oasmodel.partition import type_name

REF_FIELD = "$ref"

T = TypeVar("T")


@dataclass(frozen=True)
class Reference:
    """An indirection to a definition elsewhere in the document."""

    target: str

    def as_item(self) -> None:
        return None

    def to_value(self) -> dict[str, Any]:
        return {REF_FIELD: self.target}


@dataclass(frozen=True)
class Inline(Generic[T]):
    """A payload defined in place."""

    value: T

    def as_item(self) -> T:
        return self.value

    def to_value(self) -> Any:
        return self.value.to_value()


ReferenceOr = Union[Reference, Inline[T]]


def is_reference_object(value: Any) -> bool:
    """Whether a value has the exact shape of a reference object."""
    return isinstance(value, Mapping) and len(value) == 1 and REF_FIELD in value


def decode_reference_or(
    value: Any,
    decoder: Callable[[Any], T],
    kind: str = "object",
) -> ReferenceOr[T]:
    """
    Decode a value that is either a reference object or an inline payload.

    Args:
        value: The raw value tree
        decoder: Decoder for the inline payload type
        kind: Name of the payload type, used in errors

    Returns:
        A Reference if the value is exactly ``{"$ref": ...}``, otherwise an
        Inline wrapping the decoded payload

    Raises:
        PayloadMismatch: If the value is not an object or the locator is not
            a string. Errors raised by the payload decoder propagate as is.

    """
    if not isinstance(value, Mapping):
        raise PayloadMismatch(kind, f"expected an object or reference, got {type_name(value)}")

    if is_reference_object(value):
        target = value[REF_FIELD]
        if not isinstance(target, str):
            raise PayloadMismatch(
                "reference", f"'{REF_FIELD}' must be a string, got {type_name(target)}"
            )
        return Reference(target)

    return Inline(decoder(value))


def encode_reference_or(
    node: ReferenceOr[T],
    encoder: Callable[[T], Any] | None = None,
) -> Any:
    """Encode a reference-or-inline node back into a value tree."""
    if isinstance(node, Reference):
        return node.to_value()
    if isinstance(node, Inline):
        if encoder is not None:
            return encoder(node.value)
        return node.to_value()
    raise TypeError(f"Expected Reference or Inline, got {type(node).__name__}")


def reference_or(decoder: Callable[[Any], T], kind: str) -> Callable[[Any], ReferenceOr[T]]:
    """Build a decoder for reference-or-inline values of one payload type."""

    def decode(value: Any) -> ReferenceOr[T]:
        return decode_reference_or(value, decoder, kind=kind)

    return decode
