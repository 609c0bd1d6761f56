"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Leaf payload types embedded in the document model.

The path records only need these to decode from and encode to a value tree,
so each model declares the handful of fields worth reading directly and
keeps every other key it is given as an extra field.
"""

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from oasmodel.errors import PayloadMismatch
from oasmodel.partition import type_name


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)


class Payload(BaseModel):
    """Base class for opaque payloads that round-trip unknown keys."""

    model_config = ConfigDict(extra="allow", frozen=True, strict=True)

    @classmethod
    def from_value(cls, value: Any) -> "Payload":
        """Decode a payload from a value tree."""
        if not isinstance(value, Mapping):
            raise PayloadMismatch(cls.__name__, f"expected an object, got {type_name(value)}")
        try:
            return cls.model_validate(copy.deepcopy(dict(value)), strict=True)
        except ValidationError as exc:
            raise PayloadMismatch(cls.__name__, _summarize(exc)) from exc

    def to_value(self) -> dict[str, Any]:
        """Encode the payload, writing only the keys it was given."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class Operation(Payload):
    """A single API operation on a path."""

    operation_id: str | None = Field(None, alias="operationId")
    summary: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    deprecated: bool | None = None


class Parameter(Payload):
    """A parameter applicable to the operations of a path."""

    name: str
    location: str = Field(..., alias="in")
    description: str | None = None
    required: bool | None = None
    deprecated: bool | None = None


class Server(Payload):
    """A server the operations can be reached on."""

    url: str
    description: str | None = None
    variables: dict[str, Any] | None = None


class Schema(Payload):
    """A data type definition, kept entirely as opaque keys."""
