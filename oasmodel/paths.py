"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Path records of an API description.

``Paths`` maps path templates such as ``/pets/{id}`` to the operations
offered on them; ``PathItem`` holds one optional operation per HTTP method
plus the settings shared by those operations. Both keep any key they do
not recognize as an extension.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from oasmodel.core.logging import get_logger
from oasmodel.partition import (
    PartitionedObject,
    decode_partitioned,
    encode_partitioned,
    list_field,
    payload_field,
    string_field,
)
from oasmodel.payloads import Operation, Parameter, Server
from oasmodel.reference import Inline, ReferenceOr, encode_reference_or, reference_or

logger = get_logger(__name__)


class HttpMethod(str, Enum):
    """HTTP methods a path item can define, in canonical order."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


METHODS: tuple[str, ...] = tuple(method.value for method in HttpMethod)

PATH_SEPARATOR = "/"


def is_path_template(key: str) -> bool:
    """Whether a key names a path rather than an extension."""
    return key.startswith(PATH_SEPARATOR)


_PATH_ITEM_FIELDS = (
    string_field("summary"),
    string_field("description"),
    *(payload_field(method, Operation) for method in METHODS),
    list_field("servers", "Server", Server.from_value, Server.to_value),
    list_field(
        "parameters",
        "Parameter or reference",
        reference_or(Parameter.from_value, "Parameter"),
        encode_reference_or,
    ),
)


@dataclass(frozen=True)
class PathItem:
    """
    The operations available on a single path.

    A path item may be empty, in which case the path is known but nothing
    is offered on it. A method without an operation is not offered; there
    is no such thing as an empty operation slot.
    """

    summary: str | None = None
    description: str | None = None
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None
    servers: tuple[Server, ...] = ()
    parameters: tuple[ReferenceOr[Parameter], ...] = ()
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: Any) -> "PathItem":
        """Decode a path item from a value tree."""
        parts = decode_partitioned(value, _PATH_ITEM_FIELDS, kind="PathItem")
        return cls(**parts.fixed, extensions=parts.extensions)

    def to_value(self) -> dict[str, Any]:
        """Encode the path item; absent methods and empty lists are left out."""
        fixed = {spec.name: getattr(self, spec.name) for spec in _PATH_ITEM_FIELDS}
        return encode_partitioned(
            PartitionedObject(fixed=fixed, extensions=self.extensions),
            _PATH_ITEM_FIELDS,
        )

    def operation(self, method: str) -> Operation | None:
        """
        Get the operation for one HTTP method.

        Raises:
            ValueError: If method is not one of the supported HTTP methods

        """
        return getattr(self, HttpMethod(method.lower()).value)

    def operations(self) -> list[tuple[str, Operation]]:
        """
        List the defined operations in canonical method order.

        The order is get, put, post, delete, options, head, patch, trace no
        matter how the source document ordered the methods.
        """
        defined = []
        for method in METHODS:
            operation = getattr(self, method)
            if operation is not None:
                defined.append((method, operation))
        return defined

    def map_operations(self, func: Callable[[str, Operation], Operation]) -> "PathItem":
        """Return a copy with every defined operation replaced by func(method, operation)."""
        return replace(self, **{method: func(method, op) for method, op in self.operations()})

    def drain_operations(self) -> tuple[list[tuple[str, Operation]], "PathItem"]:
        """
        Take the operations out of the path item.

        Returns:
            The defined operations in canonical order, and a copy of the
            path item with no operations left

        """
        drained = self.operations()
        return drained, replace(self, **{method: None for method in METHODS})


@dataclass(frozen=True)
class Paths:
    """Relative paths to the endpoints, in document order."""

    paths: dict[str, ReferenceOr[PathItem]] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for template in self.paths:
            if not is_path_template(template):
                raise ValueError(f"Path template must start with '{PATH_SEPARATOR}': {template!r}")

    @classmethod
    def from_value(cls, value: Any) -> "Paths":
        """Decode the paths object from a value tree."""
        parts = decode_partitioned(
            value,
            (),
            predicate=is_path_template,
            dynamic_decoder=reference_or(PathItem.from_value, "PathItem"),
            kind="Paths",
        )
        logger.debug(f"Decoded {len(parts.dynamic)} paths")
        return cls(paths=parts.dynamic, extensions=parts.extensions)

    def to_value(self) -> dict[str, Any]:
        """Encode the paths object: path entries first, then extensions."""
        return encode_partitioned(
            PartitionedObject(dynamic=self.paths, extensions=self.extensions),
            (),
            dynamic_encoder=encode_reference_or,
        )

    def __iter__(self) -> Iterator[tuple[str, ReferenceOr[PathItem]]]:
        return iter(self.paths.items())

    def __len__(self) -> int:
        return len(self.paths)

    def __contains__(self, template: object) -> bool:
        return template in self.paths

    def __getitem__(self, template: str) -> ReferenceOr[PathItem]:
        return self.paths[template]

    def get(self, template: str) -> ReferenceOr[PathItem] | None:
        """Look up a path by its exact template string."""
        return self.paths.get(template)

    def inline_items(self) -> Iterator[tuple[str, PathItem]]:
        """Iterate over the paths defined in place, skipping references."""
        for template, node in self.paths.items():
            if isinstance(node, Inline):
                yield template, node.value
