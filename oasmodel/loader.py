"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Reading and writing API description documents.

Documents are parsed with PyYAML, which also reads JSON. The loader builds
plain dicts in document order, refuses duplicate keys, turns scalar keys
such as ``200`` into strings, and bounds the nesting depth before anything
is handed to the decoders.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from oasmodel.core.config import get_app_config
from oasmodel.core.logging import get_logger, log_operation
from oasmodel.errors import DecodeError, DocumentLoadError
from oasmodel.paths import Paths

logger = get_logger(__name__)

FORMATS = ("yaml", "json")

MERGE_TAG = "tag:yaml.org,2002:merge"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader producing string-keyed dicts and rejecting duplicate keys."""


def _key_to_string(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _construct_mapping(loader: DocumentLoader, node: yaml.MappingNode) -> dict[str, Any]:
    # Keys pulled in through "<<" merges may be overridden; written keys may not repeat.
    written = sum(1 for key_node, _ in node.value if key_node.tag != MERGE_TAG)
    loader.flatten_mapping(node)
    merged = len(node.value) - written

    mapping: dict[str, Any] = {}
    seen: set[str] = set()
    for index, (key_node, value_node) in enumerate(node.value):
        key = loader.construct_object(key_node, deep=True)
        if isinstance(key, dict | list):
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                "found a non-scalar key",
                key_node.start_mark,
            )
        key = _key_to_string(key)
        if index >= merged:
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            seen.add(key)
        mapping[key] = loader.construct_object(value_node, deep=True)
    return mapping


DocumentLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping)


def check_depth(value: Any, max_depth: int) -> None:
    """
    Ensure a value tree does not nest objects and arrays deeper than max_depth.

    Raises:
        DocumentLoadError: If the tree is too deep

    """
    stack = [(value, 1)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = list(node.values())
        elif isinstance(node, list):
            children = node
        else:
            continue
        if depth > max_depth:
            raise DocumentLoadError(f"Document nesting exceeds the maximum depth of {max_depth}")
        stack.extend((child, depth + 1) for child in children)


def parse_document(text: str, max_depth: int | None = None) -> dict[str, Any]:
    """
    Parse YAML or JSON text into a value tree.

    Args:
        text: The document source
        max_depth: Maximum nesting depth, defaults to the configured value

    Returns:
        The document's top-level object

    Raises:
        DocumentLoadError: If the text is not a valid document

    """
    if max_depth is None:
        max_depth = get_app_config().decoder.max_depth

    try:
        document = yaml.load(text, Loader=DocumentLoader)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Failed to parse document: {e}") from e

    if not isinstance(document, dict):
        raise DocumentLoadError(
            f"Document must be an object at the top level, got {type(document).__name__}"
        )

    check_depth(document, max_depth)
    return document


def load_document(spec_path: Path, max_depth: int | None = None) -> dict[str, Any]:
    """Load and parse an API description file.

    Args:
        spec_path: Path to a YAML or JSON file
        max_depth: Maximum nesting depth, defaults to the configured value

    Returns:
        The document as a value tree

    """
    spec_path = Path(spec_path)
    logger.info(f"Loading API description from {spec_path}")

    if not spec_path.exists():
        logger.error(f"API description file not found: {spec_path}")
        raise FileNotFoundError(f"API description file not found at {spec_path}")

    with log_operation(logger, "document parsing", logging.DEBUG, {"file": spec_path.name}):
        document = parse_document(spec_path.read_text(encoding="utf-8"), max_depth=max_depth)

    logger.debug(f"OpenAPI version: {document.get('openapi', 'unknown')}")
    return document


def decode_paths(document: dict[str, Any]) -> Paths:
    """
    Decode the ``paths`` member of a loaded document.

    Raises:
        DocumentLoadError: If the document has no paths object
        DecodeError: If the paths object is malformed, located from 'paths'

    """
    if "paths" not in document:
        raise DocumentLoadError("Document has no 'paths' object")
    try:
        return Paths.from_value(document["paths"])
    except DecodeError as exc:
        raise exc.within("paths")


def load_paths(spec_path: Path, max_depth: int | None = None) -> Paths:
    """Load a document and decode its paths."""
    paths = decode_paths(load_document(spec_path, max_depth=max_depth))
    logger.info(f"Decoded {len(paths)} paths from {Path(spec_path).name}")
    return paths


def dump_document(value: Any, fmt: str = "yaml") -> str:
    """
    Serialize a value tree as YAML or JSON, keeping key order.

    Raises:
        ValueError: If fmt is not a supported format

    """
    if fmt == "yaml":
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(value, indent=2, ensure_ascii=False, default=str) + "\n"
    raise ValueError(f"Unsupported format '{fmt}', expected one of {', '.join(FORMATS)}")
