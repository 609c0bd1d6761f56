"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Extension key checks layered on top of the decoder.

The decoder accepts any unrecognized key as an extension. Documents are
expected to prefix extension keys with ``x-``; this module reports the keys
that do not, so callers can decide whether that is a warning or an error.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from oasmodel.core.logging import get_logger
from oasmodel.paths import Paths

logger = get_logger(__name__)

EXTENSION_PREFIX = "x-"


class ValidationLevel(Enum):
    """Severity of a reported issue."""

    WARNING = "warning"
    ERROR = "error"


@dataclass
class ExtensionIssue:
    """An extension key that does not follow the naming convention."""

    location: str
    key: str
    level: ValidationLevel = ValidationLevel.WARNING
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert the issue to a dictionary."""
        return {
            "location": self.location,
            "key": self.key,
            "level": self.level.value,
            "message": self.message,
        }


def _check(
    location: str,
    extensions: dict[str, Any],
    prefix: str,
    level: ValidationLevel,
) -> list[ExtensionIssue]:
    return [
        ExtensionIssue(
            location=location,
            key=key,
            level=level,
            message=f"Unrecognized key '{key}' does not start with '{prefix}'",
        )
        for key in extensions
        if not key.startswith(prefix)
    ]


def find_nonconforming_extensions(
    paths: Paths,
    prefix: str = EXTENSION_PREFIX,
    level: ValidationLevel = ValidationLevel.WARNING,
) -> list[ExtensionIssue]:
    """
    Find extension keys without the expected prefix.

    Checks the paths object itself and every path item defined in place.
    Referenced path items are not followed.

    Args:
        paths: The decoded paths object
        prefix: The required extension key prefix
        level: Severity to assign to each issue

    Returns:
        Issues in document order

    """
    issues = _check("paths", paths.extensions, prefix, level)
    for template, item in paths.inline_items():
        issues.extend(_check(f"paths.{template}", item.extensions, prefix, level))

    if issues:
        logger.warning(f"Found {len(issues)} extension keys without the '{prefix}' prefix")
    return issues
