"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Exceptions raised while decoding API description documents.

Every decoding failure carries the key path from the outermost object being
decoded down to the offending value, so callers can report a precise
location without the decoders having to know where they were called from.
"""


class DecodeError(Exception):
    """Base class for decoding failures."""

    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.message = message
        self.path = tuple(path)
        super().__init__(message)

    def within(self, key: str) -> "DecodeError":
        """Prepend an enclosing key to the error path and return the error."""
        self.path = (str(key), *self.path)
        return self

    @property
    def location(self) -> str:
        """Dotted location of the failure, or '<root>' for the top level."""
        return ".".join(self.path) if self.path else "<root>"

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class TypeMismatch(DecodeError):
    """A fixed field's value does not decode into its declared type."""

    def __init__(self, key: str, expected_kind: str, detail: str | None = None):
        self.key = key
        self.expected_kind = expected_kind
        self.detail = detail
        message = f"expected {expected_kind}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, path=(key,))


class PayloadMismatch(DecodeError):
    """A value is neither a valid reference object nor a valid payload."""

    def __init__(self, kind: str, reason: str):
        self.kind = kind
        self.reason = reason
        super().__init__(f"invalid {kind}: {reason}")


class DocumentLoadError(Exception):
    """Raised when a document cannot be read into a value tree."""
