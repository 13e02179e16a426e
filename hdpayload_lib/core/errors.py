"""
Error types raised while parsing and emitting wallet payloads.

All errors derive from ValueError so callers that already guard payload
handling with ``except ValueError`` keep working. Messages identify the
offending section or path only, never the values found there.
"""

from typing import Optional


class PayloadError(ValueError):
    """Base class for all payload errors."""


class InvalidJsonError(PayloadError):
    """The decrypted payload text is not well-formed JSON."""

    def __init__(self, message: str = "Payload is not valid JSON"):
        super().__init__(message)


class MissingFieldError(PayloadError):
    """A required key is absent (or empty)."""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Payload is missing required field '{name}'")


class MissingSharedKeyError(MissingFieldError):
    """The payload carries no shared key."""

    def __init__(self):
        super().__init__('sharedKey', "Payload contains no shared key")


class TypeMismatchError(PayloadError):
    """A value has the wrong JSON type at a known path."""

    def __init__(self, path: str, expected: str):
        self.path = path
        self.expected = expected
        super().__init__(f"Expected {expected} at '{path}'")


class MalformedSectionError(PayloadError):
    """A sub-entity codec failed while parsing a payload section."""

    def __init__(self, section: str, cause: Exception):
        self.section = section
        self.cause = cause
        super().__init__(f"Malformed '{section}' section: {cause}")


class EmitError(PayloadError):
    """A payload section could not be serialized."""

    def __init__(self, section: str, cause: Exception):
        self.section = section
        self.cause = cause
        super().__init__(f"Failed to emit '{section}' section: {cause}")
