"""
Utility functions for wallet payload handling.

This module provides strict JSON decoding and validation helpers used
before a decrypted payload is handed to the parser.
"""

import json
from typing import Any

from .core.errors import InvalidJsonError


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are accepted by the json module but are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode_json(text: str) -> Any:
    """
    Decode strict JSON text.

    Args:
        text: JSON document

    Returns:
        Decoded value (dict, list, str, int, float, bool or None)

    Raises:
        InvalidJsonError: If the text is not well-formed JSON
    """
    if not isinstance(text, (str, bytes, bytearray)):
        raise InvalidJsonError(f"Expected JSON text, got {type(text).__name__}")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        # JSONDecodeError carries position only, never document content
        raise InvalidJsonError(f"Payload is not valid JSON: {type(e).__name__}") from e


def is_valid_json(text: str) -> bool:
    """
    Check whether a string is well-formed JSON.

    Args:
        text: String to check

    Returns:
        True if the string decodes as any JSON value, False otherwise
    """
    try:
        decode_json(text)
        return True
    except InvalidJsonError:
        return False
