"""
Typed extractors over decoded JSON values.

The stdlib json module hands back plain dicts, lists, strings, numbers,
booleans and None. The helpers here check those values against the type a
payload section expects and raise TypeMismatchError / MissingFieldError with
the JSON path of the offending value.
"""

import math
from typing import Any, Dict, Optional, Set

from .errors import MissingFieldError, TypeMismatchError

_MISSING = object()

_TYPE_NAMES = {
    str: 'string',
    bool: 'boolean',
    int: 'integer',
    dict: 'object',
    list: 'array',
}


def join_path(parent: Optional[str], key: Any) -> str:
    """
    Build a dotted/indexed JSON path for error messages.

    Args:
        parent: Path of the containing value (None or '' at the root)
        key: Object key (str) or array index (int)

    Returns:
        Path string such as ``hd_wallets[0].accounts[2].xpub``
    """
    if isinstance(key, int):
        return f"{parent or ''}[{key}]"
    return f"{parent}.{key}" if parent else str(key)


def check_type(value: Any, expected: type, path: str) -> Any:
    """
    Check that a decoded JSON value has the expected Python type.

    Booleans are not accepted where an integer is expected, even though
    bool subclasses int.

    Args:
        value: Decoded JSON value
        expected: One of str, bool, int, dict, list
        path: JSON path used in the error message

    Returns:
        The value unchanged

    Raises:
        TypeMismatchError: If the value has another type
    """
    if expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise TypeMismatchError(path, _TYPE_NAMES.get(expected, expected.__name__))
    return value


def get_field(
    obj: Dict[str, Any],
    key: str,
    expected: type,
    path: Optional[str] = None,
    default: Any = _MISSING
) -> Any:
    """
    Read a typed value from a JSON object.

    A missing key (or an explicit null) yields ``default`` when one is
    given; without a default the key is required.

    Args:
        obj: Decoded JSON object
        key: Key to read
        expected: Expected Python type (see check_type)
        path: Path of ``obj`` for error messages
        default: Value returned when the key is absent or null

    Returns:
        The typed value or the default

    Raises:
        MissingFieldError: If a required key is absent
        TypeMismatchError: If the value has the wrong type
    """
    field_path = join_path(path, key)
    value = obj.get(key)
    if value is None:
        if default is _MISSING:
            if key in obj:
                raise TypeMismatchError(field_path, _TYPE_NAMES.get(expected, expected.__name__))
            raise MissingFieldError(field_path)
        return default
    return check_type(value, expected, field_path)


def get_optional(obj: Dict[str, Any], key: str, expected: type, path: Optional[str] = None) -> Any:
    """Read a typed value that may be absent; returns None in that case."""
    return get_field(obj, key, expected, path, default=None)


def coerce_int(value: Any, path: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """
    Coerce a JSON number to an integer.

    Integral values pass through, fractional values are truncated toward
    zero. The result must fall within [minimum, maximum] when bounds are
    given.

    Args:
        value: Decoded JSON value
        path: JSON path for error messages
        minimum: Inclusive lower bound, or None
        maximum: Inclusive upper bound, or None

    Returns:
        Integer value

    Raises:
        TypeMismatchError: If the value is not a finite number or is out of range
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(path, 'number')
    if isinstance(value, float):
        if not math.isfinite(value):
            raise TypeMismatchError(path, 'finite number')
        value = int(value)

    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        raise TypeMismatchError(path, f"integer in range [{minimum}, {maximum}]")
    return value


def extra_fields(obj: Dict[str, Any], known) -> Dict[str, Any]:
    """
    Return the entries of ``obj`` a model does not decode itself.

    These are the keys not in ``known`` plus any known key holding an
    explicit null, so both are written back unchanged.
    """
    return {key: value for key, value in obj.items() if key not in known or value is None}


def absent_keys(obj: Dict[str, Any], keys) -> Set[str]:
    """Return the keys of ``keys`` that are missing from ``obj`` or null."""
    return {key for key in keys if obj.get(key) is None}


def put_default(data: Dict[str, Any], key: str, value: Any, default: Any, omitted: Set[str]) -> None:
    """
    Write a defaulted field unless the input omitted it and it is unchanged.

    Args:
        data: Output dictionary
        key: Key to write
        value: Current field value
        default: Value the parser assumed for an omitted key
        omitted: Keys that were missing (or null) on input
    """
    if key not in omitted or value != default:
        data[key] = value
