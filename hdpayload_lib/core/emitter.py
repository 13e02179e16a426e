"""
Payload emitter.

Builds the JSON object uploaded back to the wallet service from a Payload.
Key order and formatting are not significant; only the structure is.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from .constants import (
    KEY_GUID, KEY_SHARED_KEY, KEY_PBKDF2_ITERATIONS, KEY_DOUBLE_ENCRYPTION,
    KEY_DPASSWORDHASH, KEY_HD_WALLETS, KEY_LEGACY_KEYS, KEY_OPTIONS,
    KEY_ADDRESS_BOOK, KEY_TX_NOTES, KEY_TX_TAGS, KEY_TAG_NAMES, KEY_PAID_TO,
    TAG_NAMES_MAX_LENGTH,
)
from .errors import EmitError
from .payload import Payload

logger = logging.getLogger('hdpayload.emitter')

T = TypeVar('T')


def _emit_section(section: str, emit: Callable[[], T]) -> T:
    """Run a section emitter, wrapping its failure as EmitError."""
    try:
        return emit()
    except (TypeError, ValueError) as e:
        raise EmitError(section, e) from e


def _emit_tag_names(tag_names: Dict[int, str]) -> List[Optional[str]]:
    """
    Lay out tag names as an array indexed by tag id.

    Ids missing from a sparse map become null entries. Ids at or past
    TAG_NAMES_MAX_LENGTH are rejected rather than padded.
    """
    if not tag_names:
        return []
    for tag_id in tag_names:
        if isinstance(tag_id, bool) or not isinstance(tag_id, int) or tag_id < 0:
            raise ValueError(f"Tag id {tag_id!r} is not a non-negative integer")
        if tag_id >= TAG_NAMES_MAX_LENGTH:
            raise ValueError(f"Tag id {tag_id} exceeds the tag_names limit of {TAG_NAMES_MAX_LENGTH}")

    names: List[Optional[str]] = [None] * (max(tag_names) + 1)
    for tag_id, name in tag_names.items():
        names[tag_id] = name
    return names


def _emit_legacy_keys(payload: Payload) -> List[Dict[str, Any]]:
    keys = []
    seen = set()
    for legacy_address in payload.legacy_address_list:
        if legacy_address.address in seen:
            raise ValueError("Legacy address list contains a duplicate address")
        seen.add(legacy_address.address)
        keys.append(legacy_address.to_dict())
    return keys


def _check_identity(payload: Payload) -> None:
    if not payload.guid:
        raise EmitError(KEY_GUID, ValueError("guid is empty"))
    if not payload.shared_key:
        raise EmitError(KEY_SHARED_KEY, ValueError("shared key is empty"))


def emit_payload(payload: Payload) -> Dict[str, Any]:
    """
    Serialize a Payload to a JSON-ready dictionary.

    ``double_encryption``/``dpasswordhash`` are written only for
    double-encrypted payloads and ``hd_wallets`` only for upgraded ones;
    every other section is always written, empty or not.

    Args:
        payload: Payload satisfying the aggregate invariants

    Returns:
        Dictionary suitable for json.dumps()

    Raises:
        EmitError: If an invariant is violated or a section fails to serialize
    """
    _check_identity(payload)

    # Options first: its iteration count is mirrored at the top level
    options = _emit_section(KEY_OPTIONS, payload.options.to_dict)

    obj: Dict[str, Any] = {
        KEY_GUID: payload.guid,
        KEY_SHARED_KEY: payload.shared_key,
        KEY_PBKDF2_ITERATIONS: options[KEY_PBKDF2_ITERATIONS],
    }

    if payload.is_double_encrypted:
        obj[KEY_DOUBLE_ENCRYPTION] = True
        obj[KEY_DPASSWORDHASH] = payload.second_password_hash

    if payload.is_upgraded:
        obj[KEY_HD_WALLETS] = _emit_section(
            KEY_HD_WALLETS, lambda: [hd_wallet.to_dict() for hd_wallet in payload.hd_wallet_list]
        )

    obj[KEY_LEGACY_KEYS] = _emit_section(KEY_LEGACY_KEYS, lambda: _emit_legacy_keys(payload))
    obj[KEY_OPTIONS] = options
    obj[KEY_ADDRESS_BOOK] = _emit_section(
        KEY_ADDRESS_BOOK, lambda: [entry.to_dict() for entry in payload.address_book_entry_list]
    )
    obj[KEY_TX_NOTES] = dict(payload.transaction_notes)
    obj[KEY_TX_TAGS] = {tx_id: list(tag_ids) for tx_id, tag_ids in payload.transaction_tags.items()}
    obj[KEY_TAG_NAMES] = _emit_section(KEY_TAG_NAMES, lambda: _emit_tag_names(payload.tag_names))
    obj[KEY_PAID_TO] = _emit_section(
        KEY_PAID_TO, lambda: {payment_id: entry.to_dict() for payment_id, entry in payload.paid_to.items()}
    )

    logger.debug(
        f"Emitted payload: {len(obj[KEY_LEGACY_KEYS])} legacy address(es), "
        f"{len(obj.get(KEY_HD_WALLETS, []))} HD wallet(s)"
    )
    return obj


def dump_payload(payload: Payload, **json_kwargs) -> str:
    """
    Serialize a Payload to JSON text.

    Args:
        payload: Payload to serialize
        **json_kwargs: Extra keyword arguments for json.dumps (indent, sort_keys, ...)

    Returns:
        JSON document string
    """
    return json.dumps(emit_payload(payload), **json_kwargs)
