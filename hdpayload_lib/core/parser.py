"""
Payload parser.

Turns a decoded wallet JSON object into a Payload. Sections are read by key
presence, never by key order, and unknown keys are ignored. The parser
fails fast: the first error is raised and no partial Payload is returned.
"""

import logging
from typing import Any, Callable, Dict, List, TypeVar

from .constants import (
    DEFAULT_PBKDF2_ITERATIONS, TAG_ID_MIN, TAG_ID_MAX,
    KEY_GUID, KEY_SHARED_KEY, KEY_DOUBLE_ENCRYPTION, KEY_DPASSWORDHASH,
    KEY_OPTIONS, KEY_WALLET_OPTIONS, KEY_TX_NOTES, KEY_TX_TAGS,
    KEY_TAG_NAMES, KEY_PAID_TO, KEY_HD_WALLETS, KEY_LEGACY_KEYS,
    KEY_ADDRESS_BOOK,
)
from .errors import MissingFieldError, MissingSharedKeyError, TypeMismatchError, MalformedSectionError
from .fields import check_type, get_field, coerce_int, join_path
from .models import Options, LegacyAddress, AddressBookEntry, PaidTo
from .hd import HDWallet
from .payload import Payload
from ..utils import decode_json

logger = logging.getLogger('hdpayload.parser')

T = TypeVar('T')


def _parse_section(section: str, codec: Callable[..., T], *args: Any) -> T:
    """Run a sub-entity codec, wrapping its failure as MalformedSectionError."""
    try:
        return codec(*args)
    except ValueError as e:
        raise MalformedSectionError(section, e) from e


def _parse_options(root: Dict[str, Any], default_iterations: int) -> Options:
    # "options" wins over the older "wallet_options"
    for key in (KEY_OPTIONS, KEY_WALLET_OPTIONS):
        if root.get(key) is not None:
            check_type(root[key], dict, key)
            options = _parse_section(key, Options.from_dict, root[key], key)
            logger.debug(f"Options read from '{key}'")
            break
    else:
        options = Options(iterations=None)

    if options.iterations is None:
        logger.debug(f"No PBKDF2 iteration count in payload, using default {default_iterations}")
        options.iterations = default_iterations
    return options


def _parse_tx_notes(notes: Dict[str, Any]) -> Dict[str, str]:
    return {
        tx_id: check_type(note, str, join_path(KEY_TX_NOTES, tx_id))
        for tx_id, note in notes.items()
    }


def _parse_tx_tags(tags: Dict[str, Any]) -> Dict[str, List[int]]:
    result = {}
    for tx_id, tag_ids in tags.items():
        path = join_path(KEY_TX_TAGS, tx_id)
        check_type(tag_ids, list, path)
        result[tx_id] = [
            coerce_int(tag_id, join_path(path, i), TAG_ID_MIN, TAG_ID_MAX)
            for i, tag_id in enumerate(tag_ids)
        ]
    return result


def _parse_tag_names(names: List[Any]) -> Dict[int, str]:
    return {
        i: check_type(name, str, join_path(KEY_TAG_NAMES, i))
        for i, name in enumerate(names)
    }


def _parse_legacy_keys(keys: List[Any]) -> List[LegacyAddress]:
    legacy_addresses = []
    seen = set()
    for i, entry in enumerate(keys):
        legacy_address = _parse_section(
            KEY_LEGACY_KEYS, LegacyAddress.from_dict, entry, join_path(KEY_LEGACY_KEYS, i)
        )
        if legacy_address.address in seen:
            logger.warning(f"Dropping duplicate legacy address at {KEY_LEGACY_KEYS}[{i}]")
            continue
        seen.add(legacy_address.address)
        legacy_addresses.append(legacy_address)
    return legacy_addresses


def parse_payload(root: Dict[str, Any], default_iterations: int = DEFAULT_PBKDF2_ITERATIONS) -> Payload:
    """
    Parse a decoded wallet JSON object into a Payload.

    Args:
        root: Decoded top-level JSON object
        default_iterations: PBKDF2 iteration count used when neither
            ``options`` nor ``wallet_options`` carries one

    Returns:
        Populated Payload

    Raises:
        MissingFieldError: If ``guid`` is absent or empty
        MissingSharedKeyError: If ``sharedKey`` is absent or empty
        TypeMismatchError: If a top-level value has the wrong JSON type
        MalformedSectionError: If a sub-entity codec rejects its section
        ValueError: If default_iterations is not a positive integer
    """
    if isinstance(default_iterations, bool) or not isinstance(default_iterations, int) or default_iterations <= 0:
        raise ValueError("default_iterations must be a positive integer")
    check_type(root, dict, '$')

    guid = get_field(root, KEY_GUID, str)
    if not guid:
        raise MissingFieldError(KEY_GUID)

    if root.get(KEY_SHARED_KEY) is None:
        raise MissingSharedKeyError()
    shared_key = get_field(root, KEY_SHARED_KEY, str)
    if not shared_key:
        raise MissingSharedKeyError()

    payload = Payload(
        guid=guid,
        shared_key=shared_key,
        is_double_encrypted=get_field(root, KEY_DOUBLE_ENCRYPTION, bool, default=False),
        second_password_hash=get_field(root, KEY_DPASSWORDHASH, str, default=''),
        options=_parse_options(root, default_iterations)
    )

    payload.transaction_notes = _parse_tx_notes(get_field(root, KEY_TX_NOTES, dict, default={}))
    payload.transaction_tags = _parse_tx_tags(get_field(root, KEY_TX_TAGS, dict, default={}))
    payload.tag_names = _parse_tag_names(get_field(root, KEY_TAG_NAMES, list, default=[]))

    paid_to = get_field(root, KEY_PAID_TO, dict, default={})
    payload.paid_to = {
        payment_id: _parse_section(KEY_PAID_TO, PaidTo.from_dict, entry, join_path(KEY_PAID_TO, payment_id))
        for payment_id, entry in paid_to.items()
    }

    hd_wallets = get_field(root, KEY_HD_WALLETS, list, default=[])
    if hd_wallets:
        # The format allows several HD wallets; only the first is used
        if len(hd_wallets) > 1:
            logger.warning(f"Payload has {len(hd_wallets)} HD wallets, ignoring all but the first")
        hd_wallet = _parse_section(
            KEY_HD_WALLETS, HDWallet.from_dict, hd_wallets[0], join_path(KEY_HD_WALLETS, 0)
        )
        payload.hd_wallet_list.append(hd_wallet)
        payload.is_upgraded = True
        logger.debug(f"HD wallet parsed with {len(hd_wallet.accounts)} account(s)")

    payload.legacy_address_list = _parse_legacy_keys(get_field(root, KEY_LEGACY_KEYS, list, default=[]))

    address_book = get_field(root, KEY_ADDRESS_BOOK, list, default=[])
    payload.address_book_entry_list = [
        _parse_section(KEY_ADDRESS_BOOK, AddressBookEntry.from_dict, entry, join_path(KEY_ADDRESS_BOOK, i))
        for i, entry in enumerate(address_book)
    ]

    logger.info(
        "Parsed payload: "
        f"{len(payload.legacy_address_list)} legacy address(es), "
        f"{len(payload.hd_wallet_list)} HD wallet(s), "
        f"{len(payload.address_book_entry_list)} address book entries, "
        f"upgraded={payload.is_upgraded}, double_encrypted={payload.is_double_encrypted}"
    )
    return payload


def load_payload(decrypted_payload: str, default_iterations: int = DEFAULT_PBKDF2_ITERATIONS) -> Payload:
    """
    Parse decrypted wallet JSON text into a Payload.

    The source text is kept on the payload as ``decrypted_payload``.

    Args:
        decrypted_payload: Decrypted wallet JSON text
        default_iterations: PBKDF2 iteration count used when the payload has none

    Returns:
        Populated Payload

    Raises:
        InvalidJsonError: If the text is not well-formed JSON
        TypeMismatchError: If the document root is not a JSON object
        PayloadError: For any other parse failure (see parse_payload)
    """
    root = decode_json(decrypted_payload)
    if not isinstance(root, dict):
        raise TypeMismatchError('$', 'object')

    payload = parse_payload(root, default_iterations)
    payload.decrypted_payload = decrypted_payload
    return payload
