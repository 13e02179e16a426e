"""
Data models for the flat sections of a wallet payload.

This module contains the dataclasses for wallet options, imported (legacy)
addresses, address book entries and paid-to records, each with a
from_dict() parser and a to_dict() emitter. Keys a model does not know, and
known keys holding null, are kept in ``extra`` and written back unchanged.
Defaulted keys the input omitted are only written once their value changes.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Set

from .constants import (
    DEFAULT_PBKDF2_ITERATIONS, NORMAL_ADDRESS, ARCHIVED_ADDRESS,
    KEY_PBKDF2_ITERATIONS, KEY_FEE_PER_KB, KEY_HTML5_NOTIFICATIONS,
    KEY_LOGOUT_TIME, KEY_ENABLE_MULTIPLE_ACCOUNTS, KEY_ADDITIONAL_SEEDS,
    KEY_ADDR, KEY_PRIV, KEY_LABEL, KEY_TAG, KEY_CREATED_TIME,
    KEY_CREATED_DEVICE_NAME, KEY_CREATED_DEVICE_VERSION,
    KEY_EMAIL, KEY_MOBILE, KEY_REDEEMED_AT, KEY_ADDRESS,
)
from .errors import MissingFieldError, TypeMismatchError
from .fields import check_type, get_field, get_optional, join_path, extra_fields, absent_keys, put_default


def _put_optional(data: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        data[key] = value


@dataclass
class Options:
    """Wallet options. Only the PBKDF2 iteration count is always present."""
    iterations: Optional[int] = DEFAULT_PBKDF2_ITERATIONS
    fee_per_kb: Optional[int] = None
    html5_notifications: Optional[bool] = None
    logout_time: Optional[int] = None  # milliseconds
    enable_multiple_accounts: Optional[bool] = None
    additional_seeds: Optional[List[Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = (
        KEY_PBKDF2_ITERATIONS, KEY_FEE_PER_KB, KEY_HTML5_NOTIFICATIONS,
        KEY_LOGOUT_TIME, KEY_ENABLE_MULTIPLE_ACCOUNTS, KEY_ADDITIONAL_SEEDS,
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = 'options') -> 'Options':
        """
        Create Options from a decoded JSON object.

        ``iterations`` is None when the object carries no
        ``pbkdf2_iterations``; the payload parser fills in its default.

        Raises:
            TypeMismatchError: If a known key has the wrong type, or the
                iteration count is not positive
        """
        check_type(data, dict, path)
        iterations = get_optional(data, KEY_PBKDF2_ITERATIONS, int, path)
        if iterations is not None and iterations <= 0:
            raise TypeMismatchError(join_path(path, KEY_PBKDF2_ITERATIONS), 'positive integer')

        return cls(
            iterations=iterations,
            fee_per_kb=get_optional(data, KEY_FEE_PER_KB, int, path),
            html5_notifications=get_optional(data, KEY_HTML5_NOTIFICATIONS, bool, path),
            logout_time=get_optional(data, KEY_LOGOUT_TIME, int, path),
            enable_multiple_accounts=get_optional(data, KEY_ENABLE_MULTIPLE_ACCOUNTS, bool, path),
            additional_seeds=get_optional(data, KEY_ADDITIONAL_SEEDS, list, path),
            extra=extra_fields(data, cls._KNOWN)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export options as dictionary."""
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int) or self.iterations <= 0:
            raise ValueError("PBKDF2 iterations must be a positive integer")

        data = dict(self.extra)
        data[KEY_PBKDF2_ITERATIONS] = self.iterations
        _put_optional(data, KEY_FEE_PER_KB, self.fee_per_kb)
        _put_optional(data, KEY_HTML5_NOTIFICATIONS, self.html5_notifications)
        _put_optional(data, KEY_LOGOUT_TIME, self.logout_time)
        _put_optional(data, KEY_ENABLE_MULTIPLE_ACCOUNTS, self.enable_multiple_accounts)
        if self.additional_seeds is not None:
            data[KEY_ADDITIONAL_SEEDS] = list(self.additional_seeds)
        return data


@dataclass
class LegacyAddress:
    """Imported (non-derived) address. No private key means watch-only."""
    address: str
    private_key: Optional[str] = field(default=None, repr=False)  # encrypted when double encryption is on
    label: Optional[str] = None
    tag: int = NORMAL_ADDRESS
    created_time: Optional[int] = None
    created_device_name: Optional[str] = None
    created_device_version: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)
    omitted: Set[str] = field(default_factory=set, repr=False, compare=False)  # defaulted keys absent on input

    _KNOWN = (
        KEY_ADDR, KEY_PRIV, KEY_LABEL, KEY_TAG, KEY_CREATED_TIME,
        KEY_CREATED_DEVICE_NAME, KEY_CREATED_DEVICE_VERSION,
    )

    @property
    def watch_only(self) -> bool:
        return self.private_key is None

    @property
    def archived(self) -> bool:
        return self.tag == ARCHIVED_ADDRESS

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = 'keys') -> 'LegacyAddress':
        """
        Create LegacyAddress from a decoded ``keys`` entry.

        Raises:
            MissingFieldError: If ``addr`` is absent or empty
            TypeMismatchError: If a known key has the wrong type
        """
        check_type(data, dict, path)
        address = get_field(data, KEY_ADDR, str, path)
        if not address:
            raise MissingFieldError(join_path(path, KEY_ADDR))

        return cls(
            address=address,
            private_key=get_optional(data, KEY_PRIV, str, path),
            label=get_optional(data, KEY_LABEL, str, path),
            tag=get_field(data, KEY_TAG, int, path, default=NORMAL_ADDRESS),
            created_time=get_optional(data, KEY_CREATED_TIME, int, path),
            created_device_name=get_optional(data, KEY_CREATED_DEVICE_NAME, str, path),
            created_device_version=get_optional(data, KEY_CREATED_DEVICE_VERSION, str, path),
            extra=extra_fields(data, cls._KNOWN),
            omitted=absent_keys(data, (KEY_TAG,))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export legacy address as dictionary."""
        if not self.address:
            raise ValueError("Legacy address has no address string")

        data = dict(self.extra)
        data[KEY_ADDR] = self.address
        _put_optional(data, KEY_PRIV, self.private_key)
        _put_optional(data, KEY_LABEL, self.label)
        put_default(data, KEY_TAG, self.tag, NORMAL_ADDRESS, self.omitted)
        _put_optional(data, KEY_CREATED_TIME, self.created_time)
        _put_optional(data, KEY_CREATED_DEVICE_NAME, self.created_device_name)
        _put_optional(data, KEY_CREATED_DEVICE_VERSION, self.created_device_version)
        return data


@dataclass
class AddressBookEntry:
    """Address book entry (address plus an optional label)."""
    address: str
    label: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = 'address_book') -> 'AddressBookEntry':
        """Create AddressBookEntry from a decoded ``address_book`` entry."""
        check_type(data, dict, path)
        return cls(
            address=get_field(data, KEY_ADDR, str, path),
            label=get_optional(data, KEY_LABEL, str, path),
            extra=extra_fields(data, (KEY_ADDR, KEY_LABEL))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export address book entry as dictionary."""
        data = dict(self.extra)
        data[KEY_ADDR] = self.address
        _put_optional(data, KEY_LABEL, self.label)
        return data


@dataclass
class PaidTo:
    """Recipient details for a payment sent to an email or mobile number."""
    email: Optional[str] = None
    mobile: Optional[str] = None
    redeemed_at: Optional[int] = None
    address: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = (KEY_EMAIL, KEY_MOBILE, KEY_REDEEMED_AT, KEY_ADDRESS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = 'paidTo') -> 'PaidTo':
        """Create PaidTo from a decoded ``paidTo`` value."""
        check_type(data, dict, path)
        return cls(
            email=get_optional(data, KEY_EMAIL, str, path),
            mobile=get_optional(data, KEY_MOBILE, str, path),
            redeemed_at=get_optional(data, KEY_REDEEMED_AT, int, path),
            address=get_optional(data, KEY_ADDRESS, str, path),
            extra=extra_fields(data, cls._KNOWN)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export paid-to record as dictionary."""
        data = dict(self.extra)
        _put_optional(data, KEY_EMAIL, self.email)
        _put_optional(data, KEY_MOBILE, self.mobile)
        _put_optional(data, KEY_REDEEMED_AT, self.redeemed_at)
        _put_optional(data, KEY_ADDRESS, self.address)
        return data
