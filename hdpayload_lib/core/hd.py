"""
HD wallet and account models.

An HDWallet owns an ordered list of Accounts. Each account's real index is
its position in the wallet's ``accounts`` array; it is assigned on parse and
is not part of the serialized form.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Set

from embit.bip32 import HDKey

from .constants import (
    KEY_LABEL, KEY_ARCHIVED, KEY_XPRIV, KEY_XPUB, KEY_CACHE,
    KEY_ADDRESS_LABELS, KEY_INDEX, KEY_SEED_HEX, KEY_PASSPHRASE,
    KEY_MNEMONIC_VERIFIED, KEY_DEFAULT_ACCOUNT_IDX, KEY_ACCOUNTS, KEY_HD_WALLETS,
)
from .errors import MissingFieldError
from .fields import check_type, get_field, get_optional, join_path, extra_fields, absent_keys, put_default


@dataclass
class AddressLabel:
    """Label attached to a receive address index of an account."""
    index: int
    label: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = KEY_ADDRESS_LABELS) -> 'AddressLabel':
        check_type(data, dict, path)
        return cls(
            index=get_field(data, KEY_INDEX, int, path),
            label=get_field(data, KEY_LABEL, str, path)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {KEY_INDEX: self.index, KEY_LABEL: self.label}


@dataclass
class Account:
    """HD account identified by its extended public key."""
    xpub: str
    label: str = ''
    archived: bool = False
    xpriv: Optional[str] = field(default=None, repr=False)
    cache: Optional[Dict[str, str]] = None  # receiveAccount / changeAccount xpubs
    address_labels: Optional[List[AddressLabel]] = None
    real_index: int = 0
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)
    omitted: Set[str] = field(default_factory=set, repr=False, compare=False)  # defaulted keys absent on input

    _KNOWN = (KEY_LABEL, KEY_ARCHIVED, KEY_XPRIV, KEY_XPUB, KEY_CACHE, KEY_ADDRESS_LABELS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], real_index: int = 0, path: str = KEY_ACCOUNTS) -> 'Account':
        """
        Create Account from a decoded ``accounts`` entry.

        Args:
            data: Decoded JSON object
            real_index: Position of the account in its wallet
            path: JSON path for error messages

        Raises:
            MissingFieldError: If ``xpub`` is absent or empty
            TypeMismatchError: If a known key has the wrong type
        """
        check_type(data, dict, path)
        xpub = get_field(data, KEY_XPUB, str, path)
        if not xpub:
            raise MissingFieldError(join_path(path, KEY_XPUB))

        cache = get_optional(data, KEY_CACHE, dict, path)
        if cache is not None:
            cache_path = join_path(path, KEY_CACHE)
            cache = {key: check_type(value, str, join_path(cache_path, key)) for key, value in cache.items()}

        address_labels = get_optional(data, KEY_ADDRESS_LABELS, list, path)
        if address_labels is not None:
            labels_path = join_path(path, KEY_ADDRESS_LABELS)
            address_labels = [
                AddressLabel.from_dict(entry, join_path(labels_path, i))
                for i, entry in enumerate(address_labels)
            ]

        return cls(
            xpub=xpub,
            label=get_field(data, KEY_LABEL, str, path, default=''),
            archived=get_field(data, KEY_ARCHIVED, bool, path, default=False),
            xpriv=get_optional(data, KEY_XPRIV, str, path),
            cache=cache,
            address_labels=address_labels,
            real_index=real_index,
            extra=extra_fields(data, cls._KNOWN),
            omitted=absent_keys(data, (KEY_LABEL, KEY_ARCHIVED))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export account as dictionary. ``real_index`` is not serialized."""
        if not self.xpub:
            raise ValueError("Account has no xpub")

        data = dict(self.extra)
        put_default(data, KEY_LABEL, self.label, '', self.omitted)
        put_default(data, KEY_ARCHIVED, self.archived, False, self.omitted)
        if self.xpriv is not None:
            data[KEY_XPRIV] = self.xpriv
        data[KEY_XPUB] = self.xpub
        if self.cache is not None:
            data[KEY_CACHE] = dict(self.cache)
        if self.address_labels is not None:
            data[KEY_ADDRESS_LABELS] = [label.to_dict() for label in self.address_labels]
        return data

    def hd_key(self) -> HDKey:
        """
        Decode the account xpub.

        Returns:
            embit HDKey for the account's public subtree

        Raises:
            ValueError: If the xpub is not a valid base58check extended key
        """
        try:
            return HDKey.from_base58(self.xpub)
        except Exception as e:
            raise ValueError(f"Invalid xpub for account {self.real_index}: {e}")


@dataclass
class HDWallet:
    """Seed-backed wallet holding an ordered list of accounts."""
    seed_hex: str = field(repr=False)
    passphrase: str = field(default='', repr=False)
    mnemonic_verified: bool = False
    default_account_idx: int = 0
    accounts: List[Account] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)
    omitted: Set[str] = field(default_factory=set, repr=False, compare=False)

    _KNOWN = (KEY_SEED_HEX, KEY_PASSPHRASE, KEY_MNEMONIC_VERIFIED, KEY_DEFAULT_ACCOUNT_IDX, KEY_ACCOUNTS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = KEY_HD_WALLETS) -> 'HDWallet':
        """
        Create HDWallet from a decoded ``hd_wallets`` entry.

        Accounts get their real index from their array position.

        Raises:
            MissingFieldError: If ``seed_hex`` or an account ``xpub`` is absent
            TypeMismatchError: If a known key has the wrong type
        """
        check_type(data, dict, path)
        accounts_path = join_path(path, KEY_ACCOUNTS)
        accounts = [
            Account.from_dict(entry, real_index=i, path=join_path(accounts_path, i))
            for i, entry in enumerate(get_field(data, KEY_ACCOUNTS, list, path, default=[]))
        ]

        return cls(
            seed_hex=get_field(data, KEY_SEED_HEX, str, path),
            passphrase=get_field(data, KEY_PASSPHRASE, str, path, default=''),
            mnemonic_verified=get_field(data, KEY_MNEMONIC_VERIFIED, bool, path, default=False),
            default_account_idx=get_field(data, KEY_DEFAULT_ACCOUNT_IDX, int, path, default=0),
            accounts=accounts,
            extra=extra_fields(data, cls._KNOWN),
            omitted=absent_keys(data, (KEY_PASSPHRASE, KEY_MNEMONIC_VERIFIED, KEY_DEFAULT_ACCOUNT_IDX, KEY_ACCOUNTS))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export HD wallet as dictionary, accounts in list order."""
        data = dict(self.extra)
        data[KEY_SEED_HEX] = self.seed_hex
        put_default(data, KEY_PASSPHRASE, self.passphrase, '', self.omitted)
        put_default(data, KEY_MNEMONIC_VERIFIED, self.mnemonic_verified, False, self.omitted)
        put_default(data, KEY_DEFAULT_ACCOUNT_IDX, self.default_account_idx, 0, self.omitted)
        put_default(data, KEY_ACCOUNTS, [account.to_dict() for account in self.accounts], [], self.omitted)
        return data

    def add_account(self, account: Account) -> Account:
        """Append an account, assigning the next real index."""
        account.real_index = len(self.accounts)
        self.accounts.append(account)
        return account

    @property
    def active_accounts(self) -> List[Account]:
        return [account for account in self.accounts if not account.archived]
