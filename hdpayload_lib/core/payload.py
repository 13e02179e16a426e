"""
Wallet payload aggregate.

The Payload dataclass owns every section of a decrypted wallet: options,
legacy addresses, address book, HD wallets, transaction notes/tags, tag
names and paid-to records. Collection attributes are live; the query
methods return new lists in list order.

The xpub <-> account index maps are computed from the HD wallet on every
access, so they stay consistent while outer layers mutate it. Real indexes
are positions inside one wallet, so only the first wallet is indexed.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, List, Dict

from .constants import NORMAL_ADDRESS, DEFAULT_PBKDF2_ITERATIONS
from .models import Options, LegacyAddress, AddressBookEntry, PaidTo
from .hd import Account, HDWallet

logger = logging.getLogger('hdpayload.payload')


@dataclass
class Payload:
    """Decrypted HD wallet payload."""
    guid: str = field(default='', repr=False)
    shared_key: str = field(default='', repr=False)
    second_password_hash: Optional[str] = field(default=None, repr=False)
    is_double_encrypted: bool = False
    is_upgraded: bool = False
    decrypted_payload: Optional[str] = field(default=None, repr=False)
    options: Options = field(default_factory=Options)
    legacy_address_list: List[LegacyAddress] = field(default_factory=list)
    address_book_entry_list: List[AddressBookEntry] = field(default_factory=list)
    hd_wallet_list: List[HDWallet] = field(default_factory=list)
    transaction_notes: Dict[str, str] = field(default_factory=dict)
    transaction_tags: Dict[str, List[int]] = field(default_factory=dict)
    tag_names: Dict[int, str] = field(default_factory=dict)
    paid_to: Dict[str, PaidTo] = field(default_factory=dict)

    @classmethod
    def from_json(cls, decrypted_payload: str, default_iterations: int = DEFAULT_PBKDF2_ITERATIONS) -> 'Payload':
        """
        Parse a decrypted payload string.

        Args:
            decrypted_payload: Decrypted wallet JSON text
            default_iterations: PBKDF2 iteration count used when the payload has none

        Returns:
            Parsed Payload (with ``decrypted_payload`` set)
        """
        from .parser import load_payload
        return load_payload(decrypted_payload, default_iterations)

    def to_dict(self) -> Dict:
        """Export payload as a JSON-ready dictionary."""
        from .emitter import emit_payload
        return emit_payload(self)

    def to_json(self, **json_kwargs) -> str:
        """Export payload as JSON text."""
        from .emitter import dump_payload
        return dump_payload(self, **json_kwargs)

    # HD wallet

    @property
    def hd_wallet(self) -> Optional[HDWallet]:
        """First HD wallet, or None for a wallet that was never upgraded."""
        return self.hd_wallet_list[0] if self.hd_wallet_list else None

    def set_hd_wallet(self, hd_wallet: HDWallet) -> None:
        """Replace the HD wallet list with a single wallet and mark the payload upgraded."""
        self.hd_wallet_list.clear()
        self.hd_wallet_list.append(hd_wallet)
        self.is_upgraded = True

    def _indexed_accounts(self) -> List[Account]:
        hd_wallet = self.hd_wallet
        return hd_wallet.accounts if hd_wallet is not None else []

    @property
    def xpub_to_account_index(self) -> Dict[str, int]:
        """Account xpub to real index, over the accounts of ``hd_wallet``."""
        return {account.xpub: account.real_index for account in self._indexed_accounts()}

    @property
    def account_index_to_xpub(self) -> Dict[int, str]:
        return {account.real_index: account.xpub for account in self._indexed_accounts()}

    @property
    def double_encryption_pbkdf2_iterations(self) -> Optional[int]:
        return self.options.iterations

    @double_encryption_pbkdf2_iterations.setter
    def double_encryption_pbkdf2_iterations(self, iterations: int) -> None:
        self.options.iterations = iterations

    # Legacy addresses

    def _filter_legacy(self, predicate: Callable[[LegacyAddress], bool]) -> List[LegacyAddress]:
        return [entry for entry in self.legacy_address_list if predicate(entry)]

    def legacy_addresses_by_tag(self, tag: int) -> List[LegacyAddress]:
        return self._filter_legacy(lambda entry: entry.tag == tag)

    def active_legacy_addresses(self) -> List[LegacyAddress]:
        """Legacy addresses tagged NORMAL_ADDRESS that hold a private key."""
        return self._filter_legacy(lambda entry: entry.tag == NORMAL_ADDRESS and not entry.watch_only)

    def legacy_address_strings(self, tag: Optional[int] = None) -> List[str]:
        """
        Address strings of the legacy address list.

        Args:
            tag: Only include addresses with this tag (all addresses if None)

        Returns:
            List of address strings
        """
        if tag is None:
            return [entry.address for entry in self.legacy_address_list]
        return [entry.address for entry in self.legacy_addresses_by_tag(tag)]

    def watch_only_address_strings(self) -> List[str]:
        return [entry.address for entry in self._filter_legacy(lambda entry: entry.watch_only)]

    def active_legacy_address_strings(self) -> List[str]:
        """
        Address strings tagged NORMAL_ADDRESS.

        Unlike active_legacy_addresses(), watch-only addresses are included.
        """
        return self.legacy_address_strings(NORMAL_ADDRESS)

    def contains_legacy_address(self, address: str) -> bool:
        return any(entry.address == address for entry in self.legacy_address_list)

    def add_legacy_address(self, legacy_address: LegacyAddress) -> bool:
        """
        Append a legacy address unless its address string is already present.

        Returns:
            True if the address was added, False if it was a duplicate
        """
        if self.contains_legacy_address(legacy_address.address):
            logger.debug("Legacy address already present, not adding")
            return False
        self.legacy_address_list.append(legacy_address)
        return True
