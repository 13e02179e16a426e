"""
HD Wallet Payload Model

In-memory model and JSON (de)serializer for the decrypted payload of a
hierarchical-deterministic wallet, including the legacy address list,
address book, transaction notes/tags and the xpub <-> account index maps.
"""

__version__ = "0.1.0"
__author__ = "levinster82"
__license__ = "GPL-3.0"

from .core.errors import (
    PayloadError,
    InvalidJsonError,
    MissingFieldError,
    MissingSharedKeyError,
    TypeMismatchError,
    MalformedSectionError,
    EmitError,
)
from .core.models import Options, LegacyAddress, AddressBookEntry, PaidTo
from .core.hd import Account, AddressLabel, HDWallet
from .core.payload import Payload
from .core.parser import parse_payload, load_payload
from .core.emitter import emit_payload, dump_payload
from .utils import is_valid_json

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "PayloadError",
    "InvalidJsonError",
    "MissingFieldError",
    "MissingSharedKeyError",
    "TypeMismatchError",
    "MalformedSectionError",
    "EmitError",
    "Options",
    "LegacyAddress",
    "AddressBookEntry",
    "PaidTo",
    "Account",
    "AddressLabel",
    "HDWallet",
    "Payload",
    "parse_payload",
    "load_payload",
    "emit_payload",
    "dump_payload",
    "is_valid_json",
]
