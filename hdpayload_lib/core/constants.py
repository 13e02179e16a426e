"""
Constants for the HD wallet payload format.

This module contains the JSON key names of the decrypted wallet payload,
the legacy address tags and the default PBKDF2 work factor.
"""

# Default PBKDF2 iteration count used when a payload carries none
DEFAULT_PBKDF2_ITERATIONS = 5000

# Legacy address tags
NORMAL_ADDRESS = 0
ARCHIVED_ADDRESS = 2

# Tag ids are stored as signed 32-bit integers
TAG_ID_MIN = -(2 ** 31)
TAG_ID_MAX = 2 ** 31 - 1

# Upper bound on the emitted tag_names array, holes included
TAG_NAMES_MAX_LENGTH = 2 ** 16

# Top-level payload keys
KEY_GUID = 'guid'
KEY_SHARED_KEY = 'sharedKey'
KEY_DOUBLE_ENCRYPTION = 'double_encryption'
KEY_DPASSWORDHASH = 'dpasswordhash'
KEY_PBKDF2_ITERATIONS = 'pbkdf2_iterations'
KEY_TX_NOTES = 'tx_notes'
KEY_TX_TAGS = 'tx_tags'
KEY_TAG_NAMES = 'tag_names'
KEY_OPTIONS = 'options'
KEY_WALLET_OPTIONS = 'wallet_options'  # older wallets use this instead of 'options'
KEY_PAID_TO = 'paidTo'
KEY_HD_WALLETS = 'hd_wallets'
KEY_LEGACY_KEYS = 'keys'
KEY_ADDRESS_BOOK = 'address_book'

# Options keys
KEY_FEE_PER_KB = 'fee_per_kb'
KEY_HTML5_NOTIFICATIONS = 'html5_notifications'
KEY_LOGOUT_TIME = 'logout_time'
KEY_ENABLE_MULTIPLE_ACCOUNTS = 'enable_multiple_accounts'
KEY_ADDITIONAL_SEEDS = 'additional_seeds'

# LegacyAddress / AddressBookEntry keys
KEY_ADDR = 'addr'
KEY_PRIV = 'priv'
KEY_LABEL = 'label'
KEY_TAG = 'tag'
KEY_CREATED_TIME = 'created_time'
KEY_CREATED_DEVICE_NAME = 'created_device_name'
KEY_CREATED_DEVICE_VERSION = 'created_device_version'

# PaidTo keys
KEY_EMAIL = 'email'
KEY_MOBILE = 'mobile'
KEY_REDEEMED_AT = 'redeemedAt'
KEY_ADDRESS = 'address'

# HDWallet / Account keys
KEY_SEED_HEX = 'seed_hex'
KEY_PASSPHRASE = 'passphrase'
KEY_MNEMONIC_VERIFIED = 'mnemonic_verified'
KEY_DEFAULT_ACCOUNT_IDX = 'default_account_idx'
KEY_ACCOUNTS = 'accounts'
KEY_ARCHIVED = 'archived'
KEY_XPRIV = 'xpriv'
KEY_XPUB = 'xpub'
KEY_CACHE = 'cache'
KEY_ADDRESS_LABELS = 'address_labels'
KEY_INDEX = 'index'
