"""
Test fixtures and helper functions for loading test data.

This module provides utilities for loading sample wallet payloads and for
canonicalizing a source document into the shape the emitter produces, so
round trips can be compared with plain ``==`` (dicts compare unordered,
lists ordered, numbers by value).
"""

import copy
import json
from pathlib import Path
from typing import Dict, Any

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# BIP-32 test vector 1, chain m
BIP32_TV1_MASTER_XPUB = (
    'xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8'
)

KNOWN_TOP_LEVEL_KEYS = (
    'guid', 'sharedKey', 'double_encryption', 'dpasswordhash', 'options',
    'pbkdf2_iterations', 'tx_notes', 'tx_tags', 'tag_names', 'paidTo',
    'hd_wallets', 'keys', 'address_book',
)


def load_payload_text(name: str) -> str:
    """
    Load a fixture payload as raw JSON text.

    Args:
        name: Fixture name without extension ('wallet_v3', 'wallet_legacy')

    Returns:
        File contents
    """
    with open(FIXTURES_DIR / f'{name}.json', 'r') as f:
        return f.read()


def load_payload_dict(name: str) -> Dict[str, Any]:
    """Load a fixture payload as a decoded JSON object."""
    return json.loads(load_payload_text(name))


def minimal_payload(**overrides) -> Dict[str, Any]:
    """Smallest valid payload, with optional extra top-level keys."""
    data = {'guid': 'g', 'sharedKey': 's'}
    data.update(overrides)
    return data


def canonicalize(document: Dict[str, Any], default_iterations: int) -> Dict[str, Any]:
    """
    Rewrite a source payload into the form the emitter writes back.

    - unknown top-level keys are dropped
    - ``wallet_options`` becomes ``options`` when ``options`` is absent
    - the options iteration count falls back to ``default_iterations`` and
      is mirrored as top-level ``pbkdf2_iterations``
    - always-written sections get their empty value
    - ``double_encryption``/``dpasswordhash`` and ``hd_wallets`` are removed
      unless the payload is double encrypted / upgraded
    - only the first HD wallet is kept

    Args:
        document: Decoded source payload
        default_iterations: Iteration count passed to the parser

    Returns:
        Canonical document
    """
    doc = copy.deepcopy(document)
    if 'options' not in doc and 'wallet_options' in doc:
        doc['options'] = doc['wallet_options']
    canonical = {key: value for key, value in doc.items() if key in KNOWN_TOP_LEVEL_KEYS}

    options = canonical.get('options') or {}
    if options.get('pbkdf2_iterations') is None:
        options['pbkdf2_iterations'] = default_iterations
    canonical['options'] = options
    canonical['pbkdf2_iterations'] = options['pbkdf2_iterations']

    for key, empty in (('keys', []), ('address_book', []), ('tx_notes', {}),
                       ('tx_tags', {}), ('tag_names', []), ('paidTo', {})):
        canonical.setdefault(key, empty)

    if not canonical.get('double_encryption'):
        canonical.pop('double_encryption', None)
        canonical.pop('dpasswordhash', None)
    if canonical.get('hd_wallets'):
        canonical['hd_wallets'] = canonical['hd_wallets'][:1]
    else:
        canonical.pop('hd_wallets', None)
    return canonical
