"""
mmn_sdk.wallet
==============

Convenience exports for wallet helpers:

- Ranked entropy sources with a reported trust level.
- Ed25519 key generation, seed expansion and wiping.
- PKCS#8 wire format used by wallet integrations.
- Transaction signer / verifier.
"""

from .entropy import DEFAULT_SOURCES, EntropySource, draw_entropy
from .keys import (
    expand_seed,
    generate_ephemeral_keypair,
    generate_keypair,
    public_key_from_seed,
    zeroize,
)
from .pkcs8 import decode_from_wire_format, encode_to_wire_format
from .signer import sign_message, sign_tx, sign_tx_with_wire_key, verify_message, verify_tx

__all__ = [
    # entropy
    "EntropySource",
    "DEFAULT_SOURCES",
    "draw_entropy",
    # keys
    "generate_keypair",
    "generate_ephemeral_keypair",
    "public_key_from_seed",
    "expand_seed",
    "zeroize",
    # pkcs8
    "encode_to_wire_format",
    "decode_from_wire_format",
    # signer
    "sign_tx",
    "sign_tx_with_wire_key",
    "sign_message",
    "verify_tx",
    "verify_message",
]
