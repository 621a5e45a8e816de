"""
PKCS#8 wire format for Ed25519 seeds.

Wallet integrations exchange private keys as the lowercase hex of a fixed
48-byte DER document:

    30 2e                       SEQUENCE (46)
       02 01 00                 INTEGER version 0
       30 05                    SEQUENCE AlgorithmIdentifier
          06 03 2b 65 70        OID 1.3.101.112 (Ed25519)
       04 22                    OCTET STRING (34)
          04 20 <32-byte seed>  OCTET STRING (32)

The layout never varies, so it is written and checked as a fixed prefix.
"""

from __future__ import annotations

from typing import Union

from mmn_sdk.errors import EncodingError
from mmn_sdk.utils.bytes import zeroize

SEED_LENGTH = 32
PKCS8_PREFIX = bytes.fromhex("302e020100300506032b657004220420")
PKCS8_LENGTH = len(PKCS8_PREFIX) + SEED_LENGTH

__all__ = [
    "SEED_LENGTH",
    "PKCS8_PREFIX",
    "PKCS8_LENGTH",
    "encode_to_wire_format",
    "decode_from_wire_format",
]


def encode_to_wire_format(seed: Union[bytes, bytearray, memoryview]) -> str:
    """Wrap a raw 32-byte seed and return the DER document as lowercase hex."""
    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise EncodingError(f"seed must be bytes, got {type(seed).__name__}")
    if len(seed) != SEED_LENGTH:
        raise EncodingError(f"seed must be {SEED_LENGTH} bytes, got {len(seed)}")
    der = bytearray(PKCS8_PREFIX)
    try:
        der += seed
        return der.hex()
    finally:
        zeroize(der)


def decode_from_wire_format(text: str) -> bytearray:
    """
    Strict inverse of `encode_to_wire_format`.

    Returns the seed in a new bytearray the caller must zero. Anything other
    than the exact 48-byte layout raises EncodingError.
    """
    if not isinstance(text, str):
        raise EncodingError("PKCS#8 key must be a hex string")
    if len(text) != PKCS8_LENGTH * 2:
        raise EncodingError(f"PKCS#8 key must be {PKCS8_LENGTH * 2} hex chars, got {len(text)}")
    try:
        der = bytearray.fromhex(text)
    except ValueError as e:
        raise EncodingError(f"PKCS#8 key is not valid hex: {e}") from e
    try:
        if len(der) != PKCS8_LENGTH:
            raise EncodingError("PKCS#8 key has whitespace or a wrong length")
        if der[: len(PKCS8_PREFIX)] != PKCS8_PREFIX:
            raise EncodingError("not an Ed25519 PKCS#8 private key")
        return der[len(PKCS8_PREFIX):]
    finally:
        zeroize(der)
