"""
mmn_sdk.address
===============

Address derivation and validation utilities for the MMN ledger.

Format
------
An address is the Bitcoin-alphabet base58 text (no checksum) of exactly
32 bytes. Two derivations are in use:

    zk / user-id address   = base58(sha256(utf8(user_id)))
    key-pair address       = base58(ed25519_public_key)

This module provides:
- encode_base58(data) -> str
- decode_base58(text) -> bytes            (DecodeError on malformed input)
- derive_address(identity) -> str
- address_from_public_key(public_key) -> str
- validate_address(address, field=...)    (InvalidAddress unless 32 bytes)
- is_valid_address(address) -> bool

Dependencies
------------
Encoding is delegated to the `base58` package; this module only adds strict
input checking on top of it.
"""

from __future__ import annotations

import hashlib
from typing import Union

import base58

from mmn_sdk.errors import DecodeError, InvalidAddress

ADDRESS_LENGTH = 32

__all__ = [
    "ADDRESS_LENGTH",
    "encode_base58",
    "decode_base58",
    "derive_address",
    "address_from_public_key",
    "validate_address",
    "is_valid_address",
]

_ALPHABET = frozenset(base58.BITCOIN_ALPHABET.decode("ascii"))


# ---- Base58 -------------------------------------------------------------------


def encode_base58(data: Union[bytes, bytearray, memoryview]) -> str:
    """Encode raw bytes as Bitcoin-alphabet base58 text. Empty input gives ""."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"encode_base58 expects bytes, got {type(data).__name__}")
    return base58.b58encode(bytes(data)).decode("ascii")


def decode_base58(text: str) -> bytes:
    """
    Decode base58 text to bytes.

    Every character must belong to the Bitcoin alphabet: no whitespace, no
    '0', 'O', 'I' or 'l'. Anything else raises DecodeError.
    """
    if not isinstance(text, str):
        raise DecodeError(f"base58 input must be str, got {type(text).__name__}")
    bad = next((c for c in text if c not in _ALPHABET), None)
    if bad is not None:
        raise DecodeError(f"invalid base58 character {bad!r}", value=text)
    try:
        return base58.b58decode(text)
    except ValueError as e:
        raise DecodeError(f"invalid base58: {e}", value=text) from e


# ---- Derivation ---------------------------------------------------------------


def derive_address(identity: str) -> str:
    """
    Derive a deposit address from an opaque identity (e.g. a user id).

    base58(SHA-256(UTF-8(identity))). Deterministic and one-way; the decoded
    address is always 32 bytes.
    """
    if not isinstance(identity, str):
        raise TypeError("identity must be a string")
    return encode_base58(hashlib.sha256(identity.encode("utf-8")).digest())


def address_from_public_key(public_key: Union[bytes, bytearray]) -> str:
    """Address of a key-pair account: the base58 text of its raw 32-byte public key."""
    if not isinstance(public_key, (bytes, bytearray)) or len(public_key) != ADDRESS_LENGTH:
        raise InvalidAddress("public key must be 32 raw bytes", field="public_key")
    return encode_base58(public_key)


# ---- Validation ---------------------------------------------------------------


def validate_address(address: str, field: str = "address") -> bytes:
    """
    Ensure `address` decodes to exactly 32 bytes. Returns the decoded bytes.

    Raises InvalidAddress (carrying `field`) otherwise.
    """
    if not isinstance(address, str) or not address:
        raise InvalidAddress("address must be a non-empty base58 string", field=field)
    try:
        raw = decode_base58(address)
    except DecodeError as e:
        raise InvalidAddress(e.message, field=field) from e
    if len(raw) != ADDRESS_LENGTH:
        raise InvalidAddress(
            f"address must decode to {ADDRESS_LENGTH} bytes, got {len(raw)}", field=field
        )
    return raw


def is_valid_address(address: str) -> bool:
    try:
        validate_address(address)
    except InvalidAddress:
        return False
    return True
