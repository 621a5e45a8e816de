"""
mmn_sdk.wallet.keys
===================

Ed25519 key material: generation, seed expansion and wiping.

Keys are handed around as the 32-byte *seed*; the 64-byte expanded form
(`seed || public_key`) is only built for the duration of a signing call.
Every buffer holding secret bytes is a bytearray so it can be zeroed.

Crypto is provided by `cryptography` (`Ed25519PrivateKey`).
"""

from __future__ import annotations

from typing import Iterable, Optional

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from mmn_sdk.address import encode_base58
from mmn_sdk.errors import CryptoError
from mmn_sdk.types.core import EphemeralKeyPair, KeyPair
from mmn_sdk.utils.bytes import BytesLike, zeroize
from mmn_sdk.wallet.entropy import EntropySource, draw_entropy
from mmn_sdk.wallet.pkcs8 import SEED_LENGTH, encode_to_wire_format

PUBLIC_KEY_LENGTH = 32
EXPANDED_KEY_LENGTH = 64

SeedLike = BytesLike

__all__ = [
    "SEED_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "EXPANDED_KEY_LENGTH",
    "check_seed",
    "private_key_from_seed",
    "public_key_from_seed",
    "expand_seed",
    "generate_keypair",
    "generate_ephemeral_keypair",
    "zeroize",
]


def check_seed(seed: SeedLike) -> None:
    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise CryptoError(f"seed must be bytes, got {type(seed).__name__}")
    if len(seed) != SEED_LENGTH:
        raise CryptoError(f"seed must be {SEED_LENGTH} bytes, got {len(seed)}")


def private_key_from_seed(seed: SeedLike) -> Ed25519PrivateKey:
    check_seed(seed)
    return Ed25519PrivateKey.from_private_bytes(seed)


def public_key_from_seed(seed: SeedLike) -> bytes:
    """Raw 32-byte Ed25519 public key for a seed."""
    return private_key_from_seed(seed).public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


def expand_seed(seed: SeedLike) -> bytearray:
    """
    64-byte expanded private key, `seed || public_key` (NaCl layout).

    The caller owns the returned buffer and must `zeroize` it.
    """
    check_seed(seed)
    out = bytearray(EXPANDED_KEY_LENGTH)
    out[:SEED_LENGTH] = seed
    out[SEED_LENGTH:] = public_key_from_seed(seed)
    return out


def generate_keypair(
    sources: Optional[Iterable[EntropySource]] = None,
    *,
    allow_weak: bool = True,
) -> KeyPair:
    """
    Generate a fresh key pair from the best available entropy source.

    The returned KeyPair carries the seed (not the expanded key) and the
    trust level of the source that produced it.
    """
    seed, src = draw_entropy(SEED_LENGTH, sources, allow_weak=allow_weak)
    try:
        pk = public_key_from_seed(seed)
    except Exception:
        zeroize(seed)
        raise
    return KeyPair(public_key=pk, seed=seed, trust=src.trust, source=src.name)


def generate_ephemeral_keypair(
    sources: Optional[Iterable[EntropySource]] = None,
    *,
    allow_weak: bool = True,
) -> EphemeralKeyPair:
    """Key pair in wallet form: PKCS#8 hex private key, base58 public key."""
    with generate_keypair(sources, allow_weak=allow_weak) as kp:
        return EphemeralKeyPair(
            private_key=encode_to_wire_format(kp.seed),
            public_key=encode_base58(kp.public_key),
            trust=kp.trust,
        )
