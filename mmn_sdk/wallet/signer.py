"""
mmn_sdk.wallet.signer
=====================

Ed25519 signing and verification of ledger transactions.

The signed bytes are `mmn_sdk.tx.encode.serialize(tx)`. How the signature is
packaged depends on the transaction type:

- FAUCET / TRANSFER_BY_KEY (tag 1): ``base58(sig)``. The sender address *is*
  the raw public key, so the verifier takes the key from ``tx.sender``.
- every other type: ``base58(JSON({"PubKey": b64, "Sig": b64}))``. The sender
  may be a proof-bound address, so the key travels with the signature.

Key handling
------------
The 32-byte seed is expanded into a transient 64-byte buffer
(``seed || public_key``) that is zeroed in a ``finally`` block on every exit
path. The caller's seed buffer is never modified.

`verify_tx` never raises: any decode, parse, length or signature failure is
reported as ``False``.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from mmn_sdk.address import decode_base58, encode_base58
from mmn_sdk.errors import CryptoError, MmnSdkError
from mmn_sdk.tx.encode import (
    PUBLIC_KEY_LENGTH,
    SIGNATURE_LENGTH,
    pack_user_sig,
    serialize,
    unpack_user_sig,
)
from mmn_sdk.types.core import SignedTx, Tx
from mmn_sdk.utils.bytes import zeroize
from mmn_sdk.wallet.keys import SEED_LENGTH, SeedLike, check_seed, expand_seed
from mmn_sdk.wallet.pkcs8 import decode_from_wire_format

log = logging.getLogger(__name__)

__all__ = [
    "sign_tx",
    "sign_tx_with_wire_key",
    "sign_message",
    "verify_tx",
    "verify_message",
]


def _sign_expanded(expanded: bytearray, message: bytes) -> bytes:
    with memoryview(expanded) as mv:
        sk = Ed25519PrivateKey.from_private_bytes(mv[:SEED_LENGTH])
    return sk.sign(message)


def sign_message(message: bytes, seed: SeedLike) -> bytes:
    """Raw 64-byte detached Ed25519 signature of `message`."""
    expanded = expand_seed(seed)
    try:
        return _sign_expanded(expanded, bytes(message))
    finally:
        zeroize(expanded)


def sign_tx(tx: Tx, public_key: Optional[Union[bytes, bytearray]], seed: SeedLike) -> SignedTx:
    """
    Sign `tx` with a 32-byte seed.

    `public_key` may be None; when given it must be the key derived from
    `seed`, otherwise CryptoError is raised before anything is signed.
    """
    check_seed(seed)
    expanded = expand_seed(seed)
    try:
        pk = bytes(expanded[SEED_LENGTH:])
        if public_key is not None and bytes(public_key) != pk:
            raise CryptoError("public key does not match seed")
        try:
            sig = _sign_expanded(expanded, serialize(tx))
        except ValueError as e:
            raise CryptoError(f"signing failed: {e}") from e
    finally:
        zeroize(expanded)

    if tx.type.embeds_public_key:
        signature = pack_user_sig(pk, sig)
    else:
        signature = encode_base58(sig)
    # TRANSFER_BY_KEY aliases FAUCET, so log the numeric tag
    log.debug("signed tx type=%d nonce=%d sender=%s", int(tx.type), tx.nonce, tx.sender)
    return SignedTx(tx=tx, signature=signature)


def sign_tx_with_wire_key(tx: Tx, private_key: str) -> SignedTx:
    """Sign with a PKCS#8 hex private key as exchanged with wallets."""
    seed = decode_from_wire_format(private_key)
    try:
        return sign_tx(tx, None, seed)
    finally:
        zeroize(seed)


# --- Verification ------------------------------------------------------------


def verify_message(message: bytes, signature: bytes, public_key: bytes) -> bool:
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
        return False
    try:
        Ed25519PublicKey.from_public_bytes(bytes(public_key)).verify(bytes(signature), message)
    except (InvalidSignature, ValueError):
        return False
    return True


def verify_tx(tx: Tx, signature: str) -> bool:
    """True iff `signature` is a valid signature envelope for `tx`."""
    try:
        if tx.type.embeds_public_key:
            pk, sig = unpack_user_sig(signature)
        else:
            pk = decode_base58(tx.sender)
            sig = decode_base58(signature)
        return verify_message(serialize(tx), sig, pk)
    except (MmnSdkError, ValueError, TypeError, AttributeError) as e:
        log.debug("signature rejected: %s", e)
        return False
