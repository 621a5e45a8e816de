"""
mmn_sdk.tx.encode
=================

Canonical signing payload and wire shapes for ledger transactions.

This module provides:
- `serialize(tx)` -> the exact bytes that are signed and verified
- `pack_user_sig(pk, sig)` / `unpack_user_sig(text)` -> the public-key envelope
- `tx_to_wire(tx)` / `tx_from_wire(d)` -> the `tx_msg` dict sent to the node
- `signed_tx_to_wire(signed)` -> `{"tx_msg": {...}, "signature": "..."}`
- `validate_tx_addresses(tx)` -> recipient curve-point check for campaign feeds

Design notes
------------
* The signed payload is seven fields joined by "|":

      type | sender | recipient | amount | text_data | nonce | extra_info

  `type` is the integer tag; `amount` and `nonce` are base-10. `timestamp`,
  `zk_proof` and `zk_pub` travel in the `tx_msg` but are not signed.
* `extra_info` is used exactly as stored on the Tx, never re-parsed, so the
  key order inside that JSON text is part of the signed bytes.
* The envelope for types that embed the signer key is

      base58(JSON({"PubKey": base64(pk), "Sig": base64(sig)}))

  with compact separators, matching the node's decoder.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Mapping, Tuple

from nacl.bindings import crypto_core_ed25519_is_valid_point

from mmn_sdk.address import decode_base58, encode_base58
from mmn_sdk.errors import DecodeError
from mmn_sdk.tx.build import build_transfer_tx
from mmn_sdk.types.core import SignedTx, SignedTxDict, Tx, TxMsgDict, TxType

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

DONATION_CAMPAIGN_FEED = "donation_campaign_feed"
# user-content types whose recipient must be an Ed25519 public key
ADDRESS_CHECKED_CONTENT_TYPES = frozenset({DONATION_CAMPAIGN_FEED})

__all__ = [
    "PUBLIC_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "serialize",
    "pack_user_sig",
    "unpack_user_sig",
    "tx_to_wire",
    "tx_from_wire",
    "signed_tx_to_wire",
    "DONATION_CAMPAIGN_FEED",
    "ADDRESS_CHECKED_CONTENT_TYPES",
    "validate_tx_addresses",
]


# -----------------------------------------------------------------------------
# Signing payload
# -----------------------------------------------------------------------------


def serialize(tx: Tx) -> bytes:
    """Canonical bytes signed by the sender and reconstructed by the node."""
    fields = [
        str(int(tx.type)),
        tx.sender,
        tx.recipient,
        str(tx.amount),
        tx.text_data,
        str(tx.nonce),
        tx.extra_info,
    ]
    return "|".join(fields).encode("utf-8")


# -----------------------------------------------------------------------------
# Signature envelope
# -----------------------------------------------------------------------------


def pack_user_sig(public_key: bytes, signature: bytes) -> str:
    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise ValueError(f"public key must be {PUBLIC_KEY_LENGTH} bytes")
    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError(f"signature must be {SIGNATURE_LENGTH} bytes")
    doc = {
        "PubKey": base64.b64encode(bytes(public_key)).decode("ascii"),
        "Sig": base64.b64encode(bytes(signature)).decode("ascii"),
    }
    return encode_base58(json.dumps(doc, separators=(",", ":")).encode("utf-8"))


def _b64(name: str, value: Any) -> bytes:
    if not isinstance(value, str):
        raise DecodeError(f"envelope field {name} must be a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"envelope field {name} is not valid base64: {e}") from e


def unpack_user_sig(text: str) -> Tuple[bytes, bytes]:
    """
    Decode a public-key envelope into (public_key, signature).

    Raises DecodeError on bad base58, bad JSON, missing fields, bad base64 or
    wrong key / signature lengths.
    """
    raw = decode_base58(text)
    try:
        doc = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"signature envelope is not JSON: {e}") from e
    if not isinstance(doc, dict):
        raise DecodeError("signature envelope must be a JSON object")
    if "PubKey" not in doc or "Sig" not in doc:
        raise DecodeError("signature envelope requires PubKey and Sig")
    pk = _b64("PubKey", doc["PubKey"])
    sig = _b64("Sig", doc["Sig"])
    if len(pk) != PUBLIC_KEY_LENGTH:
        raise DecodeError(f"envelope public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(pk)}")
    if len(sig) != SIGNATURE_LENGTH:
        raise DecodeError(f"envelope signature must be {SIGNATURE_LENGTH} bytes, got {len(sig)}")
    return pk, sig


# -----------------------------------------------------------------------------
# Wire dicts
# -----------------------------------------------------------------------------


def tx_to_wire(tx: Tx) -> TxMsgDict:
    return {
        "type": int(tx.type),
        "sender": tx.sender,
        "recipient": tx.recipient,
        "amount": str(tx.amount),
        "timestamp": tx.timestamp,
        "text_data": tx.text_data,
        "nonce": tx.nonce,
        "extra_info": tx.extra_info,
        "zk_proof": tx.zk_proof,
        "zk_pub": tx.zk_pub,
    }


def tx_from_wire(d: Mapping[str, Any]) -> Tx:
    """Rebuild a Tx from a `tx_msg` dict. Goes through the builder, so it validates."""
    return build_transfer_tx(
        d.get("type", 0),
        d.get("sender", ""),
        d.get("recipient", ""),
        d.get("amount", ""),
        d.get("nonce", 0),
        timestamp=d.get("timestamp", 0),
        text_data=d.get("text_data") or "",
        extra_info=d.get("extra_info") or None,
        zk_proof=d.get("zk_proof") or "",
        zk_pub=d.get("zk_pub") or "",
    )


def signed_tx_to_wire(signed: SignedTx) -> SignedTxDict:
    return {"tx_msg": tx_to_wire(signed.tx), "signature": signed.signature}


# -----------------------------------------------------------------------------
# Recipient key check
# -----------------------------------------------------------------------------


def validate_tx_addresses(tx: Tx) -> bool:
    """
    True unless `tx` is user content whose extra-info type requires the
    recipient to be an Ed25519 public key and the recipient is not one.

    The recipient must decode to a point on the curve; libsodium also rejects
    small-order points.
    Extra info that is not a JSON object fails the check for user content.
    """
    if tx.type is not TxType.USER_CONTENT:
        return True
    try:
        content = json.loads(tx.extra_info)
    except ValueError:
        return False
    if content is None:
        content = {}
    if not isinstance(content, dict):
        return False
    kind = content.get("type", "")
    if not isinstance(kind, str):
        return False
    if kind not in ADDRESS_CHECKED_CONTENT_TYPES:
        return True
    try:
        raw = decode_base58(tx.recipient)
    except DecodeError:
        return False
    if len(raw) != PUBLIC_KEY_LENGTH:
        return False
    return bool(crypto_core_ed25519_is_valid_point(raw))
