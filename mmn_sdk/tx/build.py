"""
mmn_sdk.tx.build
================

Builder for ledger transactions plus the extra-info JSON helpers.

The builder returns the immutable dataclass `mmn_sdk.types.core.Tx`. Feed it to
`mmn_sdk.wallet.signer.sign_tx` to get a `SignedTx`, and to
`mmn_sdk.tx.send` to submit it via JSON-RPC.

Validation runs in a fixed order and stops at the first failure:

1. sender decodes to 32 bytes               InvalidAddress(field="sender")
2. recipient decodes to 32 bytes            InvalidAddress(field="recipient")
3. sender differs from recipient            InvalidAddress(field="recipient")
4. amount > 0                               InvalidAmount(field="amount")
5. extra info serializes to JSON text       ExtraInfoEncodingError(field="extra_info")
6. type / nonce / timestamp / text fields   ValidationError(field=...)

Examples
--------
    from mmn_sdk.tx.build import build_transfer_tx
    from mmn_sdk.types.core import TxType

    tx = build_transfer_tx(
        TxType.TRANSFER_BY_KEY, sender, recipient,
        amount="1000000", nonce=7,
        text_data="rent", extra_info={"type": "transfer"},
    )
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Mapping, Optional, Type, Union

from mmn_sdk.address import validate_address
from mmn_sdk.amount import AmountLike, parse_amount
from mmn_sdk.errors import ExtraInfoEncodingError, InvalidAddress, InvalidAmount, ValidationError
from mmn_sdk.types.core import Address, Tx, TxType

U64_MAX = (1 << 64) - 1

ExtraInfo = Union[Mapping[str, str], str, None]

__all__ = [
    "U64_MAX",
    "ExtraInfo",
    "build_transfer_tx",
    "serialize_extra_info",
    "deserialize_extra_info",
    "now_seconds",
]


# -----------------------------------------------------------------------------
# Extra info
# -----------------------------------------------------------------------------


def serialize_extra_info(extra: Optional[Mapping[str, str]]) -> str:
    """
    Serialize a string->string mapping to compact JSON text.

    Key insertion order is kept and non-ASCII text is written as-is, so the
    same logical mapping must be built the same way each time it is signed.
    None gives "".
    """
    if extra is None:
        return ""
    if not isinstance(extra, Mapping):
        raise ExtraInfoEncodingError(
            f"extra info must be a mapping, got {type(extra).__name__}", field="extra_info"
        )
    for k, v in extra.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ExtraInfoEncodingError(
                f"extra info entries must be str -> str, got {k!r}: {type(v).__name__}",
                field="extra_info",
            )
    try:
        return json.dumps(dict(extra), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ExtraInfoEncodingError(f"extra info is not JSON serializable: {e}", field="extra_info") from e


def deserialize_extra_info(text: str) -> Optional[Dict[str, Any]]:
    """Inverse of `serialize_extra_info`: "" -> None, malformed -> ExtraInfoEncodingError."""
    if text == "":
        return None
    try:
        obj = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ExtraInfoEncodingError(f"extra info is not valid JSON: {e}", field="extra_info") from e
    if not isinstance(obj, dict):
        raise ExtraInfoEncodingError("extra info must be a JSON object", field="extra_info")
    return obj


def _require_utf8(name: str, text: str, error: Type[ValidationError]) -> None:
    # lone surrogates survive json and str handling but cannot be signed
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise error(f"{name} is not encodable as UTF-8: {e.reason}", field=name) from e


def _coerce_extra_info(extra: ExtraInfo) -> str:
    if extra is None:
        return ""
    if isinstance(extra, str):
        # Already serialized; keep the exact text, only check it is a JSON object.
        deserialize_extra_info(extra)
        text = extra
    else:
        text = serialize_extra_info(extra)
    _require_utf8("extra_info", text, ExtraInfoEncodingError)
    return text


# -----------------------------------------------------------------------------
# Core builder
# -----------------------------------------------------------------------------


def now_seconds() -> int:
    return int(time.time())


def _require_u64(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an int", field=name)
    if not 0 <= value <= U64_MAX:
        raise ValidationError(f"{name} must fit in an unsigned 64-bit integer", field=name)
    return value


def _require_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string", field=name)
    _require_utf8(name, value, ValidationError)
    return value


def _coerce_type(tx_type: Union[TxType, int]) -> TxType:
    if isinstance(tx_type, bool):
        raise ValidationError("unknown transaction type", field="type")
    try:
        return TxType(tx_type)
    except ValueError as e:
        raise ValidationError(f"unknown transaction type {tx_type!r}", field="type") from e


def build_transfer_tx(
    tx_type: Union[TxType, int],
    sender: Address,
    recipient: Address,
    amount: AmountLike,
    nonce: int,
    timestamp: Optional[int] = None,
    text_data: str = "",
    extra_info: ExtraInfo = None,
    zk_proof: str = "",
    zk_pub: str = "",
) -> Tx:
    """
    Validate inputs and construct an unsigned `Tx`. Performs no network I/O.

    `amount` may be an int or a base-10 string of base units. `extra_info` may
    be a str->str mapping (serialized here) or already-serialized JSON text.
    `timestamp` defaults to the current unix time in seconds.
    """
    validate_address(sender, field="sender")
    validate_address(recipient, field="recipient")
    if sender == recipient:
        raise InvalidAddress("sender and recipient must differ", field="recipient")
    value = parse_amount(amount)
    if value <= 0:
        raise InvalidAmount("amount must be greater than zero", field="amount")
    extra = _coerce_extra_info(extra_info)

    kind = _coerce_type(tx_type)
    ts = now_seconds() if timestamp is None else timestamp

    return Tx(
        type=kind,
        sender=sender,
        recipient=recipient,
        amount=value,
        nonce=_require_u64("nonce", nonce),
        timestamp=_require_u64("timestamp", ts),
        text_data=_require_str("text_data", text_data),
        extra_info=extra,
        zk_proof=_require_str("zk_proof", zk_proof),
        zk_pub=_require_str("zk_pub", zk_pub),
    )
