from __future__ import annotations

"""
Core ledger types for the Python SDK.

This module provides two complementary representations for common objects:
- Lightweight `TypedDict` shapes mirroring the JSON payloads on the wire.
- Ergonomic `@dataclass` models with int amounts and `from_json()` helpers.

The goal is to keep transport-vs-local concerns clean:
- Wire dicts carry amounts as base-10 strings ("1000000").
- Dataclasses use Python `int` for amounts, which is arbitrary precision.

Nothing here performs network I/O; these are just types and converters.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, List, Mapping, Optional, TypedDict

from mmn_sdk.utils.bytes import zeroize

# --- Common aliases ----------------------------------------------------------

Address = str  # base58 of a 32-byte public key or identity digest
TxHash = str


# --- Enumerations ------------------------------------------------------------


class TxType(IntEnum):
    """
    Transaction kinds understood by the node. Tags are wire values.

    FAUCET and TRANSFER_BY_KEY share tag 1: the sender is a raw Ed25519 public
    key and the signature travels without an envelope.
    """

    TRANSFER_BY_ZK = 0
    FAUCET = 1
    TRANSFER_BY_KEY = 1
    USER_CONTENT = 2

    @property
    def embeds_public_key(self) -> bool:
        """True when the signature is wrapped together with the signer's public key."""
        return self is not TxType.FAUCET


class TxStatus(IntEnum):
    PENDING = 0
    CONFIRMED = 1
    FINALIZED = 2
    FAILED = 3

    @classmethod
    def parse(cls, value: Any) -> Optional["TxStatus"]:
        """
        Numeric tag, digit string or member name ("CONFIRMED", "failed").

        Missing values mean PENDING (the node omits a zero status); anything
        unrecognized gives None.
        """
        if value is None or value == "":
            return cls.PENDING
        if isinstance(value, TxStatus):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            key = value.strip().upper()
            if key.isdigit():
                return cls.parse(int(key))
            return cls.__members__.get(key)
        return None


class HealthStatus(IntEnum):
    UNKNOWN = 0
    SERVING = 1
    NOT_SERVING = 2

    @classmethod
    def parse(cls, value: Any) -> "HealthStatus":
        """Accept the numeric tag or the enum name in any case ("SERVING", "not_serving")."""
        if isinstance(value, HealthStatus):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return cls.UNKNOWN
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            if key.isdigit():
                return cls.parse(int(key))
            return cls.__members__.get(key, cls.UNKNOWN)
        return cls.UNKNOWN


class EntropyTrust(IntEnum):
    """How much the entropy behind a generated key can be trusted."""

    WEAK = 0
    SECURE = 1


# --- Wire TypedDict shapes ---------------------------------------------------


class TxMsgDict(TypedDict):
    type: int
    sender: Address
    recipient: Address
    amount: str
    timestamp: int
    text_data: str
    nonce: int
    extra_info: str
    zk_proof: str
    zk_pub: str


class SignedTxDict(TypedDict):
    tx_msg: TxMsgDict
    signature: str


class AddTxResponseDict(TypedDict, total=False):
    ok: bool
    tx_hash: TxHash
    error: str


# --- Transactions ------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class Tx:
    """
    An unsigned transaction. Construct via `mmn_sdk.tx.build.build_transfer_tx`
    so the fields are validated; instances are immutable, and any change
    (`dataclasses.replace`) produces a distinct object that must be re-signed.
    """

    type: TxType
    sender: Address
    recipient: Address
    amount: int
    nonce: int
    timestamp: int
    text_data: str = ""
    extra_info: str = ""
    zk_proof: str = ""
    zk_pub: str = ""


@dataclass(slots=True, frozen=True)
class SignedTx:
    tx: Tx
    signature: str


# --- Key material ------------------------------------------------------------


@dataclass(slots=True, eq=False)
class KeyPair:
    """
    An Ed25519 key pair as handed to callers.

    `seed` is the 32-byte private seed (not the expanded key) held in a
    bytearray so it can be wiped. `trust` reports the entropy source used to
    create it. Use as a context manager to wipe the seed on exit:

        with generate_keypair() as kp:
            signed = sign_tx(tx, kp.public_key, kp.seed)
    """

    public_key: bytes
    seed: bytearray
    trust: EntropyTrust = EntropyTrust.SECURE
    source: str = "os-urandom"

    def wipe(self) -> None:
        zeroize(self.seed)

    def __enter__(self) -> "KeyPair":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.wipe()

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self.public_key.hex()}, seed=<redacted>, trust={self.trust.name})"


@dataclass(slots=True, frozen=True)
class EphemeralKeyPair:
    """Wallet-facing key pair: PKCS#8 hex private key and base58 public key."""

    private_key: str
    public_key: Address
    trust: EntropyTrust = EntropyTrust.SECURE

    def __repr__(self) -> str:
        return f"EphemeralKeyPair(public_key={self.public_key}, private_key=<redacted>, trust={self.trust.name})"


# --- Node responses ----------------------------------------------------------


def _int(value: Any, default: int = 0) -> int:
    if value in (None, ""):
        return default
    return int(value)


@dataclass(slots=True, frozen=True)
class Account:
    address: Address
    balance: int
    nonce: int
    decimals: Optional[int] = None

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "Account":
        dec = d.get("decimals")
        return Account(
            address=str(d.get("address", "")),
            balance=_int(d.get("balance")),
            nonce=_int(d.get("nonce")),
            decimals=None if dec is None else int(dec),
        )


@dataclass(slots=True, frozen=True)
class AddTxResponse:
    ok: bool
    tx_hash: TxHash = ""
    error: str = ""

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "AddTxResponse":
        return AddTxResponse(
            ok=bool(d.get("ok", False)),
            tx_hash=str(d.get("tx_hash") or ""),
            error=str(d.get("error") or ""),
        )


@dataclass(slots=True, frozen=True)
class HealthCheckResponse:
    status: HealthStatus
    node_id: str = ""
    current_slot: int = 0
    block_height: int = 0
    mempool_size: int = 0
    version: str = ""
    message: str = ""

    @property
    def serving(self) -> bool:
        return self.status is HealthStatus.SERVING

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "HealthCheckResponse":
        return HealthCheckResponse(
            status=HealthStatus.parse(d.get("status")),
            node_id=str(d.get("node_id") or ""),
            current_slot=_int(d.get("current_slot")),
            block_height=_int(d.get("block_height")),
            mempool_size=_int(d.get("mempool_size")),
            version=str(d.get("version") or ""),
            message=str(d.get("message") or d.get("error_message") or ""),
        )


@dataclass(slots=True, frozen=True)
class TxInfo:
    sender: Address
    recipient: Address
    amount: int
    timestamp: int
    text_data: str = ""
    nonce: int = 0
    slot: int = 0
    blockhash: str = ""
    status: Optional[TxStatus] = TxStatus.PENDING
    err_msg: str = ""
    extra_info: str = ""
    tx_hash: TxHash = ""

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "TxInfo":
        return TxInfo(
            sender=str(d.get("sender", "")),
            recipient=str(d.get("recipient", "")),
            amount=_int(d.get("amount")),
            timestamp=_int(d.get("timestamp")),
            text_data=str(d.get("text_data") or ""),
            nonce=_int(d.get("nonce")),
            slot=_int(d.get("slot")),
            blockhash=str(d.get("blockhash") or ""),
            status=TxStatus.parse(d.get("status")),
            err_msg=str(d.get("err_msg") or ""),
            extra_info=str(d.get("extra_info") or ""),
            tx_hash=str(d.get("tx_hash") or ""),
        )


@dataclass(slots=True, frozen=True)
class TxHistory:
    total: int
    txs: List[TxInfo] = field(default_factory=list)

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "TxHistory":
        return TxHistory(
            total=_int(d.get("total")),
            txs=[TxInfo.from_json(t) for t in (d.get("txs") or [])],
        )


@dataclass(slots=True, frozen=True)
class ZkProof:
    proof: str
    public_input: str

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "ZkProof":
        return ZkProof(proof=str(d.get("proof") or ""), public_input=str(d.get("public_input") or ""))


# --- Indexer records ---------------------------------------------------------


@dataclass(slots=True, frozen=True)
class IndexedTransaction:
    hash: TxHash
    from_address: Address
    to_address: Address
    value: int
    nonce: int = 0
    block_hash: str = ""
    block_number: int = 0
    transaction_type: int = 0
    transaction_timestamp: int = 0
    status: Optional[TxStatus] = None
    text_data: str = ""
    extra_info: str = ""
    chain_id: str = ""

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "IndexedTransaction":
        status = d.get("status")
        return IndexedTransaction(
            hash=str(d.get("hash", "")),
            from_address=str(d.get("from_address", "")),
            to_address=str(d.get("to_address", "")),
            value=_int(d.get("value")),
            nonce=_int(d.get("nonce")),
            block_hash=str(d.get("block_hash") or ""),
            block_number=_int(d.get("block_number")),
            transaction_type=_int(d.get("transaction_type")),
            transaction_timestamp=_int(d.get("transaction_timestamp")),
            status=None if status is None else TxStatus.parse(status),
            text_data=str(d.get("text_data") or ""),
            extra_info=str(d.get("extra_info") or ""),
            chain_id=str(d.get("chain_id") or ""),
        )


@dataclass(slots=True, frozen=True)
class PageMeta:
    chain_id: int
    page: int
    limit: Optional[int] = None
    total_items: Optional[int] = None
    total_pages: Optional[int] = None
    has_more: bool = False

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "PageMeta":
        def opt(k: str) -> Optional[int]:
            v = d.get(k)
            return None if v is None else int(v)

        return PageMeta(
            chain_id=_int(d.get("chain_id")),
            page=_int(d.get("page")),
            limit=opt("limit"),
            total_items=opt("total_items"),
            total_pages=opt("total_pages"),
            has_more=bool(d.get("has_more", False)),
        )


@dataclass(slots=True, frozen=True)
class TransactionPage:
    meta: PageMeta
    data: List[IndexedTransaction] = field(default_factory=list)

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "TransactionPage":
        return TransactionPage(
            meta=PageMeta.from_json(d.get("meta") or {}),
            data=[IndexedTransaction.from_json(t) for t in (d.get("data") or [])],
        )


@dataclass(slots=True, frozen=True)
class WalletDetail:
    address: Address
    balance: int
    account_nonce: int
    last_balance_update: int = 0

    @staticmethod
    def from_json(d: Mapping[str, Any]) -> "WalletDetail":
        return WalletDetail(
            address=str(d.get("address", "")),
            balance=_int(d.get("balance")),
            account_nonce=_int(d.get("account_nonce")),
            last_balance_update=_int(d.get("last_balance_update")),
        )


__all__ = [
    "Address",
    "TxHash",
    "TxType",
    "TxStatus",
    "HealthStatus",
    "EntropyTrust",
    "TxMsgDict",
    "SignedTxDict",
    "AddTxResponseDict",
    "Tx",
    "SignedTx",
    "KeyPair",
    "EphemeralKeyPair",
    "Account",
    "AddTxResponse",
    "HealthCheckResponse",
    "TxInfo",
    "TxHistory",
    "ZkProof",
    "IndexedTransaction",
    "PageMeta",
    "TransactionPage",
    "WalletDetail",
]
