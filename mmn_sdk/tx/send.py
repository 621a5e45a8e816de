"""
mmn_sdk.tx.send
===============

Build, sign, self-verify and submit transactions through a node.

Primary entry points
--------------------
- submit_signed(node, signed) -> AddTxResponse
    Verifies the signature locally, then submits via `tx.addtx`.

- send_transaction(node, sender_user_id, recipient_user_id, ...)
    TRANSFER_BY_ZK between the addresses derived from two user ids.

- send_transaction_by_address(node, sender, recipient, ...)
    TRANSFER_BY_ZK between explicit addresses.

- send_transaction_by_private_key(node, sender, recipient, ...)
    TRANSFER_BY_KEY; `sender` must be the base58 public key of the signer.

- post_user_content(node, sender, recipient, ...)
    USER_CONTENT (e.g. a campaign feed post) carried as a transaction.
    A donation campaign feed must name a recipient that is a valid Ed25519
    public key; otherwise InvalidAddress is raised before signing.

- next_nonce(node, address) -> int
    The nonce to use for the next transaction from `address`.

`private_key` is the PKCS#8 hex string exchanged with wallets, or a raw
32-byte seed. A local verification failure raises CryptoError and nothing is
sent.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Union

from mmn_sdk.address import derive_address
from mmn_sdk.amount import AmountLike
from mmn_sdk.errors import CryptoError, InvalidAddress
from mmn_sdk.tx.build import ExtraInfo, build_transfer_tx
from mmn_sdk.tx.encode import validate_tx_addresses
from mmn_sdk.types.core import Account, AddTxResponse, SignedTx, Tx, TxType
from mmn_sdk.wallet.signer import sign_tx, sign_tx_with_wire_key, verify_tx

PrivateKey = Union[str, bytes, bytearray]

__all__ = [
    "PrivateKey",
    "sign_with",
    "submit_signed",
    "next_nonce",
    "send_transaction",
    "send_transaction_by_address",
    "send_transaction_by_private_key",
    "post_user_content",
]


# -----------------------------------------------------------------------------
# Minimal node protocol to avoid tight coupling with the concrete client
# -----------------------------------------------------------------------------


class _Node(Protocol):
    async def add_tx(self, signed: SignedTx) -> AddTxResponse: ...

    async def get_account(self, address: str) -> Account: ...


# -----------------------------------------------------------------------------
# Core helpers
# -----------------------------------------------------------------------------


def sign_with(tx: Tx, private_key: PrivateKey) -> SignedTx:
    if isinstance(private_key, str):
        return sign_tx_with_wire_key(tx, private_key)
    return sign_tx(tx, None, private_key)


async def submit_signed(node: _Node, signed: SignedTx) -> AddTxResponse:
    """Verify `signed` locally, then submit it. Raises CryptoError if it does not verify."""
    if not verify_tx(signed.tx, signed.signature):
        raise CryptoError("signature does not verify locally; refusing to submit")
    return await node.add_tx(signed)


async def next_nonce(node: _Node, address: str) -> int:
    account = await node.get_account(address)
    return account.nonce + 1


async def _build_sign_submit(
    node: _Node,
    tx_type: TxType,
    sender: str,
    recipient: str,
    amount: AmountLike,
    nonce: int,
    private_key: PrivateKey,
    **fields: Any,
) -> AddTxResponse:
    tx = build_transfer_tx(tx_type, sender, recipient, amount, nonce, **fields)
    if not validate_tx_addresses(tx):
        raise InvalidAddress("recipient is not a valid Ed25519 public key", field="recipient")
    return await submit_signed(node, sign_with(tx, private_key))


# -----------------------------------------------------------------------------
# Send flows
# -----------------------------------------------------------------------------


async def send_transaction(
    node: _Node,
    sender_user_id: str,
    recipient_user_id: str,
    amount: AmountLike,
    nonce: int,
    private_key: PrivateKey,
    *,
    text_data: str = "",
    extra_info: ExtraInfo = None,
    zk_proof: str = "",
    zk_pub: str = "",
    timestamp: Optional[int] = None,
) -> AddTxResponse:
    return await _build_sign_submit(
        node,
        TxType.TRANSFER_BY_ZK,
        derive_address(sender_user_id),
        derive_address(recipient_user_id),
        amount,
        nonce,
        private_key,
        text_data=text_data,
        extra_info=extra_info,
        zk_proof=zk_proof,
        zk_pub=zk_pub,
        timestamp=timestamp,
    )


async def send_transaction_by_address(
    node: _Node,
    sender: str,
    recipient: str,
    amount: AmountLike,
    nonce: int,
    private_key: PrivateKey,
    *,
    text_data: str = "",
    extra_info: ExtraInfo = None,
    zk_proof: str = "",
    zk_pub: str = "",
    timestamp: Optional[int] = None,
) -> AddTxResponse:
    return await _build_sign_submit(
        node,
        TxType.TRANSFER_BY_ZK,
        sender,
        recipient,
        amount,
        nonce,
        private_key,
        text_data=text_data,
        extra_info=extra_info,
        zk_proof=zk_proof,
        zk_pub=zk_pub,
        timestamp=timestamp,
    )


async def send_transaction_by_private_key(
    node: _Node,
    sender: str,
    recipient: str,
    amount: AmountLike,
    nonce: int,
    private_key: PrivateKey,
    *,
    text_data: str = "",
    extra_info: ExtraInfo = None,
    timestamp: Optional[int] = None,
) -> AddTxResponse:
    return await _build_sign_submit(
        node,
        TxType.TRANSFER_BY_KEY,
        sender,
        recipient,
        amount,
        nonce,
        private_key,
        text_data=text_data,
        extra_info=extra_info,
        timestamp=timestamp,
    )


async def post_user_content(
    node: _Node,
    sender: str,
    recipient: str,
    amount: AmountLike,
    nonce: int,
    private_key: PrivateKey,
    *,
    text_data: str = "",
    extra_info: ExtraInfo = None,
    zk_proof: str = "",
    zk_pub: str = "",
    timestamp: Optional[int] = None,
) -> AddTxResponse:
    return await _build_sign_submit(
        node,
        TxType.USER_CONTENT,
        sender,
        recipient,
        amount,
        nonce,
        private_key,
        text_data=text_data,
        extra_info=extra_info,
        zk_proof=zk_proof,
        zk_pub=zk_pub,
        timestamp=timestamp,
    )
