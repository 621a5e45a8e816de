"""
Shared pytest fixtures:
- The RFC 8032 test-vector key (seed and key-pair address)
- Deterministic addresses derived from user ids
- FakeNode / FakeZk stubs recording the calls made to them
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from mmn_sdk.address import derive_address, encode_base58
from mmn_sdk.types.core import Account, AddTxResponse, SignedTx, ZkProof

from vectors import RFC8032_PUBLIC_KEY, RFC8032_SEED


# ---------- KEYS & ADDRESSES ----------

@pytest.fixture
def rfc_seed() -> bytearray:
    return bytearray(RFC8032_SEED)


@pytest.fixture
def rfc_address() -> str:
    """Key-pair address of the RFC 8032 key: base58 of its public key."""
    return encode_base58(RFC8032_PUBLIC_KEY)


@pytest.fixture
def alice() -> str:
    return derive_address("alice")


@pytest.fixture
def bob() -> str:
    return derive_address("bob")


# ---------- STUB CLIENTS ----------

class FakeNode:
    """In-memory stand-in for NodeClient, recording every call."""

    def __init__(self, *, nonce: int = 0, balance: int = 0) -> None:
        self.calls: List[Tuple[str, Any]] = []
        self.submitted: List[SignedTx] = []
        self.nonce = nonce
        self.balance = balance

    async def add_tx(self, signed: SignedTx) -> AddTxResponse:
        self.calls.append(("add_tx", signed))
        self.submitted.append(signed)
        return AddTxResponse(ok=True, tx_hash=f"hash-{len(self.submitted)}")

    async def get_account(self, address: str) -> Account:
        self.calls.append(("get_account", address))
        return Account(address=address, balance=self.balance, nonce=self.nonce)


class FakeZk:
    def __init__(self) -> None:
        self.requests: List[Dict[str, str]] = []

    async def get_zk_proof(self, user_id: str, address: str, ephemeral_pk: str, jwt: str) -> ZkProof:
        self.requests.append({"user_id": user_id, "address": address, "ephemeral_pk": ephemeral_pk, "jwt": jwt})
        return ZkProof(proof="proof-" + user_id, public_input="pub-" + user_id)


@pytest.fixture
def fake_node() -> FakeNode:
    return FakeNode(nonce=4, balance=5_000_000)


@pytest.fixture
def fake_zk() -> FakeZk:
    return FakeZk()
