"""
mmn_sdk.accounts
================

Caller-side aggregates that bundle a key pair with what is needed to send
from it.

- KeyPairAccount: a key pair whose address is its own base58 public key.
  Sends TRANSFER_BY_KEY transactions.
- ZkAccount: an ephemeral key pair bound to a user id through a proof from
  the proof service. Its address is derived from the user id, and it sends
  TRANSFER_BY_ZK transactions carrying the proof.

Both hold the seed in a bytearray; call `wipe()` (or use `with`) when done.
`nonce` and `balance` start at zero and are only filled by `refresh()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .address import address_from_public_key, derive_address, encode_base58
from .amount import AmountLike
from .tx.build import ExtraInfo, build_transfer_tx
from .types.core import KeyPair, SignedTx, Tx, TxType
from .wallet.entropy import EntropySource
from .wallet.keys import generate_keypair
from .wallet.signer import sign_tx

__all__ = ["KeyPairAccount", "ZkAccount"]


@dataclass(slots=True, eq=False)
class _AccountBase:
    keypair: KeyPair
    address: str
    nonce: int = 0
    balance: int = 0

    @property
    def public_key_b58(self) -> str:
        return encode_base58(self.keypair.public_key)

    def sign(self, tx: Tx) -> SignedTx:
        return sign_tx(tx, self.keypair.public_key, self.keypair.seed)

    async def refresh(self, node) -> None:  # noqa: ANN001 - any NodeClient-like
        """Load the current nonce and balance from the node."""
        account = await node.get_account(self.address)
        self.nonce = account.nonce
        self.balance = account.balance

    def wipe(self) -> None:
        self.keypair.wipe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.wipe()


@dataclass(slots=True, eq=False)
class KeyPairAccount(_AccountBase):
    @classmethod
    def generate(cls, sources: Optional[Iterable[EntropySource]] = None) -> "KeyPairAccount":
        kp = generate_keypair(sources)
        return cls(keypair=kp, address=address_from_public_key(kp.public_key))

    def transfer(
        self,
        recipient: str,
        amount: AmountLike,
        nonce: int,
        *,
        text_data: str = "",
        extra_info: ExtraInfo = None,
        timestamp: Optional[int] = None,
    ) -> SignedTx:
        tx = build_transfer_tx(
            TxType.TRANSFER_BY_KEY,
            self.address,
            recipient,
            amount,
            nonce,
            timestamp=timestamp,
            text_data=text_data,
            extra_info=extra_info,
        )
        return self.sign(tx)


@dataclass(slots=True, eq=False)
class ZkAccount(_AccountBase):
    user_id: str = ""
    zk_proof: str = ""
    zk_pub: str = ""

    @classmethod
    async def create(
        cls,
        zk,  # noqa: ANN001 - any ZkClient-like
        user_id: str,
        jwt: str,
        *,
        keypair: Optional[KeyPair] = None,
    ) -> "ZkAccount":
        """
        Generate (or take) a key pair and obtain a proof binding it to `user_id`.

        Errors from the proof service propagate; the new key is wiped first.
        """
        kp = keypair or generate_keypair()
        address = derive_address(user_id)
        try:
            proof = await zk.get_zk_proof(user_id, address, encode_base58(kp.public_key), jwt)
        except BaseException:
            if keypair is None:
                kp.wipe()
            raise
        return cls(
            keypair=kp,
            address=address,
            user_id=user_id,
            zk_proof=proof.proof,
            zk_pub=proof.public_input,
        )

    def transfer(
        self,
        recipient: str,
        amount: AmountLike,
        nonce: int,
        *,
        tx_type: TxType = TxType.TRANSFER_BY_ZK,
        text_data: str = "",
        extra_info: ExtraInfo = None,
        timestamp: Optional[int] = None,
    ) -> SignedTx:
        tx = build_transfer_tx(
            tx_type,
            self.address,
            recipient,
            amount,
            nonce,
            timestamp=timestamp,
            text_data=text_data,
            extra_info=extra_info,
            zk_proof=self.zk_proof,
            zk_pub=self.zk_pub,
        )
        return self.sign(tx)
