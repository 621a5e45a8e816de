"""
mmn_sdk.client
==============

`MmnClient` bundles the node, proof-service and indexer clients built from an
:class:`SDKConfig`, and exposes the send flows of :mod:`mmn_sdk.tx.send` as
methods.

    async with MmnClient(SDKConfig.from_env()) as client:
        nonce = await client.next_nonce(address)
        resp = await client.send_transaction_by_private_key(
            address, recipient, "1000000", nonce, pkcs8_hex,
        )
"""

from __future__ import annotations

from typing import Any, Optional

from .config import SDKConfig
from .indexer.client import IndexerClient
from .node import NodeClient
from .rpc.http import RpcClient
from .rpc.rest import RestClient
from .tx import send as _send
from .types.core import AddTxResponse, SignedTx
from .zk.client import ZkClient


class MmnClient:
    def __init__(self, config: Optional[SDKConfig] = None) -> None:
        self.config = config or SDKConfig.from_env()
        cfg = self.config
        common = {
            "timeout": cfg.request_timeout,
            "max_retries": cfg.max_retries,
            "headers": cfg.http_headers(),
        }
        self.node = NodeClient(RpcClient(cfg.node_url, **common))
        self.zk = ZkClient(RestClient(cfg.zk_url, **common))
        self.indexer = IndexerClient(RestClient(cfg.indexer_url, **common), cfg.chain_id)

    async def __aenter__(self) -> "MmnClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        await self.node.aclose()
        await self.zk.aclose()
        await self.indexer.aclose()

    # --- send flows ------------------------------------------------------------

    async def submit_signed(self, signed: SignedTx) -> AddTxResponse:
        return await _send.submit_signed(self.node, signed)

    async def next_nonce(self, address: str) -> int:
        return await _send.next_nonce(self.node, address)

    async def send_transaction(self, *args: Any, **kwargs: Any) -> AddTxResponse:
        return await _send.send_transaction(self.node, *args, **kwargs)

    async def send_transaction_by_address(self, *args: Any, **kwargs: Any) -> AddTxResponse:
        return await _send.send_transaction_by_address(self.node, *args, **kwargs)

    async def send_transaction_by_private_key(self, *args: Any, **kwargs: Any) -> AddTxResponse:
        return await _send.send_transaction_by_private_key(self.node, *args, **kwargs)

    async def post_user_content(self, *args: Any, **kwargs: Any) -> AddTxResponse:
        return await _send.post_user_content(self.node, *args, **kwargs)


__all__ = ["MmnClient"]
