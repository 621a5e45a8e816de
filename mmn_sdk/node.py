"""
mmn_sdk.node
============

Typed wrapper over the ledger node's JSON-RPC methods.

Method map
----------
    check_health()                   health.check
    add_tx(signed)                   tx.addtx
    get_account(address)             account.getaccount
    get_current_nonce(address, tag)  account.getcurrentnonce
    get_tx_by_hash(tx_hash)          tx.gettxbyhash
    get_tx_history(address, ...)     account.gettxhistory

Failures are never collapsed into placeholder values: a missing account or an
unreachable node raises the typed transport error, which is also logged.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Literal, Mapping

from .errors import RemoteRejected, TransportError
from .rpc.http import RpcClient
from .tx.encode import signed_tx_to_wire
from .types.core import Account, AddTxResponse, HealthCheckResponse, SignedTx, TxHistory, TxInfo

log = logging.getLogger(__name__)

NonceTag = Literal["latest", "pending"]


def _as_dict(result: Any, method: str) -> Mapping[str, Any]:
    if not isinstance(result, Mapping):
        raise TransportError(f"{method}: expected an object result, got {type(result).__name__}")
    return result


class NodeClient:
    """Ledger node client. Owns (or borrows) an :class:`RpcClient`."""

    def __init__(self, rpc: RpcClient) -> None:
        self.rpc = rpc

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "NodeClient":
        return cls(RpcClient(url, **kwargs))

    async def __aenter__(self) -> "NodeClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        await self.rpc.aclose()

    # --- health --------------------------------------------------------------

    async def check_health(self) -> HealthCheckResponse:
        res = await self.rpc.request("health.check")
        return HealthCheckResponse.from_json(_as_dict(res, "health.check"))

    # --- transactions ----------------------------------------------------------

    async def add_tx(self, signed: SignedTx) -> AddTxResponse:
        """
        Submit a signed transaction.

        `ok=False` in the response raises RemoteRejected carrying the node's
        `error` text; otherwise the response (with `tx_hash`) is returned.
        """
        res = await self.rpc.request("tx.addtx", dict(signed_tx_to_wire(signed)))
        resp = AddTxResponse.from_json(_as_dict(res, "tx.addtx"))
        if not resp.ok:
            log.warning("tx rejected sender=%s nonce=%d: %s", signed.tx.sender, signed.tx.nonce, resp.error)
            raise RemoteRejected(resp.error or "transaction rejected", url=self.rpc.url, data=dict(res))
        log.info("tx submitted hash=%s sender=%s nonce=%d", resp.tx_hash, signed.tx.sender, signed.tx.nonce)
        return resp

    async def get_tx_by_hash(self, tx_hash: str) -> TxInfo:
        res = _as_dict(await self.rpc.request("tx.gettxbyhash", {"tx_hash": tx_hash}), "tx.gettxbyhash")
        # some node versions nest the record under "tx"
        body = res.get("tx") if isinstance(res.get("tx"), Mapping) else res
        return TxInfo.from_json(body)

    # --- accounts --------------------------------------------------------------

    async def get_account(self, address: str) -> Account:
        try:
            res = await self.rpc.request("account.getaccount", {"address": address})
        except TransportError as e:
            log.warning("account query failed address=%s: %s", address, e)
            raise
        return Account.from_json(_as_dict(res, "account.getaccount"))

    async def get_current_nonce(self, address: str, tag: NonceTag = "latest") -> int:
        res = _as_dict(
            await self.rpc.request("account.getcurrentnonce", {"address": address, "tag": tag}),
            "account.getcurrentnonce",
        )
        if res.get("error"):
            raise RemoteRejected(str(res["error"]), url=self.rpc.url, data=dict(res))
        return int(res.get("nonce") or 0)

    async def get_tx_history(
        self,
        address: str,
        limit: int = 10,
        offset: int = 0,
        filter: int = 0,
    ) -> TxHistory:
        params: Dict[str, Any] = {"address": address, "limit": limit, "offset": offset, "filter": filter}
        res = await self.rpc.request("account.gettxhistory", params)
        return TxHistory.from_json(_as_dict(res, "account.gettxhistory"))


__all__ = ["NodeClient", "NonceTag"]
