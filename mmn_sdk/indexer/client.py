"""
Client for the indexer REST API.

All paths are scoped by chain id:

    GET {endpoint}/{chain_id}/tx/{hash}/detail        -> data.transaction
    GET {endpoint}/{chain_id}/transactions?...        -> {meta, data}
    GET {endpoint}/{chain_id}/wallets/{wallet}/detail -> data

`get_transactions_by_wallet` takes a 1-based page (sent 0-based) and clamps
`limit` to 1..1000. The wallet filter picks the query key:

    TxFilter.ALL      -> wallet_address
    TxFilter.RECEIVED -> filter_to_address
    TxFilter.SENT     -> filter_from_address
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Literal, Mapping

from ..errors import TransportError, ValidationError
from ..rpc.rest import RestClient
from ..types.core import IndexedTransaction, TransactionPage, WalletDetail

DEFAULT_LIMIT = 50
MAX_LIMIT = 1000

SortOrder = Literal["asc", "desc"]


class TxFilter(IntEnum):
    ALL = 0
    RECEIVED = 1
    SENT = 2


_FILTER_KEYS = {
    TxFilter.ALL: "wallet_address",
    TxFilter.RECEIVED: "filter_to_address",
    TxFilter.SENT: "filter_from_address",
}


def _require_wallet(wallet: str) -> None:
    if not wallet:
        raise ValidationError("wallet address cannot be empty", field="wallet")


class IndexerClient:
    def __init__(self, rest: RestClient, chain_id: str) -> None:
        self.rest = rest
        self.chain_id = str(chain_id)

    @classmethod
    def from_url(cls, endpoint: str, chain_id: str, **kwargs: Any) -> "IndexerClient":
        return cls(RestClient(endpoint, **kwargs), chain_id)

    async def __aenter__(self) -> "IndexerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        await self.rest.aclose()

    async def _get_object(self, path: str, params: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
        res = await self.rest.get(path, params)
        if not isinstance(res, Mapping):
            raise TransportError("expected a JSON object", url=self.rest.url_for(path))
        return res

    async def get_transaction_by_hash(self, tx_hash: str) -> IndexedTransaction:
        path = f"{self.chain_id}/tx/{tx_hash}/detail"
        res = await self._get_object(path)
        data = res.get("data") or {}
        tx = data.get("transaction") if isinstance(data, Mapping) else None
        if not isinstance(tx, Mapping):
            raise TransportError("transaction detail missing", url=self.rest.url_for(path))
        return IndexedTransaction.from_json(tx)

    async def get_transactions_by_wallet(
        self,
        wallet: str,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        filter: TxFilter = TxFilter.ALL,
        sort_by: str = "transaction_timestamp",
        sort_order: SortOrder = "desc",
    ) -> TransactionPage:
        _require_wallet(wallet)
        page = max(page, 1)
        if limit <= 0:
            limit = DEFAULT_LIMIT
        limit = min(limit, MAX_LIMIT)
        params: Dict[str, Any] = {
            "page": page - 1,
            "limit": limit,
            "sort_by": sort_by,
            "sort_order": sort_order,
            _FILTER_KEYS[TxFilter(filter)]: wallet,
        }
        res = await self._get_object(f"{self.chain_id}/transactions", params)
        return TransactionPage.from_json(res)

    async def get_wallet_detail(self, wallet: str) -> WalletDetail:
        _require_wallet(wallet)
        path = f"{self.chain_id}/wallets/{wallet}/detail"
        res = await self._get_object(path)
        data = res.get("data")
        if not isinstance(data, Mapping):
            raise TransportError("wallet detail missing", url=self.rest.url_for(path))
        return WalletDetail.from_json(data)


__all__ = ["IndexerClient", "TxFilter", "DEFAULT_LIMIT", "MAX_LIMIT"]
