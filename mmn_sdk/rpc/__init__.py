"""
mmn_sdk.rpc
-----------

Lightweight async HTTP helpers.

This package exposes:
- RpcClient:  JSON-RPC 2.0 client for the ledger node (see .http)
- RestClient: JSON REST client for the proof service and indexer (see .rest)

Import style:

    from mmn_sdk.rpc import RpcClient, RestClient
    rpc = RpcClient(url="http://localhost:8001")
    rest = RestClient(base_url="http://localhost:8282")

Both are thin wrappers over httpx.AsyncClient.
"""

from __future__ import annotations

from .http import RpcClient
from .rest import RestClient

__all__ = ["RpcClient", "RestClient"]
