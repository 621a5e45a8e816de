from __future__ import annotations

import json
import logging

import httpx
import pytest
import respx

from mmn_sdk.errors import RemoteRejected, RpcError, TransportError
from mmn_sdk.node import NodeClient
from mmn_sdk.tx.build import build_transfer_tx
from mmn_sdk.types.core import HealthStatus, SignedTx, TxStatus, TxType

NODE = "http://node.test:8001"


def _result(result):
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


def _sent(route):
    return json.loads(route.calls.last.request.content)


@pytest.fixture()
def signed(alice, bob) -> SignedTx:
    tx = build_transfer_tx(TxType.USER_CONTENT, alice, bob, "250", 7, timestamp=1_700_000_000, text_data="hi")
    return SignedTx(tx=tx, signature="sig58")


@pytest.mark.asyncio
@respx.mock
async def test_add_tx_sends_wire_shape(signed) -> None:
    route = respx.post(NODE).mock(return_value=_result({"ok": True, "tx_hash": "abc"}))
    async with NodeClient.from_url(NODE) as node:
        resp = await node.add_tx(signed)

    assert resp.ok and resp.tx_hash == "abc"
    body = _sent(route)
    assert body["method"] == "tx.addtx"
    params = body["params"]
    assert set(params) == {"tx_msg", "signature"}
    assert params["signature"] == "sig58"
    assert params["tx_msg"]["amount"] == "250"
    assert params["tx_msg"]["type"] == 2
    assert params["tx_msg"]["nonce"] == 7


@pytest.mark.asyncio
@respx.mock
async def test_add_tx_rejected(signed, caplog) -> None:
    respx.post(NODE).mock(return_value=_result({"ok": False, "error": "nonce too low"}))
    async with NodeClient.from_url(NODE) as node:
        with caplog.at_level(logging.WARNING, logger="mmn_sdk.node"):
            with pytest.raises(RemoteRejected) as ei:
                await node.add_tx(signed)
    assert "nonce too low" in ei.value.message
    assert ei.value.data["ok"] is False
    assert any("rejected" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
@respx.mock
async def test_get_account(alice) -> None:
    route = respx.post(NODE).mock(
        return_value=_result({"address": alice, "balance": "18446744073709551621", "nonce": 4, "decimals": 6})
    )
    async with NodeClient.from_url(NODE) as node:
        acct = await node.get_account(alice)
    assert _sent(route)["params"] == {"address": alice}
    assert acct.balance == 2**64 + 5
    assert acct.nonce == 4 and acct.decimals == 6


@pytest.mark.asyncio
@respx.mock
async def test_get_account_failure_is_raised_not_masked(alice, caplog) -> None:
    respx.post(NODE).mock(
        return_value=httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "not found"}})
    )
    async with NodeClient.from_url(NODE) as node:
        with caplog.at_level(logging.WARNING, logger="mmn_sdk.node"):
            with pytest.raises(RpcError):
                await node.get_account(alice)
    assert any(alice in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
@respx.mock
async def test_get_account_unreachable(alice) -> None:
    respx.post(NODE).mock(side_effect=httpx.ConnectError)
    async with NodeClient.from_url(NODE) as node:
        with pytest.raises(TransportError):
            await node.get_account(alice)


@pytest.mark.asyncio
@respx.mock
async def test_get_current_nonce(alice) -> None:
    route = respx.post(NODE).mock(return_value=_result({"address": alice, "nonce": 12, "tag": "pending"}))
    async with NodeClient.from_url(NODE) as node:
        assert await node.get_current_nonce(alice, "pending") == 12
    body = _sent(route)
    assert body["method"] == "account.getcurrentnonce"
    assert body["params"] == {"address": alice, "tag": "pending"}


@pytest.mark.asyncio
@respx.mock
async def test_get_current_nonce_error_field(alice) -> None:
    respx.post(NODE).mock(return_value=_result({"nonce": 0, "error": "unknown account"}))
    async with NodeClient.from_url(NODE) as node:
        with pytest.raises(RemoteRejected):
            await node.get_current_nonce(alice)


@pytest.mark.asyncio
@respx.mock
async def test_check_health() -> None:
    respx.post(NODE).mock(
        return_value=_result(
            {"status": "SERVING", "node_id": "n1", "current_slot": "42", "block_height": 40, "mempool_size": 3, "version": "1.2"}
        )
    )
    async with NodeClient.from_url(NODE) as node:
        health = await node.check_health()
    assert health.status is HealthStatus.SERVING and health.serving
    assert health.current_slot == 42 and health.block_height == 40
    assert health.version == "1.2"


@pytest.mark.parametrize("raw, expected", [(2, HealthStatus.NOT_SERVING), ("weird", HealthStatus.UNKNOWN), (None, HealthStatus.UNKNOWN)])
def test_health_status_parse(raw, expected) -> None:
    assert HealthStatus.parse(raw) is expected


@pytest.mark.asyncio
@respx.mock
async def test_get_tx_by_hash_nested(alice, bob) -> None:
    route = respx.post(NODE).mock(
        return_value=_result(
            {"tx": {"sender": alice, "recipient": bob, "amount": "5", "timestamp": 9, "status": 2, "tx_hash": "h1"}}
        )
    )
    async with NodeClient.from_url(NODE) as node:
        info = await node.get_tx_by_hash("h1")
    assert _sent(route)["params"] == {"tx_hash": "h1"}
    assert info.amount == 5 and info.status is TxStatus.FINALIZED and info.tx_hash == "h1"


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize(
    "raw, expected",
    [(7, None), ("CONFIRMED", TxStatus.CONFIRMED), ("failed", TxStatus.FAILED), ("2", TxStatus.FINALIZED)],
)
async def test_get_tx_by_hash_tolerates_status_shapes(alice, bob, raw, expected) -> None:
    respx.post(NODE).mock(
        return_value=_result({"sender": alice, "recipient": bob, "amount": "5", "status": raw, "tx_hash": "h2"})
    )
    async with NodeClient.from_url(NODE) as node:
        info = await node.get_tx_by_hash("h2")
    assert info.status is expected and info.tx_hash == "h2"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, TxStatus.PENDING),
        ("", TxStatus.PENDING),
        (3, TxStatus.FAILED),
        (TxStatus.CONFIRMED, TxStatus.CONFIRMED),
        (" finalized ", TxStatus.FINALIZED),
        (True, None),
        (-1, None),
        ("weird", None),
        (1.5, None),
    ],
)
def test_tx_status_parse(raw, expected) -> None:
    assert TxStatus.parse(raw) is expected


@pytest.mark.asyncio
@respx.mock
async def test_get_tx_history(alice, bob) -> None:
    route = respx.post(NODE).mock(
        return_value=_result({"total": 2, "txs": [{"sender": alice, "recipient": bob, "amount": "1", "timestamp": 1}] * 2})
    )
    async with NodeClient.from_url(NODE) as node:
        hist = await node.get_tx_history(alice, limit=2, offset=4, filter=1)
    assert _sent(route)["params"] == {"address": alice, "limit": 2, "offset": 4, "filter": 1}
    assert hist.total == 2 and len(hist.txs) == 2


@pytest.mark.asyncio
@respx.mock
async def test_non_object_result_is_transport_error(alice) -> None:
    respx.post(NODE).mock(return_value=_result([1, 2]))
    async with NodeClient.from_url(NODE) as node:
        with pytest.raises(TransportError):
            await node.get_tx_history(alice)
