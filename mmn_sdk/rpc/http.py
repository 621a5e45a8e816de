from __future__ import annotations

"""
HTTP JSON-RPC client (async, httpx).

- One `httpx.AsyncClient` per RpcClient; close it with `aclose()` or use
  `async with`.
- Request ids come from the instance's own `id_sequence` iterator. Pass a
  custom iterator to make ids deterministic in tests.
- Retries only transient HTTP statuses (429/502/503/504) and connect errors,
  and only when `max_retries` > 0 (default 0).

Error mapping:
    httpx timeout                  -> mmn_sdk.errors.Timeout
    network / connect failure      -> TransportError
    non-2xx without JSON-RPC error -> TransportError(http_status=...)
    JSON-RPC error object          -> RpcError (a RemoteRejected)

Example:
    from mmn_sdk.rpc.http import RpcClient
    async with RpcClient("http://localhost:8001") as rpc:
        health = await rpc.request("health.check")
"""

import asyncio
import json
import logging
import random
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Awaitable, Callable, Dict, Iterator, Mapping, Optional, Union

import httpx

from ..errors import Timeout, TransportError, from_jsonrpc_error
from ..version import user_agent

log = logging.getLogger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Optional[Mapping[str, Any]]


def _is_retriable_http(status: int) -> bool:
    # Typical transient HTTP statuses: 429/502/503/504
    return status in (429, 502, 503, 504)


def _jitter_backoff(base: float, factor: float, attempt: int, jitter: float) -> float:
    # Exponential backoff with jitter in [0, jitter]
    return base * (factor ** max(attempt - 1, 0)) + random.random() * jitter


def default_headers(extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    merged: Dict[str, str] = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": user_agent(),
    }
    if extra:
        merged.update(dict(extra))
    return merged


class _Retryable(Exception):
    """Internal marker: a transient failure worth another attempt."""

    def __init__(self, error: TransportError) -> None:
        super().__init__(str(error))
        self.error = error


class HttpTransportMixin:
    """Retry loop and httpx error mapping shared by the JSON-RPC and REST clients."""

    max_retries: int
    backoff_base: float
    backoff_factor: float
    backoff_jitter: float
    _client: httpx.AsyncClient

    async def _send_with_retries(self, send: Callable[[], Awaitable[httpx.Response]], url: str) -> httpx.Response:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._send_once(send, url)
            except _Retryable as r:
                if attempt > self.max_retries:
                    raise r.error from r.__cause__
                delay = _jitter_backoff(self.backoff_base, self.backoff_factor, attempt, self.backoff_jitter)
                log.debug("retrying %s in %.2fs (attempt %d): %s", url, delay, attempt, r.error)
                await asyncio.sleep(delay)

    @staticmethod
    async def _send_once(send: Callable[[], Awaitable[httpx.Response]], url: str) -> httpx.Response:
        try:
            r = await send()
        except httpx.TimeoutException as e:
            raise Timeout(f"request timed out: {e}", url=url) from e
        except httpx.ConnectError as e:
            raise _Retryable(TransportError(f"connect failed: {e}", url=url)) from e
        except httpx.HTTPError as e:
            raise TransportError(f"network error: {e}", url=url) from e
        if _is_retriable_http(r.status_code):
            raise _Retryable(TransportError(f"HTTP {r.status_code}", url=url, http_status=r.status_code))
        return r

    async def aclose(self) -> None:
        await self._client.aclose()


def _json_body(r: httpx.Response, url: str) -> JSON:
    try:
        return r.json()
    except ValueError as e:
        raise TransportError(
            f"non-JSON response: {r.text[:256]!r}", url=url, http_status=r.status_code
        ) from e


@dataclass
class RpcClient(HttpTransportMixin):
    """Asynchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: float = 30.0
    max_retries: int = 0
    backoff_base: float = 0.15
    backoff_factor: float = 1.8
    backoff_jitter: float = 0.2
    headers: Optional[Mapping[str, str]] = None
    id_sequence: Iterator[int] = field(default_factory=lambda: count(1))
    transport: Optional[httpx.AsyncBaseTransport] = None
    _client: httpx.AsyncClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers=default_headers(self.headers),
            transport=self.transport,
        )

    # --- context manager -------------------------------------------------

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    # --- public API ------------------------------------------------------

    async def request(self, method: str, params: Params = None) -> JSON:
        """Perform a single JSON-RPC request and return `result`, or raise."""
        payload = self._make_payload(method, params)
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        log.debug("rpc -> %s id=%s", method, payload["id"])

        r = await self._send_with_retries(lambda: self._client.post(self.url, content=body), self.url)
        return self._handle_response(r, method, payload["id"])

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": next(self.id_sequence),
            "method": method,
            "params": dict(params) if params is not None else {},
        }

    def _handle_response(self, r: httpx.Response, method: str, request_id: Any) -> JSON:
        resp = _json_body(r, self.url)
        if isinstance(resp, dict) and resp.get("error") is not None:
            err = from_jsonrpc_error(
                resp["error"], method=method, request_id=request_id, url=self.url, http_status=r.status_code
            )
            log.debug("rpc <- %s id=%s error code=%s", method, request_id, err.code)
            raise err
        if not r.is_success:
            raise TransportError(f"HTTP {r.status_code}", url=self.url, http_status=r.status_code)
        if not isinstance(resp, dict) or "result" not in resp:
            raise TransportError("malformed JSON-RPC response", url=self.url, http_status=r.status_code)
        log.debug("rpc <- %s id=%s ok", method, request_id)
        return resp["result"]


__all__ = ["RpcClient", "HttpTransportMixin", "default_headers"]
