"""
REST JSON client (async, httpx) used by the proof-service and indexer clients.

Same error mapping and retry policy as :class:`mmn_sdk.rpc.http.RpcClient`;
non-2xx responses raise TransportError with the status and a body excerpt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from ..errors import TransportError
from .http import JSON, HttpTransportMixin, _json_body, default_headers

log = logging.getLogger(__name__)


@dataclass
class RestClient(HttpTransportMixin):
    base_url: str
    timeout: float = 30.0
    max_retries: int = 0
    backoff_base: float = 0.15
    backoff_factor: float = 1.8
    backoff_jitter: float = 0.2
    headers: Optional[Mapping[str, str]] = None
    transport: Optional[httpx.AsyncBaseTransport] = None
    _client: httpx.AsyncClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers=default_headers(self.headers),
            transport=self.transport,
        )

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> JSON:
        url = self.url_for(path)
        log.debug("GET %s params=%s", url, dict(params or {}))
        r = await self._send_with_retries(lambda: self._client.get(url, params=params), url)
        return self._handle_response(r, url)

    async def post(self, path: str, body: Any = None) -> JSON:
        url = self.url_for(path)
        log.debug("POST %s", url)
        r = await self._send_with_retries(lambda: self._client.post(url, json=body), url)
        return self._handle_response(r, url)

    @staticmethod
    def _handle_response(r: httpx.Response, url: str) -> JSON:
        if not r.is_success:
            raise TransportError(f"HTTP {r.status_code}: {r.text[:256]}", url=url, http_status=r.status_code)
        return _json_body(r, url)


__all__ = ["RestClient"]
