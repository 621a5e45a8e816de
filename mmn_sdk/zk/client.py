"""
Client for the zero-knowledge proof service.

    POST {endpoint}/prove          {user_id, address, ephemeral_pk, jwt}
                                   -> {"data": {"proof", "public_input"}, "error": ""}
    GET  {endpoint}/health/check   -> {"status": ...}

A non-empty `error` in the prove response raises RemoteRejected.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import RemoteRejected, TransportError
from ..rpc.rest import RestClient
from ..types.core import HealthCheckResponse, ZkProof

log = logging.getLogger(__name__)


class ZkClient:
    def __init__(self, rest: RestClient) -> None:
        self.rest = rest

    @classmethod
    def from_url(cls, endpoint: str, **kwargs: Any) -> "ZkClient":
        return cls(RestClient(endpoint, **kwargs))

    async def __aenter__(self) -> "ZkClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        await self.rest.aclose()

    async def get_zk_proof(self, user_id: str, address: str, ephemeral_pk: str, jwt: str) -> ZkProof:
        """Request a proof binding `ephemeral_pk` to the identity in `jwt`."""
        body = {"user_id": user_id, "address": address, "ephemeral_pk": ephemeral_pk, "jwt": jwt}
        res = await self.rest.post("prove", body)
        if not isinstance(res, Mapping):
            raise TransportError("prove: expected a JSON object", url=self.rest.url_for("prove"))
        if res.get("error"):
            log.warning("proof request rejected for address=%s: %s", address, res["error"])
            raise RemoteRejected(str(res["error"]), url=self.rest.url_for("prove"), data=dict(res))
        data = res.get("data")
        if not isinstance(data, Mapping):
            raise TransportError("prove: response has no data", url=self.rest.url_for("prove"))
        return ZkProof.from_json(data)

    async def check_health(self) -> HealthCheckResponse:
        res = await self.rest.get("health/check")
        if not isinstance(res, Mapping):
            raise TransportError("health/check: expected a JSON object", url=self.rest.url_for("health/check"))
        return HealthCheckResponse.from_json(res)


__all__ = ["ZkClient"]
