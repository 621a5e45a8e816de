"""
SDK configuration: node / proof-service / indexer endpoints, chain id, timeouts.

- Loads sane defaults and supports overrides via environment variables (MMN_*).
- Provides helpers for building HTTP headers and validating endpoints.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .version import user_agent as _default_user_agent

_DEFAULT_NODE = "http://127.0.0.1:8001"
_DEFAULT_ZK = "http://127.0.0.1:8282"
_DEFAULT_INDEXER = "http://127.0.0.1:8080"
_DEFAULT_CHAIN_ID = "1"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...] = ("http", "https")) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ValueError(f"URL must start with {allowed}, got: {url!r}")
    return url


@dataclass(slots=True)
class SDKConfig:
    # Endpoints
    node_url: str = _DEFAULT_NODE
    zk_url: str = _DEFAULT_ZK
    indexer_url: str = _DEFAULT_INDEXER
    # Indexer path segment, e.g. "1" -> {indexer_url}/1/transactions
    chain_id: str = _DEFAULT_CHAIN_ID
    # HTTP behavior
    request_timeout: float = 30.0
    max_retries: int = 0
    # Headers / identity
    user_agent: str = field(default_factory=_default_user_agent)

    def __post_init__(self) -> None:
        for url in (self.node_url, self.zk_url, self.indexer_url):
            _ensure_scheme(url)
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

    @classmethod
    def from_env(cls, prefix: str = "MMN_") -> "SDKConfig":
        """
        Create config from environment variables:

        MMN_NODE_URL      (http/https) ledger JSON-RPC endpoint
        MMN_ZK_URL        (http/https) proof service
        MMN_INDEXER_URL   (http/https) indexer REST API
        MMN_CHAIN_ID      (str) indexer chain id
        MMN_TIMEOUT       (float seconds)
        MMN_MAX_RETRIES   (int) retries on transient HTTP statuses
        MMN_USER_AGENT    (str)
        """
        return cls(
            node_url=_env(f"{prefix}NODE_URL") or _DEFAULT_NODE,
            zk_url=_env(f"{prefix}ZK_URL") or _DEFAULT_ZK,
            indexer_url=_env(f"{prefix}INDEXER_URL") or _DEFAULT_INDEXER,
            chain_id=_env(f"{prefix}CHAIN_ID") or _DEFAULT_CHAIN_ID,
            request_timeout=float(_env(f"{prefix}TIMEOUT", "30.0")),
            max_retries=int(_env(f"{prefix}MAX_RETRIES", "0")),
            user_agent=_env(f"{prefix}USER_AGENT") or _default_user_agent(),
        )

    @classmethod
    def with_overrides(cls, base: Optional["SDKConfig"] = None, **overrides: Any) -> "SDKConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        data["chain_id"] = str(data["chain_id"])
        return cls(**data)

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_url": self.node_url,
            "zk_url": self.zk_url,
            "indexer_url": self.indexer_url,
            "chain_id": self.chain_id,
            "request_timeout": float(self.request_timeout),
            "max_retries": int(self.max_retries),
            "user_agent": self.user_agent,
        }


__all__ = ["SDKConfig"]
