"""
Typed error classes for the Python SDK.

The taxonomy splits caller mistakes from remote failures:

- ValidationError  bad address / amount / extra-info (field-level detail)
- DecodeError      malformed base58 / JSON / base64 on decode paths
- CryptoError      unsupported key length, signing failure, entropy failure
- EncodingError    fatal wire-format encoding problem (e.g. PKCS#8 wrap)
- TransportError   network / HTTP / RPC failure, with Timeout and RemoteRejected

Everything derives from `MmnSdkError` so callers can catch the whole family.
Signature verification never raises; see `mmn_sdk.wallet.signer.verify_tx`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

__all__ = [
    "MmnSdkError",
    "ValidationError",
    "InvalidAddress",
    "InvalidAmount",
    "ExtraInfoEncodingError",
    "DecodeError",
    "CryptoError",
    "EntropyUnavailable",
    "EncodingError",
    "TransportError",
    "Timeout",
    "RemoteRejected",
    "RpcError",
    "JsonRpcCode",
    "from_jsonrpc_error",
]


class MmnSdkError(Exception):
    """Base class for all SDK errors."""


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 standard codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server errors (implementation-defined range: -32099 to -32000)
    SERVER_ERROR = -32000


# --- Caller input ------------------------------------------------------------


@dataclass(slots=True)
class ValidationError(MmnSdkError):
    """Raised by the transaction builder when a caller-supplied field is invalid."""

    message: str
    field: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" [{self.field}]" if self.field else ""
        return f"{type(self).__name__}{where}: {self.message}"


class InvalidAddress(ValidationError):
    """Address is not base58 or does not decode to exactly 32 bytes."""


class InvalidAmount(ValidationError):
    """Amount is not a positive base-10 integer."""


class ExtraInfoEncodingError(ValidationError):
    """Extra info could not be serialized to (or parsed from) JSON text."""


# --- Codec / crypto ----------------------------------------------------------


@dataclass(slots=True)
class DecodeError(MmnSdkError):
    """Malformed base58 / JSON / base64 input on a decode path."""

    message: str
    value: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.value is None:
            return f"DecodeError: {self.message}"
        shown = self.value if len(self.value) <= 64 else self.value[:61] + "..."
        return f"DecodeError: {self.message} (input={shown!r})"


@dataclass(slots=True)
class CryptoError(MmnSdkError):
    """Key material of the wrong shape, or a signing failure."""

    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{type(self).__name__}: {self.message}"


class EntropyUnavailable(CryptoError):
    """No acceptable entropy source could produce key material."""


@dataclass(slots=True)
class EncodingError(MmnSdkError):
    """Fatal encoding failure, e.g. PKCS#8 wrapping of a non-32-byte seed."""

    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"EncodingError: {self.message}"


# --- Transport ---------------------------------------------------------------


@dataclass(slots=True)
class TransportError(MmnSdkError):
    """
    Raised when talking to a remote service fails.

    Fields:
      - message: human-readable description
      - url: endpoint that was contacted (if known)
      - http_status: HTTP status code (if a response was received)
    """

    message: str
    url: Optional[str] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"{type(self).__name__}: {self.message}"]
        if self.url:
            parts.append(f"url={self.url}")
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        return " ".join(parts)


class Timeout(TransportError):
    """The request did not complete within the configured timeout."""


@dataclass(slots=True)
class RemoteRejected(TransportError):
    """
    The remote service answered, but refused the request
    (e.g. add-tx returned ok=false, or the proof service returned an error).
    """

    code: Optional[int] = None
    data: Optional[Any] = None


@dataclass(slots=True)
class RpcError(RemoteRejected):
    """Raised when a JSON-RPC call returns an error object."""

    method: Optional[str] = None
    request_id: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"RPC[{self.method or '-'}] code={self.code} msg={self.message!r}"]
        if self.request_id is not None:
            parts.append(f"id={self.request_id}")
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)

    @property
    def code_enum(self) -> Optional[JsonRpcCode]:
        try:
            return JsonRpcCode(self.code)
        except (TypeError, ValueError):
            return None


def from_jsonrpc_error(
    err_obj: Dict[str, Any],
    *,
    method: Optional[str] = None,
    request_id: Optional[Any] = None,
    url: Optional[str] = None,
    http_status: Optional[int] = None,
) -> RpcError:
    """
    Convert a JSON-RPC error object into RpcError.

    `err_obj` should resemble: {"code": int, "message": str, "data": any?}
    """
    if not isinstance(err_obj, dict):
        err_obj = {"message": str(err_obj)}
    try:
        code = int(err_obj.get("code", JsonRpcCode.SERVER_ERROR))
    except (TypeError, ValueError):
        code = int(JsonRpcCode.SERVER_ERROR)
    return RpcError(
        message=str(err_obj.get("message", "Unknown JSON-RPC error")),
        url=url,
        http_status=http_status,
        code=code,
        data=err_obj.get("data"),
        method=method,
        request_id=request_id,
    )
