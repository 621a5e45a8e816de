"""
mmn_sdk.tx
==========

Transaction helpers: build, encode, and send.

Submodules
----------
- build : `build_transfer_tx` plus extra-info JSON helpers.
- encode: Canonical signing payload, signature envelope and wire dicts.
- send  : Sign, self-verify and submit flows over a node client.

Typical usage
-------------
    from mmn_sdk.tx import build, encode, send
    from mmn_sdk.wallet import sign_tx

    tx = build.build_transfer_tx(TxType.TRANSFER_BY_KEY, sender, recipient, "1000000", nonce)
    signed = sign_tx(tx, kp.public_key, kp.seed)
    resp = await send.submit_signed(node, signed)
"""

from __future__ import annotations

import importlib
from types import ModuleType

# Re-export stable submodule namespaces
from . import build as build
from . import encode as encode

__all__ = ["build", "encode", "send"]


def __getattr__(name: str) -> ModuleType:
    # `send` depends on the wallet signer, which itself imports `encode`;
    # resolve it on first access to keep the import graph acyclic.
    if name == "send":
        return importlib.import_module("mmn_sdk.tx.send")
    raise AttributeError(f"module 'mmn_sdk.tx' has no attribute '{name}'")
