"""
mmn_sdk.types
=============

Datatypes shared across the SDK. Everything lives in :mod:`mmn_sdk.types.core`
and is re-exported here:

    from mmn_sdk.types import Tx, TxType, SignedTx
"""

from __future__ import annotations

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all

__all__ = ["core", *_core_all]
