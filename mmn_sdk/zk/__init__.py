"""
mmn_sdk.zk
==========

Zero-knowledge proof service client (see .client).
"""

from .client import ZkClient

__all__ = ["ZkClient"]
