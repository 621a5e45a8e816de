"""
mmn_sdk.indexer
===============

Indexer REST client (see .client).
"""

from .client import IndexerClient, TxFilter

__all__ = ["IndexerClient", "TxFilter"]
