"""
Utility helpers for the Python SDK.

Re-exports:
- bytes: in-place zeroing of secret buffers
"""

from .bytes import BytesLike, zeroize

__all__ = [
    "BytesLike",
    "zeroize",
]
