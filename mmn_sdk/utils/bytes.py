from __future__ import annotations

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def zeroize(buf: Union[bytearray, memoryview, None]) -> None:
    """
    Overwrite a mutable buffer with zeros in place.

    Immutable `bytes` cannot be wiped; secret material must therefore live in
    bytearrays for as long as this SDK handles it. Passing None is a no-op so
    the helper can be used unconditionally in `finally` blocks.
    """
    if buf is None:
        return
    if isinstance(buf, memoryview):
        if buf.readonly:
            raise TypeError("cannot zeroize a read-only buffer")
        flat = buf.cast("B")
        flat[:] = bytes(flat.nbytes)
        return
    if not isinstance(buf, bytearray):
        raise TypeError(f"cannot zeroize immutable {type(buf).__name__}")
    buf[:] = bytes(len(buf))


__all__ = [
    "BytesLike",
    "zeroize",
]
