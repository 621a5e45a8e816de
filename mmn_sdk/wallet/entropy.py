"""
mmn_sdk.wallet.entropy
======================

Ranked entropy sources for key generation.

Sources are tried in rank order; every SECURE source is tried before any
WEAK one. The chosen source is returned with the bytes so callers can tell
(and surface) when a key was made from weak entropy.

Default chain
-------------
- ``os-urandom``   SECURE  `os.urandom`, the OS CSPRNG.
- ``lcg-fallback`` WEAK    32-bit LCG stepped from the clock, mixed with
                           `random.random()` and SHA-256 per byte. Only for
                           environments with no OS randomness at all.
"""

from __future__ import annotations

import hashlib
import logging
import os
import random
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from mmn_sdk.errors import EntropyUnavailable
from mmn_sdk.types.core import EntropyTrust
from mmn_sdk.utils.bytes import zeroize

log = logging.getLogger(__name__)

__all__ = [
    "EntropySource",
    "OS_URANDOM",
    "LCG_FALLBACK",
    "DEFAULT_SOURCES",
    "lcg_fallback_bytes",
    "draw_entropy",
]


@dataclass(frozen=True)
class EntropySource:
    name: str
    trust: EntropyTrust
    read: Callable[[int], bytes]


# --- LCG fallback ------------------------------------------------------------

_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 1 << 32
_TIMESTAMP_MULTIPLIER = 2654435761


def lcg_fallback_bytes(n: int) -> bytes:
    """Weak pseudo-random bytes. Predictable to anyone who can guess the clock."""
    now = int(time.time() * 1000)
    seed = (now + time.perf_counter_ns() + int(random.random() * _LCG_MODULUS)) % _LCG_MODULUS
    out = bytearray()
    for i in range(n):
        seed = (seed * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        seed ^= ((now + i) * _TIMESTAMP_MULTIPLIER) % _LCG_MODULUS
        seed ^= int(random.random() * _LCG_MODULUS)
        digest = hashlib.sha256(f"{seed}{i}{now}".encode("ascii")).hexdigest()
        seed ^= int(digest[:8], 16)
        out.append((seed >> 24) & 0xFF)
    return bytes(out)


OS_URANDOM = EntropySource("os-urandom", EntropyTrust.SECURE, os.urandom)
LCG_FALLBACK = EntropySource("lcg-fallback", EntropyTrust.WEAK, lcg_fallback_bytes)

DEFAULT_SOURCES: Tuple[EntropySource, ...] = (OS_URANDOM, LCG_FALLBACK)


# --- Selection ---------------------------------------------------------------


def _ranked(sources: Iterable[EntropySource]) -> Sequence[EntropySource]:
    # stable: keeps caller order within each trust level
    return sorted(sources, key=lambda s: -int(s.trust))


def draw_entropy(
    n: int,
    sources: Optional[Iterable[EntropySource]] = None,
    *,
    allow_weak: bool = True,
) -> Tuple[bytearray, EntropySource]:
    """
    Read `n` bytes from the best available source.

    Returns (buffer, source). The buffer is a fresh bytearray owned by the
    caller, who must zero it when done. A source that raises or returns the
    wrong length is skipped. Raises EntropyUnavailable when nothing usable is
    left, or when only WEAK sources remain and `allow_weak` is False.
    """
    if n <= 0:
        raise ValueError("n must be positive")
    for src in _ranked(DEFAULT_SOURCES if sources is None else sources):
        if src.trust is EntropyTrust.WEAK and not allow_weak:
            raise EntropyUnavailable(f"no secure entropy source available (refusing weak source {src.name!r})")
        try:
            data = src.read(n)
        except Exception as e:  # noqa: BLE001 - any failing source falls through to the next
            log.debug("entropy source %s failed: %s", src.name, e)
            continue
        buf = bytearray(data)
        if len(buf) != n:
            log.debug("entropy source %s returned %d bytes, wanted %d", src.name, len(buf), n)
            zeroize(buf)
            continue
        if src.trust is EntropyTrust.WEAK:
            log.warning(
                "using WEAK entropy source %s for key generation; keys may be predictable",
                src.name,
            )
        return buf, src
    raise EntropyUnavailable("all entropy sources failed")
