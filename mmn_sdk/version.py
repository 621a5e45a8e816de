"""
Version of the MMN Python SDK and the User-Agent derived from it.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"


def user_agent() -> str:
    """Default User-Agent sent by the HTTP clients."""
    return f"mmn-sdk-python/{__version__}"


__all__ = ["__version__", "user_agent"]
