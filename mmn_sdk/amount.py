"""
mmn_sdk.amount
==============

Amount helpers. Amounts are arbitrary-precision non-negative integers in base
units; on the wire they travel as base-10 strings with no sign and no leading
zeros.

The native token uses 6 decimals: 1 token == 1_000_000 base units.
"""

from __future__ import annotations

from typing import Union

from mmn_sdk.errors import InvalidAmount

NATIVE_DECIMALS = 6

AmountLike = Union[int, str]

__all__ = [
    "NATIVE_DECIMALS",
    "AmountLike",
    "parse_amount",
    "format_amount",
    "scale_amount_to_decimals",
    "has_sufficient_balance",
]


def parse_amount(value: AmountLike, field: str = "amount") -> int:
    """
    Parse a non-negative amount from an int or a decimal string.

    Strings must be ASCII digits only ("0042" is accepted and equals 42).
    Bools, floats, signs, whitespace and empty strings raise InvalidAmount.
    """
    if isinstance(value, bool):
        raise InvalidAmount("amount must be an integer, not bool", field=field)
    if isinstance(value, int):
        if value < 0:
            raise InvalidAmount("amount must be non-negative", field=field)
        return value
    if isinstance(value, str):
        if not value or not (value.isascii() and value.isdigit()):
            raise InvalidAmount(f"amount must be a base-10 digit string, got {value!r}", field=field)
        return int(value, 10)
    raise InvalidAmount(f"unsupported amount type {type(value).__name__}", field=field)


def format_amount(value: int) -> str:
    """Base-10 text of a non-negative amount."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidAmount("amount must be a non-negative int", field="amount")
    return str(value)


def scale_amount_to_decimals(amount: AmountLike, decimals: int = NATIVE_DECIMALS) -> int:
    """Whole tokens -> base units (amount * 10**decimals)."""
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    return parse_amount(amount) * (10 ** decimals)


def has_sufficient_balance(
    balance: AmountLike, amount: AmountLike, decimals: int = NATIVE_DECIMALS
) -> bool:
    """
    True when `balance` covers `amount`.

    `balance` is always base units. A str `amount` is taken as base units; an
    int `amount` is taken as whole tokens and scaled by `decimals` first.
    """
    have = parse_amount(balance, field="balance")
    if isinstance(amount, str):
        need = parse_amount(amount)
    else:
        need = scale_amount_to_decimals(amount, decimals)
    return have >= need
