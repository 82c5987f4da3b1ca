from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
# Balances within this distance of zero count as settled.
EPSILON = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a money amount")
    if isinstance(value, int):
        return Decimal(value)
    # str() keeps floats at their shortest repr: 0.1 -> Decimal("0.1").
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise TypeError(f"not a money amount: {value!r}") from e


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def is_settled(value: Decimal) -> bool:
    return abs(value) <= EPSILON
