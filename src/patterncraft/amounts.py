"""
Decimal amount parsing shared by every money-handling component.

Malformed and non-finite input is rejected with InvalidArgumentError so no
caller ever sees a raw decimal.InvalidOperation.
"""

from decimal import Decimal
from typing import Any, Union

from .errors import InvalidArgumentError

Amount = Union[Decimal, int, float, str]


def parse_amount(value: Any, *, argument: str = "amount") -> Decimal:
    """Parse `value` into a finite Decimal of any sign."""
    try:
        amount = Decimal(str(value))
    except ArithmeticError as exc:
        raise InvalidArgumentError(argument, value, expected="a decimal amount") from exc
    if not amount.is_finite():
        raise InvalidArgumentError(argument, value, expected="a finite amount")
    return amount


def to_amount(value: Any, *, argument: str = "amount") -> Decimal:
    amount = parse_amount(value, argument=argument)
    if amount <= 0:
        raise InvalidArgumentError(argument, value, expected="a positive amount")
    return amount


def to_non_negative_amount(value: Any, *, argument: str = "amount") -> Decimal:
    amount = parse_amount(value, argument=argument)
    if amount < 0:
        raise InvalidArgumentError(argument, value, expected="a non-negative amount")
    return amount
