"""
Discount Strategies (Open/Closed)

New discount types plug in by registering a strategy; DiscountCalculator
never changes.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from functools import partial
from typing import Any, Optional

from ..amounts import Amount, parse_amount
from ..composition import Registry
from ..errors import InvalidArgumentError

CENTS = Decimal("0.01")


class DiscountStrategy(ABC):
    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def calculate_discount(self, amount: Decimal) -> Decimal:
        pass


class PercentageDiscount(DiscountStrategy):
    """Flat percentage of the order amount."""

    label = "Custom"
    rate = Decimal("0")

    def __init__(self, rate: Optional[Amount] = None, label: Optional[str] = None):
        if rate is not None:
            value = parse_amount(rate, argument="rate")
            if not Decimal("0") <= value <= Decimal("1"):
                raise InvalidArgumentError("rate", rate, expected="a fraction between 0 and 1")
            self.rate = value
        if label is not None:
            self.label = label

    @property
    def description(self) -> str:
        return f"{self.label} ({self.rate * 100:.0f}% discount)"

    def calculate_discount(self, amount: Decimal) -> Decimal:
        return amount * self.rate


class RegularCustomerDiscount(PercentageDiscount):
    label = "Regular Customer"
    rate = Decimal("0.05")


class VipCustomerDiscount(PercentageDiscount):
    label = "VIP Customer"
    rate = Decimal("0.15")


class GoldCustomerDiscount(PercentageDiscount):
    label = "Gold Customer"
    rate = Decimal("0.20")


class SeasonalDiscount(PercentageDiscount):
    label = "Seasonal Promotion"
    rate = Decimal("0.10")


class CompositeDiscount(DiscountStrategy):
    """Sums the discounts of every child strategy, capped at the order amount."""

    def __init__(self, *strategies: DiscountStrategy):
        self.strategies = list(strategies)

    @property
    def description(self) -> str:
        return " + ".join(s.description for s in self.strategies) or "No discount"

    def calculate_discount(self, amount: Decimal) -> Decimal:
        total = sum((s.calculate_discount(amount) for s in self.strategies), Decimal("0"))
        return min(total, amount)


class DiscountCalculator:
    def __init__(self, discount_strategy: DiscountStrategy):
        self._discount_strategy = discount_strategy

    def calculate_discount(self, amount: Amount) -> Decimal:
        value = parse_amount(amount)
        if value < 0:
            raise InvalidArgumentError("amount", amount, "Amount cannot be negative")
        return self._discount_strategy.calculate_discount(value).quantize(CENTS, ROUND_HALF_UP)

    def calculate_final_price(self, amount: Amount) -> Decimal:
        value = parse_amount(amount)
        return (value - self.calculate_discount(value)).quantize(CENTS, ROUND_HALF_UP)

    @property
    def description(self) -> str:
        return self._discount_strategy.description


_CUSTOMER_CLASSES: dict[str, type[PercentageDiscount]] = {
    "regular": RegularCustomerDiscount,
    "vip": VipCustomerDiscount,
    "gold": GoldCustomerDiscount,
    "seasonal": SeasonalDiscount,
}


def build_discount_registry(
    section: Optional[Mapping[str, Any]] = None,
) -> Registry[DiscountStrategy]:
    """
    Registry of customer types, with rates optionally overridden by the
    `discounts` config section, e.g. ``{"rates": {"vip": 0.18, "platinum": 0.25}}``.

    Customer types without a dedicated class become plain percentage discounts.
    """
    registry: Registry[DiscountStrategy] = Registry(
        "discounts", normalize=lambda key: str(key).strip().lower()
    )
    for key, strategy_class in _CUSTOMER_CLASSES.items():
        registry.register(key, strategy_class)

    for customer_type, rate in ((section or {}).get("rates") or {}).items():
        key = str(customer_type).strip().lower()
        strategy_class = _CUSTOMER_CLASSES.get(key)
        if strategy_class is not None:
            registry.register(key, partial(strategy_class, rate), replace=True)
        else:
            label = str(customer_type).title()
            registry.register(key, partial(PercentageDiscount, rate, label), replace=True)
    return registry


discount_registry = build_discount_registry()


def calculator_for(
    *customer_types: str, registry: Optional[Registry[DiscountStrategy]] = None
) -> DiscountCalculator:
    """Calculator combining the discounts registered for each customer type."""
    source = registry if registry is not None else discount_registry
    strategies = [source.resolve(t) for t in customer_types]
    if len(strategies) == 1:
        return DiscountCalculator(strategies[0])
    return DiscountCalculator(CompositeDiscount(*strategies))
