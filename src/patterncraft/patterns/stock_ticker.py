"""
Stock Price Tracker (Observer)

Publishes price updates to every subscribed notifier.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union

from ..amounts import Amount, to_non_negative_amount
from ..composition import Listener, Publisher
from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceUpdate:
    symbol: str
    price: Decimal

    @property
    def message(self) -> str:
        return f"{self.symbol} price updated to ${self.price:.2f}"


@dataclass(eq=False)
class _Notifier(ABC):
    """Shared base for listeners; equality is identity so detach removes the exact object."""

    received: list[str] = field(default_factory=list, init=False)
    channel = ""

    @property
    @abstractmethod
    def target(self) -> str:
        pass

    def update(self, event: PriceUpdate) -> None:
        self.received.append(event.message)
        logger.info("%s sent to %s: %s", self.channel, self.target, event.message)


@dataclass(eq=False)
class EmailNotifier(_Notifier):
    email_address: str = ""
    channel = "Email"

    @property
    def target(self) -> str:
        return self.email_address


@dataclass(eq=False)
class SmsNotifier(_Notifier):
    phone_number: str = ""
    channel = "SMS"

    @property
    def target(self) -> str:
        return self.phone_number


@dataclass(eq=False)
class MobileAppNotifier(_Notifier):
    user_id: str = ""
    channel = "Push"

    @property
    def target(self) -> str:
        return f"user {self.user_id}"


class StockPriceTracker:
    """Subject tracking one symbol's price."""

    def __init__(self, symbol: str):
        if not symbol:
            raise InvalidArgumentError("symbol", symbol, expected="a ticker symbol")
        self.symbol = symbol.upper()
        self.current_price: Union[Decimal, None] = None
        self._publisher: Publisher[PriceUpdate] = Publisher()

    @property
    def observers(self) -> tuple[Listener[PriceUpdate], ...]:
        return self._publisher.listeners

    def attach(self, observer: Listener[PriceUpdate]) -> None:
        self._publisher.attach(observer)
        logger.info("Observer subscribed to %s", self.symbol)

    def detach(self, observer: Listener[PriceUpdate]) -> None:
        if self._publisher.detach(observer):
            logger.info("Observer unsubscribed from %s", self.symbol)

    def set_price(self, new_price: Amount) -> int:
        """Record a new price and notify observers. Returns how many were notified."""
        price = to_non_negative_amount(new_price, argument="new_price")
        self.current_price = price
        event = PriceUpdate(self.symbol, price)
        logger.debug("Notifying %d observers of %s", len(self._publisher), event.message)
        return self._publisher.notify(event)
