"""
Order Processing (Dependency Inversion)

OrderProcessor depends only on the OrderRepository and NotificationService
protocols; storage and messaging backends are injected.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from ..errors import InvalidArgumentError, NotFoundError, OrderProcessingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Order:
    id: int
    customer_email: str
    total: Decimal
    order_date: datetime = field(default_factory=datetime.now)


class OrderRepository(Protocol):
    def save(self, order: Order) -> None: ...

    def get_by_id(self, order_id: int) -> Order: ...


class NotificationService(Protocol):
    def send_order_confirmation(self, recipient: str, order_id: int) -> None: ...


class InMemoryOrderRepository:
    """Stores orders in a dict; `backend` only labels where they would live."""

    def __init__(self, backend: str = "memory"):
        self.backend = backend
        self._orders: dict[int, Order] = {}
        self._lock = threading.Lock()

    def save(self, order: Order) -> None:
        with self._lock:
            self._orders[order.id] = order
        logger.info("Saved order %s to %s", order.id, self.backend)

    def get_by_id(self, order_id: int) -> Order:
        if order_id <= 0:
            raise InvalidArgumentError("order_id", order_id, expected="a positive id")
        with self._lock:
            order = self._orders.get(order_id)
        if order is None:
            raise NotFoundError("order", order_id)
        return order


class EmailNotificationService:
    def __init__(self, smtp_server: str):
        self.smtp_server = smtp_server
        self.sent: list[str] = []

    def send_order_confirmation(self, recipient: str, order_id: int) -> None:
        message = f"Email to {recipient} via {self.smtp_server}: Order #{order_id} Confirmation"
        self.sent.append(message)
        logger.info(message)


class SmsNotificationService:
    def __init__(self, api_key: str):
        self._api_key = api_key
        self.sent: list[str] = []

    def send_order_confirmation(self, recipient: str, order_id: int) -> None:
        message = f"SMS to {recipient}: Order #{order_id} confirmed"
        self.sent.append(message)
        logger.info(message)


class OrderProcessor:
    def __init__(self, repository: OrderRepository, notifier: NotificationService):
        self._repository = repository
        self._notifier = notifier

    def process_order(self, order: Order) -> None:
        self._validate(order)
        try:
            self._repository.save(order)
        except (OSError, RuntimeError) as exc:
            logger.error("Failed to save order %s: %s", order.id, exc)
            raise OrderProcessingError(order.id, f"Failed to process order {order.id}") from exc
        self._notifier.send_order_confirmation(order.customer_email, order.id)
        logger.info("Order %s processed successfully", order.id)

    @staticmethod
    def _validate(order: Order) -> None:
        if order is None:
            raise InvalidArgumentError("order", order, expected="an Order")
        if not order.customer_email or not order.customer_email.strip():
            raise InvalidArgumentError(
                "customer_email", order.customer_email, "Customer email is required"
            )
        if order.total <= 0:
            raise InvalidArgumentError(
                "total", order.total, "Order total must be greater than zero"
            )
