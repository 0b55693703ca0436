"""
Payment Processors (Factory + Adapter)

The factory hides which processor class serves a payment type or amount.
The adapters let third-party gateways with incompatible interfaces plug into
checkout without checkout knowing about them.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Protocol

from ..amounts import Amount, to_amount
from ..composition import Registry, RuleDispatcher, below
from ..errors import InvalidArgumentError, PaymentDeclinedError

logger = logging.getLogger(__name__)

DEFAULT_SMALL_PAYMENT_LIMIT = Decimal("100")
DEFAULT_LARGE_PAYMENT_LIMIT = Decimal("10000")


@dataclass(frozen=True)
class Receipt:
    processor: str
    amount: Decimal
    account: str

    def __str__(self) -> str:
        return f"Processed ${self.amount:.2f} via {self.processor} ({self.account})"


class PaymentProcessor(ABC):
    name: str = ""

    @abstractmethod
    def describe_account(self, account_info: str) -> str:
        pass

    def process_payment(self, amount: Amount, account_info: str) -> Receipt:
        value = to_amount(amount)
        if not account_info:
            raise InvalidArgumentError("account_info", account_info, expected="account details")
        receipt = Receipt(self.name, value, self.describe_account(account_info))
        logger.info("%s", receipt)
        return receipt


class CreditCardProcessor(PaymentProcessor):
    name = "Credit Card"

    def describe_account(self, account_info: str) -> str:
        return f"card ending in {account_info[-4:]}"


class PayPalProcessor(PaymentProcessor):
    name = "PayPal"

    def describe_account(self, account_info: str) -> str:
        return f"account {account_info}"


class CryptoProcessor(PaymentProcessor):
    name = "Cryptocurrency"

    def describe_account(self, account_info: str) -> str:
        return f"wallet {account_info}"


class PaymentProcessorFactory:
    """
    Creates payment processors by type name or by amount tier.

    Amount tiers are strict upper bounds evaluated in order: below the small
    limit goes to PayPal, below the large limit to credit card, everything
    else to crypto. An amount exactly at a limit belongs to the next tier.
    """

    def __init__(
        self,
        small_payment_limit: Amount = DEFAULT_SMALL_PAYMENT_LIMIT,
        large_payment_limit: Amount = DEFAULT_LARGE_PAYMENT_LIMIT,
    ):
        small = to_amount(small_payment_limit, argument="small_payment_limit")
        large = to_amount(large_payment_limit, argument="large_payment_limit")
        if large <= small:
            raise InvalidArgumentError(
                "large_payment_limit",
                large_payment_limit,
                expected=f"a limit above {small}",
            )

        self.processors: Registry[PaymentProcessor] = Registry(
            "payments", normalize=lambda key: str(key).strip().lower()
        )
        self.processors.register("creditcard", CreditCardProcessor)
        self.processors.register("paypal", PayPalProcessor)
        self.processors.register("crypto", CryptoProcessor)

        self.tiers: RuleDispatcher[PaymentProcessor] = RuleDispatcher(
            "payment-tiers", default=CryptoProcessor
        )
        self.tiers.add_rule(below(small), PayPalProcessor, f"< {small}")
        self.tiers.add_rule(below(large), CreditCardProcessor, f"< {large}")

    @classmethod
    def from_config(cls, section: Mapping[str, Any]) -> "PaymentProcessorFactory":
        return cls(
            section.get("small_payment_limit", DEFAULT_SMALL_PAYMENT_LIMIT),
            section.get("large_payment_limit", DEFAULT_LARGE_PAYMENT_LIMIT),
        )

    def create_processor(self, payment_type: str) -> PaymentProcessor:
        return self.processors.resolve(payment_type)

    def create_processor_for_amount(self, amount: Amount) -> PaymentProcessor:
        return self.tiers.resolve_by_rule(to_amount(amount))


# --- Adapter ---------------------------------------------------------------


class GatewayError(Exception):
    """Raised by third-party gateways."""


class StripePaymentGateway:
    """Third-party gateway: charges in cents against a customer id."""

    def __init__(self) -> None:
        self.last_transaction: Optional[str] = None

    def charge_customer(self, amount_in_cents: int, customer_id: str) -> str:
        if not customer_id.startswith("cus_"):
            raise GatewayError(f"No such customer: {customer_id}")
        self.last_transaction = f"stripe_tx_{uuid.uuid4().hex[:8]}"
        logger.info("Stripe: charging %d cents to customer %s", amount_in_cents, customer_id)
        return self.last_transaction


class PayPalService:
    """Third-party service: pays in dollars against an email address."""

    def __init__(self) -> None:
        self._reference: Optional[str] = None

    def make_payment(self, dollars: Decimal, email: str) -> bool:
        if "@" not in email:
            return False
        self._reference = f"paypal_ref_{uuid.uuid4().hex[:8]}"
        logger.info("PayPal: processing $%s for %s", dollars, email)
        return True

    def retrieve_transaction_reference(self) -> Optional[str]:
        return self._reference


class CheckoutProcessor(Protocol):
    """Interface checkout expects from any payment backend."""

    def process_payment(self, amount: Decimal, account_info: str) -> str:
        """Charge the account and return a transaction id."""
        ...


class StripePaymentAdapter:
    def __init__(self, gateway: StripePaymentGateway):
        self._gateway = gateway

    def process_payment(self, amount: Decimal, account_info: str) -> str:
        cents = int((amount * 100).to_integral_value())
        try:
            return self._gateway.charge_customer(cents, account_info)
        except GatewayError as exc:
            raise PaymentDeclinedError("Stripe", f"Stripe declined the charge: {exc}") from exc


class PayPalPaymentAdapter:
    def __init__(self, service: PayPalService):
        self._service = service

    def process_payment(self, amount: Decimal, account_info: str) -> str:
        if not self._service.make_payment(amount, account_info):
            raise PaymentDeclinedError("PayPal", f"PayPal rejected payment for {account_info}")
        reference = self._service.retrieve_transaction_reference()
        if reference is None:
            raise PaymentDeclinedError("PayPal", "PayPal returned no transaction reference")
        return reference


@dataclass(frozen=True)
class CheckoutResult:
    amount: Decimal
    transaction_id: str


class CheckoutService:
    """Client code that only knows the CheckoutProcessor interface."""

    def __init__(self, payment_processor: CheckoutProcessor):
        self._payment_processor = payment_processor

    def process_checkout(self, amount: Amount, account_info: str) -> CheckoutResult:
        value = to_amount(amount)
        logger.info("Checkout: processing payment of $%s", value)
        transaction_id = self._payment_processor.process_payment(value, account_info)
        logger.info("Payment successful, transaction %s", transaction_id)
        return CheckoutResult(value, transaction_id)
