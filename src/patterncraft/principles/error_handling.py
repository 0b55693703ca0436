"""
Error Handling Contracts

Lookups never answer with an ambiguous None: invalid input and a missing
record are distinct error kinds. Resources are released on every exit path.
"""

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from ..amounts import Amount, parse_amount
from ..errors import InsufficientFundsError, InvalidArgumentError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class Customer:
    id: int
    name: str


class CustomerDirectory:
    def __init__(self, customers: Optional[list[Customer]] = None):
        self._customers = {c.id: c for c in customers or []}

    def get_by_id(self, customer_id: int) -> Customer:
        """Raises InvalidArgumentError for ids <= 0 and NotFoundError for absent ones."""
        if isinstance(customer_id, bool) or not isinstance(customer_id, int):
            raise InvalidArgumentError("customer_id", customer_id, expected="an integer id")
        if customer_id <= 0:
            raise InvalidArgumentError("customer_id", customer_id, "Customer ID must be positive")
        customer = self._customers.get(customer_id)
        if customer is None:
            raise NotFoundError("customer", customer_id)
        return customer

    def try_get_by_id(self, customer_id: int) -> Optional[Customer]:
        """Try-pattern variant: None is the documented answer for anything unresolvable."""
        if customer_id <= 0:
            return None
        return self._customers.get(customer_id)


class Ledger:
    def __init__(self, balances: Optional[dict[str, Amount]] = None):
        self._balances = {
            k: parse_amount(v, argument=f"balances[{k}]") for k, v in (balances or {}).items()
        }
        self._lock = threading.Lock()

    def balance(self, account: str) -> Decimal:
        with self._lock:
            if account not in self._balances:
                raise NotFoundError("account", account)
            return self._balances[account]

    def transfer(self, from_account: str, to_account: str, amount: Amount) -> None:
        value = parse_amount(amount)
        if value <= 0:
            raise InvalidArgumentError(
                "amount", amount, f"Transfer amount must be positive. Provided: ${value}"
            )
        if not from_account:
            raise InvalidArgumentError(
                "from_account", from_account, "Source account cannot be empty"
            )
        if not to_account:
            raise InvalidArgumentError("to_account", to_account, "Target account cannot be empty")

        with self._lock:
            for account in (from_account, to_account):
                if account not in self._balances:
                    raise NotFoundError("account", account)
            available = self._balances[from_account]
            if available < value:
                raise InsufficientFundsError(value, available)
            self._balances[from_account] = available - value
            self._balances[to_account] += value
        logger.info("Transferred $%s from %s to %s", value, from_account, to_account)


def validate_credentials(username: str, password: str) -> None:
    """Collects every problem before failing, so callers see them all at once."""
    errors = []
    if not username:
        errors.append("Username is required")
    if not password:
        errors.append("Password is required")
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if errors:
        raise ValidationError(errors)


def parse_integer(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        logger.debug("Invalid integer format: %r", value)
        raise InvalidArgumentError("value", value, f"Cannot parse {value!r} as integer") from exc


def read_text_file(file_path: Union[str, Path], encoding: str = "utf-8") -> str:
    if not file_path:
        raise InvalidArgumentError("file_path", file_path, "File path cannot be empty")
    path = Path(file_path)
    try:
        with path.open("r", encoding=encoding) as handle:
            return handle.read()
    except FileNotFoundError:
        logger.error("File not found: %s", path)
        raise
    except UnicodeDecodeError as exc:
        logger.error("File %s is not valid %s", path, encoding)
        message = f"{path} is not valid {encoding}"
        raise InvalidArgumentError("file_path", str(path), message) from exc
