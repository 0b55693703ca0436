"""
Error taxonomy and helpers for user-facing diagnostics.

Every error kind carries the context a caller needs to react programmatically
(the offending identifier, the expected vs actual value) so callers never have
to inspect message text.
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Optional


class PatternCraftError(Exception):
    """Base class for all patterncraft errors."""


class InvalidArgumentError(PatternCraftError, ValueError):
    """A caller supplied a structurally invalid input."""

    def __init__(
        self,
        argument: str,
        value: Any,
        message: Optional[str] = None,
        *,
        expected: Optional[str] = None,
    ):
        self.argument = argument
        self.value = value
        self.expected = expected
        if message is None:
            message = f"Invalid value for '{argument}': {value!r}"
            if expected:
                message += f" (expected {expected})"
        super().__init__(message)


class NotFoundError(PatternCraftError, LookupError):
    """A valid-shaped identifier has no corresponding record."""

    def __init__(self, entity: str, identifier: Any):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} '{identifier}' was not found")


class RegistryLookupError(PatternCraftError, LookupError):
    """A registry or dispatcher could not resolve a key."""

    def __init__(self, key: Any, available: Sequence[Any] = ()):
        self.key = key
        self.available = tuple(available)
        message = f"No entry registered for {key!r}"
        if self.available:
            message += f". Available: {', '.join(str(k) for k in self.available)}"
        super().__init__(message)


class DuplicateRegistrationError(PatternCraftError, ValueError):
    """A registry key was registered twice without asking for replacement."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Key {key!r} is already registered")


class NotificationError(PatternCraftError):
    """One or more listeners failed while a publisher notified them."""

    def __init__(self, event: Any, failures: Sequence[tuple[Any, BaseException]]):
        self.event = event
        self.failures = list(failures)
        super().__init__(
            f"{len(self.failures)} listener(s) failed while handling {event!r}: "
            + "; ".join(f"{type(exc).__name__}: {exc}" for _, exc in self.failures)
        )


class ValidationError(PatternCraftError):
    """Validation failed; `errors` lists every problem found."""

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("Validation failed: " + "; ".join(self.errors))


class InsufficientFundsError(PatternCraftError):
    def __init__(self, required: Decimal, available: Decimal):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds. Required: ${required}, Available: ${available}")


class OrderProcessingError(PatternCraftError):
    def __init__(self, order_id: Any, message: str):
        self.order_id = order_id
        super().__init__(message)


class PaymentDeclinedError(PatternCraftError):
    def __init__(self, processor: str, message: str):
        self.processor = processor
        super().__init__(message)


def build_error(
    error: str,
    *,
    details: Optional[str] = None,
    hint: Optional[str] = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": error}
    if details:
        payload["details"] = details
    if hint:
        payload["hint"] = hint
    return payload


def error_from_exception(exc: BaseException, *, hint: Optional[str] = None) -> dict[str, Any]:
    """Convert an exception into a diagnostic payload, keeping its context fields."""
    details = None
    if isinstance(exc, ValidationError):
        details = ", ".join(exc.errors)
    elif isinstance(exc, InvalidArgumentError):
        details = f"argument={exc.argument} value={exc.value!r}"
    elif isinstance(exc, NotFoundError):
        details = f"entity={exc.entity} identifier={exc.identifier!r}"
    elif isinstance(exc, RegistryLookupError) and exc.available:
        details = "available: " + ", ".join(str(k) for k in exc.available)
    elif exc.__cause__ is not None:
        details = f"caused by {type(exc.__cause__).__name__}: {exc.__cause__}"
    return build_error(f"{type(exc).__name__}: {exc}", details=details, hint=hint)


def error_lines(payload: Mapping[str, Any]) -> list[str]:
    lines = []
    error = payload.get("error") or "Unknown error."
    lines.append(f"Error: {error}")
    details = payload.get("details")
    if details:
        lines.append(f"Details: {details}")
    hint = payload.get("hint")
    if hint:
        lines.append(f"Hint: {hint}")
    return lines
