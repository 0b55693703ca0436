"""
Notification Decorators

Stacks delivery channels around a basic notification. Sending through a
chain returns one Delivery per layer, outermost layer first.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ..composition import Capability, Wrapper, WrapperFactory, build_chain
from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)

Deliveries = tuple["Delivery", ...]


@dataclass(frozen=True)
class Delivery:
    """A single message handed to a channel."""

    channel: str
    target: str
    message: str

    def __str__(self) -> str:
        if self.target:
            return f"[{self.channel}] {self.target}: {self.message}"
        return f"[{self.channel}] {self.message}"


class Notification(Capability[str, Deliveries]):
    """Sends a message and reports every delivery it made."""

    def send(self, message: str) -> Deliveries:
        return self.invoke(message)


class BasicNotification(Notification):
    def invoke(self, message: str) -> Deliveries:
        if not message:
            raise InvalidArgumentError("message", message, expected="a non-empty string")
        logger.info("Basic notification: %s", message)
        return (Delivery("basic", "", message),)


class NotificationDecorator(Wrapper[str, Deliveries], Notification):
    """Base decorator: delivers on its own channel, then delegates inward."""

    channel = ""

    def __init__(self, inner: Capability[str, Deliveries], target: str = ""):
        super().__init__(inner)
        self.target = target

    def apply(self, message: str) -> Optional[Delivery]:
        if not self.channel:
            return None
        logger.info("Sending %s to %s: %s", self.channel, self.target, message)
        return Delivery(self.channel, self.target, message)

    def finish(
        self, message: str, inner_result: Deliveries, effect: Optional[Any]
    ) -> Deliveries:
        if effect is None:
            return inner_result
        return (effect,) + inner_result


class EmailNotificationDecorator(NotificationDecorator):
    channel = "email"

    def __init__(self, inner: Capability[str, Deliveries], email_address: str):
        if "@" not in email_address:
            raise InvalidArgumentError(
                "email_address", email_address, expected="an address containing '@'"
            )
        super().__init__(inner, email_address)


class SmsNotificationDecorator(NotificationDecorator):
    channel = "sms"

    def __init__(self, inner: Capability[str, Deliveries], phone_number: str):
        if not phone_number:
            raise InvalidArgumentError("phone_number", phone_number, expected="a phone number")
        super().__init__(inner, phone_number)


class SlackNotificationDecorator(NotificationDecorator):
    channel = "slack"

    def __init__(self, inner: Capability[str, Deliveries], channel_name: str):
        if not channel_name:
            raise InvalidArgumentError("channel_name", channel_name, expected="a channel name")
        super().__init__(inner, f"#{channel_name.lstrip('#')}")


class UrgentNotificationDecorator(NotificationDecorator):
    """Marks the message urgent for every layer below it. Delivers nothing itself."""

    PREFIX = "URGENT: "

    def transform(self, message: str) -> str:
        if message.startswith(self.PREFIX):
            return message
        return f"{self.PREFIX}{message}"


def email(address: str) -> WrapperFactory:
    return lambda inner: EmailNotificationDecorator(inner, address)


def sms(phone_number: str) -> WrapperFactory:
    return lambda inner: SmsNotificationDecorator(inner, phone_number)


def slack(channel_name: str) -> WrapperFactory:
    return lambda inner: SlackNotificationDecorator(inner, channel_name)


def urgent() -> WrapperFactory:
    return UrgentNotificationDecorator


_CHANNEL_FACTORIES = {
    "email": email,
    "sms": sms,
    "slack": slack,
}


def notification_from_config(section: Mapping[str, Any]) -> Capability[str, Deliveries]:
    """
    Build a chain from the `notifications` config section.

    Expected shape::

        {"channels": [{"type": "email", "target": "ops@example.com"}, ...],
         "urgent": false}

    Channels are listed innermost first, matching build_chain.
    """
    wrappers: list[WrapperFactory] = []
    for index, channel in enumerate(section.get("channels", []) or []):
        kind = str(channel.get("type", "")).lower()
        factory = _CHANNEL_FACTORIES.get(kind)
        if factory is None:
            raise InvalidArgumentError(
                f"channels[{index}].type", kind, expected=", ".join(sorted(_CHANNEL_FACTORIES))
            )
        wrappers.append(factory(str(channel.get("target", ""))))
    if section.get("urgent"):
        wrappers.append(urgent())
    return build_chain(BasicNotification(), wrappers)
