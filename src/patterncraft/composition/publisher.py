"""
Publisher / Subscriber Set (Observer)

Listeners are notified synchronously in attachment order. A failing listener
does not stop the others: every failure is collected and raised together as a
NotificationError once all listeners have been called.
"""

import logging
import threading
from typing import Any, Generic, Protocol, TypeVar

from ..errors import NotificationError

logger = logging.getLogger(__name__)

E = TypeVar("E")
E_contra = TypeVar("E_contra", contravariant=True)


class Listener(Protocol[E_contra]):
    def update(self, event: E_contra) -> Any:
        ...


class Publisher(Generic[E]):
    """Ordered, mutable collection of listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener[E]] = []
        self._lock = threading.Lock()

    @property
    def listeners(self) -> tuple[Listener[E], ...]:
        with self._lock:
            return tuple(self._listeners)

    def attach(self, listener: Listener[E]) -> None:
        with self._lock:
            self._listeners.append(listener)
        logger.debug("Attached %r", listener)

    def detach(self, listener: Listener[E]) -> bool:
        """Remove the first listener equal to `listener`. Returns False if absent."""
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                return False
        logger.debug("Detached %r", listener)
        return True

    def notify(self, event: E) -> int:
        """Notify every listener attached when the call starts. Returns the count notified."""
        snapshot = self.listeners
        failures: list[tuple[Listener[E], BaseException]] = []
        for listener in snapshot:
            try:
                listener.update(event)
            except Exception as exc:
                logger.warning("Listener %r failed on %r: %s", listener, event, exc)
                failures.append((listener, exc))
        if failures:
            raise NotificationError(event, failures)
        return len(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
