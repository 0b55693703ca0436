"""
Strategy Holder

Isolates the one piece of swappable state: the active strategy.
"""

import logging
import threading
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")


class StrategyHolder(Generic[S]):
    """Holds an active strategy that can be swapped at runtime."""

    def __init__(self, strategy: S):
        self._active = strategy
        self._lock = threading.Lock()

    @property
    def active(self) -> S:
        with self._lock:
            return self._active

    def set_active(self, strategy: S) -> None:
        with self._lock:
            previous = self._active
            self._active = strategy
        logger.info("Strategy changed from %s to %s", _label(previous), _label(strategy))


def _label(strategy: object) -> str:
    return str(getattr(strategy, "name", type(strategy).__name__))
