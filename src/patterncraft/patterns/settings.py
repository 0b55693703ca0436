"""
Application Settings (init-once handle)

Process-wide settings are built exactly once and then handed to consumers
explicitly, instead of every call site reaching for a global accessor.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, Optional

from ..config_loader import load_section
from ..errors import NotFoundError, PatternCraftError

logger = logging.getLogger(__name__)

_MISSING = object()

DEFAULT_SETTINGS = {
    "DatabaseConnection": "Server=localhost;Database=MyApp;",
    "MaxConnections": "100",
}


class AppSettings:
    """Thread-safe key/value settings store."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: dict[str, str] = {k: str(v) for k, v in (values or {}).items()}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = _MISSING) -> Any:
        with self._lock:
            if key in self._values:
                return self._values[key]
        if default is _MISSING:
            raise NotFoundError("setting", key)
        return default

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = str(value)

    def as_dict(self) -> dict[str, str]:
        with self._lock:
            return dict(self._values)


def load_app_settings(*, config_dir: Optional[str] = None) -> AppSettings:
    section = load_section("settings", config_dir=config_dir)
    values = {**DEFAULT_SETTINGS, **section}
    logger.info("Loaded %d settings", len(values))
    return AppSettings(values)


class SettingsAlreadyInitializedError(PatternCraftError, RuntimeError):
    pass


class SettingsHandle:
    """
    Owns the single AppSettings instance for a process.

    `initialize()` may be called at most once. `get()` lazily initializes with
    the default factory when nobody initialized the handle explicitly. Both
    paths are serialized by a lock so the factory runs exactly once.
    """

    def __init__(self, default_factory: Callable[[], AppSettings] = load_app_settings):
        self._default_factory = default_factory
        self._instance: Optional[AppSettings] = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._instance is not None

    def initialize(self, factory: Optional[Callable[[], AppSettings]] = None) -> AppSettings:
        with self._lock:
            if self._instance is not None:
                raise SettingsAlreadyInitializedError("Settings have already been initialized")
            self._instance = (factory or self._default_factory)()
            return self._instance

    def get(self) -> AppSettings:
        instance = self._instance
        if instance is not None:
            return instance
        with self._lock:
            if self._instance is None:
                self._instance = self._default_factory()
            return self._instance
