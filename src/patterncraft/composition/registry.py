"""
Registry and Rule Dispatcher (Factory + Strategy selection)

Maps discriminators to capability constructors. Lookups fail explicitly with
RegistryLookupError; nothing ever resolves to a null placeholder.
"""

import logging
import threading
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar, Union

from ..errors import DuplicateRegistrationError, RegistryLookupError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Constructor = Callable[[], T]
Number = Union[int, float, Decimal]


class Registry(Generic[T]):
    """Keyed registry of zero-argument constructors."""

    def __init__(self, name: str, normalize: Optional[Callable[[Any], Hashable]] = None):
        self.name = name
        self._normalize = normalize or (lambda key: key)
        self._entries: dict[Hashable, Constructor[T]] = {}
        self._lock = threading.RLock()

    def register(self, key: Any, constructor: Constructor[T], *, replace: bool = False) -> None:
        normalized = self._normalize(key)
        with self._lock:
            if normalized in self._entries and not replace:
                raise DuplicateRegistrationError(key)
            self._entries[normalized] = constructor
        logger.debug("Registered %r in %s registry", normalized, self.name)

    def entry(self, key: Any, *, replace: bool = False) -> Callable[[Any], Any]:
        """Decorator to register a class or factory function under `key`."""

        def decorator(constructor: Any) -> Any:
            self.register(key, constructor, replace=replace)
            return constructor

        return decorator

    def unregister(self, key: Any) -> None:
        normalized = self._normalize(key)
        with self._lock:
            if normalized not in self._entries:
                raise RegistryLookupError(key, self.keys())
            del self._entries[normalized]

    def resolve(self, key: Any) -> T:
        normalized = self._normalize(key)
        with self._lock:
            constructor = self._entries.get(normalized)
            if constructor is None:
                raise RegistryLookupError(key, sorted(map(str, self._entries)))
        return constructor()

    def keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return self._normalize(key) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@dataclass(frozen=True)
class Rule(Generic[T]):
    predicate: Callable[[Any], bool]
    constructor: Constructor[T]
    label: str


def below(limit: Number) -> Callable[[Number], bool]:
    """Strict upper-bound predicate: a value equal to `limit` does not match."""

    def predicate(value: Number) -> bool:
        return value < limit

    return predicate


class RuleDispatcher(Generic[T]):
    """Ordered rules evaluated top to bottom; the first match wins."""

    def __init__(self, name: str, default: Optional[Constructor[T]] = None):
        self.name = name
        self._rules: list[Rule[T]] = []
        self._default = default
        self._lock = threading.RLock()

    def add_rule(
        self, predicate: Callable[[Any], bool], constructor: Constructor[T], label: str = ""
    ) -> "RuleDispatcher[T]":
        with self._lock:
            self._rules.append(Rule(predicate, constructor, label or f"rule-{len(self._rules)}"))
        return self

    def set_default(self, constructor: Optional[Constructor[T]]) -> None:
        with self._lock:
            self._default = constructor

    @property
    def labels(self) -> list[str]:
        with self._lock:
            return [rule.label for rule in self._rules]

    def match(self, value: Any) -> str:
        """Label of the rule that would handle `value` ("default" for the fallback)."""
        with self._lock:
            for rule in self._rules:
                if rule.predicate(value):
                    return rule.label
            if self._default is not None:
                return "default"
        raise RegistryLookupError(value, self.labels)

    def resolve_by_rule(self, value: Any) -> T:
        with self._lock:
            rules = list(self._rules)
            default = self._default
        for rule in rules:
            if rule.predicate(value):
                logger.debug("%s: %r matched %s", self.name, value, rule.label)
                return rule.constructor()
        if default is None:
            raise RegistryLookupError(value, [rule.label for rule in rules])
        logger.debug("%s: %r fell through to default", self.name, value)
        return default()
