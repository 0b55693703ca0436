"""
Wrapper Chain (Decorator)

Composes capabilities so that behavior stacks at call time.

Convention: the outermost wrapper runs its effect first and the leaf runs
last. Each layer rewrites the input (optional), performs its own effect,
delegates inward, then combines the inner result with its effect.
"""

from collections.abc import Callable, Sequence
from typing import Any, Generic, Optional

from .capability import Capability, In, Out

WrapperFactory = Callable[[Capability[Any, Any]], Capability[Any, Any]]


class Wrapper(Capability[In, Out], Generic[In, Out]):
    """A capability that owns exactly one inner capability."""

    def __init__(self, inner: Capability[In, Out]):
        self._inner = inner

    @property
    def inner(self) -> Capability[In, Out]:
        return self._inner

    def transform(self, payload: In) -> In:
        """Rewrite the input before it reaches this layer and the ones below."""
        return payload

    def apply(self, payload: In) -> Optional[Any]:
        """This layer's own effect. Returns an effect record or None."""
        return None

    def finish(self, payload: In, inner_result: Out, effect: Optional[Any]) -> Out:
        """Combine this layer's effect with the inner result."""
        return inner_result

    def invoke(self, payload: In) -> Out:
        payload = self.transform(payload)
        effect = self.apply(payload)
        inner_result = self._inner.invoke(payload)
        return self.finish(payload, inner_result, effect)


def build_chain(
    leaf: Capability[Any, Any], wrappers: Sequence[WrapperFactory] = ()
) -> Capability[Any, Any]:
    """
    Wrap `leaf` with each factory in order.

    The first factory wraps the leaf directly and the last one becomes the
    outermost layer, so it is the first to run on invocation.
    """
    current = leaf
    for factory in wrappers:
        current = factory(current)
    return current


def chain_depth(capability: Capability[Any, Any]) -> int:
    """Number of wrapper layers above the leaf."""
    depth = 0
    current = capability
    while isinstance(current, Wrapper):
        depth += 1
        current = current.inner
    return depth


def chain_layers(capability: Capability[Any, Any]) -> list[str]:
    """Layer names from outermost to leaf."""
    names = []
    current: Capability[Any, Any] = capability
    while isinstance(current, Wrapper):
        names.append(current.name)
        current = current.inner
    names.append(current.name)
    return names
