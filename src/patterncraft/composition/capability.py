"""
Capability Base

Defines the single-operation unit of behavior every composition primitive
builds on.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

In = TypeVar("In")
Out = TypeVar("Out")


class Capability(ABC, Generic[In, Out]):
    """A named unit of behavior exposing exactly one operation."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def invoke(self, payload: In) -> Out:
        """Run the capability against a single input."""
        pass
