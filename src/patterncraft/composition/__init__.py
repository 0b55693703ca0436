"""
Composition Runtime

Exports the capability, wrapper chain, registry, strategy holder and
publisher primitives.
"""

from .capability import Capability
from .chain import Wrapper, WrapperFactory, build_chain, chain_depth, chain_layers
from .publisher import Listener, Publisher
from .registry import Registry, Rule, RuleDispatcher, below
from .strategy import StrategyHolder

__all__ = [
    "Capability",
    "Listener",
    "Publisher",
    "Registry",
    "Rule",
    "RuleDispatcher",
    "StrategyHolder",
    "Wrapper",
    "WrapperFactory",
    "below",
    "build_chain",
    "chain_depth",
    "chain_layers",
]
