"""
PatternCraft Behavior Composition Runtime
"""

# 1. Initialize Registry Patterns (force decorator execution)
from . import demos as _  # noqa: F401
from .patterns import compression as _  # noqa: F401

# 2. Export Public API
from .composition import (
    Capability,
    Publisher,
    Registry,
    RuleDispatcher,
    StrategyHolder,
    Wrapper,
    build_chain,
)
from .demos import DemoReport, available_demos, run_demo
from .errors import (
    InvalidArgumentError,
    NotFoundError,
    PatternCraftError,
    RegistryLookupError,
)

__version__ = "0.1.0"
