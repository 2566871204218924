"""
Process-wide state installed by configuration hooks

The context is written only while hooks run at startup and read afterwards
by handlers. Hooks run on a single thread before any events are logged.
"""

from dataclasses import dataclass, field
from typing import Optional, Set

from ..security import SecurityContextProvider
from .registry import ProviderRegistry, get_provider_registry


@dataclass
class ConfigurationContext:
    """State shared between configuration hooks and the running pipeline"""

    security_provider: SecurityContextProvider = field(
        default_factory=SecurityContextProvider
    )
    registry: ProviderRegistry = field(default_factory=get_provider_registry)
    applied_hooks: Set[str] = field(default_factory=set)


_default_context: Optional[ConfigurationContext] = None


def get_default_context() -> ConfigurationContext:
    """Get the process configuration context"""
    global _default_context
    if _default_context is None:
        _default_context = ConfigurationContext()
    return _default_context


def set_default_context(context: Optional[ConfigurationContext]) -> None:
    """Replace the process configuration context; None starts a fresh one"""
    global _default_context
    _default_context = context
