"""
Registry of provider factories addressable by name
"""

import threading
from typing import Any, Callable, Dict, List, Optional

ProviderFactory = Callable[[], Any]


class ProviderRegistry:
    """Maps configuration identifiers to provider factories"""

    def __init__(self):
        self._lock = threading.Lock()
        self._factories: Dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> None:
        """Register a factory, replacing any factory of the same name"""
        with self._lock:
            self._factories[name] = factory

    def unregister(self, name: str) -> None:
        with self._lock:
            self._factories.pop(name, None)

    def get_factory(self, name: str) -> Optional[ProviderFactory]:
        with self._lock:
            return self._factories.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._factories)


# Global registry instance
_global_registry = ProviderRegistry()


def get_provider_registry() -> ProviderRegistry:
    return _global_registry


def register_provider(name: str, factory: ProviderFactory) -> None:
    """
    Register a provider factory under a name hooks can refer to

    Args:
        name: Identifier used in configuration
        factory: Callable taking no arguments and returning the provider
    """
    _global_registry.register(name, factory)
