"""
Startup configuration hooks and the process state they install
"""

from .context import ConfigurationContext, get_default_context, set_default_context
from .hooks import (
    DEFAULT_CONFIGURATOR_PRIORITY,
    SECURITY_PROVIDER_PRIORITY,
    ConfiguratorHook,
    DefaultConfiguratorHook,
    SecurityContextProviderHook,
    clear_declared_hooks,
    configure,
    declare_hook,
    get_declared_hooks,
    run_configurators,
)
from .registry import ProviderRegistry, get_provider_registry, register_provider

__all__ = [
    "ConfigurationContext",
    "get_default_context",
    "set_default_context",
    "ConfiguratorHook",
    "SecurityContextProviderHook",
    "DefaultConfiguratorHook",
    "SECURITY_PROVIDER_PRIORITY",
    "DEFAULT_CONFIGURATOR_PRIORITY",
    "run_configurators",
    "declare_hook",
    "get_declared_hooks",
    "clear_declared_hooks",
    "configure",
    "ProviderRegistry",
    "get_provider_registry",
    "register_provider",
]
