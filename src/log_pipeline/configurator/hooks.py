"""
Priority ordered configuration hooks

Hooks are declared against a source (usually a package name) and run once
when that source is configured. They run in ascending priority order, so
provider hooks (priority 100) are in place before the default configurator
(priority 1000) builds handlers that consume them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..diagnostics import InternalLog
from ..security import SecurityContextProvider
from .context import ConfigurationContext, get_default_context

SECURITY_PROVIDER_PRIORITY = 100
DEFAULT_CONFIGURATOR_PRIORITY = 1000

ProviderType = Union[str, Callable[[], Any]]


def _source_name(source: Any) -> str:
    if source is None:
        return "<unknown>"
    return getattr(source, "__name__", None) or str(source)


def _type_name(provider_type: ProviderType) -> str:
    if isinstance(provider_type, str):
        return provider_type
    return getattr(provider_type, "__qualname__", None) or repr(provider_type)


class ConfiguratorHook(ABC):
    """A configuration step that runs once, ordered by ``priority``"""

    def __init__(self, priority: int):
        self.priority = priority

    @property
    def hook_id(self) -> str:
        """Hooks sharing an id may only be applied once per context"""
        return f"{type(self).__module__}.{type(self).__qualname__}"

    @abstractmethod
    def configure(
        self,
        source: Any,
        repository: Optional[logging.Logger],
        context: ConfigurationContext,
    ) -> None:
        pass


class SecurityContextProviderHook(ConfiguratorHook):
    """Installs the process security context provider

    ``provider_type`` is either a name registered with the provider registry
    or a class / zero argument factory producing a SecurityContextProvider.
    """

    def __init__(
        self,
        provider_type: Optional[ProviderType] = None,
        priority: int = SECURITY_PROVIDER_PRIORITY,
    ):
        super().__init__(priority)
        self.provider_type = provider_type

    def _resolve_factory(
        self, context: ConfigurationContext
    ) -> Optional[Callable[[], Any]]:
        if isinstance(self.provider_type, str):
            return context.registry.get_factory(self.provider_type)
        if callable(self.provider_type):
            return self.provider_type
        return None

    def configure(
        self,
        source: Any,
        repository: Optional[logging.Logger],
        context: ConfigurationContext,
    ) -> None:
        if self.provider_type is None:
            InternalLog.error(
                self,
                f"Hook specified on [{_source_name(source)}] with null provider type.",
            )
            return

        type_name = _type_name(self.provider_type)
        InternalLog.debug(self, f"Creating provider of type [{type_name}]")

        factory = self._resolve_factory(context)
        provider = None
        error: Optional[Exception] = None
        if factory is not None:
            try:
                provider = factory()
            except Exception as e:
                error = e

        if not isinstance(provider, SecurityContextProvider):
            InternalLog.error(
                self,
                f"Failed to create SecurityContextProvider instance of type [{type_name}].",
                error,
            )
            return

        context.security_provider = provider


class DefaultConfiguratorHook(ConfiguratorHook):
    """Wires the repository logger from a PipelineConfig"""

    def __init__(self, config: Any = None, priority: int = DEFAULT_CONFIGURATOR_PRIORITY):
        super().__init__(priority)
        self.config = config

    def configure(
        self,
        source: Any,
        repository: Optional[logging.Logger],
        context: ConfigurationContext,
    ) -> None:
        from ..config import get_default_config
        from ..logger import configure_logger

        logger = repository if repository is not None else logging.getLogger()
        config = self.config or get_default_config()
        InternalLog.debug(
            self, f"Configuring logger [{logger.name}] for [{_source_name(source)}]"
        )
        configure_logger(logger, config, context)


def run_configurators(
    source: Any,
    repository: Optional[logging.Logger],
    hooks: Iterable[ConfiguratorHook],
    context: Optional[ConfigurationContext] = None,
) -> List[ConfiguratorHook]:
    """Run hooks in ascending priority order and return the ones applied

    A hook whose id was already applied in this context is reported and
    skipped. Failures are reported on the diagnostic channel, never raised.
    """
    context = context if context is not None else get_default_context()
    applied = []
    for hook in sorted(hooks, key=lambda h: h.priority):
        if hook.hook_id in context.applied_hooks:
            InternalLog.error(
                hook,
                f"Configurator [{hook.hook_id}] already applied, "
                f"ignoring repeat declaration on [{_source_name(source)}]",
            )
            continue

        context.applied_hooks.add(hook.hook_id)
        try:
            hook.configure(source, repository, context)
        except Exception as e:
            InternalLog.error(hook, f"Configurator [{hook.hook_id}] failed", e)
            continue
        applied.append(hook)
    return applied


_declared_hooks: Dict[str, List[ConfiguratorHook]] = {}


def declare_hook(source: Any, hook: ConfiguratorHook) -> ConfiguratorHook:
    """Declare a hook on a source; a second hook of the same kind is rejected"""
    name = _source_name(source)
    declared = _declared_hooks.setdefault(name, [])
    if any(existing.hook_id == hook.hook_id for existing in declared):
        InternalLog.error(
            hook,
            f"Configurator [{hook.hook_id}] declared more than once on [{name}]",
        )
        return hook
    declared.append(hook)
    return hook


def get_declared_hooks(source: Any) -> List[ConfiguratorHook]:
    return list(_declared_hooks.get(_source_name(source), ()))


def clear_declared_hooks(source: Any = None) -> None:
    if source is None:
        _declared_hooks.clear()
    else:
        _declared_hooks.pop(_source_name(source), None)


def configure(
    source: Any,
    repository: Optional[logging.Logger] = None,
    context: Optional[ConfigurationContext] = None,
) -> List[ConfiguratorHook]:
    """Run the hooks declared on ``source``"""
    return run_configurators(source, repository, get_declared_hooks(source), context)
