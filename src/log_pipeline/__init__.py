"""
Log Pipeline

Pluggable event admission filters, pattern layouts and startup configuration
hooks on top of the standard logging module.
"""

__version__ = "0.1.0"

from .config import PipelineConfig, get_default_config, set_default_config
from .configurator import (
    ConfigurationContext,
    ConfiguratorHook,
    DefaultConfiguratorHook,
    ProviderRegistry,
    SecurityContextProviderHook,
    configure,
    declare_hook,
    get_default_context,
    register_provider,
    run_configurators,
    set_default_context,
)
from .context import (
    clear_properties,
    get_properties,
    get_property,
    property_context,
    remove_property,
    set_property,
)
from .diagnostics import InternalLog, InternalLogEntry
from .exceptions import ConfigurationError, LogPipelineError
from .filtering import (
    CustomFilter,
    DenyAllFilter,
    FilterConfig,
    FilterDecision,
    FilterEngine,
    FilterResult,
    LevelMatchFilter,
    LevelRangeFilter,
    LogFilter,
    LoggerMatchFilter,
    PropertyFilter,
    SamplingFilter,
    StringMatchFilter,
    build_chain,
    evaluate,
)
from .handlers import PipelineFilter, PipelineHandler
from .layout import (
    PatternConverter,
    PatternFormatter,
    PatternLayout,
    StackTraceDetailPatternConverter,
    StackTracePatternConverter,
    format_record,
    render,
)
from .location import LocationCaptureFilter, LocationInfo, ParameterInfo, StackFrameInfo
from .logger import (
    configure_logger,
    get_filter_metrics,
    get_logger,
    log_with_context,
    reset_filter_metrics,
)
from .security import NullSecurityContext, SecurityContext, SecurityContextProvider

__all__ = [
    # Configuration
    "PipelineConfig",
    "get_default_config",
    "set_default_config",
    # Configuration hooks
    "ConfigurationContext",
    "ConfiguratorHook",
    "DefaultConfiguratorHook",
    "SecurityContextProviderHook",
    "ProviderRegistry",
    "configure",
    "declare_hook",
    "run_configurators",
    "register_provider",
    "get_default_context",
    "set_default_context",
    # Context properties
    "get_properties",
    "get_property",
    "set_property",
    "remove_property",
    "clear_properties",
    "property_context",
    # Diagnostics and errors
    "InternalLog",
    "InternalLogEntry",
    "LogPipelineError",
    "ConfigurationError",
    # Filtering
    "FilterDecision",
    "FilterResult",
    "LogFilter",
    "FilterConfig",
    "FilterEngine",
    "LevelMatchFilter",
    "LevelRangeFilter",
    "DenyAllFilter",
    "LoggerMatchFilter",
    "StringMatchFilter",
    "PropertyFilter",
    "CustomFilter",
    "SamplingFilter",
    "build_chain",
    "evaluate",
    # Layout
    "PatternConverter",
    "PatternLayout",
    "PatternFormatter",
    "StackTracePatternConverter",
    "StackTraceDetailPatternConverter",
    "render",
    "format_record",
    # Location
    "LocationInfo",
    "LocationCaptureFilter",
    "StackFrameInfo",
    "ParameterInfo",
    # Handlers and loggers
    "PipelineFilter",
    "PipelineHandler",
    "configure_logger",
    "get_logger",
    "log_with_context",
    "get_filter_metrics",
    "reset_filter_metrics",
    # Security
    "SecurityContext",
    "NullSecurityContext",
    "SecurityContextProvider",
]
