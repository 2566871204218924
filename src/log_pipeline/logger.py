import logging
import sys
import weakref
from typing import Any, Dict, List, Optional, Union

from .config import PipelineConfig, get_default_config
from .configurator.context import ConfigurationContext
from .context import property_context
from .diagnostics import InternalLog
from .exceptions import ConfigurationError
from .filtering import FilterConfig, FilterEngine
from .filtering.level_filter import resolve_level
from .handlers import PipelineHandler, find_pipeline_handlers
from .layout import PatternLayout

# Filter engine cache, kept only while a handler still uses the engine
_filter_engines: "weakref.WeakValueDictionary[int, FilterEngine]" = (
    weakref.WeakValueDictionary()
)


def _get_or_create_engine(filter_config: Optional[FilterConfig]) -> Optional[FilterEngine]:
    """Get the engine for a filter config, building it on first use"""
    if filter_config is None:
        return None

    engine = _filter_engines.get(id(filter_config))
    if engine is None or engine.config is not filter_config:
        try:
            engine = FilterEngine(filter_config)
        except ConfigurationError as e:
            InternalLog.error(
                __name__, "Filter chain rejected, logging without filters", e
            )
            return None
        _filter_engines[id(filter_config)] = engine
    return engine


def configure_logger(
    logger: logging.Logger,
    config: PipelineConfig,
    context: Optional[ConfigurationContext] = None,
) -> PipelineHandler:
    """Attach a PipelineHandler built from ``config``, replacing earlier ones

    Only reconfigure while nothing is logging through ``logger``.
    """
    InternalLog.configure(internal_debugging=config.internal_debug, quiet_mode=config.quiet)

    try:
        logger.setLevel(resolve_level(config.log_level))
    except ConfigurationError as e:
        InternalLog.error(__name__, f"Keeping level of logger [{logger.name}]", e)

    handler = PipelineHandler(
        layout=PatternLayout(config.conversion_pattern),
        engine=_get_or_create_engine(config.filter_config),
        stream=sys.stderr if config.output_type == "stderr" else sys.stdout,
        capture_location=config.capture_location,
        context=context,
    )

    for old_handler in find_pipeline_handlers(logger):
        logger.removeHandler(old_handler)
        old_handler.close()
    logger.addHandler(handler)
    return handler


def get_logger(name: str, config: Optional[PipelineConfig] = None) -> logging.Logger:
    """Get a logger wired to the pipeline, configuring it on first use"""
    logger = logging.getLogger(name)

    if not find_pipeline_handlers(logger):
        configure_logger(logger, config or get_default_config())
        logger.propagate = True

    return logger


def log_with_context(
    logger: logging.Logger,
    level: Union[str, int],
    message: str,
    **properties: Any,
) -> bool:
    """Log under extra context properties and report whether it was emitted"""
    levelno = resolve_level(level)
    if not logger.isEnabledFor(levelno):
        return False

    admission: List[bool] = []
    with property_context(**properties):
        logger.log(levelno, message, extra={"admission": admission}, stacklevel=2)
    return all(admission)


def get_filter_metrics(
    config: Optional[PipelineConfig] = None,
) -> Optional[Dict[str, Any]]:
    """Get filtering metrics for the current configuration"""
    config = config or get_default_config()

    if not config.filter_config or not config.filter_config.enabled:
        return None

    engine = _filter_engines.get(id(config.filter_config))
    if engine is not None:
        return engine.get_metrics()

    return None


def reset_filter_metrics(config: Optional[PipelineConfig] = None) -> None:
    """Reset filtering metrics for the current configuration"""
    config = config or get_default_config()

    if not config.filter_config or not config.filter_config.enabled:
        return

    engine = _filter_engines.get(id(config.filter_config))
    if engine is not None:
        engine.reset_metrics()
