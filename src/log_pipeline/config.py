import os
from dataclasses import dataclass
from typing import List, Literal, Optional

from .diagnostics import InternalLog
from .exceptions import ConfigurationError
from .filtering import (
    FilterConfig,
    LevelRangeFilter,
    LogFilter,
    LoggerMatchFilter,
    SamplingFilter,
)

OutputType = Literal["stdout", "stderr"]

DEFAULT_PATTERN = "%date [%thread] %-5level %logger - %message"


@dataclass
class PipelineConfig:
    """Configuration for a pipeline-managed logger"""

    log_level: str = "INFO"
    conversion_pattern: str = DEFAULT_PATTERN
    capture_location: bool = False
    output_type: OutputType = "stdout"
    filter_config: Optional[FilterConfig] = None
    internal_debug: bool = False
    quiet: bool = False

    @classmethod
    def _parse_bool_env(cls, key: str, default: str = "false") -> bool:
        """Parse boolean from environment variable"""
        return os.getenv(key, default).lower() == "true"

    @classmethod
    def _create_filter_config_from_env(cls) -> Optional[FilterConfig]:
        """Create filter configuration from environment variables"""
        if not cls._parse_bool_env("LOG_PIPELINE_FILTERING"):
            return None

        filters: List[LogFilter] = []

        deny_loggers = os.getenv("LOG_PIPELINE_DENY_LOGGERS", "")
        for name in (n.strip() for n in deny_loggers.split(",")):
            if name:
                filters.append(LoggerMatchFilter(name, accept_on_match=False))

        level_min = os.getenv("LOG_PIPELINE_LEVEL_MIN")
        level_max = os.getenv("LOG_PIPELINE_LEVEL_MAX")
        if level_min or level_max:
            try:
                filters.append(
                    LevelRangeFilter(min_level=level_min, max_level=level_max)
                )
            except ConfigurationError as e:
                InternalLog.error(cls, "Ignoring level range from environment", e)

        try:
            sample_rate = float(os.getenv("LOG_PIPELINE_SAMPLE_RATE", "1.0"))
            max_per_second = os.getenv("LOG_PIPELINE_MAX_PER_SECOND")
            if sample_rate < 1.0 or max_per_second:
                filters.append(
                    SamplingFilter(
                        sample_rate=sample_rate,
                        strategy=os.getenv("LOG_PIPELINE_SAMPLING_STRATEGY", "random"),
                        max_per_second=int(max_per_second) if max_per_second else None,
                    )
                )
        except ValueError as e:
            InternalLog.error(cls, "Ignoring sampling settings from environment", e)

        return FilterConfig(
            enabled=True,
            filters=filters,
            collect_metrics=cls._parse_bool_env("LOG_PIPELINE_COLLECT_METRICS", "true"),
        )

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Create configuration from environment variables"""
        output_type = os.getenv("LOG_PIPELINE_OUTPUT", "stdout").lower()
        if output_type not in ["stdout", "stderr"]:
            output_type = "stdout"

        return cls(
            log_level=os.getenv("LOG_PIPELINE_LEVEL", "INFO"),
            conversion_pattern=os.getenv("LOG_PIPELINE_PATTERN", DEFAULT_PATTERN),
            capture_location=cls._parse_bool_env("LOG_PIPELINE_CAPTURE_LOCATION"),
            output_type=output_type,
            filter_config=cls._create_filter_config_from_env(),
            internal_debug=cls._parse_bool_env("LOG_PIPELINE_INTERNAL_DEBUG"),
            quiet=cls._parse_bool_env("LOG_PIPELINE_QUIET"),
        )


_default_config: Optional[PipelineConfig] = None


def get_default_config() -> PipelineConfig:
    """Get the default configuration instance"""
    global _default_config
    if _default_config is None:
        _default_config = PipelineConfig.from_env()
    return _default_config


def set_default_config(config: Optional[PipelineConfig]) -> None:
    """Set the default configuration instance"""
    global _default_config
    _default_config = config
