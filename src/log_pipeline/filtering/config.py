"""
Filter chain configuration and ready-made chains
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .base import LogFilter
from .level_filter import DenyAllFilter, LevelMatchFilter, LevelRangeFilter
from .match_filter import LoggerMatchFilter
from .sampling_filter import SamplingFilter

DEFAULT_QUIET_LOGGERS = ("urllib3", "asyncio")


@dataclass
class FilterConfig:
    """An ordered list of filters plus engine switches"""

    enabled: bool = True
    filters: List[LogFilter] = field(default_factory=list)
    collect_metrics: bool = True

    @classmethod
    def create_production_config(
        cls,
        quiet_loggers: Sequence[str] = DEFAULT_QUIET_LOGGERS,
        sample_rate: float = 1.0,
        max_logs_per_second: Optional[int] = None,
    ) -> "FilterConfig":
        """INFO and up, errors always kept, chatty libraries and excess volume dropped

        ERROR and CRITICAL records are accepted before the logger denials and
        sampling are consulted.
        """
        filters: List[LogFilter] = [
            LevelRangeFilter(min_level=logging.INFO),
            LevelMatchFilter(logging.ERROR),
            LevelMatchFilter(logging.CRITICAL),
        ]
        filters.extend(
            LoggerMatchFilter(name, accept_on_match=False) for name in quiet_loggers
        )
        if sample_rate < 1.0 or max_logs_per_second:
            filters.append(
                SamplingFilter(
                    sample_rate=sample_rate,
                    strategy="random",
                    max_per_second=max_logs_per_second,
                )
            )
        return cls(enabled=True, filters=filters, collect_metrics=True)

    @classmethod
    def create_debug_config(
        cls, only_loggers: Sequence[str] = ()
    ) -> "FilterConfig":
        """Everything from DEBUG up, optionally limited to some logger subtrees"""
        filters: List[LogFilter] = [LevelRangeFilter(min_level=logging.DEBUG)]
        if only_loggers:
            filters.extend(LoggerMatchFilter(name) for name in only_loggers)
            filters.append(DenyAllFilter())
        return cls(enabled=True, filters=filters, collect_metrics=False)
