"""
Level-based log filtering
"""

import logging
from typing import Any, Dict, Optional, Union

from ..exceptions import ConfigurationError
from .base import FilterDecision, LogFilter


def resolve_level(level: Union[str, int]) -> int:
    """Turn a level name or number into a level number"""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown log level [{level}]")
    return resolved


class LevelMatchFilter(LogFilter):
    """Decide on records whose level is exactly ``level``"""

    def __init__(self, level: Union[str, int], accept_on_match: bool = True):
        self.level = resolve_level(level)
        self.accept_on_match = accept_on_match

    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        if record.levelno != self.level:
            return FilterDecision.NEUTRAL
        return FilterDecision.ACCEPT if self.accept_on_match else FilterDecision.DENY


class LevelRangeFilter(LogFilter):
    """Deny records outside ``[min_level, max_level]``

    Records inside the range are accepted when ``accept_on_match`` is set,
    otherwise they are passed on to the next filter.
    """

    def __init__(
        self,
        min_level: Optional[Union[str, int]] = None,
        max_level: Optional[Union[str, int]] = None,
        accept_on_match: bool = False,
    ):
        self.min_level = resolve_level(min_level) if min_level is not None else None
        self.max_level = resolve_level(max_level) if max_level is not None else None
        self.accept_on_match = accept_on_match

    def activate_options(self) -> None:
        if (
            self.min_level is not None
            and self.max_level is not None
            and self.min_level > self.max_level
        ):
            raise ConfigurationError(
                f"LevelRangeFilter min level {logging.getLevelName(self.min_level)} "
                f"is above max level {logging.getLevelName(self.max_level)}"
            )

    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        if self.min_level is not None and record.levelno < self.min_level:
            return FilterDecision.DENY
        if self.max_level is not None and record.levelno > self.max_level:
            return FilterDecision.DENY
        return FilterDecision.ACCEPT if self.accept_on_match else FilterDecision.NEUTRAL


class DenyAllFilter(LogFilter):
    """Drop everything that reaches it; put it last in a chain"""

    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        return FilterDecision.DENY
