"""
Logger name, message and property matching filters
"""

import logging
import re
from typing import Any, Dict, Optional, Pattern

from ..exceptions import ConfigurationError
from .base import FilterDecision, LogFilter


class LoggerMatchFilter(LogFilter):
    """Decide on records whose logger name starts with ``logger_to_match``"""

    def __init__(self, logger_to_match: str, accept_on_match: bool = True):
        self.logger_to_match = logger_to_match
        self.accept_on_match = accept_on_match

    def activate_options(self) -> None:
        if not self.logger_to_match:
            raise ConfigurationError("LoggerMatchFilter requires logger_to_match")

    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        if not record.name.startswith(self.logger_to_match):
            return FilterDecision.NEUTRAL
        return FilterDecision.ACCEPT if self.accept_on_match else FilterDecision.DENY


class StringMatchFilter(LogFilter):
    """Decide on records whose message contains a string or matches a regex"""

    def __init__(
        self,
        string_to_match: Optional[str] = None,
        regex_to_match: Optional[str] = None,
        accept_on_match: bool = True,
    ):
        self.string_to_match = string_to_match
        self.regex_to_match = regex_to_match
        self.accept_on_match = accept_on_match
        self._regex: Optional[Pattern[str]] = None
        if regex_to_match is not None:
            try:
                self._regex = re.compile(regex_to_match)
            except re.error as e:
                raise ConfigurationError(
                    f"Invalid regex [{regex_to_match}]: {e}"
                ) from e

    def activate_options(self) -> None:
        if (self.string_to_match is None) == (self.regex_to_match is None):
            raise ConfigurationError(
                f"{self.__class__.__name__} needs exactly one of "
                "string_to_match or regex_to_match"
            )

    def _subject(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> Optional[str]:
        return record.getMessage()

    def _matches(self, value: str) -> bool:
        if self._regex is not None:
            return self._regex.search(value) is not None
        if self.string_to_match is not None:
            return self.string_to_match in value
        return False

    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        value = self._subject(record, context)
        if value is None or not self._matches(value):
            return FilterDecision.NEUTRAL
        return FilterDecision.ACCEPT if self.accept_on_match else FilterDecision.DENY


class PropertyFilter(StringMatchFilter):
    """Like StringMatchFilter, matched against a context property"""

    def __init__(
        self,
        key: str,
        string_to_match: Optional[str] = None,
        regex_to_match: Optional[str] = None,
        accept_on_match: bool = True,
    ):
        super().__init__(string_to_match, regex_to_match, accept_on_match)
        self.key = key

    def activate_options(self) -> None:
        if not self.key:
            raise ConfigurationError("PropertyFilter requires a property key")
        super().activate_options()

    def _subject(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> Optional[str]:
        if self.key not in context:
            return None
        return str(context[self.key])
