"""
Custom function-based log filtering
"""

import logging
from typing import Any, Callable, Dict, Union

from .base import FilterDecision, LogFilter

FilterFunc = Callable[
    [logging.LogRecord, Dict[str, Any]], Union[FilterDecision, bool]
]


class CustomFilter(LogFilter):
    """Filter logs using custom function

    The function returns a FilterDecision, or a bool where True passes the
    record on (NEUTRAL) and False drops it (DENY).
    """

    def __init__(self, filter_func: FilterFunc, name: str = "custom"):
        self.filter_func = filter_func
        self.name = name

    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        result = self.filter_func(record, context)
        if isinstance(result, FilterDecision):
            return result
        return FilterDecision.NEUTRAL if result else FilterDecision.DENY
