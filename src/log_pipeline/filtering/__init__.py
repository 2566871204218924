"""
Event admission filters and the chain that evaluates them
"""

from .base import FilterDecision, FilterResult, LogFilter
from .config import FilterConfig
from .custom_filter import CustomFilter
from .engine import FilterChain, FilterEngine, build_chain, decide, evaluate
from .level_filter import DenyAllFilter, LevelMatchFilter, LevelRangeFilter
from .match_filter import LoggerMatchFilter, PropertyFilter, StringMatchFilter
from .sampling_filter import SamplingFilter

__all__ = [
    "FilterDecision",
    "FilterResult",
    "LogFilter",
    "FilterChain",
    "build_chain",
    "decide",
    "evaluate",
    "LevelMatchFilter",
    "LevelRangeFilter",
    "DenyAllFilter",
    "LoggerMatchFilter",
    "StringMatchFilter",
    "PropertyFilter",
    "CustomFilter",
    "SamplingFilter",
    "FilterConfig",
    "FilterEngine",
]
