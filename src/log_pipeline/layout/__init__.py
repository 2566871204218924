"""
Pattern layouts: render admitted records as text
"""

from .base import FormattingInfo, LiteralPatternConverter, PatternConverter
from .parser import DEFAULT_CONVERTERS, ConverterChain, PatternParser
from .pattern_layout import (
    DEFAULT_CONVERSION_PATTERN,
    DETAIL_CONVERSION_PATTERN,
    PatternFormatter,
    PatternLayout,
    format_record,
    render,
)
from .stack_trace import StackTraceDetailPatternConverter, StackTracePatternConverter

__all__ = [
    "FormattingInfo",
    "PatternConverter",
    "LiteralPatternConverter",
    "ConverterChain",
    "DEFAULT_CONVERTERS",
    "PatternParser",
    "PatternLayout",
    "PatternFormatter",
    "DEFAULT_CONVERSION_PATTERN",
    "DETAIL_CONVERSION_PATTERN",
    "render",
    "format_record",
    "StackTracePatternConverter",
    "StackTraceDetailPatternConverter",
]
