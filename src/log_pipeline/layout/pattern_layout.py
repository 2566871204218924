"""
Pattern layout and its stdlib formatter adapter
"""

import logging
import threading
from typing import Dict, Optional, Type

from .base import PatternConverter
from .parser import DEFAULT_CONVERTERS, ConverterChain, PatternParser

DEFAULT_CONVERSION_PATTERN = "%message%newline"
DETAIL_CONVERSION_PATTERN = "%timestamp [%thread] %level %logger - %message%newline"


def render(chain: Optional[ConverterChain], record: logging.LogRecord) -> str:
    """Render a record through a converter chain"""
    return "".join(converter.format(record) for converter in chain or ())


class PatternLayout:
    """Formats records according to a conversion pattern

    The pattern is parsed into an immutable chain when the layout is built,
    so one layout can be shared by any number of threads.
    """

    def __init__(self, conversion_pattern: str = DEFAULT_CONVERSION_PATTERN):
        self._converters: Dict[str, Type[PatternConverter]] = dict(DEFAULT_CONVERTERS)
        self._conversion_pattern = conversion_pattern
        self.chain: ConverterChain = ()
        self.activate_options()

    @property
    def conversion_pattern(self) -> str:
        return self._conversion_pattern

    @conversion_pattern.setter
    def conversion_pattern(self, pattern: str) -> None:
        self._conversion_pattern = pattern
        self.activate_options()

    def add_converter(self, name: str, converter_type: Type[PatternConverter]) -> None:
        """Register a custom directive and re-parse the pattern"""
        self._converters[name] = converter_type
        self.activate_options()

    def activate_options(self) -> None:
        self.chain = PatternParser(self._conversion_pattern, self._converters).parse()

    @property
    def requires_location(self) -> bool:
        return any(converter.requires_location for converter in self.chain)

    def format(self, record: logging.LogRecord) -> str:
        return render(self.chain, record)


MAX_CACHED_LAYOUTS = 128

_layout_cache: Dict[str, PatternLayout] = {}
_layout_cache_lock = threading.Lock()


def format_record(conversion_pattern: str, record: logging.LogRecord) -> str:
    """Render a record with a pattern, reusing the parsed chain"""
    layout = _layout_cache.get(conversion_pattern)
    if layout is None:
        with _layout_cache_lock:
            layout = _layout_cache.get(conversion_pattern)
            if layout is None:
                layout = PatternLayout(conversion_pattern)
                if len(_layout_cache) < MAX_CACHED_LAYOUTS:
                    _layout_cache[conversion_pattern] = layout
    return layout.format(record)


class PatternFormatter(logging.Formatter):
    """logging.Formatter that renders through a PatternLayout"""

    def __init__(
        self,
        conversion_pattern: Optional[str] = None,
        layout: Optional[PatternLayout] = None,
    ):
        super().__init__()
        if layout is None:
            layout = PatternLayout(conversion_pattern or DEFAULT_CONVERSION_PATTERN)
        self.layout = layout

    def format(self, record: logging.LogRecord) -> str:
        return self.layout.format(record)
