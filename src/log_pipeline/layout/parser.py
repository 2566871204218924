"""
Conversion pattern parsing
"""

import re
from typing import Dict, List, Mapping, Optional, Tuple, Type

from ..diagnostics import InternalLog
from .base import FormattingInfo, LiteralPatternConverter, PatternConverter
from .converters import (
    DatePatternConverter,
    ExceptionPatternConverter,
    FileLocationPatternConverter,
    FullLocationPatternConverter,
    LevelPatternConverter,
    LineLocationPatternConverter,
    LoggerPatternConverter,
    MessagePatternConverter,
    MethodLocationPatternConverter,
    NewLinePatternConverter,
    PropertyPatternConverter,
    RelativeTimePatternConverter,
    ThreadPatternConverter,
    TypeNamePatternConverter,
)
from .stack_trace import StackTraceDetailPatternConverter, StackTracePatternConverter

ConverterChain = Tuple[PatternConverter, ...]

DEFAULT_CONVERTERS: Dict[str, Type[PatternConverter]] = {
    "level": LevelPatternConverter,
    "p": LevelPatternConverter,
    "logger": LoggerPatternConverter,
    "c": LoggerPatternConverter,
    "message": MessagePatternConverter,
    "m": MessagePatternConverter,
    "newline": NewLinePatternConverter,
    "n": NewLinePatternConverter,
    "date": DatePatternConverter,
    "d": DatePatternConverter,
    "timestamp": RelativeTimePatternConverter,
    "r": RelativeTimePatternConverter,
    "thread": ThreadPatternConverter,
    "t": ThreadPatternConverter,
    "property": PropertyPatternConverter,
    "X": PropertyPatternConverter,
    "type": TypeNamePatternConverter,
    "class": TypeNamePatternConverter,
    "C": TypeNamePatternConverter,
    "method": MethodLocationPatternConverter,
    "M": MethodLocationPatternConverter,
    "file": FileLocationPatternConverter,
    "F": FileLocationPatternConverter,
    "line": LineLocationPatternConverter,
    "L": LineLocationPatternConverter,
    "location": FullLocationPatternConverter,
    "l": FullLocationPatternConverter,
    "exception": ExceptionPatternConverter,
    "stacktrace": StackTracePatternConverter,
    "stacktracedetail": StackTraceDetailPatternConverter,
}

_TOKEN = re.compile(
    r"%(?:(?P<percent>%)"
    r"|(?P<left>-)?(?P<min>\d+)?(?:\.(?P<max>\d+))?"
    r"(?P<name>[A-Za-z_]+)(?:\{(?P<option>[^}]*)\})?)"
)


class PatternParser:
    """Turns a conversion pattern into a chain of converters"""

    def __init__(
        self, pattern: str, converters: Optional[Mapping[str, Type[PatternConverter]]] = None
    ):
        self.pattern = pattern
        self.converters = dict(DEFAULT_CONVERTERS if converters is None else converters)

    def _lookup(self, name: str) -> Tuple[Optional[str], str]:
        """Exact directive name, else the longest directive prefixing it"""
        if name in self.converters:
            return name, ""
        for length in range(len(name) - 1, 0, -1):
            if name[:length] in self.converters:
                return name[:length], name[length:]
        return None, name

    def parse(self) -> ConverterChain:
        chain: List[PatternConverter] = []
        literal: List[str] = []

        def flush() -> None:
            text = "".join(literal)
            if text:
                chain.append(LiteralPatternConverter(text))
            literal.clear()

        position = 0
        for match in _TOKEN.finditer(self.pattern):
            literal.append(self.pattern[position : match.start()])
            position = match.end()

            if match.group("percent"):
                literal.append("%")
                continue

            key, rest = self._lookup(match.group("name"))
            option = match.group("option")
            if key is None:
                InternalLog.error(
                    self,
                    f"Unknown conversion pattern name [{match.group('name')}] "
                    f"in pattern [{self.pattern}]",
                )
                literal.append(match.group(0))
                continue

            if rest:
                # the option belonged to the unknown remainder
                tail = rest + (f"{{{option}}}" if option is not None else "")
                option = None
            else:
                tail = ""

            flush()
            formatting_info = FormattingInfo(
                min_width=int(match.group("min") or 0),
                max_width=int(match.group("max")) if match.group("max") else None,
                left_align=bool(match.group("left")),
            )
            converter = self.converters[key](
                option=option, formatting_info=formatting_info
            )
            converter.activate_options()
            chain.append(converter)
            if tail:
                literal.append(tail)

        literal.append(self.pattern[position:])
        flush()
        return tuple(chain)
