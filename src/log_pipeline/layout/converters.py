"""
Pattern converters for the standard directives
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..context import get_properties
from ..location import LocationInfo
from .base import PatternConverter

_exception_formatter = logging.Formatter()

ISO8601 = "ISO8601"
ABSOLUTE = "ABSOLUTE"
DATE = "DATE"

_NAMED_DATE_FORMATS = {
    ISO8601: "%Y-%m-%d %H:%M:%S",
    ABSOLUTE: "%H:%M:%S",
    DATE: "%d %b %Y %H:%M:%S",
}


def _abbreviate(name: str, precision: Optional[int]) -> str:
    """Keep the last ``precision`` dot separated segments"""
    if precision is None:
        return name
    parts = name.split(".")
    return ".".join(parts[-precision:])


class LevelPatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        return record.levelname


class MessagePatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class NewLinePatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        return "\n"


class ThreadPatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        return str(record.threadName or record.thread)


class RelativeTimePatternConverter(PatternConverter):
    """Milliseconds between logging module load and the record"""

    def convert(self, record: logging.LogRecord) -> str:
        return str(int(record.relativeCreated))


class NamedPatternConverter(PatternConverter):
    """Dotted name with an optional ``{n}`` segment count"""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.precision: Optional[int] = None

    def activate_options(self) -> None:
        if self.option is not None:
            self.precision = self._int_option(default=0) or None

    def get_full_name(self, record: logging.LogRecord) -> str:
        raise NotImplementedError

    def convert(self, record: logging.LogRecord) -> str:
        return _abbreviate(self.get_full_name(record), self.precision)


class LoggerPatternConverter(NamedPatternConverter):
    def get_full_name(self, record: logging.LogRecord) -> str:
        return record.name


class TypeNamePatternConverter(NamedPatternConverter):
    requires_location = True

    def get_full_name(self, record: logging.LogRecord) -> str:
        return LocationInfo.from_record(record).class_name


class MethodLocationPatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        return LocationInfo.from_record(record).method_name


class FileLocationPatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        return LocationInfo.from_record(record).file_name


class LineLocationPatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        return str(LocationInfo.from_record(record).line_number)


class FullLocationPatternConverter(PatternConverter):
    requires_location = True

    def convert(self, record: logging.LogRecord) -> str:
        return LocationInfo.from_record(record).full_info


class DatePatternConverter(PatternConverter):
    """Record time as ``ISO8601``, ``ABSOLUTE``, ``DATE`` or a strftime format"""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.date_format = _NAMED_DATE_FORMATS[ISO8601]
        self.with_millis = True

    def activate_options(self) -> None:
        option = (self.option or ISO8601).strip()
        named = _NAMED_DATE_FORMATS.get(option.upper())
        if named is not None:
            self.date_format = named
            self.with_millis = True
        else:
            self.date_format = option
            self.with_millis = False

    def convert(self, record: logging.LogRecord) -> str:
        text = datetime.fromtimestamp(record.created).strftime(self.date_format)
        if self.with_millis:
            text = f"{text},{int(record.msecs):03d}"
        return text


class PropertyPatternConverter(PatternConverter):
    """A context property, or all of them when no key is given

    Properties snapshotted onto the record when it was admitted take
    precedence over the properties of the rendering context.
    """

    def _properties(self, record: logging.LogRecord) -> Dict[str, Any]:
        snapshot = getattr(record, "properties", None)
        if isinstance(snapshot, dict):
            return snapshot
        return get_properties()

    def convert(self, record: logging.LogRecord) -> str:
        props = self._properties(record)
        if self.option:
            if self.option in props:
                return str(props[self.option])
            value = getattr(record, self.option, None)
            return "" if value is None else str(value)
        if not props:
            return ""
        return "{" + ", ".join(f"{k}={props[k]}" for k in sorted(props)) + "}"


class ExceptionPatternConverter(PatternConverter):
    def convert(self, record: logging.LogRecord) -> str:
        if record.exc_info and not record.exc_text:
            record.exc_text = _exception_formatter.formatException(record.exc_info)
        if not record.exc_text:
            return ""
        return record.exc_text + "\n"
