"""
Base classes for pattern converters
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..diagnostics import InternalLog


@dataclass(frozen=True)
class FormattingInfo:
    """Width constraints from a directive such as ``%-5.10level``"""

    min_width: int = 0
    max_width: Optional[int] = None
    left_align: bool = False

    def apply(self, text: str) -> str:
        if self.max_width is not None and len(text) > self.max_width:
            # keep the tail, the end of a logger or type name says the most
            text = text[len(text) - self.max_width :]
        if len(text) < self.min_width:
            if self.left_align:
                text = text.ljust(self.min_width)
            else:
                text = text.rjust(self.min_width)
        return text


DEFAULT_FORMATTING = FormattingInfo()


class PatternConverter(ABC):
    """Renders one directive of a conversion pattern

    Subclasses implement ``convert``. Callers use ``format``, which applies
    width constraints and never raises: a failing converter is reported on
    the diagnostic channel and renders as an empty fragment.
    """

    requires_location = False

    def __init__(
        self,
        option: Optional[str] = None,
        formatting_info: FormattingInfo = DEFAULT_FORMATTING,
    ):
        self.option = option
        self.formatting_info = formatting_info

    def activate_options(self) -> None:
        """Parse ``option``; report bad values and fall back to defaults"""
        pass

    @abstractmethod
    def convert(self, record: logging.LogRecord) -> str:
        pass

    def format(self, record: logging.LogRecord) -> str:
        try:
            text = self.convert(record)
        except Exception as e:
            InternalLog.error(
                self, f"Failed to render pattern converter {self.__class__.__name__}", e
            )
            return ""
        if self.formatting_info == DEFAULT_FORMATTING:
            return text
        return self.formatting_info.apply(text)

    def _int_option(self, default: int) -> int:
        """Positive integer option, or ``default`` with an error if invalid"""
        if self.option is None or self.option.strip() == "":
            return default
        try:
            value = int(self.option.strip())
        except ValueError:
            InternalLog.error(
                self,
                f"{self.__class__.__name__} option [{self.option}] is not an integer",
            )
            return default
        if value <= 0:
            InternalLog.error(
                self,
                f"{self.__class__.__name__} option [{self.option}] must be positive",
            )
            return default
        return value


class LiteralPatternConverter(PatternConverter):
    """Text between directives, copied through unchanged"""

    def __init__(self, text: str):
        super().__init__(option=text)
        self.text = text

    def convert(self, record: logging.LogRecord) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"LiteralPatternConverter({self.text!r})"
