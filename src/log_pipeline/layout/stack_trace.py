"""
Stack trace pattern converters

``%stacktrace{n}`` writes the ``n`` innermost caller frames, outermost
first::

    type3.method3 > type2.method2 > type1.method1

``%stacktracedetail{n}`` adds each method's parameters::

    type3.method3(int x, str y) > type2.method2() > type1.method1(dict d)
"""

import logging
from typing import Any, List

from ..diagnostics import InternalLog
from ..location import LocationInfo, StackFrameInfo
from .base import PatternConverter

FRAME_SEPARATOR = " > "
PARAMETER_SEPARATOR = ", "


class StackTracePatternConverter(PatternConverter):
    """Writes the caller stack frames of a record"""

    requires_location = True

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.depth = 1

    def activate_options(self) -> None:
        self.depth = self._int_option(default=1)

    def convert(self, record: logging.LogRecord) -> str:
        frames = LocationInfo.from_record(record).stack_frames
        if not frames:
            return ""

        depth = min(self.depth, len(frames))
        parts = []
        for frame in reversed(frames[:depth]):
            text = self.get_frame_information(frame)
            if text:
                parts.append(text)
        return FRAME_SEPARATOR.join(parts)

    def get_base_information(self, frame: StackFrameInfo) -> str:
        return f"{frame.declaring_type}.{frame.method_name}"

    def get_frame_information(self, frame: StackFrameInfo) -> str:
        try:
            return self.get_base_information(frame)
        except Exception as e:
            InternalLog.error(self, "Failed to read stack frame information", e)
            return ""


class StackTraceDetailPatternConverter(StackTracePatternConverter):
    """Writes the caller stack frames along with their parameters"""

    def get_frame_information(self, frame: StackFrameInfo) -> str:
        try:
            base = self.get_base_information(frame)
        except Exception as e:
            InternalLog.error(self, "Failed to read method information", e)
            return ""

        parameters = PARAMETER_SEPARATOR.join(self.get_parameter_descriptions(frame))
        return f"{base}({parameters})"

    def get_parameter_descriptions(self, frame: StackFrameInfo) -> List[str]:
        """``"<type> <name>"`` per parameter; empty if they cannot be read"""
        try:
            return [f"{p.type_name} {p.name}" for p in frame.parameters()]
        except Exception as e:
            InternalLog.error(self, "Failed to read method parameters", e)
            return []
