"""
Internal diagnostic channel for the logging pipeline

Configuration and rendering failures are reported here instead of being
raised to the application. The channel writes through its own stdlib logger
that does not propagate, so reporting a failure never re-enters a user
configured pipeline.
"""

import logging
import sys
import threading
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, List, Optional

INTERNAL_LOGGER_NAME = "log_pipeline.internal"
PREFIX = "log_pipeline: "


@dataclass
class InternalLogEntry:
    """One message reported on the diagnostic channel"""

    level: int
    source: str
    message: str
    exception: Optional[BaseException] = None

    @property
    def levelname(self) -> str:
        return logging.getLevelName(self.level)


def _source_name(source: Any) -> str:
    if source is None:
        return ""
    if isinstance(source, str):
        return source
    if isinstance(source, type):
        return f"{source.__module__}.{source.__qualname__}"
    return f"{type(source).__module__}.{type(source).__qualname__}"


class InternalLog:
    """Reports pipeline failures without going through the pipeline itself"""

    internal_debugging: bool = False
    quiet_mode: bool = False

    _lock = threading.Lock()
    _listeners: List[List[InternalLogEntry]] = []
    _logger: Optional[logging.Logger] = None

    @classmethod
    def _get_logger(cls) -> logging.Logger:
        if cls._logger is None:
            logger = logging.getLogger(INTERNAL_LOGGER_NAME)
            logger.propagate = False
            logger.setLevel(logging.DEBUG)
            if not logger.handlers:
                handler = logging.StreamHandler(sys.stderr)
                handler.setFormatter(logging.Formatter(PREFIX + "%(levelname)s %(message)s"))
                logger.addHandler(handler)
            cls._logger = logger
        return cls._logger

    @classmethod
    def configure(
        cls, internal_debugging: Optional[bool] = None, quiet_mode: Optional[bool] = None
    ) -> None:
        """Switch debug output and quiet mode on or off"""
        if internal_debugging is not None:
            cls.internal_debugging = internal_debugging
        if quiet_mode is not None:
            cls.quiet_mode = quiet_mode

    @classmethod
    def debug(cls, source: Any, message: str, exc: Optional[BaseException] = None) -> None:
        if cls.internal_debugging:
            cls._emit(logging.DEBUG, source, message, exc)

    @classmethod
    def warn(cls, source: Any, message: str, exc: Optional[BaseException] = None) -> None:
        cls._emit(logging.WARNING, source, message, exc)

    @classmethod
    def error(cls, source: Any, message: str, exc: Optional[BaseException] = None) -> None:
        cls._emit(logging.ERROR, source, message, exc)

    @classmethod
    def _emit(
        cls, level: int, source: Any, message: str, exc: Optional[BaseException]
    ) -> None:
        if cls.quiet_mode:
            return

        entry = InternalLogEntry(
            level=level, source=_source_name(source), message=message, exception=exc
        )
        with cls._lock:
            for listener in cls._listeners:
                listener.append(entry)

        text = f"[{entry.source}] {message}" if entry.source else message
        if exc is not None:
            text = f"{text} ({type(exc).__name__}: {exc})"
        cls._get_logger().log(level, text)

    @classmethod
    @contextmanager
    def capture(cls) -> Generator[List[InternalLogEntry], None, None]:
        """Collect every entry reported while the block runs"""
        entries: List[InternalLogEntry] = []
        with cls._lock:
            cls._listeners.append(entries)
        try:
            yield entries
        finally:
            with cls._lock:
                cls._listeners[:] = [
                    listener for listener in cls._listeners if listener is not entries
                ]
