"""
stdlib logging handler wired to the filter chain and pattern layout
"""

import logging
import sys
from typing import IO, Any, List, Optional

from .configurator.context import ConfigurationContext, get_default_context
from .context import get_properties
from .filtering import FilterEngine
from .layout import PatternFormatter, PatternLayout
from .location import LocationCaptureFilter


class PipelineFilter(logging.Filter):
    """Runs a FilterEngine as a stdlib logging filter

    Admitted records get a snapshot of the context properties so layouts
    render the values that were current when the call was made. A list
    passed as ``extra={"admission": [...]}`` receives the decision.
    """

    def __init__(self, engine: FilterEngine):
        super().__init__()
        self.engine = engine

    def filter(self, record: logging.LogRecord) -> bool:
        properties = get_properties()
        should_log = self.engine.should_log(record, properties).should_log
        if should_log:
            record.properties = properties

        admission: Any = getattr(record, "admission", None)
        if isinstance(admission, list):
            admission.append(should_log)
        return should_log


class PipelineHandler(logging.StreamHandler):
    """Stream handler that screens, locates and renders records

    The security context is taken from the configuration context when the
    handler is built, so provider hooks must run first.
    """

    def __init__(
        self,
        layout: PatternLayout,
        engine: Optional[FilterEngine] = None,
        stream: Optional[IO[str]] = None,
        capture_location: bool = False,
        context: Optional[ConfigurationContext] = None,
    ):
        super().__init__(stream if stream is not None else sys.stdout)
        self.layout = layout
        self.engine = engine
        self.setFormatter(PatternFormatter(layout=layout))

        if engine is not None:
            self.addFilter(PipelineFilter(engine))
        if capture_location or layout.requires_location:
            self.addFilter(LocationCaptureFilter())

        context = context if context is not None else get_default_context()
        self.security_context = context.security_provider.create_security_context(self)

    def emit(self, record: logging.LogRecord) -> None:
        with self.security_context.impersonate(self):
            super().emit(record)


def find_pipeline_handlers(logger: logging.Logger) -> List[PipelineHandler]:
    return [h for h in logger.handlers if isinstance(h, PipelineHandler)]
