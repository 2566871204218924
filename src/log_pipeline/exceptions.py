"""
Exception types for the logging pipeline
"""


class LogPipelineError(Exception):
    """Base class for errors raised by the logging pipeline"""

    pass


class ConfigurationError(LogPipelineError):
    """Raised when a filter, converter or hook is configured incorrectly"""

    pass
