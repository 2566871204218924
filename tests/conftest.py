import pytest

from log_pipeline.config import set_default_config
from log_pipeline.configurator import clear_declared_hooks, set_default_context
from log_pipeline.context import clear_properties
from log_pipeline.diagnostics import InternalLog


@pytest.fixture(autouse=True)
def reset_pipeline_state():
    """Start every test with fresh process-wide pipeline state"""
    set_default_config(None)
    set_default_context(None)
    clear_declared_hooks()
    clear_properties()
    InternalLog.configure(internal_debugging=False, quiet_mode=False)
    yield
    set_default_config(None)
    set_default_context(None)
    clear_declared_hooks()
