import logging

from log_pipeline.diagnostics import INTERNAL_LOGGER_NAME, InternalLog


class Source:
    pass


def test_error_is_captured_with_source_name():
    error = ValueError("bad value")
    with InternalLog.capture() as entries:
        InternalLog.error(Source, "Something failed", error)

    assert len(entries) == 1
    entry = entries[0]
    assert entry.level == logging.ERROR
    assert entry.levelname == "ERROR"
    assert entry.source.endswith("Source")
    assert entry.message == "Something failed"
    assert entry.exception is error


def test_debug_only_when_enabled():
    with InternalLog.capture() as entries:
        InternalLog.debug("src", "hidden")
        InternalLog.configure(internal_debugging=True)
        InternalLog.debug("src", "shown")

    assert [e.message for e in entries] == ["shown"]


def test_quiet_mode_suppresses_everything():
    InternalLog.configure(quiet_mode=True)
    with InternalLog.capture() as entries:
        InternalLog.error("src", "dropped")
        InternalLog.warn("src", "dropped")

    assert entries == []


def test_nested_captures_both_receive_entries():
    with InternalLog.capture() as outer:
        with InternalLog.capture() as inner:
            InternalLog.warn(Source(), "careful")
        InternalLog.warn("src", "after")

    assert len(inner) == 1
    assert len(outer) == 2


def test_internal_logger_does_not_propagate():
    InternalLog.warn("src", "written to stderr")

    logger = logging.getLogger(INTERNAL_LOGGER_NAME)
    assert logger.propagate is False
    assert logger.handlers


def test_inner_capture_detaches_only_itself():
    with InternalLog.capture() as outer:
        with InternalLog.capture() as inner:
            InternalLog.warn("src", "shared")
        assert inner == outer
        InternalLog.warn("src", "outer only")

    InternalLog.warn("src", "nobody listening")

    assert [e.message for e in inner] == ["shared"]
    assert [e.message for e in outer] == ["shared", "outer only"]
