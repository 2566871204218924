"""
Tests for the stack trace pattern converters
"""

import logging

from log_pipeline.diagnostics import InternalLog
from log_pipeline.layout import (
    PatternLayout,
    StackTraceDetailPatternConverter,
    StackTracePatternConverter,
)
from log_pipeline.location import LocationInfo, ParameterInfo, StackFrameInfo


def make_record(frames):
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="message",
        args=(),
        exc_info=None,
    )
    record.location_info = LocationInfo(stack_frames=list(frames))
    return record


def failing_parameters():
    raise RuntimeError("parameters unavailable")


class BrokenFrame(StackFrameInfo):
    """A frame whose type information cannot be read"""

    def __init__(self):
        super().__init__("unused", "unused")

    @property
    def declaring_type(self):
        raise RuntimeError("type unavailable")

    @declaring_type.setter
    def declaring_type(self, value):
        pass


def detail(option=None):
    converter = StackTraceDetailPatternConverter(option=option)
    converter.activate_options()
    return converter


class TestStackTraceDetail:
    def test_zero_parameters(self):
        frame = StackFrameInfo("Type", "Method")
        assert detail().format(make_record([frame])) == "Type.Method()"

    def test_two_parameters(self):
        frame = StackFrameInfo(
            "Type",
            "Method",
            parameters=[ParameterInfo("int", "x"), ParameterInfo("string", "y")],
        )
        assert detail().format(make_record([frame])) == "Type.Method(int x, string y)"

    def test_single_parameter(self):
        frame = StackFrameInfo("Type", "Method", parameters=[ParameterInfo("int", "x")])
        assert detail().format(make_record([frame])) == "Type.Method(int x)"

    def test_parameter_failure_renders_empty_list(self):
        frame = StackFrameInfo("Type", "Method", parameter_source=failing_parameters)

        with InternalLog.capture() as entries:
            text = detail().format(make_record([frame]))

        assert text == "Type.Method()"
        assert len(entries) == 1
        assert entries[0].levelname == "ERROR"

    def test_base_failure_renders_empty_frame(self):
        with InternalLog.capture() as entries:
            text = detail().format(make_record([BrokenFrame()]))

        assert text == ""
        assert len(entries) == 1

    def test_no_frames_renders_nothing(self):
        with InternalLog.capture() as entries:
            assert detail().format(make_record([])) == ""
        assert entries == []

    def test_no_location_renders_nothing(self):
        record = make_record([])
        del record.location_info
        assert detail().format(record) == ""

    def test_depth_renders_outermost_first(self):
        frames = [
            StackFrameInfo("Inner", "leaf", parameters=[ParameterInfo("int", "n")]),
            StackFrameInfo("Middle", "step"),
            StackFrameInfo("Outer", "main"),
        ]
        assert (
            detail("2").format(make_record(frames))
            == "Middle.step() > Inner.leaf(int n)"
        )
        assert (
            detail("10").format(make_record(frames))
            == "Outer.main() > Middle.step() > Inner.leaf(int n)"
        )

    def test_broken_frame_does_not_hide_others(self):
        frames = [StackFrameInfo("Inner", "leaf"), BrokenFrame()]
        with InternalLog.capture():
            assert detail("2").format(make_record(frames)) == "Inner.leaf()"

    def test_rest_of_pattern_still_renders(self):
        frame = StackFrameInfo("Type", "Method", parameter_source=failing_parameters)
        layout = PatternLayout("%level [%stacktracedetail] %message")

        with InternalLog.capture():
            text = layout.format(make_record([frame]))

        assert text == "INFO [Type.Method()] message"


class TestStackTrace:
    def test_default_depth_is_one(self):
        frames = [StackFrameInfo("Inner", "leaf"), StackFrameInfo("Outer", "main")]
        converter = StackTracePatternConverter()
        converter.activate_options()
        assert converter.format(make_record(frames)) == "Inner.leaf"

    def test_invalid_depth_reported(self):
        with InternalLog.capture() as entries:
            converter = StackTracePatternConverter(option="-3")
            converter.activate_options()

        assert converter.depth == 1
        assert len(entries) == 1

    def test_pattern_option(self):
        frames = [StackFrameInfo("Inner", "leaf"), StackFrameInfo("Outer", "main")]
        layout = PatternLayout("%stacktrace{2}")
        assert layout.requires_location is True
        assert layout.format(make_record(frames)) == "Outer.main > Inner.leaf"


class Service:
    def handle(self, request_id: int, payload: str = "", *args, verbose: bool = False, **extra):
        return LocationInfo.capture()


def test_detail_of_captured_method():
    location = Service().handle(7, "body")
    converter = detail()
    record = make_record(location.stack_frames)

    assert converter.format(record) == (
        "Service.handle(int request_id, str payload, tuple *args, "
        "bool verbose, dict **extra)"
    )
