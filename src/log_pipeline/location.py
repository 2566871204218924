"""
Call location and stack frame capture

Frames are captured on the thread that makes the logging call, since the
stack is gone by the time a handler renders the record.
"""

import inspect
import logging
import os
import sys
from dataclasses import dataclass, field
from types import CodeType, FrameType
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

SKIPPED_MODULES = ("logging", "log_pipeline", "contextlib")
IMPLICIT_FIRST_ARGS = ("self", "cls")
NA = "?"

_CO_VARARGS = inspect.CO_VARARGS
_CO_VARKEYWORDS = inspect.CO_VARKEYWORDS


@dataclass(frozen=True)
class ParameterInfo:
    """One formal parameter of a method"""

    type_name: str
    name: str


def _type_name(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "object"
    if isinstance(annotation, type):
        return annotation.__name__
    if isinstance(annotation, str):
        return annotation
    return str(annotation).replace("typing.", "")


def _split_qualname(qualname: str, module: str) -> Tuple[str, str]:
    if "." in qualname:
        owner, name = qualname.rsplit(".", 1)
        return owner, name
    return module, qualname


class StackFrameInfo:
    """Describes one frame of a captured call stack"""

    def __init__(
        self,
        declaring_type: str,
        method_name: str,
        parameters: Optional[Sequence[ParameterInfo]] = None,
        file_name: str = NA,
        line_number: int = 0,
        parameter_source: Optional[Callable[[], Sequence[ParameterInfo]]] = None,
    ):
        self.declaring_type = declaring_type
        self.method_name = method_name
        self.file_name = file_name
        self.line_number = line_number
        self._parameters = tuple(parameters or ())
        self._parameter_source = parameter_source

    def parameters(self) -> List[ParameterInfo]:
        """Formal parameters in declaration order"""
        if self._parameter_source is not None:
            return list(self._parameter_source())
        return list(self._parameters)

    def __repr__(self) -> str:
        return (
            f"StackFrameInfo({self.declaring_type}.{self.method_name} "
            f"at {self.file_name}:{self.line_number})"
        )

    @classmethod
    def from_frame(cls, frame: FrameType) -> "StackFrameInfo":
        code = frame.f_code
        module = frame.f_globals.get("__name__", NA)
        qualname = getattr(code, "co_qualname", None)
        if qualname is None:
            qualname = _qualname_from_locals(code, frame.f_locals)
        declaring_type, method_name = _split_qualname(qualname, module)

        # Declared annotations win; runtime types fill in unannotated parameters
        arg_types = _argument_types(code, frame.f_locals)
        arg_types.update(_declared_types(_resolve_function(code, qualname, frame)))
        return cls(
            declaring_type=declaring_type,
            method_name=method_name,
            file_name=code.co_filename,
            line_number=frame.f_lineno,
            parameter_source=lambda: _code_parameters(code, arg_types),
        )

    @classmethod
    def from_callable(cls, func: Callable[..., Any]) -> "StackFrameInfo":
        """Describe a function from its signature, using annotations as types"""
        func = inspect.unwrap(func)
        module = getattr(func, "__module__", None) or NA
        qualname = getattr(func, "__qualname__", None) or getattr(func, "__name__", NA)
        declaring_type, method_name = _split_qualname(qualname, module)

        code = getattr(func, "__code__", None)
        return cls(
            declaring_type=declaring_type,
            method_name=method_name,
            file_name=code.co_filename if code is not None else NA,
            line_number=code.co_firstlineno if code is not None else 0,
            parameter_source=lambda: _signature_parameters(func, "." in qualname),
        )


def _qualname_from_locals(code: CodeType, f_locals: Dict[str, Any]) -> str:
    """Best effort qualified name on interpreters without co_qualname"""
    if code.co_argcount and code.co_varnames[0] in IMPLICIT_FIRST_ARGS:
        owner = f_locals.get(code.co_varnames[0])
        if owner is not None:
            owner_type = owner if isinstance(owner, type) else type(owner)
            return f"{owner_type.__name__}.{code.co_name}"
    return code.co_name


def _argument_names(code: CodeType) -> List[str]:
    positional = list(code.co_varnames[: code.co_argcount])
    kwonly = list(
        code.co_varnames[code.co_argcount : code.co_argcount + code.co_kwonlyargcount]
    )
    index = code.co_argcount + code.co_kwonlyargcount
    names = positional
    if code.co_flags & _CO_VARARGS:
        names.append("*" + code.co_varnames[index])
        index += 1
    names.extend(kwonly)
    if code.co_flags & _CO_VARKEYWORDS:
        names.append("**" + code.co_varnames[index])
    return names


def _argument_types(code: CodeType, f_locals: Dict[str, Any]) -> Dict[str, str]:
    types = {}
    for name in _argument_names(code):
        value = f_locals.get(name.lstrip("*"), inspect.Parameter.empty)
        if value is not inspect.Parameter.empty:
            types[name] = type(value).__name__
    return types


def _resolve_function(
    code: CodeType, qualname: str, frame: FrameType
) -> Optional[Callable[..., Any]]:
    """Find the function object that owns ``code``, if it is reachable by name"""
    if "<locals>" in qualname:
        return None

    target: Any = frame.f_globals
    for part in qualname.split("."):
        if isinstance(target, dict):
            target = target.get(part)
        else:
            target = inspect.getattr_static(target, part, None)
        if target is None:
            return None

    func = getattr(target, "__func__", target)
    func = inspect.unwrap(func) if callable(func) else func
    if getattr(func, "__code__", None) is not code:
        return None
    return func


def _declared_types(func: Optional[Callable[..., Any]]) -> Dict[str, str]:
    """Annotated parameter types keyed the way ``_argument_names`` names them"""
    if func is None:
        return {}
    annotations = getattr(func, "__annotations__", None) or {}

    types = {}
    for name in _argument_names(func.__code__):
        annotation = annotations.get(name.lstrip("*"), inspect.Parameter.empty)
        if annotation is not inspect.Parameter.empty:
            types[name] = _type_name(annotation)
    return types


def _code_parameters(code: CodeType, arg_types: Dict[str, str]) -> List[ParameterInfo]:
    names = _argument_names(code)
    if names and names[0] in IMPLICIT_FIRST_ARGS:
        names = names[1:]
    return [ParameterInfo(arg_types.get(name, "object"), name) for name in names]


def _signature_parameters(
    func: Callable[..., Any], is_member: bool
) -> List[ParameterInfo]:
    params = list(inspect.signature(func).parameters.values())
    if is_member and params and params[0].name in IMPLICIT_FIRST_ARGS:
        params = params[1:]

    result = []
    for param in params:
        name = param.name
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            name = "*" + name
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            name = "**" + name
        result.append(ParameterInfo(_type_name(param.annotation), name))
    return result


def _is_skipped(module: str, skipped: Sequence[str]) -> bool:
    return any(module == prefix or module.startswith(prefix + ".") for prefix in skipped)


@dataclass
class LocationInfo:
    """Where a logging call was made, plus the frames leading to it"""

    class_name: str = NA
    method_name: str = NA
    file_name: str = NA
    line_number: int = 0
    stack_frames: List[StackFrameInfo] = field(default_factory=list)

    @property
    def full_info(self) -> str:
        return (
            f"{self.class_name}.{self.method_name}"
            f"({os.path.basename(self.file_name)}:{self.line_number})"
        )

    @classmethod
    def capture(
        cls, skipped_modules: Sequence[str] = SKIPPED_MODULES
    ) -> "LocationInfo":
        """Capture the stack of the caller outside ``skipped_modules``"""
        frame: Optional[FrameType] = sys._getframe(1)
        while frame is not None and _is_skipped(
            frame.f_globals.get("__name__", ""), skipped_modules
        ):
            frame = frame.f_back

        frames = []
        while frame is not None:
            frames.append(StackFrameInfo.from_frame(frame))
            frame = frame.f_back

        if not frames:
            return cls()

        caller = frames[0]
        return cls(
            class_name=caller.declaring_type,
            method_name=caller.method_name,
            file_name=caller.file_name,
            line_number=caller.line_number,
            stack_frames=frames,
        )

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> "LocationInfo":
        """Location attached to the record, or one built from its fields"""
        location = getattr(record, "location_info", None)
        if isinstance(location, LocationInfo):
            return location
        return cls(
            class_name=getattr(record, "module", NA) or NA,
            method_name=getattr(record, "funcName", NA) or NA,
            file_name=getattr(record, "pathname", NA) or NA,
            line_number=getattr(record, "lineno", 0) or 0,
        )


class LocationCaptureFilter(logging.Filter):
    """Attach ``location_info`` to records on the logging thread"""

    def __init__(self, skipped_modules: Sequence[str] = SKIPPED_MODULES):
        super().__init__()
        self.skipped_modules = tuple(skipped_modules)

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "location_info", None) is None:
            record.location_info = LocationInfo.capture(self.skipped_modules)
        return True
