from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Optional

properties: ContextVar[Optional[Dict[str, Any]]] = ContextVar("properties", default=None)


def get_properties() -> Dict[str, Any]:
    """Get the context properties visible to filters and layouts"""
    return dict(properties.get() or {})


def get_property(key: str, default: Any = None) -> Any:
    """Get a single context property"""
    return (properties.get() or {}).get(key, default)


def set_property(key: str, value: Any) -> None:
    """Set a property for the current context"""
    current = get_properties()
    current[key] = value
    properties.set(current)


def remove_property(key: str) -> None:
    """Remove a property from the current context"""
    current = get_properties()
    current.pop(key, None)
    properties.set(current)


def clear_properties() -> None:
    """Drop all properties of the current context"""
    properties.set({})


@contextmanager
def property_context(**props: Any) -> Generator[Dict[str, Any], None, None]:
    """Context manager adding properties for the duration of a block"""
    merged = get_properties()
    merged.update({k: v for k, v in props.items() if v is not None})
    token = properties.set(merged)
    try:
        yield merged
    finally:
        properties.reset(token)
