"""Runtime shape inspection for untyped error payloads.

Every value met while walking a payload is reduced to a ``Shape``: a closed
tagged variant of STRING, SEQUENCE, MAPPING or NULL plus the payload the
walker actually consumes. Dispatch happens on the tag, never on duck typing.

Reductions:
    - ``str`` -> STRING.
    - exceptions -> STRING holding ``str(exc)`` (class name when blank).
    - ``list`` / ``tuple`` -> SEQUENCE.
    - any ``Mapping`` -> MAPPING.
    - dataclass instances and ``SimpleNamespace`` -> MAPPING over their fields.
    - ``None``, numbers, booleans, bytes and other objects -> NULL.

The helpers in this module never raise for any input.
"""

from __future__ import annotations

import dataclasses
import enum
from types import SimpleNamespace
from typing import Any, Mapping, NamedTuple, Optional


class Kind(enum.Enum):
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    NULL = "null"


class Shape(NamedTuple):
    kind: Kind
    value: Any


NULL_SHAPE = Shape(Kind.NULL, None)


def inspect_shape(value: Any) -> Shape:
    """Classify ``value`` into its tagged variant."""
    if value is None:
        return NULL_SHAPE
    if isinstance(value, str):
        return Shape(Kind.STRING, value)
    if isinstance(value, BaseException):
        return Shape(Kind.STRING, _exception_text(value))
    if isinstance(value, (list, tuple)):
        return Shape(Kind.SEQUENCE, value)
    if isinstance(value, Mapping):
        return Shape(Kind.MAPPING, value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Shape(
            Kind.MAPPING,
            {f.name: getattr(value, f.name, None) for f in dataclasses.fields(value)},
        )
    if isinstance(value, SimpleNamespace):
        return Shape(Kind.MAPPING, vars(value))
    return NULL_SHAPE


def is_present(value: Any) -> bool:
    """Truthiness where blank strings count as absent."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    try:
        return bool(value)
    except Exception:
        # Objects refusing truthiness (arrays, broken __bool__) still exist.
        return True


def lookup(value: Any, key: str) -> Any:
    """Read ``key`` from a mapping item or a plain attribute.

    Callables (bound methods like ``Response.json``) are ignored so reading a
    payload never triggers I/O.
    """
    if value is None or isinstance(value, (str, bytes, int, float, list, tuple)):
        return None
    if isinstance(value, Mapping):
        try:
            return value.get(key)
        except Exception:
            return None
    try:
        found = getattr(value, key, None)
    except Exception:
        return None
    if callable(found):
        return None
    return found


def lookup_path(value: Any, path: str) -> Any:
    """Follow a dotted ``path`` through nested mappings/objects."""
    current = value
    for part in path.split("."):
        if current is None:
            return None
        current = lookup(current, part)
    return current


def text_of(value: Any) -> Optional[str]:
    """Return the stripped message text of a scalar, or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    if isinstance(value, BaseException):
        return _exception_text(value)
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _exception_text(exc: BaseException) -> str:
    try:
        text = str(exc).strip()
    except Exception:
        text = ""
    return text or type(exc).__name__


__all__ = [
    "Kind",
    "NULL_SHAPE",
    "Shape",
    "inspect_shape",
    "is_present",
    "lookup",
    "lookup_path",
    "text_of",
]
