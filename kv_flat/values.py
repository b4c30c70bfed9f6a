"""Runtime shape classification shared by the flattener and unflattener."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, TypeVar, runtime_checkable


_T = TypeVar("_T", bound=type)


class ValueKind(Enum):
    """Tag for the four shapes the engine distinguishes."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OPAQUE = "opaque"


@runtime_checkable
class SupportsOpaque(Protocol):
    """Objects that can declare themselves leaves regardless of their shape."""

    def __flat_opaque__(self) -> bool:
        """Return True when the object must never be recursed into."""


_OPAQUE_TYPES: set[type] = {bytes, bytearray, memoryview}


def register_opaque(cls: _T) -> _T:
    """Register ``cls`` so that its instances are always treated as leaves.

    Usable as a class decorator.
    """
    if not isinstance(cls, type):
        msg = f"register_opaque expects a type, got {type(cls).__name__}"
        raise TypeError(msg)
    _OPAQUE_TYPES.add(cls)
    return cls


def is_opaque(value: Any) -> bool:
    """Return True when ``value`` is a registered opaque type or opts in via ``__flat_opaque__``."""
    if isinstance(value, tuple(_OPAQUE_TYPES)):
        return True
    if isinstance(value, SupportsOpaque):
        return bool(value.__flat_opaque__())
    return False


def classify(value: Any) -> ValueKind:
    """Classify ``value`` as opaque, mapping, sequence or scalar, in that order of precedence."""
    if is_opaque(value):
        return ValueKind.OPAQUE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def is_container(value: Any) -> bool:
    """Return True for values the engine can descend into."""
    return classify(value) in {ValueKind.MAPPING, ValueKind.SEQUENCE}
