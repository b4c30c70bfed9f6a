"""Options shared by every flat map operation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal


KeyOrder = Literal["length", "depth"]

_KEY_ORDERS: frozenset[str] = frozenset({"length", "depth"})


@dataclass(frozen=True, slots=True)
class FlatOptions:
    """Per-call configuration for flattening and unflattening.

    Parameters
    ----------
    delimiter
        String placed between path segments.
    max_depth
        Deepest level the flattener descends to; ``None`` means unbounded.
    safe
        Keep sequences as leaves instead of indexing into them.
    overwrite
        Let later keys replace non-container values that block their path.
    object_mode
        Build mappings only, never sequences, when unflattening.
    key_order
        Order in which unflatten processes keys: ``"length"`` (string length) or
        ``"depth"`` (segment count). Both sorts are stable.
    """

    delimiter: str = "."
    max_depth: int | None = None
    safe: bool = False
    overwrite: bool = False
    object_mode: bool = False
    key_order: KeyOrder = "length"

    def __post_init__(self) -> None:
        if not isinstance(self.delimiter, str) or not self.delimiter:
            msg = "delimiter must be a non-empty string"
            raise ValueError(msg)
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                msg = f"max_depth must be an integer, got {type(self.max_depth).__name__}"
                raise ValueError(msg)
            if self.max_depth < 1:
                msg = f"max_depth must be a positive integer, got {self.max_depth}"
                raise ValueError(msg)
        if self.key_order not in _KEY_ORDERS:
            msg = f"key_order must be one of {sorted(_KEY_ORDERS)}, got {self.key_order!r}"
            raise ValueError(msg)


DEFAULT_OPTIONS = FlatOptions()


def resolve_options(options: FlatOptions | None = None, **overrides: Any) -> FlatOptions:
    """Return ``options`` (or the defaults) with keyword ``overrides`` applied."""
    base = DEFAULT_OPTIONS if options is None else options
    if not overrides:
        return base
    return replace(base, **overrides)
