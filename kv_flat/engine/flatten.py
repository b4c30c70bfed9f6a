"""Nested structure to flat map conversion."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kv_flat.key_mapping import KeyMapper
from kv_flat.options import resolve_options
from kv_flat.values import ValueKind, classify


if TYPE_CHECKING:
    from collections.abc import Iterator

    from kv_flat.options import FlatOptions


logger = logging.getLogger(__name__)


def _children(node: Any, kind: ValueKind) -> Iterator[tuple[str, Any]]:
    if kind is ValueKind.MAPPING:
        return ((str(key), value) for key, value in node.items())
    return ((str(index), value) for index, value in enumerate(node))


def _should_descend(value: Any, kind: ValueKind, depth: int, options: FlatOptions) -> bool:
    if kind not in {ValueKind.MAPPING, ValueKind.SEQUENCE}:
        return False
    if options.safe and kind is ValueKind.SEQUENCE:
        return False
    if not len(value):
        return False
    return options.max_depth is None or depth < options.max_depth


def flatten(target: Any, options: FlatOptions | None = None, **overrides: Any) -> dict[str, Any]:
    """Flatten a nested mapping into a dict keyed by delimiter-joined paths.

    Parameters
    ----------
    target
        Nested mapping (or sequence) to flatten.
    options
        Base options; defaults apply when omitted.
    **overrides
        Per-call option overrides such as ``delimiter``, ``max_depth`` or ``safe``.

    Empty containers, opaque values and containers at ``max_depth`` are emitted as
    leaves. Cyclic input is not supported.
    """
    opts = resolve_options(options, **overrides)
    mapper = KeyMapper(opts.delimiter)
    output: dict[str, Any] = {}

    root_kind = classify(target)
    if root_kind not in {ValueKind.MAPPING, ValueKind.SEQUENCE}:
        logger.debug("flatten root is %s, returning an empty flat map", root_kind.value)
        return output

    def step(node: Any, kind: ValueKind, prev: str, depth: int) -> None:
        for key, value in _children(node, kind):
            new_key = mapper.join(prev, key)
            value_kind = classify(value)
            if _should_descend(value, value_kind, depth, opts):
                step(value, value_kind, new_key, depth + 1)
            else:
                output[new_key] = value

    step(target, root_kind, "", 1)
    return output
