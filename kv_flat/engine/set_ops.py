"""Set operations over flat maps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kv_flat.key_mapping import KeyMapper


if TYPE_CHECKING:
    from collections.abc import Mapping


def filter_flatten(flat: Mapping[str, Any], segment: str, delimiter: str = ".") -> dict[str, Any]:
    """Keep entries whose path has ``segment`` as one whole component.

    Matching is by component, not substring: ``"a"`` matches ``"a.b"`` and ``"x.a"``
    but not ``"ab.c"``.
    """
    mapper = KeyMapper(delimiter)
    return {key: value for key, value in flat.items() if mapper.contains_segment(key, segment)}


def delete_flatten(current: Mapping[str, Any], deleted: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``current`` without the keys present in ``deleted``; values of ``deleted`` are ignored."""
    return {key: value for key, value in current.items() if key not in deleted}


def merge_flatten(current: Mapping[str, Any], next_: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow union of two flat maps where ``next_`` wins on key collisions."""
    return {**current, **next_}
