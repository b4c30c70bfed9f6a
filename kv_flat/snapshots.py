"""Change tracking between flat snapshots of nested configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from kv_flat.engine import delete_flatten, flatten, merge_flatten


if TYPE_CHECKING:
    from collections.abc import Mapping

    from kv_flat.options import FlatOptions


@dataclass(frozen=True)
class FlatDelta:
    """Keys added, removed and changed between two flat snapshots.

    ``removed`` keeps the values the keys had in the previous snapshot; ``added`` and
    ``changed`` hold the values from the current one.
    """

    added: dict[str, Any] = field(default_factory=dict)
    removed: dict[str, Any] = field(default_factory=dict)
    changed: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Return True when the snapshots were equal."""
        return not (self.added or self.removed or self.changed)

    def apply(self, previous: Mapping[str, Any]) -> dict[str, Any]:
        """Replay this delta on ``previous`` and return the resulting snapshot."""
        return merge_flatten(delete_flatten(previous, self.removed), {**self.added, **self.changed})


def diff_flatten(previous: Mapping[str, Any], current: Mapping[str, Any]) -> FlatDelta:
    """Compare two flat maps key by key."""
    added = delete_flatten(current, previous)
    removed = delete_flatten(previous, current)
    changed = {key: value for key, value in current.items() if key in previous and previous[key] != value}
    return FlatDelta(added=added, removed=removed, changed=changed)


def diff_nested(
    previous: Mapping[str, Any], current: Mapping[str, Any], options: FlatOptions | None = None, **overrides: Any
) -> FlatDelta:
    """Flatten both nested objects with the same options and compare the results."""
    return diff_flatten(flatten(previous, options, **overrides), flatten(current, options, **overrides))
