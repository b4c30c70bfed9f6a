"""Flat map to nested structure reconstruction."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from itertools import pairwise
from typing import TYPE_CHECKING, Any, Final, override

from kv_flat.key_mapping import KeyMapper
from kv_flat.options import resolve_options
from kv_flat.values import ValueKind, classify, is_container


if TYPE_CHECKING:
    from kv_flat.options import FlatOptions, KeyOrder


logger = logging.getLogger(__name__)

# Unfilled positions a rebuilt list may carry beyond one per filled slot; sparser
# sequences come back as mappings keyed by index strings.
MAX_PADDING = 1024


class _Missing:
    """Marker for slots that no key has written yet."""

    __slots__ = ()

    @override
    def __repr__(self) -> str:
        return "<missing>"


_MISSING: Final = _Missing()


class _Slots(dict[int, Any]):
    """Sequence under construction, keyed by index so sparse indices stay cheap."""


_Container = dict[str, Any] | _Slots


def _read(container: _Container, key: str | int) -> Any:
    if isinstance(container, _Slots):
        return container.get(int(key), _MISSING)
    return container.get(str(key), _MISSING)


def _write(container: _Container, key: str | int, value: Any) -> None:
    if isinstance(container, _Slots):
        container[int(key)] = value
        return
    container[str(key)] = value


def _as_sequence(slots: dict[int, Any]) -> list[Any] | dict[str, Any]:
    if not slots:
        return []
    length = max(slots) + 1
    if length - len(slots) > len(slots) + MAX_PADDING:
        logger.debug("sequence with %d of %d slots filled kept as a mapping", len(slots), length)
        return {str(index): slots[index] for index in sorted(slots)}
    return [slots.get(index) for index in range(length)]


class _Builder:
    """Materialize containers along flat key paths inside a fresh result dict."""

    def __init__(self, mapper: KeyMapper, *, overwrite: bool) -> None:
        super().__init__()
        self.mapper = mapper
        self.overwrite = overwrite
        self.result: dict[str, Any] = {}
        # Containers created or copied here; anything else belongs to the caller.
        self._owned: dict[int, _Container] = {id(self.result): self.result}

    def _own(self, container: _Container) -> _Container:
        self._owned[id(container)] = container
        return container

    def _is_owned(self, value: Any) -> bool:
        return self._owned.get(id(value)) is value

    def _slot_key(self, container: _Container, segment: str) -> str | int:
        if isinstance(container, _Slots):
            index = self.mapper.index(segment)
            if index is not None:
                return index
        return segment

    def _writable(self, parent: _Container, key: str | int, current: Any) -> _Container:
        if self._is_owned(current):
            return current
        copy: _Container = dict(current) if isinstance(current, Mapping) else _Slots(enumerate(current))
        _write(parent, key, copy)
        return self._own(copy)

    def _promote(self, parent: _Container, key: str | int, slots: _Slots) -> _Container:
        promoted = {str(index): item for index, item in sorted(slots.items())}
        _write(parent, key, promoted)
        return self._own(promoted)

    def locate(self, segments: list[str]) -> tuple[_Container, str | int] | None:
        """Return the container and slot key for the last segment.

        Returns None when a non-container value blocks the path and overwriting is off.
        """
        recipient: _Container = self.result
        for segment, child in pairwise(segments):
            key = self._slot_key(recipient, segment)
            current = _read(recipient, key)
            child_is_index = self.mapper.index(child) is not None

            if is_container(current):
                nested = self._writable(recipient, key, current)
            elif current is not _MISSING and not self.overwrite:
                return None
            else:
                nested = self._own(_Slots() if child_is_index else {})
                _write(recipient, key, nested)

            if isinstance(nested, _Slots) and not child_is_index:
                nested = self._promote(recipient, key, nested)
            recipient = nested

        return recipient, self._slot_key(recipient, segments[-1])

    def _finalize(self, value: Any) -> Any:
        if not self._is_owned(value):
            return value
        if isinstance(value, _Slots):
            return _as_sequence({index: self._finalize(item) for index, item in value.items()})
        for key, item in value.items():
            value[key] = self._finalize(item)
        return value

    def finish(self) -> dict[str, Any]:
        """Turn sequences under construction into lists (or mappings when sparse) and return the result."""
        return self._finalize(self.result)


def _ordered_items(target: Mapping[Any, Any], mapper: KeyMapper, key_order: KeyOrder) -> list[tuple[str, Any]]:
    items = [(str(key), value) for key, value in target.items()]
    if key_order == "depth":
        return sorted(items, key=lambda item: mapper.depth(item[0]))
    return sorted(items, key=lambda item: len(item[0]))


def normalize_leaf(value: Any, options: FlatOptions) -> Any:
    """Unflatten a leaf value so that flat maps nested inside it are expanded too."""
    return unflatten(value, options)


def unflatten(target: Any, options: FlatOptions | None = None, **overrides: Any) -> Any:
    """Rebuild a nested structure from a flat map.

    Parameters
    ----------
    target
        Flat map to expand. Anything that is not a mapping, or is opaque, is returned
        unchanged.
    options
        Base options; defaults apply when omitted.
    **overrides
        Per-call option overrides such as ``delimiter``, ``overwrite``,
        ``object_mode`` or ``key_order``.

    Keys are processed shortest first (stable). When a key's path runs into a value
    that is not a container, the key is dropped unless ``overwrite`` is set, in
    which case the value is replaced by a fresh container. The input is never mutated.
    """
    opts = resolve_options(options, **overrides)
    if classify(target) is not ValueKind.MAPPING:
        return target

    mapper = KeyMapper(opts.delimiter, object_mode=opts.object_mode)
    builder = _Builder(mapper, overwrite=opts.overwrite)
    for key, value in _ordered_items(target, mapper, opts.key_order):
        slot = builder.locate(mapper.split(key))
        if slot is None:
            logger.debug("dropping key %r: an earlier key holds a leaf on its path", key)
            continue
        container, slot_key = slot
        _write(container, slot_key, normalize_leaf(value, opts))

    return builder.finish()
