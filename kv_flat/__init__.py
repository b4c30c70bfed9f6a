"""kv-flat - flatten nested key-value structures into path-keyed maps and back"""

from ._version import version as __version__
from .engine import delete_flatten, filter_flatten, flatten, merge_flatten, unflatten
from .key_mapping import KeyMapper
from .options import FlatOptions
from .snapshots import FlatDelta, diff_flatten, diff_nested
from .values import SupportsOpaque, ValueKind, classify, is_opaque, register_opaque


__all__ = [
    "FlatDelta",
    "FlatOptions",
    "KeyMapper",
    "SupportsOpaque",
    "ValueKind",
    "__version__",
    "classify",
    "delete_flatten",
    "diff_flatten",
    "diff_nested",
    "filter_flatten",
    "flatten",
    "is_opaque",
    "merge_flatten",
    "register_opaque",
    "unflatten",
]
