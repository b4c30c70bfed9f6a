"""Flatten, unflatten and set operations over flat maps."""

from .flatten import flatten
from .set_ops import delete_flatten, filter_flatten, merge_flatten
from .unflatten import normalize_leaf, unflatten


__all__ = ["delete_flatten", "filter_flatten", "flatten", "merge_flatten", "normalize_leaf", "unflatten"]
