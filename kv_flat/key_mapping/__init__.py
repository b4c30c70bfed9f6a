"""Flat key mapping utilities."""

from .mapper import KeyMapper


__all__ = ["KeyMapper"]
