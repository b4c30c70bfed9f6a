"""Key mapping between path segments and delimiter-joined flat keys."""

from __future__ import annotations

import re


# Decimal literals only, ASCII digits, no digit separators.
_NUMERIC_SEGMENT = re.compile(r"[ \t\n\r\f\v]*[+-]?\d+(?:[eE][+-]?\d+)?[ \t\n\r\f\v]*", re.ASCII)

# Largest index a sequence slot may take; larger numbers stay mapping keys.
MAX_INDEX = 2**32 - 2


class KeyMapper:
    """Join, split and interpret delimiter-separated flat map keys."""

    def __init__(self, delimiter: str = ".", *, object_mode: bool = False) -> None:
        super().__init__()
        if not delimiter:
            msg = "delimiter must not be empty"
            raise ValueError(msg)

        self.delimiter = delimiter
        self.object_mode = object_mode

    def join(self, prev: str, key: str) -> str:
        """Append ``key`` to the path ``prev``; an empty prefix yields ``key`` itself."""
        return f"{prev}{self.delimiter}{key}" if prev else key

    def split(self, path: str) -> list[str]:
        """Split a flat key into its segments."""
        return path.split(self.delimiter)

    def depth(self, path: str) -> int:
        """Return the number of segments in ``path``."""
        return path.count(self.delimiter) + 1

    def contains_segment(self, path: str, segment: str) -> bool:
        """Return True when ``segment`` is one whole component of ``path``."""
        return segment in self.split(path)

    def index(self, segment: str) -> int | None:
        """Return the sequence index ``segment`` denotes, or None when it is a mapping key.

        Only ASCII decimal literals (optional sign and exponent) are numeric; digit
        separators, non-ASCII digits, hex and NaN stay mapping keys, as do segments
        containing a decimal point or the delimiter and values that are not integral
        within ``0..MAX_INDEX``. Object mode disables index detection entirely.
        """
        if self.object_mode or "." in segment or self.delimiter in segment:
            return None
        if _NUMERIC_SEGMENT.fullmatch(segment) is None:
            return None
        number = float(segment)
        if not number.is_integer() or not 0 <= number <= MAX_INDEX:
            return None
        return int(number)
