"""
Bounds layer for the numeric core.

Bounds define the *native* domain: the range of integers an engine keeps
in machine form.  Anything outside the bounds is carried in extended
(sign + decimal digits) form instead.  Bounds never clamp or wrap - a
result that escapes them is promoted, not truncated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """
    An inclusive integer interval [lo, hi].

    The engine uses this to decide whether a result can stay native.
    """

    lo: int
    hi: int

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def within(self, other: Bounds) -> bool:
        """True if every value of these bounds is also in ``other``."""
        return other.lo <= self.lo and self.hi <= other.hi

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)


# ---------------------------------------------------------------------------
# Common bounds presets
# ---------------------------------------------------------------------------

INT64 = Bounds(lo=-(2**63), hi=2**63 - 1)
INT32 = Bounds(lo=-(2**31), hi=2**31 - 1)
INT16 = Bounds(lo=-32_768, hi=32_767)
INT8 = Bounds(lo=-128, hi=127)

# Small native range: nearly every result gets promoted, which drives
# the digit algorithms with small, easy to reason about values.
TINY = Bounds(lo=-8, hi=7)
