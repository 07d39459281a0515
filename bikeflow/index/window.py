"""Circular minute-of-day windows over the minute bucket index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from bikeflow.index.minute_buckets import MINUTES_PER_DAY

ANY_TIME = -1
DEFAULT_WINDOW_MINUTES = 60


class InvalidTimeFilter(ValueError):
    """Time filter outside [-1, 1439]."""


@dataclass(frozen=True)
class RangeSpec:
    """Half-open (start, stop) bucket intervals; two of them when the window crosses midnight."""

    intervals: Tuple[Tuple[int, int], ...]

    def minutes(self) -> Iterator[int]:
        for start, stop in self.intervals:
            yield from range(start, stop)

    @property
    def wraps(self) -> bool:
        return len(self.intervals) > 1

    def __len__(self) -> int:
        return sum(stop - start for start, stop in self.intervals)

    def __contains__(self, minute) -> bool:
        return any(start <= minute < stop for start, stop in self.intervals)


ALL_DAY = RangeSpec(intervals=((0, MINUTES_PER_DAY),))


def validate_time_filter(value) -> int:
    # bool is an int subclass; a slider never sends one
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimeFilter(f"time filter must be an int, got {value!r}")
    if not (ANY_TIME <= value < MINUTES_PER_DAY):
        raise InvalidTimeFilter(
            f"time filter must be in [{ANY_TIME}, {MINUTES_PER_DAY - 1}], got {value}"
        )
    return value


def query(center: int, radius_minutes: int = DEFAULT_WINDOW_MINUTES) -> RangeSpec:
    """
    Buckets selected by a time filter.

    center == -1 selects the whole day. Otherwise the window runs from
    center - radius (inclusive) to center + radius (exclusive), modulo 1440,
    so query(30) is [1410, 1440) + [0, 90) and query(700) is [640, 760).
    """
    center = validate_time_filter(center)
    if isinstance(radius_minutes, bool) or not isinstance(radius_minutes, int):
        raise ValueError(f"radius_minutes must be an int, got {radius_minutes!r}")
    if not (0 < radius_minutes < MINUTES_PER_DAY // 2):
        raise ValueError(
            f"radius_minutes must be in [1, {MINUTES_PER_DAY // 2 - 1}], got {radius_minutes}"
        )

    if center == ANY_TIME:
        return ALL_DAY

    lo = (center - radius_minutes + MINUTES_PER_DAY) % MINUTES_PER_DAY
    hi = (center + radius_minutes) % MINUTES_PER_DAY

    if lo > hi:
        if hi == 0:
            return RangeSpec(intervals=((lo, MINUTES_PER_DAY),))
        return RangeSpec(intervals=((lo, MINUTES_PER_DAY), (0, hi)))
    return RangeSpec(intervals=((lo, hi),))
