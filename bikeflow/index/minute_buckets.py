# bikeflow/index/minute_buckets.py
from __future__ import annotations

from itertools import chain
from typing import List

from bikeflow.trips.types import Trip

MINUTES_PER_DAY = 1440


def _check_minute(name: str, minute: int) -> int:
    if not (0 <= minute < MINUTES_PER_DAY):
        raise ValueError(f"{name} must be in [0, {MINUTES_PER_DAY}), got {minute!r}")
    return minute


class MinuteBucketIndex:
    """
    Trips partitioned by minute of day.

      departures[m] -> trips that started in minute m
      arrivals[m]   -> trips that ended in minute m

    Filled once during ingestion, then frozen. Reads go through
    departures_in_range / arrivals_in_range with a RangeSpec from
    bikeflow.index.window.query.
    """

    def __init__(self):
        self.departures: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        self.arrivals: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        self._count = 0
        self._frozen = False

    # ------------------------------------------------------------------ writes
    def add(self, trip: Trip) -> None:
        if self._frozen:
            raise RuntimeError("MinuteBucketIndex is frozen; build a new index instead")

        start = _check_minute("started_at_minute", trip.started_at_minute)
        end = _check_minute("ended_at_minute", trip.ended_at_minute)

        self.departures[start].append(trip)
        self.arrivals[end].append(trip)
        self._count += 1

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return self._count

    # ------------------------------------------------------------------- reads
    def departures_in_range(self, window) -> List[Trip]:
        return _collect(self.departures, window)

    def arrivals_in_range(self, window) -> List[Trip]:
        return _collect(self.arrivals, window)


def _collect(buckets: List[List[Trip]], window) -> List[Trip]:
    return list(
        chain.from_iterable(
            chain.from_iterable(buckets[start:stop] for start, stop in window.intervals)
        )
    )
