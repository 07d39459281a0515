# bikeflow/trips/types.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Trip:
    start_station_id: str
    end_station_id: str
    started_at_minute: int
    ended_at_minute: int
