# bikeflow/traffic/aggregate.py
from __future__ import annotations

from typing import Dict, Iterable, List

from bikeflow.index.minute_buckets import MinuteBucketIndex
from bikeflow.index.window import ANY_TIME, DEFAULT_WINDOW_MINUTES, query
from bikeflow.trips.types import Trip

STATION_KEY = "short_name"


def count_by_station(trips: Iterable[Trip], key: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for t in trips:
        sid = getattr(t, key)
        # blank ids never match a station, even one without a short_name
        if not sid:
            continue
        counts[sid] = counts.get(sid, 0) + 1
    return counts


def compute_station_traffic(
    stations: List[dict],
    index: MinuteBucketIndex,
    time_filter: int = ANY_TIME,
    *,
    radius_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> List[dict]:
    """
    Roll the trips inside the time window up into per-station counts.

    Sets departures / arrivals / totalTraffic on every station in place and
    returns the same list. Stations with no trips get zeros; trip station ids
    with no matching station are ignored.
    """
    window = query(time_filter, radius_minutes)

    departures = count_by_station(index.departures_in_range(window), "start_station_id")
    arrivals = count_by_station(index.arrivals_in_range(window), "end_station_id")

    for s in stations:
        sid = str(s[STATION_KEY])
        s["arrivals"] = arrivals.get(sid, 0)
        s["departures"] = departures.get(sid, 0)
        s["totalTraffic"] = s["arrivals"] + s["departures"]

    return stations
