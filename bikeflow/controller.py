# bikeflow/controller.py
from __future__ import annotations

from typing import List

from colorama import Fore, Style

from bikeflow.index.minute_buckets import MinuteBucketIndex
from bikeflow.index.window import ANY_TIME, DEFAULT_WINDOW_MINUTES, query, validate_time_filter
from bikeflow.traffic.aggregate import STATION_KEY, compute_station_traffic
from bikeflow.viz.format import format_time, traffic_tooltip
from bikeflow.viz.scales import flow_balance, radius_scale


class TrafficController:
    """
    Owns the current time filter and keeps station traffic in sync with it.

    The radius domain is fixed from the unfiltered aggregation done at
    construction; only the output range changes with the filter mode.
    """

    def __init__(
        self,
        stations: List[dict],
        index: MinuteBucketIndex,
        *,
        radius_minutes: int = DEFAULT_WINDOW_MINUTES,
    ):
        # reject a bad radius before any aggregation runs
        query(ANY_TIME, radius_minutes)

        self.stations = stations
        self.index = index
        self.radius_minutes = int(radius_minutes)
        self._time_filter = ANY_TIME

        compute_station_traffic(self.stations, self.index, ANY_TIME, radius_minutes=self.radius_minutes)
        self.max_total_traffic = max((s["totalTraffic"] for s in self.stations), default=0)
        self._scale = radius_scale(self.max_total_traffic, ANY_TIME)

    @property
    def time_filter(self) -> int:
        return self._time_filter

    def set_time_filter(self, value: int) -> List[dict]:
        value = validate_time_filter(value)

        self._time_filter = value
        compute_station_traffic(self.stations, self.index, value, radius_minutes=self.radius_minutes)
        self._scale = radius_scale(self.max_total_traffic, value)

        print(
            f"{Fore.CYAN}Time filter {format_time(value)}: "
            f"{sum(s['departures'] for s in self.stations):,} departures in window{Style.RESET_ALL}"
        )
        return self.stations

    def radius(self, station: dict) -> float:
        return self._scale(station["totalTraffic"])

    def flow(self, station: dict) -> float:
        return flow_balance(station)

    def tooltip(self, station: dict) -> str:
        return traffic_tooltip(station)

    def time_label(self) -> str:
        return format_time(self._time_filter)

    def snapshot(self) -> List[dict]:
        return [
            {
                "id": s[STATION_KEY],
                "name": s.get("name", ""),
                "lat": s["lat"],
                "lon": s["lon"],
                "arrivals": s["arrivals"],
                "departures": s["departures"],
                "totalTraffic": s["totalTraffic"],
                "radius": self.radius(s),
                "flow": self.flow(s),
            }
            for s in self.stations
        ]
