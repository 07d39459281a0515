# bikeflow/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from bikeflow.index.window import DEFAULT_WINDOW_MINUTES

DEFAULT_STATIONS = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"
DEFAULT_TRIPS = "bluebikes-traffic-2024-03.csv"


def _int_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from e


@dataclass
class ViewerConfig:
    trips_csv: str | Path = DEFAULT_TRIPS
    stations_json: str | Path = DEFAULT_STATIONS
    bike_lanes: List[str] = field(default_factory=list)
    host: str = "127.0.0.1"
    port: int = 8080
    window_minutes: int = DEFAULT_WINDOW_MINUTES
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ViewerConfig":
        """
        TRIPS_CSV, STATIONS_JSON, BIKE_LANES (comma separated GeoJSON paths),
        HOST, PORT, WINDOW_MINUTES, DEBUG.
        """
        env = os.environ if environ is None else environ

        lanes = [p.strip() for p in env.get("BIKE_LANES", "").split(",") if p.strip()]

        return cls(
            trips_csv=env.get("TRIPS_CSV", DEFAULT_TRIPS),
            stations_json=env.get("STATIONS_JSON", DEFAULT_STATIONS),
            bike_lanes=lanes,
            host=env.get("HOST", "127.0.0.1"),
            port=_int_env(env, "PORT", 8080),
            window_minutes=_int_env(env, "WINDOW_MINUTES", DEFAULT_WINDOW_MINUTES),
            debug=env.get("DEBUG", "").strip().lower() in {"1", "true", "yes", "on"},
        )
