import json
import urllib.request
from pathlib import Path

from colorama import Fore, Style


def _read_station_payload(source):
    src = str(source)
    if src.startswith(("http://", "https://")):
        with urllib.request.urlopen(src, timeout=30) as resp:
            return json.loads(resp.read().decode("utf-8"))

    with open(Path(source)) as f:
        return json.load(f)


def _capacity(value):
    # feeds sometimes carry "n/a" or "19.0"; capacity is informational only
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def load_stations(source):
    """
    Load bike share stations from a station_information.json (path or URL).

    Returns a list of dicts with only the fields we care about, plus the
    traffic fields (arrivals / departures / totalTraffic) zeroed until the
    first aggregation. Stations are keyed by short_name, which is what trip
    records carry as start_station_id / end_station_id.

    A source that cannot be read or parsed is reported and yields [].
    """
    try:
        raw = _read_station_payload(source)["data"]["stations"]
    except (OSError, ValueError, KeyError, TypeError) as e:
        print(f"{Fore.RED}Error loading stations from {source}: {e}{Style.RESET_ALL}")
        return []

    stations = []
    for s in raw:
        try:
            lat = float(s["lat"])
            lon = float(s["lon"])
        except (KeyError, TypeError, ValueError):
            continue

        cap = _capacity(s.get("capacity"))
        stations.append({
            "short_name": str(s.get("short_name", "")).strip(),
            "station_id": str(s.get("station_id", "")),
            "name": s.get("name", ""),
            "lat": lat,
            "lon": lon,
            "capacity": cap,
            "arrivals": 0,
            "departures": 0,
            "totalTraffic": 0,
        })

    print(f"{Fore.CYAN}Loaded {len(stations)} stations.{Style.RESET_ALL}")
    return stations
