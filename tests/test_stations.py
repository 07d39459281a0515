from __future__ import annotations

import json

from bikeflow.util.stations import load_stations


def _write_stations(path, stations) -> None:
    path.write_text(json.dumps({"data": {"stations": stations}}))


def test_load_stations_keeps_fields_and_zeroes_traffic(tmp_path):
    path = tmp_path / "station_information.json"
    _write_stations(
        path,
        [
            {"short_name": "M32006", "station_id": "abc", "name": "MIT", "lat": 42.36, "lon": "-71.09", "capacity": 19},
            {"short_name": "A32000", "station_id": "def", "name": "Fan Pier", "lat": 42.35, "lon": -71.04},
        ],
    )

    stations = load_stations(path)

    assert [s["short_name"] for s in stations] == ["M32006", "A32000"]
    assert stations[0]["lon"] == -71.09
    assert stations[0]["capacity"] == 19
    assert stations[1]["capacity"] is None
    for s in stations:
        assert (s["arrivals"], s["departures"], s["totalTraffic"]) == (0, 0, 0)


def test_load_stations_skips_stations_without_coordinates(tmp_path):
    path = tmp_path / "station_information.json"
    _write_stations(path, [{"short_name": "X", "name": "nowhere"}])
    assert load_stations(path) == []


def test_load_failure_is_reported_not_raised(tmp_path, capsys):
    assert load_stations(tmp_path / "missing.json") == []
    assert "Error loading stations" in capsys.readouterr().out


def test_unexpected_payload_is_reported(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"stations": []}))
    assert load_stations(path) == []
    assert "Error loading stations" in capsys.readouterr().out


def test_unparseable_capacity_does_not_stop_loading(tmp_path):
    path = tmp_path / "station_information.json"
    _write_stations(
        path,
        [
            {"short_name": "A", "lat": 42.36, "lon": -71.09, "capacity": "n/a"},
            {"short_name": "B", "lat": 42.35, "lon": -71.04, "capacity": "19.0"},
            {"short_name": "C", "lat": 42.34, "lon": -71.05, "capacity": None},
        ],
    )

    stations = load_stations(path)

    assert [s["short_name"] for s in stations] == ["A", "B", "C"]
    assert [s["capacity"] for s in stations] == [None, 19, None]
