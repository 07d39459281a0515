from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from app import build_controller
from bikeflow.config import ViewerConfig
from bikeflow.controller import TrafficController
from bikeflow.index.minute_buckets import MinuteBucketIndex
from bikeflow.trips.types import Trip
from bikeflow.viz.app.single import create_app


@pytest.fixture
def viewer():
    index = MinuteBucketIndex()
    index.add(Trip("A", "B", 30, 45))
    index.add(Trip("B", "A", 1430, 10))
    index.freeze()

    stations = [
        {"short_name": "A", "name": "Kendall", "lat": 42.3625, "lon": -71.0862},
        {"short_name": "B", "name": "Central", "lat": 42.3655, "lon": -71.1036},
    ]
    controller = TrafficController(stations, index)
    app = create_app(controller, title="Test Map")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(viewer):
    return viewer.test_client()


def test_map_page_renders(client):
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "time-slider" in body
    assert "2 trips (1 departures, 1 arrivals)" in body
    assert "Test Map" in body


def test_map_page_with_filter(client):
    resp = client.get("/?t=870")
    assert resp.status_code == 200
    assert 'value="870"' in resp.get_data(as_text=True)


def test_traffic_api_unfiltered(client):
    data = client.get("/api/traffic").get_json()
    assert data["time_filter"] == -1
    assert data["label"] == "(any time)"
    assert sum(s["totalTraffic"] for s in data["stations"]) == 4


def test_traffic_api_wraps_midnight(client):
    data = client.get("/api/traffic?t=0").get_json()
    by_id = {s["id"]: s for s in data["stations"]}
    assert data["label"] == "12:00 AM"
    assert by_id["A"]["departures"] == 1
    assert by_id["B"]["departures"] == 1
    assert by_id["A"]["arrivals"] == 1
    assert by_id["B"]["arrivals"] == 1


@pytest.mark.parametrize("t", ["1440", "-2", "noon"])
def test_invalid_time_is_400(client, t):
    resp = client.get(f"/api/traffic?t={t}")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_map_page_places_panels_on_the_map(client):
    body = client.get("/?t=0").get_data(as_text=True)
    assert body.count("function ensureMapWrap()") == 1
    assert '<div id="time-filter" class="map-panel" data-overlay>' in body
    assert '<div id="map-legend" class="map-panel" data-overlay>' in body
    assert 'placeTitle(wrap, "Test Map")' in body


def test_overlapping_requests_see_their_own_filter(viewer):
    expected = {0: (4, "12:00 AM"), 480: (0, "8:00 AM")}

    def _fetch(t):
        with viewer.test_client() as c:
            return t, c.get(f"/api/traffic?t={t}").get_json()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_fetch, [0, 480] * 25))

    for t, data in results:
        total, label = expected[t]
        assert data["time_filter"] == t
        assert data["label"] == label
        assert sum(s["totalTraffic"] for s in data["stations"]) == total


def test_build_controller_survives_missing_inputs(tmp_path, capsys):
    config = ViewerConfig(
        trips_csv=tmp_path / "missing.csv",
        stations_json=tmp_path / "missing.json",
    )

    controller = build_controller(config)

    assert controller.stations == []
    assert len(controller.index) == 0
    assert controller.index.frozen
    assert controller.max_total_traffic == 0
    assert controller.set_time_filter(480) == []

    out = capsys.readouterr().out
    assert "Error loading stations" in out
    assert "Error loading trips" in out


def test_build_controller_survives_malformed_trips_csv(tmp_path):
    trips = tmp_path / "trips.csv"
    trips.write_text("ride_id,started_at\nr1,2024-03-01 08:00:00\n")
    stations = tmp_path / "stations.json"
    stations.write_text('{"data": {"stations": [{"short_name": "A", "lat": 42.36, "lon": -71.09}]}}')

    controller = build_controller(ViewerConfig(trips_csv=trips, stations_json=stations))

    assert len(controller.index) == 0
    assert controller.index.frozen
    assert [s["totalTraffic"] for s in controller.stations] == [0]
