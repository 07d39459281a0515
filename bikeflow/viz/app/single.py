# bikeflow/viz/app/single.py
from __future__ import annotations

import threading

from flask import Flask, jsonify, request

from bikeflow.index.window import ANY_TIME, InvalidTimeFilter
from bikeflow.viz.maps.render import render_map_document


def _requested_time():
    raw = request.args.get("t", None)
    if raw is None or raw.strip() == "":
        return ANY_TIME
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidTimeFilter(f"t must be an integer, got {raw!r}") from e


def create_app(controller, *, title: str | None = None, bike_lanes=None) -> Flask:
    """
    Flask app around a TrafficController.

      /             map page for ?t=<minute> (-1 or missing = any time)
      /api/traffic  same aggregation as JSON

    A t outside [-1, 1439] is answered with 400, never clamped.

    The controller holds one filter at a time, so setting it and reading the
    stations back happen under a single lock per request.
    """
    app = Flask(__name__)
    view_lock = threading.Lock()

    @app.errorhandler(InvalidTimeFilter)
    def _bad_time(err):
        return jsonify({"error": str(err)}), 400

    @app.route("/")
    def _index():
        t = _requested_time()
        with view_lock:
            controller.set_time_filter(t)
            return render_map_document(
                controller=controller,
                title=title,
                bike_lanes=bike_lanes,
            )

    @app.route("/api/traffic")
    def _traffic():
        t = _requested_time()
        with view_lock:
            controller.set_time_filter(t)
            payload = {
                "time_filter": controller.time_filter,
                "label": controller.time_label(),
                "stations": controller.snapshot(),
            }
        return jsonify(payload)

    return app


def serve_traffic_map(
    *,
    controller,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = None,
    bike_lanes=None,
):
    """
    Serve the traffic map page.
    """
    if controller is None:
        raise ValueError("serve_traffic_map requires a TrafficController")

    app = create_app(controller, title=title, bike_lanes=bike_lanes)
    app.run(host=host, port=int(port), debug=bool(debug))
