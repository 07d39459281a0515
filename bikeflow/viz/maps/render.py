# bikeflow/viz/maps/render.py
import folium
from colorama import Fore, Style

from bikeflow.viz.overlays.stations import add_station_markers
from bikeflow.viz.widgets.legend import build_legend_widget
from bikeflow.viz.widgets.map_wrap import build_map_wrap
from bikeflow.viz.widgets.time_slider import build_time_slider

CENTER_LAT = 42.360094
CENTER_LON = -71.094146

BIKE_LANE_STYLE = {
    "color": "#32D400",
    "weight": 5,
    "opacity": 0.6,
}


def add_bike_lanes(m, lane_files):
    """Overlay bike-lane GeoJSON files; a file that cannot be read is reported and skipped."""
    for path in lane_files or []:
        try:
            folium.GeoJson(
                str(path),
                name=str(path),
                style_function=lambda _feature: dict(BIKE_LANE_STYLE),
            ).add_to(m)
        except (OSError, ValueError) as e:
            print(f"{Fore.RED}Error loading bike lanes from {path}: {e}{Style.RESET_ALL}")


def render_map_document(
    *,
    controller,
    title: str | None = None,
    bike_lanes=None,
):
    """
    Single place that assembles the full Folium map HTML document for the
    controller's current time filter.
    """

    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=12,
        min_zoom=5,
        max_zoom=18,
        tiles="cartodbpositron",
        prefer_canvas=False,
    )

    # bike lanes (under the stations)
    add_bike_lanes(m, bike_lanes)

    # stations
    add_station_markers(m, controller)

    # time filter (widget)
    m.get_root().html.add_child(build_time_slider(controller.time_filter))

    # legend (widget)
    m.get_root().html.add_child(build_legend_widget())

    # wrapper + title; moves the panels above onto the map
    m.get_root().html.add_child(build_map_wrap(title))

    return m.get_root().render()
