# bikeflow/viz/widgets/legend.py
import folium

from bikeflow.viz.scales import FLOW_LEVELS, flow_color

_LABELS = {1.0: "More departures", 0.5: "Balanced", 0.0: "More arrivals"}


def build_legend_widget():
    """Flow-balance legend; build_map_wrap moves it onto the map."""
    rows = "".join(
        f'<div><span style="color:{flow_color(level)}">●</span> {_LABELS[level]}</div>'
        for level in sorted(FLOW_LEVELS, reverse=True)
    )

    return folium.Element(
        f"""
<style>
#map-legend {{ bottom: 24px; left: 16px; padding: 8px 12px; z-index: 1200; }}
</style>

<div id="map-legend" class="map-panel" data-overlay>
  <div><b>Legend</b></div>
  {rows}
</div>
"""
    )
