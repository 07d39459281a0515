import folium

from bikeflow.viz.scales import flow_color


def add_station_markers(m, controller):
    """
    Draw one circle per station.
      radius  -> controller radius scale (sqrt of total traffic)
      colour  -> flow balance (departures vs arrivals)
      tooltip -> "<total> trips (<dep> departures, <arr> arrivals)"
    """
    # biggest first so small circles stay clickable on top
    ordered = sorted(controller.stations, key=lambda s: s["totalTraffic"], reverse=True)

    for s in ordered:
        color = flow_color(controller.flow(s))
        popup = [
            f"<b>{s.get('name') or s['short_name']}</b>",
            f"Station: {s['short_name']}",
            f"Time: {controller.time_label()}",
            controller.tooltip(s),
        ]

        folium.CircleMarker(
            location=[float(s["lat"]), float(s["lon"])],
            radius=controller.radius(s),
            fill=True,
            fill_color=color,
            fill_opacity=0.6,
            color="white",
            weight=1,
            tooltip=controller.tooltip(s),
            popup="<br>".join(popup),
        ).add_to(m)
