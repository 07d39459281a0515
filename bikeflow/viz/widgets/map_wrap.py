# bikeflow/viz/widgets/map_wrap.py
import json

import folium


def build_map_wrap(title: str | None = None):
    """
    Positioned container around the Leaflet map so overlay panels can be
    anchored to it.

    Builds the wrapper on load and moves every element tagged with
    data-overlay into it.
    """
    title_js = f"placeTitle(wrap, {json.dumps(title)});" if title else ""

    return folium.Element(
        f"""
<style>
#map-wrap {{ position: relative; width: 100%; }}
#map-wrap .leaflet-container {{ width: 100% !important; height: 85vh !important; min-height: 520px; }}
.map-panel {{
  position: absolute;
  background: rgba(255,255,255,0.95);
  border-radius: 10px;
  font-size: 12px;
  box-shadow: 0 1px 4px rgba(0,0,0,0.2);
}}
#map-title {{
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
function ensureMapWrap() {{
  let wrap = document.getElementById("map-wrap");
  if (wrap) return wrap;

  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return null;

  wrap = document.createElement("div");
  wrap.id = "map-wrap";
  mapEl.parentNode.insertBefore(wrap, mapEl);
  wrap.appendChild(mapEl);
  return wrap;
}}

function placeTitle(wrap, text) {{
  const el = document.createElement("div");
  el.id = "map-title";
  el.className = "map-panel";
  el.textContent = text;
  wrap.appendChild(el);
}}

document.addEventListener("DOMContentLoaded", () => {{
  const wrap = ensureMapWrap();
  if (!wrap) return;
  {title_js}
  document.querySelectorAll("[data-overlay]").forEach((el) => wrap.appendChild(el));
}});
</script>
"""
    )
