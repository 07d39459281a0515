# bikeflow/viz/widgets/time_slider.py
import json

import folium

from bikeflow.index.minute_buckets import MINUTES_PER_DAY
from bikeflow.index.window import ANY_TIME
from bikeflow.viz.format import format_time


def build_time_slider(time_filter: int, *, param: str = "t"):
    """
    Slider over -1..1439 ("any time" at the far left).

      - dragging updates the label in place
      - releasing reloads the page with ?t=<minute>
    """
    # labels come from format_time so page and server agree
    labels = json.dumps([format_time(t) for t in range(ANY_TIME, MINUTES_PER_DAY)])

    return folium.Element(
        f"""
<style>
#time-filter {{ top: 12px; right: 16px; padding: 8px 14px; font-size: 13px; z-index: 1300; }}
#time-filter input {{
  width: 260px;
}}
#selected-time {{
  display: block;
  font-weight: 600;
}}
#any-time {{
  display: block;
  color: #666;
  font-style: italic;
}}
</style>

<div id="time-filter" class="map-panel" data-overlay>
  <label>Filter by time:
    <input id="time-slider" type="range" min="{ANY_TIME}" max="{MINUTES_PER_DAY - 1}" value="{time_filter}">
  </label>
  <time id="selected-time"></time>
  <em id="any-time">(any time)</em>
</div>

<script>
const TIME_LABELS = {labels};

function updateTimeDisplay() {{
  const slider = document.getElementById("time-slider");
  const selected = document.getElementById("selected-time");
  const anyTime = document.getElementById("any-time");
  const t = Number(slider.value);

  if (t === {ANY_TIME}) {{
    selected.textContent = "";
    anyTime.style.display = "block";
  }} else {{
    selected.textContent = TIME_LABELS[t + 1];
    anyTime.style.display = "none";
  }}
}}

function applyTimeFilter() {{
  const slider = document.getElementById("time-slider");
  const url = new URL(window.location.href);
  url.searchParams.set("{param}", String(slider.value));
  window.location.href = url.toString();
}}

document.addEventListener("DOMContentLoaded", () => {{
  const slider = document.getElementById("time-slider");
  if (!slider) return;

  slider.addEventListener("input", updateTimeDisplay);
  slider.addEventListener("change", applyTimeFilter);
  updateTimeDisplay();
}});
</script>
"""
    )
