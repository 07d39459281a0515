# bikeflow/viz/format.py
from bikeflow.index.window import ANY_TIME, validate_time_filter


def format_time(minutes: int) -> str:
    """Minute of day as a short 12-hour time, e.g. 870 -> "2:30 PM"."""
    minutes = validate_time_filter(minutes)
    if minutes == ANY_TIME:
        return "(any time)"

    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def traffic_tooltip(station: dict) -> str:
    return (
        f"{station['totalTraffic']} trips "
        f"({station['departures']} departures, {station['arrivals']} arrivals)"
    )
