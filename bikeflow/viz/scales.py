# bikeflow/viz/scales.py
from __future__ import annotations

from typing import Tuple

import numpy as np

from bikeflow.index.window import ANY_TIME

UNFILTERED_RADIUS_RANGE = (0.0, 25.0)
FILTERED_RADIUS_RANGE = (3.0, 50.0)

FLOW_LEVELS = (0.0, 0.5, 1.0)
FLOW_THRESHOLDS = (1 / 3, 2 / 3)
BALANCED = 0.5

DEPARTURES_COLOR = (70, 130, 180)   # steelblue
ARRIVALS_COLOR = (255, 140, 0)      # darkorange


class SqrtScale:
    """
    Square-root scale: area of a circle drawn with the output as radius grows
    linearly with the input.

    A degenerate domain (min == max) maps everything to the middle of the
    range. Accepts scalars or numpy arrays.
    """

    def __init__(self, domain: Tuple[float, float] = (0.0, 1.0), range: Tuple[float, float] = (0.0, 1.0)):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))

    def with_range(self, range: Tuple[float, float]) -> "SqrtScale":
        return SqrtScale(self.domain, range)

    def __call__(self, x):
        d0, d1 = (_signed_sqrt(d) for d in self.domain)
        r0, r1 = self.range

        xs = _signed_sqrt(np.asarray(x, dtype=float))
        if d1 == d0:
            t = np.full_like(xs, 0.5)
        else:
            t = (xs - d0) / (d1 - d0)

        y = r0 + (r1 - r0) * t
        return float(y) if np.ndim(y) == 0 else y

    def __repr__(self):
        return f"SqrtScale(domain={self.domain}, range={self.range})"


def _signed_sqrt(x):
    return np.sign(x) * np.sqrt(np.abs(x))


def radius_scale(max_total_traffic: float, time_filter: int = ANY_TIME) -> SqrtScale:
    """Radius scale over [0, max_total_traffic]; filtered views get the wider range."""
    r = UNFILTERED_RADIUS_RANGE if time_filter == ANY_TIME else FILTERED_RADIUS_RANGE
    return SqrtScale((0.0, float(max_total_traffic)), r)


def quantize_flow(ratio):
    """
    Equal-width quantizer: [0, 1/3) -> 0, [1/3, 2/3) -> 0.5, [2/3, 1] -> 1.
    Out-of-range ratios land on the end levels.
    """
    r = np.asarray(ratio, dtype=float)
    if np.isnan(r).any():
        raise ValueError("flow ratio is NaN")

    levels = np.asarray(FLOW_LEVELS)[np.searchsorted(FLOW_THRESHOLDS, r, side="right")]
    return float(levels) if np.ndim(levels) == 0 else levels


def flow_balance(station: dict) -> float:
    total = int(station.get("totalTraffic", 0))
    if total == 0:
        return BALANCED
    return quantize_flow(int(station.get("departures", 0)) / total)


def flow_color(level: float) -> str:
    """Blend of the departures and arrivals colours; level 1 is all departures."""
    level = min(max(float(level), 0.0), 1.0)
    rgb = (
        round(d * level + a * (1 - level))
        for d, a in zip(DEPARTURES_COLOR, ARRIVALS_COLOR)
    )
    return "#{:02x}{:02x}{:02x}".format(*rgb)
