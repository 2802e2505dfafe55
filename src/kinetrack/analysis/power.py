"""Mechanical power estimate from mass, acceleration and speed.

Uses P = m * |a| * v per frame: a whole-body Newtonian approximation,
not joint power.
"""

from __future__ import annotations

import numpy as np

from kinetrack.analysis.kinematics import KinematicSeries
from kinetrack.analysis.metrics import PowerMetrics


def compute_power(series: KinematicSeries, mass_kg: float) -> PowerMetrics:
    """Compute current, average and peak power over the window.

    Args:
        series: Per-frame speeds and aligned accelerations
        mass_kg: Athlete body mass

    Returns:
        PowerMetrics in watts (all zero for an empty series)
    """
    if len(series) == 0:
        return PowerMetrics()

    powers = mass_kg * np.abs(series.accelerations) * series.speeds

    return PowerMetrics(
        current=float(powers[-1]),
        average=float(np.mean(powers)),
        peak=float(np.max(powers)),
    )
