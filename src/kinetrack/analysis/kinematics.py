"""Speed, distance and acceleration from the centroid history.

This module is pure logic with NO I/O. Finite differences are taken over
consecutive frames; no smoothing or outlier rejection is applied, so a
centroid jump after an occlusion shows up as a speed spike.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from kinetrack.analysis.metrics import AccelerationMetrics, DistanceMetrics, SpeedMetrics
from kinetrack.core.config import KinematicsSettings
from kinetrack.core.logging import get_logger
from kinetrack.core.types import CenterOfMass, MovementFrame, Vector2

logger = get_logger(__name__)


def compute_velocity(
    previous: MovementFrame | None,
    center_of_mass: CenterOfMass,
    timestamp: float,
    pixels_per_meter: float,
) -> Vector2:
    """Centroid velocity between the previous frame and a new detection.

    Args:
        previous: Last frame in history (None for the first frame)
        center_of_mass: Centroid of the new detection
        timestamp: Timestamp of the new detection (ms)
        pixels_per_meter: Active calibration scale

    Returns:
        Velocity in m/s; zero for the first frame, for non-increasing
        timestamps, or when either centroid carries no signal
    """
    if previous is None:
        return Vector2()

    dt = (timestamp - previous.timestamp) / 1000.0
    if dt <= 0:
        logger.debug(
            "Non-increasing timestamp (%.1f ms after %.1f ms), zero velocity",
            timestamp,
            previous.timestamp,
        )
        return Vector2()

    if not (center_of_mass.valid and previous.center_of_mass.valid):
        return Vector2()

    return Vector2(
        x=(center_of_mass.x - previous.center_of_mass.x) / pixels_per_meter / dt,
        y=(center_of_mass.y - previous.center_of_mass.y) / pixels_per_meter / dt,
    )


@dataclass(frozen=True, eq=False)
class KinematicSeries:
    """Per-frame kinematic samples aligned with the history window.

    Attributes:
        timestamps: Frame timestamps (ms)
        speeds: Scalar centroid speed per frame (m/s)
        accelerations: Speed change into each frame (m/s^2); 0 for the
            first frame and for frames with non-increasing timestamps
    """

    timestamps: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))
    speeds: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))
    accelerations: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))

    def __len__(self) -> int:
        return int(self.speeds.shape[0])


@dataclass(frozen=True)
class KinematicsResult:
    """Kinematic metrics plus the series they were computed from."""

    speed: SpeedMetrics
    distance: DistanceMetrics
    acceleration: AccelerationMetrics
    series: KinematicSeries

    @classmethod
    def empty(cls, explosive_threshold: float = 15.0) -> KinematicsResult:
        """All-zero result for windows below the minimum size."""
        return cls(
            speed=SpeedMetrics(),
            distance=DistanceMetrics(),
            acceleration=AccelerationMetrics(explosive_threshold=explosive_threshold),
            series=KinematicSeries(),
        )


def compute_kinematics(
    frames: Sequence[MovementFrame],
    pixels_per_meter: float,
    settings: KinematicsSettings | None = None,
) -> KinematicsResult:
    """Derive speed, distance and acceleration over the history window.

    Args:
        frames: Chronological history window
        pixels_per_meter: Active calibration scale
        settings: Kinematics settings (uses defaults if None)

    Returns:
        KinematicsResult; all zero with fewer than 2 frames
    """
    settings = settings or KinematicsSettings()

    if len(frames) < max(2, settings.min_frames):
        return KinematicsResult.empty(settings.explosive_threshold)

    timestamps = np.array([f.timestamp for f in frames], dtype=np.float64)
    speeds = np.array([f.speed for f in frames], dtype=np.float64)

    speed = SpeedMetrics(
        instantaneous=float(speeds[-1]),
        average=float(np.mean(speeds)),
        max=float(np.max(speeds)),
    )

    # Acceleration over pairs with positive time step only
    dt = np.diff(timestamps) / 1000.0
    dv = np.diff(speeds)
    forward = dt > 0
    pair_acceleration = np.zeros_like(dv)
    pair_acceleration[forward] = dv[forward] / dt[forward]

    measured = pair_acceleration[forward]
    acceleration = AccelerationMetrics(
        current=float(measured[-1]) if measured.size else 0.0,
        max=float(np.max(np.abs(measured))) if measured.size else 0.0,
        explosive_threshold=settings.explosive_threshold,
    )

    series = KinematicSeries(
        timestamps=timestamps,
        speeds=speeds,
        accelerations=np.concatenate(([0.0], pair_acceleration)),
    )

    return KinematicsResult(
        speed=speed,
        distance=_compute_distance(frames, pixels_per_meter),
        acceleration=acceleration,
        series=series,
    )


def _compute_distance(
    frames: Sequence[MovementFrame],
    pixels_per_meter: float,
) -> DistanceMetrics:
    """Accumulate centroid path length over pairs where both centroids are valid."""
    xs = np.array([f.center_of_mass.x for f in frames], dtype=np.float64)
    ys = np.array([f.center_of_mass.y for f in frames], dtype=np.float64)
    valid = np.array([f.center_of_mass.valid for f in frames], dtype=bool)

    pair_valid = valid[1:] & valid[:-1]
    dx = np.diff(xs)[pair_valid] / pixels_per_meter
    dy = np.diff(ys)[pair_valid] / pixels_per_meter

    valid_idx = np.flatnonzero(valid)
    displacement = 0.0
    if valid_idx.size >= 2:
        first, last = valid_idx[0], valid_idx[-1]
        displacement = float(np.hypot(xs[last] - xs[first], ys[last] - ys[first])) / pixels_per_meter

    return DistanceMetrics(
        total=float(np.sum(np.hypot(dx, dy))),
        horizontal=float(np.sum(np.abs(dx))),
        vertical=float(np.sum(np.abs(dy))),
        displacement=displacement,
    )
