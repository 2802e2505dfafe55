"""Performance metrics snapshot types.

This module is pure data with NO I/O. Snapshots are immutable; every
recomputation produces a new PerformanceMetrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MS_TO_KMH = 3.6


class SpeedZone(Enum):
    """Coarse movement intensity bands by centroid speed."""

    STATIONARY = "stationary"
    WALKING = "walking"
    JOGGING = "jogging"
    RUNNING = "running"
    SPRINTING = "sprinting"


# Exclusive upper bounds in m/s, checked in order
SPEED_ZONE_LIMITS: tuple[tuple[SpeedZone, float], ...] = (
    (SpeedZone.STATIONARY, 1.0),
    (SpeedZone.WALKING, 2.0),
    (SpeedZone.JOGGING, 3.5),
    (SpeedZone.RUNNING, 5.5),
)


def classify_speed_zone(speed: float) -> SpeedZone:
    """Map a speed in m/s to its intensity band."""
    for zone, limit in SPEED_ZONE_LIMITS:
        if speed < limit:
            return zone
    return SpeedZone.SPRINTING


@dataclass(frozen=True, slots=True)
class SpeedMetrics:
    """Centroid speed over the history window (m/s)."""

    instantaneous: float = 0.0
    average: float = 0.0
    max: float = 0.0

    @property
    def kilometers_per_hour(self) -> float:
        """Instantaneous speed in km/h."""
        return self.instantaneous * MS_TO_KMH

    @property
    def zone(self) -> SpeedZone:
        """Intensity band of the instantaneous speed."""
        return classify_speed_zone(self.instantaneous)


@dataclass(frozen=True, slots=True)
class DistanceMetrics:
    """Centroid path length over the history window (meters).

    Attributes:
        total: Sum of Euclidean per-frame displacements
        horizontal: Sum of absolute x displacements
        vertical: Sum of absolute y displacements
        displacement: Straight-line distance from first to last position
    """

    total: float = 0.0
    horizontal: float = 0.0
    vertical: float = 0.0
    displacement: float = 0.0


@dataclass(frozen=True, slots=True)
class AccelerationMetrics:
    """Rate of change of scalar speed (m/s^2)."""

    current: float = 0.0
    max: float = 0.0
    explosive_threshold: float = 15.0

    @property
    def is_decelerating(self) -> bool:
        """True while speed is dropping."""
        return self.current < 0

    @property
    def is_explosive(self) -> bool:
        """True when current acceleration magnitude exceeds the explosive threshold."""
        return abs(self.current) > self.explosive_threshold


@dataclass(frozen=True, slots=True)
class PowerMetrics:
    """Newtonian mechanical power estimate (watts)."""

    current: float = 0.0
    average: float = 0.0
    peak: float = 0.0


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """Immutable snapshot of every metric derived from the history window.

    Attributes:
        speed: Speed metrics (m/s)
        distance: Distance metrics (m)
        acceleration: Acceleration metrics (m/s^2)
        power: Power metrics (W)
        cadence: Steps per minute
        stride_length: Meters per step
        vertical_oscillation: Centroid vertical standard deviation (cm)
        ground_contact_time: Modelled contact time per step (ms)
        flight_time: Modelled flight time per step (ms)
        jump_height: Highest jump in the window (cm)
        frame_count: Number of history frames the snapshot was computed from
    """

    speed: SpeedMetrics = field(default_factory=SpeedMetrics)
    distance: DistanceMetrics = field(default_factory=DistanceMetrics)
    acceleration: AccelerationMetrics = field(default_factory=AccelerationMetrics)
    power: PowerMetrics = field(default_factory=PowerMetrics)
    cadence: float = 0.0
    stride_length: float = 0.0
    vertical_oscillation: float = 0.0
    ground_contact_time: float = 0.0
    flight_time: float = 0.0
    jump_height: float = 0.0
    frame_count: int = 0

    @classmethod
    def empty(cls, frame_count: int = 0) -> PerformanceMetrics:
        """All-zero snapshot, used before enough history exists."""
        return cls(frame_count=frame_count)

    def to_dict(self) -> dict[str, Any]:
        """Nested plain-dict view for presentation layers."""
        return {
            "speed": {
                "instantaneous": self.speed.instantaneous,
                "average": self.speed.average,
                "max": self.speed.max,
                "kilometers_per_hour": self.speed.kilometers_per_hour,
                "zone": self.speed.zone.value,
            },
            "distance": {
                "total": self.distance.total,
                "horizontal": self.distance.horizontal,
                "vertical": self.distance.vertical,
                "displacement": self.distance.displacement,
            },
            "acceleration": {
                "current": self.acceleration.current,
                "max": self.acceleration.max,
                "is_decelerating": self.acceleration.is_decelerating,
                "is_explosive": self.acceleration.is_explosive,
            },
            "power": {
                "current": self.power.current,
                "average": self.power.average,
                "peak": self.power.peak,
            },
            "cadence": self.cadence,
            "stride_length": self.stride_length,
            "vertical_oscillation": self.vertical_oscillation,
            "ground_contact_time": self.ground_contact_time,
            "flight_time": self.flight_time,
            "jump_height": self.jump_height,
            "frame_count": self.frame_count,
        }
