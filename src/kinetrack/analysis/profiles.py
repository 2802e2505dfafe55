"""Sport-specific projections of a PerformanceMetrics snapshot.

Pure arithmetic recombination of existing metrics; zero inputs give zero
outputs, never inf or NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from kinetrack.analysis.metrics import MS_TO_KMH, PerformanceMetrics
from kinetrack.core.logging import get_logger

logger = get_logger(__name__)

GRAVITY = 9.81  # m/s^2


class SportType(Enum):
    """Supported sport views."""

    RUNNING = "running"
    JUMPING = "jumping"
    CYCLING = "cycling"
    WEIGHTLIFTING = "weightlifting"


@dataclass(frozen=True, slots=True)
class RunningProfile:
    """Running view: pace in min/km, cadence in steps/min."""

    pace: float
    cadence: float
    stride_length: float
    vertical_oscillation: float
    ground_contact_time: float


@dataclass(frozen=True, slots=True)
class JumpingProfile:
    """Jumping view: height in cm, takeoff velocity in m/s."""

    jump_height: float
    peak_power: float
    flight_time: float
    takeoff_velocity: float


@dataclass(frozen=True, slots=True)
class CyclingProfile:
    """Cycling view: speed in km/h, average power in watts."""

    speed: float
    power: float
    cadence: float


@dataclass(frozen=True, slots=True)
class WeightliftingProfile:
    """Weightlifting view: bar path approximated by the body centroid."""

    bar_velocity: float
    peak_power: float
    acceleration: float
    range: float


SportProfile = RunningProfile | JumpingProfile | CyclingProfile | WeightliftingProfile


def pace_min_per_km(average_speed: float) -> float:
    """Minutes per kilometer at the given speed in m/s (0 when not moving)."""
    if average_speed <= 0:
        return 0.0
    return 1000.0 / average_speed / 60.0


def takeoff_velocity(jump_height_cm: float) -> float:
    """Vertical takeoff velocity implied by a jump height, v = sqrt(2 g h)."""
    if jump_height_cm <= 0:
        return 0.0
    return math.sqrt(2 * GRAVITY * jump_height_cm / 100.0)


def _resolve_sport(sport: SportType | str) -> SportType | None:
    if isinstance(sport, SportType):
        return sport
    try:
        return SportType(str(sport).lower())
    except ValueError:
        return None


def map_sport_profile(
    metrics: PerformanceMetrics,
    sport: SportType | str,
) -> SportProfile | PerformanceMetrics:
    """Project a metrics snapshot into a sport-specific view.

    Args:
        metrics: Snapshot to project
        sport: SportType or its string tag

    Returns:
        The sport profile, or ``metrics`` unchanged for an unknown tag
    """
    resolved = _resolve_sport(sport)

    if resolved is SportType.RUNNING:
        return RunningProfile(
            pace=pace_min_per_km(metrics.speed.average),
            cadence=metrics.cadence,
            stride_length=metrics.stride_length,
            vertical_oscillation=metrics.vertical_oscillation,
            ground_contact_time=metrics.ground_contact_time,
        )

    if resolved is SportType.JUMPING:
        return JumpingProfile(
            jump_height=metrics.jump_height,
            peak_power=metrics.power.peak,
            flight_time=metrics.flight_time,
            takeoff_velocity=takeoff_velocity(metrics.jump_height),
        )

    if resolved is SportType.CYCLING:
        return CyclingProfile(
            speed=metrics.speed.average * MS_TO_KMH,
            power=metrics.power.average,
            cadence=metrics.cadence,
        )

    if resolved is SportType.WEIGHTLIFTING:
        return WeightliftingProfile(
            bar_velocity=metrics.speed.instantaneous,
            peak_power=metrics.power.peak,
            acceleration=metrics.acceleration.current,
            range=metrics.distance.vertical,
        )

    logger.debug("Unknown sport %r, returning generic metrics", sport)
    return metrics
