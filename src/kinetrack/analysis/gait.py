"""Step detection and gait metrics from ankle trajectories.

This module is pure logic with NO I/O.

A step is registered when an ankle's vertical velocity turns from positive
(moving down the image, i.e. the foot descending) to non-positive, which
approximates a foot strike. Ground contact and flight times are NOT
measured: they are fixed fractions of the step period taken from
GaitSettings.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from kinetrack.core.config import GaitSettings
from kinetrack.core.types import KeypointIndex, MovementFrame

MS_PER_MINUTE = 60000.0

ANKLES = (KeypointIndex.LEFT_ANKLE, KeypointIndex.RIGHT_ANKLE)


@dataclass(frozen=True)
class GaitMetrics:
    """Gait metrics over the history window.

    Attributes:
        cadence: Steps per minute (both feet)
        stride_length: Net horizontal centroid travel per step (m)
        ground_contact_time: Modelled contact time per step (ms)
        flight_time: Modelled flight time per step (ms)
        step_count: Steps detected across both ankles
        step_timestamps: Timestamps (ms) of detected steps, sorted
    """

    cadence: float = 0.0
    stride_length: float = 0.0
    ground_contact_time: float = 0.0
    flight_time: float = 0.0
    step_count: int = 0
    step_timestamps: tuple[float, ...] = field(default_factory=tuple)


def ankle_vertical_velocities(
    frames: Sequence[MovementFrame],
    ankle: KeypointIndex,
    min_confidence: float = 0.3,
) -> list[tuple[float, float]]:
    """Vertical ankle velocity samples in pixels per second.

    Only pairs with a positive time step and both ankle keypoints above
    ``min_confidence`` produce a sample.

    Args:
        frames: Chronological history window
        ankle: Which ankle to track
        min_confidence: Exclusive confidence threshold

    Returns:
        List of (timestamp_ms, vy) for the later frame of each pair
    """
    samples: list[tuple[float, float]] = []

    for previous, current in zip(frames, frames[1:]):
        dt = (current.timestamp - previous.timestamp) / 1000.0
        if dt <= 0:
            continue

        prev_kp = previous.keypoint(ankle)
        curr_kp = current.keypoint(ankle)
        if prev_kp.confidence > min_confidence and curr_kp.confidence > min_confidence:
            samples.append((current.timestamp, (curr_kp.y - prev_kp.y) / dt))

    return samples


def detect_steps(samples: Sequence[tuple[float, float]]) -> list[float]:
    """Timestamps where velocity crosses from positive to non-positive."""
    return [
        current[0]
        for previous, current in zip(samples, samples[1:])
        if previous[1] > 0 and current[1] <= 0
    ]


def compute_gait(
    frames: Sequence[MovementFrame],
    pixels_per_meter: float,
    settings: GaitSettings | None = None,
) -> GaitMetrics:
    """Derive cadence, stride length and modelled contact/flight times.

    Args:
        frames: Chronological history window
        pixels_per_meter: Active calibration scale
        settings: Gait settings (uses defaults if None)

    Returns:
        GaitMetrics; all zero below ``settings.min_frames`` frames
    """
    settings = settings or GaitSettings()

    if len(frames) < settings.min_frames:
        return GaitMetrics()

    step_timestamps: list[float] = []
    for ankle in ANKLES:
        samples = ankle_vertical_velocities(frames, ankle, settings.min_ankle_confidence)
        step_timestamps.extend(detect_steps(samples))

    step_count = len(step_timestamps)

    window_minutes = (frames[-1].timestamp - frames[0].timestamp) / MS_PER_MINUTE
    cadence = step_count / window_minutes if window_minutes > 0 else 0.0

    valid = [f.center_of_mass for f in frames if f.center_of_mass.valid]
    horizontal_m = abs(valid[-1].x - valid[0].x) / pixels_per_meter if len(valid) >= 2 else 0.0
    stride_length = horizontal_m / step_count if step_count > 0 else 0.0

    step_period_ms = MS_PER_MINUTE / cadence if cadence > 0 else 0.0

    return GaitMetrics(
        cadence=cadence,
        stride_length=stride_length,
        ground_contact_time=step_period_ms * settings.ground_contact_fraction,
        flight_time=step_period_ms * settings.flight_fraction,
        step_count=step_count,
        step_timestamps=tuple(sorted(step_timestamps)),
    )
