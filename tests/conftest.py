"""Pytest fixtures for kinetrack tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from kinetrack.analysis.kinematics import compute_velocity
from kinetrack.core.config import (
    CalibrationSettings,
    JumpDetectionSettings,
    Settings,
)
from kinetrack.core.types import CenterOfMass, Keypoint, KeypointIndex, MovementFrame

FPS = 30.0
FRAME_MS = 1000.0 / FPS

# Upright athlete facing the camera: nose at y=100, ankles at y=600
STANDING_POSITIONS: dict[KeypointIndex, tuple[float, float]] = {
    KeypointIndex.NOSE: (320.0, 100.0),
    KeypointIndex.LEFT_EYE: (315.0, 95.0),
    KeypointIndex.RIGHT_EYE: (325.0, 95.0),
    KeypointIndex.LEFT_EAR: (310.0, 100.0),
    KeypointIndex.RIGHT_EAR: (330.0, 100.0),
    KeypointIndex.LEFT_SHOULDER: (290.0, 180.0),
    KeypointIndex.RIGHT_SHOULDER: (350.0, 180.0),
    KeypointIndex.LEFT_ELBOW: (280.0, 260.0),
    KeypointIndex.RIGHT_ELBOW: (360.0, 260.0),
    KeypointIndex.LEFT_WRIST: (275.0, 330.0),
    KeypointIndex.RIGHT_WRIST: (365.0, 330.0),
    KeypointIndex.LEFT_HIP: (300.0, 330.0),
    KeypointIndex.RIGHT_HIP: (340.0, 330.0),
    KeypointIndex.LEFT_KNEE: (300.0, 460.0),
    KeypointIndex.RIGHT_KNEE: (340.0, 460.0),
    KeypointIndex.LEFT_ANKLE: (300.0, 600.0),
    KeypointIndex.RIGHT_ANKLE: (340.0, 600.0),
}


def _standing(dx: float = 0.0, dy: float = 0.0, confidence: float = 0.9) -> list[Keypoint]:
    return [
        Keypoint(x=x + dx, y=y + dy, confidence=confidence, name=index.keypoint_name)
        for index, (x, y) in STANDING_POSITIONS.items()
    ]


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


@pytest.fixture
def standing_keypoints() -> list[Keypoint]:
    """Confident standing pose."""
    return _standing()


@pytest.fixture
def make_keypoints() -> Callable[..., list[Keypoint]]:
    """Factory for the standing pose translated by (dx, dy)."""
    return _standing


@pytest.fixture
def frame_builder() -> Callable[..., list[MovementFrame]]:
    """Factory building MovementFrame sequences from centroid positions.

    Positions of None produce frames with an invalid centroid. Velocities
    are derived exactly as the engine does at ingestion.
    """

    def build(
        positions: Sequence[tuple[float, float] | None],
        pixels_per_meter: float = 500.0,
        timestamps: Sequence[float] | None = None,
        ankle_ys: Sequence[tuple[float, float]] | None = None,
        ankle_confidence: float = 0.9,
    ) -> list[MovementFrame]:
        if timestamps is None:
            timestamps = [i * FRAME_MS for i in range(len(positions))]

        frames: list[MovementFrame] = []
        for i, (position, timestamp) in enumerate(zip(positions, timestamps)):
            if position is None:
                center_of_mass = CenterOfMass.invalid()
            else:
                center_of_mass = CenterOfMass(x=position[0], y=position[1])

            keypoints = [Keypoint(x=0.0, y=0.0, confidence=0.0) for _ in KeypointIndex]
            if ankle_ys is not None:
                left_y, right_y = ankle_ys[i]
                keypoints[KeypointIndex.LEFT_ANKLE.value] = Keypoint(
                    x=300.0, y=left_y, confidence=ankle_confidence
                )
                keypoints[KeypointIndex.RIGHT_ANKLE.value] = Keypoint(
                    x=340.0, y=right_y, confidence=ankle_confidence
                )

            velocity = compute_velocity(
                frames[-1] if frames else None,
                center_of_mass,
                timestamp,
                pixels_per_meter,
            )
            frames.append(
                MovementFrame(
                    timestamp=timestamp,
                    keypoints=tuple(keypoints),
                    center_of_mass=center_of_mass,
                    velocity=velocity,
                )
            )
        return frames

    return build


@pytest.fixture
def fake_clock() -> FakeClock:
    """Millisecond clock under test control."""
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Create default engine settings for testing."""
    return Settings()


@pytest.fixture
def jump_detection_settings() -> JumpDetectionSettings:
    """Create jump detection settings for testing."""
    return JumpDetectionSettings(
        min_frames=10,
        takeoff_velocity_threshold=-1.0,
        landing_velocity_threshold=0.5,
    )


@pytest.fixture
def calibration_settings() -> CalibrationSettings:
    """Create calibration settings for testing."""
    return CalibrationSettings()
