"""Calibration system for pixel-to-meter conversion."""

from __future__ import annotations

import time
from collections.abc import Sequence

from kinetrack.core.config import CalibrationSettings
from kinetrack.core.exceptions import CalibrationError
from kinetrack.core.logging import get_logger
from kinetrack.core.types import (
    CalibrationMethod,
    CalibrationProfile,
    Keypoint,
    KeypointIndex,
)

logger = get_logger(__name__)


class Calibrator:
    """Establishes the pixels-per-meter scale for one athlete.

    Supports:
    - Known height reference (athlete standing, nose to ankles)
    - Manual specification
    - Configured default guess
    """

    def __init__(
        self,
        athlete_height_m: float = 1.75,
        settings: CalibrationSettings | None = None,
    ) -> None:
        """Initialize calibrator.

        Args:
            athlete_height_m: Athlete standing height in meters
            settings: Calibration settings (uses defaults if None)
        """
        if athlete_height_m <= 0:
            raise ValueError("athlete_height_m must be positive")

        self.settings = settings or CalibrationSettings()
        self.athlete_height_m = athlete_height_m
        self._current_profile: CalibrationProfile | None = None
        self._default_profile = self.get_default_profile()

    @property
    def current_profile(self) -> CalibrationProfile | None:
        """Get the last profile produced by this calibrator."""
        return self._current_profile

    @property
    def is_calibrated(self) -> bool:
        """Check if a calibration has been performed."""
        return self._current_profile is not None

    @property
    def active_profile(self) -> CalibrationProfile:
        """Profile in effect: the last calibration, or the configured default."""
        if self._current_profile is None:
            return self._default_profile
        return self._current_profile

    def reset(self) -> None:
        """Discard the last calibration so the default profile applies again."""
        self._current_profile = None
        logger.info(
            "Calibration reset to default: %.2f px/m", self._default_profile.pixels_per_meter
        )

    def calibrate_from_pose(self, keypoints: Sequence[Keypoint]) -> CalibrationProfile:
        """Calibrate from a standing pose using the athlete's known height.

        Nose-to-ankle distance stands in for standing height.

        Args:
            keypoints: COCO-ordered keypoints

        Returns:
            CalibrationProfile with computed pixels_per_meter

        Raises:
            CalibrationError: If nose or either ankle is not confident enough,
                or the measured height is zero
        """
        threshold = self.settings.min_keypoint_confidence
        required = (KeypointIndex.NOSE, KeypointIndex.LEFT_ANKLE, KeypointIndex.RIGHT_ANKLE)

        missing = [
            index.name
            for index in required
            if index.value >= len(keypoints) or not keypoints[index.value].is_confident(threshold)
        ]
        if missing:
            raise CalibrationError(
                f"Keypoints below confidence {threshold}: {', '.join(missing)}"
            )

        nose = keypoints[KeypointIndex.NOSE.value]
        left_ankle = keypoints[KeypointIndex.LEFT_ANKLE.value]
        right_ankle = keypoints[KeypointIndex.RIGHT_ANKLE.value]

        ankle_y = (left_ankle.y + right_ankle.y) / 2
        height_px = abs(ankle_y - nose.y)

        if height_px <= 0:
            raise CalibrationError("Nose and ankles at the same height")

        pixels_per_meter = height_px / self.athlete_height_m

        profile = CalibrationProfile(
            pixels_per_meter=pixels_per_meter,
            method=CalibrationMethod.KNOWN_HEIGHT,
            timestamp=time.time(),
            reference_height_m=self.athlete_height_m,
        )

        self._current_profile = profile
        logger.info(
            "Height calibration: %.2f px/m (height: %.2f m -> %.0f px)",
            pixels_per_meter,
            self.athlete_height_m,
            height_px,
        )

        return profile

    def calibrate_manual(self, pixels_per_meter: float) -> CalibrationProfile:
        """Set calibration manually.

        Args:
            pixels_per_meter: Known pixels per meter value

        Returns:
            CalibrationProfile with specified value

        Raises:
            CalibrationError: If the value is not positive
        """
        if pixels_per_meter <= 0:
            raise CalibrationError(f"pixels_per_meter must be positive, got {pixels_per_meter}")

        profile = CalibrationProfile(
            pixels_per_meter=pixels_per_meter,
            method=CalibrationMethod.MANUAL,
            timestamp=time.time(),
        )

        self._current_profile = profile
        logger.info("Manual calibration: %.2f px/m", pixels_per_meter)

        return profile

    def get_default_profile(self) -> CalibrationProfile:
        """Get default calibration profile from settings."""
        return CalibrationProfile(
            pixels_per_meter=self.settings.default_pixels_per_meter,
            method=CalibrationMethod.DEFAULT,
            timestamp=time.time(),
        )
