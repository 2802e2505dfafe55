"""Frame ingestion and metrics orchestration."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from kinetrack.analysis.detector import compute_vertical
from kinetrack.analysis.gait import compute_gait
from kinetrack.analysis.history import FrameHistoryBuffer
from kinetrack.analysis.kinematics import compute_kinematics, compute_velocity
from kinetrack.analysis.metrics import PerformanceMetrics
from kinetrack.analysis.power import compute_power
from kinetrack.analysis.profiles import SportProfile, SportType, map_sport_profile
from kinetrack.core.config import Settings, get_settings
from kinetrack.core.logging import get_logger
from kinetrack.core.types import CalibrationProfile, MovementFrame
from kinetrack.pipeline.cache import Clock, MetricsCache
from kinetrack.vision.calibration import Calibrator
from kinetrack.vision.center_of_mass import compute_center_of_mass
from kinetrack.vision.keypoints import KeypointLike, normalize_keypoints

logger = get_logger(__name__)


class MotionAnalyticsEngine:
    """Turns a stream of COCO-17 keypoint detections into performance metrics.

    Coordinates:
    - Keypoint validation and center of mass estimation
    - Velocity at ingestion and bounded frame history
    - Kinematics, gait, vertical motion and power analysis
    - Throttled recomputation through MetricsCache

    One instance tracks one athlete. History, calibration and cache are
    guarded by a single re-entrant lock, so ingestion and reads from
    different threads are serialized.
    """

    def __init__(
        self,
        athlete_height_m: float | None = None,
        athlete_mass_kg: float | None = None,
        pixels_per_meter: float | None = None,
        settings: Settings | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            athlete_height_m: Standing height in meters (settings default if None)
            athlete_mass_kg: Body mass in kg (settings default if None)
            pixels_per_meter: Preset calibration; the configured default
                guess is used if None
            settings: Engine settings (uses get_settings() if None)
            clock: Millisecond clock for the recompute throttle
        """
        self.settings = settings or get_settings()

        self.athlete_height_m = (
            athlete_height_m if athlete_height_m is not None else self.settings.athlete.height_m
        )
        self.athlete_mass_kg = (
            athlete_mass_kg if athlete_mass_kg is not None else self.settings.athlete.mass_kg
        )

        self._lock = threading.RLock()
        self._calibrator = Calibrator(self.athlete_height_m, self.settings.calibration)
        self._history = FrameHistoryBuffer(self.settings.engine.history_size)
        self._cache = MetricsCache(self.settings.engine.recompute_interval_ms, clock)

        if pixels_per_meter is not None:
            self._calibrator.calibrate_manual(pixels_per_meter)

    @property
    def calibration(self) -> CalibrationProfile:
        """Active calibration profile."""
        with self._lock:
            return self._calibrator.active_profile

    @property
    def is_calibrated(self) -> bool:
        """Whether a pose or manual calibration is in effect."""
        with self._lock:
            return self._calibrator.is_calibrated

    @property
    def pixels_per_meter(self) -> float:
        """Active pixels-per-meter scale."""
        return self.calibration.pixels_per_meter

    @property
    def frame_count(self) -> int:
        """Number of frames currently in history."""
        with self._lock:
            return len(self._history)

    @property
    def history(self) -> tuple[MovementFrame, ...]:
        """Chronological snapshot of the frame history."""
        with self._lock:
            return self._history.frames()

    @property
    def latest_metrics(self) -> PerformanceMetrics:
        """Last computed snapshot, or an empty one before any frame."""
        with self._lock:
            snapshot = self._cache.snapshot
            if snapshot is None:
                return PerformanceMetrics.empty(len(self._history))
            return snapshot

    def calibrate_from_pose(self, keypoints: Sequence[KeypointLike]) -> CalibrationProfile:
        """Calibrate from a standing pose using the athlete's height.

        Frames already in history keep the velocities they were ingested with.

        Raises:
            CalibrationError: If nose or ankles are not confident enough
            KeypointFormatError: If the keypoint payload is malformed
        """
        normalized = normalize_keypoints(keypoints)
        with self._lock:
            return self._calibrator.calibrate_from_pose(normalized)

    def calibrate_manual(self, pixels_per_meter: float) -> CalibrationProfile:
        """Set the pixels-per-meter scale directly.

        Raises:
            CalibrationError: If the value is not positive
        """
        with self._lock:
            return self._calibrator.calibrate_manual(pixels_per_meter)

    def add_frame(
        self,
        keypoints: Sequence[KeypointLike],
        timestamp_ms: float,
    ) -> PerformanceMetrics:
        """Ingest one detection and return the current metrics snapshot.

        The frame is always appended to history. The full metrics bundle is
        recomputed only when the cached snapshot is older than the recompute
        interval; otherwise the previous snapshot object is returned.

        Args:
            keypoints: 17 COCO-ordered keypoints (Keypoint or mapping records)
            timestamp_ms: Monotonic timestamp in milliseconds, non-decreasing

        Returns:
            Current PerformanceMetrics snapshot

        Raises:
            KeypointFormatError: If the keypoint payload is malformed
        """
        normalized = normalize_keypoints(keypoints)

        with self._lock:
            center_of_mass = compute_center_of_mass(
                normalized, self.settings.center_of_mass.min_keypoint_confidence
            )
            velocity = compute_velocity(
                self._history.latest,
                center_of_mass,
                timestamp_ms,
                self._calibrator.active_profile.pixels_per_meter,
            )

            self._history.append(
                MovementFrame(
                    timestamp=timestamp_ms,
                    keypoints=normalized,
                    center_of_mass=center_of_mass,
                    velocity=velocity,
                )
            )

            return self._cache.get_or_compute(self._compute_metrics)

    def sport_metrics(self, sport: SportType | str) -> SportProfile | PerformanceMetrics:
        """Project the latest snapshot into a sport-specific view.

        Unknown sport tags return the generic snapshot unchanged.
        """
        return map_sport_profile(self.latest_metrics, sport)

    def reset(self, recalibrate: bool = False) -> None:
        """Clear history and cached metrics between sessions.

        Args:
            recalibrate: Also restore the default calibration profile
        """
        with self._lock:
            self._history.clear()
            self._cache.clear()
            if recalibrate:
                self._calibrator.reset()
        logger.info("Session reset (recalibrate=%s)", recalibrate)

    def _compute_metrics(self) -> PerformanceMetrics:
        """Run every analyzer over the current history window."""
        frames = self._history.frames()
        pixels_per_meter = self._calibrator.active_profile.pixels_per_meter

        kinematics = compute_kinematics(frames, pixels_per_meter, self.settings.kinematics)
        gait = compute_gait(frames, pixels_per_meter, self.settings.gait)
        vertical = compute_vertical(frames, pixels_per_meter, self.settings.jump)
        power = compute_power(kinematics.series, self.athlete_mass_kg)

        return PerformanceMetrics(
            speed=kinematics.speed,
            distance=kinematics.distance,
            acceleration=kinematics.acceleration,
            power=power,
            cadence=gait.cadence,
            stride_length=gait.stride_length,
            vertical_oscillation=vertical.vertical_oscillation,
            ground_contact_time=gait.ground_contact_time,
            flight_time=gait.flight_time,
            jump_height=vertical.jump_height,
            frame_count=len(frames),
        )
