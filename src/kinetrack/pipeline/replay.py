"""Replay of recorded keypoint sessions through the engine.

Recording format (JSON)::

    {
      "athlete": {"height_m": 1.80, "mass_kg": 75.0},   # optional
      "frames": [
        {"timestamp": 0.0, "keypoints": [{"x": .., "y": .., "score": ..}, ...]},
        ...
      ]
    }

A bare list of frame objects is accepted as well.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from kinetrack.analysis.detector import detect_jumps_batch
from kinetrack.analysis.metrics import PerformanceMetrics
from kinetrack.core.config import Settings
from kinetrack.core.exceptions import CalibrationError, KeypointFormatError
from kinetrack.core.logging import get_logger
from kinetrack.core.types import JumpEvent
from kinetrack.pipeline.processor import MotionAnalyticsEngine

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecordedFrame:
    """One recorded detection."""

    timestamp: float
    keypoints: list[dict[str, Any]]


@dataclass
class Recording:
    """A recorded session with optional athlete attributes."""

    frames: list[RecordedFrame]
    athlete_height_m: float | None = None
    athlete_mass_kg: float | None = None


@dataclass
class ReplayResult:
    """Outcome of replaying a recording.

    Attributes:
        metrics: Snapshot returned for the last frame
        frames_processed: Frames ingested by the engine
        calibrated: Whether calibration from a standing pose succeeded
        pixels_per_meter: Scale in effect at the end of the replay
        jumps: Jumps detected in the final history window
    """

    metrics: PerformanceMetrics
    frames_processed: int
    calibrated: bool
    pixels_per_meter: float
    jumps: list[JumpEvent] = field(default_factory=list)


def parse_recording(data: Any) -> Recording:
    """Build a Recording from decoded JSON.

    Raises:
        KeypointFormatError: If frames are missing timestamps or keypoints
    """
    athlete: dict[str, Any] = {}
    if isinstance(data, dict):
        athlete = data.get("athlete") or {}
        raw_frames = data.get("frames", [])
    else:
        raw_frames = data

    frames: list[RecordedFrame] = []
    for i, raw in enumerate(raw_frames):
        try:
            frames.append(
                RecordedFrame(timestamp=float(raw["timestamp"]), keypoints=list(raw["keypoints"]))
            )
        except (KeyError, TypeError, ValueError) as e:
            raise KeypointFormatError(f"Invalid recorded frame {i}: {e}") from e

    return Recording(
        frames=frames,
        athlete_height_m=athlete.get("height_m"),
        athlete_mass_kg=athlete.get("mass_kg"),
    )


def load_recording(path: Path) -> Recording:
    """Load a recording from a JSON file.

    Raises:
        KeypointFormatError: If the file is not valid JSON or malformed
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise KeypointFormatError(f"Failed to parse recording {path}: {e}") from e

    recording = parse_recording(data)
    logger.info("Loaded %d recorded frames from %s", len(recording.frames), path)
    return recording


class ReplayClock:
    """Clock that reports the timestamp of the frame being replayed.

    Keeps the recompute throttle on recording time instead of wall time,
    so a replay yields the same snapshots as the live session would have.
    """

    def __init__(self) -> None:
        self.now_ms = 0.0

    def __call__(self) -> float:
        return self.now_ms


def replay_recording(
    recording: Recording,
    settings: Settings | None = None,
    pixels_per_meter: float | None = None,
    calibrate: bool = True,
) -> ReplayResult:
    """Feed every recorded frame through a fresh engine in order.

    Args:
        recording: Recorded session
        settings: Engine settings (uses get_settings() if None)
        pixels_per_meter: Preset calibration scale
        calibrate: Try pose calibration on each frame until one succeeds

    Returns:
        ReplayResult for the session
    """
    clock = ReplayClock()
    engine = MotionAnalyticsEngine(
        athlete_height_m=recording.athlete_height_m,
        athlete_mass_kg=recording.athlete_mass_kg,
        pixels_per_meter=pixels_per_meter,
        settings=settings,
        clock=clock,
    )

    metrics = engine.latest_metrics
    calibrated = False

    for frame in recording.frames:
        if calibrate and not calibrated:
            try:
                engine.calibrate_from_pose(frame.keypoints)
                calibrated = True
            except CalibrationError as e:
                logger.debug("Calibration skipped at %.0f ms: %s", frame.timestamp, e)

        clock.now_ms = frame.timestamp
        metrics = engine.add_frame(frame.keypoints, frame.timestamp)

    jumps = detect_jumps_batch(engine.history, engine.pixels_per_meter, engine.settings.jump)

    return ReplayResult(
        metrics=metrics,
        frames_processed=len(recording.frames),
        calibrated=calibrated,
        pixels_per_meter=engine.pixels_per_meter,
        jumps=jumps,
    )
