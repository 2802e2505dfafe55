"""Vertical motion analysis: oscillation and jump detection state machine.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum, auto

import numpy as np

from kinetrack.core.config import JumpDetectionSettings
from kinetrack.core.types import JumpEvent, MovementFrame


class JumpPhase(Enum):
    """States in the jump detection state machine."""

    GROUNDED = auto()
    IN_FLIGHT = auto()


@dataclass(frozen=True, slots=True)
class Grounded:
    """Centroid is not in a detected flight."""

    phase = JumpPhase.GROUNDED


@dataclass(frozen=True, slots=True)
class InFlight:
    """Centroid rose past the takeoff threshold and has not yet landed.

    Attributes:
        takeoff_y: Centroid y at the takeoff trigger (pixels)
        peak_y: Lowest centroid y seen since takeoff (pixels)
        takeoff_timestamp: Timestamp of the takeoff trigger (ms)
    """

    takeoff_y: float
    peak_y: float
    takeoff_timestamp: float

    phase = JumpPhase.IN_FLIGHT


JumpState = Grounded | InFlight

GROUNDED = Grounded()


def advance(
    state: JumpState,
    previous_y: float,
    current_y: float,
    velocity_y: float,
    timestamp: float,
    pixels_per_meter: float,
    settings: JumpDetectionSettings,
) -> tuple[JumpState, JumpEvent | None]:
    """Apply one frame pair to the jump state machine.

    Transitions (image y grows downward, velocities in m/s):
        Grounded -> InFlight: velocity_y below the takeoff threshold
        InFlight -> InFlight: track minimum y as the peak
        InFlight -> Grounded: y increases and velocity_y exceeds the landing
            threshold; emits the completed JumpEvent

    Args:
        state: Current state
        previous_y: Centroid y of the previous frame (pixels)
        current_y: Centroid y of the current frame (pixels)
        velocity_y: Vertical centroid velocity of the current frame (m/s)
        timestamp: Current frame timestamp (ms)
        pixels_per_meter: Active calibration scale
        settings: Detection thresholds

    Returns:
        Tuple of (next_state, completed jump or None)
    """
    if isinstance(state, Grounded):
        if velocity_y < settings.takeoff_velocity_threshold:
            return InFlight(takeoff_y=current_y, peak_y=current_y, takeoff_timestamp=timestamp), None
        return state, None

    peak_y = min(state.peak_y, current_y)

    if current_y > previous_y and velocity_y > settings.landing_velocity_threshold:
        event = JumpEvent(
            takeoff_timestamp=state.takeoff_timestamp,
            landing_timestamp=timestamp,
            takeoff_y=state.takeoff_y,
            peak_y=peak_y,
            height_cm=(state.takeoff_y - peak_y) / pixels_per_meter * 100.0,
        )
        return GROUNDED, event

    return replace(state, peak_y=peak_y), None


class JumpDetector:
    """Incremental jump detector over a stream of MovementFrame.

    Frame pairs where either centroid carries no signal are skipped so a
    dropped detection cannot masquerade as a rise to y=0.
    """

    def __init__(
        self,
        pixels_per_meter: float,
        settings: JumpDetectionSettings | None = None,
    ) -> None:
        """Initialize detector.

        Args:
            pixels_per_meter: Calibration scale for height conversion
            settings: Jump detection parameters (uses defaults if None)
        """
        self.settings = settings or JumpDetectionSettings()
        self.pixels_per_meter = pixels_per_meter
        self._state: JumpState = GROUNDED
        self._previous: MovementFrame | None = None

    @property
    def state(self) -> JumpState:
        """Current state machine state."""
        return self._state

    @property
    def current_phase(self) -> JumpPhase:
        """Get current jump phase."""
        return self._state.phase

    @property
    def is_jumping(self) -> bool:
        """Check if currently in flight."""
        return isinstance(self._state, InFlight)

    def reset(self) -> None:
        """Reset detector to initial state."""
        self._state = GROUNDED
        self._previous = None

    def update(self, frame: MovementFrame) -> JumpEvent | None:
        """Process a new frame.

        Args:
            frame: Next frame in chronological order

        Returns:
            JumpEvent if a jump was completed, None otherwise
        """
        previous, self._previous = self._previous, frame

        if previous is None:
            return None
        if not (previous.center_of_mass.valid and frame.center_of_mass.valid):
            return None

        self._state, event = advance(
            self._state,
            previous_y=previous.center_of_mass.y,
            current_y=frame.center_of_mass.y,
            velocity_y=frame.velocity.y,
            timestamp=frame.timestamp,
            pixels_per_meter=self.pixels_per_meter,
            settings=self.settings,
        )
        return event


def detect_jumps_batch(
    frames: Sequence[MovementFrame],
    pixels_per_meter: float,
    settings: JumpDetectionSettings | None = None,
) -> list[JumpEvent]:
    """Run a fresh state machine over a frame window and return all jumps.

    Args:
        frames: Chronological frames
        pixels_per_meter: Calibration scale
        settings: Detection settings

    Returns:
        Completed jump events in order
    """
    detector = JumpDetector(pixels_per_meter, settings)
    events: list[JumpEvent] = []

    for frame in frames:
        event = detector.update(frame)
        if event is not None:
            events.append(event)

    return events


@dataclass(frozen=True)
class VerticalMetrics:
    """Vertical motion over the history window.

    Attributes:
        vertical_oscillation: Std of centroid height (cm)
        jump_height: Highest jump completed in the window (cm)
        jumps: Every jump completed in the window
    """

    vertical_oscillation: float = 0.0
    jump_height: float = 0.0
    jumps: tuple[JumpEvent, ...] = field(default_factory=tuple)


def compute_vertical(
    frames: Sequence[MovementFrame],
    pixels_per_meter: float,
    settings: JumpDetectionSettings | None = None,
) -> VerticalMetrics:
    """Compute vertical oscillation and the best jump in the window.

    Args:
        frames: Chronological history window
        pixels_per_meter: Active calibration scale
        settings: Detection settings (uses defaults if None)

    Returns:
        VerticalMetrics; all zero below ``settings.min_frames`` frames
    """
    settings = settings or JumpDetectionSettings()

    if len(frames) < settings.min_frames:
        return VerticalMetrics()

    heights_m = np.array(
        [f.center_of_mass.y / pixels_per_meter for f in frames if f.center_of_mass.valid],
        dtype=np.float64,
    )
    oscillation = float(np.std(heights_m)) * 100.0 if heights_m.size else 0.0

    jumps = detect_jumps_batch(frames, pixels_per_meter, settings)
    jump_height = max((j.height_cm for j in jumps), default=0.0)

    return VerticalMetrics(
        vertical_oscillation=oscillation,
        jump_height=max(jump_height, 0.0),
        jumps=tuple(jumps),
    )
