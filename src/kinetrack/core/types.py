"""Core data types and structures."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto

NUM_KEYPOINTS = 17


@dataclass(frozen=True, slots=True)
class Keypoint:
    """A single body keypoint in pixel coordinates with detection confidence.

    Coordinates follow image conventions: y grows downward.
    """

    x: float
    y: float
    confidence: float
    name: str | None = None

    def is_confident(self, threshold: float) -> bool:
        """Check if confidence strictly exceeds the threshold."""
        return self.confidence > threshold


class KeypointIndex(Enum):
    """COCO-17 keypoint indices."""

    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16

    @property
    def keypoint_name(self) -> str:
        """snake_case name as emitted by common pose estimators."""
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Vector2:
    """2D vector (pixels or meters per second depending on context)."""

    x: float = 0.0
    y: float = 0.0

    @property
    def magnitude(self) -> float:
        """Euclidean norm."""
        return math.hypot(self.x, self.y)


@dataclass(frozen=True, slots=True)
class CenterOfMass:
    """Confidence-weighted body centroid in pixel space.

    Attributes:
        x: Centroid x in pixels
        y: Centroid y in pixels
        valid: False when no weighted keypoint was confident enough; the
            coordinates are then (0, 0) and carry no position information
    """

    x: float
    y: float
    valid: bool = True

    @classmethod
    def invalid(cls) -> CenterOfMass:
        """Centroid for a frame with no usable keypoints."""
        return cls(x=0.0, y=0.0, valid=False)


@dataclass(frozen=True, slots=True)
class MovementFrame:
    """One ingested detection with its derived centroid and velocity.

    Attributes:
        timestamp: Monotonic timestamp in milliseconds
        keypoints: Exactly 17 keypoints in COCO order
        center_of_mass: Weighted centroid (pixels)
        velocity: Centroid velocity relative to the previous frame (m/s)
    """

    timestamp: float
    keypoints: tuple[Keypoint, ...]
    center_of_mass: CenterOfMass
    velocity: Vector2 = Vector2()

    @property
    def speed(self) -> float:
        """Scalar centroid speed in m/s."""
        return self.velocity.magnitude

    def keypoint(self, index: KeypointIndex) -> Keypoint:
        """Get a keypoint by its COCO index."""
        return self.keypoints[index.value]


class CalibrationMethod(Enum):
    """How the pixels-per-meter scale was established."""

    DEFAULT = auto()
    KNOWN_HEIGHT = auto()
    MANUAL = auto()


@dataclass(frozen=True, slots=True)
class CalibrationProfile:
    """Scale factor for converting pixel distances to physical units.

    Attributes:
        pixels_per_meter: Pixels per meter at the athlete's depth
        method: How the calibration was performed
        timestamp: Wall-clock time the profile was created (seconds)
        reference_height_m: Athlete height used for KNOWN_HEIGHT calibration
    """

    pixels_per_meter: float
    method: CalibrationMethod
    timestamp: float
    reference_height_m: float | None = None


@dataclass(frozen=True, slots=True)
class JumpEvent:
    """A detected takeoff-to-landing flight of the centroid.

    Attributes:
        takeoff_timestamp: Timestamp (ms) of the frame that triggered takeoff
        landing_timestamp: Timestamp (ms) of the frame that triggered landing
        takeoff_y: Centroid y at takeoff (pixels)
        peak_y: Minimum centroid y while in flight (pixels)
        height_cm: Jump height in centimeters
    """

    takeoff_timestamp: float
    landing_timestamp: float
    takeoff_y: float
    peak_y: float
    height_cm: float

    @property
    def flight_duration_ms(self) -> float:
        """Time between takeoff and landing triggers."""
        return self.landing_timestamp - self.takeoff_timestamp

    @property
    def displacement_px(self) -> float:
        """Centroid rise in pixels (lower y = higher)."""
        return self.takeoff_y - self.peak_y
