"""Core infrastructure: config, types, exceptions, and logging."""

from kinetrack.core.config import Settings, get_settings
from kinetrack.core.exceptions import (
    CalibrationError,
    KeypointFormatError,
    KinetrackError,
)
from kinetrack.core.logging import get_logger, setup_logging
from kinetrack.core.types import (
    CalibrationMethod,
    CalibrationProfile,
    CenterOfMass,
    JumpEvent,
    Keypoint,
    KeypointIndex,
    MovementFrame,
    Vector2,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "Keypoint",
    "KeypointIndex",
    "Vector2",
    "CenterOfMass",
    "MovementFrame",
    "CalibrationMethod",
    "CalibrationProfile",
    "JumpEvent",
    # Exceptions
    "KinetrackError",
    "CalibrationError",
    "KeypointFormatError",
    # Logging
    "setup_logging",
    "get_logger",
]
