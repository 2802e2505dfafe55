"""kinetrack: real-time performance metrics from 2D body keypoints."""

from kinetrack.analysis.metrics import PerformanceMetrics
from kinetrack.analysis.profiles import SportType, map_sport_profile
from kinetrack.core.exceptions import CalibrationError, KeypointFormatError, KinetrackError
from kinetrack.core.types import Keypoint, KeypointIndex
from kinetrack.pipeline.processor import MotionAnalyticsEngine

__version__ = "0.1.0"

__all__ = [
    "CalibrationError",
    "Keypoint",
    "KeypointFormatError",
    "KeypointIndex",
    "KinetrackError",
    "MotionAnalyticsEngine",
    "PerformanceMetrics",
    "SportType",
    "map_sport_profile",
]
