"""Pure analysis logic: kinematics, gait, vertical motion, power, and sport views.

This module contains NO I/O operations. All functions operate on the
frame history and return immutable results.
"""

from kinetrack.analysis.detector import JumpDetector, compute_vertical, detect_jumps_batch
from kinetrack.analysis.gait import compute_gait
from kinetrack.analysis.history import FrameHistoryBuffer
from kinetrack.analysis.kinematics import compute_kinematics, compute_velocity
from kinetrack.analysis.metrics import PerformanceMetrics, SpeedZone
from kinetrack.analysis.power import compute_power
from kinetrack.analysis.profiles import SportType, map_sport_profile

__all__ = [
    "FrameHistoryBuffer",
    "JumpDetector",
    "PerformanceMetrics",
    "SpeedZone",
    "SportType",
    "compute_gait",
    "compute_kinematics",
    "compute_power",
    "compute_velocity",
    "compute_vertical",
    "detect_jumps_batch",
    "map_sport_profile",
]
