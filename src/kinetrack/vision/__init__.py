"""Keypoint-space operations: boundary validation, center of mass, and calibration."""

from kinetrack.vision.calibration import Calibrator
from kinetrack.vision.center_of_mass import SEGMENT_WEIGHTS, compute_center_of_mass
from kinetrack.vision.keypoints import normalize_keypoints, to_keypoint

__all__ = [
    "Calibrator",
    "SEGMENT_WEIGHTS",
    "compute_center_of_mass",
    "normalize_keypoints",
    "to_keypoint",
]
