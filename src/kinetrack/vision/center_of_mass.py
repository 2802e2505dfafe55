"""Segment-weighted center of mass estimation.

Pure logic: no state, no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

from kinetrack.core.types import CenterOfMass, Keypoint, KeypointIndex

# Approximate body segment mass fractions, sum to 1.0
SEGMENT_WEIGHTS: dict[KeypointIndex, float] = {
    KeypointIndex.NOSE: 0.08,
    KeypointIndex.LEFT_SHOULDER: 0.12,
    KeypointIndex.RIGHT_SHOULDER: 0.12,
    KeypointIndex.LEFT_HIP: 0.15,
    KeypointIndex.RIGHT_HIP: 0.15,
    KeypointIndex.LEFT_KNEE: 0.10,
    KeypointIndex.RIGHT_KNEE: 0.10,
    KeypointIndex.LEFT_ANKLE: 0.09,
    KeypointIndex.RIGHT_ANKLE: 0.09,
}

DEFAULT_MIN_CONFIDENCE = 0.3


def compute_center_of_mass(
    keypoints: Sequence[Keypoint],
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> CenterOfMass:
    """Compute the confidence-gated, weight-renormalized body centroid.

    Only weighted points with confidence strictly above ``min_confidence``
    contribute; weights are renormalized over the contributing subset.

    Args:
        keypoints: COCO-ordered keypoints (17 entries)
        min_confidence: Exclusive confidence threshold

    Returns:
        Centroid in pixel space, flagged invalid if nothing contributed
    """
    total_weight = 0.0
    weighted_x = 0.0
    weighted_y = 0.0

    for index, weight in SEGMENT_WEIGHTS.items():
        if index.value >= len(keypoints):
            continue
        kp = keypoints[index.value]
        if kp.confidence > min_confidence:
            weighted_x += kp.x * weight
            weighted_y += kp.y * weight
            total_weight += weight

    if total_weight <= 0:
        return CenterOfMass.invalid()

    return CenterOfMass(x=weighted_x / total_weight, y=weighted_y / total_weight)
