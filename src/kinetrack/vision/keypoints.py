"""Validation of upstream pose-estimator output at the engine boundary."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from kinetrack.core.exceptions import KeypointFormatError
from kinetrack.core.logging import get_logger
from kinetrack.core.types import NUM_KEYPOINTS, Keypoint, KeypointIndex

logger = get_logger(__name__)

KeypointLike = Keypoint | Mapping[str, Any]


def _clamp_confidence(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        confidence = float(value)
    except (TypeError, ValueError) as e:
        raise KeypointFormatError(f"Keypoint confidence is not numeric: {value!r}") from e
    if math.isnan(confidence):
        return 0.0
    return min(max(confidence, 0.0), 1.0)


def _build_keypoint(x: Any, y: Any, confidence: Any, name: str | None) -> Keypoint:
    try:
        x, y = float(x), float(y)
    except (TypeError, ValueError) as e:
        raise KeypointFormatError(f"Keypoint coordinates are not numeric: {e}") from e

    score = _clamp_confidence(confidence)
    if not (math.isfinite(x) and math.isfinite(y)):
        # Undetected point; NaN or inf must not reach the centroid
        logger.debug("Non-finite coordinates for keypoint %s, treating as undetected", name)
        return Keypoint(x=0.0, y=0.0, confidence=0.0, name=name)

    return Keypoint(x=x, y=y, confidence=score, name=name)


def to_keypoint(record: KeypointLike) -> Keypoint:
    """Convert a single upstream record into a Keypoint.

    Mapping records may carry confidence under ``score`` (TensorFlow.js
    pose-detection style) or ``confidence``. Missing or NaN confidence counts
    as 0. A point with NaN or infinite coordinates is kept as undetected.

    Raises:
        KeypointFormatError: If x/y are missing or any field is not numeric
    """
    if isinstance(record, Keypoint):
        return _build_keypoint(record.x, record.y, record.confidence, record.name)

    if not isinstance(record, Mapping):
        raise KeypointFormatError(f"Unsupported keypoint record: {type(record).__name__}")

    try:
        x, y = record["x"], record["y"]
    except KeyError as e:
        raise KeypointFormatError(f"Keypoint record missing coordinates: {e}") from e

    score = record.get("score")
    if score is None:
        score = record.get("confidence")

    return _build_keypoint(x, y, score, record.get("name"))
