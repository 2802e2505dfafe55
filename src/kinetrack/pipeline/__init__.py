"""Frame ingestion and metrics orchestration."""

from kinetrack.pipeline.cache import CachedMetrics, MetricsCache
from kinetrack.pipeline.processor import MotionAnalyticsEngine
from kinetrack.pipeline.replay import load_recording, replay_recording

__all__ = [
    "CachedMetrics",
    "MetricsCache",
    "MotionAnalyticsEngine",
    "load_recording",
    "replay_recording",
]
