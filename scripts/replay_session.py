#!/usr/bin/env python3
"""Replay a recorded keypoint session and print the resulting metrics.

Useful for checking analyzer behaviour against captured pose-estimator
output without a camera attached.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from kinetrack.analysis.profiles import SportType, map_sport_profile
from kinetrack.core.config import get_settings
from kinetrack.core.exceptions import KeypointFormatError
from kinetrack.core.logging import get_logger, setup_logging
from kinetrack.pipeline.replay import ReplayResult, load_recording, replay_recording

logger = get_logger(__name__)


def print_results(result: ReplayResult, sport: str | None) -> None:
    """Print replay summary to console.

    Args:
        result: Replay outcome
        sport: Optional sport tag for a sport-specific view
    """
    metrics = result.metrics

    print("\n" + "=" * 60)
    print("SESSION REPLAY")
    print("=" * 60)
    print(f"\nFrames processed: {result.frames_processed}")
    print(f"Frames in window: {metrics.frame_count}")
    print(f"Calibrated from pose: {'yes' if result.calibrated else 'no'}")
    print(f"Scale: {result.pixels_per_meter:.1f} px/m")

    print("\n" + "-" * 60)
    print(f"Speed:        {metrics.speed.instantaneous:6.2f} m/s "
          f"(avg {metrics.speed.average:.2f}, max {metrics.speed.max:.2f}, "
          f"{metrics.speed.zone.value})")
    print(f"Distance:     {metrics.distance.total:6.2f} m "
          f"(h {metrics.distance.horizontal:.2f}, v {metrics.distance.vertical:.2f})")
    print(f"Acceleration: {metrics.acceleration.current:6.2f} m/s^2 "
          f"(max {metrics.acceleration.max:.2f})")
    print(f"Power:        {metrics.power.current:6.1f} W "
          f"(avg {metrics.power.average:.1f}, peak {metrics.power.peak:.1f})")
    print(f"Cadence:      {metrics.cadence:6.1f} steps/min")
    print(f"Stride:       {metrics.stride_length:6.2f} m")
    print(f"Oscillation:  {metrics.vertical_oscillation:6.1f} cm")
    print(f"Jump height:  {metrics.jump_height:6.1f} cm")

    if result.jumps:
        print("\n" + "-" * 60)
        print(f"{'Jump':<6} {'Takeoff (ms)':<14} {'Landing (ms)':<14} {'Height (cm)':<12}")
        for i, jump in enumerate(result.jumps):
            print(
                f"{i + 1:<6} {jump.takeoff_timestamp:<14.0f} "
                f"{jump.landing_timestamp:<14.0f} {jump.height_cm:<12.1f}"
            )

    if sport:
        view = map_sport_profile(metrics, sport)
        print("\n" + "-" * 60)
        print(f"{sport} view: {view}")

    print("=" * 60 + "\n")


def main() -> int:
    """Run replay script."""
    parser = argparse.ArgumentParser(description="Replay a recorded keypoint session")
    parser.add_argument(
        "recording",
        type=Path,
        help="Path to recorded session JSON",
    )
    parser.add_argument(
        "--pixels-per-meter",
        type=float,
        help="Preset calibration scale (skips the configured default)",
    )
    parser.add_argument(
        "--no-calibrate",
        action="store_true",
        help="Do not calibrate from the first confident standing pose",
    )
    parser.add_argument(
        "--sport",
        choices=[s.value for s in SportType],
        help="Also print a sport-specific view",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write final metrics as JSON",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.file)

    try:
        recording = load_recording(args.recording)
    except (OSError, KeypointFormatError) as e:
        logger.error("Could not load recording: %s", e)
        return 1

    if not recording.frames:
        logger.warning("Recording contains no frames")
        return 1

    try:
        result = replay_recording(
            recording,
            settings=settings,
            pixels_per_meter=args.pixels_per_meter,
            calibrate=not args.no_calibrate,
        )
    except KeypointFormatError as e:
        logger.error("Replay aborted: %s", e)
        return 1

    print_results(result, args.sport)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w") as f:
            json.dump(result.metrics.to_dict(), f, indent=2)
        logger.info("Metrics saved to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
