"""Tests for jump detection state machine."""

from __future__ import annotations

import pytest

from kinetrack.analysis.detector import (
    GROUNDED,
    Grounded,
    InFlight,
    JumpDetector,
    JumpPhase,
    advance,
    compute_vertical,
    detect_jumps_batch,
)
from kinetrack.core.config import JumpDetectionSettings

PPM = 500.0 / 1.75

# Crouch, rise 150 px to the apex, then land back
JUMP_YS = [530.0] * 6 + [500.0, 450.0, 400.0, 350.0, 380.0, 420.0, 470.0, 530.0, 530.0, 530.0]

# Shallow hop: takeoff at 510, apex 480
HOP_YS = [510.0, 480.0, 500.0, 530.0, 530.0]


def _positions(ys: list[float | None]) -> list[tuple[float, float] | None]:
    return [None if y is None else (320.0, y) for y in ys]


class TestAdvance:
    """Tests for the pure transition function."""

    def test_takeoff_requires_strictly_lower_velocity(
        self, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """Velocity exactly at the takeoff threshold should stay grounded."""
        state, event = advance(GROUNDED, 530.0, 520.0, -1.0, 0.0, PPM, jump_detection_settings)

        assert state is GROUNDED
        assert event is None

    def test_takeoff_records_current_y(self, jump_detection_settings: JumpDetectionSettings) -> None:
        """Takeoff should start flight at the current centroid height."""
        state, event = advance(GROUNDED, 530.0, 500.0, -3.0, 200.0, PPM, jump_detection_settings)

        assert state == InFlight(takeoff_y=500.0, peak_y=500.0, takeoff_timestamp=200.0)
        assert state.phase == JumpPhase.IN_FLIGHT
        assert event is None

    def test_peak_tracks_minimum_y(self, jump_detection_settings: JumpDetectionSettings) -> None:
        """In flight, the lowest y seen should be kept as the apex."""
        state = InFlight(takeoff_y=500.0, peak_y=450.0, takeoff_timestamp=0.0)

        state, _ = advance(state, 450.0, 400.0, -2.0, 33.0, PPM, jump_detection_settings)
        assert state.peak_y == 400.0

        state, _ = advance(state, 400.0, 410.0, 0.3, 66.0, PPM, jump_detection_settings)
        assert isinstance(state, InFlight)
        assert state.peak_y == 400.0

    def test_landing_requires_strictly_higher_velocity(
        self, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """Velocity exactly at the landing threshold should stay in flight."""
        state = InFlight(takeoff_y=500.0, peak_y=350.0, takeoff_timestamp=0.0)

        state, event = advance(state, 350.0, 380.0, 0.5, 100.0, PPM, jump_detection_settings)

        assert isinstance(state, InFlight)
        assert event is None

    def test_landing_requires_descent(self, jump_detection_settings: JumpDetectionSettings) -> None:
        """A downward velocity reading without y increasing should not land."""
        state = InFlight(takeoff_y=500.0, peak_y=350.0, takeoff_timestamp=0.0)

        state, event = advance(state, 380.0, 380.0, 2.0, 100.0, PPM, jump_detection_settings)

        assert isinstance(state, InFlight)
        assert event is None

    def test_landing_emits_event(self, jump_detection_settings: JumpDetectionSettings) -> None:
        """Landing should return to grounded and report the height."""
        state = InFlight(takeoff_y=500.0, peak_y=350.0, takeoff_timestamp=200.0)

        state, event = advance(state, 350.0, 380.0, 3.0, 333.0, PPM, jump_detection_settings)

        assert isinstance(state, Grounded)
        assert event is not None
        assert event.height_cm == pytest.approx(52.5)
        assert event.takeoff_timestamp == 200.0
        assert event.landing_timestamp == 333.0
        assert event.flight_duration_ms == pytest.approx(133.0)


class TestJumpDetector:
    """Tests for the JumpDetector class."""

    def test_initial_state_is_grounded(self, jump_detection_settings: JumpDetectionSettings) -> None:
        """Detector should start grounded."""
        detector = JumpDetector(PPM, jump_detection_settings)

        assert detector.current_phase == JumpPhase.GROUNDED
        assert not detector.is_jumping

    def test_no_jump_on_standing(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """Standing still should not trigger jump detection."""
        detector = JumpDetector(PPM, jump_detection_settings)

        for frame in frame_builder(_positions([530.0] * 20), pixels_per_meter=PPM):
            assert detector.update(frame) is None

        assert not detector.is_jumping

    def test_full_jump(self, frame_builder, jump_detection_settings: JumpDetectionSettings) -> None:
        """A 150 px rise at 285.7 px/m should measure 52.5 cm."""
        detector = JumpDetector(PPM, jump_detection_settings)
        frames = frame_builder(_positions(JUMP_YS), pixels_per_meter=PPM)

        events = []
        for i, frame in enumerate(frames):
            event = detector.update(frame)
            if i == 7:
                assert detector.is_jumping
            if event is not None:
                events.append(event)

        assert len(events) == 1
        assert events[0].takeoff_y == 500.0
        assert events[0].peak_y == 350.0
        assert events[0].displacement_px == pytest.approx(150.0)
        assert events[0].height_cm == pytest.approx(52.5)
        assert detector.current_phase == JumpPhase.GROUNDED

    def test_invalid_frames_skipped(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """A dropped detection must not read as a rise to y=0."""
        frames = frame_builder(_positions([530.0] * 5 + [None] + [530.0] * 5), pixels_per_meter=PPM)

        assert detect_jumps_batch(frames, PPM, jump_detection_settings) == []

    def test_reset(self, frame_builder, jump_detection_settings: JumpDetectionSettings) -> None:
        """Reset should abandon an in-progress jump."""
        detector = JumpDetector(PPM, jump_detection_settings)
        for frame in frame_builder(_positions(JUMP_YS[:8]), pixels_per_meter=PPM):
            detector.update(frame)
        assert detector.is_jumping

        detector.reset()

        assert detector.state is GROUNDED
        assert not detector.is_jumping

    def test_incremental_matches_batch(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """Streaming frames one at a time should find the same jumps as batch mode."""
        frames = frame_builder(_positions(JUMP_YS + HOP_YS), pixels_per_meter=PPM)
        detector = JumpDetector(PPM, jump_detection_settings)

        incremental = [e for e in (detector.update(f) for f in frames) if e is not None]

        assert incremental == detect_jumps_batch(frames, PPM, jump_detection_settings)
        assert len(incremental) == 2


class TestComputeVertical:
    """Tests for vertical oscillation and best jump."""

    def test_below_min_frames_is_zero(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """Fewer than 10 frames should give zero oscillation and jump height."""
        frames = frame_builder(_positions([500.0, 510.0] * 4 + [500.0]), pixels_per_meter=100.0)

        vertical = compute_vertical(frames, 100.0, jump_detection_settings)

        assert vertical.vertical_oscillation == 0.0
        assert vertical.jump_height == 0.0
        assert vertical.jumps == ()

    def test_oscillation_is_std_in_cm(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """Alternating 10 px at 100 px/m has a 5 cm standard deviation."""
        frames = frame_builder(_positions([500.0, 510.0] * 5), pixels_per_meter=100.0)

        vertical = compute_vertical(frames, 100.0, jump_detection_settings)

        assert vertical.vertical_oscillation == pytest.approx(5.0)

    def test_oscillation_ignores_invalid_frames(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """Frames without a centroid should not pull the spread toward y=0."""
        frames = frame_builder(_positions([500.0] * 6 + [None] * 2 + [500.0] * 4), pixels_per_meter=100.0)

        vertical = compute_vertical(frames, 100.0, jump_detection_settings)

        assert vertical.vertical_oscillation == pytest.approx(0.0)

    def test_best_jump_is_kept(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """With two jumps in the window the higher one should be reported."""
        frames = frame_builder(_positions(JUMP_YS + HOP_YS), pixels_per_meter=PPM)

        vertical = compute_vertical(frames, PPM, jump_detection_settings)

        assert len(vertical.jumps) == 2
        assert vertical.jumps[1].height_cm == pytest.approx(10.5)
        assert vertical.jump_height == pytest.approx(52.5)

    def test_no_jump_reports_zero(
        self, frame_builder, jump_detection_settings: JumpDetectionSettings
    ) -> None:
        """A still athlete should report zero jump height."""
        frames = frame_builder(_positions([530.0] * 15), pixels_per_meter=PPM)

        vertical = compute_vertical(frames, PPM, jump_detection_settings)

        assert vertical.jump_height == 0.0
        assert vertical.vertical_oscillation == pytest.approx(0.0)
