"""Tests for mechanical power estimation."""

from __future__ import annotations

import numpy as np
import pytest

from kinetrack.analysis.kinematics import KinematicSeries, compute_kinematics
from kinetrack.analysis.power import compute_power


class TestComputePower:
    """Tests for compute_power."""

    def test_empty_series(self) -> None:
        """No samples should give zero power."""
        power = compute_power(KinematicSeries(), 70.0)

        assert (power.current, power.average, power.peak) == (0.0, 0.0, 0.0)

    def test_accelerating_athlete(self, frame_builder) -> None:
        """0 -> 1 -> 2 m/s in 100 ms steps at 70 kg should peak at 1400 W."""
        frames = frame_builder(
            [(0.0, 0.0), (10.0, 0.0), (30.0, 0.0)],
            pixels_per_meter=100.0,
            timestamps=[0.0, 100.0, 200.0],
        )
        series = compute_kinematics(frames, 100.0).series

        power = compute_power(series, 70.0)

        assert power.current == pytest.approx(1400.0)
        assert power.average == pytest.approx(700.0)
        assert power.peak == pytest.approx(1400.0)

    def test_deceleration_counts_as_positive_work(self) -> None:
        """Power uses the acceleration magnitude."""
        series = KinematicSeries(
            timestamps=np.array([0.0, 100.0]),
            speeds=np.array([2.0, 1.0]),
            accelerations=np.array([0.0, -10.0]),
        )

        power = compute_power(series, 80.0)

        assert power.current == pytest.approx(800.0)
        assert power.peak == pytest.approx(800.0)

    def test_constant_speed_has_no_power(self, frame_builder) -> None:
        """Steady motion after the first step should report zero current power."""
        frames = frame_builder(
            [(10.0 * i, 0.0) for i in range(5)],
            pixels_per_meter=100.0,
            timestamps=[100.0 * i for i in range(5)],
        )

        power = compute_power(compute_kinematics(frames, 100.0).series, 70.0)

        assert power.current == 0.0
        # Only the 0 -> 1 m/s frame does work: 70 * 10 * 1
        assert power.peak == pytest.approx(700.0)

    def test_scales_with_mass(self, frame_builder) -> None:
        """Doubling mass should double every power figure."""
        frames = frame_builder(
            [(0.0, 0.0), (10.0, 0.0), (30.0, 0.0)],
            pixels_per_meter=100.0,
            timestamps=[0.0, 100.0, 200.0],
        )
        series = compute_kinematics(frames, 100.0).series

        light = compute_power(series, 50.0)
        heavy = compute_power(series, 100.0)

        assert heavy.peak == pytest.approx(2 * light.peak)
        assert heavy.average == pytest.approx(2 * light.average)
