"""Unit tests for Gate and the filter variants."""

import math

import numpy as np
import pytest

from maxwellsim.core.gate import (
    DiodeFilter,
    EmptyFilter,
    Gate,
    PhaseConservingFilter,
    TemperatureFilter,
    TennisFilter,
    make_filter,
)
from maxwellsim.core.geometry import BoxStructure
from maxwellsim.core.particle import Particle


def refracted(filter, vx, vy):
    """Velocity after one refraction by a gate using ``filter``."""
    p = Particle(position=[0.5, 0.5], velocity=[vx, vy])
    Gate.from_height(filter, 0.2).refract(p)
    return tuple(p.velocity)


class TestGateGeometry:
    """Tests for the aperture band and in_bounds."""

    def test_from_height(self):
        gate = Gate.from_height(DiodeFilter(), 0.2)
        assert gate.top == pytest.approx(0.6)
        assert gate.bottom == pytest.approx(0.4)
        assert not gate.is_closed

    def test_zero_height_is_closed(self):
        gate = Gate.from_height(DiodeFilter(), 0.0)
        assert gate.top == gate.bottom
        assert gate.is_closed

    def test_closed_gate_never_in_bounds(self, closed_geometry):
        gate = closed_geometry.gate
        for x in np.linspace(0.0, 1.0, 21):
            for y in np.linspace(0.0, 1.0, 21):
                assert not gate.in_bounds(closed_geometry, np.array([x, y]), 0.0)
                assert not gate.in_bounds(closed_geometry, np.array([x, y]), 0.05)

    def test_in_bounds_center(self, open_geometry):
        gate = open_geometry.gate
        assert gate.in_bounds(open_geometry, np.array([0.5, 0.5]))

    def test_outside_aperture_band(self, open_geometry):
        gate = open_geometry.gate
        assert not gate.in_bounds(open_geometry, np.array([0.5, 0.39]))
        assert not gate.in_bounds(open_geometry, np.array([0.5, 0.61]))

    def test_outside_wall_column(self, open_geometry):
        gate = open_geometry.gate
        assert not gate.in_bounds(open_geometry, np.array([0.47, 0.5]))
        assert not gate.in_bounds(open_geometry, np.array([0.53, 0.5]))

    def test_radius_inflates_column(self, open_geometry):
        gate = open_geometry.gate
        # Column 0.48..0.52 grows to 0.46..0.54
        assert gate.in_bounds(open_geometry, np.array([0.47, 0.5]), 0.02)
        assert gate.in_bounds(open_geometry, np.array([0.53, 0.5]), 0.02)

    def test_radius_shrinks_aperture(self, open_geometry):
        gate = open_geometry.gate
        # Aperture 0.4..0.6 shrinks to 0.42..0.58
        assert gate.in_bounds(open_geometry, np.array([0.5, 0.41]), 0.0)
        assert not gate.in_bounds(open_geometry, np.array([0.5, 0.41]), 0.02)

    def test_boundaries_are_strict(self, open_geometry):
        gate = open_geometry.gate
        assert not gate.in_bounds(open_geometry, np.array([open_geometry.wall_left, 0.5]))
        assert not gate.in_bounds(open_geometry, np.array([0.5, gate.top]))

    def test_coords(self):
        geometry = BoxStructure.with_wall(Gate.from_height(DiodeFilter(), 0.5), wall_width=0.1)
        (x0, y0), (x1, y1) = geometry.gate.coords(geometry)
        assert (x0, x1) == pytest.approx((0.45, 0.55))
        assert (y0, y1) == pytest.approx((0.25, 0.75))


class TestMakeFilter:
    """Tests for the filter factory."""

    def test_names(self):
        assert make_filter("empty") == EmptyFilter()
        assert make_filter("diode") == DiodeFilter()
        assert make_filter("temperature", 2.0) == TemperatureFilter(t=2.0)
        assert make_filter("tennis") == TennisFilter()
        assert make_filter("phase_conserving", 0.3) == PhaseConservingFilter(c=0.3)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown gate type"):
            make_filter("demon")


class TestEmptyFilter:

    def test_no_change(self):
        assert refracted(EmptyFilter(), -0.7, 0.3) == pytest.approx((-0.7, 0.3))
        assert refracted(EmptyFilter(), 0.7, -0.3) == pytest.approx((0.7, -0.3))


class TestDiodeFilter:

    def test_reflects_leftward(self):
        assert refracted(DiodeFilter(), -1.0, 0.5) == pytest.approx((1.0, 0.5))

    def test_passes_rightward(self):
        assert refracted(DiodeFilter(), 1.0, 0.5) == pytest.approx((1.0, 0.5))


class TestTemperatureFilter:

    def test_slow_leftward_reflected(self):
        assert refracted(TemperatureFilter(t=2.0), -0.5, 0.1) == pytest.approx((0.5, 0.1))

    def test_fast_leftward_passes(self):
        assert refracted(TemperatureFilter(t=2.0), -2.0, 0.1) == pytest.approx((-2.0, 0.1))

    def test_slow_rightward_passes(self):
        assert refracted(TemperatureFilter(t=2.0), 1.0, 0.1) == pytest.approx((1.0, 0.1))

    def test_fast_rightward_reflected(self):
        # 1.5² = 2.25 > 2
        assert refracted(TemperatureFilter(t=2.0), 1.5, 0.1) == pytest.approx((-1.5, 0.1))


class TestTennisFilter:
    """Each branch of the ordered rule."""

    def test_swap_same_sign_components(self):
        assert refracted(TennisFilter(), 1.0, 2.0) == pytest.approx((2.0, 1.0))
        assert refracted(TennisFilter(), -2.0, -1.0) == pytest.approx((-1.0, -2.0))

    def test_cross_swap_leftward_dominant(self):
        # vx < 0, vy > 0, |vx| > |vy|
        assert refracted(TennisFilter(), -2.0, 1.0) == pytest.approx((-1.0, 2.0))

    def test_cross_swap_downward_dominant(self):
        # vx > 0, vy < 0, |vx| < |vy|
        assert refracted(TennisFilter(), 1.0, -2.0) == pytest.approx((2.0, -1.0))

    def test_fallback_negates_vx(self):
        assert refracted(TennisFilter(), 2.0, 1.0) == pytest.approx((-2.0, 1.0))
        assert refracted(TennisFilter(), -1.0, 2.0) == pytest.approx((1.0, 2.0))

    def test_first_branch_takes_priority(self):
        # vx = 0 zeroes the product, so the swap branch wins over the fallback
        assert refracted(TennisFilter(), 0.0, 1.0) == pytest.approx((1.0, 0.0))


class TestPhaseConservingFilter:

    def test_zero_shift_is_identity(self):
        for vx, vy in [(1.0, 0.5), (0.3, -0.9), (2.0, 0.0)]:
            assert refracted(PhaseConservingFilter(c=0.0), vx, vy) == pytest.approx((vx, vy))

    def test_forward_shift(self):
        vx, vy = refracted(PhaseConservingFilter(c=0.5), 1.0, 0.0)
        assert (vx, vy) == pytest.approx((math.cos(math.pi / 6), 0.5))

    def test_backward_shift(self):
        vx, vy = refracted(PhaseConservingFilter(c=0.5), -1.0, 0.0)
        assert (vx, vy) == pytest.approx((-math.cos(math.pi / 6), 0.5))

    def test_speed_conserved(self):
        vx, vy = refracted(PhaseConservingFilter(c=-0.3), 0.6, 0.8)
        assert math.hypot(vx, vy) == pytest.approx(1.0)

    def test_unrealizable_shift_reflects(self):
        # sin(angle) ≈ 0.995, +0.5 > 1
        assert refracted(PhaseConservingFilter(c=0.5), 0.1, 1.0) == pytest.approx((-0.1, 1.0))


class TestRefractTouchesVelocityOnly:

    @pytest.mark.parametrize(
        "filter",
        [EmptyFilter(), DiodeFilter(), TemperatureFilter(t=0.5), TennisFilter(), PhaseConservingFilter(c=0.2)],
    )
    def test_position_unchanged(self, filter):
        p = Particle(position=[0.5, 0.5], velocity=[-0.4, 0.7])
        Gate.from_height(filter, 0.2).refract(p)
        assert tuple(p.position) == (0.5, 0.5)


class TestUnsupportedFilter:

    def test_unknown_variant_raises(self):
        p = Particle(position=[0.5, 0.5], velocity=[-0.4, 0.7])
        with pytest.raises(TypeError, match="Unsupported gate filter"):
            Gate(filter="demon", top=0.6, bottom=0.4).refract(p)
