"""Unit tests for 2D vector helpers."""

import math

import numpy as np
import pytest

from maxwellsim.core.vector import angle, length, rotate, vec2


def test_vec2_is_float_array():
    v = vec2(1, 2)
    assert v.dtype == np.float64
    assert v.shape == (2,)


def test_length_and_angle():
    assert length(vec2(3.0, 4.0)) == pytest.approx(5.0)
    assert angle(vec2(0.0, 1.0)) == pytest.approx(math.pi / 2)
    assert angle(vec2(-1.0, 0.0)) == pytest.approx(math.pi)


def test_rotate_quarter_turn():
    assert np.allclose(rotate(vec2(1.0, 0.0), math.pi / 2), [0.0, 1.0])


def test_rotate_keeps_length():
    v = vec2(0.3, -1.2)
    assert length(rotate(v, 2.1)) == pytest.approx(length(v))
