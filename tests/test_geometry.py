from __future__ import annotations

import math

import pytest

from fourbar_sketch.core.geometry import (
    Point,
    angle,
    clamp_angle_rad,
    distance,
    is_finite_point,
    polar_point,
    rot2,
)


def test_distance_is_euclidean():
    assert distance((0, 0), (3, 4)) == 5.0
    assert distance(Point(1.0, 1.0), Point(1.0, 1.0)) == 0.0


def test_angle_uses_screen_y_axis():
    """Up on screen (negative y) is +90 degrees."""
    assert angle((1.0, 0.0), (0.0, 0.0)) == 0.0
    assert math.isclose(angle((0.0, -1.0), (0.0, 0.0)), math.pi / 2)
    assert math.isclose(angle((0.0, 1.0), (0.0, 0.0)), -math.pi / 2)


def test_angle_range_excludes_minus_pi():
    assert angle((-1.0, 0.0), (0.0, 0.0)) == math.pi
    assert angle((-1.0, -0.0), (0.0, 0.0)) == math.pi


@pytest.mark.parametrize("a", [-3.0, -1.2, 0.0, 0.4, 2.5, math.pi])
def test_polar_point_inverts_angle(a):
    c = (350.0, 550.0)
    p = polar_point(c, 158.0, a)
    assert math.isclose(distance(p, c), 158.0)
    assert math.isclose(angle(p, c), a, abs_tol=1e-12)


def test_clamp_angle_rad():
    assert math.isclose(clamp_angle_rad(2.5 * math.pi), 0.5 * math.pi)
    assert clamp_angle_rad(-math.pi) == math.pi
    assert math.isclose(clamp_angle_rad(-0.5 - 2 * math.pi), -0.5)


def test_rot2_quarter_turn():
    x, y = rot2(1.0, 0.0, math.pi / 2)
    assert math.isclose(x, 0.0, abs_tol=1e-15)
    assert math.isclose(y, 1.0)


def test_is_finite_point():
    assert is_finite_point((1.0, 2.0))
    assert not is_finite_point((float("nan"), 0.0))
    assert not is_finite_point((0.0, float("inf")))
