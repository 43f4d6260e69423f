from __future__ import annotations

import math
import random

import pytest

from fourbar_sketch.core.geometry import Point, distance, polar_point
from fourbar_sketch.core.linkage import LinkageState
from fourbar_sketch.core.solver import (
    Branch,
    UnreachableConfiguration,
    circle_intersections,
    solve_dependent,
)


@pytest.mark.parametrize("da", [0.0, 0.3, 1.0, 2.0, 3.1, 4.5, 6.0])
def test_solution_keeps_coupler_and_rocker_lengths(example_state, da):
    st = example_state
    driving = polar_point(st.crank_ground, st.crank_length, st.crank_angle + da)
    rocker = solve_dependent(driving, st)
    assert math.isclose(distance(rocker, driving), st.coupler_length, rel_tol=1e-9)
    assert math.isclose(distance(rocker, st.rocker_ground), st.rocker_length, rel_tol=1e-9)


def test_current_pose_is_on_plus_branch(example_state):
    rocker = solve_dependent(example_state.crank_joint, example_state)
    assert math.isclose(rocker.x, 550.0, abs_tol=1e-9)
    assert math.isclose(rocker.y, 350.0, abs_tol=1e-9)


def test_solver_is_deterministic(example_state):
    driving = polar_point(example_state.crank_ground, example_state.crank_length, 0.75)
    assert solve_dependent(driving, example_state) == solve_dependent(driving, example_state)


def test_solver_does_not_modify_state(example_state):
    before = example_state.snapshot()
    solve_dependent(polar_point(example_state.crank_ground, example_state.crank_length, 1.0), example_state)
    assert example_state.snapshot() == before


def test_unreachable_is_reported(unreachable_state):
    st = unreachable_state
    driving = polar_point(st.crank_ground, st.crank_length, math.pi)
    with pytest.raises(UnreachableConfiguration) as info:
        solve_dependent(driving, st)
    assert info.value.discriminant < 0.0
    assert math.isclose(info.value.driving_point.x, -100.0)
    assert "Unreachable" in str(info.value)


def test_unreachable_for_coincident_centers(example_state):
    with pytest.raises(UnreachableConfiguration):
        solve_dependent(example_state.rocker_ground, example_state)


def test_tangent_circles_are_reachable():
    plus, minus = circle_intersections((0.0, 0.0), 1.0, (2.0, 0.0), 1.0)
    assert plus == minus == Point(1.0, 0.0)


def test_both_branches():
    plus, minus = circle_intersections((0.0, 0.0), 5.0, (8.0, 0.0), 5.0)
    assert plus == Point(4.0, -3.0)
    assert minus == Point(4.0, 3.0)


def test_disjoint_circles_raise():
    with pytest.raises(UnreachableConfiguration):
        circle_intersections((0.0, 0.0), 1.0, (10.0, 0.0), 1.0)
    # one circle inside the other
    with pytest.raises(UnreachableConfiguration):
        circle_intersections((0.0, 0.0), 10.0, (1.0, 0.0), 1.0)


def test_nearest_branch_keeps_assembly_mode():
    """A linkage drawn in the mirrored (minus) mode stays there with NEAREST."""
    st = LinkageState(
        rocker_joint=(4.0, 3.0),
        crank_joint=(0.0, 0.0),
        crank_ground=(-5.0, 0.0),
        rocker_ground=(8.0, 0.0),
        tracer_point=(2.0, 5.0),
    )
    assert solve_dependent(st.crank_joint, st) == Point(4.0, -3.0)
    assert solve_dependent(st.crank_joint, st, branch=Branch.NEAREST) == Point(4.0, 3.0)
    assert solve_dependent(st.crank_joint, st, branch="nearest", reference=(4.0, -2.0)) == Point(4.0, -3.0)


def _touching_pairs(n=2000, seed=7):
    rng = random.Random(seed)
    for _ in range(n):
        r1 = rng.uniform(1.0, 500.0)
        r2 = rng.uniform(1.0, 500.0)
        yield r1, r2, r1 + r2
        yield r1, r2, abs(r1 - r2)


def test_exactly_touching_circles_are_reachable():
    for r1, r2, d in _touching_pairs():
        plus, minus = circle_intersections((0.0, 0.0), r1, (d, 0.0), r2)
        scale = max(r1, r2)
        assert plus == minus
        assert abs(distance(plus, (0.0, 0.0)) - r1) <= 1e-6 * scale
        assert abs(distance(plus, (d, 0.0)) - r2) <= 1e-6 * scale


@pytest.mark.parametrize(
    "r1, r2, expected_x",
    [
        (273.92, 269.51, 273.92),
        (462.23, 485.63, -462.23),
    ],
)
def test_internally_touching_point(r1, r2, expected_x):
    plus, _minus = circle_intersections((0.0, 0.0), r1, (abs(r1 - r2), 0.0), r2)
    assert math.isclose(plus.x, expected_x, rel_tol=1e-9)
    assert plus.y == 0.0


@pytest.mark.parametrize("a", [0.3, 1.7, -2.4])
def test_internally_touching_at_any_direction(a):
    r1, r2 = 273.92, 269.51
    d = r1 - r2
    c2 = (d * math.cos(a), d * math.sin(a))
    plus, minus = circle_intersections((0.0, 0.0), r1, c2, r2)
    for p in (plus, minus):
        assert abs(distance(p, (0.0, 0.0)) - r1) <= 1e-6
        assert abs(distance(p, c2) - r2) <= 1e-6


def test_huge_coordinates_do_not_overflow():
    plus, minus = circle_intersections((0.0, 0.0), 5e200, (8e200, 0.0), 5e200)
    assert math.isclose(plus.x, 4e200, rel_tol=1e-12)
    assert math.isclose(plus.y, -3e200, rel_tol=1e-12)
    assert math.isclose(minus.y, 3e200, rel_tol=1e-12)
