from __future__ import annotations

import math

import pytest

from fourbar_sketch.core.geometry import distance, polar_point
from fourbar_sketch.core.solver import solve_dependent
from fourbar_sketch.core.tracer import coupler_local_offset, place_tracer, trace_point


def _cross(o, a, b):
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def test_unchanged_coupler_keeps_tracer(example_state):
    st = example_state
    p = trace_point(st.crank_joint, st.rocker_joint, st)
    assert math.isclose(p.x, st.tracer_point.x)
    assert math.isclose(p.y, st.tracer_point.y)


@pytest.mark.parametrize("da", [0.1, 1.3, 2.9, 4.0])
def test_tracer_stays_rigid_on_coupler(example_state, da):
    st = example_state
    driving = polar_point(st.crank_ground, st.crank_length, st.crank_angle + da)
    rocker = solve_dependent(driving, st)
    p = trace_point(driving, rocker, st)

    assert math.isclose(distance(p, driving), distance(st.tracer_point, st.crank_joint), rel_tol=1e-9)
    assert math.isclose(distance(p, rocker), distance(st.tracer_point, st.rocker_joint), rel_tol=1e-9)
    # no mirroring: the tracer stays on the same side of the coupler
    before = _cross(st.crank_joint, st.rocker_joint, st.tracer_point)
    after = _cross(driving, rocker, p)
    assert (before > 0) == (after > 0)


def test_fixed_local_offset_matches_recompute(example_state):
    st = example_state
    local = coupler_local_offset(st)
    driving = polar_point(st.crank_ground, st.crank_length, st.crank_angle + 2.2)
    rocker = solve_dependent(driving, st)
    a = trace_point(driving, rocker, st)
    b = place_tracer(local, driving, rocker)
    assert math.isclose(a.x, b.x, abs_tol=1e-9)
    assert math.isclose(a.y, b.y, abs_tol=1e-9)


def test_free_form_tracer_edit_redefines_attachment(example_state):
    st = example_state
    st.set_joint("tracer_point", (400.0, 300.0))
    driving = polar_point(st.crank_ground, st.crank_length, st.crank_angle + 0.5)
    rocker = solve_dependent(driving, st)
    p = trace_point(driving, rocker, st)
    assert math.isclose(distance(p, driving), distance((400.0, 300.0), st.crank_joint), rel_tol=1e-9)
