# -*- coding: utf-8 -*-
"""Incremental crank stepping for live animation.

``step`` advances a state in place by one angular increment. ``Animator`` is
the animate toggle of the sketch: it captures the pose when animation starts
and puts it back when animation stops.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .geometry import polar_point
from .linkage import LinkageState
from .solver import Branch, UnreachableConfiguration, solve_dependent
from .tracer import TracerMode, coupler_local_offset, place_tracer, trace_point

DEFAULT_STEP_RAD = 0.02


def step(
    state: LinkageState,
    delta_angle: float = DEFAULT_STEP_RAD,
    branch: Branch = Branch.PLUS,
    tracer_mode: TracerMode = TracerMode.RECOMPUTE,
    local_offset: Optional[Tuple[float, float]] = None,
) -> Tuple[bool, str]:
    """Advance the crank by ``delta_angle`` and update the moving points in place.

    Ground pivots are never touched. If the new crank position cannot be
    assembled the state is left unchanged.

    Returns (ok, message).
    """
    if float(delta_angle) == 0.0:
        return True, ""
    a = state.crank_angle + float(delta_angle)
    driving = polar_point(state.crank_ground, state.crank_length, a)
    try:
        rocker = solve_dependent(driving, state, branch=Branch(branch))
    except UnreachableConfiguration as e:
        return False, str(e)

    if TracerMode(tracer_mode) is TracerMode.FIXED_LOCAL:
        local = local_offset if local_offset is not None else coupler_local_offset(state)
        tracer = place_tracer(local, driving, rocker)
    else:
        tracer = trace_point(driving, rocker, state)

    state.rocker_joint = rocker
    state.crank_joint = driving
    state.tracer_point = tracer
    return True, ""


class Animator:
    """Drives a caller-owned state tick by tick."""

    def __init__(
        self,
        delta_angle: float = DEFAULT_STEP_RAD,
        branch: Branch = Branch.PLUS,
        tracer_mode: TracerMode = TracerMode.RECOMPUTE,
    ):
        self.delta_angle = float(delta_angle)
        self.branch = Branch(branch)
        self.tracer_mode = TracerMode(tracer_mode)
        self.state: Optional[LinkageState] = None
        self._start_pose: Optional[Dict[str, Tuple[float, float]]] = None
        self._local_offset: Optional[Tuple[float, float]] = None
        self.ticks = 0
        self.blocked_ticks = 0
        self.last_message = ""

    @property
    def running(self) -> bool:
        return self.state is not None

    def start(self, state: LinkageState) -> None:
        self.state = state
        self._start_pose = state.snapshot()
        self._local_offset = coupler_local_offset(state)
        self.ticks = 0
        self.blocked_ticks = 0
        self.last_message = ""

    def tick(self) -> bool:
        if self.state is None:
            return False
        ok, msg = step(
            self.state,
            self.delta_angle,
            branch=self.branch,
            tracer_mode=self.tracer_mode,
            local_offset=self._local_offset,
        )
        self.ticks += 1
        if not ok:
            self.blocked_ticks += 1
        self.last_message = msg
        return ok

    def stop(self, restore: bool = True) -> Optional[LinkageState]:
        """Stop animating; by default the pose captured at start is restored."""
        state = self.state
        if state is not None and restore and self._start_pose is not None:
            state.restore(self._start_pose)
        self.state = None
        self._start_pose = None
        self._local_offset = None
        return state
