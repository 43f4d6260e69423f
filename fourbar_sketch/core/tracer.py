# -*- coding: utf-8 -*-
"""Placement of the tracer point that rides on the coupler link."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from .geometry import Point, angle, rot2
from .linkage import LinkageState


class TracerMode(str, Enum):
    """How the tracer attachment is carried from one configuration to the next.

    RECOMPUTE re-derives the world offset from the previous configuration on
    every call, so a free-form edit of the tracer redefines its attachment
    immediately. FIXED_LOCAL measures the offset once in the coupler frame and
    reuses it for every placement.
    """

    RECOMPUTE = "recompute"
    FIXED_LOCAL = "fixed_local"


def trace_point(
    new_crank_joint: Tuple[float, float],
    new_rocker_joint: Tuple[float, float],
    state: LinkageState,
) -> Point:
    """Tracer position after the coupler moves to the new joint pair.

    ``state`` must be the configuration immediately preceding the move;
    a stale reference rotates the tracer by the wrong amount.
    """
    theta = angle(state.rocker_joint, state.crank_joint)
    dx = state.tracer_point.x - state.crank_joint.x
    dy = state.tracer_point.y - state.crank_joint.y
    psi = angle(new_rocker_joint, new_crank_joint)
    ox, oy = rot2(dx, dy, theta - psi)
    return Point(new_crank_joint[0] + ox, new_crank_joint[1] + oy)


def coupler_local_offset(state: LinkageState) -> Tuple[float, float]:
    """Tracer offset from the crank joint expressed in the coupler frame."""
    theta = angle(state.rocker_joint, state.crank_joint)
    dx = state.tracer_point.x - state.crank_joint.x
    dy = state.tracer_point.y - state.crank_joint.y
    return rot2(dx, dy, theta)


def place_tracer(
    local: Tuple[float, float],
    crank_joint: Tuple[float, float],
    rocker_joint: Tuple[float, float],
) -> Point:
    """World position of a coupler-frame offset for the given joint pair."""
    psi = angle(rocker_joint, crank_joint)
    ox, oy = rot2(local[0], local[1], -psi)
    return Point(crank_joint[0] + ox, crank_joint[1] + oy)
