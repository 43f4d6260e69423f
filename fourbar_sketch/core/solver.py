# -*- coding: utf-8 -*-
"""Position analysis for the four-bar linkage.

Given a new position for the crank's moving joint, the rocker's moving joint
must stay ``coupler_length`` away from it and ``rocker_length`` away from the
rocker ground pivot. That is a circle-circle intersection; this module keeps
the math side independent from Qt UI code.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Tuple

from .geometry import Point, distance
from .linkage import LinkageState

# Relative overlap below which two circles count as touching (round-off around tangency).
TANGENT_TOL = 1e-12


class UnreachableConfiguration(Exception):
    """The constraint circles do not intersect for the requested driving point."""

    def __init__(self, driving_point: Tuple[float, float], discriminant: float, reason: str = ""):
        self.driving_point = Point(float(driving_point[0]), float(driving_point[1]))
        self.discriminant = float(discriminant)
        msg = reason or "constraint circles do not intersect"
        super().__init__(
            f"Unreachable configuration at ({self.driving_point.x:.3f}, {self.driving_point.y:.3f}): {msg}"
        )


class Branch(str, Enum):
    """Which of the two intersection points is used.

    PLUS always takes the "+h" solution. NEAREST takes the solution closest to
    a reference point (normally the previous rocker joint), which keeps the
    assembly mode across a drag into the mirrored configuration.
    """

    PLUS = "plus"
    NEAREST = "nearest"


def circle_intersections(
    c1: Tuple[float, float],
    r1: float,
    c2: Tuple[float, float],
    r2: float,
) -> Tuple[Point, Point]:
    """Return the (plus, minus) intersection points of two circles.

    Raises UnreachableConfiguration when the circles are disjoint, nested or
    concentric. A tangent contact returns the same point twice.
    """
    r = distance(c1, c2)
    if r < 1e-12:
        raise UnreachableConfiguration(c1, float("nan"), "circle centers coincide")
    # Factored discriminant: (outer gap) * (inner gap), everything scaled by r.
    outer = (r1 + r2) - r
    inner = r - abs(r1 - r2)
    disc = (outer / r) * ((r1 + r2 + r) / r) * (inner / r) * ((r + abs(r1 - r2)) / r)
    slack = TANGENT_TOL * max(r, abs(r1), abs(r2))
    if outer < -slack or inner < -slack:
        raise UnreachableConfiguration(c1, disc)
    if outer < 0.0 or inner < 0.0:
        disc = 0.0
    h = 0.5 * math.sqrt(disc)

    k = 0.5 * ((r1 - r2) / r) * ((r1 + r2) / r)
    dx = c2[0] - c1[0]
    dy = c2[1] - c1[1]
    bx = 0.5 * (c1[0] + c2[0]) + k * dx
    by = 0.5 * (c1[1] + c2[1]) + k * dy
    plus = Point(bx + h * dy, by - h * dx)
    minus = Point(bx - h * dy, by + h * dx)
    if not (math.isfinite(plus.x) and math.isfinite(plus.y)):
        raise UnreachableConfiguration(c1, disc, "non-finite intersection")
    return plus, minus


def solve_dependent(
    driving_point: Tuple[float, float],
    state: LinkageState,
    branch: Branch = Branch.PLUS,
    reference: Optional[Tuple[float, float]] = None,
) -> Point:
    """New rocker joint for a new crank joint position.

    Coupler and rocker lengths are taken from ``state`` (the previous
    configuration). Raises UnreachableConfiguration if no assembly exists.
    """
    plus, minus = circle_intersections(
        driving_point,
        state.coupler_length,
        state.rocker_ground,
        state.rocker_length,
    )
    if Branch(branch) is Branch.PLUS:
        return plus
    ref = state.rocker_joint if reference is None else reference
    if distance(minus, ref) < distance(plus, ref):
        return minus
    return plus
