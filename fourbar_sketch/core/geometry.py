# -*- coding: utf-8 -*-
"""Geometry helpers.

All angles follow the screen convention used by the sketch: the y axis points
down on screen, so angles are measured with y inverted (counter-clockwise on
screen is positive).
"""

from __future__ import annotations

import math
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


def clamp_angle_rad(a: float) -> float:
    """Wrap angle to (-pi, pi]."""
    while a <= -math.pi:
        a += 2 * math.pi
    while a > math.pi:
        a -= 2 * math.pi
    return a


def distance(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def angle(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    """Direction from p2 to p1 in radians, y axis inverted.

    The result lies in (-pi, pi]; atan2 can hand back -pi for a negative zero
    which is folded onto +pi.
    """
    return clamp_angle_rad(-math.atan2(p1[1] - p2[1], p1[0] - p2[0]))


def rot2(x: float, y: float, a: float) -> tuple[float, float]:
    ca, sa = math.cos(a), math.sin(a)
    return ca * x - sa * y, sa * x + ca * y


def polar_point(center: tuple[float, float], radius: float, a: float) -> Point:
    """Point at ``radius`` from ``center`` in direction ``a`` (inverse of :func:`angle`)."""
    return Point(center[0] + radius * math.cos(a), center[1] - radius * math.sin(a))


def is_finite_point(p: tuple[float, float]) -> bool:
    return math.isfinite(p[0]) and math.isfinite(p[1])
