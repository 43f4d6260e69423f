# -*- coding: utf-8 -*-
"""Coupler curve sampling over one full crank revolution."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .geometry import Point, polar_point
from .linkage import LinkageState
from .solver import Branch, UnreachableConfiguration, solve_dependent
from .tracer import TracerMode, coupler_local_offset, place_tracer, trace_point

COUPLER_CURVE_RESOLUTION = 1000


@dataclass
class CouplerCurve:
    """Sampled coupler curve.

    ``points`` holds the reachable samples in crank order followed by the
    current tracer position as closing point. ``indices`` gives the sample
    index of every point (the closing point has index ``resolution``) and
    ``skipped`` lists the sample indices where the linkage could not be
    assembled.
    """

    points: List[Point] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    resolution: int = 0

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    @property
    def complete(self) -> bool:
        return not self.skipped

    def as_array(self) -> np.ndarray:
        if not self.points:
            return np.zeros((0, 2), dtype=float)
        return np.asarray(self.points, dtype=float)

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """(xmin, ymin, xmax, ymax) or None for an empty curve."""
        if not self.points:
            return None
        arr = self.as_array()
        xmin, ymin = arr.min(axis=0)
        xmax, ymax = arr.max(axis=0)
        return float(xmin), float(ymin), float(xmax), float(ymax)

    def segments(self) -> List[List[Point]]:
        """Runs of consecutive samples; a skipped sample starts a new run."""
        runs: List[List[Point]] = []
        last = None
        for idx, p in zip(self.indices, self.points):
            if last is None or idx != last + 1:
                runs.append([])
            runs[-1].append(p)
            last = idx
        if len(runs) > 1 and self.indices[0] == 0 and len(runs[-1]) > 1:
            # The closing point sits on sample 0, so the last run continues into the first.
            runs[0] = runs.pop() + runs[0]
        return runs


def generate_coupler_curve(
    state: LinkageState,
    resolution: int = COUPLER_CURVE_RESOLUTION,
    branch: Branch = Branch.PLUS,
    tracer_mode: TracerMode = TracerMode.RECOMPUTE,
) -> CouplerCurve:
    """Sample the tracer over one crank revolution starting at the current crank angle.

    Unreachable samples are skipped, never clamped. The state is not modified.
    """
    resolution = int(resolution)
    if resolution < 1:
        raise ValueError(f"resolution must be >= 1, got {resolution}")

    branch = Branch(branch)
    tracer_mode = TracerMode(tracer_mode)
    crank_length = state.crank_length
    a0 = state.crank_angle
    local = coupler_local_offset(state) if tracer_mode is TracerMode.FIXED_LOCAL else None
    reference = state.rocker_joint

    curve = CouplerCurve(resolution=resolution)
    for i in range(resolution):
        a = 2.0 * math.pi * i / resolution + a0
        driving = polar_point(state.crank_ground, crank_length, a)
        try:
            rocker = solve_dependent(driving, state, branch=branch, reference=reference)
        except UnreachableConfiguration:
            curve.skipped.append(i)
            continue
        reference = rocker
        if local is not None:
            curve.points.append(place_tracer(local, driving, rocker))
        else:
            curve.points.append(trace_point(driving, rocker, state))
        curve.indices.append(i)
    curve.points.append(state.tracer_point)
    curve.indices.append(resolution)
    return curve
