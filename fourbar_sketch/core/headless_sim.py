# -*- coding: utf-8 -*-
"""Headless sweep of the crank for data export and plotting."""

from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .animation import step
from .linkage import LinkageState
from .settings import normalize_simulation_settings
from .solver import Branch
from .tracer import TracerMode, coupler_local_offset

FRAME_COLUMNS = (
    "frame",
    "success",
    "crank_deg",
    "rocker_deg",
    "coupler_deg",
    "tracer_x",
    "tracer_y",
    "message",
)


@dataclass
class SweepSettings:
    step_rad: float
    steps: int
    branch: Branch
    tracer_mode: TracerMode

    @classmethod
    def from_settings(cls, settings: Optional[Dict[str, Any]], steps: Optional[int] = None) -> "SweepSettings":
        s = normalize_simulation_settings(settings)
        step_rad = float(s["step_rad"])
        if steps is None:
            # One full revolution (at least one step).
            steps = max(1, int(math.ceil(2.0 * math.pi / abs(step_rad)))) if step_rad != 0.0 else 1
        return cls(step_rad, max(1, int(steps)), Branch(s["branch"]), TracerMode(s["tracer_mode"]))


def _frame(idx: int, state: LinkageState, ok: bool, msg: str) -> Dict[str, Any]:
    return {
        "frame": idx,
        "success": bool(ok),
        "crank_deg": math.degrees(state.crank_angle),
        "rocker_deg": math.degrees(state.rocker_angle),
        "coupler_deg": math.degrees(state.coupler_angle),
        "tracer_x": state.tracer_point.x,
        "tracer_y": state.tracer_point.y,
        "message": msg,
    }


def simulate_revolution(
    state: LinkageState,
    settings: Optional[Dict[str, Any]] = None,
    steps: Optional[int] = None,
) -> Tuple[List[Dict[str, Any]], Dict[str, Any], Dict[str, Any]]:
    """Step a copy of ``state`` and record every frame.

    Frame 0 is the starting pose. Blocked steps hold the previous pose and are
    recorded with ``success=False``. The caller's state is not modified.

    Returns (frames, summary, status).
    """
    sweep = SweepSettings.from_settings(settings, steps)
    model = state.copy()
    lengths0 = (model.crank_length, model.coupler_length, model.rocker_length)
    local = coupler_local_offset(model)

    frames: List[Dict[str, Any]] = [_frame(0, model, True, "")]
    reason = ""
    blocked = 0
    max_drift = 0.0
    for idx in range(1, sweep.steps + 1):
        ok, msg = step(
            model,
            sweep.step_rad,
            branch=sweep.branch,
            tracer_mode=sweep.tracer_mode,
            local_offset=local,
        )
        if not ok:
            blocked += 1
            if not reason:
                reason = msg or "unreachable"
        lengths = (model.crank_length, model.coupler_length, model.rocker_length)
        max_drift = max(max_drift, max(abs(a - b) for a, b in zip(lengths, lengths0)))
        frames.append(_frame(idx, model, ok, msg))

    success = blocked == 0
    summary = {
        "success": success,
        "success_rate": (sweep.steps - blocked) / float(sweep.steps),
        "n_steps": sweep.steps,
        "blocked_steps": blocked,
        "max_length_drift": max_drift,
        "classification": state.classify(),
    }
    status = {
        "success": success,
        "reason": reason or ("ok" if success else "failed"),
    }
    return frames, summary, status


def frames_to_array(frames: Sequence[Dict[str, Any]], keys: Sequence[str]) -> np.ndarray:
    """Numeric columns of ``frames`` as an (n, len(keys)) float array."""
    out = np.full((len(frames), len(keys)), np.nan, dtype=float)
    for i, rec in enumerate(frames):
        for j, key in enumerate(keys):
            val = rec.get(key)
            if isinstance(val, (bool, int, float)):
                out[i, j] = float(val)
    return out


def write_frames_csv(path: str, frames: Sequence[Dict[str, Any]]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=list(FRAME_COLUMNS), extrasaction="ignore")
        writer.writeheader()
        for rec in frames:
            writer.writerow(rec)


def write_curve_csv(path: str, points: Sequence[Tuple[float, float]]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["index", "x", "y"])
        for i, (x, y) in enumerate(points):
            writer.writerow([i, x, y])
