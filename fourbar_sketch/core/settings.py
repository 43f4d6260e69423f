# -*- coding: utf-8 -*-
"""Simulation and display settings.

Settings are plain dicts so they can be stored verbatim in the project file.
``normalize_*`` coerces whatever was loaded (or typed in a dialog) back into
well-typed values, falling back to the defaults for anything invalid.
"""

from __future__ import annotations

import math
from typing import Any, Dict

from .animation import DEFAULT_STEP_RAD
from .curve import COUPLER_CURVE_RESOLUTION
from .solver import Branch
from .tracer import TracerMode

MAX_CURVE_RESOLUTION = 100000


def default_simulation_settings() -> Dict[str, Any]:
    return {
        "step_rad": DEFAULT_STEP_RAD,
        "curve_resolution": COUPLER_CURVE_RESOLUTION,
        "branch": Branch.PLUS.value,
        "tracer_mode": TracerMode.RECOMPUTE.value,
        "tick_ms": 16,
    }


def default_display_settings() -> Dict[str, Any]:
    return {
        "show_curve": True,
        "joint_radius": 10.0,
        "stroke_width": 1.5,
    }


def _float(value: Any, fallback: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return fallback
    return v if math.isfinite(v) else fallback


def _int(value: Any, fallback: int) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return fallback


def normalize_simulation_settings(data: Dict[str, Any] | None) -> Dict[str, Any]:
    out = default_simulation_settings()
    data = data or {}
    out["step_rad"] = _float(data.get("step_rad", out["step_rad"]), out["step_rad"])
    res = _int(data.get("curve_resolution", out["curve_resolution"]), out["curve_resolution"])
    out["curve_resolution"] = max(1, min(MAX_CURVE_RESOLUTION, res))
    branch = str(data.get("branch", out["branch"]) or "").lower()
    if branch in {b.value for b in Branch}:
        out["branch"] = branch
    mode = str(data.get("tracer_mode", out["tracer_mode"]) or "").lower()
    if mode in {m.value for m in TracerMode}:
        out["tracer_mode"] = mode
    out["tick_ms"] = max(1, _int(data.get("tick_ms", out["tick_ms"]), out["tick_ms"]))
    return out


def normalize_display_settings(data: Dict[str, Any] | None) -> Dict[str, Any]:
    out = default_display_settings()
    data = data or {}
    out["show_curve"] = bool(data.get("show_curve", out["show_curve"]))
    out["joint_radius"] = max(1.0, _float(data.get("joint_radius", out["joint_radius"]), out["joint_radius"]))
    out["stroke_width"] = max(0.1, _float(data.get("stroke_width", out["stroke_width"]), out["stroke_width"]))
    return out
