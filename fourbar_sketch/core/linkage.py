# -*- coding: utf-8 -*-
"""Four-bar linkage state.

The state is nothing more than five positions. Link lengths are not stored;
they are always measured from the current positions, so a free-form edit of a
joint silently redefines the mechanism.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

from .geometry import Point, angle, distance, is_finite_point

FILE_VERSION = "1.0.0"

# Canonical slot order. Joint picking and serialization follow it.
JOINT_NAMES: Tuple[str, ...] = (
    "rocker_joint",
    "crank_joint",
    "crank_ground",
    "rocker_ground",
    "tracer_point",
)

GROUND_JOINTS: Tuple[str, ...] = ("crank_ground", "rocker_ground")

DEFAULT_JOINTS: Dict[str, Tuple[float, float]] = {
    "rocker_joint": (550.0, 350.0),
    "crank_joint": (300.0, 400.0),
    "crank_ground": (350.0, 550.0),
    "rocker_ground": (600.0, 600.0),
    "tracer_point": (440.0, 550.0),
}

# Grashof classes
CRANK_ROCKER = "crank-rocker"
DOUBLE_CRANK = "double-crank"
DOUBLE_ROCKER = "double-rocker"
CHANGE_POINT = "change-point"
NON_GRASHOF = "non-grashof"


@dataclass
class LinkageState:
    rocker_joint: Point
    crank_joint: Point
    crank_ground: Point
    rocker_ground: Point
    tracer_point: Point

    def __post_init__(self):
        for f in fields(self):
            setattr(self, f.name, Point(*map(float, getattr(self, f.name))))

    @classmethod
    def default(cls) -> "LinkageState":
        return cls(**{name: Point(*xy) for name, xy in DEFAULT_JOINTS.items()})

    # ---- derived lengths ----
    @property
    def crank_length(self) -> float:
        return distance(self.crank_joint, self.crank_ground)

    @property
    def rocker_length(self) -> float:
        return distance(self.rocker_joint, self.rocker_ground)

    @property
    def coupler_length(self) -> float:
        return distance(self.rocker_joint, self.crank_joint)

    @property
    def ground_length(self) -> float:
        return distance(self.crank_ground, self.rocker_ground)

    # ---- derived angles ----
    @property
    def crank_angle(self) -> float:
        return angle(self.crank_joint, self.crank_ground)

    @property
    def rocker_angle(self) -> float:
        return angle(self.rocker_joint, self.rocker_ground)

    @property
    def coupler_angle(self) -> float:
        return angle(self.rocker_joint, self.crank_joint)

    # ---- editing ----
    def joint(self, name: str) -> Point:
        if name not in JOINT_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def set_joint(self, name: str, p: Tuple[float, float]) -> None:
        """Free-form edit: overwrite one position, redefining the link lengths."""
        if name not in JOINT_NAMES:
            raise KeyError(name)
        pt = Point(float(p[0]), float(p[1]))
        if not is_finite_point(pt):
            raise ValueError(f"Non-finite position for {name}: {p!r}")
        setattr(self, name, pt)

    def copy(self) -> "LinkageState":
        return LinkageState(**{name: getattr(self, name) for name in JOINT_NAMES})

    def snapshot(self) -> Dict[str, Tuple[float, float]]:
        return {name: tuple(getattr(self, name)) for name in JOINT_NAMES}

    def restore(self, snap: Dict[str, Tuple[float, float]]) -> None:
        for name, (x, y) in snap.items():
            if name in JOINT_NAMES:
                setattr(self, name, Point(float(x), float(y)))

    def lengths(self) -> Dict[str, float]:
        return {
            "crank": self.crank_length,
            "coupler": self.coupler_length,
            "rocker": self.rocker_length,
            "ground": self.ground_length,
        }

    # ---- classification ----
    def classify(self, tol: float = 1e-9) -> str:
        """Grashof classification of the current geometry, driven from the crank."""
        crank = self.crank_length
        coupler = self.coupler_length
        rocker = self.rocker_length
        ground = self.ground_length
        ls = sorted((crank, coupler, rocker, ground))
        s, p, q, l = ls
        lhs = s + l
        rhs = p + q
        scale = max(l, 1.0)
        if abs(lhs - rhs) <= tol * scale:
            return CHANGE_POINT
        if lhs > rhs:
            return NON_GRASHOF
        if abs(ground - s) <= tol * scale:
            return DOUBLE_CRANK
        if abs(crank - s) <= tol * scale:
            return CRANK_ROCKER
        return DOUBLE_ROCKER

    def is_crank_rotatable(self) -> bool:
        return self.classify() in (CRANK_ROCKER, DOUBLE_CRANK)

    # ---- serialization ----
    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": FILE_VERSION,
            "joints": {
                name: {"x": getattr(self, name).x, "y": getattr(self, name).y}
                for name in JOINT_NAMES
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinkageState":
        joints = (data or {}).get("joints", {}) or {}
        kwargs: Dict[str, Point] = {}
        for name in JOINT_NAMES:
            raw = joints.get(name)
            if raw is None:
                kwargs[name] = Point(*DEFAULT_JOINTS[name])
                continue
            try:
                if isinstance(raw, dict):
                    x, y = float(raw["x"]), float(raw["y"])
                else:
                    x, y = float(raw[0]), float(raw[1])
            except (KeyError, IndexError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid coordinates for {name}: {raw!r}") from e
            if not (math.isfinite(x) and math.isfinite(y)):
                raise ValueError(f"Non-finite coordinates for {name}: {raw!r}")
            kwargs[name] = Point(x, y)
        return cls(**kwargs)
