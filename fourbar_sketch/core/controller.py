# -*- coding: utf-8 -*-
"""LinkageController: owns the linkage state and keeps the scene in sync.

The controller is the only place where the kinematics core meets Qt. Graphics
items read positions from ``self.state``; drags and animation ticks write into
it and then call ``update_graphics``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from PyQt6.QtWidgets import QGraphicsScene

from .animation import Animator, step
from .commands import CommandStack, MoveJointsCommand
from .curve import CouplerCurve, generate_coupler_curve
from .geometry import distance
from .linkage import GROUND_JOINTS, JOINT_NAMES, LinkageState
from .settings import (
    default_display_settings,
    default_simulation_settings,
    normalize_display_settings,
    normalize_simulation_settings,
)
from .solver import Branch
from .tracer import TracerMode
from ..ui.items import CouplerCurveItem, CouplerPlateItem, JointItem, LinkItem, SupportItem
from ..utils.constants import PICK_MARGIN

if TYPE_CHECKING:
    from ..ui.main_window import MainWindow

# Drawn links: crank, coupler, rocker, ground.
LINKS = (
    ("crank_ground", "crank_joint"),
    ("crank_joint", "rocker_joint"),
    ("rocker_joint", "rocker_ground"),
    ("rocker_ground", "crank_ground"),
)


class LinkageController:
    def __init__(self, scene: QGraphicsScene, win: Optional["MainWindow"] = None):
        self.scene = scene
        self.win = win
        self.state = LinkageState.default()
        self.simulation_settings: Dict[str, Any] = default_simulation_settings()
        self.display_settings: Dict[str, Any] = default_display_settings()
        self.animator = Animator()
        self.stack = CommandStack(on_change=self._stack_changed)
        self.curve: Optional[CouplerCurve] = None
        self.selected_joint: Optional[str] = None
        self.last_message = ""

        self._drag_name: Optional[str] = None
        self._drag_offset: Tuple[float, float] = (0.0, 0.0)
        self._drag_before: Optional[Dict[str, Tuple[float, float]]] = None

        self.joint_items: Dict[str, JointItem] = {}
        self.link_items: list[LinkItem] = []
        self.curve_item: Optional[CouplerCurveItem] = None
        self.plate_item: Optional[CouplerPlateItem] = None
        self._apply_settings_to_animator()
        self.build_items()
        self.regenerate_curve()
        self.update_graphics()

    # ---------------- scene ----------------
    def build_items(self):
        self.scene.clear()
        self.curve_item = CouplerCurveItem(self)
        self.scene.addItem(self.curve_item)
        self.link_items = []
        for a, b in LINKS:
            it = LinkItem(a, b, self)
            self.scene.addItem(it)
            self.link_items.append(it)
        self.plate_item = CouplerPlateItem(self)
        self.scene.addItem(self.plate_item)
        self.joint_items = {}
        for name in JOINT_NAMES:
            it = SupportItem(name, self) if name in GROUND_JOINTS else JointItem(name, self)
            self.scene.addItem(it)
            self.joint_items[name] = it

    def update_graphics(self):
        for it in self.link_items:
            it.update_position()
        if self.plate_item is not None:
            self.plate_item.update_position()
        for it in self.joint_items.values():
            it.update_position()
            it.sync_style()
        if self.curve_item is not None:
            self.curve_item.set_curve(self.curve if self.display_settings.get("show_curve", True) else None)

    def regenerate_curve(self):
        s = self.simulation_settings
        self.curve = generate_coupler_curve(
            self.state,
            resolution=int(s["curve_resolution"]),
            branch=Branch(s["branch"]),
            tracer_mode=TracerMode(s["tracer_mode"]),
        )

    def geometry_changed(self):
        self.regenerate_curve()
        self.update_graphics()
        self.update_status()

    # ---------------- settings ----------------
    def _apply_settings_to_animator(self):
        s = self.simulation_settings
        self.animator.delta_angle = float(s["step_rad"])
        self.animator.branch = Branch(s["branch"])
        self.animator.tracer_mode = TracerMode(s["tracer_mode"])

    def apply_settings(self, simulation: Optional[Dict[str, Any]] = None, display: Optional[Dict[str, Any]] = None):
        if simulation is not None:
            self.simulation_settings = normalize_simulation_settings(simulation)
            self._apply_settings_to_animator()
        if display is not None:
            self.display_settings = normalize_display_settings(display)
            for it in self.joint_items.values():
                it.apply_display_settings()
        self.geometry_changed()

    # ---------------- picking / dragging ----------------
    def pick_joint(self, x: float, y: float) -> Optional[str]:
        """First joint (in canonical order) within reach of (x, y)."""
        reach = float(self.display_settings["joint_radius"]) + PICK_MARGIN
        for name in JOINT_NAMES:
            if distance(self.state.joint(name), (x, y)) < reach:
                return name
        return None

    def begin_drag(self, x: float, y: float) -> bool:
        if self.animator.running:
            return False
        name = self.pick_joint(x, y)
        self.selected_joint = name
        if name is None:
            self.update_graphics()
            return False
        p = self.state.joint(name)
        self._drag_name = name
        self._drag_offset = (p.x - x, p.y - y)
        self._drag_before = self.state.snapshot()
        self.update_graphics()
        return True

    def on_drag_update(self, x: float, y: float):
        if self._drag_name is None or self.animator.running:
            return
        ox, oy = self._drag_offset
        self.state.set_joint(self._drag_name, (x + ox, y + oy))
        self.geometry_changed()

    def commit_drag_if_any(self):
        if self._drag_name is None or self._drag_before is None:
            return
        before = self._drag_before
        after = self.state.snapshot()
        self._drag_name = None
        self._drag_before = None
        if before != after:
            self.stack.push(MoveJointsCommand(self.state, before, after, on_applied=self.geometry_changed), execute=False)

    @property
    def dragging(self) -> bool:
        return self._drag_name is not None

    # ---------------- animation ----------------
    def set_animating(self, on: bool):
        if on == self.animator.running:
            return
        if on:
            self.commit_drag_if_any()
            self._apply_settings_to_animator()
            self.animator.start(self.state)
            self.last_message = ""
        else:
            self.animator.stop(restore=True)
            self.last_message = ""
            self.regenerate_curve()
        self.update_graphics()
        self.update_status()

    def tick(self) -> bool:
        if not self.animator.running:
            return False
        ok = self.animator.tick()
        self.last_message = self.animator.last_message
        self.update_graphics()
        self.update_status()
        return ok

    def step_once(self, direction: int = 1) -> bool:
        """Single manual step outside animation (undoable)."""
        if self.animator.running:
            return False
        s = self.simulation_settings
        before = self.state.snapshot()
        ok, msg = step(
            self.state,
            math.copysign(float(s["step_rad"]), direction),
            branch=Branch(s["branch"]),
            tracer_mode=TracerMode(s["tracer_mode"]),
        )
        self.last_message = msg
        after = self.state.snapshot()
        if ok and before != after:
            cmd = MoveJointsCommand(self.state, before, after, on_applied=self.geometry_changed)
            cmd.desc = "Step crank"
            self.stack.push(cmd, execute=False)
        self.geometry_changed()
        return ok

    def reset_linkage(self) -> bool:
        """Move all five points back to the default configuration (undoable)."""
        if self.animator.running:
            return False
        before = self.state.snapshot()
        after = LinkageState.default().snapshot()
        if before == after:
            return False
        cmd = MoveJointsCommand(self.state, before, after, on_applied=self.geometry_changed)
        cmd.desc = "Reset linkage"
        self.stack.push(cmd)
        return True

    # ---------------- model ----------------
    def new_linkage(self):
        self.set_animating(False)
        self.state.restore(LinkageState.default().snapshot())
        self.selected_joint = None
        self.stack.clear()
        self.geometry_changed()

    def to_dict(self) -> Dict[str, Any]:
        data = self.state.to_dict()
        data["simulation_settings"] = dict(self.simulation_settings)
        data["display_settings"] = dict(self.display_settings)
        return data

    def load_dict(self, data: Dict[str, Any]):
        """Replace the linkage and settings with a project payload; clears undo."""
        new_state = LinkageState.from_dict(data)
        self.set_animating(False)
        self.simulation_settings = normalize_simulation_settings(data.get("simulation_settings"))
        self.display_settings = normalize_display_settings(data.get("display_settings"))
        self._apply_settings_to_animator()
        for it in self.joint_items.values():
            it.apply_display_settings()
        self.selected_joint = None
        self.state.restore(new_state.snapshot())
        self.stack.clear()
        self.geometry_changed()

    # ---------------- status ----------------
    def _stack_changed(self):
        if self.win is not None:
            self.win.update_undo_redo_actions()

    def status_text(self) -> str:
        st = self.state
        parts = [
            f"crank {math.degrees(st.crank_angle):.1f}°",
            f"L crank {st.crank_length:.2f}",
            f"coupler {st.coupler_length:.2f}",
            f"rocker {st.rocker_length:.2f}",
            f"ground {st.ground_length:.2f}",
            st.classify(),
        ]
        if self.curve is not None and self.curve.skipped:
            parts.append(f"curve: {len(self.curve.skipped)}/{self.curve.resolution} samples unreachable")
        if self.animator.running:
            parts.append("animating")
        if self.last_message:
            parts.append(f"blocked: {self.last_message}")
        return " | ".join(parts)

    def update_status(self):
        if self.win is not None:
            self.win.statusBar().showMessage(self.status_text())
