# -*- coding: utf-8 -*-
"""Settings dialog for simulation and display preferences."""

from __future__ import annotations

from typing import Any, Dict

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFormLayout,
    QSpinBox,
)

from ..core.settings import MAX_CURVE_RESOLUTION


class SettingsDialog(QDialog):
    def __init__(self, ctrl, parent=None):
        super().__init__(parent)
        self.ctrl = ctrl
        self.setWindowTitle("Settings")
        sim = ctrl.simulation_settings
        disp = ctrl.display_settings

        layout = QFormLayout(self)
        self.spin_step = QDoubleSpinBox(self)
        self.spin_step.setDecimals(4)
        self.spin_step.setRange(-1.0, 1.0)
        self.spin_step.setSingleStep(0.005)
        self.spin_step.setValue(float(sim["step_rad"]))
        layout.addRow("Step per tick (rad)", self.spin_step)

        self.spin_tick = QSpinBox(self)
        self.spin_tick.setRange(1, 1000)
        self.spin_tick.setValue(int(sim["tick_ms"]))
        layout.addRow("Tick interval (ms)", self.spin_tick)

        self.spin_resolution = QSpinBox(self)
        self.spin_resolution.setRange(1, MAX_CURVE_RESOLUTION)
        self.spin_resolution.setValue(int(sim["curve_resolution"]))
        layout.addRow("Coupler curve samples", self.spin_resolution)

        self.combo_branch = QComboBox(self)
        self.combo_branch.addItem("Fixed (+h) branch", "plus")
        self.combo_branch.addItem("Keep assembly mode (nearest)", "nearest")
        self.combo_branch.setCurrentIndex(max(0, self.combo_branch.findData(sim["branch"])))
        layout.addRow("Assembly branch", self.combo_branch)

        self.combo_tracer = QComboBox(self)
        self.combo_tracer.addItem("Re-derive from previous pose", "recompute")
        self.combo_tracer.addItem("Fixed coupler-frame offset", "fixed_local")
        self.combo_tracer.setCurrentIndex(max(0, self.combo_tracer.findData(sim["tracer_mode"])))
        layout.addRow("Tracer attachment", self.combo_tracer)

        self.chk_curve = QCheckBox(self)
        self.chk_curve.setChecked(bool(disp["show_curve"]))
        layout.addRow("Show coupler curve", self.chk_curve)

        self.spin_joint = QDoubleSpinBox(self)
        self.spin_joint.setRange(1.0, 50.0)
        self.spin_joint.setValue(float(disp["joint_radius"]))
        layout.addRow("Joint radius", self.spin_joint)

        self.spin_stroke = QDoubleSpinBox(self)
        self.spin_stroke.setRange(0.2, 6.0)
        self.spin_stroke.setSingleStep(0.1)
        self.spin_stroke.setValue(float(disp["stroke_width"]))
        layout.addRow("Stroke width", self.spin_stroke)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

    def simulation_settings(self) -> Dict[str, Any]:
        return {
            "step_rad": float(self.spin_step.value()),
            "tick_ms": int(self.spin_tick.value()),
            "curve_resolution": int(self.spin_resolution.value()),
            "branch": str(self.combo_branch.currentData() or "plus"),
            "tracer_mode": str(self.combo_tracer.currentData() or "recompute"),
        }

    def display_settings(self) -> Dict[str, Any]:
        return {
            "show_curve": bool(self.chk_curve.isChecked()),
            "joint_radius": float(self.spin_joint.value()),
            "stroke_width": float(self.spin_stroke.value()),
        }
