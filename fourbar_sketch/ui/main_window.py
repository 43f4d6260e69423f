# -*- coding: utf-8 -*-
"""Main window + menus."""

from __future__ import annotations

import json
from typing import Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QGraphicsScene, QStatusBar, QFileDialog, QMessageBox, QToolBar
)

from ..core.controller import LinkageController
from ..core.headless_sim import simulate_revolution, write_curve_csv, write_frames_csv
from ..utils.qt_safe import safe_slot
from .plot_window import PlotWindow
from .settings_dialog import SettingsDialog
from .view import LinkageView


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Four-Bar Sketch")
        self.resize(1000, 1000)
        self.scene = QGraphicsScene(-2000, -2000, 4000, 4000)
        self.setStatusBar(QStatusBar())
        self.ctrl = LinkageController(self.scene, self)
        self.view = LinkageView(self.scene, self.ctrl)
        self.setCentralWidget(self.view)
        self.current_file: Optional[str] = None
        self._plot_windows: list[PlotWindow] = []

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_tick)

        self._build_actions()
        self._build_menus()
        self._build_toolbar()
        self.update_undo_redo_actions()
        self.ctrl.update_status()
        self.view.centerOn(450, 500)

    # ---------------- actions ----------------
    def _build_actions(self):
        self.act_new = QAction("New", self)
        self.act_new.setShortcut(QKeySequence.StandardKey.New)
        self.act_new.triggered.connect(self.file_new)
        self.act_open = QAction("Open...", self)
        self.act_open.setShortcut(QKeySequence.StandardKey.Open)
        self.act_open.triggered.connect(self.file_open)
        self.act_save = QAction("Save", self)
        self.act_save.setShortcut(QKeySequence.StandardKey.Save)
        self.act_save.triggered.connect(self.file_save)
        self.act_save_as = QAction("Save As...", self)
        self.act_save_as.triggered.connect(self.file_save_as)
        self.act_export_curve = QAction("Export Coupler Curve CSV...", self)
        self.act_export_curve.triggered.connect(self.export_curve_csv)
        self.act_export_sweep = QAction("Export Sweep CSV...", self)
        self.act_export_sweep.triggered.connect(self.export_sweep_csv)
        self.act_quit = QAction("Quit", self)
        self.act_quit.setShortcut(QKeySequence.StandardKey.Quit)
        self.act_quit.triggered.connect(self.close)

        self.act_undo = QAction("Undo", self)
        self.act_undo.setShortcut(QKeySequence.StandardKey.Undo)
        self.act_undo.triggered.connect(self.undo)
        self.act_redo = QAction("Redo", self)
        self.act_redo.setShortcut(QKeySequence.StandardKey.Redo)
        self.act_redo.triggered.connect(self.redo)
        self.act_settings = QAction("Settings...", self)
        self.act_settings.triggered.connect(self.open_settings)

        self.act_animate = QAction("Animate", self)
        self.act_animate.setCheckable(True)
        self.act_animate.setShortcut(QKeySequence("Space"))
        self.act_animate.toggled.connect(self.set_animating)
        self.act_step_fwd = QAction("Step +", self)
        self.act_step_fwd.setShortcut(QKeySequence("Right"))
        self.act_step_fwd.triggered.connect(lambda: self.step_once(1))
        self.act_step_back = QAction("Step -", self)
        self.act_step_back.setShortcut(QKeySequence("Left"))
        self.act_step_back.triggered.connect(lambda: self.step_once(-1))
        self.act_reset = QAction("Reset Linkage", self)
        self.act_reset.triggered.connect(self.reset_linkage)
        self.act_sweep_plot = QAction("Sweep Plot...", self)
        self.act_sweep_plot.triggered.connect(self.open_sweep_plot)
        self.act_fit = QAction("Fit View", self)
        self.act_fit.setShortcut(QKeySequence("F"))
        self.act_fit.triggered.connect(self.view.fit_all)

    def _build_menus(self):
        m_file = self.menuBar().addMenu("File")
        for act in (self.act_new, self.act_open, self.act_save, self.act_save_as):
            m_file.addAction(act)
        m_file.addSeparator()
        m_file.addAction(self.act_export_curve)
        m_file.addAction(self.act_export_sweep)
        m_file.addSeparator()
        m_file.addAction(self.act_quit)

        m_edit = self.menuBar().addMenu("Edit")
        m_edit.addAction(self.act_undo)
        m_edit.addAction(self.act_redo)
        m_edit.addSeparator()
        m_edit.addAction(self.act_settings)

        m_sim = self.menuBar().addMenu("Simulation")
        for act in (self.act_animate, self.act_step_back, self.act_step_fwd, self.act_reset, self.act_sweep_plot):
            m_sim.addAction(act)

        m_view = self.menuBar().addMenu("View")
        m_view.addAction(self.act_fit)

    def _build_toolbar(self):
        tb = QToolBar("Simulation", self)
        tb.setMovable(False)
        for act in (self.act_animate, self.act_step_back, self.act_step_fwd, self.act_reset, self.act_sweep_plot):
            tb.addAction(act)
        self.addToolBar(tb)

    def update_undo_redo_actions(self):
        if not hasattr(self, "act_undo"):
            return
        running = self.ctrl.animator.running
        self.act_undo.setEnabled(self.ctrl.stack.can_undo() and not running)
        self.act_redo.setEnabled(self.ctrl.stack.can_redo() and not running)
        undo_text = self.ctrl.stack.undo_text()
        redo_text = self.ctrl.stack.redo_text()
        self.act_undo.setText(f"Undo {undo_text}" if undo_text else "Undo")
        self.act_redo.setText(f"Redo {redo_text}" if redo_text else "Redo")

    # ---------------- simulation ----------------
    def set_animating(self, on: bool):
        self.ctrl.set_animating(bool(on))
        if on:
            self._timer.start(int(self.ctrl.simulation_settings["tick_ms"]))
        else:
            self._timer.stop()
        for act in (self.act_step_fwd, self.act_step_back, self.act_reset, self.act_open, self.act_new):
            act.setEnabled(not on)
        self.update_undo_redo_actions()

    def stop_animation(self):
        if self.act_animate.isChecked():
            self.act_animate.setChecked(False)

    @safe_slot
    def _on_tick(self):
        self.ctrl.tick()

    def step_once(self, direction: int):
        self.ctrl.step_once(direction)

    def reset_linkage(self):
        self.ctrl.commit_drag_if_any()
        self.ctrl.reset_linkage()

    def undo(self):
        if self.ctrl.animator.running:
            return
        self.ctrl.stack.undo()

    def redo(self):
        if self.ctrl.animator.running:
            return
        self.ctrl.stack.redo()

    def open_sweep_plot(self):
        frames, summary, status = simulate_revolution(self.ctrl.state, self.ctrl.simulation_settings)
        if not status["success"]:
            self.statusBar().showMessage(f"Sweep: {summary['blocked_steps']} steps blocked ({status['reason']})")
        win = PlotWindow(frames, summary)
        win.show()
        self._plot_windows = [w for w in self._plot_windows if w.isVisible()]
        self._plot_windows.append(win)

    def open_settings(self):
        dlg = SettingsDialog(self.ctrl, self)
        if dlg.exec():
            self.ctrl.apply_settings(dlg.simulation_settings(), dlg.display_settings())
            if self._timer.isActive():
                self._timer.setInterval(int(self.ctrl.simulation_settings["tick_ms"]))

    # ---------------- files ----------------
    def file_new(self):
        self.stop_animation()
        self.ctrl.commit_drag_if_any()
        self.ctrl.new_linkage()
        self.current_file = None

    def file_open(self):
        self.stop_animation()
        self.ctrl.commit_drag_if_any()
        path, _ = QFileDialog.getOpenFileName(self, "Open Linkage", "", "Linkage JSON (*.json);;All Files (*)")
        if not path:
            return
        self.open_path(path)

    def open_path(self, path: str) -> bool:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.ctrl.load_dict(data)
        except Exception as e:
            QMessageBox.critical(self, "Open failed", str(e))
            return False
        self.current_file = path
        self.view.fit_all()
        return True

    def file_save(self):
        self.ctrl.commit_drag_if_any()
        if self.ctrl.animator.running:
            QMessageBox.information(self, "Save", "Stop the animation before saving.")
            return
        if not self.current_file:
            return self.file_save_as()
        try:
            with open(self.current_file, "w", encoding="utf-8") as f:
                json.dump(self.ctrl.to_dict(), f, ensure_ascii=False, indent=2)
        except Exception as e:
            QMessageBox.critical(self, "Save failed", str(e))

    def file_save_as(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save Linkage As", "", "Linkage JSON (*.json)")
        if not path:
            return
        if not path.lower().endswith(".json"):
            path += ".json"
        self.current_file = path
        self.file_save()

    def export_curve_csv(self):
        curve = self.ctrl.curve
        if curve is None or len(curve) == 0:
            QMessageBox.information(self, "Export", "No coupler curve to export.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export Coupler Curve", "", "CSV (*.csv)")
        if not path:
            return
        if not path.lower().endswith(".csv"):
            path += ".csv"
        try:
            write_curve_csv(path, curve.points)
        except Exception as e:
            QMessageBox.critical(self, "Export failed", str(e))

    def export_sweep_csv(self):
        path, _ = QFileDialog.getSaveFileName(self, "Export Sweep", "", "CSV (*.csv)")
        if not path:
            return
        if not path.lower().endswith(".csv"):
            path += ".csv"
        try:
            frames, _summary, _status = simulate_revolution(self.ctrl.state, self.ctrl.simulation_settings)
            write_frames_csv(path, frames)
        except Exception as e:
            QMessageBox.critical(self, "Export failed", str(e))

    def closeEvent(self, e):
        self._timer.stop()
        for w in self._plot_windows:
            w.close()
        super().closeEvent(e)
