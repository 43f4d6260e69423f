# -*- coding: utf-8 -*-
"""Plot window for crank sweep data.

Features:
- Choose X axis: Crank angle / Frame / any recorded column
- Choose one or multiple Y series
- "Tracer path" plots tracer_x against tracer_y in sketch orientation
- Export SVG and CSV
"""

from __future__ import annotations

import csv
from typing import Any, Dict, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QFileDialog, QMessageBox, QComboBox, QListWidget,
    QListWidgetItem
)

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from ..core.headless_sim import frames_to_array

TRACER_PATH = "__tracer_path__"

LABELS = {
    "frame": "Frame",
    "crank_deg": "Crank (deg)",
    "rocker_deg": "Rocker (deg)",
    "coupler_deg": "Coupler (deg)",
    "tracer_x": "Tracer x",
    "tracer_y": "Tracer y",
}


class PlotWindow(QMainWindow):
    def __init__(self, records: List[Dict[str, Any]], summary: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.setWindowTitle("Crank sweep")
        self.resize(1000, 650)

        self._records: List[Dict[str, Any]] = records or []
        self._summary: Dict[str, Any] = summary or {}
        self._last_x_key: Optional[str] = None
        self._last_y_keys: List[str] = []

        root = QWidget(self)
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)

        ctrl = QHBoxLayout()
        ctrl.addWidget(QLabel("X:"))
        self.cb_x = QComboBox()
        ctrl.addWidget(self.cb_x, 1)

        ctrl.addWidget(QLabel("Y:"))
        self.lst_y = QListWidget()
        self.lst_y.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self.lst_y.setMaximumHeight(130)
        ctrl.addWidget(self.lst_y, 2)

        btn_col = QVBoxLayout()
        self.btn_plot = QPushButton("Plot")
        self.btn_export_svg = QPushButton("Export SVG")
        self.btn_export_csv = QPushButton("Export CSV")
        btn_col.addWidget(self.btn_plot)
        btn_col.addWidget(self.btn_export_svg)
        btn_col.addWidget(self.btn_export_csv)
        btn_col.addStretch(1)
        ctrl.addLayout(btn_col)
        layout.addLayout(ctrl)

        self.lbl_summary = QLabel(self._summary_text())
        layout.addWidget(self.lbl_summary)

        self.fig = Figure(figsize=(6, 4))
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvas(self.fig)
        layout.addWidget(self.canvas, 1)

        self.btn_plot.clicked.connect(self.plot)
        self.btn_export_svg.clicked.connect(self.export_svg)
        self.btn_export_csv.clicked.connect(self.export_csv)

        self._populate_axes_options()
        if self._records:
            self.plot()

    def _summary_text(self) -> str:
        if not self._summary:
            return ""
        return (
            f"{self._summary.get('classification', '')}: "
            f"{self._summary.get('n_steps', 0)} steps, "
            f"{self._summary.get('blocked_steps', 0)} blocked, "
            f"max length drift {float(self._summary.get('max_length_drift', 0.0)):.3g}"
        )

    def _populate_axes_options(self):
        self.cb_x.clear()
        self.lst_y.clear()

        if not self._records:
            self.cb_x.addItem("(no data)", None)
            return

        self.cb_x.addItem("Tracer path (x vs y)", TRACER_PATH)
        for k in ("crank_deg", "frame", "rocker_deg", "coupler_deg"):
            self.cb_x.addItem(LABELS[k], k)

        for k in ("rocker_deg", "coupler_deg", "tracer_x", "tracer_y"):
            it = QListWidgetItem(LABELS[k])
            it.setData(Qt.ItemDataRole.UserRole, k)
            it.setFlags(it.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            it.setCheckState(Qt.CheckState.Checked if k == "rocker_deg" else Qt.CheckState.Unchecked)
            self.lst_y.addItem(it)

        idx = self.cb_x.findData("crank_deg")
        if idx >= 0:
            self.cb_x.setCurrentIndex(idx)

    def _selected_y_keys(self) -> List[str]:
        ys: List[str] = []
        for i in range(self.lst_y.count()):
            it = self.lst_y.item(i)
            if it.checkState() == Qt.CheckState.Checked:
                k = it.data(Qt.ItemDataRole.UserRole)
                if k:
                    ys.append(str(k))
        return ys

    def plot(self):
        if not self._records:
            QMessageBox.information(self, "Plot", "No sweep data yet. Run a sweep first.")
            return

        x_key = self.cb_x.currentData()
        if not x_key:
            return

        self.ax.clear()
        if x_key == TRACER_PATH:
            self._last_x_key = "tracer_x"
            self._last_y_keys = ["tracer_y"]
            data = frames_to_array(self._records, ["tracer_x", "tracer_y"])
            self.ax.plot(data[:, 0], data[:, 1], color="red")
            self.ax.set_aspect("equal", adjustable="datalim")
            # Sketch coordinates grow downwards.
            self.ax.invert_yaxis()
            self.ax.set_xlabel("x")
            self.ax.set_ylabel("y")
        else:
            y_keys = self._selected_y_keys()
            if not y_keys:
                QMessageBox.information(self, "Plot", "Please check at least one Y series.")
                return
            self._last_x_key = str(x_key)
            self._last_y_keys = [str(k) for k in y_keys]
            data = frames_to_array(self._records, [self._last_x_key] + self._last_y_keys)
            self.ax.set_aspect("auto")
            for j, k in enumerate(self._last_y_keys, start=1):
                self.ax.plot(data[:, 0], data[:, j], label=LABELS.get(k, k))
            self.ax.set_xlabel(self.cb_x.currentText())
            self.ax.set_ylabel("Value")
            if len(self._last_y_keys) > 1:
                self.ax.legend()
        self.ax.grid(True)
        self.canvas.draw_idle()

    def export_svg(self):
        if not self._records:
            QMessageBox.information(self, "Export", "No data to export.")
            return
        if self._last_x_key is None:
            self.plot()
        path, _ = QFileDialog.getSaveFileName(self, "Export SVG", "", "SVG (*.svg)")
        if not path:
            return
        if not path.lower().endswith(".svg"):
            path += ".svg"
        try:
            self.fig.savefig(path, format="svg")
        except Exception as e:
            QMessageBox.critical(self, "Export failed", str(e))

    def export_csv(self):
        if not self._records:
            QMessageBox.information(self, "Export", "No data to export.")
            return
        if self._last_x_key is None:
            self.plot()
        if self._last_x_key is None:
            return

        path, _ = QFileDialog.getSaveFileName(self, "Export CSV", "", "CSV (*.csv)")
        if not path:
            return
        if not path.lower().endswith(".csv"):
            path += ".csv"
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                w = csv.writer(f)
                w.writerow([self._last_x_key] + self._last_y_keys)
                for r in self._records:
                    w.writerow([r.get(self._last_x_key)] + [r.get(k) for k in self._last_y_keys])
        except Exception as e:
            QMessageBox.critical(self, "Export failed", str(e))
