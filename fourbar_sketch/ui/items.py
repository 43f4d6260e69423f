# -*- coding: utf-8 -*-
"""Graphics items used in the QGraphicsScene.

Items never change the model; they only mirror ``ctrl.state``. Dragging is
handled by the view through ``ctrl.pick_joint`` so the pick radius is larger
than the drawn joint.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from PyQt6.QtCore import Qt, QPointF, QLineF
from PyQt6.QtGui import QPen, QPainterPath, QBrush
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsPathItem,
)

from ..utils.constants import (
    BLOCKED,
    CURVE,
    HILITE,
    INK,
    PAPER,
    SUPPORT_BASE_WIDTH,
    SUPPORT_LINE_COUNT,
    SUPPORT_LINE_HEIGHT,
    SUPPORT_LINE_MARGIN,
    SUPPORT_LINE_WIDTH,
    SUPPORT_TRIANGLE_HEIGHT,
    SUPPORT_TRIANGLE_WIDTH,
    TRACER_RADIUS,
)

if TYPE_CHECKING:
    from ..core.controller import LinkageController
    from ..core.curve import CouplerCurve


def _ink_pen(width: float) -> QPen:
    pen = QPen(INK, width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    return pen


class JointItem(QGraphicsEllipseItem):
    """Moving joint (or tracer point) drawn as a white disc."""

    def __init__(self, name: str, ctrl: "LinkageController"):
        super().__init__()
        self.name = name
        self.ctrl = ctrl
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setAcceptHoverEvents(False)
        self.setZValue(20 if name == "tracer_point" else 10)
        self.setBrush(QBrush(PAPER))
        self.apply_display_settings()

    def radius(self) -> float:
        if self.name == "tracer_point":
            return TRACER_RADIUS
        return float(self.ctrl.display_settings["joint_radius"])

    def apply_display_settings(self):
        r = self.radius()
        self.setRect(-r, -r, 2 * r, 2 * r)

    def update_position(self):
        p = self.ctrl.state.joint(self.name)
        self.setPos(QPointF(p.x, p.y))

    def sync_style(self):
        width = float(self.ctrl.display_settings["stroke_width"])
        if self.ctrl.selected_joint == self.name and not self.ctrl.animator.running:
            self.setPen(QPen(HILITE, 2 * width))
        else:
            self.setPen(_ink_pen(width))


class SupportItem(JointItem):
    """Ground pivot: joint disc plus the hatched support triangle underneath."""

    def __init__(self, name: str, ctrl: "LinkageController"):
        super().__init__(name, ctrl)
        self._support = QGraphicsPathItem(self)
        self._support.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self._support.setFlag(QGraphicsItem.GraphicsItemFlag.ItemStacksBehindParent, True)
        self._rebuild_support()

    def apply_display_settings(self):
        super().apply_display_settings()
        if hasattr(self, "_support"):
            self._rebuild_support()

    def _rebuild_support(self):
        r = self.radius()
        k = r / math.sqrt(2.0)
        path = QPainterPath()
        path.moveTo(-k, k)
        path.lineTo(-SUPPORT_TRIANGLE_WIDTH / 2.0, SUPPORT_TRIANGLE_HEIGHT)
        path.moveTo(k, k)
        path.lineTo(SUPPORT_TRIANGLE_WIDTH / 2.0, SUPPORT_TRIANGLE_HEIGHT)
        path.moveTo(-SUPPORT_BASE_WIDTH / 2.0, SUPPORT_TRIANGLE_HEIGHT)
        path.lineTo(SUPPORT_BASE_WIDTH / 2.0, SUPPORT_TRIANGLE_HEIGHT)
        for i in range(SUPPORT_LINE_COUNT):
            x0 = (
                -SUPPORT_BASE_WIDTH / 2.0
                + SUPPORT_LINE_MARGIN
                + (i / SUPPORT_LINE_COUNT) * (SUPPORT_BASE_WIDTH - SUPPORT_LINE_MARGIN)
            )
            y0 = SUPPORT_TRIANGLE_HEIGHT + SUPPORT_LINE_HEIGHT
            path.moveTo(x0, y0)
            path.lineTo(x0 + SUPPORT_LINE_WIDTH, y0 - SUPPORT_LINE_HEIGHT)
        self._support.setPath(path)

    def sync_style(self):
        super().sync_style()
        self._support.setPen(_ink_pen(float(self.ctrl.display_settings["stroke_width"])))


class LinkItem(QGraphicsLineItem):
    def __init__(self, a: str, b: str, ctrl: "LinkageController"):
        super().__init__()
        self.a = a
        self.b = b
        self.ctrl = ctrl
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setZValue(0)

    def update_position(self):
        pa = self.ctrl.state.joint(self.a)
        pb = self.ctrl.state.joint(self.b)
        self.setLine(QLineF(pa.x, pa.y, pb.x, pb.y))
        self.setPen(_ink_pen(float(self.ctrl.display_settings["stroke_width"])))


class CouplerPlateItem(QGraphicsPathItem):
    """Rocker joint -> tracer -> crank joint outline of the coupler body."""

    def __init__(self, ctrl: "LinkageController"):
        super().__init__()
        self.ctrl = ctrl
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setZValue(1)

    def update_position(self):
        st = self.ctrl.state
        path = QPainterPath(QPointF(st.rocker_joint.x, st.rocker_joint.y))
        path.lineTo(st.tracer_point.x, st.tracer_point.y)
        path.lineTo(st.crank_joint.x, st.crank_joint.y)
        self.setPath(path)
        self.setPen(_ink_pen(float(self.ctrl.display_settings["stroke_width"])))


class CouplerCurveItem(QGraphicsPathItem):
    def __init__(self, ctrl: "LinkageController"):
        super().__init__()
        self.ctrl = ctrl
        self.setZValue(-5)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setBrush(QBrush(Qt.BrushStyle.NoBrush))

    def set_curve(self, curve: Optional["CouplerCurve"]):
        path = QPainterPath()
        if curve is not None:
            for run in curve.segments():
                if len(run) < 2:
                    continue
                path.moveTo(run[0].x, run[0].y)
                for p in run[1:]:
                    path.lineTo(p.x, p.y)
        self.setPath(path)
        color = CURVE if curve is None or curve.complete else BLOCKED
        pen = QPen(color, 1.5 * float(self.ctrl.display_settings["stroke_width"]))
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        self.setPen(pen)
