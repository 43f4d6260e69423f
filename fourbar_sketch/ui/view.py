# -*- coding: utf-8 -*-
"""Graphics view interaction (joint drag, pan, zoom)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QGraphicsView, QGraphicsScene

from ..utils.qt_safe import safe_event

if TYPE_CHECKING:
    from ..core.controller import LinkageController


class LinkageView(QGraphicsView):
    def __init__(self, scene: QGraphicsScene, ctrl: "LinkageController"):
        super().__init__(scene)
        self.ctrl = ctrl
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.NoContextMenu)

        self._lmb_drag = False
        self._rmb_pan = False
        self._pan_start = QPointF()

    def wheelEvent(self, e):
        f = 1.25 if e.angleDelta().y() > 0 else 0.8
        self.scale(f, f)

    @safe_event
    def mousePressEvent(self, e):
        if e.button() == Qt.MouseButton.LeftButton:
            sp = self.mapToScene(e.position().toPoint())
            self._lmb_drag = self.ctrl.begin_drag(sp.x(), sp.y())
            if self._lmb_drag:
                self.setCursor(Qt.CursorShape.ClosedHandCursor)
            self.ctrl.update_status()
            e.accept(); return
        if e.button() == Qt.MouseButton.RightButton:
            self.ctrl.commit_drag_if_any()
            self._rmb_pan = True
            self._pan_start = e.position()
            self.setCursor(Qt.CursorShape.SizeAllCursor)
            e.accept(); return
        super().mousePressEvent(e)

    @safe_event
    def mouseMoveEvent(self, e):
        if self._lmb_drag:
            sp = self.mapToScene(e.position().toPoint())
            self.ctrl.on_drag_update(sp.x(), sp.y())
            e.accept(); return
        if self._rmb_pan:
            delta = e.position() - self._pan_start
            self.horizontalScrollBar().setValue(self.horizontalScrollBar().value() - int(delta.x()))
            self.verticalScrollBar().setValue(self.verticalScrollBar().value() - int(delta.y()))
            self._pan_start = e.position()
            e.accept(); return
        super().mouseMoveEvent(e)

    @safe_event
    def mouseReleaseEvent(self, e):
        if e.button() == Qt.MouseButton.LeftButton and self._lmb_drag:
            self._lmb_drag = False
            self.ctrl.commit_drag_if_any()
            self.setCursor(Qt.CursorShape.ArrowCursor)
            e.accept(); return
        if e.button() == Qt.MouseButton.RightButton and self._rmb_pan:
            self._rmb_pan = False
            self.setCursor(Qt.CursorShape.ArrowCursor)
            e.accept(); return
        super().mouseReleaseEvent(e)

    @safe_event
    def keyPressEvent(self, e):
        if e.key() == Qt.Key.Key_Escape:
            self.ctrl.commit_drag_if_any()
            self._lmb_drag = False
            e.accept()
            return
        super().keyPressEvent(e)

    def fit_all(self):
        rect = self.scene().itemsBoundingRect()
        if rect.isNull():
            return
        pad = 40
        r = QRectF(rect.left() - pad, rect.top() - pad, rect.width() + 2 * pad, rect.height() + 2 * pad)
        self.fitInView(r, Qt.AspectRatioMode.KeepAspectRatio)
