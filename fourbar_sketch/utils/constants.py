# -*- coding: utf-8 -*-
"""Drawing constants and colors."""

from PyQt6.QtGui import QColor

TRACER_RADIUS = 5.0
PICK_MARGIN = 10.0

SUPPORT_TRIANGLE_WIDTH = 50.0
SUPPORT_TRIANGLE_HEIGHT = 30.0
SUPPORT_BASE_WIDTH = 70.0
SUPPORT_LINE_HEIGHT = 20.0
SUPPORT_LINE_WIDTH = 5.0
SUPPORT_LINE_MARGIN = 1.0
SUPPORT_LINE_COUNT = 5

INK = QColor(0, 0, 0, 153)
PAPER = QColor(255, 255, 255)
CURVE = QColor(255, 0, 0, 153)
HILITE = QColor(0, 120, 255)
BLOCKED = QColor(220, 60, 60)
