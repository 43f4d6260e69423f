# -*- coding: utf-8 -*-
"""Application entry point.

Usage: ``fourbar-sketch [linkage.json]``
"""

from __future__ import annotations

import sys
from PyQt6.QtWidgets import QApplication

from .ui.main_window import MainWindow


def main(argv=None):
    argv = list(sys.argv if argv is None else argv)
    app = QApplication(argv)
    w = MainWindow()
    if len(argv) > 1:
        w.open_path(argv[1])
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
