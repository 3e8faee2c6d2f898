"""Application bootstrap for the shapedrag playground."""
from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QStatusBar, QToolBar

from shapedrag_core.config import EngineConfig, load_config
from shapedrag_core.scene import default_scene

from .canvas import ShapeCanvas


class Main(QMainWindow):
    """Top-level window wiring the canvas to a toolbar and status bar."""

    def __init__(self, config: Optional[EngineConfig] = None):
        super().__init__()
        self.setWindowTitle("shapedrag playground")
        self.config = config or EngineConfig()

        self.canvas = ShapeCanvas(default_scene(self.config))
        self.setCentralWidget(self.canvas)

        bar = QStatusBar()
        bar.setSizeGripEnabled(False)
        self.setStatusBar(bar)
        self._status_label = QLabel("No selection")
        bar.addPermanentWidget(self._status_label)
        self.canvas.status_changed.connect(self._status_label.setText)

        self._make_toolbar()

    def _make_toolbar(self) -> None:
        toolbar = QToolBar("Scene")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        reset = QAction("Reset", self)
        reset.setToolTip("Restore the demo shapes.")
        reset.triggered.connect(self._reset_scene)
        toolbar.addAction(reset)

        clamp = QAction("Clamp to canvas", self)
        clamp.setCheckable(True)
        clamp.setChecked(self.config.clamp_to_canvas_bounds)
        clamp.setToolTip("Keep dragged points inside the canvas.")
        clamp.toggled.connect(self._set_clamp)
        toolbar.addAction(clamp)

        carry = QAction("Center carries edge", self)
        carry.setCheckable(True)
        carry.setChecked(self.config.circle_center_drags_edge)
        carry.setToolTip("Dragging a circle's center moves the whole circle.")
        carry.toggled.connect(self._set_center_carry)
        toolbar.addAction(carry)

    def _reset_scene(self) -> None:
        self.canvas.set_scene(default_scene(self.config))

    def _set_clamp(self, enabled: bool) -> None:
        # controllers share this config object
        self.config.clamp_to_canvas_bounds = bool(enabled)

    def _set_center_carry(self, enabled: bool) -> None:
        self.config.circle_center_drags_edge = bool(enabled)


def main(argv: Iterable[str] | None = None) -> int:  # pragma: no cover - GUI entry point
    parser = argparse.ArgumentParser(prog="shapedrag-playground", description="Interactive shapedrag canvas")
    parser.add_argument("--config", help="Path to an engine config JSON file")
    args = parser.parse_args(argv)
    app = QApplication.instance() or QApplication(sys.argv)
    window = Main(load_config(args.config))
    window.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - GUI entry point
    raise SystemExit(main())
