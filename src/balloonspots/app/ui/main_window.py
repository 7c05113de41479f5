"""
Main window: the balloon canvas plus the black hole button.
"""
from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QMainWindow, QPushButton, QVBoxLayout, QWidget

from balloonspots.app.application import VISIBLE_APP_NAME
from balloonspots.app.ui.canvas import BalloonCanvas
from balloonspots.controller.screen import BalloonScreen


class MainWindow(QMainWindow):
    def __init__(self, screen: BalloonScreen) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.screen = screen

        central = QWidget(self)
        v = QVBoxLayout(central)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)

        self.canvas = BalloonCanvas(screen, central)
        v.addWidget(self.canvas, 1)

        self.black_hole_button = QPushButton(self.tr("Black hole"), central)
        self.black_hole_button.clicked.connect(self._on_black_hole_clicked)
        v.addWidget(self.black_hole_button, 0)

        self.setCentralWidget(central)
        self.statusBar().showMessage(self.tr("Drag up/down to spread the balloons, click one to let it go."))

        screen.finished.connect(lambda: self.statusBar().showMessage(self.tr("The End")))

    @Slot()
    def _on_black_hole_clicked(self) -> None:
        self.black_hole_button.hide()
        self.screen.trigger_black_hole()

    def closeEvent(self, event) -> None:
        self.screen.stop()
        super().closeEvent(event)
