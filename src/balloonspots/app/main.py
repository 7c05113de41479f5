"""
Window bootstrap. Run with: python -m balloonspots
"""
from __future__ import annotations

import sys

from balloonspots.app.application import create_app
from balloonspots.app.ui.main_window import MainWindow
from balloonspots.config import DemoConfig
from balloonspots.controller.screen import BalloonScreen
from balloonspots.model.geometry import Rect


def main(
    width: float = 414.0,
    height: float = 820.0,
    seed: int | None = None,
    config: DemoConfig | None = None,
) -> int:
    """Main entry point for the application."""
    app = create_app()

    if config is None:
        from PySide6.QtCore import QSettings
        config = DemoConfig.from_settings(QSettings())

    screen = BalloonScreen(Rect(0.0, 0.0, width, height), config=config, seed=seed)
    win = MainWindow(screen)
    screen.start()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
