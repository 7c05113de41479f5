from __future__ import annotations

import math
import os

import numpy as np
import pytest
from PySide6.QtWidgets import QApplication

from balloonspots.controller.scheduler import Scheduler
from balloonspots.model.balloon import Balloon
from balloonspots.model.geometry import Point, Rect
from balloonspots.physics.animator import DynamicAnimator
from balloonspots.spots.escape import EscapeContext
from balloonspots.spots.manager import SpotManager

# Widgets are created in tests; no display is needed
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

BOUNDS = Rect(0.0, 0.0, 400.0, 800.0)
CENTER = Point(200.0, 385.0)
RADIUS = 160.0
ANGLES = [k * math.pi / 4 for k in range(8)]


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Timers and widgets need one application for the whole run."""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def animator() -> DynamicAnimator:
    return DynamicAnimator(reference_bounds=BOUNDS)


@pytest.fixture
def escape(animator) -> EscapeContext:
    return EscapeContext(animator, bounds=BOUNDS, black_hole_center=CENTER)


@pytest.fixture
def scheduler():
    s = Scheduler()
    yield s
    s.cancel_all()


@pytest.fixture
def make_manager(animator, escape, scheduler):
    """Build a set-up manager with `count` evenly spaced spots."""
    def factory(count: int = 8, seed: int = 0) -> SpotManager:
        manager = SpotManager(animator, escape, scheduler, rng=np.random.default_rng(seed))
        angles = [2.0 * math.pi * k / count for k in range(count)]
        manager.setup(angles, center=CENTER, radius=RADIUS, balloon_factory=lambda c: Balloon(center=c))
        return manager
    return factory
