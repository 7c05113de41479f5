"""
Balloon Screen (Controller)
===========================
Builds and drives one balloon screen, independent of any widget.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root of the demo. It:
1. Instantiates the Scene (owner of the balloons) and the DynamicAnimator.
2. Instantiates the EscapeContext and the SpotManager, handing both the
   shared animator and the Scheduler.
3. Owns the frame clock and exposes Qt signals so a view can repaint and
   switch to the black hole / "The End" states.

The widget layer only translates mouse input into `pan` / `tap_at` calls and
paints what `scene` contains.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional

import numpy as np
from PySide6.QtCore import QObject, Signal, Slot

from balloonspots.config import DemoConfig
from balloonspots.controller.scheduler import ScheduledTask, Scheduler
from balloonspots.model.balloon import Balloon
from balloonspots.model.geometry import Point, Rect, Vector
from balloonspots.model.scene import Scene
from balloonspots.physics.animator import DynamicAnimator
from balloonspots.spots.escape import EscapeContext
from balloonspots.spots.gestures import PanGesture
from balloonspots.spots.manager import SpotManager

logger = logging.getLogger(__name__)


class Phase(IntEnum):
    """The stages of the demo."""
    CREATED = 0
    READY = 1
    RUNNING = 2
    BLACK_HOLE = 3
    FINISHED = 4


class BalloonScreen(QObject):
    phase_changed = Signal(int)
    stepped = Signal()
    black_hole_shown = Signal()
    finished = Signal()

    def __init__(
        self,
        bounds: Rect,
        config: DemoConfig = DemoConfig(),
        seed: Optional[int] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.bounds = bounds
        self.config = config
        self.phase = Phase.CREATED

        offset = Vector(*config.start_offset)
        self.starting_point: Point = bounds.center + offset
        self.radius: float = bounds.width / config.radius_divisor

        self.scene = Scene(bounds)
        self.animator = DynamicAnimator(reference_bounds=bounds)
        self.scheduler = Scheduler(self)
        self.escape = EscapeContext(
            self.animator,
            bounds=bounds,
            black_hole_center=self.starting_point,
            params=config.escape,
        )
        self.manager = SpotManager(
            self.animator,
            self.escape,
            self.scheduler,
            rng=np.random.default_rng(seed),
            field_params=config.spring,
            damping_params=config.damping,
            parent=self,
        )
        self._clock: Optional[ScheduledTask] = None

    # ------------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------------

    def setup(self) -> None:
        """Add the balloons and fan them out around the starting point."""
        self.manager.setup(
            self.config.angles,
            center=self.starting_point,
            radius=self.radius,
            balloon_factory=self._make_balloon,
        )
        self._set_phase(Phase.READY)

    def start(self) -> None:
        """Start the frame clock and, after the grace period, the shuffling."""
        if self.phase is Phase.CREATED:
            self.setup()
        if self.phase is not Phase.READY:
            logger.warning(f"Cannot start a screen in phase {self.phase.name}.")
            return

        self._clock = self.scheduler.call_repeating(self.config.frame_interval, self._on_frame, name="frame")
        self.manager.start_shuffling(self.config.grace_period, self.config.shuffle_interval)
        self._set_phase(Phase.RUNNING)

    def stop(self) -> None:
        """Cancel every timer. The scene keeps its balloons."""
        self.scheduler.cancel_all()
        self._clock = None

    def teardown(self) -> None:
        """Stop, release every spot and balloon and leave the animator empty."""
        self.stop()
        self.manager.teardown()
        self.escape.clear()
        self.animator.remove_all_behaviors()
        self.scene.clear()

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def pan(self, gesture: PanGesture) -> None:
        self.manager.handle_pan(gesture)

    def tap_at(self, point: Point) -> Optional[Balloon]:
        """Tap the top-most balloon under `point`, if any."""
        balloon = self.scene.balloon_at(point)
        if balloon is not None:
            balloon.tap()
        return balloon

    @Slot()
    def trigger_black_hole(self) -> list[Balloon]:
        if self.phase >= Phase.BLACK_HOLE:
            logger.warning("Black hole already triggered.")
            return []
        absorbed = self.manager.trigger_escape(self.config.cleanup_delay, self._finish)
        self._set_phase(Phase.BLACK_HOLE)
        self.black_hole_shown.emit()
        return absorbed

    # ------------------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------------------

    def tick(self, dt: float) -> None:
        self.animator.step(dt)
        self.stepped.emit()

    def _on_frame(self) -> None:
        self.tick(self.config.frame_interval)

    # ------------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------------

    def _make_balloon(self, center: Point) -> Balloon:
        width, height = self.config.balloon_size
        return self.scene.add(Balloon(center=center, width=width, height=height))

    def _finish(self) -> None:
        removed = 0
        for balloon in self.scene:
            self.escape.discard(balloon)
            self.scene.remove(balloon)
            removed += 1
        self._set_phase(Phase.FINISHED)
        logger.info(f"The end: {removed} balloons removed from the scene.")
        self.finished.emit()

    def _set_phase(self, phase: Phase) -> None:
        if phase != self.phase:
            self.phase = phase
            self.phase_changed.emit(int(phase))
