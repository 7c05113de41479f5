"""
Spot Manager
============
Owns the ordered ring of spots and orchestrates what happens to their
balloons: fan-out at setup, periodic shuffling, drag-to-spread, tap-to-release
and the final black hole.

All methods run on the Qt event loop thread.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QObject, Signal, Slot

from balloonspots.config import DampingParams, FieldParams
from balloonspots.model.geometry import Point, Vector
from balloonspots.spots.gestures import GestureState, PanGesture
from balloonspots.spots.spot import Spot

if TYPE_CHECKING:
    from balloonspots.controller.scheduler import ScheduledTask, Scheduler
    from balloonspots.model.balloon import Balloon
    from balloonspots.physics.animator import DynamicAnimator
    from balloonspots.spots.escape import EscapeContext

logger = logging.getLogger(__name__)

BalloonFactory = Callable[[Point], "Balloon"]


class SpotManager(QObject):
    shuffled = Signal(list)     # target index per detached balloon
    released = Signal(object)   # balloon handed to the fly-away forces
    escaped = Signal(list)      # balloons handed to the black hole

    def __init__(
        self,
        animator: DynamicAnimator,
        escape: EscapeContext,
        scheduler: Scheduler,
        rng: Optional[np.random.Generator] = None,
        field_params: FieldParams = FieldParams(),
        damping_params: DampingParams = DampingParams(),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._animator = animator
        self._escape = escape
        self._scheduler = scheduler
        self._rng = rng if rng is not None else np.random.default_rng()
        self._field_params = field_params
        self._damping_params = damping_params

        self._spots: list[Spot] = []
        self._grace_task: Optional[ScheduledTask] = None
        self._shuffle_task: Optional[ScheduledTask] = None
        self._cleanup_task: Optional[ScheduledTask] = None
        self._escaped = False

    # ------------------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------------------

    @property
    def spots(self) -> list[Spot]:
        return list(self._spots)

    @property
    def has_escaped(self) -> bool:
        return self._escaped

    @property
    def shuffle_task(self) -> Optional[ScheduledTask]:
        return self._shuffle_task

    @property
    def cleanup_task(self) -> Optional[ScheduledTask]:
        return self._cleanup_task

    def balloons(self) -> list[Optional[Balloon]]:
        """Balloon held by each spot, in spot order."""
        return [spot.balloon for spot in self._spots]

    # ------------------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------------------

    def setup(
        self,
        angles: Iterable[float],
        center: Point,
        radius: float,
        balloon_factory: BalloonFactory,
    ) -> list[Spot]:
        """
        Create one spot per angle at `center`, give each a fresh balloon and
        fan it out by moving it by (-radius, -radius).

        Since only the vertical part of a move counts, every spot ends at
        `center + radius * (cos(angle), sin(angle))`.
        """
        if self._spots:
            raise RuntimeError("Spots are already set up.")

        for angle in angles:
            spot = Spot(
                self._animator,
                direction_angle=angle,
                center=center,
                field_params=self._field_params,
                damping_params=self._damping_params,
                parent=self,
            )
            spot.interacted.connect(self.handle_interaction)
            spot.assign(balloon_factory(center))
            spot.move(Vector(-radius, -radius))
            self._spots.append(spot)

        logger.info(f"Set up {len(self._spots)} spots around ({center.x:.1f}, {center.y:.1f}), radius {radius:.1f}.")
        return self.spots

    def teardown(self) -> None:
        self._cancel_shuffling()
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
        for spot in self._spots:
            spot.interacted.disconnect(self.handle_interaction)
            spot.teardown()
        self._spots.clear()

    # ------------------------------------------------------------------------------
    # Shuffle
    # ------------------------------------------------------------------------------

    def shuffle_targets(self, size: int) -> list[int]:
        """
        Draw the new spot index for each detached balloon.

        The first balloon is never sent back to slot 0 (for size > 1). The
        other indexes are only required to be unique, so those balloons may
        land where they already were.
        """
        first_index = int(self._rng.integers(0, size))
        changed_indexes = [size - 1 if first_index == 0 else first_index]

        while len(changed_indexes) != size:
            new_index = first_index
            while new_index in changed_indexes:
                new_index = int(self._rng.integers(0, size))
            changed_indexes.append(new_index)

        return changed_indexes

    @Slot()
    def shuffle(self) -> list[int]:
        """
        Move the balloons to other spots.

        Returns:
            The drawn target indexes. The i-th detached balloon goes to the
            i-th index; with empty spots the tail is unused.
        """
        if not self._spots:
            logger.debug("Shuffle skipped: no spots.")
            return []

        changed_indexes = self.shuffle_targets(len(self._spots))

        # Empty spots contribute nothing; pairing stays positional
        detached = [b for b in (spot.remove_item() for spot in self._spots) if b is not None]
        for balloon, new_index in zip(detached, changed_indexes):
            self._spots[new_index].assign(balloon)

        logger.debug(f"Shuffled {len(detached)} balloons to {changed_indexes[:len(detached)]}.")
        self.shuffled.emit(changed_indexes[:len(detached)])
        return changed_indexes

    def start_shuffling(self, grace_period: float, interval: float) -> None:
        """Shuffle once after `grace_period`, then every `interval` seconds."""
        if self._escaped:
            logger.warning("Shuffling not started: the black hole is already open.")
            return
        self._cancel_shuffling()

        def begin_periodic() -> None:
            self._shuffle_task = self._scheduler.call_repeating(interval, self.shuffle, name="shuffle")
            self._shuffle_task.fire()
            logger.info(f"Shuffling every {interval:g} s.")

        self._grace_task = self._scheduler.call_later(grace_period, begin_periodic, name="shuffle-grace")

    # ------------------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------------------

    @Slot(object, object)
    def handle_interaction(self, balloon: Balloon, spot: Spot) -> None:
        """A held balloon was tapped: take it out of its spot and let it fly away."""
        if spot.balloon is not balloon:
            logger.debug(f"Balloon {balloon.ident} is no longer held by {spot!r}; ignoring tap.")
            return
        spot.remove_item()
        self._escape.release(balloon)
        self.released.emit(balloon)

    def handle_pan(self, gesture: PanGesture) -> None:
        """Spread or gather the spots. Only the CHANGED phase moves anything."""
        if gesture.state is not GestureState.CHANGED:
            return

        delta = gesture.translation()
        # Read deltas relative to the last event, not cumulative
        gesture.set_translation(Vector.zero())

        for spot in self._spots:
            spot.move(delta)

    def trigger_escape(self, cleanup_delay: float, on_cleanup: Callable[[], object]) -> list[Balloon]:
        """
        Open the black hole: stop shuffling, pull every held balloon into the
        vortex and schedule `on_cleanup` after `cleanup_delay` seconds.

        Returns:
            The balloons taken out of the spots. Empty on a repeated trigger.
        """
        if self._escaped:
            logger.warning("Black hole already triggered; ignoring.")
            return []
        self._escaped = True
        self._cancel_shuffling()

        detached = [b for b in (spot.remove_item() for spot in self._spots) if b is not None]
        for balloon in detached:
            self._escape.absorb(balloon)

        self._cleanup_task = self._scheduler.call_later(cleanup_delay, on_cleanup, name="escape-cleanup")
        logger.info(f"Black hole triggered: {len(detached)} balloons absorbed, cleanup in {cleanup_delay:g} s.")
        self.escaped.emit(detached)
        return detached

    def _cancel_shuffling(self) -> None:
        for task in (self._grace_task, self._shuffle_task):
            if task is not None:
                task.cancel()
        self._grace_task = None
        self._shuffle_task = None
