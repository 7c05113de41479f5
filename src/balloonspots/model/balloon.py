"""
Balloon (the simulated item)
============================
The visual item driven by the spots. It carries only what the simulation and
the hit testing need: a center, a velocity, a size, and a list of tap
listeners standing in for a tap gesture recognizer.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

from balloonspots.model.geometry import Point, Vector, Rect

logger = logging.getLogger(__name__)

TapListener = Callable[["Balloon"], None]

_ids = itertools.count(1)


@dataclass(eq=False)
class Balloon:
    """
    A balloon on screen.

    Equality is identity: two balloons at the same place are still two
    balloons, and behaviors keep them in hashed collections.
    """
    center: Point
    width: float = 60.0
    height: float = 90.0
    velocity: Vector = field(default_factory=Vector.zero)
    ident: int = field(default_factory=lambda: next(_ids))

    _tap_listeners: list[TapListener] = field(default_factory=list, init=False, repr=False)

    @property
    def frame(self) -> Rect:
        return Rect(
            self.center.x - self.width / 2.0,
            self.center.y - self.height / 2.0,
            self.width,
            self.height,
        )

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def collision_radius(self) -> float:
        return min(self.width, self.height) / 2.0

    def contains(self, point: Point) -> bool:
        """Elliptical hit test against the balloon body."""
        rx = self.width / 2.0
        ry = self.height / 2.0
        dx = (point.x - self.center.x) / rx
        dy = (point.y - self.center.y) / ry
        return dx * dx + dy * dy <= 1.0

    # ---- tap listeners ----

    def add_tap_listener(self, listener: TapListener) -> None:
        if listener not in self._tap_listeners:
            self._tap_listeners.append(listener)

    def remove_tap_listener(self, listener: TapListener) -> None:
        if listener in self._tap_listeners:
            self._tap_listeners.remove(listener)

    @property
    def tap_listener_count(self) -> int:
        return len(self._tap_listeners)

    def tap(self) -> None:
        """Deliver a tap to every registered listener."""
        logger.debug(f"Balloon {self.ident} tapped ({len(self._tap_listeners)} listeners).")
        # Listeners may detach themselves while handling the tap
        for listener in list(self._tap_listeners):
            listener(self)
