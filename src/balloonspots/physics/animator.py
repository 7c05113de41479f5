"""
Dynamic Animator (Simulation Context)
=====================================
Integrates the motion of every item that belongs to at least one behavior.

Why is this file needed?
------------------------
1. Shared context: Spots and the escape context register their behaviors here;
   none of them owns the animator.
2. Integration: One semi-implicit Euler step per frame, vectorised with numpy
   over all simulated items.

Step order:
    accelerations (all behaviors) -> velocity -> damping -> position -> constraints
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from balloonspots.model.geometry import Point, Rect, Vector
from balloonspots.physics.behaviors import Behavior, ItemBehavior

if TYPE_CHECKING:
    import numpy.typing as npt

    from balloonspots.model.balloon import Balloon

logger = logging.getLogger(__name__)


class DynamicAnimator:
    def __init__(self, reference_bounds: Rect) -> None:
        self.reference_bounds = reference_bounds
        self._behaviors: list[Behavior] = []
        self.elapsed: float = 0.0

    # ------------------------------------------------------------------------------
    # Behaviors
    # ------------------------------------------------------------------------------

    @property
    def behaviors(self) -> list[Behavior]:
        return list(self._behaviors)

    def add_behavior(self, behavior: Behavior) -> None:
        if behavior not in self._behaviors:
            self._behaviors.append(behavior)

    def remove_behavior(self, behavior: Behavior) -> None:
        if behavior in self._behaviors:
            self._behaviors.remove(behavior)

    def remove_all_behaviors(self) -> None:
        self._behaviors.clear()

    def items(self) -> list[Balloon]:
        """Every item in at least one behavior, in first-seen order."""
        seen: dict[Balloon, None] = {}
        for behavior in self._behaviors:
            for item in behavior.items:
                seen[item] = None
        return list(seen)

    def behaviors_for(self, item: Balloon) -> list[Behavior]:
        return [b for b in self._behaviors if item in b]

    def mass_of(self, item: Balloon) -> float:
        """Mass from the first item behavior holding the item, default density otherwise."""
        for behavior in self._behaviors:
            if isinstance(behavior, ItemBehavior) and item in behavior:
                return behavior.mass_of(item)
        return ItemBehavior.DEFAULT_DENSITY * item.area

    # ------------------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------------------

    def positions(self) -> npt.NDArray[np.float64]:
        """(n, 2) snapshot of item centers, ordered as `items()`."""
        items = self.items()
        if not items:
            return np.empty((0, 2))
        return np.array([item.center.to_array() for item in items])

    def step(self, dt: float) -> None:
        if dt <= 0.0:
            raise ValueError(f"Time step must be positive, got {dt}.")

        items = self.items()
        self.elapsed += dt
        if not items:
            return

        index = {item: i for i, item in enumerate(items)}
        positions = np.array([item.center.to_array() for item in items])
        velocities = np.array([item.velocity.to_array() for item in items])

        groups = [
            (behavior, np.array([index[item] for item in behavior.items], dtype=np.int64))
            for behavior in self._behaviors
            if len(behavior) > 0
        ]

        accelerations = np.zeros_like(positions)
        for behavior, idx in groups:
            accelerations[idx] += behavior.accelerations(positions[idx], velocities[idx])

        velocities = velocities + accelerations * dt
        for behavior, idx in groups:
            velocities[idx] = behavior.damp(velocities[idx], dt)
        positions = positions + velocities * dt

        for behavior, idx in groups:
            members = [items[i] for i in idx]
            masses = np.array([self.mass_of(item) for item in members])
            positions[idx], velocities[idx] = behavior.constrain(
                positions[idx], velocities[idx], members, masses
            )

        for item, position, velocity in zip(items, positions, velocities):
            item.center = Point.from_array(position)
            item.velocity = Vector.from_array(velocity)
