"""
Escape Context
==============
The forces that take over a balloon once it leaves the spot system. Balloons
handed over here are never returned to a spot.

* `release`: gravity pulling upwards plus collisions with the screen edges,
  the "flying away" of a tapped balloon.
* `absorb`: a vortex plus radial gravity around the black hole.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from balloonspots.config import EscapeParams
from balloonspots.model.geometry import Point, Rect, Vector
from balloonspots.physics.behaviors import Behavior, Collision, Gravity, RadialGravityField, VortexField

if TYPE_CHECKING:
    from balloonspots.model.balloon import Balloon
    from balloonspots.physics.animator import DynamicAnimator

logger = logging.getLogger(__name__)


class EscapeContext:
    def __init__(
        self,
        animator: DynamicAnimator,
        bounds: Rect,
        black_hole_center: Point,
        params: EscapeParams = EscapeParams(),
    ) -> None:
        self.black_hole_center = black_hole_center

        self.gravity = Gravity(direction=Vector(*params.gravity_direction))
        self.collision = Collision(bounds=bounds, restitution=params.restitution)
        self.vortex = VortexField(
            position=black_hole_center,
            strength=params.vortex_strength,
            minimum_radius=params.vortex_minimum_radius,
        )
        self.radial_gravity = RadialGravityField(
            position=black_hole_center,
            strength=params.radial_strength,
            minimum_radius=params.radial_minimum_radius,
            falloff=params.radial_falloff,
        )

        for behavior in self.behaviors:
            animator.add_behavior(behavior)

    @property
    def behaviors(self) -> list[Behavior]:
        return [self.gravity, self.collision, self.vortex, self.radial_gravity]

    def items(self) -> list[Balloon]:
        seen: dict[Balloon, None] = {}
        for behavior in self.behaviors:
            for item in behavior.items:
                seen[item] = None
        return list(seen)

    def release(self, balloon: Balloon) -> None:
        """Let the balloon fly away."""
        self.gravity.add_item(balloon)
        self.collision.add_item(balloon)
        logger.debug(f"Balloon {balloon.ident} released.")

    def absorb(self, balloon: Balloon) -> None:
        """Pull the balloon into the black hole."""
        self.vortex.add_item(balloon)
        self.radial_gravity.add_item(balloon)
        logger.debug(f"Balloon {balloon.ident} absorbed by the black hole.")

    def discard(self, balloon: Balloon) -> None:
        for behavior in self.behaviors:
            behavior.remove_item(balloon)

    def clear(self) -> None:
        for behavior in self.behaviors:
            behavior.remove_all_items()
