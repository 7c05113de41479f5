"""
Balloon Spot
============
A fixed-identity anchor on screen. Each spot owns one spring field and one
damping behavior, registered on the shared animator, and holds at most one
balloon.

Invariant: the spot's field and damping behaviors contain the balloon if and
only if the spot holds it. `assign` and `remove_item` keep both in lockstep,
so a departed balloon never keeps receiving forces from its old spot.
"""
from __future__ import annotations

import logging
import math
import weakref
from typing import Optional, TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from balloonspots.config import DampingParams, FieldParams
from balloonspots.model.geometry import Point, Vector
from balloonspots.physics.behaviors import ItemBehavior, SpringField

if TYPE_CHECKING:
    from balloonspots.model.balloon import Balloon
    from balloonspots.physics.animator import DynamicAnimator

logger = logging.getLogger(__name__)


class SpotOccupiedError(ValueError):
    """Raised when assigning a balloon to a spot that already holds one."""


class Spot(QObject):
    # (balloon, spot) - the held balloon was tapped
    interacted = Signal(object, object)

    def __init__(
        self,
        animator: DynamicAnimator,
        direction_angle: float,
        center: Point,
        field_params: FieldParams = FieldParams(),
        damping_params: DampingParams = DampingParams(),
        parent: QObject | None = None,
    ) -> None:
        """
        Args:
            animator: Shared simulation context the behaviors are added to.
            direction_angle: Angle (radians) of the line along which `move`
                displaces the spot.
            center: Initial position of the spot.
        """
        super().__init__(parent)
        self.direction_angle: float = float(direction_angle)
        self._animator = animator

        self._field = SpringField(
            position=center,
            strength=field_params.strength,
            radius=field_params.radius,
            smoothness=field_params.smoothness,
        )
        self._damping = ItemBehavior(
            resistance=damping_params.resistance,
            density=damping_params.density,
        )
        animator.add_behavior(self._field)
        animator.add_behavior(self._damping)

        self._balloon_ref: Optional[weakref.ref[Balloon]] = None

    def __repr__(self) -> str:
        return f"Spot(angle={self.direction_angle:.3f}, center=({self.center.x:.1f}, {self.center.y:.1f}))"

    # ------------------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------------------

    @property
    def center(self) -> Point:
        return self._field.position

    @property
    def field(self) -> SpringField:
        return self._field

    @property
    def damping(self) -> ItemBehavior:
        return self._damping

    @property
    def balloon(self) -> Optional[Balloon]:
        """The held balloon, or None. A collected balloon reads as None."""
        if self._balloon_ref is None:
            return None
        return self._balloon_ref()

    @property
    def is_occupied(self) -> bool:
        return self.balloon is not None

    # ------------------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------------------

    def assign(self, balloon: Balloon) -> None:
        """
        Bind the balloon to this spot: tap listener, field and damping.

        Raises:
            SpotOccupiedError: The spot already holds a balloon. Call
                `remove_item` first.
        """
        current = self.balloon
        if current is not None:
            raise SpotOccupiedError(
                f"{self!r} already holds balloon {current.ident}; cannot assign balloon {balloon.ident}."
            )

        balloon.add_tap_listener(self._on_tap)
        self._balloon_ref = weakref.ref(balloon)
        self._field.add_item(balloon)
        self._damping.add_item(balloon)
        logger.debug(f"Balloon {balloon.ident} assigned to {self!r}.")

    def move(self, delta: Vector) -> Point:
        """
        Move the spot along its direction line.

        Only the vertical component of `delta` counts: dragging up (negative y)
        pushes every spot outwards along its own angle, dragging down pulls the
        spots together. There is no clamping.

        Returns:
            The new center.
        """
        self._field.position = self._compute_new_center(delta)
        return self._field.position

    def remove_item(self) -> Optional[Balloon]:
        """
        Unbind the held balloon.

        Returns:
            The balloon that was held, or None for an empty spot.
        """
        balloon = self.balloon
        self._balloon_ref = None
        if balloon is None:
            return None

        # The behaviors keep strong references; leaving the balloon in them
        # would keep applying this spot's forces to it.
        balloon.remove_tap_listener(self._on_tap)
        self._field.remove_item(balloon)
        self._damping.remove_item(balloon)
        logger.debug(f"Balloon {balloon.ident} removed from {self!r}.")
        return balloon

    def teardown(self) -> Optional[Balloon]:
        """Release the balloon and take both behaviors off the animator."""
        balloon = self.remove_item()
        self._animator.remove_behavior(self._field)
        self._animator.remove_behavior(self._damping)
        return balloon

    # ------------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------------

    def _compute_new_center(self, delta: Vector) -> Point:
        # Negated so that panning up expands the ring
        x_delta = -delta.y * math.cos(self.direction_angle)
        y_delta = -delta.y * math.sin(self.direction_angle)
        return self.center + Vector(x_delta, y_delta)

    def _on_tap(self, balloon: Balloon) -> None:
        if balloon is self.balloon:
            self.interacted.emit(balloon, self)
