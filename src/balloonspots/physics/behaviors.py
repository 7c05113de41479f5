"""
Dynamic Behaviors
=================
Force and constraint definitions understood by the `DynamicAnimator`.

Every behavior keeps an ordered set of the items it acts on. Per step, the
animator gathers the positions and velocities of a behavior's items into
(k, 2) numpy arrays and asks the behavior for its contribution:

* `accelerations(positions, velocities)` - additive acceleration, px/s^2.
* `damp(velocities, dt)` - velocity attenuation after integration.
* `constrain(positions, velocities, items, masses)` - position correction
  after integration (collisions).

Units follow the UIKit convention the tuned constants come from: a gravity
magnitude of 1.0 is 1000 px/s^2.
"""
from __future__ import annotations

from abc import ABC
from typing import Iterator, TYPE_CHECKING

import numpy as np

from balloonspots.config import FIELD_SCALE, GRAVITY_SCALE
from balloonspots.model.geometry import Point, Rect, Vector

if TYPE_CHECKING:
    import numpy.typing as npt

    from balloonspots.model.balloon import Balloon


class Behavior(ABC):
    """Base class: ordered item membership, neutral physics hooks."""

    def __init__(self) -> None:
        # dict keeps insertion order and gives O(1) membership
        self._items: dict[Balloon, None] = {}

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Balloon]:
        return iter(list(self._items))

    @property
    def items(self) -> list[Balloon]:
        return list(self._items)

    def add_item(self, item: Balloon) -> None:
        self._items[item] = None

    def remove_item(self, item: Balloon) -> None:
        self._items.pop(item, None)

    def remove_all_items(self) -> None:
        self._items.clear()

    def accelerations(
        self,
        positions: npt.NDArray[np.float64],
        velocities: npt.NDArray[np.float64],
    ) -> npt.NDArray[np.float64]:
        return np.zeros_like(positions)

    def damp(self, velocities: npt.NDArray[np.float64], dt: float) -> npt.NDArray[np.float64]:
        return velocities

    def constrain(
        self,
        positions: npt.NDArray[np.float64],
        velocities: npt.NDArray[np.float64],
        items: list[Balloon],
        masses: npt.NDArray[np.float64],
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        return positions, velocities


def _distances(offsets: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    return np.linalg.norm(offsets, axis=1)


# -------------------------------------------------------------------------------
# Fields
# -------------------------------------------------------------------------------

class SpringField(Behavior):
    """
    Pulls items toward `position` proportionally to their displacement.

    Only items inside the circular region of `radius` are affected. The outer
    `smoothness` fraction of the region fades the pull linearly to zero, so
    smoothness 0 is a hard edge and smoothness 1 fades from the center.
    """

    def __init__(self, position: Point, strength: float, radius: float, smoothness: float = 0.0) -> None:
        super().__init__()
        if radius <= 0.0:
            raise ValueError(f"Field radius must be positive, got {radius}.")
        if not 0.0 <= smoothness <= 1.0:
            raise ValueError(f"Smoothness must be within [0, 1], got {smoothness}.")
        self.position = position
        self.strength = strength
        self.radius = radius
        self.smoothness = smoothness

    def falloff(self, distances: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        inner = self.radius * (1.0 - self.smoothness)
        weight = np.where(distances <= inner, 1.0, 0.0)
        if self.smoothness > 0.0:
            fade = np.clip((self.radius - distances) / (self.radius - inner), 0.0, 1.0)
            weight = np.where(distances <= inner, 1.0, fade)
        return weight

    def accelerations(self, positions, velocities):
        displacement = self.position.to_array() - positions
        weight = self.falloff(_distances(displacement))
        return self.strength * FIELD_SCALE * displacement * weight[:, None]


class VortexField(Behavior):
    """
    Spins items around `position`.

    The acceleration is tangential and falls off as 1/d, with distances below
    `minimum_radius` clamped to it. Positive strength turns counter-clockwise
    on screen.
    """

    def __init__(self, position: Point, strength: float, minimum_radius: float) -> None:
        super().__init__()
        if minimum_radius <= 0.0:
            raise ValueError(f"Minimum radius must be positive, got {minimum_radius}.")
        self.position = position
        self.strength = strength
        self.minimum_radius = minimum_radius

    def accelerations(self, positions, velocities):
        offsets = positions - self.position.to_array()
        distances = _distances(offsets)
        safe = np.where(distances > 0.0, distances, 1.0)

        # y grows downwards: (dy, -dx) is counter-clockwise as seen on screen
        tangents = np.column_stack((offsets[:, 1], -offsets[:, 0])) / safe[:, None]
        magnitude = self.strength * GRAVITY_SCALE * self.minimum_radius / np.maximum(distances, self.minimum_radius)
        result = tangents * magnitude[:, None]
        result[distances == 0.0] = 0.0
        return result


class RadialGravityField(Behavior):
    """Attracts items toward `position`, full strength within `minimum_radius`."""

    def __init__(
        self,
        position: Point,
        strength: float = 1.0,
        minimum_radius: float = 1.0,
        falloff: float = 2.0,
    ) -> None:
        super().__init__()
        if minimum_radius <= 0.0:
            raise ValueError(f"Minimum radius must be positive, got {minimum_radius}.")
        self.position = position
        self.strength = strength
        self.minimum_radius = minimum_radius
        self.falloff = falloff

    def accelerations(self, positions, velocities):
        offsets = self.position.to_array() - positions
        distances = _distances(offsets)
        safe = np.where(distances > 0.0, distances, 1.0)
        directions = offsets / safe[:, None]
        scale = (np.maximum(distances, self.minimum_radius) / self.minimum_radius) ** self.falloff
        result = directions * (self.strength * GRAVITY_SCALE / scale)[:, None]
        result[distances == 0.0] = 0.0
        return result


class Gravity(Behavior):
    """Constant acceleration along `direction` (1.0 = 1000 px/s^2)."""

    def __init__(self, direction: Vector = Vector(0.0, 1.0)) -> None:
        super().__init__()
        self.direction = direction

    def accelerations(self, positions, velocities):
        return np.broadcast_to(self.direction.to_array() * GRAVITY_SCALE, positions.shape).copy()


# -------------------------------------------------------------------------------
# Item properties
# -------------------------------------------------------------------------------

class ItemBehavior(Behavior):
    """
    Per-item resistance and density.

    Resistance attenuates linear velocity every step; density turns into the
    item's mass (density * area), used when resolving collisions.
    """
    DEFAULT_DENSITY = 1.0

    def __init__(self, resistance: float = 0.0, density: float = DEFAULT_DENSITY) -> None:
        super().__init__()
        if resistance < 0.0:
            raise ValueError(f"Resistance must not be negative, got {resistance}.")
        if density <= 0.0:
            raise ValueError(f"Density must be positive, got {density}.")
        self.resistance = resistance
        self.density = density

    def mass_of(self, item: Balloon) -> float:
        return self.density * item.area

    def damp(self, velocities, dt):
        return velocities / (1.0 + self.resistance * dt)


# -------------------------------------------------------------------------------
# Constraints
# -------------------------------------------------------------------------------

class Collision(Behavior):
    """
    Keeps items inside `bounds` and pushes overlapping items apart.

    Items collide with the boundary as rectangles and with each other as
    circles of `Balloon.collision_radius`.
    """

    def __init__(self, bounds: Rect, restitution: float = 0.5, collide_items: bool = True) -> None:
        super().__init__()
        self.bounds = bounds
        self.restitution = restitution
        self.collide_items = collide_items

    def constrain(self, positions, velocities, items, masses):
        positions = positions.copy()
        velocities = velocities.copy()

        if self.collide_items and len(items) > 1:
            self._separate_items(positions, velocities, items, masses)
        self._keep_in_bounds(positions, velocities, items)
        return positions, velocities

    def _keep_in_bounds(self, positions, velocities, items) -> None:
        half = np.array([[item.width / 2.0, item.height / 2.0] for item in items])
        lower = np.array([self.bounds.left, self.bounds.top]) + half
        upper = np.array([self.bounds.right, self.bounds.bottom]) - half
        # Items larger than the bounds sit in the middle
        middle = (lower + upper) / 2.0
        lower, upper = np.minimum(lower, middle), np.maximum(upper, middle)

        below = positions < lower
        above = positions > upper
        positions[:] = np.clip(positions, lower, upper)
        velocities[below & (velocities < 0.0)] *= -self.restitution
        velocities[above & (velocities > 0.0)] *= -self.restitution

    def _separate_items(self, positions, velocities, items, masses) -> None:
        radii = np.array([item.collision_radius for item in items])
        count = len(items)
        for i in range(count):
            for j in range(i + 1, count):
                offset = positions[j] - positions[i]
                distance = float(np.linalg.norm(offset))
                overlap = radii[i] + radii[j] - distance
                if overlap <= 0.0:
                    continue
                normal = offset / distance if distance > 0.0 else np.array([1.0, 0.0])
                inv_i, inv_j = 1.0 / masses[i], 1.0 / masses[j]
                inv_sum = inv_i + inv_j

                positions[i] -= normal * overlap * inv_i / inv_sum
                positions[j] += normal * overlap * inv_j / inv_sum

                approaching = float(np.dot(velocities[j] - velocities[i], normal))
                if approaching < 0.0:
                    impulse = -(1.0 + self.restitution) * approaching / inv_sum
                    velocities[i] -= normal * impulse * inv_i
                    velocities[j] += normal * impulse * inv_j
