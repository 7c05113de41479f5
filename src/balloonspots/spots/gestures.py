"""
Pan Gesture
===========
Accumulates the translation of a drag, in the same shape as a platform pan
gesture recognizer: a state plus a translation that the consumer reads and
resets so the next read is relative to the last one.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from balloonspots.model.geometry import Point, Vector


class GestureState(Enum):
    POSSIBLE = "possible"
    BEGAN = "began"
    CHANGED = "changed"
    ENDED = "ended"
    CANCELLED = "cancelled"
    FAILED = "failed"


class PanGesture:
    def __init__(self) -> None:
        self.state: GestureState = GestureState.POSSIBLE
        self._translation: Vector = Vector.zero()
        self._last_point: Optional[Point] = None

    @property
    def is_tracking(self) -> bool:
        return self.state in (GestureState.BEGAN, GestureState.CHANGED)

    def translation(self) -> Vector:
        """Translation accumulated since `begin` or the last `set_translation`."""
        return self._translation

    def set_translation(self, translation: Vector) -> None:
        self._translation = translation

    def begin(self, point: Point) -> None:
        self.state = GestureState.BEGAN
        self._translation = Vector.zero()
        self._last_point = point

    def update(self, point: Point) -> None:
        if not self.is_tracking or self._last_point is None:
            return
        self._translation = self._translation + (point - self._last_point)
        self._last_point = point
        self.state = GestureState.CHANGED

    def end(self) -> None:
        self.state = GestureState.ENDED if self.is_tracking else GestureState.FAILED
        self._last_point = None

    def cancel(self) -> None:
        self.state = GestureState.CANCELLED
        self._last_point = None

    def reset(self) -> None:
        self.state = GestureState.POSSIBLE
        self._translation = Vector.zero()
        self._last_point = None
