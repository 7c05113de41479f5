"""
Scene (Item Registry)
=====================
Owns the balloons that are visible on screen.

Spots and behaviors only reference balloons; the scene is the one place that
keeps them alive. Removing a balloon from the scene is what ends its life.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from balloonspots.model.balloon import Balloon
from balloonspots.model.geometry import Point, Rect

logger = logging.getLogger(__name__)


class Scene:
    def __init__(self, bounds: Rect) -> None:
        self.bounds = bounds
        self._balloons: list[Balloon] = []

    def __len__(self) -> int:
        return len(self._balloons)

    def __iter__(self) -> Iterator[Balloon]:
        return iter(list(self._balloons))

    def __contains__(self, balloon: object) -> bool:
        return balloon in self._balloons

    @property
    def balloons(self) -> list[Balloon]:
        return list(self._balloons)

    def add(self, balloon: Balloon) -> Balloon:
        if balloon not in self._balloons:
            self._balloons.append(balloon)
        return balloon

    def remove(self, balloon: Balloon) -> None:
        if balloon in self._balloons:
            self._balloons.remove(balloon)

    def clear(self) -> int:
        """Remove every balloon. Returns how many were removed."""
        count = len(self._balloons)
        self._balloons.clear()
        logger.debug(f"Scene cleared ({count} balloons removed).")
        return count

    def balloon_at(self, point: Point) -> Optional[Balloon]:
        """Top-most balloon under the point (last added is drawn on top)."""
        for balloon in reversed(self._balloons):
            if balloon.contains(point):
                return balloon
        return None
