"""
The MODEL layer contains pure data structures.
It has NO knowledge of the GUI (Qt) or of the simulation.
"""
from balloonspots.model.geometry import Point, Vector, Rect
from balloonspots.model.balloon import Balloon
from balloonspots.model.scene import Scene

__all__ = ["Point", "Vector", "Rect", "Balloon", "Scene"]
