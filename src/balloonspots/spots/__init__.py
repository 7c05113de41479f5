"""
The SPOTS layer: anchor points that bind balloons to the simulation.
"""
from balloonspots.spots.escape import EscapeContext
from balloonspots.spots.gestures import GestureState, PanGesture
from balloonspots.spots.manager import SpotManager
from balloonspots.spots.spot import Spot, SpotOccupiedError

__all__ = [
    "EscapeContext",
    "GestureState",
    "PanGesture",
    "SpotManager",
    "Spot",
    "SpotOccupiedError",
]
