"""
The PHYSICS layer: a small 2D dynamics context and the behaviors it runs.
It has NO knowledge of the GUI (Qt).
"""
from balloonspots.physics.animator import DynamicAnimator
from balloonspots.physics.behaviors import (
    Behavior,
    Collision,
    Gravity,
    ItemBehavior,
    RadialGravityField,
    SpringField,
    VortexField,
)

__all__ = [
    "DynamicAnimator",
    "Behavior",
    "Collision",
    "Gravity",
    "ItemBehavior",
    "RadialGravityField",
    "SpringField",
    "VortexField",
]
