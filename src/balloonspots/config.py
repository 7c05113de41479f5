"""
Configuration & Tuned Constants
===============================
This module serves as the central registry for the simulation parameters.

Why is this file needed?
------------------------
1. Abstraction: The empirically tuned values (field strength, resistance,
   vortex radius, timer intervals...) live in one place instead of being
   scattered through the spots and the screen controller.
2. Overrides: `DemoConfig.from_settings` lets a user tweak the demo through
   the Qt INI settings file without touching the code.

Exports:
    FieldParams, DampingParams, EscapeParams, DemoConfig
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

# UIKit-like units: a gravity magnitude of 1.0 is 1000 px/s^2
GRAVITY_SCALE: float = 1000.0
# Converts a spring field strength into (px/s^2) per px of displacement
FIELD_SCALE: float = 100.0

DEFAULT_ANGLES: tuple[float, ...] = tuple(k * math.pi / 4 for k in range(8))


@dataclass(frozen=True)
class FieldParams:
    """Spring field attached to every spot."""
    strength: float = 1.4  # Empirical value
    radius: float = 600.0  # Empirical value
    smoothness: float = 1.0


@dataclass(frozen=True)
class DampingParams:
    """Resistance profile applied to the balloon held by a spot."""
    resistance: float = 25.5  # Empirical value
    density: float = 0.006  # Empirical value


@dataclass(frozen=True)
class EscapeParams:
    """Forces for balloons leaving the spot system."""
    # Tapped balloons fly away upwards
    gravity_direction: tuple[float, float] = (0.0, -0.4)
    restitution: float = 0.5

    # Black hole = vortex + radial gravity
    vortex_strength: float = 0.03
    vortex_minimum_radius: float = 200.0
    radial_strength: float = 1.0
    radial_minimum_radius: float = 50.0
    radial_falloff: float = 2.0


@dataclass(frozen=True)
class DemoConfig:
    spring: FieldParams = field(default_factory=FieldParams)
    damping: DampingParams = field(default_factory=DampingParams)
    escape: EscapeParams = field(default_factory=EscapeParams)

    angles: tuple[float, ...] = DEFAULT_ANGLES

    # Timers (seconds)
    shuffle_interval: float = 5.0
    grace_period: float = 5.0
    cleanup_delay: float = 12.0
    frame_rate: float = 60.0

    # Layout
    start_offset: tuple[float, float] = (0.0, -15.0)
    radius_divisor: float = 2.5
    balloon_size: tuple[float, float] = (60.0, 90.0)

    def __post_init__(self) -> None:
        for name in ("shuffle_interval", "grace_period", "cleanup_delay", "frame_rate", "radius_divisor"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"'{name}' must be positive, got {getattr(self, name)}.")
        if min(self.balloon_size) <= 0.0:
            raise ValueError(f"Balloon size must be positive, got {self.balloon_size}.")
        if not self.angles:
            raise ValueError("At least one spot angle is required.")

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.frame_rate

    @classmethod
    def from_settings(cls, settings: QSettings) -> DemoConfig:
        """
        Build a config from a QSettings store.

        Scalar top-level fields are read from the "demo/" group, nested
        parameter groups from "spring/", "damping/" and "escape/". Missing keys
        keep their defaults.
        """
        base = cls()
        overrides: dict[str, Any] = {}

        for f in fields(cls):
            value = getattr(base, f.name)
            if isinstance(value, float):
                overrides[f.name] = float(settings.value(f"demo/{f.name}", value))

        for group, params in (("spring", base.spring), ("damping", base.damping), ("escape", base.escape)):
            nested: dict[str, Any] = {}
            for f in fields(params):
                value = getattr(params, f.name)
                if isinstance(value, float):
                    nested[f.name] = float(settings.value(f"{group}/{f.name}", value))
            overrides[group] = replace(params, **nested)

        return replace(base, **overrides)
