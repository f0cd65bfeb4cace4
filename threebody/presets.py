"""
Initial conditions for well-known three-body configurations.

All presets are planar and use unit lengths. They are given for G = 1; for
another G the velocities are scaled by sqrt(G), which traces the same
orbit with the period divided by sqrt(G).
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional

from .body import Body
from .config import DEFAULT_G
from .errors import InvalidConfiguration
from .system import System

# Chenciner & Montgomery (2000), equal unit masses, G = 1
FIGURE_EIGHT_POSITION = (0.97000436, -0.24308753)
FIGURE_EIGHT_VELOCITY = (-0.93240737, -0.86473146)
FIGURE_EIGHT_PERIOD = 6.32591398

FREE_FALL_POSITIONS = [(0.3089693008, 0.4236727692), (-0.5, 0.0), (0.5, 0.0)]


def _velocity_scale(g: float) -> float:
    if not math.isfinite(g) or g <= 0:
        raise InvalidConfiguration("presets need a finite gravitational constant > 0")
    return math.sqrt(g)


def figure_eight(g: float = DEFAULT_G) -> System:
    scale = _velocity_scale(g)
    x, y = FIGURE_EIGHT_POSITION
    vx, vy = FIGURE_EIGHT_VELOCITY
    return System(
        [
            Body(1.0, (-x, -y), (-0.5 * vx * scale, -0.5 * vy * scale), name="A"),
            Body(1.0, (x, y), (-0.5 * vx * scale, -0.5 * vy * scale), name="B"),
            Body(1.0, (0.0, 0.0), (vx * scale, vy * scale), name="C"),
        ],
        name="Figure eight",
    )


def _lagrange_angular_velocity(g: float, side: float, mass: float) -> float:
    return math.sqrt(3.0 * g * mass / side ** 3)


def lagrange_triangle(g: float = DEFAULT_G, side: float = 1.0, mass: float = 1.0) -> System:
    """
    Equal masses on an equilateral triangle rotating rigidly about its
    centre. The configuration is periodic but unstable, so it drifts apart
    after a few periods.
    """
    _velocity_scale(g)
    if side <= 0:
        raise InvalidConfiguration("side must be > 0")
    if mass <= 0:
        raise InvalidConfiguration("mass must be > 0")
    omega = _lagrange_angular_velocity(g, side, mass)
    radius = side / math.sqrt(3.0)
    bodies: List[Body] = []
    for idx, name in enumerate(("A", "B", "C")):
        angle = math.pi / 2 + idx * 2 * math.pi / 3
        x, y = radius * math.cos(angle), radius * math.sin(angle)
        bodies.append(Body(mass, (x, y), (-omega * y, omega * x), name=name))
    return System(bodies, name="Lagrange triangle")


def free_fall(g: float = DEFAULT_G) -> System:
    """Three unit masses released from rest."""
    _velocity_scale(g)
    return System(
        [
            Body(1.0, position, (0.0, 0.0), name=name)
            for position, name in zip(FREE_FALL_POSITIONS, ("A", "B", "C"))
        ],
        name="Free fall",
    )


PRESETS: Dict[str, Callable[[float], System]] = {
    "figure_eight": figure_eight,
    "lagrange": lagrange_triangle,
    "free_fall": free_fall,
}


def build_preset(name: str, g: float = DEFAULT_G) -> System:
    try:
        factory = PRESETS[name]
    except KeyError:
        raise InvalidConfiguration(
            f"unknown preset {name!r}; expected one of {sorted(PRESETS)}"
        ) from None
    return factory(g)


def preset_period(name: str, g: float = DEFAULT_G) -> Optional[float]:
    """Period of the preset's orbit, or None if it is not periodic."""
    scale = _velocity_scale(g)
    if name == "figure_eight":
        return FIGURE_EIGHT_PERIOD / scale
    if name == "lagrange":
        return 2 * math.pi / _lagrange_angular_velocity(g, 1.0, 1.0)
    if name in PRESETS:
        return None
    raise InvalidConfiguration(f"unknown preset {name!r}")
