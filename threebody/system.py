"""
The three-body System and its immutable snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .body import Body
from .errors import InvalidConfiguration

BODY_COUNT = 3


def _frozen(values: np.ndarray) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class SystemSnapshot:
    """
    Positions and velocities of all three bodies at one instant. Arrays have
    shape (3, dim) and are read-only.
    """

    step: int
    time: float
    positions: np.ndarray
    velocities: np.ndarray

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.positions).all() and np.isfinite(self.velocities).all())

    def position(self, index: int) -> np.ndarray:
        return self.positions[index]

    def velocity(self, index: int) -> np.ndarray:
        return self.velocities[index]


class System:
    """
    Exactly three bodies sharing one spatial dimension. The body order is
    stable and only used to iterate pairs deterministically.

    A System never changes after construction; integrators return a new one.
    """

    def __init__(self, bodies: Sequence[Body], name: str = "Unnamed system"):
        bodies = list(bodies)
        if len(bodies) != BODY_COUNT:
            raise InvalidConfiguration(
                f"a System needs exactly {BODY_COUNT} bodies, got {len(bodies)}"
            )
        dimensions = {body.dimension for body in bodies}
        if len(dimensions) != 1:
            raise InvalidConfiguration("all bodies must share the same dimension")
        for idx, body in enumerate(bodies):
            if not np.isfinite(body.mass) or body.mass <= 0:
                raise InvalidConfiguration(
                    f"body {idx} has non-positive mass {body.mass!r}"
                )
            if not (np.isfinite(body.position).all() and np.isfinite(body.velocity).all()):
                raise InvalidConfiguration(f"body {idx} has a non-finite state")

        self.name = name
        self.names: Tuple[Optional[str], ...] = tuple(body.name for body in bodies)
        self.masses = _frozen([body.mass for body in bodies])
        self.positions = _frozen([body.position for body in bodies])
        self.velocities = _frozen([body.velocity for body in bodies])

    @classmethod
    def from_dicts(cls, configs: Sequence[Dict[str, Any]], name: str = "Unnamed system") -> System:
        bodies = []
        for cfg in configs:
            try:
                bodies.append(
                    Body(
                        mass=cfg["mass"],
                        position=cfg["position"],
                        velocity=cfg["velocity"],
                        name=cfg.get("name"),
                    )
                )
            except KeyError as exc:
                raise InvalidConfiguration(f"body config is missing {exc.args[0]!r}") from exc
        return cls(bodies, name=name)

    def with_state(self, positions: np.ndarray, velocities: np.ndarray) -> System:
        """
        Return a System with the same masses and new positions/velocities.
        No validation is done here so that a diverged state can still be
        produced and inspected by the caller.
        """
        evolved = type(self).__new__(type(self))
        evolved.name = self.name
        evolved.names = self.names
        evolved.masses = self.masses
        evolved.positions = _frozen(positions)
        evolved.velocities = _frozen(velocities)
        return evolved

    @property
    def dimension(self) -> int:
        return int(self.positions.shape[1])

    @property
    def bodies(self) -> List[Body]:
        return [
            Body(mass, position, velocity, name=name)
            for mass, position, velocity, name in zip(
                self.masses, self.positions, self.velocities, self.names
            )
        ]

    def snapshot(self, step: int = 0, time: float = 0.0) -> SystemSnapshot:
        return SystemSnapshot(
            step=step,
            time=time,
            positions=self.positions,
            velocities=self.velocities,
        )

    def total_mass(self) -> float:
        return float(self.masses.sum())

    def center_of_mass(self) -> np.ndarray:
        return self.masses @ self.positions / self.total_mass()

    def total_momentum(self) -> np.ndarray:
        return self.masses @ self.velocities

    def kinetic_energy(self) -> float:
        return kinetic_energy(self.masses, self.velocities)


def kinetic_energy(masses: np.ndarray, velocities: np.ndarray) -> float:
    speeds_squared = np.einsum("ij,ij->i", velocities, velocities)
    return float(0.5 * masses @ speeds_squared)
