"""
Point-mass description used to build a System.
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .errors import InvalidConfiguration

SUPPORTED_DIMENSIONS = (2, 3)


class Body:
    """
    A single point mass. The mass is fixed at creation; position and velocity
    are stored as float arrays and only change by building a new System.
    """

    def __init__(
        self,
        mass: float,
        position: Iterable[float],
        velocity: Iterable[float],
        name: Optional[str] = None,
    ) -> None:
        try:
            self._mass = float(mass)
            self.position = np.array(position, dtype=float)
            self.velocity = np.array(velocity, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"malformed body: {exc}") from exc
        self.name = name
        if self.position.ndim != 1 or self.position.shape[0] not in SUPPORTED_DIMENSIONS:
            raise InvalidConfiguration("position must be a 2- or 3-element vector")
        if self.velocity.shape != self.position.shape:
            raise InvalidConfiguration("velocity must have the same shape as position")

    def __repr__(self) -> str:
        return (
            f"Body(name={self.name!r}, mass={self._mass!r}, "
            f"position={self.position.tolist()!r}, velocity={self.velocity.tolist()!r})"
        )

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def dimension(self) -> int:
        return int(self.position.shape[0])

    def momentum(self) -> np.ndarray:
        return self._mass * self.velocity

    def kinetic_energy(self) -> float:
        return 0.5 * self._mass * float(np.dot(self.velocity, self.velocity))

    def distance_to(self, other: Body) -> float:
        """Return Euclidean distance to another body."""
        return float(np.linalg.norm(self.position - other.position))
