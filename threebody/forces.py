"""
Pairwise Newtonian gravity for the three bodies of a System.

Distances below ``epsilon`` are floored at ``epsilon`` when computing the
force magnitude and the potential. This keeps close encounters finite; it
is not physically accurate inside that radius.
"""

from __future__ import annotations

import math
from itertools import combinations
from typing import List, Tuple

import numpy as np

from .config import DEFAULT_EPSILON, DEFAULT_G
from .errors import InvalidConfiguration
from .system import BODY_COUNT

# Fixed pair order: (0, 1), (0, 2), (1, 2)
PAIRS: List[Tuple[int, int]] = list(combinations(range(BODY_COUNT), 2))


class GravityModel:
    """
    Inverse-square attraction with a tunable gravitational constant. ``G`` is
    a pacing knob for the animation rather than the SI value.
    """

    def __init__(
        self,
        gravitational_constant: float = DEFAULT_G,
        epsilon: float = DEFAULT_EPSILON,
    ):
        gravitational_constant = float(gravitational_constant)
        epsilon = float(epsilon)
        if not math.isfinite(gravitational_constant) or gravitational_constant < 0:
            raise InvalidConfiguration("gravitational constant must be a finite value >= 0")
        if not math.isfinite(epsilon) or epsilon <= 0:
            raise InvalidConfiguration("epsilon must be a finite value > 0")
        self.gravitational_constant = gravitational_constant
        self.epsilon = epsilon

    def __repr__(self) -> str:
        return f"GravityModel(G={self.gravitational_constant!r}, epsilon={self.epsilon!r})"

    def forces(self, masses: np.ndarray, positions: np.ndarray) -> np.ndarray:
        """
        Net force on each body, shape (3, dim). Each pair contributes equal
        and opposite forces, so the sum over bodies is zero.
        """
        forces = np.zeros_like(positions, dtype=float)
        for i, j in PAIRS:
            offset = positions[j] - positions[i]
            distance = math.sqrt(float(np.dot(offset, offset)))
            if distance == 0:
                continue  # Collocated bodies have no defined direction.
            clamped = max(distance, self.epsilon)
            magnitude = self.gravitational_constant * masses[i] * masses[j] / (clamped * clamped)
            force = offset * (magnitude / distance)
            forces[i] += force
            forces[j] -= force
        return forces

    def accelerations(self, masses: np.ndarray, positions: np.ndarray) -> np.ndarray:
        return self.forces(masses, positions) / masses[:, np.newaxis]

    def potential_energy(self, masses: np.ndarray, positions: np.ndarray) -> float:
        energy = 0.0
        for i, j in PAIRS:
            distance = float(np.linalg.norm(positions[j] - positions[i]))
            energy -= (
                self.gravitational_constant * masses[i] * masses[j] / max(distance, self.epsilon)
            )
        return energy
