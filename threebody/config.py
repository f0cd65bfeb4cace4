"""
Defaults for the precomputation run. Units are simplified simulation units,
tuned so the preset orbits animate at a readable pace.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Optional, TypeVar

from .errors import InvalidConfiguration

if TYPE_CHECKING:
    from .simulation import Trajectory
    from .system import System

DEFAULT_G = 1.0  # Tuned gravitational constant for unit masses/lengths
DEFAULT_DT = 0.001
DEFAULT_STEPS = 10000
DEFAULT_EPSILON = 1e-3  # Floor on pair distance for the force magnitude
DEFAULT_INTEGRATOR = "rk4"
DEFAULT_REPORT_EVERY = 1000
MAX_API_STEPS = 200000  # Upper bound on steps for one HTTP request

ENV_PREFIX = "THREEBODY_"

T = TypeVar("T")


def _env_value(name: str, parse: Callable[[str], T]) -> Optional[T]:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise InvalidConfiguration(f"{ENV_PREFIX}{name}={raw!r} is not valid") from exc


@dataclass(frozen=True)
class SimulationConfig:
    steps: int = DEFAULT_STEPS
    dt: float = DEFAULT_DT
    gravitational_constant: float = DEFAULT_G
    epsilon: float = DEFAULT_EPSILON
    integrator: str = DEFAULT_INTEGRATOR
    report_every: int = 0

    @classmethod
    def from_env(cls, **overrides) -> SimulationConfig:
        """
        Build a config from THREEBODY_* environment variables. Keyword
        overrides that are not None win over the environment.
        """
        values = {
            "steps": _env_value("STEPS", int),
            "dt": _env_value("DT", float),
            "gravitational_constant": _env_value("G", float),
            "epsilon": _env_value("EPSILON", float),
            "integrator": _env_value("INTEGRATOR", str),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return replace(cls(), **{k: v for k, v in values.items() if v is not None})

    def run(self, initial: System) -> Trajectory:
        from .simulation import simulate

        return simulate(
            initial,
            steps=self.steps,
            dt=self.dt,
            g=self.gravitational_constant,
            epsilon=self.epsilon,
            integrator=self.integrator,
            report_every=self.report_every,
        )
