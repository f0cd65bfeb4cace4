"""
Precomputation of a full trajectory. The integrator is driven once, up
front, and every state is kept so playback never has to run physics.
"""

from __future__ import annotations

import logging
import math
from numbers import Integral
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import numpy as np

from .config import DEFAULT_EPSILON, DEFAULT_G, DEFAULT_INTEGRATOR
from .errors import InvalidConfiguration
from .forces import GravityModel
from .integrators import Stepper, get_integrator
from .system import System, SystemSnapshot, kinetic_energy

logger = logging.getLogger(__name__)


class Trajectory:
    """
    Ordered, read-only sequence of snapshots indexed 0..N-1.

    ``diverged_at`` is the step whose state was non-finite when the run was
    cut short, or None when every requested step was computed.
    """

    def __init__(
        self,
        frames: Sequence[SystemSnapshot],
        masses: np.ndarray,
        dt: float,
        requested_steps: Optional[int] = None,
        diverged_at: Optional[int] = None,
    ):
        if not frames:
            raise InvalidConfiguration("a Trajectory needs at least one frame")
        self._frames = tuple(frames)
        self.masses = np.array(masses, dtype=float)
        self.masses.setflags(write=False)
        self.dt = float(dt)
        self.requested_steps = (
            len(self._frames) - 1 if requested_steps is None else requested_steps
        )
        self.diverged_at = diverged_at

    def __len__(self) -> int:
        return len(self._frames)

    def __getitem__(self, index: int) -> SystemSnapshot:
        return self._frames[index]

    def __iter__(self) -> Iterator[SystemSnapshot]:
        return iter(self._frames)

    def __repr__(self) -> str:
        return (
            f"Trajectory(frames={len(self)}, dt={self.dt!r}, "
            f"requested_steps={self.requested_steps!r}, diverged_at={self.diverged_at!r})"
        )

    @property
    def truncated(self) -> bool:
        return self.diverged_at is not None

    def final(self) -> SystemSnapshot:
        return self._frames[-1]

    def positions(self) -> np.ndarray:
        """All positions stacked with shape (frames, 3, dim)."""
        return np.stack([frame.positions for frame in self._frames])

    def velocities(self) -> np.ndarray:
        return np.stack([frame.velocities for frame in self._frames])

    def times(self) -> np.ndarray:
        return np.array([frame.time for frame in self._frames], dtype=float)

    def energies(self, model: GravityModel) -> np.ndarray:
        """Total mechanical energy (kinetic + potential) for every frame."""
        return np.array(
            [
                kinetic_energy(self.masses, frame.velocities)
                + model.potential_energy(self.masses, frame.positions)
                for frame in self._frames
            ]
        )

    def to_samples(self, stride: int = 1) -> List[Dict[str, Any]]:
        """
        Compact samples for a renderer, keeping every ``stride``-th frame.
        The last frame is always retained so the animation reaches the end.
        """
        if stride < 1:
            raise InvalidConfiguration("stride must be >= 1")
        selected = list(self._frames[::stride])
        if selected[-1] is not self._frames[-1]:
            selected.append(self._frames[-1])
        return [
            {
                "t": float(frame.time),
                "step": int(frame.step),
                "positions": frame.positions.tolist(),
            }
            for frame in selected
        ]


def _validate_run(steps: int, dt: float) -> None:
    if isinstance(steps, bool) or not isinstance(steps, Integral):
        raise InvalidConfiguration(f"steps must be an integer, got {steps!r}")
    if steps < 0:
        raise InvalidConfiguration("steps must be >= 0")
    if not math.isfinite(dt) or dt <= 0:
        raise InvalidConfiguration("dt must be a finite value > 0")


def _format_positions(snapshot: SystemSnapshot) -> str:
    return " ".join(
        "(" + ", ".join(f"{c:.4f}" for c in position) + ")" for position in snapshot.positions
    )


def simulate(
    initial: System,
    steps: int,
    dt: float,
    g: float = DEFAULT_G,
    epsilon: float = DEFAULT_EPSILON,
    integrator: Union[str, Stepper] = DEFAULT_INTEGRATOR,
    report_every: int = 0,
) -> Trajectory:
    """
    Integrate ``initial`` for ``steps`` fixed steps of ``dt`` and return
    every state, the initial one included, as a Trajectory of ``steps + 1``
    frames.

    If a step produces a NaN or infinite component the run stops there and
    the finite prefix is returned with ``diverged_at`` set.
    """
    dt = float(dt)
    _validate_run(steps, dt)
    model = GravityModel(g, epsilon)
    step_fn = get_integrator(integrator)

    logger.debug(
        "Simulating %s: steps=%d dt=%g %r integrator=%s",
        initial.name,
        steps,
        dt,
        model,
        getattr(step_fn, "__name__", step_fn),
    )

    frames: List[SystemSnapshot] = [initial.snapshot(step=0, time=0.0)]
    diverged_at: Optional[int] = None
    state = initial
    with np.errstate(over="ignore", invalid="ignore"):
        for n in range(1, steps + 1):
            state = step_fn(state, dt, model)
            snapshot = state.snapshot(step=n, time=n * dt)
            if not snapshot.is_finite():
                diverged_at = n
                break
            frames.append(snapshot)
            if report_every > 0 and n % report_every == 0:
                logger.info("step %d t=%.4f %s", n, snapshot.time, _format_positions(snapshot))

    if diverged_at is not None:
        logger.warning(
            "Numeric divergence at step %d of %d; keeping %d frames",
            diverged_at,
            steps,
            len(frames),
        )
    else:
        logger.debug("Simulation finished with %d frames", len(frames))

    return Trajectory(
        frames,
        masses=initial.masses,
        dt=dt,
        requested_steps=steps,
        diverged_at=diverged_at,
    )
