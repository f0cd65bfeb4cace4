"""
Fixed-step integrators. Each stepper takes a System, a time step and a
GravityModel and returns the next System without touching its input.

RK4 is the default: it is 4th order, which keeps the figure-eight and
Lagrange orbits closed over a period at animation-friendly step sizes.
Leapfrog is 2nd order but symplectic, so its energy error stays bounded
over long runs. Semi-implicit Euler is first order.
"""

from __future__ import annotations

from typing import Callable, Dict, Union

from .errors import InvalidConfiguration
from .forces import GravityModel
from .system import System

Stepper = Callable[[System, float, GravityModel], System]


def rk4_step(system: System, dt: float, model: GravityModel) -> System:
    """
    Classic Runge-Kutta step on the (position, velocity) state.

    k1 at t, k2 and k3 at t + dt/2, k4 at t + dt; the derivative estimates
    are combined as (k1 + 2*k2 + 2*k3 + k4) / 6.
    """
    masses = system.masses
    x0 = system.positions
    v0 = system.velocities
    half = 0.5 * dt

    k1_x = v0
    k1_v = model.accelerations(masses, x0)

    k2_x = v0 + half * k1_v
    k2_v = model.accelerations(masses, x0 + half * k1_x)

    k3_x = v0 + half * k2_v
    k3_v = model.accelerations(masses, x0 + half * k2_x)

    k4_x = v0 + dt * k3_v
    k4_v = model.accelerations(masses, x0 + dt * k3_x)

    positions = x0 + (dt / 6.0) * (k1_x + 2.0 * k2_x + 2.0 * k3_x + k4_x)
    velocities = v0 + (dt / 6.0) * (k1_v + 2.0 * k2_v + 2.0 * k3_v + k4_v)
    return system.with_state(positions, velocities)


def leapfrog_step(system: System, dt: float, model: GravityModel) -> System:
    """Kick-drift-kick velocity Verlet."""
    masses = system.masses
    half_velocities = system.velocities + 0.5 * dt * model.accelerations(masses, system.positions)
    positions = system.positions + dt * half_velocities
    velocities = half_velocities + 0.5 * dt * model.accelerations(masses, positions)
    return system.with_state(positions, velocities)


def euler_step(system: System, dt: float, model: GravityModel) -> System:
    """Advance velocity then position using the current acceleration."""
    velocities = system.velocities + model.accelerations(system.masses, system.positions) * dt
    positions = system.positions + velocities * dt
    return system.with_state(positions, velocities)


INTEGRATORS: Dict[str, Stepper] = {
    "rk4": rk4_step,
    "leapfrog": leapfrog_step,
    "euler": euler_step,
}


def get_integrator(integrator: Union[str, Stepper]) -> Stepper:
    if callable(integrator):
        return integrator
    try:
        return INTEGRATORS[integrator]
    except KeyError:
        raise InvalidConfiguration(
            f"unknown integrator {integrator!r}; expected one of {sorted(INTEGRATORS)}"
        ) from None
