import numpy as np
import pytest

from threebody.body import Body
from threebody.errors import InvalidConfiguration
from threebody.forces import GravityModel
from threebody.integrators import INTEGRATORS, get_integrator, rk4_step
from threebody.presets import figure_eight
from threebody.simulation import simulate
from threebody.system import System


def _drifting_system():
    return System(
        [
            Body(1.0, (0.0, 0.0, 0.0), (0.2, 0.1, 0.0)),
            Body(2.0, (1.0, 0.3, 0.0), (0.0, -0.4, 0.1)),
            Body(3.5, (-0.6, 1.2, 0.2), (0.3, 0.0, -0.2)),
        ]
    )


def _max_energy_drift(trajectory, model):
    energies = trajectory.energies(model)
    return float(np.max(np.abs(energies - energies[0])) / abs(energies[0]))


@pytest.mark.parametrize("name", sorted(INTEGRATORS))
def test_single_step_conserves_momentum(name):
    system = _drifting_system()
    model = GravityModel(1.0, 1e-3)
    stepped = INTEGRATORS[name](system, 0.01, model)
    np.testing.assert_allclose(
        stepped.total_momentum(), system.total_momentum(), rtol=0, atol=1e-12
    )


def test_step_does_not_touch_input():
    system = _drifting_system()
    before = system.positions.copy()
    stepped = rk4_step(system, 0.1, GravityModel())
    assert np.array_equal(system.positions, before)
    assert not np.array_equal(stepped.positions, before)
    assert np.array_equal(stepped.masses, system.masses)


def test_rk4_energy_drift_is_small():
    model = GravityModel(1.0, 1e-3)
    trajectory = simulate(figure_eight(), steps=1000, dt=0.001)
    assert _max_energy_drift(trajectory, model) < 1e-8


@pytest.mark.parametrize("name", ["rk4", "leapfrog"])
def test_energy_drift_tightens_with_smaller_dt(name):
    model = GravityModel(1.0, 1e-3)
    coarse = simulate(figure_eight(), steps=40, dt=0.05, integrator=name)
    fine = simulate(figure_eight(), steps=80, dt=0.025, integrator=name)
    assert _max_energy_drift(fine, model) < _max_energy_drift(coarse, model)


def test_get_integrator():
    assert get_integrator("rk4") is rk4_step
    assert get_integrator(rk4_step) is rk4_step
    with pytest.raises(InvalidConfiguration):
        get_integrator("verlet-9000")
