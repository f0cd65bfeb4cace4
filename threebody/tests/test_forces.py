import numpy as np
import pytest

from threebody.errors import InvalidConfiguration
from threebody.forces import GravityModel


def test_accelerations_match_newton():
    masses = np.array([1.0, 2.0, 3.0])
    positions = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 2.0]])
    acc = GravityModel(1.0, 1e-6).accelerations(masses, positions)
    np.testing.assert_allclose(acc[0], [2.0, 0.75])


def test_pair_forces_cancel():
    masses = np.array([1.0, 5.0, 0.3])
    positions = np.array([[0.1, -0.4, 2.0], [1.5, 0.2, -1.0], [-0.7, 0.9, 0.4]])
    forces = GravityModel(2.5, 1e-3).forces(masses, positions)
    np.testing.assert_allclose(forces.sum(axis=0), 0.0, atol=1e-12)


def test_close_encounter_distance_is_floored():
    masses = np.ones(3)
    positions = np.array([[0.0, 0.0], [1e-6, 0.0], [1e3, 0.0]])
    forces = GravityModel(1.0, 1e-3).forces(masses, positions)
    assert forces[0, 0] == pytest.approx(1e6, rel=1e-6)
    assert np.isfinite(forces).all()


def test_collocated_bodies_contribute_nothing():
    masses = np.ones(3)
    positions = np.array([[0.0, 0.0], [0.0, 0.0], [2.0, 0.0]])
    forces = GravityModel(1.0, 1e-3).forces(masses, positions)
    np.testing.assert_allclose(forces[0], [0.25, 0.0])
    np.testing.assert_allclose(forces[1], [0.25, 0.0])


def test_potential_energy():
    masses = np.array([1.0, 2.0, 3.0])
    positions = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 2.0]])
    expected = -(2.0 / 1.0 + 3.0 / 2.0 + 6.0 / np.sqrt(5.0))
    assert GravityModel(1.0, 1e-3).potential_energy(masses, positions) == pytest.approx(expected)


@pytest.mark.parametrize("g, epsilon", [(-1.0, 1e-3), (1.0, 0.0), (1.0, -1.0), (float("inf"), 1e-3)])
def test_invalid_model_parameters(g, epsilon):
    with pytest.raises(InvalidConfiguration):
        GravityModel(g, epsilon)
