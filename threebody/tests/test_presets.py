import math

import numpy as np
import pytest

from threebody.errors import InvalidConfiguration
from threebody.presets import PRESETS, build_preset, figure_eight, preset_period
from threebody.simulation import simulate


@pytest.mark.parametrize("name", ["figure_eight", "lagrange"])
def test_periodic_presets_close_after_one_period(name):
    initial = build_preset(name)
    steps = 2000
    trajectory = simulate(initial, steps=steps, dt=preset_period(name) / steps)
    assert not trajectory.truncated
    final = trajectory.final()
    np.testing.assert_allclose(final.positions, initial.positions, atol=1e-3)
    np.testing.assert_allclose(final.velocities, initial.velocities, atol=1e-3)


def test_presets_start_with_zero_momentum():
    for name in PRESETS:
        np.testing.assert_allclose(build_preset(name).total_momentum(), 0.0, atol=1e-8)


def test_velocities_scale_with_gravitational_constant():
    base = figure_eight(1.0)
    scaled = figure_eight(4.0)
    np.testing.assert_allclose(scaled.velocities, 2.0 * base.velocities)
    assert preset_period("figure_eight", 4.0) == pytest.approx(preset_period("figure_eight") / 2.0)


def test_lagrange_period():
    assert preset_period("lagrange") == pytest.approx(2 * math.pi / math.sqrt(3.0))
    assert preset_period("free_fall") is None


def test_unknown_or_unusable_presets():
    with pytest.raises(InvalidConfiguration):
        build_preset("pythagorean")
    with pytest.raises(InvalidConfiguration):
        preset_period("pythagorean")
    with pytest.raises(InvalidConfiguration):
        figure_eight(0.0)
