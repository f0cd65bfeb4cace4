from itertools import islice

import numpy as np
import pytest

from threebody.errors import InvalidConfiguration
from threebody.playback import Direction, Playback, next_cursor, ping_pong_indices
from threebody.presets import figure_eight
from threebody.simulation import Trajectory, simulate


def _trajectory(length):
    system = figure_eight()
    frames = [system.snapshot(step=n, time=n * 0.1) for n in range(length)]
    return Trajectory(frames, masses=system.masses, dt=0.1)


def test_four_frame_sequence():
    playback = Playback(_trajectory(4))
    visited = []
    for _ in range(10):
        visited.append(playback.index)
        playback.advance()
    assert visited == [0, 1, 2, 3, 2, 1, 0, 1, 2, 3]


def test_initial_state():
    playback = Playback(_trajectory(5))
    assert playback.index == 0
    assert playback.direction is Direction.FORWARD
    assert playback.current_frame().step == 0


@pytest.mark.parametrize("length", range(1, 9))
def test_round_trip_returns_to_start(length):
    playback = Playback(_trajectory(length))
    for _ in range(2 * (length - 1)):
        playback.advance()
        assert 0 <= playback.index < length
    assert playback.index == 0
    assert playback.direction is Direction.FORWARD


@pytest.mark.parametrize("length", [2, 3, 6])
def test_sequence_is_palindromic_around_endpoints(length):
    cycle = 2 * (length - 1)
    indices = list(islice(ping_pong_indices(length), 3 * cycle + 1))
    last = length - 1
    for turn in range(last, len(indices) - last, last):
        window = indices[turn - last : turn + last + 1]
        assert window == window[::-1]
        assert window[last] in (0, last)


def test_next_cursor_flips_only_at_ends():
    assert next_cursor(1, Direction.FORWARD, 4) == (2, Direction.FORWARD)
    assert next_cursor(2, Direction.FORWARD, 4) == (3, Direction.BACKWARD)
    assert next_cursor(3, Direction.BACKWARD, 4) == (2, Direction.BACKWARD)
    assert next_cursor(1, Direction.BACKWARD, 4) == (0, Direction.FORWARD)
    assert next_cursor(0, Direction.FORWARD, 1) == (0, Direction.FORWARD)


def test_playback_over_simulated_trajectory():
    trajectory = simulate(figure_eight(), steps=3, dt=0.01)
    playback = Playback(trajectory)
    for _ in range(3):
        playback.advance()
    assert playback.current_frame() is trajectory[3]
    np.testing.assert_array_equal(playback.current_positions(), trajectory[3].positions)
    playback.advance()
    assert playback.index == 2
    playback.reset()
    assert (playback.index, playback.direction) == (0, Direction.FORWARD)


def test_ping_pong_rejects_empty_length():
    with pytest.raises(InvalidConfiguration):
        next(ping_pong_indices(0))
