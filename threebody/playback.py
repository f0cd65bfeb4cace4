"""
Ping-pong playback over a precomputed Trajectory.

The cursor walks forward to the last frame, then backward to the first,
and repeats forever. For four frames the visited indices are
0, 1, 2, 3, 2, 1, 0, 1, 2, ...
"""

from __future__ import annotations

import enum
from typing import Iterator, Tuple

import numpy as np

from .errors import InvalidConfiguration
from .simulation import Trajectory
from .system import SystemSnapshot


class Direction(enum.Enum):
    FORWARD = 1
    BACKWARD = -1


def next_cursor(index: int, direction: Direction, length: int) -> Tuple[int, Direction]:
    """
    Return the cursor after one advance. The direction flips when the new
    index lands on either end, so the index never leaves [0, length - 1].
    """
    if length <= 1:
        return 0, Direction.FORWARD
    index += direction.value
    if index <= 0:
        return 0, Direction.FORWARD
    if index >= length - 1:
        return length - 1, Direction.BACKWARD
    return index, direction


def ping_pong_indices(length: int) -> Iterator[int]:
    """Yield the playback index sequence, starting at 0, without end."""
    if length < 1:
        raise InvalidConfiguration("length must be >= 1")
    index, direction = 0, Direction.FORWARD
    while True:
        yield index
        index, direction = next_cursor(index, direction, length)


class Playback:
    """
    Read-only view of a Trajectory driven by a ping-pong cursor. The
    presentation loop calls ``advance()`` once per rendered frame and draws
    ``current_frame()``.
    """

    def __init__(self, trajectory: Trajectory):
        if len(trajectory) == 0:
            raise InvalidConfiguration("cannot play back an empty trajectory")
        self._trajectory = trajectory
        self._index = 0
        self._direction = Direction.FORWARD

    @property
    def trajectory(self) -> Trajectory:
        return self._trajectory

    @property
    def index(self) -> int:
        return self._index

    @property
    def direction(self) -> Direction:
        return self._direction

    def current_frame(self) -> SystemSnapshot:
        return self._trajectory[self._index]

    def current_positions(self) -> np.ndarray:
        return self.current_frame().positions

    def advance(self) -> None:
        self._index, self._direction = next_cursor(
            self._index, self._direction, len(self._trajectory)
        )

    def reset(self) -> None:
        self._index = 0
        self._direction = Direction.FORWARD
