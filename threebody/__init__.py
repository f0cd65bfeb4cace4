from .body import Body
from .errors import InvalidConfiguration
from .forces import GravityModel
from .playback import Direction, Playback, next_cursor, ping_pong_indices
from .simulation import Trajectory, simulate
from .system import System, SystemSnapshot

__all__ = [
    "Body",
    "Direction",
    "GravityModel",
    "InvalidConfiguration",
    "Playback",
    "System",
    "SystemSnapshot",
    "Trajectory",
    "next_cursor",
    "ping_pong_indices",
    "simulate",
]
