"""
Errors raised by the simulation core.
"""


class InvalidConfiguration(ValueError):
    """Raised when a System, model or simulation run is set up with bad values."""
