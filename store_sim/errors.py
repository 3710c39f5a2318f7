"""
Errors raised at the simulation boundary.
"""


class InvalidConfigurationError(ValueError):
    """Raised when the simulator is built with out-of-range parameters."""
