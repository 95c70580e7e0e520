"""
Exception hierarchy for the simulator.
"""


class GozSimError(Exception):
    """Base class for every error raised by the simulator."""


class ConstructionError(GozSimError, ValueError):
    """Raised when a combatant cannot be built from the supplied stat block."""


class InvariantViolation(GozSimError, RuntimeError):
    """Raised when the combat engine is driven into a state it forbids.

    Correct use never surfaces this: the round scheduler only lets conscious
    combatants act, and hit points are only ever lowered.
    """


class ConfigError(GozSimError):
    """Raised when a configuration or roster file cannot be understood."""
