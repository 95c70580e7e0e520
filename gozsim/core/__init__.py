"""
Core system module for the GOZ combat simulator.

This module contains the fundamental components shared by the combat engine
and its collaborators: rule constants, dice, configuration, errors and
display utilities.
"""

from .config import (
    SimulationConfig,
    load_config,
)
from .constants import (
    DEFAULT_MAX_ROUNDS,
    DrawReason,
    MatchResult,
    StatusLabel,
    Team,
)
from .dice import (
    DiceRoller,
    RandomSource,
    RollBreakdown,
)
from .errors import (
    ConfigError,
    ConstructionError,
    GozSimError,
    InvariantViolation,
)
from .utils import (
    cprint,
    crule,
    make_bar,
)

__all__ = [
    # Import from config.py
    "SimulationConfig",
    "load_config",
    # Import from constants.py
    "DEFAULT_MAX_ROUNDS",
    "DrawReason",
    "MatchResult",
    "StatusLabel",
    "Team",
    # Import from dice.py
    "DiceRoller",
    "RandomSource",
    "RollBreakdown",
    # Import from errors.py
    "ConfigError",
    "ConstructionError",
    "GozSimError",
    "InvariantViolation",
    # Import from utils.py
    "cprint",
    "crule",
    "make_bar",
]
