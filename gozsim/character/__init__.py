"""
Character system module for the GOZ combat simulator.

This module handles combatant creation: the Combatant model and its derived
statistics, serialisable stat blocks, and the packaged presets.
"""

from .main import Combatant, construct_combatant
from .presets import (
    PresetRepository,
    create_thief,
    create_warrior,
    create_weak_bandit,
    create_wolf,
    default_repository,
    load_roster,
)
from .sheet import CombatantSheet, load_sheets

__all__ = [
    # Import from main.py
    "Combatant",
    "construct_combatant",
    # Import from presets.py
    "PresetRepository",
    "create_thief",
    "create_warrior",
    "create_weak_bandit",
    "create_wolf",
    "default_repository",
    "load_roster",
    # Import from sheet.py
    "CombatantSheet",
    "load_sheets",
]
