"""
Items system module for the GOZ combat simulator.

This module contains equipment definitions, currently the weapons combatants
attack with.
"""

from .weapon import UNARMED_SKILL, Weapon

__all__ = [
    # Import from weapon.py
    "UNARMED_SKILL",
    "Weapon",
]
