"""
GOZ combat simulator.

Resolves stochastic, turn-based melee combat between two rosters of
combatants until one side is incapacitated, both are, or a round limit is hit.
"""

from gozsim.character import Combatant, construct_combatant
from gozsim.combat import AttackOutcome, AttackResolver, CombatResult, CombatRunner, RoundScheduler
from gozsim.core import ConstructionError, DiceRoller, InvariantViolation, MatchResult, Team
from gozsim.items import Weapon

__version__ = "0.1.0"

__all__ = [
    "AttackOutcome",
    "AttackResolver",
    "CombatResult",
    "CombatRunner",
    "Combatant",
    "ConstructionError",
    "DiceRoller",
    "InvariantViolation",
    "MatchResult",
    "RoundScheduler",
    "Team",
    "Weapon",
    "construct_combatant",
]
