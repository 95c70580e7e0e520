"""
Attack resolution module for the simulator.

Resolves a single melee attack between two combatants: the 3d6 attack roll
against the attacker's skill, the critical bands, the defender's evasion roll
and the damage that gets through armor.
"""

from gozsim.character.main import Combatant
from gozsim.core.constants import (
    CRITICAL_FAILURE_MIN,
    CRITICAL_SUCCESS_MAX,
    DEFENSE_BONUS,
)
from gozsim.core.dice import DiceRoller
from gozsim.core.errors import InvariantViolation
from gozsim.core.logging import get_logger

from .events import AttackOutcome

logger = get_logger(__name__)


def base_damage(attacker: Combatant) -> int:
    """Returns a third of the attacker's strength plus the weapon bonus."""
    return attacker.strength // 3 + attacker.weapon.damage_bonus


def compute_damage(attacker: Combatant, defender: Combatant, critical: bool = False) -> int:
    """
    Computes the damage an unevaded hit deals.

    Armor is subtracted first and the result floored at zero. A critical
    success doubles what is left, so armor that stops a normal hit also stops
    a critical one.

    Args:
        attacker (Combatant): The combatant dealing the hit.
        defender (Combatant): The combatant receiving it.
        critical (bool): Whether the attack was a critical success.

    Returns:
        int: The damage to apply, never negative.

    """
    damage = max(0, base_damage(attacker) - defender.armor)
    if critical:
        damage *= 2
    return damage


class AttackResolver:
    """
    Resolves attacks with dice drawn from a single roller.

    The resolver is the only component that writes a combatant's hit points,
    and only the defender's, once per call to ``resolve``.

    Attributes:
        dice (DiceRoller): Source of the attack and defense rolls.

    """

    def __init__(self, dice: DiceRoller) -> None:
        self.dice = dice

    def resolve(self, attacker: Combatant, defender: Combatant) -> AttackOutcome:
        """
        Resolves one attack of ``attacker`` against ``defender``.

        Args:
            attacker (Combatant): The acting combatant; must be conscious.
            defender (Combatant): The target; its hit points drop on damage.

        Returns:
            AttackOutcome: The full record of the resolution.

        Raises:
            InvariantViolation: If the attacker is unconscious.

        """
        if not attacker.is_conscious():
            raise InvariantViolation(
                f"{attacker.name} cannot attack while unconscious "
                f"({attacker.hit_points}/{attacker.max_hit_points} HP)"
            )

        skill_value = attacker.effective_skill(attacker.weapon.skill)
        target_number = skill_value + attacker.injury_penalty()
        attack_roll = self.dice.roll_3d6()

        outcome = {
            "attacker": attacker.name,
            "defender": defender.name,
            "attack_roll": attack_roll,
            "target_number": target_number,
        }

        # Critical bands take precedence over the skill comparison.
        if attack_roll <= CRITICAL_SUCCESS_MAX:
            outcome["critical_success"] = True
            outcome["hit"] = True
        elif attack_roll >= CRITICAL_FAILURE_MIN:
            outcome["critical_failure"] = True
            logger.debug("%s fumbles against %s (%d)", attacker.name, defender.name, attack_roll)
            return AttackOutcome(**outcome)
        else:
            outcome["hit"] = attack_roll <= target_number

        if not outcome["hit"]:
            return AttackOutcome(**outcome)

        defense_roll = self.dice.roll_3d6()
        defense_target = defender.base_defense + DEFENSE_BONUS
        defended = defense_roll <= defense_target
        outcome.update(
            defense_roll=defense_roll,
            defense_target=defense_target,
            defended=defended,
        )
        if defended:
            return AttackOutcome(**outcome)

        damage = compute_damage(attacker, defender, outcome.get("critical_success", False))
        remaining = defender.apply_damage(damage)
        outcome.update(
            damage=damage,
            defender_hit_points=remaining,
            defender_max_hit_points=defender.max_hit_points,
            defender_status=defender.status(),
        )
        logger.debug(
            "%s deals %d damage to %s (%d/%d HP left)",
            attacker.name,
            damage,
            defender.name,
            remaining,
            defender.max_hit_points,
        )
        return AttackOutcome(**outcome)
