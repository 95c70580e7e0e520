"""
Combatant module for the simulator.

Defines the Combatant class, one fighter for the duration of a single combat,
with its primary attributes, equipment, skills and the derived statistics the
combat engine queries.
"""

from collections.abc import Mapping

from gozsim.core.constants import (
    INJURY_THRESHOLDS,
    SKILL_LEVEL_BONUS,
    UNTRAINED_PENALTY,
    StatusLabel,
)
from gozsim.core.errors import ConstructionError, InvariantViolation
from gozsim.items.weapon import Weapon


class Combatant:
    """
    Represents a fighter taking part in one combat.

    Maximum hit points and base defense are derived once at construction and
    never change afterwards. Current hit points start at the maximum and are
    only ever lowered, through ``apply_damage``, by the attack resolver. They
    have no lower bound: a combatant at or below zero is unconscious.

    Attributes:
        name (str):
            The name of the combatant, used for display only.
        strength (int):
            Drives hit points and damage.
        dexterity (int):
            Drives skill, defense and initiative.
        intelligence (int):
            Carried on the stat block; not used by melee resolution.
        health (int):
            Drives hit points.
        skills (dict[str, int]):
            Skill levels by skill key. A missing key means untrained.
        armor (int):
            Flat damage reduction.
        weapon (Weapon):
            The weapon the combatant attacks with.

    """

    name: str
    strength: int
    dexterity: int
    intelligence: int
    health: int
    skills: dict[str, int]
    armor: int
    weapon: Weapon

    def __init__(
        self,
        name: str,
        strength: int,
        dexterity: int,
        intelligence: int,
        health: int,
        skills: Mapping[str, int] | None = None,
        armor: int = 0,
        weapon: Weapon | None = None,
        max_hit_points: int | None = None,
    ) -> None:
        """
        Builds a combatant and derives its statistics.

        Args:
            name (str): The name of the combatant.
            strength (int): Strength attribute.
            dexterity (int): Dexterity attribute.
            intelligence (int): Intelligence attribute.
            health (int): Health attribute.
            skills (Mapping[str, int] | None): Skill levels by key.
            armor (int): Flat damage reduction, non-negative.
            weapon (Weapon | None): The weapon wielded; bare fists if None.
            max_hit_points (int | None):
                Overrides the derived maximum, as done for minions.

        Raises:
            ConstructionError: If the stat block is invalid.

        """
        attributes = {
            "strength": strength,
            "dexterity": dexterity,
            "intelligence": intelligence,
            "health": health,
        }
        for key, value in attributes.items():
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConstructionError(
                    f"{name}: {key} must be an integer, got {value!r}"
                )
            if value < 0:
                raise ConstructionError(f"{name}: {key} must not be negative, got {value}")
        if strength + health <= 0:
            raise ConstructionError(
                f"{name}: strength + health must be positive to have hit points"
            )
        if not isinstance(armor, int) or isinstance(armor, bool) or armor < 0:
            raise ConstructionError(f"{name}: armor must be a non-negative integer, got {armor!r}")
        if max_hit_points is not None and (
            not isinstance(max_hit_points, int) or max_hit_points <= 0
        ):
            raise ConstructionError(
                f"{name}: max_hit_points override must be positive, got {max_hit_points!r}"
            )
        skills = dict(skills or {})
        for key, level in skills.items():
            if not isinstance(level, int) or isinstance(level, bool):
                raise ConstructionError(f"{name}: skill '{key}' level must be an integer")

        self.name = name
        self.strength = strength
        self.dexterity = dexterity
        self.intelligence = intelligence
        self.health = health
        self.skills = skills
        self.armor = armor
        self.weapon = weapon or Weapon.unarmed()

        self._max_hit_points: int = (
            max_hit_points if max_hit_points is not None else (strength + health) * 2
        )
        self._base_defense: int = dexterity // 2
        self._hit_points: int = self._max_hit_points

    # ============================================================================
    # DERIVED STATISTICS
    # ============================================================================

    @property
    def max_hit_points(self) -> int:
        """Returns the maximum hit points, fixed at construction."""
        return self._max_hit_points

    @property
    def hit_points(self) -> int:
        """Returns the current hit points; may be zero or negative."""
        return self._hit_points

    @property
    def base_defense(self) -> int:
        """Returns half the dexterity, rounded down, fixed at construction."""
        return self._base_defense

    @property
    def damage_taken(self) -> int:
        """Returns how many hit points the combatant has lost so far."""
        return self._max_hit_points - self._hit_points

    def hit_point_fraction(self) -> float:
        """Returns the current hit points as a fraction of the maximum."""
        return self._hit_points / self._max_hit_points

    def effective_skill(self, skill_key: str) -> int:
        """
        Returns the value an attack roll with the given skill must not exceed.

        A trained skill (level above zero) adds four per level to dexterity,
        while an untrained one falls back to dexterity minus six.

        Args:
            skill_key (str): The key of the skill to look up.

        Returns:
            int: The effective skill value.

        """
        level = self.skills.get(skill_key, 0)
        if level > 0:
            return self.dexterity + SKILL_LEVEL_BONUS * level
        return self.dexterity + UNTRAINED_PENALTY

    def _injury_tier(self) -> int:
        """Returns 0 to 3, the number of hit-point thresholds crossed."""
        fraction = self.hit_point_fraction()
        for tier, threshold in enumerate(INJURY_THRESHOLDS):
            if fraction > threshold:
                return tier
        return len(INJURY_THRESHOLDS)

    def injury_penalty(self) -> int:
        """Returns the attack modifier for the current wounds, from 0 to -3."""
        return -self._injury_tier()

    def is_conscious(self) -> bool:
        """Checks if the combatant is still standing (hit points above zero)."""
        return self._hit_points > 0

    def status(self) -> StatusLabel:
        """Returns the wound status label of the combatant."""
        if not self.is_conscious():
            return StatusLabel.UNCONSCIOUS
        return (
            StatusLabel.HEALTHY,
            StatusLabel.LIGHTLY_WOUNDED,
            StatusLabel.SERIOUSLY_WOUNDED,
            StatusLabel.CRITICAL,
        )[self._injury_tier()]

    # ============================================================================
    # HIT POINT MUTATION
    # ============================================================================

    def apply_damage(self, amount: int) -> int:
        """
        Lowers the current hit points by ``amount``, with no floor at zero.

        Only the attack resolver calls this, once per resolution.

        Args:
            amount (int): The damage to apply, zero or more.

        Returns:
            int: The hit points left after the damage.

        Raises:
            InvariantViolation: If ``amount`` is negative, which would lift
                hit points and could push them above the maximum.

        """
        if amount < 0:
            raise InvariantViolation(
                f"Cannot apply negative damage ({amount}) to {self.name}"
            )
        self._hit_points -= amount
        return self._hit_points

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, "
            f"hp={self._hit_points}/{self._max_hit_points})"
        )


def construct_combatant(
    name: str,
    strength: int,
    dexterity: int,
    intelligence: int,
    health: int,
    skills: Mapping[str, int] | None = None,
    armor: int = 0,
    weapon: Weapon | None = None,
    max_hit_points: int | None = None,
) -> Combatant:
    """
    Builds a Combatant from a stat block.

    Raises:
        ConstructionError: If the stat block is invalid; no combatant is made.

    """
    return Combatant(
        name=name,
        strength=strength,
        dexterity=dexterity,
        intelligence=intelligence,
        health=health,
        skills=skills,
        armor=armor,
        weapon=weapon,
        max_hit_points=max_hit_points,
    )
