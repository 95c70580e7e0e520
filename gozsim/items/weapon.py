"""
Weapon module for the simulator.

Defines the Weapon model wielded by combatants.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

UNARMED_SKILL = "brawling"


class Weapon(BaseModel):
    """
    Represents a weapon that can be wielded by a combatant.

    A weapon adds a flat bonus to the strength-based damage of its wielder and
    names the skill used to attack with it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the weapon.",
    )
    damage_bonus: int = Field(
        default=0,
        description="Flat damage added to the wielder's strength damage.",
    )
    skill: str = Field(
        description="The skill key used to look up the wielder's proficiency.",
    )

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Weapon name must not be empty.")
        if not self.skill or not self.skill.strip():
            raise ValueError("Weapon skill must not be empty.")

    @classmethod
    def unarmed(cls) -> "Weapon":
        """Returns the bare fists used by a combatant with no weapon."""
        return cls(name="Fist", damage_bonus=0, skill=UNARMED_SKILL)

    def __str__(self) -> str:
        bonus = f"+{self.damage_bonus}" if self.damage_bonus >= 0 else str(self.damage_bonus)
        return f"{self.name} ({bonus}, {self.skill})"
