"""
Combatant sheet module for the simulator.

A CombatantSheet is the serialisable stat block of a fighter. Sheets are what
preset and roster files contain; each combat builds fresh Combatants from
them, so no hit-point state ever leaks from one combat to the next.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gozsim.core.errors import ConfigError, ConstructionError
from gozsim.items.weapon import Weapon

from .main import Combatant, construct_combatant


class CombatantSheet(BaseModel):
    """The stat block a Combatant is built from."""

    # Misspelled fields in roster files are errors, not silently dropped.
    model_config = ConfigDict(extra="forbid")

    name: str = Field(
        description="The display name of the combatant.",
    )
    strength: int = Field(description="Strength attribute.")
    dexterity: int = Field(description="Dexterity attribute.")
    intelligence: int = Field(description="Intelligence attribute.")
    health: int = Field(description="Health attribute.")
    skills: dict[str, int] = Field(
        default_factory=dict,
        description="Skill levels by skill key.",
    )
    armor: int = Field(
        default=0,
        description="Flat damage reduction.",
    )
    weapon: Weapon | None = Field(
        default=None,
        description="The weapon wielded; bare fists when omitted.",
    )
    max_hit_points: int | None = Field(
        default=None,
        description="Overrides the derived maximum hit points (minions).",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CombatantSheet":
        """
        Validates a dictionary into a sheet.

        Raises:
            ConstructionError: If the dictionary is not a valid stat block.

        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConstructionError(
                f"Invalid stat block for '{data.get('name', '?')}': {e}"
            ) from e

    def build(self, **overrides: Any) -> Combatant:
        """
        Builds a new Combatant from this sheet.

        Args:
            **overrides: Field values replacing those of the sheet, e.g. a
                different ``name``.

        Raises:
            ConstructionError: If the resulting stat block is invalid.

        """
        sheet = self
        if overrides:
            values = self.model_dump()
            values.update(overrides)
            sheet = CombatantSheet.from_dict(values)
        return construct_combatant(
            name=sheet.name,
            strength=sheet.strength,
            dexterity=sheet.dexterity,
            intelligence=sheet.intelligence,
            health=sheet.health,
            skills=sheet.skills,
            armor=sheet.armor,
            weapon=sheet.weapon,
            max_hit_points=sheet.max_hit_points,
        )


def load_sheets(file_path: Path) -> list[CombatantSheet]:
    """
    Loads a list of sheets from a JSON file.

    Args:
        file_path (Path): A JSON file holding a list of stat blocks.

    Raises:
        ConfigError: If the file cannot be read or is not a list.
        ConstructionError: If an entry is not a valid stat block.

    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load sheets from {file_path}: {e}") from e
    if not isinstance(data, list):
        raise ConfigError(f"Sheet data in {file_path} is not a list.")
    return [CombatantSheet.from_dict(entry) for entry in data]
