"""
Preset module for the simulator.

Loads the packaged stat blocks (warrior, thief, weak bandit and wolf) and
builds fresh combatants from them, either one at a time or as whole rosters
described in a JSON file.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning

from gozsim.core.errors import ConfigError

from .main import Combatant
from .sheet import CombatantSheet

# Packaged preset file.
PRESETS_FILE = Path(__file__).parent.parent / "data" / "presets.json"


class PresetRepository:
    """
    By-key registry of the preset stat blocks.

    Attributes:
        sheets (dict[str, CombatantSheet]):
            The loaded sheets, keyed by preset name.

    """

    sheets: dict[str, CombatantSheet]

    def __init__(self, path: Path | None = None) -> None:
        """
        Initialize the repository.

        Args:
            path (Path | None):
                A JSON file mapping preset keys to stat blocks. Defaults to the
                presets shipped with the package.

        """
        self.reload(path or PRESETS_FILE)

    def reload(self, path: Path) -> None:
        """
        (Re)load the stat blocks from disk.

        Raises:
            ConfigError: If the file cannot be read or is not a mapping.

        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to load presets from {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Preset data in {path} is not a mapping.")
        self.sheets = {
            key: CombatantSheet.from_dict(entry) for key, entry in data.items()
        }

    def keys(self) -> list[str]:
        """Returns the available preset keys."""
        return sorted(self.sheets)

    def get(self, key: str) -> CombatantSheet:
        """
        Returns the sheet registered under ``key``.

        Raises:
            KeyError: If no such preset exists.

        """
        if key not in self.sheets:
            log_warning(
                f"Preset '{key}' not found",
                {
                    "preset": key,
                    "available_presets": self.keys(),
                    "context": "preset_lookup",
                },
            )
            raise KeyError(key)
        return self.sheets[key]

    def create(self, key: str, name: str | None = None, **overrides: Any) -> Combatant:
        """
        Builds a new combatant from a preset.

        Args:
            key (str): The preset key.
            name (str | None): The name of the new combatant.
            **overrides: Stat block fields replacing the preset's ones.

        """
        if name is not None:
            overrides["name"] = name
        return self.get(key).build(**overrides)


_DEFAULT_REPOSITORY: PresetRepository | None = None


def default_repository() -> PresetRepository:
    """Returns the repository of the packaged presets, loading it once."""
    global _DEFAULT_REPOSITORY
    if _DEFAULT_REPOSITORY is None:
        _DEFAULT_REPOSITORY = PresetRepository()
    return _DEFAULT_REPOSITORY


def create_warrior(name: str) -> Combatant:
    """Chain-mailed swordsman with a long sword."""
    return default_repository().create("warrior", name)


def create_thief(name: str) -> Combatant:
    """Nimble dagger fighter in reinforced leather."""
    return default_repository().create("thief", name)


def create_weak_bandit(name: str) -> Combatant:
    """Rank-and-file axe bandit, capped at 10 hit points."""
    return default_repository().create("weak_bandit", name)


def create_wolf(name: str, minion: bool = True) -> Combatant:
    """
    A wolf. Pack wolves are minions capped at 10 hit points; a lone wolf
    keeps the hit points its attributes give it.
    """
    if minion:
        return default_repository().create("wolf", name)
    return default_repository().create("wolf", name, max_hit_points=None)


def load_roster(
    file_path: Path | str,
    repository: PresetRepository | None = None,
) -> list[Combatant]:
    """
    Builds a roster from a JSON file.

    The file holds a list whose entries are either full stat blocks or
    references to a preset, such as ``{"preset": "wolf", "name": "Wolf 1"}``,
    optionally with further fields overriding the preset.

    Raises:
        ConfigError: If the file cannot be read or is malformed.
        ConstructionError: If an entry is not a valid stat block.

    """
    repository = repository or default_repository()
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load roster from {file_path}: {e}") from e
    if not isinstance(data, list):
        raise ConfigError(f"Roster data in {file_path} is not a list.")

    roster: list[Combatant] = []
    for entry in data:
        if not isinstance(entry, dict):
            raise ConfigError(f"Roster entry {entry!r} in {file_path} is not an object.")
        entry = dict(entry)
        preset = entry.pop("preset", None)
        if preset is None:
            roster.append(CombatantSheet.from_dict(entry).build())
            continue
        try:
            sheet = repository.get(preset)
        except KeyError as e:
            raise ConfigError(f"Unknown preset '{preset}' in {file_path}") from e
        roster.append(sheet.build(**entry))
    return roster
