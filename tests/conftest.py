"""
Shared fixtures: deterministic dice for resolution and scheduling tests.
"""

import pytest

from gozsim.character.main import Combatant
from gozsim.core.dice import DiceRoller
from gozsim.items.weapon import Weapon


class ScriptedSource:
    """A RandomSource returning predetermined values, in order."""

    def __init__(self, values):
        self.values = list(values)

    def randint(self, a, b):
        if not self.values:
            raise AssertionError("scripted source exhausted")
        value = self.values.pop(0)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


def three_dice(total):
    """Splits a 3d6 total into three die faces."""
    assert 3 <= total <= 18
    first = min(6, total - 2)
    second = min(6, total - first - 1)
    return [first, second, total - first - second]


@pytest.fixture
def make_dice():
    """
    Builds a DiceRoller from a script. Integers are 3d6 totals, and
    ("pick", i) entries are target selection draws.
    """

    def _make(*steps):
        values = []
        for step in steps:
            if isinstance(step, tuple):
                values.append(step[1])
            else:
                values.extend(three_dice(step))
        return DiceRoller(ScriptedSource(values))

    return _make


@pytest.fixture
def long_sword():
    return Weapon(name="Long Sword", damage_bonus=2, skill="sword")


@pytest.fixture
def warrior(long_sword):
    return Combatant(
        name="Warrior",
        strength=11,
        dexterity=10,
        intelligence=8,
        health=9,
        skills={"sword": 3},
        armor=3,
        weapon=long_sword,
    )


@pytest.fixture
def make_combatant():
    """Builds combatants with sensible defaults for the fields not given."""

    def _make(name="Fighter", **fields):
        values = {
            "strength": 10,
            "dexterity": 10,
            "intelligence": 10,
            "health": 10,
            "skills": {"sword": 3},
            "armor": 0,
            "weapon": Weapon(name="Sword", damage_bonus=2, skill="sword"),
        }
        values.update(fields)
        return Combatant(name=name, **values)

    return _make
