"""
Dice module for the simulator.

Every random decision of a combat (attack rolls, defense rolls and target
selection) is drawn from a single DiceRoller, so that a combat is a
deterministic function of its random source and can be replayed from a seed.
"""

import random
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from .constants import DICE_COUNT, DICE_SIDES


@runtime_checkable
class RandomSource(Protocol):
    """Anything producing uniform integers in an inclusive range.

    ``random.Random`` satisfies this protocol, and tests plug in scripted
    sources returning predetermined values.
    """

    def randint(self, a: int, b: int) -> int: ...


class RollBreakdown(BaseModel):
    """Class to hold roll breakdown information."""

    value: int = Field(
        description="Total roll result",
    )
    rolls: list[int] = Field(
        description="List of individual dice rolls",
        default_factory=list,
    )

    def __str__(self) -> str:
        return f"{' + '.join(str(r) for r in self.rolls)} = {self.value}"


class DiceRoller:
    """
    Rolls dice and picks random indices on top of a RandomSource.

    Attributes:
        source (RandomSource):
            The underlying source of uniform integers.

    """

    def __init__(
        self,
        source: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the roller.

        Args:
            source (RandomSource | None):
                The source to draw from. When omitted, a private
                ``random.Random`` seeded with ``seed`` is created.
            seed (int | None):
                Seed for the private generator. Ignored if ``source`` is given.

        """
        if source is None:
            source = random.Random(seed)
        self.source: RandomSource = source

    def roll(self, count: int = DICE_COUNT, sides: int = DICE_SIDES) -> RollBreakdown:
        """
        Rolls ``count`` dice with ``sides`` faces each.

        Args:
            count (int): Number of dice to roll.
            sides (int): Number of faces on each die.

        Returns:
            RollBreakdown: The total and the individual results.

        """
        if count <= 0 or sides <= 0:
            raise ValueError(f"Cannot roll {count}d{sides}")
        rolls = [self.source.randint(1, sides) for _ in range(count)]
        return RollBreakdown(value=sum(rolls), rolls=rolls)

    def roll_3d6(self) -> int:
        """Rolls the standard 3d6 used for attacks and defenses (range 3-18)."""
        return self.roll(DICE_COUNT, DICE_SIDES).value

    def pick_index(self, size: int) -> int:
        """
        Picks a uniformly random index into a sequence of length ``size``.

        Raises:
            ValueError: If ``size`` is not positive.

        """
        if size <= 0:
            raise ValueError(f"Cannot pick from an empty sequence (size={size})")
        return self.source.randint(0, size - 1)

    def spawn(self) -> "DiceRoller":
        """
        Creates a child roller with its own independent stream.

        The child is seeded from this roller, so a batch of combats started
        from one seeded roller is reproducible while no two combats share a
        generator.
        """
        return DiceRoller(seed=self.source.randint(0, 2**32 - 1))
