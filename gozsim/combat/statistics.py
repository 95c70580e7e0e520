"""
Statistics module for the simulator.

Plays many independent combats between freshly built rosters and summarises
win rates, combat length and how much punishment the lead fighter of roster 1
takes before winning.
"""

import math
from collections.abc import Callable, Sequence

from pydantic import BaseModel, Field

from gozsim.character.main import Combatant
from gozsim.core.constants import DEFAULT_MAX_ROUNDS, MatchResult
from gozsim.core.dice import DiceRoller
from gozsim.core.logging import get_logger

from .runner import CombatRunner

logger = get_logger(__name__)

# Builds the two rosters of one combat. Called once per combat, so that no
# combatant is ever reused.
RosterFactory = Callable[[], tuple[Sequence[Combatant], Sequence[Combatant]]]


def estimate_hits_received(combatant: Combatant, per_hit: int) -> int:
    """
    Estimates how many hits a combatant took from the hit points it lost.

    Assumes every hit deals roughly ``per_hit`` damage.
    """
    if per_hit <= 0:
        raise ValueError(f"per_hit must be positive, got {per_hit}")
    return math.ceil(combatant.damage_taken / per_hit)


class BatchSummary(BaseModel):
    """Aggregate results of a batch of combats."""

    runs: int = Field(description="Number of combats played.")
    team1_wins: int = Field(default=0, description="Combats won by roster 1.")
    team2_wins: int = Field(default=0, description="Combats won by roster 2.")
    draws: int = Field(default=0, description="Combats ending in a draw.")
    total_rounds: int = Field(default=0, description="Rounds played over the batch.")
    total_hits_received: int = Field(
        default=0,
        description="Estimated hits taken by roster 1's lead in its wins.",
    )

    @property
    def average_rounds(self) -> float:
        return self.total_rounds / self.runs if self.runs else 0.0

    @property
    def team1_win_rate(self) -> float:
        return self.team1_wins / self.runs if self.runs else 0.0

    @property
    def average_hits_received(self) -> float | None:
        """Average estimated hits taken per roster 1 win, None without wins."""
        if not self.team1_wins:
            return None
        return self.total_hits_received / self.team1_wins


def run_batch(
    roster_factory: RosterFactory,
    runs: int,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    seed: int | None = None,
    per_hit: int = 4,
) -> BatchSummary:
    """
    Plays ``runs`` independent combats and summarises them.

    Each combat gets fresh rosters from ``roster_factory`` and its own
    child roller spawned from a master roller seeded with ``seed``.

    Raises:
        ValueError: If ``runs`` is less than one.

    """
    if runs < 1:
        raise ValueError(f"runs must be at least 1, got {runs}")

    master = DiceRoller(seed=seed)
    summary = BatchSummary(runs=runs)
    for index in range(runs):
        roster1, roster2 = roster_factory()
        result = CombatRunner(dice=master.spawn()).run(roster1, roster2, max_rounds)
        summary.total_rounds += result.rounds_played
        if result.result == MatchResult.TEAM_1:
            summary.team1_wins += 1
            if roster1:
                summary.total_hits_received += estimate_hits_received(roster1[0], per_hit)
        elif result.result == MatchResult.TEAM_2:
            summary.team2_wins += 1
        else:
            summary.draws += 1
        logger.debug(
            "Batch combat %d/%d: %s in %d round(s)",
            index + 1,
            runs,
            result.result.name,
            result.rounds_played,
        )
    return summary
