"""
Combat runner module for the simulator.

Plays rounds between two rosters until one side is incapacitated, both are,
or the round limit is hit, and returns the result together with the full
event stream of the combat.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from catchery import log_warning

from gozsim.character.main import Combatant
from gozsim.core.constants import DEFAULT_MAX_ROUNDS, DrawReason, MatchResult, Team
from gozsim.core.dice import DiceRoller
from gozsim.core.logging import get_logger

from .events import (
    CombatEvent,
    DrawDeclaredEvent,
    EventLog,
    EventSink,
    RoundEndEvent,
    RoundStartEvent,
    WinnerDeclaredEvent,
)
from .scheduler import RoundScheduler, RoundStatus

logger = get_logger(__name__)


@dataclass
class CombatResult:
    """
    Result of one combat.

    Attributes:
        result (MatchResult): DRAW, TEAM_1 or TEAM_2.
        rounds_played (int): Rounds started, including the deciding one.
        events (list[CombatEvent]): Every event of the combat, in order.
        draw_reason (DrawReason | None): Why nobody won, for draws only.

    """

    result: MatchResult
    rounds_played: int
    events: list[CombatEvent] = field(default_factory=list)
    draw_reason: DrawReason | None = None

    @property
    def winner(self) -> Team | None:
        """Returns the winning team, or None on a draw."""
        if self.result == MatchResult.DRAW:
            return None
        return Team(int(self.result))


class _Broadcast:
    """Records events and forwards them to an optional external sink."""

    def __init__(self, log: EventLog, sink: EventSink | None) -> None:
        self.log = log
        self.sink = sink

    def emit(self, event: CombatEvent) -> None:
        self.log.emit(event)
        if self.sink is not None:
            self.sink.emit(event)


class CombatRunner:
    """
    Runs complete combats.

    A runner owns its dice. Each call to ``run`` needs freshly built rosters,
    as combatants keep the wounds they took.

    Attributes:
        dice (DiceRoller): Source of every random draw of the combat.
        sink (EventSink | None): Optional live consumer of the events.

    """

    def __init__(
        self,
        dice: DiceRoller | None = None,
        seed: int | None = None,
        sink: EventSink | None = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            dice (DiceRoller | None): The roller to draw from.
            seed (int | None): Seed for a new roller when ``dice`` is None.
            sink (EventSink | None): Receives each event as it happens.

        """
        self.dice = dice or DiceRoller(seed=seed)
        self.sink = sink

    def run(
        self,
        roster1: Sequence[Combatant],
        roster2: Sequence[Combatant],
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ) -> CombatResult:
        """
        Runs a combat to its end.

        Args:
            roster1 (Sequence[Combatant]): Team 1, in roster order.
            roster2 (Sequence[Combatant]): Team 2, in roster order.
            max_rounds (int): Rounds after which the combat is a draw.

        Returns:
            CombatResult: The result, rounds played and event stream.

        Raises:
            ValueError: If ``max_rounds`` is less than one.

        """
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {max_rounds}")
        if not roster1 or not roster2:
            log_warning(
                "Combat started with an empty roster",
                {
                    "roster1_size": len(roster1),
                    "roster2_size": len(roster2),
                    "context": "combat_setup",
                },
            )

        log = EventLog()
        out = _Broadcast(log, self.sink)
        scheduler = RoundScheduler(self.dice, out)

        def finish(result: MatchResult, rounds: int, reason: DrawReason | None = None):
            if result == MatchResult.DRAW:
                out.emit(DrawDeclaredEvent(reason=reason))
            else:
                out.emit(WinnerDeclaredEvent(team=Team(int(result))))
            logger.debug("Combat over after %d round(s): %s", rounds, result.name)
            return CombatResult(result, rounds, log.events, reason)

        round_number = 0
        while round_number < max_rounds:
            round_number += 1
            out.emit(RoundStartEvent(round_number=round_number))
            logger.debug("Round %d starts", round_number)

            outcome = scheduler.run_round(roster1, roster2)
            if outcome.status == RoundStatus.MUTUAL_INCAPACITATION:
                return finish(MatchResult.DRAW, round_number, DrawReason.ALL_UNCONSCIOUS)
            if outcome.status == RoundStatus.EARLY_WIN:
                return finish(MatchResult.for_team(outcome.winner), round_number)

            out.emit(RoundEndEvent(round_number=round_number))

            team1_up = any(c.is_conscious() for c in roster1)
            team2_up = any(c.is_conscious() for c in roster2)
            if not team1_up and not team2_up:
                return finish(MatchResult.DRAW, round_number, DrawReason.MUTUAL_KNOCKOUT)
            if not team1_up:
                return finish(MatchResult.TEAM_2, round_number)
            if not team2_up:
                return finish(MatchResult.TEAM_1, round_number)

        return finish(MatchResult.DRAW, round_number, DrawReason.TIMEOUT)
