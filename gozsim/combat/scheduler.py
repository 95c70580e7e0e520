"""
Round scheduling module for the simulator.

Runs one round of combat: builds the initiative order of the conscious
combatants, lets each of them attack a random conscious enemy, and reports
whether the round ended the combat early.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from gozsim.character.main import Combatant
from gozsim.core.constants import Team
from gozsim.core.dice import DiceRoller
from gozsim.core.logging import get_logger

from .events import AttackEvent, EventSink
from .resolver import AttackResolver

logger = get_logger(__name__)


class RoundStatus(Enum):
    """How a round ended."""

    # Everybody in the initiative order acted; the runner decides what next.
    CONTINUE = "continue"
    # An actor found no conscious enemy left; its team won mid-round.
    EARLY_WIN = "early_win"
    # Nobody was conscious to start the round.
    MUTUAL_INCAPACITATION = "mutual_incapacitation"


@dataclass(frozen=True)
class RoundOutcome:
    """Result of one round, with the winner set only on an early win."""

    status: RoundStatus
    winner: Team | None = None


@dataclass(frozen=True)
class InitiativeEntry:
    """A combatant in the initiative order, tagged with its team."""

    combatant: Combatant
    team: Team


def conscious_members(roster: Sequence[Combatant]) -> list[Combatant]:
    """Returns the conscious members of a roster, in roster order."""
    return [c for c in roster if c.is_conscious()]


def build_initiative_order(
    roster1: Sequence[Combatant],
    roster2: Sequence[Combatant],
) -> list[InitiativeEntry]:
    """
    Builds the acting order of a round.

    Conscious members of roster 1 then roster 2 are sorted by descending
    dexterity. The sort is stable, so at equal dexterity roster order is kept
    and roster 1 acts before roster 2.
    """
    entries = [InitiativeEntry(c, Team.ONE) for c in conscious_members(roster1)]
    entries += [InitiativeEntry(c, Team.TWO) for c in conscious_members(roster2)]
    return sorted(entries, key=lambda e: e.combatant.dexterity, reverse=True)


class RoundScheduler:
    """
    Drives single rounds of combat between two rosters.

    Attributes:
        dice (DiceRoller): Source of target selection draws.
        resolver (AttackResolver): Resolves each attack.
        sink (EventSink): Receives one AttackEvent per resolved attack.

    """

    def __init__(
        self,
        dice: DiceRoller,
        sink: EventSink,
        resolver: AttackResolver | None = None,
    ) -> None:
        self.dice = dice
        self.sink = sink
        self.resolver = resolver or AttackResolver(dice)

    def choose_target(self, enemies: Sequence[Combatant]) -> Combatant:
        """Picks one of the given enemies uniformly at random."""
        return enemies[self.dice.pick_index(len(enemies))]

    def run_round(
        self,
        roster1: Sequence[Combatant],
        roster2: Sequence[Combatant],
    ) -> RoundOutcome:
        """
        Runs one round.

        Returns:
            RoundOutcome: MUTUAL_INCAPACITATION if nobody could act, EARLY_WIN
                as soon as an actor has no conscious enemy left (the rest of
                the order does not act), otherwise CONTINUE.

        """
        order = build_initiative_order(roster1, roster2)
        if not order:
            return RoundOutcome(RoundStatus.MUTUAL_INCAPACITATION)

        rosters = {Team.ONE: roster1, Team.TWO: roster2}
        for entry in order:
            actor = entry.combatant
            # Downed earlier in this round.
            if not actor.is_conscious():
                continue
            enemies = conscious_members(rosters[entry.team.opponent])
            if not enemies:
                logger.debug("%s finds no enemy standing", actor.name)
                return RoundOutcome(RoundStatus.EARLY_WIN, entry.team)
            target = self.choose_target(enemies)
            outcome = self.resolver.resolve(actor, target)
            self.sink.emit(AttackEvent(outcome=outcome))

        return RoundOutcome(RoundStatus.CONTINUE)
