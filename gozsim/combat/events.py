"""
Event system module for the simulator.

The combat engine never formats text. Instead it emits an ordered stream of
typed events, which a presentation layer renders and tests inspect.
"""

from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from gozsim.core.constants import DrawReason, StatusLabel, Team


class EventType(Enum):
    """Enumeration of available event types."""

    ROUND_START = "round_start"  # Before the first action of a round
    ATTACK = "attack"  # After one attack has been resolved
    ROUND_END = "round_end"  # After the last action of a completed round
    WINNER_DECLARED = "winner_declared"  # A team won the combat
    DRAW_DECLARED = "draw_declared"  # The combat ended without a winner


class AttackOutcome(BaseModel):
    """
    Immutable record of one attack resolution.

    The defense fields are only set when the attack hit, and the damage
    fields only when the hit was not evaded.
    """

    model_config = ConfigDict(frozen=True)

    attacker: str = Field(description="Name of the attacker.")
    defender: str = Field(description="Name of the defender.")
    attack_roll: int = Field(description="The 3d6 attack roll.")
    target_number: int = Field(description="Effective skill plus injury penalty.")
    hit: bool = Field(default=False, description="Whether the attack hit.")
    critical_success: bool = Field(
        default=False,
        description="Roll in the automatic-hit band; damage is doubled.",
    )
    critical_failure: bool = Field(
        default=False,
        description="Roll in the automatic-miss band.",
    )
    defense_roll: int | None = Field(
        default=None,
        description="The defender's 3d6 evasion roll, if the attack hit.",
    )
    defense_target: int | None = Field(
        default=None,
        description="The value the evasion roll had to stay under or equal.",
    )
    defended: bool | None = Field(
        default=None,
        description="Whether the defender evaded the hit, if the attack hit.",
    )
    damage: int = Field(
        default=0,
        description="Hit points removed from the defender.",
    )
    defender_hit_points: int | None = Field(
        default=None,
        description="The defender's hit points after the damage, if applied.",
    )
    defender_max_hit_points: int | None = Field(
        default=None,
        description="The defender's maximum hit points, if damage was applied.",
    )
    defender_status: StatusLabel | None = Field(
        default=None,
        description="The defender's wound status after the damage, if applied.",
    )

    @property
    def damage_applied(self) -> bool:
        """Whether the damage step ran (a hit that was not evaded)."""
        return self.defender_hit_points is not None


class CombatEvent(BaseModel):
    """Base class for all combat events."""

    model_config = ConfigDict(frozen=True)

    event_type: EventType = Field(
        description="The type of combat event.",
    )


class RoundStartEvent(CombatEvent):
    """Emitted when a round begins."""

    event_type: EventType = Field(
        default=EventType.ROUND_START,
        description="The type of combat event.",
    )
    round_number: int = Field(description="The 1-based number of the round.")

    def __str__(self) -> str:
        return f"RoundStartEvent(round={self.round_number})"


class AttackEvent(CombatEvent):
    """Emitted for every resolved attack."""

    event_type: EventType = Field(
        default=EventType.ATTACK,
        description="The type of combat event.",
    )
    outcome: AttackOutcome = Field(description="The resolved attack.")

    def __str__(self) -> str:
        return (
            f"AttackEvent({self.outcome.attacker} on {self.outcome.defender}, "
            f"roll={self.outcome.attack_roll}, hit={self.outcome.hit}, "
            f"damage={self.outcome.damage})"
        )


class RoundEndEvent(CombatEvent):
    """Emitted when every combatant in the initiative order had its chance."""

    event_type: EventType = Field(
        default=EventType.ROUND_END,
        description="The type of combat event.",
    )
    round_number: int = Field(description="The 1-based number of the round.")

    def __str__(self) -> str:
        return f"RoundEndEvent(round={self.round_number})"


class WinnerDeclaredEvent(CombatEvent):
    """Emitted when one team is the last with conscious members."""

    event_type: EventType = Field(
        default=EventType.WINNER_DECLARED,
        description="The type of combat event.",
    )
    team: Team = Field(description="The winning team.")

    def __str__(self) -> str:
        return f"WinnerDeclaredEvent(team={int(self.team)})"


class DrawDeclaredEvent(CombatEvent):
    """Emitted when a combat ends without a winner."""

    event_type: EventType = Field(
        default=EventType.DRAW_DECLARED,
        description="The type of combat event.",
    )
    reason: DrawReason = Field(description="Why nobody won.")

    def __str__(self) -> str:
        return f"DrawDeclaredEvent(reason={self.reason})"


class EventSink(Protocol):
    """Consumer of combat events, such as a console renderer."""

    def emit(self, event: CombatEvent) -> None: ...


class EventLog:
    """An EventSink that keeps every event, in order."""

    def __init__(self) -> None:
        self.events: list[CombatEvent] = []

    def emit(self, event: CombatEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> list[CombatEvent]:
        """Returns the recorded events of the given type."""
        return [e for e in self.events if e.event_type == event_type]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)
