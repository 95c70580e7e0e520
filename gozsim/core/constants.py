"""
Constants and enumerations for the simulator.

Defines the rule constants of the GOZ v1 combat system together with the
enumerations used for teams, match results, draw reasons and wound status.
"""

from enum import Enum, IntEnum

# Critical bands of a 3d6 attack roll. A roll at or below the first is an
# automatic hit, a roll at or above the second is an automatic miss.
CRITICAL_SUCCESS_MAX = 4
CRITICAL_FAILURE_MIN = 17

# Skill levels add a flat bonus per level on top of dexterity, while an
# untrained fighter improvises with a heavy penalty.
SKILL_LEVEL_BONUS = 4
UNTRAINED_PENALTY = -6

# Added to the defender's base defense to get the evasion target.
DEFENSE_BONUS = 3

# Hit-point fractions above which each injury tier applies.
INJURY_THRESHOLDS: tuple[float, float, float] = (0.75, 0.5, 0.25)

DEFAULT_MAX_ROUNDS = 20

# Dice used by every roll in the system.
DICE_COUNT = 3
DICE_SIDES = 6


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class StatusLabel(NiceEnum):
    """Wound status of a combatant, from untouched to knocked out."""

    HEALTHY = "HEALTHY"
    LIGHTLY_WOUNDED = "LIGHTLY_WOUNDED"
    SERIOUSLY_WOUNDED = "SERIOUSLY_WOUNDED"
    CRITICAL = "CRITICAL"
    UNCONSCIOUS = "UNCONSCIOUS"

    @property
    def color(self) -> str:
        """Returns the color string associated with this status."""
        return {
            StatusLabel.HEALTHY: "bold green",
            StatusLabel.LIGHTLY_WOUNDED: "bold yellow",
            StatusLabel.SERIOUSLY_WOUNDED: "bold orange1",
            StatusLabel.CRITICAL: "bold red",
            StatusLabel.UNCONSCIOUS: "dim white",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies status color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class Team(IntEnum):
    """The two sides of a combat."""

    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> "Team":
        return Team.TWO if self is Team.ONE else Team.ONE

    @property
    def color(self) -> str:
        return "bold blue" if self is Team.ONE else "bold red"

    def colorize(self, message: str) -> str:
        """Applies team color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class MatchResult(IntEnum):
    """Final result of a combat: a draw or the winning roster."""

    DRAW = 0
    TEAM_1 = 1
    TEAM_2 = 2

    @classmethod
    def for_team(cls, team: Team) -> "MatchResult":
        return cls(int(team))


class DrawReason(NiceEnum):
    """Why a combat ended without a winner."""

    # Nobody was conscious when a round was about to start.
    ALL_UNCONSCIOUS = "ALL_UNCONSCIOUS"
    # Both rosters were emptied during the same round.
    MUTUAL_KNOCKOUT = "MUTUAL_KNOCKOUT"
    # The round limit was reached.
    TIMEOUT = "TIMEOUT"
