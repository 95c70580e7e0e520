"""
Combat log module for the simulator.

Renders the event stream of a combat on the console with rich markup, along
with roster summaries, final statistics and batch tables.
"""

from collections.abc import Sequence

from rich.table import Table

from gozsim.character.main import Combatant
from gozsim.combat.events import (
    AttackEvent,
    AttackOutcome,
    CombatEvent,
    DrawDeclaredEvent,
    RoundEndEvent,
    RoundStartEvent,
    WinnerDeclaredEvent,
)
from gozsim.combat.statistics import BatchSummary, estimate_hits_received
from gozsim.core.constants import DrawReason, Team
from gozsim.core.utils import cprint, crule, make_bar

# Damage assumed per hit when estimating the hits a fighter received.
FINAL_STATS_PER_HIT = 5

DRAW_MESSAGES: dict[DrawReason, str] = {
    DrawReason.ALL_UNCONSCIOUS: "Everyone is unconscious!",
    DrawReason.MUTUAL_KNOCKOUT: "Draw: both sides are unconscious!",
    DrawReason.TIMEOUT: "The fight dragged on, round limit exceeded!",
}


def format_attack(outcome: AttackOutcome) -> str:
    """
    Formats one attack as a line of rich markup.

    Args:
        outcome (AttackOutcome): The attack to describe.

    Returns:
        str: The formatted line.

    """
    msg = f"{outcome.attacker} attacks {outcome.defender}: roll {outcome.attack_roll}"
    if outcome.critical_failure:
        return msg + " - [dim red]critical failure[/]"
    if outcome.critical_success:
        msg += " - [bold magenta]CRITICAL SUCCESS![/]"
    elif outcome.hit:
        msg += f" ≤ {outcome.target_number} - hit"
    else:
        return msg + f" > {outcome.target_number} - miss"

    if outcome.defended:
        msg += (
            f", but {outcome.defender} dodged "
            f"({outcome.defense_roll} ≤ {outcome.defense_target})"
        )
        return msg

    msg += (
        f", {outcome.defender} failed to defend "
        f"({outcome.defense_roll} > {outcome.defense_target})"
        f", damage: [bold]{outcome.damage}[/]"
    )
    if outcome.defender_hit_points is not None:
        msg += f", HP left: {outcome.defender_hit_points}/{outcome.defender_max_hit_points}"
    if outcome.defender_status is not None:
        msg += f" ({outcome.defender_status.colored_name})"
    return msg


def format_combatant(combatant: Combatant, show_bar: bool = False) -> str:
    """Formats a combatant as 'name (HP: x/y)', optionally with an HP bar."""
    line = f"{combatant.name} (HP: {combatant.hit_points}/{combatant.max_hit_points})"
    if show_bar:
        status = combatant.status()
        line += " " + make_bar(combatant.hit_points, combatant.max_hit_points, color=status.color)
    return line


class ConsoleEventSink:
    """An EventSink printing each combat event as it happens."""

    def emit(self, event: CombatEvent) -> None:
        if isinstance(event, RoundStartEvent):
            crule(f"Round {event.round_number}", style="cyan", characters="-")
        elif isinstance(event, AttackEvent):
            cprint("    " + format_attack(event.outcome))
        elif isinstance(event, RoundEndEvent):
            cprint()
        elif isinstance(event, WinnerDeclaredEvent):
            cprint(event.team.colorize(f"Team {int(event.team)} wins!"))
        elif isinstance(event, DrawDeclaredEvent):
            cprint(f"[bold yellow]{DRAW_MESSAGES[event.reason]}[/]")


def print_roster_summary(roster1: Sequence[Combatant], roster2: Sequence[Combatant]) -> None:
    """Prints both rosters before the fight starts."""
    crule(":crossed_swords:  Combat Started", style="bold green")
    for team, roster in ((Team.ONE, roster1), (Team.TWO, roster2)):
        members = ", ".join(format_combatant(c) for c in roster)
        cprint(f"{team.colorize(f'Team {int(team)}')}: {members}")
    cprint()


def print_final_stats(
    roster1: Sequence[Combatant],
    roster2: Sequence[Combatant],
    per_hit: int = FINAL_STATS_PER_HIT,
) -> None:
    """Prints the hit points, status and estimated hits taken of everyone."""
    crule("Final Statistics", style="bold green")
    for team, roster in ((Team.ONE, roster1), (Team.TWO, roster2)):
        cprint(team.colorize(f"Team {int(team)}:"))
        for c in roster:
            hits = estimate_hits_received(c, per_hit)
            cprint(
                f"    {format_combatant(c, show_bar=True)} "
                f"{c.status().colored_name}, took ~{hits} hit(s)"
            )


def print_batch_summary(title: str, summary: BatchSummary) -> None:
    """Prints the results of a statistics batch as a table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Combats", str(summary.runs))
    table.add_row("Team 1 wins", f"{summary.team1_wins}/{summary.runs}")
    table.add_row("Team 2 wins", f"{summary.team2_wins}/{summary.runs}")
    table.add_row("Draws", str(summary.draws))
    table.add_row("Average rounds", f"{summary.average_rounds:.1f}")
    if summary.average_hits_received is not None:
        table.add_row(
            "Average hits taken by team 1 lead",
            f"{summary.average_hits_received:.1f}",
        )
    cprint(table)
