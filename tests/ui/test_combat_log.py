"""
Tests for the console rendering of combat events.
"""

import pytest

from gozsim.character.presets import create_warrior, create_wolf
from gozsim.combat.events import (
    AttackEvent,
    AttackOutcome,
    DrawDeclaredEvent,
    RoundEndEvent,
    RoundStartEvent,
    WinnerDeclaredEvent,
)
from gozsim.combat.statistics import BatchSummary
from gozsim.core.constants import DrawReason, StatusLabel, Team
from gozsim.ui.combat_log import (
    ConsoleEventSink,
    format_attack,
    format_combatant,
    print_batch_summary,
    print_final_stats,
    print_roster_summary,
)


@pytest.fixture
def base():
    return {"attacker": "Grim", "defender": "Wolf", "target_number": 22}


def test_format_critical_failure(base):
    line = format_attack(AttackOutcome(attack_roll=17, critical_failure=True, **base))
    assert line.startswith("Grim attacks Wolf: roll 17")
    assert "critical failure" in line


def test_format_miss(base):
    line = format_attack(AttackOutcome(attack_roll=15, target_number=12, attacker="A", defender="B"))
    assert line.endswith("> 12 - miss")


def test_format_dodged_hit(base):
    outcome = AttackOutcome(
        attack_roll=10,
        hit=True,
        defense_roll=7,
        defense_target=8,
        defended=True,
        **base,
    )
    line = format_attack(outcome)
    assert "≤ 22 - hit" in line
    assert "Wolf dodged (7 ≤ 8)" in line


def test_format_damage(base):
    outcome = AttackOutcome(
        attack_roll=3,
        hit=True,
        critical_success=True,
        defense_roll=12,
        defense_target=8,
        defended=False,
        damage=4,
        defender_hit_points=6,
        defender_max_hit_points=10,
        defender_status=StatusLabel.SERIOUSLY_WOUNDED,
        **base,
    )
    line = format_attack(outcome)
    assert "CRITICAL SUCCESS" in line
    assert "failed to defend (12 > 8)" in line
    assert "HP left: 6/10" in line
    assert "Seriously wounded" in line


def test_format_combatant():
    wolf = create_wolf("Wolf 1")
    wolf.apply_damage(4)
    assert format_combatant(wolf) == "Wolf 1 (HP: 6/10)"
    assert "▮" in format_combatant(wolf, show_bar=True)


def test_console_sink_renders_every_event(capsys, base):
    sink = ConsoleEventSink()
    sink.emit(RoundStartEvent(round_number=1))
    sink.emit(AttackEvent(outcome=AttackOutcome(attack_roll=17, critical_failure=True, **base)))
    sink.emit(RoundEndEvent(round_number=1))
    sink.emit(WinnerDeclaredEvent(team=Team.TWO))
    sink.emit(DrawDeclaredEvent(reason=DrawReason.TIMEOUT))
    out = capsys.readouterr().out
    assert "Round 1" in out
    assert "critical failure" in out
    assert "Team 2 wins!" in out
    assert "round limit exceeded" in out


def test_summaries_print(capsys):
    warrior = create_warrior("Grim")
    wolves = [create_wolf("Wolf 1"), create_wolf("Wolf 2")]
    wolves[0].apply_damage(12)
    print_roster_summary([warrior], wolves)
    print_final_stats([warrior], wolves)
    print_batch_summary(
        "Batch",
        BatchSummary(runs=2, team1_wins=1, draws=1, total_rounds=9, total_hits_received=3),
    )
    out = capsys.readouterr().out
    assert "Grim (HP: 40/40)" in out
    assert "Unconscious" in out
    assert "Average rounds" in out
