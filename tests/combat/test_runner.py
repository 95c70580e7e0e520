"""
Tests for complete combats and their termination rules.
"""

import pytest

from gozsim.character.presets import create_thief, create_warrior, create_wolf
from gozsim.combat.events import (
    AttackEvent,
    DrawDeclaredEvent,
    EventLog,
    EventType,
    RoundEndEvent,
    RoundStartEvent,
    WinnerDeclaredEvent,
)
from gozsim.combat.runner import CombatRunner
from gozsim.core.constants import DrawReason, MatchResult, Team


@pytest.fixture
def hero(make_combatant):
    return make_combatant("Hero", strength=12, dexterity=14)


@pytest.fixture
def minion(make_combatant):
    return make_combatant("Minion", dexterity=12, max_hit_points=1)


def knock_out(*combatants):
    for c in combatants:
        c.apply_damage(c.hit_points)


def event_types(result):
    return [e.event_type for e in result.events]


def test_everybody_unconscious_is_a_draw(make_dice, make_combatant):
    a = make_combatant("A")
    b = make_combatant("B")
    knock_out(a, b)

    result = CombatRunner(dice=make_dice()).run([a], [b], max_rounds=5)

    assert result.result == MatchResult.DRAW
    assert result.rounds_played == 1
    assert result.draw_reason == DrawReason.ALL_UNCONSCIOUS
    assert result.winner is None
    assert event_types(result) == [EventType.ROUND_START, EventType.DRAW_DECLARED]


def test_empty_rosters_are_a_draw(make_dice):
    result = CombatRunner(dice=make_dice()).run([], [])
    assert result.result == MatchResult.DRAW
    assert result.rounds_played == 1


def test_standing_side_wins_early(make_dice, hero, minion):
    knock_out(minion)

    result = CombatRunner(dice=make_dice()).run([hero], [minion])

    assert result.result == MatchResult.TEAM_1
    assert result.winner == Team.ONE
    assert result.rounds_played == 1
    assert event_types(result) == [EventType.ROUND_START, EventType.WINNER_DECLARED]
    assert result.events[-1].team == Team.ONE


def test_win_at_end_of_round(make_dice, hero, minion):
    dice = make_dice(("pick", 0), 10, 18)

    result = CombatRunner(dice=dice).run([hero], [minion])

    assert result.result == MatchResult.TEAM_1
    assert result.rounds_played == 1
    assert event_types(result) == [
        EventType.ROUND_START,
        EventType.ATTACK,
        EventType.ROUND_END,
        EventType.WINNER_DECLARED,
    ]
    assert not dice.source.values


def test_team_two_wins(make_dice, make_combatant, hero):
    weakling = make_combatant("Weakling", dexterity=5, max_hit_points=1)
    dice = make_dice(("pick", 0), 10, 18)

    result = CombatRunner(dice=dice).run([weakling], [hero])

    assert result.result == MatchResult.TEAM_2
    assert result.winner == Team.TWO
    assert isinstance(result.events[-1], WinnerDeclaredEvent)


def test_both_sides_knocked_out_in_one_round(make_dice, minion):
    # The same fighter stands in both rosters and drops itself.
    dice = make_dice(("pick", 0), 10, 18)

    result = CombatRunner(dice=dice).run([minion], [minion])

    assert result.result == MatchResult.DRAW
    assert result.draw_reason == DrawReason.MUTUAL_KNOCKOUT
    assert result.rounds_played == 1
    assert event_types(result) == [
        EventType.ROUND_START,
        EventType.ATTACK,
        EventType.ROUND_END,
        EventType.DRAW_DECLARED,
    ]
    assert result.events[-1].reason == DrawReason.MUTUAL_KNOCKOUT
    assert not minion.is_conscious()
    assert not dice.source.values


def test_round_limit_is_a_timeout_draw(make_dice, make_combatant):
    a = make_combatant("A", dexterity=10)
    b = make_combatant("B", dexterity=5)
    dice = make_dice(*[("pick", 0), 17] * 4)

    result = CombatRunner(dice=dice).run([a], [b], max_rounds=2)

    assert result.result == MatchResult.DRAW
    assert result.draw_reason == DrawReason.TIMEOUT
    assert result.rounds_played == 2
    assert [type(e) for e in result.events] == [
        RoundStartEvent,
        AttackEvent,
        AttackEvent,
        RoundEndEvent,
        RoundStartEvent,
        AttackEvent,
        AttackEvent,
        RoundEndEvent,
        DrawDeclaredEvent,
    ]
    assert [e.round_number for e in result.events if isinstance(e, RoundStartEvent)] == [1, 2]
    assert not dice.source.values


def test_max_rounds_must_be_positive(make_combatant):
    with pytest.raises(ValueError):
        CombatRunner(seed=1).run([make_combatant("A")], [make_combatant("B")], max_rounds=0)


def test_external_sink_sees_every_event():
    sink = EventLog()
    result = CombatRunner(seed=11, sink=sink).run(
        [create_warrior("Grim")], [create_wolf("Wolf 1"), create_wolf("Wolf 2")]
    )
    assert sink.events == result.events


def test_same_seed_same_combat():
    def play(seed):
        return CombatRunner(seed=seed).run(
            [create_warrior("Grim"), create_thief("Lyra")],
            [create_wolf(f"Wolf {i}") for i in range(1, 5)],
        )

    first, second = play(42), play(42)
    assert first.result == second.result
    assert first.rounds_played == second.rounds_played
    assert [e.model_dump() for e in first.events] == [e.model_dump() for e in second.events]


@pytest.mark.parametrize("seed", range(25))
def test_random_combats_respect_invariants(seed):
    roster1 = [create_warrior("Grim"), create_thief("Lyra")]
    roster2 = [create_wolf(f"Wolf {i}") for i in range(1, 5)]

    result = CombatRunner(seed=seed).run(roster1, roster2, max_rounds=20)

    assert 1 <= result.rounds_played <= 20
    for c in roster1 + roster2:
        assert c.hit_points <= c.max_hit_points
    team1_up = any(c.is_conscious() for c in roster1)
    team2_up = any(c.is_conscious() for c in roster2)
    if result.result == MatchResult.TEAM_1:
        assert team1_up and not team2_up
    elif result.result == MatchResult.TEAM_2:
        assert team2_up and not team1_up
    else:
        assert result.draw_reason is not None
    assert result.events[0] == RoundStartEvent(round_number=1)
    assert result.events[-1].event_type in (
        EventType.WINNER_DECLARED,
        EventType.DRAW_DECLARED,
    )
