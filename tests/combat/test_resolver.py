"""
Tests for single attack resolution.
"""

import pytest
from pydantic import ValidationError

from gozsim.combat.resolver import AttackResolver, base_damage, compute_damage
from gozsim.core.constants import StatusLabel
from gozsim.core.errors import InvariantViolation
from gozsim.items.weapon import Weapon


@pytest.fixture
def defender(make_combatant):
    # Base defense 5, so evasion succeeds on 8 or less.
    return make_combatant("Defender", strength=11, dexterity=10, health=9, armor=3)


def test_normal_hit_through_armor(make_dice, warrior, defender):
    dice = make_dice(10, 12)
    outcome = AttackResolver(dice).resolve(warrior, defender)

    assert outcome.attack_roll == 10
    assert outcome.target_number == 22
    assert outcome.hit
    assert not outcome.critical_success
    assert not outcome.critical_failure
    assert outcome.defense_roll == 12
    assert outcome.defense_target == 8
    assert outcome.defended is False
    # floor(11 / 3) + 2 = 5, minus 3 armor.
    assert outcome.damage == 2
    assert outcome.defender_hit_points == 38
    assert outcome.defender_max_hit_points == 40
    assert outcome.defender_status == StatusLabel.HEALTHY
    assert defender.hit_points == 38
    assert not dice.source.values


def test_critical_success_doubles_damage(make_dice, warrior, defender):
    outcome = AttackResolver(make_dice(3, 12)).resolve(warrior, defender)
    assert outcome.critical_success
    assert outcome.hit
    assert outcome.damage == 4
    assert defender.hit_points == 36


def test_critical_failure_ends_resolution(make_dice, warrior, defender):
    dice = make_dice(17)
    outcome = AttackResolver(dice).resolve(warrior, defender)
    assert outcome.critical_failure
    assert not outcome.hit
    assert outcome.damage == 0
    assert outcome.defense_roll is None
    assert outcome.defended is None
    assert not outcome.damage_applied
    assert defender.hit_points == 40
    # No defense dice were drawn.
    assert not dice.source.values


def test_critical_success_ignores_target_number(make_dice, make_combatant, defender):
    clumsy = make_combatant("Clumsy", dexterity=2, skills={})
    outcome = AttackResolver(make_dice(4, 18)).resolve(clumsy, defender)
    assert outcome.target_number == -4
    assert outcome.critical_success
    assert outcome.hit


def test_roll_equal_to_target_hits(make_dice, make_combatant, defender):
    novice = make_combatant("Novice", dexterity=1, skills={"sword": 1})
    outcome = AttackResolver(make_dice(5, 18)).resolve(novice, defender)
    assert outcome.target_number == 5
    assert outcome.hit


def test_roll_above_target_misses(make_dice, make_combatant, defender):
    novice = make_combatant("Novice", dexterity=1, skills={"sword": 1})
    dice = make_dice(6)
    outcome = AttackResolver(dice).resolve(novice, defender)
    assert not outcome.hit
    assert not outcome.critical_failure
    assert outcome.defense_roll is None
    assert defender.hit_points == defender.max_hit_points
    assert not dice.source.values


def test_defense_roll_equal_to_target_evades(make_dice, warrior, defender):
    outcome = AttackResolver(make_dice(10, 8)).resolve(warrior, defender)
    assert outcome.hit
    assert outcome.defended
    assert outcome.damage == 0
    assert outcome.defender_hit_points is None
    assert defender.hit_points == 40


def test_injury_penalty_lowers_target_number(make_dice, warrior, defender):
    warrior.apply_damage(15)
    outcome = AttackResolver(make_dice(17)).resolve(warrior, defender)
    assert outcome.target_number == 21


def test_armor_absorbing_everything_also_stops_criticals(make_dice, warrior, make_combatant):
    tank = make_combatant("Tank", armor=10)
    outcome = AttackResolver(make_dice(3, 18)).resolve(warrior, tank)
    assert outcome.critical_success
    assert outcome.damage == 0
    assert outcome.damage_applied
    assert tank.hit_points == tank.max_hit_points


def test_unconscious_attacker_is_rejected(make_dice, warrior, defender):
    warrior.apply_damage(40)
    dice = make_dice(10)
    with pytest.raises(InvariantViolation):
        AttackResolver(dice).resolve(warrior, defender)
    assert len(dice.source.values) == 3


def test_unconscious_defender_is_not_checked(make_dice, warrior, defender):
    defender.apply_damage(45)
    outcome = AttackResolver(make_dice(10, 18)).resolve(warrior, defender)
    assert outcome.defender_hit_points == -7


@pytest.mark.parametrize("roll", range(3, 19))
def test_critical_bands_partition_the_rolls(make_dice, warrior, defender, roll):
    steps = [roll] if roll >= 17 else [roll, 18]
    outcome = AttackResolver(make_dice(*steps)).resolve(warrior, defender)
    assert outcome.critical_success == (roll <= 4)
    assert outcome.critical_failure == (roll >= 17)
    assert not (outcome.critical_success and outcome.critical_failure)
    if outcome.critical_failure:
        assert not outcome.hit
        assert outcome.damage == 0
    if outcome.critical_success:
        assert outcome.hit


def test_outcome_is_immutable(make_dice, warrior, defender):
    outcome = AttackResolver(make_dice(17)).resolve(warrior, defender)
    with pytest.raises(ValidationError):
        outcome.damage = 10


def test_base_damage(warrior):
    assert base_damage(warrior) == 5


def test_damage_monotonicity(make_combatant):
    previous = None
    for armor in range(0, 10):
        damage = compute_damage(make_combatant(strength=12), make_combatant(armor=armor))
        if previous is not None:
            assert damage <= previous
        previous = damage

    target = make_combatant(armor=3)
    previous = None
    for strength in range(1, 25):
        damage = compute_damage(make_combatant(strength=strength), target)
        if previous is not None:
            assert damage >= previous
        previous = damage

    previous = None
    for bonus in range(-3, 6):
        weapon = Weapon(name="Test", damage_bonus=bonus, skill="sword")
        damage = compute_damage(make_combatant(weapon=weapon), target)
        if previous is not None:
            assert damage >= previous
        previous = damage


def test_critical_doubling_happens_after_armor(make_combatant):
    attacker = make_combatant(strength=11)
    assert compute_damage(attacker, make_combatant(armor=3), critical=True) == 4
    assert compute_damage(attacker, make_combatant(armor=5), critical=True) == 0
    assert compute_damage(attacker, make_combatant(armor=9), critical=True) == 0
