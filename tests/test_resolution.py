from __future__ import annotations

import dataclasses

import pytest

from fortbattle.core.rng import RNG
from fortbattle.domain.entities import ItemStack, UnitStack
from fortbattle.domain.errors import EngagementBlockedError
from fortbattle.domain.resolution import preview_battle, resolve_battle
from tests.helpers.builders import make_combatant
from tests.helpers.scripted_rng import ScriptedRNG


def _make_pair(**defender_overrides):
    attacker = make_combatant(
        1,
        level=10,
        offense=100,
        defense=50,
        units=[UnitStack("CITIZEN", 1, 3), UnitStack("OFFENSE", 1, 10)],
    )
    defender_kwargs = dict(
        level=10,
        offense=50,
        defense=80,
        fort_level=1,
        fort_hitpoints=100,
        gold=1000,
        units=[UnitStack("DEFENSE", 1, 10), UnitStack("SPY", 1, 4)],
        items=[ItemStack("SHIELD", 1, 5, "DEFENSE")],
    )
    defender_kwargs.update(defender_overrides)
    defender = make_combatant(2, **defender_kwargs)
    return attacker, defender


def test_reference_scenario() -> None:
    attacker, defender = _make_pair()

    result = resolve_battle(attacker, defender, 10, rng=ScriptedRNG())

    assert result.attacker_damage == 100
    assert result.defender_damage == 50
    assert result.fort_damage == pytest.approx(21.0)
    assert result.winner == "attacker"
    assert result.winner_id == 1
    assert result.defender_fort_start == 100
    assert result.defender_fort_end == pytest.approx(69.0)
    assert result.defender_fort_end < 100
    assert result.attacker_fort_end == 100
    assert result.gold_pillaged == 40
    assert result.xp_earned == 1299
    assert result.xp_applied
    assert not result.earned_new_level
    assert result.new_level == 11


def test_casualties_only_cover_fighting_units() -> None:
    attacker, defender = _make_pair()

    result = resolve_battle(attacker, defender, 10, rng=ScriptedRNG())

    assert [(r.unit_type, r.casualties) for r in result.attacker_casualties] == [("OFFENSE", 9)]
    assert [(r.unit_type, r.casualties) for r in result.defender_casualties] == [("DEFENSE", 6)]


def test_draws_happen_in_fixed_order() -> None:
    attacker, defender = _make_pair()
    rng = ScriptedRNG()

    resolve_battle(attacker, defender, 10, rng=rng)

    assert [name for name, _ in rng.calls] == [
        "randint",  # attacker damage
        "randint",  # defender damage
        "randint",  # fort jitter
        "binomial",
        "binomial",
        "random",  # pillage
        "uniform",  # xp variance
    ]


def test_combatants_are_not_mutated_and_result_is_frozen() -> None:
    attacker, defender = _make_pair()
    attacker_before = dataclasses.replace(attacker)
    defender_before = dataclasses.replace(defender)

    result = resolve_battle(attacker, defender, 10, rng=RNG(1))

    assert attacker == attacker_before
    assert defender == defender_before
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.gold_pillaged = 0  # type: ignore[misc]


def test_seeded_resolution_is_reproducible() -> None:
    attacker, defender = _make_pair()

    first = resolve_battle(attacker, defender, 7, rng=RNG(99))
    second = resolve_battle(attacker, defender, 7, rng=RNG(99))

    assert first == second


def test_gold_is_conserved_between_outcomes() -> None:
    attacker, defender = _make_pair()

    result = resolve_battle(attacker, defender, 10, rng=RNG(4))

    assert result.attacker_outcome().gold_delta == -result.defender_outcome().gold_delta
    assert result.gold_pillaged <= defender.gold


def test_defender_without_gold_is_not_pillaged() -> None:
    attacker, defender = _make_pair(gold=0)

    result = resolve_battle(attacker, defender, 10, rng=ScriptedRNG())

    assert result.winner == "attacker"
    assert result.gold_pillaged == 0


def test_tie_goes_to_defender_and_attacker_fort_takes_damage() -> None:
    attacker, defender = _make_pair(defense=100)

    result = resolve_battle(attacker, defender, 10, rng=ScriptedRNG())

    assert result.winner == "defender"
    assert result.gold_pillaged == 0
    assert result.attacker_fort_end == pytest.approx(95.0)


def test_defender_without_defensive_units_resolves() -> None:
    attacker, defender = _make_pair(units=[], items=[])

    result = resolve_battle(attacker, defender, 10, rng=RNG(8))

    assert result.defender_casualties == ()
    assert result.xp_earned >= 0


def test_defender_without_offense_is_clamped_to_minimum_damage() -> None:
    attacker, defender = _make_pair(offense=0)

    result = resolve_battle(attacker, defender, 10, rng=ScriptedRNG(randints=[100, -1, 0]))

    assert result.defender_damage == 1
    assert result.fort_damage == pytest.approx(100 + 19)


def test_zero_xp_is_not_applied() -> None:
    attacker, defender = _make_pair()

    # An enormous variance roll floors the raw experience to zero.
    result = resolve_battle(attacker, defender, 1, rng=ScriptedRNG(uniforms=[1e9]))

    assert result.xp_earned == 0
    assert not result.xp_applied
    assert result.attacker_outcome().xp_gained == 0
    assert not result.earned_new_level


def test_level_up_flag() -> None:
    attacker, defender = _make_pair()
    attacker = dataclasses.replace(attacker, xp_to_next_level=500)

    result = resolve_battle(attacker, defender, 10, rng=ScriptedRNG())

    assert result.earned_new_level
    assert result.new_level == attacker.level + 1


def test_ineligible_pair_is_rejected_before_any_draw() -> None:
    attacker = make_combatant(1, level=5)
    defender = make_combatant(2, level=15)
    rng = ScriptedRNG()

    with pytest.raises(EngagementBlockedError) as excinfo:
        resolve_battle(attacker, defender, 10, rng=rng)

    assert excinfo.value.check.reason == "too_high"
    assert rng.calls == []


def test_attacker_without_offense_is_rejected() -> None:
    with pytest.raises(EngagementBlockedError):
        resolve_battle(make_combatant(1, offense=0), make_combatant(2), 10, rng=ScriptedRNG())


def test_non_positive_turns_rejected() -> None:
    attacker, defender = _make_pair()
    with pytest.raises(ValueError):
        resolve_battle(attacker, defender, 0, rng=ScriptedRNG())


def test_outcome_deltas() -> None:
    attacker, defender = _make_pair()

    result = resolve_battle(attacker, defender, 10, rng=ScriptedRNG())
    attacker_outcome = result.attacker_outcome()
    defender_outcome = result.defender_outcome()

    assert attacker_outcome.gold_delta == 40
    assert attacker_outcome.turns_spent == 10
    assert attacker_outcome.xp_gained == 1299
    assert defender_outcome.gold_delta == -40
    assert defender_outcome.fort_hitpoints == pytest.approx(69.0)
    assert defender_outcome.xp_gained == 0


def test_preview_reports_expected_winner_and_mitigation() -> None:
    attacker = make_combatant(1, level=16, offense=100)
    defender = make_combatant(2, level=10, defense=80, gold=1000, fort_hitpoints=50)

    preview = preview_battle(attacker, defender, 10, rng=ScriptedRNG(randoms=[0.5]))

    assert preview.winner == "attacker"
    assert preview.available_pillage == 40
    assert preview.level_mitigation == pytest.approx(0.96)
    assert preview.defender_fort_percentage == 50
