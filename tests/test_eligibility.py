from __future__ import annotations

import pytest

from fortbattle.domain.eligibility import can_engage, check_engagement, classify_engagement
from tests.helpers.builders import make_combatant


@pytest.mark.parametrize(
    "attacker_level, defender_level, expected",
    [
        (10, 10, True),
        (10, 15, True),
        (10, 5, True),
        (10, 16, False),
        (10, 4, False),
        (5, 15, False),
    ],
)
def test_can_engage_level_window(attacker_level: int, defender_level: int, expected: bool) -> None:
    assert can_engage(attacker_level, defender_level) is expected


def test_can_engage_is_repeatable() -> None:
    results = {can_engage(7, 13) for _ in range(10)}
    assert results == {False}
    assert can_engage(7, 12) == can_engage(7, 12)


def test_classify_defender_too_high() -> None:
    assert classify_engagement(5, 15, attacker_offense=50) == "too_high"


def test_classify_defender_too_low() -> None:
    assert classify_engagement(20, 14, attacker_offense=50) == "too_low"


def test_classify_no_offense_within_level_window() -> None:
    assert classify_engagement(10, 12, attacker_offense=0) == "no_offense"


def test_classify_level_gap_outranks_missing_offense() -> None:
    assert classify_engagement(5, 15, attacker_offense=0) == "too_high"


def test_classify_allows_eligible_pair() -> None:
    assert classify_engagement(10, 10, attacker_offense=1) is None


def test_check_engagement_exposes_inputs_for_callers() -> None:
    attacker = make_combatant(1, level=5, offense=40)
    defender = make_combatant(2, level=15)

    check = check_engagement(attacker, defender)

    assert not check.allowed
    assert check.reason == "too_high"
    assert check.attacker_level == 5
    assert check.defender_level == 15
    assert check.attacker_offense == 40


def test_check_engagement_honours_configured_gap() -> None:
    from fortbattle.core.config import BattleConfig

    config = BattleConfig(max_level_gap=2, level_multipliers=(1.0, 0.5, 0.8))
    check = check_engagement(make_combatant(1, level=10), make_combatant(2, level=13), config)

    assert check.reason == "too_high"
