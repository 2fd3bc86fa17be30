from __future__ import annotations

import pytest

from fortbattle.data.repositories import UnitsRepository
from fortbattle.domain.entities import ItemStack, UnitStack
from fortbattle.services.errors import FactoryError
from fortbattle.services.factories import create_combatant
from tests.helpers.builders import make_record


def test_create_combatant_copies_record() -> None:
    record = make_record(4, level=12, offense=300, items=[ItemStack("SWORD", 1, 4, "OFFENSE")])

    combatant = create_combatant(record)

    assert combatant.player_id == 4
    assert combatant.level == 12
    assert combatant.offense == 300
    assert combatant.offensive_unit_count == 10
    assert combatant.defensive_unit_count == 10
    assert combatant.items_for("OFFENSE") == (ItemStack("SWORD", 1, 4, "OFFENSE"),)
    assert combatant.fort_health.percentage == 100


def test_combatant_is_detached_from_record() -> None:
    record = make_record(1)
    combatant = create_combatant(record)

    record.units.append(UnitStack("OFFENSE", 2, 5))
    record.gold = 0

    assert combatant.offensive_unit_count == 10
    assert combatant.gold == 1000


def test_catalogue_checks_unit_tiers() -> None:
    record = make_record(1, units=[UnitStack("DEFENSE", 5, 3)])

    with pytest.raises(FactoryError):
        create_combatant(record, UnitsRepository())


def test_catalogued_units_pass() -> None:
    record = make_record(1, units=[UnitStack("OFFENSE", 2, 3), UnitStack("DEFENSE", 2, 3)])

    combatant = create_combatant(record, UnitsRepository())

    assert combatant.offensive_unit_count == 3
    assert combatant.defensive_unit_count == 3


def test_fort_without_capacity_rejected() -> None:
    record = make_record(1)
    record.fort_max_hitpoints = 0

    with pytest.raises(FactoryError):
        create_combatant(record)


def test_negative_unit_quantity_rejected() -> None:
    with pytest.raises(ValueError):
        UnitStack("OFFENSE", 1, -1)


def test_xp_to_next_level_tracks_experience() -> None:
    record = make_record(1, experience=150, next_level_xp=6000)

    assert record.xp_to_next_level == 5850
    assert create_combatant(record).xp_to_next_level == 5850

    record.experience = 6400
    assert record.xp_to_next_level == 0
