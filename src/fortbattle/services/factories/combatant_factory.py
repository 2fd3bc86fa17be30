"""Factory for building battle snapshots from persisted players."""
from __future__ import annotations

from fortbattle.data.repositories import UnitsRepository
from fortbattle.domain.entities import Combatant
from fortbattle.domain.state import PlayerRecord
from fortbattle.services.errors import FactoryError


def create_combatant(
    record: PlayerRecord,
    units_repo: UnitsRepository | None = None,
) -> Combatant:
    """Freeze a player record into a Combatant.

    When a units repository is given every unit stack must name a catalogued tier.
    """
    if units_repo is not None:
        for unit in record.units:
            if units_repo.find(unit.unit_type, unit.level) is None:
                raise FactoryError(
                    f"Player {record.id} has unknown unit tier {unit.unit_type} level {unit.level}."
                )
    if record.fort_max_hitpoints <= 0:
        raise FactoryError(f"Player {record.id} has no fort hitpoint capacity.")

    return Combatant(
        player_id=record.id,
        level=record.level,
        offense=record.offense,
        defense=record.defense,
        fort_level=record.fort_level,
        fort_hitpoints=record.fort_hitpoints,
        fort_max_hitpoints=record.fort_max_hitpoints,
        gold=record.gold,
        experience=record.experience,
        xp_to_next_level=record.xp_to_next_level,
        units=tuple(record.units),
        items=tuple(record.items),
    )
