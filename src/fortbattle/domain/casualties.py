"""Unit loss sampling."""
from __future__ import annotations

import logging
from typing import Sequence, Tuple

from fortbattle.core.config import DEFAULT_CONFIG, BattleConfig
from fortbattle.core.rng import RandomSource
from fortbattle.domain.battle_models import CasualtyReport
from fortbattle.domain.entities import ItemStack, UnitStack

logger = logging.getLogger("fortbattle.casualties")


def equipped_ratio(unit: UnitStack, item: ItemStack | None) -> float:
    """Share of the stack carrying matching equipment, between 0 and 1."""
    item_quantity = item.quantity if item is not None else 0
    if item is not None and item_quantity >= unit.quantity:
        return 1.0
    if unit.quantity > 0:
        return item_quantity / unit.quantity
    return 0.0


def base_casualty_rate(unit_level: int, enemy_level: int) -> float:
    # Units that outrank the enemy take no base losses.
    if enemy_level <= 0 or enemy_level < unit_level:
        return 0.0
    return 1 - unit_level / enemy_level


def casualty_rate(
    unit: UnitStack,
    item: ItemStack | None,
    enemy_level: int,
    config: BattleConfig = DEFAULT_CONFIG,
) -> float:
    rate = base_casualty_rate(unit.level, enemy_level)
    return rate * (1 - config.equipment_mitigation * equipped_ratio(unit, item))


def compute_casualties(
    units: Sequence[UnitStack],
    items: Sequence[ItemStack],
    enemy_level: int,
    rng: RandomSource,
    config: BattleConfig = DEFAULT_CONFIG,
) -> Tuple[CasualtyReport, ...]:
    """Sample losses for every stack, keeping the input order."""
    reports = []
    for unit in units:
        item = next((item for item in items if item.level == unit.level), None)
        rate = casualty_rate(unit, item, enemy_level, config)
        if unit.quantity == 0 or rate <= 0:
            casualties = 0
        else:
            sampled = round(rng.binomial(unit.quantity, rate))
            casualties = min(max(sampled, 0), unit.quantity)
        logger.debug(
            "%s level %d: %d of %d lost (rate %.3f)",
            unit.unit_type,
            unit.level,
            casualties,
            unit.quantity,
            rate,
        )
        reports.append(
            CasualtyReport(
                unit_type=unit.unit_type,
                level=unit.level,
                quantity=unit.quantity,
                casualty_rate=rate,
                casualties=casualties,
            )
        )
    return tuple(reports)
