"""Winner, pillage, experience and fort hitpoint rules."""
from __future__ import annotations

import logging
import math
from typing import Tuple

from fortbattle.core.config import DEFAULT_CONFIG, BattleConfig
from fortbattle.core.rng import RandomSource
from fortbattle.core.types import Side

logger = logging.getLogger("fortbattle.outcome")


def determine_winner(attacker_offense: int, defender_defense: int) -> Side:
    # Ties go to the defender.
    return "attacker" if attacker_offense > defender_defense else "defender"


def available_pillage(
    defender_gold: int,
    turns: int,
    rng: RandomSource,
    config: BattleConfig = DEFAULT_CONFIG,
) -> int:
    """Whole gold the attacker can carry off, never more than the defender owns."""
    if defender_gold <= 0:
        return 0
    roll = math.floor(rng.random() * (defender_gold * config.pillage_ratio + 1))
    return min(math.floor(roll * (turns / 100)), defender_gold)


def compute_pillage(
    winner: Side,
    defender_gold: int,
    turns: int,
    rng: RandomSource,
    config: BattleConfig = DEFAULT_CONFIG,
) -> int:
    if winner != "attacker" or defender_gold == 0:
        return 0
    return available_pillage(defender_gold, turns, rng, config)


def capped_unit_ratio(
    attacker_offensive_units: int,
    defender_defensive_units: int,
    config: BattleConfig = DEFAULT_CONFIG,
) -> float:
    """Ten times the unit ratio, clamped to the configured bounds.

    A defender without defensive units counts as the most favourable ratio.
    """
    if defender_defensive_units <= 0:
        return config.xp_unit_ratio_max
    unit_ratio = attacker_offensive_units / defender_defensive_units
    return min(max(unit_ratio * 10, config.xp_unit_ratio_min), config.xp_unit_ratio_max)


def compute_xp(
    attacker_damage: int,
    defender_damage: int,
    turns: int,
    attacker_offensive_units: int,
    defender_defensive_units: int,
    rng: RandomSource,
    config: BattleConfig = DEFAULT_CONFIG,
) -> int:
    damage_ratio = max(attacker_damage / max(defender_damage, config.min_damage), 1)
    capped = capped_unit_ratio(attacker_offensive_units, defender_defensive_units, config)
    low = 0.25 + 0.016 * (capped - config.xp_unit_ratio_min)
    rv = rng.uniform(low, low + 0.016)
    return math.floor(100 * turns * abs(math.cos(10 * damage_ratio)) / rv)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def scale_xp(raw_xp: int, turns: int) -> int:
    return round_half_up(raw_xp * (turns / 10))


def is_xp_applicable(xp: float) -> bool:
    return not math.isnan(xp) and xp != 0


def compute_fort_hitpoints(
    attacker_fort_hitpoints: float,
    defender_fort_hitpoints: float,
    attacker_offense: int,
    defender_offense: int,
    fort_damage: float,
    winner: Side,
) -> Tuple[float, float]:
    """Return (attacker, defender) fort hitpoints after the battle, floored at 0."""
    if winner == "attacker":
        attacker_hp = attacker_fort_hitpoints
    else:
        attacker_hp = attacker_fort_hitpoints - defender_offense / 10
    # Negative jitter never repairs the defender's fort.
    defender_hp = defender_fort_hitpoints - attacker_offense / 10 - max(fort_damage, 0)
    return max(attacker_hp, 0), max(defender_hp, 0)


def level_mitigation(attacker_level: int, defender_level: int, config: BattleConfig = DEFAULT_CONFIG) -> float:
    """Reward dampening once the attacker outranks the defender by more than the allowed gap."""
    excess = attacker_level - defender_level - config.max_level_gap
    if excess > 0:
        return config.level_mitigation_base**excess
    return 1.0


def earned_new_level(xp_earned: int, xp_to_next_level: int) -> bool:
    return xp_earned >= xp_to_next_level
