"""Raw damage and fort damage formulas."""
from __future__ import annotations

import logging
import math

from fortbattle.core.config import DEFAULT_CONFIG, BattleConfig
from fortbattle.core.rng import RandomSource
from fortbattle.domain.errors import DegenerateDamageError

logger = logging.getLogger("fortbattle.damage")


def attack_multiplier(attacker_level: int, defender_level: int, config: BattleConfig = DEFAULT_CONFIG) -> float:
    level_difference = abs(attacker_level - defender_level)
    multipliers = config.level_multipliers
    return multipliers[min(level_difference, len(multipliers) - 1)]


def compute_damage(
    attacker_offense: int,
    defender_level: int,
    attacker_level: int,
    turns: int,
    rng: RandomSource,
    config: BattleConfig = DEFAULT_CONFIG,
) -> int:
    """Damage one side deals to the other.

    The base roll lands within one point of the offense score, then scales by
    the level-gap multiplier and by ``turns / 10``.
    """
    base_damage = rng.randint(attacker_offense - 1, attacker_offense + 1)
    damage_multiplier = attack_multiplier(attacker_level, defender_level, config)
    turn_multiplier = turns / 10
    damage = math.floor(base_damage * damage_multiplier * turn_multiplier)
    logger.debug(
        "Damage roll base=%d multiplier=%.2f turns=%d -> %d",
        base_damage,
        damage_multiplier,
        turns,
        damage,
    )
    return damage


def fort_level_constant(fort_level: float, config: BattleConfig = DEFAULT_CONFIG) -> float:
    coefficients = config.fort_coefficients
    degree = len(coefficients) - 1
    return sum(coefficient * fort_level ** (degree - index) for index, coefficient in enumerate(coefficients))


def fort_damage_jitter(
    fort_constant: float,
    attacker_damage: int,
    rng: RandomSource,
) -> int:
    jitter = rng.randint(-1, 1)
    if fort_constant >= 0:
        return jitter + math.floor(fort_constant * attacker_damage)
    return jitter


def compute_fort_damage(
    fort_level: int,
    attacker_damage: int,
    defender_damage: int,
    rng: RandomSource,
    config: BattleConfig = DEFAULT_CONFIG,
) -> float:
    """Fortification damage dealt to the defender.

    ``defender_damage`` must be positive; callers clamp damage before calling.
    """
    if defender_damage <= 0:
        raise DegenerateDamageError(f"Defender damage must be positive, got {defender_damage}.")
    fort_constant = fort_level_constant(fort_level, config)
    jitter = fort_damage_jitter(fort_constant, attacker_damage, rng)
    fort_damage = (attacker_damage / defender_damage) * fort_level + jitter
    logger.debug(
        "Fort damage level=%d constant=%.6f jitter=%d -> %.3f",
        fort_level,
        fort_constant,
        jitter,
        fort_damage,
    )
    return fort_damage
