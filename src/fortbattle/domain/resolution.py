"""Single-pass battle resolution."""
from __future__ import annotations

import logging

from fortbattle.core.config import DEFAULT_CONFIG, BattleConfig
from fortbattle.core.rng import RandomSource, default_rng
from fortbattle.domain.battle_models import BattlePreview, BattleResult
from fortbattle.domain.casualties import compute_casualties
from fortbattle.domain.damage import compute_damage, compute_fort_damage
from fortbattle.domain.eligibility import check_engagement
from fortbattle.domain.entities import Combatant
from fortbattle.domain.errors import EngagementBlockedError
from fortbattle.domain.outcome import (
    available_pillage,
    compute_fort_hitpoints,
    compute_pillage,
    compute_xp,
    determine_winner,
    earned_new_level,
    is_xp_applicable,
    level_mitigation,
    scale_xp,
)

logger = logging.getLogger("fortbattle.resolution")


def resolve_battle(
    attacker: Combatant,
    defender: Combatant,
    turns: int,
    *,
    rng: RandomSource | None = None,
    config: BattleConfig = DEFAULT_CONFIG,
) -> BattleResult:
    """Resolve one attack and return the immutable result.

    Steps run in a fixed order: eligibility, damage, fort damage, casualties,
    outcome. Neither combatant is modified. Raises EngagementBlockedError when
    the pair is not eligible; callers are expected to check first.
    """
    if turns <= 0:
        raise ValueError(f"Turns must be a positive integer, got {turns}.")
    check = check_engagement(attacker, defender, config)
    if not check.allowed:
        raise EngagementBlockedError(check)
    rng = rng if rng is not None else default_rng()

    attacker_damage = max(
        compute_damage(attacker.offense, defender.level, attacker.level, turns, rng, config),
        config.min_damage,
    )
    defender_damage = max(
        compute_damage(defender.offense, attacker.level, defender.level, turns, rng, config),
        config.min_damage,
    )

    fort_damage = compute_fort_damage(defender.fort_level, attacker_damage, defender_damage, rng, config)

    attacker_casualties = compute_casualties(
        attacker.units_of("OFFENSE"), attacker.items_for("OFFENSE"), defender.level, rng, config
    )
    defender_casualties = compute_casualties(
        defender.units_of("DEFENSE"), defender.items_for("DEFENSE"), attacker.level, rng, config
    )

    winner = determine_winner(attacker.offense, defender.defense)
    gold_pillaged = compute_pillage(winner, defender.gold, turns, rng, config)

    raw_xp = compute_xp(
        attacker_damage,
        defender_damage,
        turns,
        attacker.offensive_unit_count,
        defender.defensive_unit_count,
        rng,
        config,
    )
    scaled_xp = scale_xp(raw_xp, turns)
    xp_applied = is_xp_applicable(scaled_xp)
    xp_earned = int(scaled_xp) if xp_applied else 0
    level_up = xp_applied and earned_new_level(xp_earned, attacker.xp_to_next_level)

    attacker_fort_end, defender_fort_end = compute_fort_hitpoints(
        attacker.fort_hitpoints,
        defender.fort_hitpoints,
        attacker.offense,
        defender.offense,
        fort_damage,
        winner,
    )

    result = BattleResult(
        attacker_id=attacker.player_id,
        defender_id=defender.player_id,
        turns=turns,
        attacker_level=attacker.level,
        defender_level=defender.level,
        attacker_offense=attacker.offense,
        defender_offense=defender.offense,
        defender_defense=defender.defense,
        attacker_damage=attacker_damage,
        defender_damage=defender_damage,
        fort_damage=fort_damage,
        attacker_fort_start=attacker.fort_hitpoints,
        attacker_fort_end=attacker_fort_end,
        defender_fort_start=defender.fort_hitpoints,
        defender_fort_end=defender_fort_end,
        attacker_casualties=attacker_casualties,
        defender_casualties=defender_casualties,
        attacker_xp_start=attacker.experience,
        xp_earned=xp_earned,
        xp_applied=xp_applied,
        gold_pillaged=gold_pillaged,
        winner=winner,
        earned_new_level=level_up,
        new_level=attacker.level + 1,
    )
    logger.debug(
        "Resolved %d vs %d: winner=%s damage=%d/%d fort=%.2f xp=%d gold=%d",
        attacker.player_id,
        defender.player_id,
        winner,
        attacker_damage,
        defender_damage,
        fort_damage,
        xp_earned,
        gold_pillaged,
    )
    return result


def preview_battle(
    attacker: Combatant,
    defender: Combatant,
    turns: int,
    *,
    rng: RandomSource | None = None,
    config: BattleConfig = DEFAULT_CONFIG,
) -> BattlePreview:
    """Estimate winner and pillage without resolving anything."""
    rng = rng if rng is not None else default_rng()
    winner = determine_winner(attacker.offense, defender.defense)
    return BattlePreview(
        attacker_id=attacker.player_id,
        defender_id=defender.player_id,
        winner=winner,
        available_pillage=available_pillage(defender.gold, turns, rng, config),
        level_mitigation=level_mitigation(attacker.level, defender.level, config),
        attacker_offense=attacker.offense,
        defender_defense=defender.defense,
        defender_fort_level=defender.fort_level,
        defender_fort_percentage=defender.fort_health.percentage,
        defender_gold=defender.gold,
    )
