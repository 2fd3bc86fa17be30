"""Pre-battle eligibility rules."""
from __future__ import annotations

from fortbattle.core.config import DEFAULT_CONFIG, BattleConfig
from fortbattle.core.types import EngagementBlock
from fortbattle.domain.battle_models import EngagementCheck
from fortbattle.domain.entities import Combatant


def can_engage(attacker_level: int, defender_level: int, *, max_gap: int = DEFAULT_CONFIG.max_level_gap) -> bool:
    """Return True when the defender is within ``max_gap`` levels of the attacker."""
    if defender_level > attacker_level + max_gap:
        return False
    if defender_level < attacker_level - max_gap:
        return False
    return True


def classify_engagement(
    attacker_level: int,
    defender_level: int,
    attacker_offense: int,
    *,
    max_gap: int = DEFAULT_CONFIG.max_level_gap,
) -> EngagementBlock | None:
    """Name the reason an engagement is refused, or None when it may proceed.

    A level gap outranks a missing offense score.
    """
    if defender_level < attacker_level - max_gap:
        return "too_low"
    if defender_level > attacker_level + max_gap:
        return "too_high"
    if attacker_offense == 0:
        return "no_offense"
    return None


def check_engagement(
    attacker: Combatant,
    defender: Combatant,
    config: BattleConfig = DEFAULT_CONFIG,
) -> EngagementCheck:
    reason = classify_engagement(
        attacker.level,
        defender.level,
        attacker.offense,
        max_gap=config.max_level_gap,
    )
    return EngagementCheck(
        attacker_level=attacker.level,
        defender_level=defender.level,
        attacker_offense=attacker.offense,
        reason=reason,
    )
