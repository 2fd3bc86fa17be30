"""Battle log records and their JSON payload form."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from fortbattle.core.types import UNIT_TYPES, UnitType
from fortbattle.data.repositories import UnitsRepository
from fortbattle.domain.battle_models import BattleResult, CasualtyReport
from fortbattle.services.errors import BattleLogError

LOG_VERSION = 1

LogPayload = Dict[str, Any]


@dataclass(frozen=True, slots=True)
class UnitLoss:
    unit_type: UnitType
    level: int
    name: str
    quantity: int
    lost: int


@dataclass(frozen=True, slots=True)
class BattleLogStats:
    """Per-battle numbers shown on the battle report page."""

    offense_points: int
    defense_points: int
    pillaged_gold: int
    xp_earned: int
    offense_xp_start: int
    hp_damage: float
    offense_units_count: int
    offense_units_lost: Tuple[UnitLoss, ...] = ()
    defense_units_count: int = 0
    defense_units_lost: Tuple[UnitLoss, ...] = ()


@dataclass(frozen=True, slots=True)
class BattleLogEntry:
    attacker_id: int
    defender_id: int
    winner_id: int
    stats: BattleLogStats
    timestamp: datetime
    battle_id: int | None = None

    def with_id(self, battle_id: int) -> "BattleLogEntry":
        return replace(self, battle_id=battle_id)


def build_log_entry(
    result: BattleResult,
    timestamp: datetime,
    units_repo: UnitsRepository | None = None,
) -> BattleLogEntry:
    """Summarize a battle result for the battle log."""
    stats = BattleLogStats(
        offense_points=result.attacker_offense,
        defense_points=result.defender_defense,
        pillaged_gold=result.gold_pillaged,
        xp_earned=result.xp_earned if result.xp_applied else 0,
        offense_xp_start=result.attacker_xp_start,
        hp_damage=result.defender_hp_damage,
        offense_units_count=sum(report.quantity for report in result.attacker_casualties),
        offense_units_lost=_unit_losses(result.attacker_casualties, units_repo),
        defense_units_count=sum(report.quantity for report in result.defender_casualties),
        defense_units_lost=_unit_losses(result.defender_casualties, units_repo),
    )
    return BattleLogEntry(
        attacker_id=result.attacker_id,
        defender_id=result.defender_id,
        winner_id=result.winner_id,
        stats=stats,
        timestamp=timestamp,
    )


def _unit_losses(
    reports: Sequence[CasualtyReport],
    units_repo: UnitsRepository | None,
) -> Tuple[UnitLoss, ...]:
    losses: List[UnitLoss] = []
    for report in reports:
        unit_def = units_repo.find(report.unit_type, report.level) if units_repo is not None else None
        name = unit_def.name if unit_def is not None else f"{report.unit_type.title()} L{report.level}"
        losses.append(
            UnitLoss(
                unit_type=report.unit_type,
                level=report.level,
                name=name,
                quantity=report.quantity,
                lost=report.casualties,
            )
        )
    return tuple(losses)


# -----------------------
# Serialization
# -----------------------
def serialize_entry(entry: BattleLogEntry) -> LogPayload:
    stats = entry.stats
    return {
        "log_version": LOG_VERSION,
        "battle_id": entry.battle_id,
        "attacker_id": entry.attacker_id,
        "defender_id": entry.defender_id,
        "winner_id": entry.winner_id,
        "timestamp": entry.timestamp.astimezone(timezone.utc).isoformat(),
        "stats": {
            "offense_points": stats.offense_points,
            "defense_points": stats.defense_points,
            "pillaged_gold": stats.pillaged_gold,
            "xp_earned": stats.xp_earned,
            "offense_xp_start": stats.offense_xp_start,
            "hp_damage": stats.hp_damage,
            "offense_units_count": stats.offense_units_count,
            "offense_units_lost": [_serialize_loss(loss) for loss in stats.offense_units_lost],
            "defense_units_count": stats.defense_units_count,
            "defense_units_lost": [_serialize_loss(loss) for loss in stats.defense_units_lost],
        },
    }


def deserialize_entry(payload: Mapping[str, Any]) -> BattleLogEntry:
    """Rebuild an entry from a stored payload, validating every field."""
    if not isinstance(payload, Mapping):
        raise BattleLogError("Battle log entry must be a JSON object.")
    if payload.get("log_version") != LOG_VERSION:
        raise BattleLogError(f"Unsupported battle log version: {payload.get('log_version')!r}.")
    stats_payload = payload.get("stats")
    if not isinstance(stats_payload, Mapping):
        raise BattleLogError("Battle log entry is missing its stats section.")

    battle_id_raw = payload.get("battle_id")
    battle_id = None if battle_id_raw is None else _require_int(battle_id_raw, "battle_id")
    stats = BattleLogStats(
        offense_points=_require_int(stats_payload.get("offense_points"), "stats.offense_points"),
        defense_points=_require_int(stats_payload.get("defense_points"), "stats.defense_points"),
        pillaged_gold=_require_int(stats_payload.get("pillaged_gold"), "stats.pillaged_gold"),
        xp_earned=_require_int(stats_payload.get("xp_earned"), "stats.xp_earned"),
        offense_xp_start=_require_int(stats_payload.get("offense_xp_start"), "stats.offense_xp_start"),
        hp_damage=_require_number(stats_payload.get("hp_damage"), "stats.hp_damage"),
        offense_units_count=_require_int(stats_payload.get("offense_units_count"), "stats.offense_units_count"),
        offense_units_lost=_coerce_losses(stats_payload.get("offense_units_lost"), "stats.offense_units_lost"),
        defense_units_count=_require_int(stats_payload.get("defense_units_count"), "stats.defense_units_count"),
        defense_units_lost=_coerce_losses(stats_payload.get("defense_units_lost"), "stats.defense_units_lost"),
    )
    return BattleLogEntry(
        attacker_id=_require_int(payload.get("attacker_id"), "attacker_id"),
        defender_id=_require_int(payload.get("defender_id"), "defender_id"),
        winner_id=_require_int(payload.get("winner_id"), "winner_id"),
        stats=stats,
        timestamp=_require_timestamp(payload.get("timestamp"), "timestamp"),
        battle_id=battle_id,
    )


def _serialize_loss(loss: UnitLoss) -> Dict[str, Any]:
    return {
        "unit_type": loss.unit_type,
        "level": loss.level,
        "name": loss.name,
        "quantity": loss.quantity,
        "lost": loss.lost,
    }


def _coerce_losses(value: object, context: str) -> Tuple[UnitLoss, ...]:
    if not isinstance(value, list):
        raise BattleLogError(f"{context} must be a list.")
    losses: List[UnitLoss] = []
    for index, raw in enumerate(value):
        item_context = f"{context}[{index}]"
        if not isinstance(raw, Mapping):
            raise BattleLogError(f"{item_context} must be an object.")
        unit_type = raw.get("unit_type")
        if unit_type not in UNIT_TYPES:
            raise BattleLogError(f"{item_context}.unit_type is not a known unit type.")
        name = raw.get("name")
        if not isinstance(name, str):
            raise BattleLogError(f"{item_context}.name must be a string.")
        losses.append(
            UnitLoss(
                unit_type=unit_type,
                level=_require_int(raw.get("level"), f"{item_context}.level"),
                name=name,
                quantity=_require_int(raw.get("quantity"), f"{item_context}.quantity"),
                lost=_require_int(raw.get("lost"), f"{item_context}.lost"),
            )
        )
    return tuple(losses)


def _require_int(value: object, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BattleLogError(f"{context} must be an integer.")
    return value


def _require_number(value: object, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BattleLogError(f"{context} must be a number.")
    return value


def _require_timestamp(value: object, context: str) -> datetime:
    if not isinstance(value, str):
        raise BattleLogError(f"{context} must be an ISO-8601 string.")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise BattleLogError(f"{context} is not a valid timestamp: {value!r}.") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
