"""Service layer exports."""

from .battle_log import BattleLogEntry, BattleLogStats, UnitLoss
from .battle_log_store import JsonBattleLogRepository
from .battle_service import AttackReport, BattleService
from .errors import BattleLogError, FactoryError, InvalidTurnsError, PlayerNotFoundError
from .in_memory import InMemoryBattleLogRepository, InMemoryPlayerRepository
from .locks import PlayerLockManager
from .quota import BattleLogQuota

__all__ = [
    "AttackReport",
    "BattleLogEntry",
    "BattleLogError",
    "BattleLogQuota",
    "BattleLogStats",
    "BattleService",
    "FactoryError",
    "InMemoryBattleLogRepository",
    "InMemoryPlayerRepository",
    "InvalidTurnsError",
    "JsonBattleLogRepository",
    "PlayerLockManager",
    "PlayerNotFoundError",
    "UnitLoss",
]
