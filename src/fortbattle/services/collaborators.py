"""Interfaces the battle service depends on.

Implementations of PlayerRepository must apply at most one battle outcome per
player at a time. BattleService serializes its own calls through
PlayerLockManager; any other writer of the same rows has to do the same.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Protocol

from fortbattle.domain.battle_models import PlayerOutcome
from fortbattle.domain.state import PlayerRecord
from fortbattle.services.battle_log import BattleLogEntry


class PlayerRepository(Protocol):
    def get(self, player_id: int) -> PlayerRecord:
        """Return the player row; raise PlayerNotFoundError when absent."""
        ...

    def apply_battle_outcome(self, player_id: int, outcome: PlayerOutcome) -> None: ...


class BattleLogRepository(Protocol):
    def record(self, entry: BattleLogEntry) -> BattleLogEntry:
        """Persist an entry and return it with its assigned battle id."""
        ...

    def get(self, battle_id: int) -> BattleLogEntry: ...

    def entries_for(self, attacker_id: int, defender_id: int, since: datetime) -> List[BattleLogEntry]: ...


class AttackQuota(Protocol):
    def can_attack(self, attacker_id: int, defender_id: int) -> bool: ...
