"""Attack quota backed by the battle log."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from fortbattle.core.config import DEFAULT_CONFIG, BattleConfig
from fortbattle.services.collaborators import BattleLogRepository

logger = logging.getLogger("fortbattle.quota")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BattleLogQuota:
    """Allows a limited number of attacks on the same defender per rolling window."""

    def __init__(
        self,
        battle_log: BattleLogRepository,
        *,
        max_attacks: int = DEFAULT_CONFIG.quota_max_attacks,
        window: timedelta = timedelta(hours=DEFAULT_CONFIG.quota_window_hours),
        clock: Clock = utc_now,
    ) -> None:
        if max_attacks < 1:
            raise ValueError("max_attacks must be at least 1.")
        self._battle_log = battle_log
        self._max_attacks = max_attacks
        self._window = window
        self._clock = clock

    @classmethod
    def from_config(cls, battle_log: BattleLogRepository, config: BattleConfig, clock: Clock = utc_now) -> "BattleLogQuota":
        return cls(
            battle_log,
            max_attacks=config.quota_max_attacks,
            window=timedelta(hours=config.quota_window_hours),
            clock=clock,
        )

    def can_attack(self, attacker_id: int, defender_id: int) -> bool:
        since = self._clock() - self._window
        recent = self._battle_log.entries_for(attacker_id, defender_id, since)
        if len(recent) >= self._max_attacks:
            logger.info(
                "Quota reached: %d attacked %d %d times since %s",
                attacker_id,
                defender_id,
                len(recent),
                since.isoformat(),
            )
            return False
        return True
