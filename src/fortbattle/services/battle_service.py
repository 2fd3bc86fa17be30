"""Battle service wiring the resolution engine to its collaborators."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Tuple

from fortbattle.core.config import DEFAULT_CONFIG, BattleConfig
from fortbattle.core.rng import RandomSource
from fortbattle.data.repositories import UnitsRepository
from fortbattle.domain.battle_models import BattlePreview, BattleResult, EngagementCheck
from fortbattle.domain.eligibility import check_engagement
from fortbattle.domain.entities import Combatant
from fortbattle.domain.resolution import preview_battle, resolve_battle
from fortbattle.services.battle_log import BattleLogEntry, build_log_entry
from fortbattle.services.collaborators import AttackQuota, BattleLogRepository, PlayerRepository
from fortbattle.services.factories import create_combatant
from fortbattle.services.errors import InvalidTurnsError
from fortbattle.services.locks import PlayerLockManager
from fortbattle.services.quota import Clock, utc_now

logger = logging.getLogger("fortbattle.service")


@dataclass(frozen=True, slots=True)
class AttackReport:
    """What the caller gets back from an attack request.

    ``result`` and ``log_entry`` are None when the engagement was refused.
    """

    check: EngagementCheck
    result: BattleResult | None = None
    log_entry: BattleLogEntry | None = None

    @property
    def blocked(self) -> bool:
        return self.result is None


class BattleService:
    """Runs quota, eligibility, resolution and persistence for one attack."""

    def __init__(
        self,
        *,
        player_repo: PlayerRepository,
        battle_log: BattleLogRepository,
        quota: AttackQuota,
        units_repo: UnitsRepository | None = None,
        rng: RandomSource | None = None,
        config: BattleConfig = DEFAULT_CONFIG,
        locks: PlayerLockManager | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._player_repo = player_repo
        self._battle_log = battle_log
        self._quota = quota
        self._units_repo = units_repo
        self._rng = rng
        self._config = config
        self._locks = locks or PlayerLockManager()
        self._clock = clock

    def check(self, attacker_id: int, defender_id: int) -> EngagementCheck:
        """Classify whether the attacker may engage the defender right now."""
        attacker, defender = self._load_pair(attacker_id, defender_id)
        return self._check(attacker, defender)

    def preview(self, attacker_id: int, defender_id: int, turns: int) -> BattlePreview:
        attacker, defender = self._load_pair(attacker_id, defender_id)
        return preview_battle(attacker, defender, turns, rng=self._rng, config=self._config)

    def attack(self, attacker_id: int, defender_id: int, turns: int) -> AttackReport:
        """Resolve an attack and persist both players and the battle log.

        Refusals come back as a report with a reason; they are not raised.
        """
        if attacker_id == defender_id:
            raise ValueError("A player cannot attack themselves.")

        with self._locks.lock_pair(attacker_id, defender_id):
            attacker_record = self._player_repo.get(attacker_id)
            if turns <= 0 or turns > attacker_record.attack_turns:
                raise InvalidTurnsError(
                    f"Player {attacker_id} asked for {turns} turns but holds {attacker_record.attack_turns}."
                )
            attacker = create_combatant(attacker_record, self._units_repo)
            defender = create_combatant(self._player_repo.get(defender_id), self._units_repo)

            check = self._check(attacker, defender)
            if not check.allowed:
                logger.info("Attack %d -> %d refused: %s", attacker_id, defender_id, check.reason)
                return AttackReport(check=check)

            result = resolve_battle(attacker, defender, turns, rng=self._rng, config=self._config)
            self._player_repo.apply_battle_outcome(attacker_id, result.attacker_outcome())
            self._player_repo.apply_battle_outcome(defender_id, result.defender_outcome())
            entry = self._battle_log.record(build_log_entry(result, self._clock(), self._units_repo))

        logger.info(
            "Battle %s: %d -> %d winner=%d pillaged=%d xp=%d",
            entry.battle_id,
            attacker_id,
            defender_id,
            result.winner_id,
            result.gold_pillaged,
            result.xp_earned,
        )
        return AttackReport(check=check, result=result, log_entry=entry)

    def get_battle(self, battle_id: int) -> BattleLogEntry:
        return self._battle_log.get(battle_id)

    def _load_pair(self, attacker_id: int, defender_id: int) -> Tuple[Combatant, Combatant]:
        attacker = create_combatant(self._player_repo.get(attacker_id), self._units_repo)
        defender = create_combatant(self._player_repo.get(defender_id), self._units_repo)
        return attacker, defender

    def _check(self, attacker: Combatant, defender: Combatant) -> EngagementCheck:
        check = check_engagement(attacker, defender, self._config)
        if check.allowed and not self._quota.can_attack(attacker.player_id, defender.player_id):
            return replace(check, reason="too_many")
        return check
