"""In-memory collaborators for tests and single-process deployments."""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List

from fortbattle.domain.battle_models import PlayerOutcome
from fortbattle.domain.entities import UnitStack
from fortbattle.domain.state import PlayerRecord
from fortbattle.services.battle_log import BattleLogEntry
from fortbattle.services.errors import BattleLogError, PlayerNotFoundError

logger = logging.getLogger("fortbattle.repositories")


class InMemoryPlayerRepository:
    """Stores player rows in a dict keyed by player id."""

    def __init__(self, players: Iterable[PlayerRecord] = ()) -> None:
        self._players: Dict[int, PlayerRecord] = {player.id: player for player in players}

    def add(self, player: PlayerRecord) -> None:
        self._players[player.id] = player

    def get(self, player_id: int) -> PlayerRecord:
        try:
            player = self._players[player_id]
        except KeyError as exc:
            raise PlayerNotFoundError(f"Player {player_id} not found.") from exc
        # Callers get a copy so a failed battle cannot leave half-applied edits.
        return replace(player, units=list(player.units), items=list(player.items))

    def apply_battle_outcome(self, player_id: int, outcome: PlayerOutcome) -> None:
        player = self._players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found.")
        if outcome.turns_spent > player.attack_turns:
            raise ValueError(f"Player {player_id} cannot spend {outcome.turns_spent} turns.")

        player.gold = max(player.gold + outcome.gold_delta, 0)
        player.fort_hitpoints = max(round(outcome.fort_hitpoints), 0)
        player.experience += outcome.xp_gained
        player.attack_turns -= outcome.turns_spent
        player.units = _remove_casualties(player.units, outcome)
        logger.debug(
            "Applied outcome to player %d: gold %+d, fort %s, xp +%d",
            player_id,
            outcome.gold_delta,
            player.fort_hitpoints,
            outcome.xp_gained,
        )


def _remove_casualties(units: List[UnitStack], outcome: PlayerOutcome) -> List[UnitStack]:
    # Reports follow the order of the stacks they were drawn for, so stacks
    # sharing a tier each lose their own count.
    pending = list(outcome.casualties)
    updated: List[UnitStack] = []
    for unit in units:
        if pending and (pending[0].unit_type, pending[0].level) == (unit.unit_type, unit.level):
            lost = pending.pop(0).casualties
            unit = replace(unit, quantity=max(unit.quantity - lost, 0))
        updated.append(unit)
    return updated


class InMemoryBattleLogRepository:
    """Keeps battle log entries in insertion order; ids start at 1."""

    def __init__(self) -> None:
        self._entries: List[BattleLogEntry] = []

    def record(self, entry: BattleLogEntry) -> BattleLogEntry:
        stored = entry.with_id(len(self._entries) + 1)
        self._entries.append(stored)
        return stored

    def get(self, battle_id: int) -> BattleLogEntry:
        if not 1 <= battle_id <= len(self._entries):
            raise BattleLogError(f"Battle {battle_id} not found.")
        return self._entries[battle_id - 1]

    def entries_for(self, attacker_id: int, defender_id: int, since: datetime) -> List[BattleLogEntry]:
        return [
            entry
            for entry in self._entries
            if entry.attacker_id == attacker_id and entry.defender_id == defender_id and entry.timestamp >= since
        ]

    def all(self) -> List[BattleLogEntry]:
        return list(self._entries)
