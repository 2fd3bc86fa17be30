"""Battle log persisted as a JSON file."""
from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from fortbattle.data.errors import DataLoadError
from fortbattle.data.json_loader import load_json, write_json
from fortbattle.services.battle_log import BattleLogEntry, deserialize_entry, serialize_entry
from fortbattle.services.errors import BattleLogError

logger = logging.getLogger("fortbattle.battle_log")


class JsonBattleLogRepository:
    """Appends entries to ``{"entries": [...]}`` in a single JSON document."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def record(self, entry: BattleLogEntry) -> BattleLogEntry:
        with self._lock:
            payloads = self._read_payloads()
            stored = entry.with_id(len(payloads) + 1)
            payloads.append(serialize_entry(stored))
            try:
                write_json(self._path, {"entries": payloads})
            except DataLoadError as exc:
                raise BattleLogError(str(exc)) from exc
        logger.debug("Recorded battle %d in %s", stored.battle_id, self._path)
        return stored

    def get(self, battle_id: int) -> BattleLogEntry:
        for entry in self._read_entries():
            if entry.battle_id == battle_id:
                return entry
        raise BattleLogError(f"Battle {battle_id} not found.")

    def entries_for(self, attacker_id: int, defender_id: int, since: datetime) -> List[BattleLogEntry]:
        return [
            entry
            for entry in self._read_entries()
            if entry.attacker_id == attacker_id and entry.defender_id == defender_id and entry.timestamp >= since
        ]

    def _read_entries(self) -> List[BattleLogEntry]:
        return [deserialize_entry(payload) for payload in self._read_payloads()]

    def _read_payloads(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            raw = load_json(self._path)
        except DataLoadError as exc:
            raise BattleLogError(str(exc)) from exc
        if not isinstance(raw, dict) or not isinstance(raw.get("entries"), list):
            raise BattleLogError(f"Battle log file {self._path} must hold an 'entries' list.")
        return raw["entries"]
