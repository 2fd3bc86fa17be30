"""Per-player locks serializing battle resolution."""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator

logger = logging.getLogger("fortbattle.locks")


class PlayerLockManager:
    """Hands out one lock per player id.

    A battle touches two players; ``lock_pair`` always acquires the lower id
    first so two opposite attacks cannot deadlock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def _get_lock(self, player_id: int) -> threading.Lock:
        with self._guard:
            if player_id not in self._locks:
                self._locks[player_id] = threading.Lock()
            return self._locks[player_id]

    @contextmanager
    def lock(self, player_id: int) -> Iterator[None]:
        lock = self._get_lock(player_id)
        logger.debug("Acquiring player lock: player=%d", player_id)
        with lock:
            logger.debug("Player lock acquired: player=%d", player_id)
            yield
        logger.debug("Player lock released: player=%d", player_id)

    @contextmanager
    def lock_pair(self, first_id: int, second_id: int) -> Iterator[None]:
        low, high = sorted((first_id, second_id))
        if low == high:
            with self.lock(low):
                yield
            return
        with self.lock(low):
            with self.lock(high):
                yield

    def is_locked(self, player_id: int) -> bool:
        return self._get_lock(player_id).locked()
