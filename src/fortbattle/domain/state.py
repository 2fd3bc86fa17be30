"""Persisted player state as the service layer sees it."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from fortbattle.domain.entities import ItemStack, UnitStack


@dataclass
class PlayerRecord:
    """Player row loaded from the player repository."""

    id: int
    display_name: str
    level: int
    offense: int
    defense: int
    fort_level: int
    fort_hitpoints: float
    fort_max_hitpoints: float
    gold: int = 0
    experience: int = 0
    next_level_xp: int = 0
    attack_turns: int = 0
    units: List[UnitStack] = field(default_factory=list)
    items: List[ItemStack] = field(default_factory=list)

    @property
    def xp_to_next_level(self) -> int:
        """Experience still missing before ``next_level_xp``; 0 once it is reached.

        Promotion and the following threshold belong to player progression.
        """
        return max(self.next_level_xp - self.experience, 0)
