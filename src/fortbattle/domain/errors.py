"""Exceptions raised by the battle formulas."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fortbattle.domain.battle_models import EngagementCheck


class BattleError(Exception):
    """Base exception for battle resolution."""


class EngagementBlockedError(BattleError):
    """Raised when resolution is requested for a pair that may not fight."""

    def __init__(self, check: "EngagementCheck") -> None:
        super().__init__(f"Engagement blocked: {check.reason}")
        self.check = check


class DegenerateDamageError(BattleError):
    """Raised when a damage value used as a divisor is not positive."""
