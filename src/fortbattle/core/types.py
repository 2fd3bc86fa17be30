"""Shared type aliases for the core and domain layers."""
from typing import Literal

UnitType = Literal["CITIZEN", "WORKER", "OFFENSE", "DEFENSE", "SPY", "SENTRY"]
UNIT_TYPES: tuple[UnitType, ...] = ("CITIZEN", "WORKER", "OFFENSE", "DEFENSE", "SPY", "SENTRY")

Side = Literal["attacker", "defender"]

EngagementBlock = Literal["too_low", "too_high", "no_offense", "too_many"]

__all__ = ["EngagementBlock", "Side", "UNIT_TYPES", "UnitType"]
