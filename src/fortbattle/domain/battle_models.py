"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from fortbattle.core.types import EngagementBlock, Side, UnitType


@dataclass(frozen=True, slots=True)
class EngagementCheck:
    """Result of the pre-battle eligibility check.

    Levels and offense are carried along so callers can explain a refusal
    without reloading either player.
    """

    attacker_level: int
    defender_level: int
    attacker_offense: int
    reason: EngagementBlock | None = None

    @property
    def allowed(self) -> bool:
        return self.reason is None


@dataclass(frozen=True, slots=True)
class CasualtyReport:
    """Losses sampled for one unit stack."""

    unit_type: UnitType
    level: int
    quantity: int
    casualty_rate: float
    casualties: int

    @property
    def survivors(self) -> int:
        return self.quantity - self.casualties


@dataclass(frozen=True, slots=True)
class PlayerOutcome:
    """Delta the player repository applies to one persisted player."""

    gold_delta: int
    fort_hitpoints: float
    xp_gained: int
    casualties: Tuple[CasualtyReport, ...]
    turns_spent: int = 0


@dataclass(frozen=True, slots=True)
class BattleResult:
    """Everything one resolution produced; never revised afterwards."""

    attacker_id: int
    defender_id: int
    turns: int
    attacker_level: int
    defender_level: int
    attacker_offense: int
    defender_offense: int
    defender_defense: int
    attacker_damage: int
    defender_damage: int
    fort_damage: float
    attacker_fort_start: float
    attacker_fort_end: float
    defender_fort_start: float
    defender_fort_end: float
    attacker_casualties: Tuple[CasualtyReport, ...]
    defender_casualties: Tuple[CasualtyReport, ...]
    attacker_xp_start: int
    xp_earned: int
    xp_applied: bool
    gold_pillaged: int
    winner: Side
    earned_new_level: bool
    new_level: int

    @property
    def attacker_won(self) -> bool:
        return self.winner == "attacker"

    @property
    def winner_id(self) -> int:
        return self.attacker_id if self.attacker_won else self.defender_id

    @property
    def defender_hp_damage(self) -> float:
        return self.defender_fort_start - self.defender_fort_end

    def attacker_outcome(self) -> PlayerOutcome:
        return PlayerOutcome(
            gold_delta=self.gold_pillaged,
            fort_hitpoints=self.attacker_fort_end,
            xp_gained=self.xp_earned if self.xp_applied else 0,
            casualties=self.attacker_casualties,
            turns_spent=self.turns,
        )

    def defender_outcome(self) -> PlayerOutcome:
        return PlayerOutcome(
            gold_delta=-self.gold_pillaged,
            fort_hitpoints=self.defender_fort_end,
            xp_gained=0,
            casualties=self.defender_casualties,
        )


@dataclass(frozen=True, slots=True)
class BattlePreview:
    """Expected outcome shown before the attacker commits turns."""

    attacker_id: int
    defender_id: int
    winner: Side
    available_pillage: int
    level_mitigation: float
    attacker_offense: int
    defender_defense: int
    defender_fort_level: int
    defender_fort_percentage: int
    defender_gold: int
