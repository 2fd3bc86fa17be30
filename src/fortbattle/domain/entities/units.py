"""Army and equipment stack models."""
from __future__ import annotations

from dataclasses import dataclass

from fortbattle.core.types import UnitType


@dataclass(frozen=True, slots=True)
class UnitStack:
    """A group of identical units of one category and tier."""

    unit_type: UnitType
    level: int
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(f"{self.unit_type} level {self.level} quantity cannot be negative.")


@dataclass(frozen=True, slots=True)
class ItemStack:
    """Equipment for one unit category and tier.

    The quantity may be lower or higher than the matching unit stack; only
    the covered share of units counts as equipped.
    """

    item_type: str
    level: int
    quantity: int
    unit_type: UnitType

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(f"{self.item_type} level {self.level} quantity cannot be negative.")
