"""Battle snapshot of one player."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from fortbattle.core.types import UnitType

from .units import ItemStack, UnitStack


@dataclass(frozen=True, slots=True)
class FortHealth:
    current: float
    max: float

    @property
    def percentage(self) -> int:
        if self.max <= 0:
            return 0
        return int(self.current * 100 // self.max)


@dataclass(frozen=True, slots=True)
class Combatant:
    """Everything the battle formulas read about one side.

    Built fresh for every resolution and never mutated by the engine.
    """

    player_id: int
    level: int
    offense: int
    defense: int
    fort_level: int
    fort_hitpoints: float
    fort_max_hitpoints: float
    gold: int
    experience: int
    xp_to_next_level: int
    units: Tuple[UnitStack, ...] = ()
    items: Tuple[ItemStack, ...] = ()

    @property
    def fort_health(self) -> FortHealth:
        return FortHealth(current=self.fort_hitpoints, max=self.fort_max_hitpoints)

    def units_of(self, unit_type: UnitType) -> Tuple[UnitStack, ...]:
        return tuple(unit for unit in self.units if unit.unit_type == unit_type)

    def items_for(self, unit_type: UnitType) -> Tuple[ItemStack, ...]:
        return tuple(item for item in self.items if item.unit_type == unit_type)

    def unit_total(self, unit_type: UnitType) -> int:
        return sum(unit.quantity for unit in self.units_of(unit_type))

    @property
    def offensive_unit_count(self) -> int:
        return self.unit_total("OFFENSE")

    @property
    def defensive_unit_count(self) -> int:
        return self.unit_total("DEFENSE")
