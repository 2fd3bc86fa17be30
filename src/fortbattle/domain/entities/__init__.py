"""Runtime entity exports."""

from .combatant import Combatant, FortHealth
from .units import ItemStack, UnitStack

__all__ = [
    "Combatant",
    "FortHealth",
    "ItemStack",
    "UnitStack",
]
