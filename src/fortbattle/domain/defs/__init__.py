"""Domain definition exports."""

from .unit_def import UnitDef

__all__ = [
    "UnitDef",
]
