"""Repository exports."""

from .units_repo import UnitsRepository

__all__ = [
    "UnitsRepository",
]
