"""Unit definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from fortbattle.core.types import UnitType


@dataclass(slots=True)
class UnitDef:
    """Trainable unit tier as listed in the catalogue."""

    id: str
    name: str
    unit_type: UnitType
    level: int
    bonus: int
    cost: int
