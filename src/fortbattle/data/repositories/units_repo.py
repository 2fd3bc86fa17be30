"""Unit catalogue repository."""
from __future__ import annotations

from typing import Dict

from fortbattle.core.types import UNIT_TYPES
from fortbattle.data.errors import DataValidationError
from fortbattle.data.repositories.base import RepositoryBase
from fortbattle.domain.defs import UnitDef


class UnitsRepository(RepositoryBase[UnitDef]):
    """Loads and validates trainable unit definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("units.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, UnitDef]:
        units: Dict[str, UnitDef] = {}
        seen_tiers: set[tuple[str, int]] = set()
        for raw_id, payload in raw.items():
            unit_data = self._require_mapping(payload, f"unit '{raw_id}'")
            self._assert_exact_fields(
                unit_data,
                {"name", "type", "level", "bonus", "cost"},
                f"unit '{raw_id}'",
            )
            name = self._require_str(unit_data["name"], f"unit '{raw_id}' name")
            unit_type = self._require_str(unit_data["type"], f"unit '{raw_id}' type")
            if unit_type not in UNIT_TYPES:
                raise DataValidationError(f"unit '{raw_id}' has unknown type '{unit_type}'.")
            level = self._require_int(unit_data["level"], f"unit '{raw_id}' level")
            if level < 1:
                raise DataValidationError(f"unit '{raw_id}' level must be at least 1.")
            if (unit_type, level) in seen_tiers:
                raise DataValidationError(f"unit '{raw_id}' duplicates tier {unit_type} level {level}.")
            seen_tiers.add((unit_type, level))
            bonus = self._require_int(unit_data["bonus"], f"unit '{raw_id}' bonus")
            cost = self._require_int(unit_data["cost"], f"unit '{raw_id}' cost")

            units[raw_id] = UnitDef(
                id=raw_id,
                name=name,
                unit_type=unit_type,  # type: ignore[arg-type]
                level=level,
                bonus=bonus,
                cost=cost,
            )
        return units

    def find(self, unit_type: str, level: int) -> UnitDef | None:
        """Return the definition for a unit tier, or None when the tier is unknown."""
        for unit in self.all():
            if unit.unit_type == unit_type and unit.level == level:
                return unit
        return None
