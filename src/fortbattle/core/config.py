"""Balancing constants and helpers for loading overrides from disk."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Tuple

from fortbattle.data.errors import DataLoadError, DataValidationError
from fortbattle.data.json_loader import load_json

CONFIG_ENV_VAR = "FORTBATTLE_CONFIG"


@dataclass(frozen=True, slots=True)
class BattleConfig:
    """Every tunable number the battle formulas read."""

    max_level_gap: int = 5
    # Indexed by the clamped level difference; not monotonic on purpose.
    level_multipliers: Tuple[float, ...] = (1.0, 0.5, 0.8, 1.2, 1.5, 2.0)
    # Fort resilience polynomial, highest power (6) first.
    fort_coefficients: Tuple[float, ...] = (-2e-7, 1e-5, -0.0003, 0.0016, 0.0135, 0.0521, 0.1295)
    equipment_mitigation: float = 0.5
    pillage_ratio: float = 0.8
    xp_unit_ratio_min: float = 6.0
    xp_unit_ratio_max: float = 14.0
    min_damage: int = 1
    level_mitigation_base: float = 0.96
    quota_max_attacks: int = 5
    quota_window_hours: int = 24


DEFAULT_CONFIG = BattleConfig()

_INT_FIELDS = {"max_level_gap", "min_damage", "quota_max_attacks", "quota_window_hours"}
_FLOAT_FIELDS = {
    "equipment_mitigation",
    "pillage_ratio",
    "xp_unit_ratio_min",
    "xp_unit_ratio_max",
    "level_mitigation_base",
}
_SEQUENCE_FIELDS = {"level_multipliers", "fort_coefficients"}


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "FortBattle"
        return Path.home() / "FortBattle"
    return Path.home() / ".config" / "fortbattle"


def get_default_config_path() -> Path:
    """Return the config path from the environment or the per-user default."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_user_data_dir() / "battle.json"


def load_config(path: Path | str | None = None) -> BattleConfig:
    """Load overrides from disk on top of the defaults.

    A missing file yields the defaults. Malformed JSON raises DataLoadError and
    unknown keys or wrongly typed values raise DataValidationError.
    """
    config_path = Path(path) if path is not None else get_default_config_path()
    if not config_path.exists():
        return DEFAULT_CONFIG
    raw = load_json(config_path)
    if not isinstance(raw, dict):
        raise DataLoadError(f"Expected top-level object in {config_path}")
    return config_from_mapping(raw)


def config_from_mapping(raw: Dict[str, object]) -> BattleConfig:
    known = {f.name for f in fields(BattleConfig)}
    unknown = set(raw) - known
    if unknown:
        raise DataValidationError(f"Unknown battle config keys: {sorted(unknown)}")

    overrides: Dict[str, object] = {}
    for key, value in raw.items():
        if key in _INT_FIELDS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise DataValidationError(f"Config '{key}' must be an integer.")
            overrides[key] = value
        elif key in _FLOAT_FIELDS:
            overrides[key] = _require_number(value, key)
        elif key in _SEQUENCE_FIELDS:
            if not isinstance(value, list) or not value:
                raise DataValidationError(f"Config '{key}' must be a non-empty list of numbers.")
            overrides[key] = tuple(_require_number(item, key) for item in value)

    config = replace(DEFAULT_CONFIG, **overrides)
    if len(config.level_multipliers) != config.max_level_gap + 1:
        raise DataValidationError("level_multipliers needs one entry per level gap from 0 to max_level_gap.")
    if config.xp_unit_ratio_min > config.xp_unit_ratio_max:
        raise DataValidationError("xp_unit_ratio_min cannot exceed xp_unit_ratio_max.")
    return config


def _require_number(value: object, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataValidationError(f"Config '{key}' must be numeric.")
    return float(value)
