from __future__ import annotations

import json

import pytest

from fortbattle.core.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    config_from_mapping,
    get_default_config_path,
    load_config,
)
from fortbattle.data.errors import DataLoadError, DataValidationError


def _write_config(tmp_path, payload) -> object:
    path = tmp_path / "battle.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_match_balancing_table() -> None:
    assert DEFAULT_CONFIG.max_level_gap == 5
    assert DEFAULT_CONFIG.level_multipliers == (1.0, 0.5, 0.8, 1.2, 1.5, 2.0)
    assert DEFAULT_CONFIG.pillage_ratio == 0.8
    assert DEFAULT_CONFIG.equipment_mitigation == 0.5
    assert DEFAULT_CONFIG.quota_max_attacks == 5


def test_missing_file_returns_defaults(tmp_path) -> None:
    assert load_config(tmp_path / "absent.json") is DEFAULT_CONFIG


def test_overrides_are_applied(tmp_path) -> None:
    path = _write_config(tmp_path, {"pillage_ratio": 0.5, "quota_max_attacks": 2})

    config = load_config(path)

    assert config.pillage_ratio == 0.5
    assert config.quota_max_attacks == 2
    assert config.max_level_gap == DEFAULT_CONFIG.max_level_gap


def test_sequence_override_becomes_tuple() -> None:
    config = config_from_mapping({"max_level_gap": 2, "level_multipliers": [1, 0.9, 0.7]})

    assert config.level_multipliers == (1.0, 0.9, 0.7)


def test_env_var_selects_config_path(tmp_path, monkeypatch) -> None:
    path = _write_config(tmp_path, {"min_damage": 3})
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert get_default_config_path() == path
    assert load_config().min_damage == 3


def test_unknown_key_rejected() -> None:
    with pytest.raises(DataValidationError):
        config_from_mapping({"pillage": 0.5})


def test_wrong_types_rejected() -> None:
    with pytest.raises(DataValidationError):
        config_from_mapping({"max_level_gap": "5"})
    with pytest.raises(DataValidationError):
        config_from_mapping({"min_damage": True})
    with pytest.raises(DataValidationError):
        config_from_mapping({"fort_coefficients": []})


def test_multiplier_table_must_cover_gap() -> None:
    with pytest.raises(DataValidationError):
        config_from_mapping({"max_level_gap": 3})


def test_unit_ratio_bounds_must_be_ordered() -> None:
    with pytest.raises(DataValidationError):
        config_from_mapping({"xp_unit_ratio_min": 20})


def test_malformed_file_raises(tmp_path) -> None:
    path = tmp_path / "battle.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(DataLoadError):
        load_config(path)


def test_non_object_file_raises(tmp_path) -> None:
    path = _write_config(tmp_path, [1, 2])

    with pytest.raises(DataLoadError):
        load_config(path)
