"""Tests for configuration loading."""

import json

import pytest

import config.settings as settings
from core.exceptions import ConfigurationError
from estimating.config import (
    DEFAULT_CONFIG_PATH,
    load_config,
    save_config,
    create_parameters_from_config,
    create_rates_from_config,
    create_sheet_from_config,
    create_constraints_from_config
)
from estimating.layout.press_sheet import CuttingConstraints
from estimating.models.geometry import ProductionParameters, SheetSize


def test_packaged_defaults_match_dataclass_defaults():
    config = load_config(DEFAULT_CONFIG_PATH)
    assert create_parameters_from_config(config) == ProductionParameters()
    assert create_constraints_from_config(config) == CuttingConstraints()
    assert create_sheet_from_config(config) == SheetSize(35.0, 50.0)

    rates = create_rates_from_config(config)
    assert rates.plate_cost == 35.0
    assert rates.unit_cost == 0.0
    assert rates.margin_percent == 30.0
    assert rates.vat_percent == 5.0


def test_missing_keys_use_defaults():
    assert create_parameters_from_config({}) == ProductionParameters()
    assert create_rates_from_config({}).plate_cost == 35.0
    constraints = create_constraints_from_config({'press_sheet': {'parent_width': 90.0}})
    assert constraints.parent_width == 90.0
    assert constraints.parent_height == 70.0


def test_negative_parameters_are_clamped():
    params = create_parameters_from_config({'production_parameters': {'gap_width': -1.0}})
    assert params.gap_width == 0.0


def test_save_and_load(tmp_path):
    path = tmp_path / "estimator.json"
    save_config({'printing': {'plate_cost': 40.0}}, str(path))
    config = load_config(str(path))
    assert create_rates_from_config(config).plate_cost == 40.0


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(str(tmp_path / "missing.json"))
    assert exc_info.value.code == "CONFIGURATION_ERROR"


def test_malformed_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_config(str(path))

    path.write_text(json.dumps([1, 2, 3]), encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_environment_config_path(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({'quote': {'vat_percent': 0.0}}), encoding='utf-8')
    monkeypatch.setattr(settings, 'ESTIMATOR_CONFIG_PATH', str(path))
    assert create_rates_from_config().vat_percent == 0.0


def test_log_level(monkeypatch):
    monkeypatch.setattr(settings, 'LOG_LEVEL', 'DEBUG')
    assert settings.get_log_level() == 10
    monkeypatch.setattr(settings, 'LOG_LEVEL', 'NOPE')
    assert settings.get_log_level() == 20
