"""
Tests for configuration overrides.
"""

import json

import pytest

from lanka_pantry.config import Config, DEFAULT_CONFIG
from lanka_pantry.exceptions import InvalidInputError


def test_defaults():
    config = Config()
    assert config.prediction.min_history_days == 3.0
    assert config.prediction.frequency_multipliers["daily"] == 30
    assert config.budget.tier_thresholds == {"critical": 50, "warning": 40, "healthy": 25}
    assert config.forecast.monthly_inflation_rate == 0.019
    assert config.forecast.iqr_multiplier == 1.5


def test_from_dict_overrides_known_keys():
    config = Config.from_dict({
        "prediction": {"min_history_days": 7},
        "forecast": {"horizon_months": 6},
        "output": {"output_dir": "exports"},
    })

    assert config.prediction.min_history_days == 7
    assert config.forecast.horizon_months == 6
    assert config.output.output_dir.name == "exports"


def test_overrides_do_not_leak_into_defaults():
    Config.from_dict({"prediction": {"min_history_days": 10}})
    assert DEFAULT_CONFIG.prediction.min_history_days == 3.0


def test_unknown_sections_and_keys_are_ignored():
    config = Config.from_dict({"dashboard": {"theme": "dark"}, "prediction": {"colour": "red"}})
    assert not hasattr(config.prediction, "colour")


def test_section_must_be_an_object():
    with pytest.raises(InvalidInputError):
        Config.from_dict({"prediction": 7})


def test_from_json(tmp_path):
    path = tmp_path / "pantry.json"
    path.write_text(json.dumps({"budget": {"lpg_monthly_fraction": 0.5}}), encoding="utf-8")

    config = Config.from_json(str(path))

    assert config.budget.lpg_monthly_fraction == 0.5


def test_from_json_errors(tmp_path):
    with pytest.raises(InvalidInputError):
        Config.from_json(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidInputError):
        Config.from_json(str(broken))
