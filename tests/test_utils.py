"""
Tests for rounding, unit conversion and validation helpers.
"""

import logging

import pytest

from lanka_pantry.exceptions import InvalidInputError, MissingDataError
from lanka_pantry.utils.logger import LogContext, get_logger, set_package_level
from lanka_pantry.utils.numbers import convert_quantity, round_half_up, round_int
from lanka_pantry.utils.validators import (
    ValidationResult,
    ensure_budget_tables,
    validate_budget_inputs,
    validate_family_profile,
)


@pytest.mark.parametrize("value, digits, expected", [
    (2.5, 0, 3.0),
    (3.5, 0, 4.0),
    (0.125, 2, 0.13),
    (50.65, 1, 50.7),
    (-2.5, 0, -3.0),
])
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected


def test_round_int():
    assert round_int(2472.3) == 2472
    assert isinstance(round_int(0.5), int)
    assert round_int(0.5) == 1


@pytest.mark.parametrize("quantity, source, target, expected", [
    (500, "g", "kg", 0.5),
    (2, "kg", "g", 2000),
    (250, "ml", "l", 0.25),
    (3, "100g", "g", 300),
    (2, "tbsp", "g", 30),
    (1, "cup", "l", 0.24),
    (4, "pcs", "pcs", 4),
    (4, "KG", "kg", 4),
])
def test_convert_quantity(quantity, source, target, expected):
    assert convert_quantity(quantity, source, target) == pytest.approx(expected)


@pytest.mark.parametrize("source, target", [("kg", "l"), ("pcs", "kg"), ("tsp", "pcs")])
def test_incompatible_units(source, target):
    assert convert_quantity(1, source, target) is None


def test_validation_result_raises_joined_errors():
    result = ValidationResult()
    result.add_error("first")
    result.add_error("second")
    result.add_warning("just a warning")

    with pytest.raises(InvalidInputError, match="first; second"):
        result.raise_for_errors()


def test_validation_result_merge():
    result = ValidationResult()
    other = ValidationResult()
    other.add_error("broken")
    result.merge(other)
    assert not result.is_valid
    assert result.to_dict()["errors"] == ["broken"]


def test_budget_inputs():
    assert validate_budget_inputs(4, 100000, "mixed", ["mixed", "vegan"]).is_valid
    result = validate_budget_inputs(0, -1, "keto", ["mixed"])
    assert len(result.errors) == 3


def test_family_profile():
    assert validate_family_profile(1, 0).is_valid
    assert validate_family_profile(0, 1).is_valid
    assert not validate_family_profile(0, 0).is_valid
    assert not validate_family_profile(True, 0).is_valid


def test_ensure_budget_tables(reference):
    ensure_budget_tables(reference.budget_tables)
    with pytest.raises(MissingDataError):
        ensure_budget_tables(None)
    with pytest.raises(MissingDataError, match="districts"):
        ensure_budget_tables({**reference.budget_tables, "districts": []})


# =============================================================================
# LOGGING
# =============================================================================

def test_get_logger_configures_once():
    logger = get_logger("lanka_pantry.tests.once")
    again = get_logger("lanka_pantry.tests.once")

    assert again is logger
    assert len(logger.handlers) == 1
    assert not logger.propagate


def test_set_package_level_reaches_handlers(tmp_path):
    logger = get_logger("lanka_pantry.tests.level")
    log_file = tmp_path / "pantry.log"
    try:
        set_package_level(logging.WARNING, str(log_file))
        assert logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in logger.handlers)
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    finally:
        set_package_level(logging.INFO)
        for name, candidate in list(logging.Logger.manager.loggerDict.items()):
            if not name.startswith("lanka_pantry") or not isinstance(candidate, logging.Logger):
                continue
            for handler in [h for h in candidate.handlers if isinstance(h, logging.FileHandler)]:
                candidate.removeHandler(handler)
                handler.close()


def test_log_context_does_not_swallow_errors():
    logger = get_logger("lanka_pantry.tests.context")
    with pytest.raises(ValueError):
        with LogContext(logger, "failing step"):
            raise ValueError("boom")
