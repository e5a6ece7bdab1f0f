"""
Tests for history aggregation and consumption-rate estimation.
"""

from datetime import date

import pytest

from lanka_pantry.config import Config
from lanka_pantry.models.inventory import ConsumedItem, FamilyProfile, SourceMode, UsageFrequency, UsageHistoryEntry
from lanka_pantry.services.consumption_estimator import (
    ConsumptionEstimator,
    heuristic_rate,
    history_to_dataframe,
    summarize_history,
)

AS_OF = date(2025, 6, 30)


def _index(catalog):
    return {item.name: item for item in catalog}


def test_heuristic_rate_by_unit():
    assert heuristic_rate("kg", 4) == pytest.approx(0.2)
    assert heuristic_rate("l", 1) == pytest.approx(0.05)
    assert heuristic_rate("g", 2) == pytest.approx(100.0)
    assert heuristic_rate("pcs", 3) == pytest.approx(1.5)


def test_history_dataframe_has_one_row_per_consumed_item(history):
    df = history_to_dataframe(history)
    assert list(df.columns) == ["date", "item_name", "quantity", "unit"]
    assert len(df) == 3


def test_summary_converts_to_catalog_unit(catalog, history):
    summary = summarize_history(history, _index(catalog), AS_OF)

    assert summary.first_date == date(2025, 6, 20)
    assert summary.days_tracked == 10
    assert summary.total_for("Potatoes") == pytest.approx(1.5)
    assert summary.entries_for("Potatoes") == 2
    assert summary.total_for("Eggs") == pytest.approx(2)


def test_summary_reports_unknown_items(catalog):
    history = [
        UsageHistoryEntry(date(2025, 6, 1), "Smoothie", "snack", (ConsumedItem("Dragonfruit", 1, "pcs"),)),
    ]
    summary = summarize_history(history, _index(catalog), AS_OF)
    assert summary.unknown_items == ["Dragonfruit"]
    assert summary.totals == {}


def test_incompatible_units_count_as_zero(catalog):
    history = [
        UsageHistoryEntry(date(2025, 6, 1), "Breakfast", "breakfast", (ConsumedItem("Potatoes", 2, "pcs"),)),
    ]
    summary = summarize_history(history, _index(catalog), AS_OF)
    assert summary.total_for("Potatoes") == 0
    assert summary.entries_for("Potatoes") == 1


def test_empty_history(catalog):
    summary = summarize_history([], _index(catalog), AS_OF)
    assert summary.days_tracked == 0
    assert summary.first_date is None


class TestEstimate:

    def test_observed_history_is_used(self, catalog, history, family):
        potatoes = _index(catalog)["Potatoes"]
        summary = summarize_history(history, _index(catalog), AS_OF)

        estimate = ConsumptionEstimator().estimate(potatoes, summary, family)

        assert estimate.mode == SourceMode.HISTORICAL
        assert estimate.rate == pytest.approx(0.15)
        assert not estimate.manual_override

    def test_short_history_falls_back_to_heuristic(self, catalog, history, family):
        potatoes = _index(catalog)["Potatoes"]
        summary = summarize_history(history, _index(catalog), date(2025, 6, 21))

        estimate = ConsumptionEstimator().estimate(potatoes, summary, family)

        assert estimate.mode == SourceMode.HEURISTIC
        assert estimate.rate == pytest.approx(0.1)

    def test_item_without_entries_uses_heuristic(self, catalog, history, family):
        rice = _index(catalog)["Rice (Samba)"]
        summary = summarize_history(history, _index(catalog), AS_OF)

        estimate = ConsumptionEstimator().estimate(rice, summary, family)

        assert estimate.mode == SourceMode.HEURISTIC

    def test_manual_target_wins(self, catalog, history, family):
        potatoes = _index(catalog)["Potatoes"]
        summary = summarize_history(history, _index(catalog), AS_OF)

        estimate = ConsumptionEstimator().estimate(potatoes, summary, family, manual_target=8)

        assert estimate.manual_override
        assert estimate.mode == SourceMode.HISTORICAL
        assert estimate.rate == pytest.approx(2.0)

    def test_non_positive_manual_target_is_ignored(self, catalog, history, family):
        potatoes = _index(catalog)["Potatoes"]
        summary = summarize_history(history, _index(catalog), AS_OF)

        estimate = ConsumptionEstimator().estimate(potatoes, summary, family, manual_target=0)

        assert not estimate.manual_override

    def test_min_history_days_is_configurable(self, catalog, history, family):
        config = Config.from_dict({"prediction": {"min_history_days": 14}})
        potatoes = _index(catalog)["Potatoes"]
        summary = summarize_history(history, _index(catalog), AS_OF)

        estimate = ConsumptionEstimator(config).estimate(potatoes, summary, family)

        assert estimate.mode == SourceMode.HEURISTIC

    def test_frequency_override_changes_target_divisor(self, catalog, history, family):
        potatoes = _index(catalog)["Potatoes"]
        summary = summarize_history(history, _index(catalog), AS_OF)

        estimate = ConsumptionEstimator().estimate(
            potatoes, summary, family, manual_target=30, frequency=UsageFrequency.DAILY
        )

        assert estimate.rate == pytest.approx(1.0)


@pytest.mark.parametrize("unit", ["kg", "g", "l", "pcs", "pack"])
def test_heuristic_rate_never_decreases_with_family_size(unit):
    rates = [heuristic_rate(unit, FamilyProfile(adult_count=n).family_size) for n in range(1, 9)]
    assert rates == sorted(rates)
