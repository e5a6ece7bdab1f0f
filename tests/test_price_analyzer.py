"""
Tests for price comparison, seasonal advice and IQR deal detection.
"""

import pytest

from lanka_pantry.data.reference import ReferenceData
from lanka_pantry.exceptions import InvalidInputError, MissingDataError
from lanka_pantry.services.price_analyzer import PriceAnalyzer, detect_outliers


@pytest.fixture
def analyzer(reference):
    return PriceAnalyzer(reference)


# =============================================================================
# OUTLIERS
# =============================================================================

def test_single_high_outlier():
    result = detect_outliers([100, 102, 98, 101, 99, 500])

    assert result.high == [500.0]
    assert result.low == []
    assert result.q1 == 99.0
    assert result.q3 == 102.0
    assert result.iqr == 3.0
    assert result.lower_bound == 94.5
    assert result.upper_bound == 106.5


def test_single_low_outlier():
    result = detect_outliers([100, 102, 98, 101, 99, 10])

    assert result.low == [10.0]
    assert result.high == []


def test_too_few_values_flags_nothing():
    result = detect_outliers([100, 5000, 1])
    assert result.low == []
    assert result.high == []


def test_identical_values_flag_nothing():
    result = detect_outliers([250, 250, 250, 250, 250])
    assert result.low == []
    assert result.high == []


def test_flag_deals_names_offers(analyzer):
    offers = {"Keells": 100, "Cargills": 102, "Arpico": 98, "Laugfs": 101, "Pola": 99, "Kiosk": 500}

    flagged = analyzer.flag_deals(offers)

    assert flagged == {"good_deals": [], "overpriced": ["Kiosk"]}


# =============================================================================
# DISTRICTS AND ALTERNATIVES
# =============================================================================

def test_compare_districts_sorted_by_income(analyzer):
    df = analyzer.compare_districts(["Kandy", "Colombo", "Atlantis"])

    assert list(df["name"]) == ["Colombo", "Kandy"]
    assert df.loc[0, "budget_percentage"] == 36.2
    assert list(df.columns) == [
        "name", "sector", "median_income", "food_budget_min", "food_budget_max", "budget_percentage",
    ]


def test_compare_no_known_districts(analyzer):
    df = analyzer.compare_districts(["Atlantis"])
    assert df.empty


def test_rice_alternatives_cheapest_first(analyzer):
    options = analyzer.find_cheapest_alternatives("rice")
    prices = [o["price"] for o in options]

    assert prices == sorted(prices)
    samba = next(o for o in options if o["type"] == "samba")
    assert samba["savings"] == 0.0


def test_protein_alternatives_cheapest_first(analyzer):
    prices = [o["price"] for o in analyzer.find_cheapest_alternatives("protein")]
    assert prices == sorted(prices)


def test_unknown_category_has_no_alternatives(analyzer):
    assert analyzer.find_cheapest_alternatives("spices") == []


# =============================================================================
# SEASONAL AND STRATEGIES
# =============================================================================

def test_off_season_january(analyzer):
    outlook = analyzer.calculate_seasonal_savings(1)

    assert outlook.month_name == "January"
    assert outlook.vegetables_change == 50
    assert outlook.vegetables_advice == "Consider alternatives or preserved items"
    assert outlook.fish_change == -15
    assert outlook.fish_advice == "Excellent season for fresh fish"


def test_peak_harvest_june(analyzer):
    outlook = analyzer.calculate_seasonal_savings(6)

    assert outlook.vegetables_change == -35
    assert outlook.vegetables_advice == "Great time to buy and preserve vegetables"
    assert outlook.fish_change == 25


def test_normal_month(analyzer):
    outlook = analyzer.calculate_seasonal_savings(4)

    assert outlook.vegetables_change == 0
    assert outlook.vegetables_advice == "Vegetable prices at normal levels"
    assert outlook.fish_advice == "Fish prices at normal levels"


@pytest.mark.parametrize("month", [0, 13, True, "6"])
def test_invalid_month(analyzer, month):
    with pytest.raises(InvalidInputError):
        analyzer.calculate_seasonal_savings(month)


def test_strategy_priorities(analyzer):
    strategies = analyzer.get_saving_strategies()
    priorities = {s["strategy"]: s["priority"] for s in strategies}

    assert priorities["Seasonal Eating"] == 50
    assert priorities["Farmers Markets"] == 28
    assert priorities["Bulk Purchasing"] == 15
    assert priorities["Protein Substitution"] == 15
    assert strategies[0]["strategy"] == "Seasonal Eating"


def test_strategy_without_percentage_scores_bonus_only():
    assert PriceAnalyzer.calculate_strategy_priority({"strategy": "Farmers Markets", "savings": "Rs. 500"}) == 8
    assert PriceAnalyzer.calculate_strategy_priority({"strategy": "Other", "savings": ""}) == 0


# =============================================================================
# MISSING DATA
# =============================================================================

@pytest.mark.parametrize("call", [
    lambda a: a.calculate_seasonal_savings(1),
    lambda a: a.get_saving_strategies(),
    lambda a: a.find_cheapest_alternatives("rice"),
    lambda a: a.compare_districts(["Colombo"]),
])
def test_missing_tables_raise(reference, call):
    analyzer = PriceAnalyzer(ReferenceData(catalog=reference.catalog, budget_tables={}))
    with pytest.raises(MissingDataError):
        call(analyzer)


def test_outliers_need_no_tables():
    analyzer = PriceAnalyzer(ReferenceData(budget_tables={}))
    assert analyzer.detect_outliers([100, 102, 98, 101, 99, 500]).high == [500.0]
