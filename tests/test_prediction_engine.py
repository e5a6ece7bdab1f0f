"""
Tests for seasonal, inflation, sufficiency and trend forecasts.
"""

import pytest

from lanka_pantry.data.reference import ReferenceData
from lanka_pantry.exceptions import InvalidInputError, MissingDataError
from lanka_pantry.services.prediction_engine import PredictionEngine
from lanka_pantry.utils.numbers import round_int


@pytest.fixture
def engine(reference):
    return PredictionEngine(reference)


# =============================================================================
# SEASONAL
# =============================================================================

@pytest.mark.parametrize("month, expected", [(1, 17.0), (6, -9.0), (12, -3.0), (4, 0.0)])
def test_seasonal_adjustment(engine, month, expected):
    assert engine.get_seasonal_adjustment(month) == expected


def test_three_month_projection_wraps_year(engine):
    predictions = engine.predict_monthly_expenses(50000, start_month=12)

    assert [p.month for p in predictions] == [1, 2, 3]
    assert predictions[0].month_name == "January"
    assert predictions[0].predicted_expense == 58500
    assert predictions[0].change == 8500
    assert predictions[0].change_percent == 17.0


def test_projection_mentions_new_year(engine):
    predictions = engine.predict_monthly_expenses(50000, start_month=3)
    april = predictions[0]
    assert any("New Year" in factor for factor in april.factors)


def test_projection_rejects_non_positive_budget(engine):
    with pytest.raises(InvalidInputError):
        engine.predict_monthly_expenses(0, start_month=1)


# =============================================================================
# INFLATION
# =============================================================================

def test_inflation_compounds_monthly(engine):
    projection = engine.predict_price_inflation(current_price=1000, months=6)

    assert projection.price_at(6) == round_int(1000 * 1.019 ** 6)
    assert projection.price_at(6) == 1120
    assert projection.price_at(1) == 1019
    assert len(projection.predictions) == 6


def test_named_item_uses_price_table(engine, reference):
    projection = engine.predict_price_inflation("rice_samba", months=1)
    assert projection.current_price == reference.budget_tables["food_prices"]["rice"]["samba"]["price"]


def test_unknown_item_uses_placeholder_price(engine):
    projection = engine.predict_price_inflation("saffron", months=2)
    assert projection.current_price == 100
    assert projection.item == "saffron"


def test_zero_months_gives_no_points(engine):
    assert engine.predict_price_inflation(current_price=500, months=0).predictions == []


def test_missing_month_lookup(engine):
    projection = engine.predict_price_inflation(current_price=500, months=2)
    with pytest.raises(KeyError):
        projection.price_at(3)


@pytest.mark.parametrize("kwargs", [{"months": -1}, {"current_price": 0}, {"current_price": -20}])
def test_invalid_inflation_inputs(engine, kwargs):
    with pytest.raises(InvalidInputError):
        engine.predict_price_inflation(**kwargs)


# =============================================================================
# SUFFICIENCY
# =============================================================================

def test_critical_gap(engine):
    analysis = engine.analyze_budget_sufficiency(100000, 50685, 4)

    assert analysis.status == "critical"
    assert analysis.gap == 15685
    assert analysis.current_percentage == 50.7
    assert analysis.per_capita_spending == 12671
    assert analysis.suggestions[0].text == "Reduce spending by Rs. 15,685 to reach sustainable levels"
    assert analysis.suggestions[0].estimated_savings == "Rs. 15,685/month"


def test_needs_improvement(engine):
    analysis = engine.analyze_budget_sufficiency(100000, 40000, 4)

    assert analysis.status == "needs improvement"
    assert analysis.gap == 5000
    assert analysis.suggestions[0].text.startswith("Target Rs. 5,000 reduction")


def test_sufficient(engine):
    analysis = engine.analyze_budget_sufficiency(100000, 30000, 4)

    assert analysis.status == "sufficient"
    assert analysis.gap == -5000
    assert not any("Rs. -" in s.text for s in analysis.suggestions)


@pytest.mark.parametrize("income, spending, size", [(0, 100, 1), (1000, -1, 1), (1000, 100, 0)])
def test_invalid_sufficiency_inputs(engine, income, spending, size):
    with pytest.raises(InvalidInputError):
        engine.analyze_budget_sufficiency(income, spending, size)


# =============================================================================
# TREND
# =============================================================================

def test_increasing_trend(engine):
    trend = engine.project_spending_trend([100, 110, 120, 130])

    assert trend.direction == "increasing"
    assert trend.slope == 10.0
    assert trend.r_squared == 1.0
    assert trend.projections == [140, 150, 160]


def test_flat_trend(engine):
    trend = engine.project_spending_trend([45000, 45000, 45000])

    assert trend.direction == "stable"
    assert trend.slope == 0.0
    assert trend.projections == [45000, 45000, 45000]


def test_projections_never_negative(engine):
    trend = engine.project_spending_trend([300, 200, 100], months_ahead=4)

    assert trend.direction == "decreasing"
    assert trend.projections == [0, 0, 0, 0]


def test_trend_needs_two_months(engine):
    with pytest.raises(InvalidInputError):
        engine.project_spending_trend([45000])


# =============================================================================
# MISSING DATA
# =============================================================================

@pytest.mark.parametrize("call", [
    lambda e: e.predict_monthly_expenses(50000, start_month=1),
    lambda e: e.get_seasonal_adjustment(1),
    lambda e: e.predict_price_inflation("rice_samba"),
])
def test_missing_tables_raise(reference, call):
    engine = PredictionEngine(ReferenceData(catalog=reference.catalog, budget_tables={}))
    with pytest.raises(MissingDataError):
        call(engine)


def test_explicit_price_inflation_needs_no_tables():
    engine = PredictionEngine(ReferenceData(budget_tables={}))
    assert engine.predict_price_inflation(months=6, current_price=1000).price_at(6) == 1120
