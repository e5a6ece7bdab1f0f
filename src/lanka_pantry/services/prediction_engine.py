"""
Budget Prediction Service
=========================
Forward-looking adjustments applied to a household food budget.

Key Algorithms:
1. Seasonal adjustment (%)
   - vegetable change x 0.4 + fish change x 0.2
   - Weights are the approximate shares of the food budget

2. Three-month projection
   - round(budget x (1 + adjustment / 100)) for each following month

3. Inflation projection
   - round(price x 1.019^i), i = 1..months
   - 1.9% a month follows the 213% rise over 2019-2024

4. Sufficiency
   - Ideal food share is 35% of income
   - gap > 15% of income: critical; gap > 0: needs improvement

5. Spending trend
   - Least-squares line (scipy.stats.linregress) over past monthly totals
"""

import math
from typing import Any, List, Optional, Sequence

import numpy as np
from scipy import stats

from ..config import Config, DEFAULT_CONFIG
from ..data.reference import ReferenceData
from ..exceptions import InvalidInputError
from ..models.forecasts import (
    InflationPoint,
    InflationProjection,
    MonthlyPrediction,
    SpendingTrend,
    Suggestion,
    SufficiencyAnalysis,
)
from ..utils.constants import (
    CULTURAL_EVENT_MONTHS,
    INFLATION_PRICE_PATHS,
    MONTH_NAMES,
    SEASONAL_FACTOR_TEXT,
    SUFFICIENCY_SUGGESTIONS,
)
from ..utils.logger import get_logger
from ..utils.numbers import round_half_up, round_int
from ..utils.validators import ensure_budget_tables
from .price_analyzer import FISH_SEASONS, VEGETABLE_SEASONS, seasonal_change, validate_month

logger = get_logger(__name__)


def _require_positive(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise InvalidInputError(f"{label} must be a positive number, got {value!r}")


class PredictionEngine:
    """
    Seasonal, inflation and sufficiency forecasts.

    Usage
    -----
    >>> engine = PredictionEngine(ReferenceData.default())
    >>> engine.get_seasonal_adjustment(1)
    17.0
    >>> engine.predict_price_inflation(current_price=1000, months=6).price_at(6)
    1120
    """

    def __init__(self, reference: Optional[ReferenceData] = None, config: Optional[Config] = None):
        self.reference = reference or ReferenceData.default()
        self.data = self.reference.budget_tables
        self.config = (config or DEFAULT_CONFIG).forecast
        logger.info(
            f"PredictionEngine initialized: inflation={self.config.monthly_inflation_rate:.3f}/month, "
            f"horizon={self.config.horizon_months} months"
        )

    # =========================================================================
    # SEASONAL
    # =========================================================================

    def get_seasonal_adjustment(self, month: int) -> float:
        """Blended % change in food spend for ``month``."""
        ensure_budget_tables(self.data)
        variations = self.data.get("seasonal_variations", {})
        _, veg = seasonal_change(variations, "vegetables", VEGETABLE_SEASONS, month)
        _, fish = seasonal_change(variations, "fish", FISH_SEASONS, month)
        return round_half_up(veg * self.config.vegetable_weight + fish * self.config.fish_weight, 6)

    def get_prediction_factors(self, month: int) -> List[str]:
        ensure_budget_tables(self.data)
        variations = self.data.get("seasonal_variations", {})
        factors = []
        for commodity, seasons in (("vegetables", VEGETABLE_SEASONS), ("fish", FISH_SEASONS)):
            season, _ = seasonal_change(variations, commodity, seasons, month)
            if season:
                factors.append(SEASONAL_FACTOR_TEXT[season])
        if month in CULTURAL_EVENT_MONTHS:
            factors.append(CULTURAL_EVENT_MONTHS[month])
        return factors

    def predict_monthly_expenses(
        self,
        current_budget: float,
        start_month: Optional[int] = None
    ) -> List[MonthlyPrediction]:
        """
        Project food spend for the months after ``start_month``.

        Parameters
        ----------
        current_budget : float
            This month's total spend
        start_month : int, optional
            Current month 1-12; defaults to today's month

        Returns
        -------
        List[MonthlyPrediction]
            One entry per month of the configured horizon (default: 3)
        """
        ensure_budget_tables(self.data)
        _require_positive(current_budget, "Current budget")
        start_month = validate_month(start_month)

        predictions = []
        for i in range(1, self.config.horizon_months + 1):
            month = ((start_month + i - 1) % 12) + 1
            adjustment = self.get_seasonal_adjustment(month)
            predicted = round_int(current_budget * (1 + adjustment / 100))
            change = predicted - current_budget

            predictions.append(MonthlyPrediction(
                month=month,
                month_name=MONTH_NAMES[month - 1],
                predicted_expense=predicted,
                change=round_int(change),
                change_percent=round_half_up(change / current_budget * 100, 1),
                factors=self.get_prediction_factors(month),
            ))

        logger.info(
            f"Projected {len(predictions)} months from {MONTH_NAMES[start_month - 1]}: "
            f"{[p.predicted_expense for p in predictions]}"
        )
        return predictions

    # =========================================================================
    # SUFFICIENCY
    # =========================================================================

    def analyze_budget_sufficiency(
        self,
        monthly_income: float,
        current_spending: float,
        family_size: int
    ) -> SufficiencyAnalysis:
        """
        Compare food spend with the ideal share of income.

        Returns
        -------
        SufficiencyAnalysis
            ``gap`` is spend minus the ideal; each suggestion carries its
            estimated savings
        """
        _require_positive(monthly_income, "Monthly income")
        if isinstance(current_spending, bool) or not isinstance(current_spending, (int, float)) or current_spending < 0:
            raise InvalidInputError(f"Current spending cannot be negative, got {current_spending!r}")
        if isinstance(family_size, bool) or not isinstance(family_size, int) or family_size < 1:
            raise InvalidInputError(f"Family size must be at least 1, got {family_size!r}")

        ideal = self.config.ideal_food_share
        gap = current_spending - monthly_income * ideal / 100
        gap_rounded = round_int(gap)

        if gap > monthly_income * self.config.critical_gap_share / 100:
            status = "critical"
            lead = Suggestion(
                f"Reduce spending by Rs. {gap_rounded:,} to reach sustainable levels",
                f"Rs. {gap_rounded:,}/month",
            )
        elif gap > 0:
            status = "needs improvement"
            lead = Suggestion(
                f"Target Rs. {gap_rounded:,} reduction to optimize budget",
                f"Rs. {gap_rounded:,}/month",
            )
        else:
            status = "sufficient"
            lead = None

        suggestions = [lead] if lead else []
        suggestions.extend(Suggestion(text, savings) for text, savings in SUFFICIENCY_SUGGESTIONS[status])

        analysis = SufficiencyAnalysis(
            current_spending=current_spending,
            monthly_income=monthly_income,
            family_size=family_size,
            current_percentage=round_half_up(current_spending / monthly_income * 100, 1),
            ideal_percentage=ideal,
            gap=gap_rounded,
            per_capita_spending=round_int(current_spending / family_size),
            status=status,
            suggestions=suggestions,
        )
        logger.info(
            f"Sufficiency: {analysis.current_percentage}% of income, gap Rs. {gap_rounded:,} ({status})"
        )
        return analysis

    # =========================================================================
    # INFLATION
    # =========================================================================

    def get_current_price(self, item_name: Optional[str]) -> float:
        """Current price for a named item; unknown names use a placeholder price."""
        path = INFLATION_PRICE_PATHS.get(item_name) if item_name else None
        if path is None:
            logger.debug(f"No price for '{item_name}'; using {self.config.unknown_item_price}")
            return self.config.unknown_item_price
        if isinstance(path, (int, float)):
            return float(path)

        section, key = path
        ensure_budget_tables(self.data)
        entry = self.data.get("food_prices", {}).get(section, {}).get(key)
        if not entry:
            logger.warning(f"Price table has no '{section}.{key}'; using {self.config.unknown_item_price}")
            return self.config.unknown_item_price
        return float(entry["price"])

    def predict_price_inflation(
        self,
        item_name: Optional[str] = None,
        months: Optional[int] = None,
        current_price: Optional[float] = None
    ) -> InflationProjection:
        """
        Compound the monthly inflation rate over ``months``.

        Parameters
        ----------
        item_name : str, optional
            Named item (rice_samba, rice_nadu, chicken, fish, eggs,
            vegetables, oil) used when ``current_price`` is not given
        months : int, optional
            Number of months to project (default: 6)
        current_price : float, optional
            Starting price; takes precedence over the named lookup

        Returns
        -------
        InflationProjection
        """
        months = self.config.inflation_months if months is None else months
        if isinstance(months, bool) or not isinstance(months, int) or months < 0:
            raise InvalidInputError(f"Months must be a non-negative integer, got {months!r}")

        if current_price is not None:
            _require_positive(current_price, "Current price")
            price = float(current_price)
        else:
            price = self.get_current_price(item_name)

        rate = self.config.monthly_inflation_rate
        projection = InflationProjection(item=item_name or "custom", current_price=price)
        for i in range(1, months + 1):
            inflated = round_int(price * math.pow(1 + rate, i))
            projection.predictions.append(InflationPoint(
                month=i,
                price=inflated,
                increase=round_half_up(inflated - price, 2),
                increase_percent=round_half_up((inflated - price) / price * 100, 1),
            ))
        return projection

    # =========================================================================
    # TREND
    # =========================================================================

    def project_spending_trend(
        self,
        monthly_totals: Sequence[float],
        months_ahead: Optional[int] = None
    ) -> SpendingTrend:
        """
        Fit a straight line to past monthly spend and extend it.

        Parameters
        ----------
        monthly_totals : sequence of float
            Oldest first, at least two months
        months_ahead : int, optional
            Months to project (default: forecast horizon)

        Returns
        -------
        SpendingTrend
            Projections are rounded and never negative
        """
        if len(monthly_totals) < 2:
            raise InvalidInputError("At least two months of spending are needed for a trend")
        months_ahead = self.config.horizon_months if months_ahead is None else months_ahead

        y = np.asarray(monthly_totals, dtype=float)
        x = np.arange(len(y), dtype=float)

        if np.allclose(y, y[0]):
            slope, intercept, r_squared = 0.0, float(y[0]), 1.0
        else:
            fit = stats.linregress(x, y)
            slope, intercept = float(fit.slope), float(fit.intercept)
            r_squared = float(fit.rvalue ** 2)

        mean = float(y.mean())
        # Less than 0.5% of the average per month counts as flat
        if slope == 0 or (mean and abs(slope) < 0.005 * abs(mean)):
            direction = "stable"
        else:
            direction = "increasing" if slope > 0 else "decreasing"

        projections = [
            max(0, round_int(intercept + slope * (len(y) - 1 + k)))
            for k in range(1, months_ahead + 1)
        ]

        logger.info(f"Spending trend: {direction}, slope Rs. {slope:,.0f}/month, R²={r_squared:.2f}")
        return SpendingTrend(
            slope=round_half_up(slope, 2),
            intercept=round_half_up(intercept, 2),
            r_squared=round_half_up(r_squared, 4),
            direction=direction,
            projections=projections,
        )
