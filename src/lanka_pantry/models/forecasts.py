"""
Forecast Results
================
Outputs of the seasonal, inflation, sufficiency and price analyses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class MonthlyPrediction:
    """Projected food spend for one future month."""
    month: int
    month_name: str
    predicted_expense: int
    change: int
    change_percent: float
    factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "month_name": self.month_name,
            "predicted_expense": self.predicted_expense,
            "change": self.change,
            "change_percent": self.change_percent,
            "factors": list(self.factors),
        }


@dataclass
class InflationPoint:
    month: int
    price: int
    increase: float
    increase_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "price": self.price,
            "increase": self.increase,
            "increase_percent": self.increase_percent,
        }


@dataclass
class InflationProjection:
    item: str
    current_price: float
    predictions: List[InflationPoint] = field(default_factory=list)

    def price_at(self, month: int) -> int:
        """Projected price after ``month`` months."""
        for point in self.predictions:
            if point.month == month:
                return point.price
        raise KeyError(f"No projection for month {month}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item": self.item,
            "current_price": self.current_price,
            "predictions": [p.to_dict() for p in self.predictions],
        }


@dataclass
class Suggestion:
    text: str
    estimated_savings: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "estimated_savings": self.estimated_savings}


@dataclass
class SufficiencyAnalysis:
    """
    Comparison of actual food spend with the ideal income share.

    ``gap`` is positive when spending exceeds the ideal.
    """
    current_spending: float
    monthly_income: float
    family_size: int
    current_percentage: float
    ideal_percentage: float
    gap: int
    per_capita_spending: int
    status: str
    suggestions: List[Suggestion] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_spending": self.current_spending,
            "monthly_income": self.monthly_income,
            "family_size": self.family_size,
            "current_percentage": self.current_percentage,
            "ideal_percentage": self.ideal_percentage,
            "gap": self.gap,
            "per_capita_spending": self.per_capita_spending,
            "status": self.status,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


@dataclass
class SeasonalOutlook:
    """Signed price changes (%) for the month; negative means cheaper."""
    month: int
    month_name: str
    vegetables_change: float
    vegetables_advice: str
    fish_change: float
    fish_advice: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "month_name": self.month_name,
            "vegetables": {"change": self.vegetables_change, "recommendation": self.vegetables_advice},
            "fish": {"change": self.fish_change, "recommendation": self.fish_advice},
        }


@dataclass
class OutlierResult:
    """Values outside the IQR fences. Empty when too few points were given."""
    low: List[float] = field(default_factory=list)
    high: List[float] = field(default_factory=list)
    q1: float = 0.0
    q3: float = 0.0
    lower_bound: float = 0.0
    upper_bound: float = 0.0

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "low": list(self.low),
            "high": list(self.high),
            "q1": self.q1,
            "q3": self.q3,
            "iqr": self.iqr,
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
        }


@dataclass
class SpendingTrend:
    """Linear trend fitted over past monthly spend."""
    slope: float
    intercept: float
    r_squared: float
    direction: str
    projections: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "r_squared": self.r_squared,
            "direction": self.direction,
            "projections": list(self.projections),
        }
