"""
Budget Report Model
===================
Structures returned by the budget calculator.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class LineItem:
    """One priced line inside a budget category."""
    name: str
    quantity: float
    unit: str
    price: float
    cost: int
    note: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "price": self.price,
            "cost": self.cost,
            "note": self.note,
        }


@dataclass
class CategoryBreakdown:
    """Line items and rounded subtotal for a budget category."""
    items: List[LineItem] = field(default_factory=list)
    total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [i.to_dict() for i in self.items], "total": self.total}


@dataclass
class BudgetTotals:
    food_only: int
    with_utilities: int
    per_capita: int
    percentage_of_income: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "food_only": self.food_only,
            "with_utilities": self.with_utilities,
            "per_capita": self.per_capita,
            "percentage_of_income": self.percentage_of_income,
        }


@dataclass
class Recommendation:
    """
    Spending tier with its fixed advice.

    Attributes
    ----------
    status : str
        critical, warning, healthy or excellent
    message : str
        Summary including the income share
    suggestions : List[str]
        Static tier-specific suggestions
    """
    status: str
    message: str
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "suggestions": list(self.suggestions),
        }


@dataclass
class BudgetReport:
    """Full monthly food budget for one household."""
    family_size: int
    district: str
    monthly_income: float
    diet_type: str
    quintile: str
    quintile_number: int
    breakdown: Dict[str, CategoryBreakdown]
    totals: BudgetTotals
    recommendation: Recommendation
    sector: str = ""
    generated_at: datetime = field(default_factory=datetime.now)

    def category_totals(self) -> Dict[str, int]:
        return {name: category.total for name, category in self.breakdown.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "family_size": self.family_size,
            "district": self.district,
            "sector": self.sector,
            "monthly_income": self.monthly_income,
            "diet_type": self.diet_type,
            "quintile": self.quintile,
            "quintile_number": self.quintile_number,
            "breakdown": {name: c.to_dict() for name, c in self.breakdown.items()},
            "totals": self.totals.to_dict(),
            "recommendation": self.recommendation.to_dict(),
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass
class DistrictRecommendation:
    district: str
    median_income: float
    recommended_budget_min: float
    recommended_budget_max: float
    sector: str
    tips: List[str] = field(default_factory=list)
    population: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "district": self.district,
            "median_income": self.median_income,
            "recommended_budget": {
                "min": self.recommended_budget_min,
                "max": self.recommended_budget_max,
            },
            "sector": self.sector,
            "population": self.population,
            "tips": list(self.tips),
        }
