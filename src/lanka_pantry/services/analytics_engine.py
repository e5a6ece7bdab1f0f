"""
Budget Analytics Engine
=======================
One entry point that wires the budget calculator, price analyzer and
prediction engine to the same reference snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..config import Config, DEFAULT_CONFIG
from ..data.reference import ReferenceData
from ..models.budget import BudgetReport, DistrictRecommendation
from ..models.forecasts import MonthlyPrediction, SeasonalOutlook, SufficiencyAnalysis
from ..utils.logger import get_logger, LogContext
from ..utils.validators import ensure_budget_tables
from .budget_calculator import BudgetCalculator
from .prediction_engine import PredictionEngine
from .price_analyzer import PriceAnalyzer, validate_month

logger = get_logger(__name__)


@dataclass
class CompleteReport:
    """Budget plus every advisory analysis for one household."""
    budget: BudgetReport
    district_recommendation: DistrictRecommendation
    seasonal_savings: SeasonalOutlook
    predictions: List[MonthlyPrediction]
    sufficiency: SufficiencyAnalysis
    saving_strategies: List[Dict[str, Any]] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "budget": self.budget.to_dict(),
            "district_recommendation": self.district_recommendation.to_dict(),
            "seasonal_savings": self.seasonal_savings.to_dict(),
            "predictions": [p.to_dict() for p in self.predictions],
            "sufficiency": self.sufficiency.to_dict(),
            "saving_strategies": [dict(s) for s in self.saving_strategies],
            "generated_at": self.generated_at.isoformat(),
        }


class BudgetAnalyticsEngine:
    """
    Facade over the three budget engines.

    Usage
    -----
    >>> engine = BudgetAnalyticsEngine()
    >>> report = engine.generate_complete_report(4, "Colombo", 100000, "mixed", month=1)
    >>> report.sufficiency.status
    'critical'
    """

    def __init__(self, reference: Optional[ReferenceData] = None, config: Optional[Config] = None):
        self.reference = reference or ReferenceData.default()
        self.config = config or DEFAULT_CONFIG
        self.calculator = BudgetCalculator(self.reference, self.config)
        self.price_analyzer = PriceAnalyzer(self.reference, self.config)
        self.predictor = PredictionEngine(self.reference, self.config)
        logger.info("BudgetAnalyticsEngine initialized")

    def get_all_districts(self) -> List[str]:
        """District names, alphabetically."""
        ensure_budget_tables(self.reference.budget_tables)
        return self.reference.district_names()

    def get_all_diet_types(self) -> List[Dict[str, str]]:
        ensure_budget_tables(self.reference.budget_tables)
        return [
            {"key": key, "name": diet["name"], "description": diet.get("description", "")}
            for key, diet in self.reference.budget_tables["dietary_preferences"].items()
        ]

    def generate_complete_report(
        self,
        family_size: int,
        district: str,
        monthly_income: float,
        diet_type: str = "mixed",
        month: Optional[int] = None
    ) -> CompleteReport:
        """
        Budget, district advice, seasonal outlook, projections, sufficiency
        and the top saving strategies.

        Parameters
        ----------
        family_size : int
            Number of people
        district : str
            Exact district name
        monthly_income : float
            Household income in rupees
        diet_type : str
            Diet key (default: "mixed")
        month : int, optional
            Current month 1-12; defaults to today's month

        Returns
        -------
        CompleteReport
        """
        month = validate_month(month)

        with LogContext(logger, f"Complete report for {district}, family of {family_size}"):
            budget = self.calculator.calculate_monthly_budget(
                family_size, district, monthly_income, diet_type
            )
            spend = budget.totals.with_utilities

            report = CompleteReport(
                budget=budget,
                district_recommendation=self.calculator.get_district_recommendation(district),
                seasonal_savings=self.price_analyzer.calculate_seasonal_savings(month),
                predictions=self.predictor.predict_monthly_expenses(spend, start_month=month),
                sufficiency=self.predictor.analyze_budget_sufficiency(monthly_income, spend, family_size),
                saving_strategies=self.price_analyzer.get_saving_strategies()[:self.config.forecast.top_strategies],
            )

        return report
