"""
Prediction Results
==================
Derived records produced by the consumption-prediction pipeline.

These are pure functions of (catalog, inventory, history, profile) and are
safe to discard and recompute at any time.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .inventory import SourceMode, UsageFrequency


@dataclass(frozen=True)
class ConsumptionEstimate:
    """
    Estimated consumption of one item.

    Attributes
    ----------
    rate : float
        Amount per frequency unit (per day for observed and heuristic rates)
    mode : SourceMode
        Historical or heuristic
    manual_override : bool
        True when a user-set monthly target produced the rate
    days_tracked : float
        History span used, 0 for heuristic rates
    """
    rate: float
    mode: SourceMode
    manual_override: bool = False
    days_tracked: float = 0.0


@dataclass
class PredictionRecord:
    """Projected monthly need and shortfall for one catalog item."""
    item_name: str
    unit: str
    frequency: UsageFrequency
    estimated_consumption_rate: float
    monthly_requirement: float
    source_mode: SourceMode
    manual_override: bool = False
    shortfall_quantity: float = 0.0
    shortfall_value: float = 0.0
    covered_by_group: bool = False
    substitution_group: Optional[str] = None
    group_stock: Optional[float] = None
    explanation: str = ""

    @property
    def has_shortfall(self) -> bool:
        return self.shortfall_quantity > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "item_name": self.item_name,
            "unit": self.unit,
            "frequency": self.frequency.value,
            "estimated_consumption_rate": self.estimated_consumption_rate,
            "monthly_requirement": self.monthly_requirement,
            "source_mode": self.source_mode.value,
            "manual_override": self.manual_override,
            "shortfall_quantity": self.shortfall_quantity,
            "shortfall_value": self.shortfall_value,
            "covered_by_group": self.covered_by_group,
            "substitution_group": self.substitution_group,
            "group_stock": self.group_stock,
            "explanation": self.explanation,
        }


@dataclass
class PredictionSummary:
    """
    Output of one prediction run.

    ``total_monthly_need_value`` is the forecast monthly spend (sum of
    shortfall values); ``total_daily_usage_value`` is the estimated daily
    spend across all projected items.
    """
    records: Dict[str, PredictionRecord] = field(default_factory=dict)
    total_monthly_need_value: float = 0.0
    total_daily_usage_value: float = 0.0
    skipped_history_items: List[str] = field(default_factory=list)
    excluded_items: List[str] = field(default_factory=list)

    @property
    def shortfalls(self) -> List[PredictionRecord]:
        return [r for r in self.records.values() if r.has_shortfall]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": {name: r.to_dict() for name, r in self.records.items()},
            "total_monthly_need_value": self.total_monthly_need_value,
            "total_daily_usage_value": self.total_daily_usage_value,
            "skipped_history_items": list(self.skipped_history_items),
            "excluded_items": list(self.excluded_items),
        }
