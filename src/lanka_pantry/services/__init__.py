"""
Services Package
=================
Core logic for the Lanka Pantry prediction and budget engines.

Modules:
- consumption_estimator: History aggregation and consumption rates
- need_projector: Monthly requirements, group coverage and shortfalls
- inventory_ledger: Meal logging, recipes and purchases
- budget_calculator: District-aware monthly food budget
- price_analyzer: District comparison, seasonal savings and deal detection
- prediction_engine: Seasonal, inflation, sufficiency and trend forecasts
- analytics_engine: Complete household report
- data_loader: Reference overrides and household snapshots from disk
- output_generator: CSV and JSON export
"""

from .consumption_estimator import ConsumptionEstimator, summarize_history
from .need_projector import MonthlyNeedProjector, PredictionPipeline, predictions_to_dataframe, shopping_list
from .inventory_ledger import InventoryLedger
from .budget_calculator import BudgetCalculator
from .price_analyzer import PriceAnalyzer
from .prediction_engine import PredictionEngine
from .analytics_engine import BudgetAnalyticsEngine, CompleteReport
from .data_loader import ReferenceDataLoader, HouseholdSnapshot
from .output_generator import OutputGenerator

__all__ = [
    'ConsumptionEstimator',
    'summarize_history',
    'MonthlyNeedProjector',
    'PredictionPipeline',
    'predictions_to_dataframe',
    'shopping_list',
    'InventoryLedger',
    'BudgetCalculator',
    'PriceAnalyzer',
    'PredictionEngine',
    'BudgetAnalyticsEngine',
    'CompleteReport',
    'ReferenceDataLoader',
    'HouseholdSnapshot',
    'OutputGenerator',
]
