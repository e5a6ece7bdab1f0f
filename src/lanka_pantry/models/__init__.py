"""
Models Package
===============
Data models for the Lanka Pantry prediction and budget engines.

Modules:
- inventory: Catalog, pantry stock, usage history and family profile
- predictions: Consumption estimates and prediction records
- budget: Budget report structures
- forecasts: Seasonal, inflation, sufficiency and price analysis results
"""

from .inventory import (
    UsageFrequency,
    SourceMode,
    DietType,
    CatalogItem,
    InventoryItem,
    ConsumedItem,
    UsageHistoryEntry,
    FamilyProfile,
)
from .predictions import ConsumptionEstimate, PredictionRecord, PredictionSummary
from .budget import (
    LineItem,
    CategoryBreakdown,
    BudgetTotals,
    Recommendation,
    BudgetReport,
    DistrictRecommendation,
)
from .forecasts import (
    MonthlyPrediction,
    InflationPoint,
    InflationProjection,
    Suggestion,
    SufficiencyAnalysis,
    SeasonalOutlook,
    OutlierResult,
    SpendingTrend,
)

__all__ = [
    'UsageFrequency',
    'SourceMode',
    'DietType',
    'CatalogItem',
    'InventoryItem',
    'ConsumedItem',
    'UsageHistoryEntry',
    'FamilyProfile',
    'ConsumptionEstimate',
    'PredictionRecord',
    'PredictionSummary',
    'LineItem',
    'CategoryBreakdown',
    'BudgetTotals',
    'Recommendation',
    'BudgetReport',
    'DistrictRecommendation',
    'MonthlyPrediction',
    'InflationPoint',
    'InflationProjection',
    'Suggestion',
    'SufficiencyAnalysis',
    'SeasonalOutlook',
    'OutlierResult',
    'SpendingTrend',
]
