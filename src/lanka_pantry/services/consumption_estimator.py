"""
Consumption Estimation Service
==============================
Estimates how fast a household uses each catalog item.

Design Principles:
- Observed history wins once it spans enough days
- A family-size heuristic covers items without usable history
- A user-set monthly target overrides both

Key Algorithms:
1. Manual target (highest priority)
   - rate = target / {30 daily, 4 weekly, 1 monthly or adhoc}
   - Reported as historical so downstream logic treats it as observed

2. Observed history
   - Requires at least one entry for the item AND a history span
     (earliest entry of the whole log to ``as_of``) of min_history_days
   - rate = total consumed, in the catalog unit, / days tracked

3. Heuristic
   - kg or l: 0.05 per person per day, g: 50, anything else: 0.5
"""

import pandas as pd
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Mapping, Optional, Sequence, Union

from ..config import Config, DEFAULT_CONFIG, PredictionConfig
from ..models.inventory import (
    CatalogItem,
    FamilyProfile,
    SourceMode,
    UsageFrequency,
    UsageHistoryEntry,
)
from ..models.predictions import ConsumptionEstimate
from ..utils.logger import get_logger
from ..utils.numbers import convert_quantity

logger = get_logger(__name__)

HISTORY_COLUMNS = ['date', 'item_name', 'quantity', 'unit']


@dataclass
class HistorySummary:
    """
    Usage history reduced to per-item totals.

    Attributes
    ----------
    totals : Dict[str, float]
        Consumed quantity per item, in the catalog unit
    entry_counts : Dict[str, int]
        Number of history lines referencing each item
    first_date : date, optional
        Earliest entry across the whole log
    days_tracked : float
        Days from ``first_date`` to the as-of date, at least 1;
        0 when there is no history
    unknown_items : List[str]
        Names referenced by history but missing from the catalog
    """
    totals: Dict[str, float] = field(default_factory=dict)
    entry_counts: Dict[str, int] = field(default_factory=dict)
    first_date: Optional[date] = None
    days_tracked: float = 0.0
    unknown_items: List[str] = field(default_factory=list)

    def total_for(self, item_name: str) -> float:
        return self.totals.get(item_name, 0.0)

    def entries_for(self, item_name: str) -> int:
        return self.entry_counts.get(item_name, 0)


def history_to_dataframe(history: Sequence[UsageHistoryEntry]) -> pd.DataFrame:
    """Flatten history entries into one row per consumed item."""
    rows = [
        {
            'date': entry.date,
            'item_name': consumed.item_name,
            'quantity': consumed.quantity,
            'unit': consumed.unit,
        }
        for entry in history
        for consumed in entry.items
    ]
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def summarize_history(
    history: Sequence[UsageHistoryEntry],
    catalog: Mapping[str, CatalogItem],
    as_of: Union[date, datetime]
) -> HistorySummary:
    """
    Total the usage log per catalog item.

    Parameters
    ----------
    history : sequence of UsageHistoryEntry
        Append-only usage log
    catalog : mapping of name -> CatalogItem
        Items to total; other names are reported as unknown
    as_of : date
        End of the tracking window

    Returns
    -------
    HistorySummary
    """
    summary = HistorySummary()
    if not history:
        return summary

    as_of = _as_date(as_of)
    summary.first_date = min(entry.date for entry in history)
    summary.days_tracked = float(max(1, (as_of - summary.first_date).days))

    df = history_to_dataframe(history)
    if df.empty:
        return summary

    known = df['item_name'].isin(list(catalog.keys()))
    unknown = sorted(df.loc[~known, 'item_name'].unique())
    for name in unknown:
        logger.warning(f"History references '{name}', which is not in the catalog; skipping")
    summary.unknown_items = list(unknown)

    df = df[known].copy()
    if df.empty:
        return summary

    def to_catalog_unit(row) -> float:
        item = catalog[row['item_name']]
        converted = convert_quantity(row['quantity'], row['unit'] or item.unit, item.unit)
        if converted is None:
            logger.warning(
                f"Cannot convert {row['quantity']} {row['unit']} of '{row['item_name']}' "
                f"to {item.unit}; entry ignored"
            )
            return 0.0
        return converted

    df['converted'] = df.apply(to_catalog_unit, axis=1)
    grouped = df.groupby('item_name').agg(total=('converted', 'sum'), entries=('converted', 'size'))

    summary.totals = {name: float(row['total']) for name, row in grouped.iterrows()}
    summary.entry_counts = {name: int(row['entries']) for name, row in grouped.iterrows()}

    logger.debug(
        f"History summary: {len(summary.totals)} items over {summary.days_tracked:.0f} days"
    )
    return summary


def heuristic_rate(unit: str, family_size: int, config: Optional[PredictionConfig] = None) -> float:
    """Default daily consumption for an item with no usable history."""
    config = config or DEFAULT_CONFIG.prediction
    per_person = config.heuristic_unit_rates.get(unit, config.heuristic_default_rate)
    return per_person * family_size


class ConsumptionEstimator:
    """
    Picks the consumption rate for one catalog item.

    The history test is evaluated per item: other items qualifying for
    historical mode has no effect on an item with no entries of its own.

    Usage
    -----
    >>> estimator = ConsumptionEstimator()
    >>> summary = summarize_history(history, catalog, as_of=date(2025, 6, 30))
    >>> estimate = estimator.estimate(item, summary, family)
    >>> estimate.mode
    <SourceMode.HISTORICAL: 'historical'>
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = (config or DEFAULT_CONFIG).prediction
        logger.info(
            f"ConsumptionEstimator initialized: min_history_days={self.config.min_history_days}"
        )

    def has_usable_history(self, item: CatalogItem, summary: HistorySummary) -> bool:
        return (
            summary.entries_for(item.name) >= 1
            and summary.days_tracked >= self.config.min_history_days
        )

    def estimate(
        self,
        item: CatalogItem,
        summary: HistorySummary,
        family: FamilyProfile,
        manual_target: Optional[float] = None,
        frequency: Optional[UsageFrequency] = None
    ) -> ConsumptionEstimate:
        """
        Estimate the consumption rate of ``item``.

        Parameters
        ----------
        item : CatalogItem
            Item to estimate
        summary : HistorySummary
            Output of :func:`summarize_history`
        family : FamilyProfile
            Household, scales the heuristic
        manual_target : float, optional
            User-set monthly quantity; used when > 0
        frequency : UsageFrequency, optional
            Effective frequency; defaults to the catalog frequency

        Returns
        -------
        ConsumptionEstimate
        """
        frequency = frequency or item.usage_frequency

        if manual_target is not None and manual_target > 0:
            divisor = self.config.manual_target_divisors.get(frequency.value, 1)
            return ConsumptionEstimate(
                rate=manual_target / divisor,
                mode=SourceMode.HISTORICAL,
                manual_override=True,
                days_tracked=summary.days_tracked,
            )

        if self.has_usable_history(item, summary):
            return ConsumptionEstimate(
                rate=summary.total_for(item.name) / summary.days_tracked,
                mode=SourceMode.HISTORICAL,
                days_tracked=summary.days_tracked,
            )

        return ConsumptionEstimate(
            rate=heuristic_rate(item.unit, family.family_size, self.config),
            mode=SourceMode.HEURISTIC,
        )
