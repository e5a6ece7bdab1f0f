"""
Monthly Need Projection Service
===============================
Turns consumption rates into monthly requirements and shopping shortfalls.

Design Principles:
- Small ordered stages, each testable on its own:
  exclude -> estimate rate -> scale by frequency -> resolve stock coverage
  -> compute shortfall
- Deterministic: identical inputs and ``as_of`` give identical output
- Every record carries a plain-language explanation

Key Rules:
1. monthly requirement = rate x {30 daily, 4 weekly, 1 monthly, 0 adhoc}
2. A substitution group whose pooled stock meets the requirement covers
   the item, whatever its own stock
3. Otherwise shortfall = max(0, requirement - own stock)
4. Diet exclusion removes whole categories before anything else
"""

import pandas as pd
from datetime import date, datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..config import Config, DEFAULT_CONFIG
from ..exceptions import InvalidInputError
from ..models.inventory import (
    CatalogItem,
    FamilyProfile,
    InventoryItem,
    SourceMode,
    UsageFrequency,
    UsageHistoryEntry,
)
from ..models.predictions import ConsumptionEstimate, PredictionRecord, PredictionSummary
from ..utils.logger import get_logger, LogContext, log_dataframe_info
from ..utils.numbers import convert_quantity, round_half_up
from ..utils.validators import validate_family_profile
from .consumption_estimator import ConsumptionEstimator, HistorySummary, summarize_history

logger = get_logger(__name__)


class MonthlyNeedProjector:
    """
    Projects one item's monthly requirement and shortfall.

    Usage
    -----
    >>> projector = MonthlyNeedProjector()
    >>> record = projector.project(item, estimate, UsageFrequency.DAILY,
    ...                            current_stock=2.0, price=230,
    ...                            group_stock=10.0, group='rice')
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = (config or DEFAULT_CONFIG).prediction
        logger.info("MonthlyNeedProjector initialized")

    def monthly_requirement(self, rate: float, frequency: UsageFrequency) -> float:
        return rate * self.config.frequency_multipliers.get(frequency.value, 0)

    def resolve_coverage(
        self,
        requirement: float,
        group: Optional[str],
        group_stock: Optional[float]
    ) -> bool:
        """True when pooled group stock alone meets the requirement."""
        if not group or group_stock is None:
            return False
        return group_stock >= requirement

    def compute_shortfall(self, requirement: float, current_stock: float, covered: bool) -> float:
        if requirement <= 0 or covered:
            return 0.0
        return max(0.0, requirement - current_stock)

    def project(
        self,
        item: CatalogItem,
        estimate: ConsumptionEstimate,
        frequency: UsageFrequency,
        current_stock: float,
        price: float,
        group_stock: Optional[float] = None,
        group: Optional[str] = None
    ) -> PredictionRecord:
        """
        Build the prediction record for one item.

        Parameters
        ----------
        item : CatalogItem
            Catalog entry being projected
        estimate : ConsumptionEstimate
            Rate and its source
        frequency : UsageFrequency
            Effective buying frequency
        current_stock : float
            Quantity of this item on hand
        price : float
            Unit price used to value the shortfall
        group_stock : float, optional
            Pooled stock of the item's substitution group
        group : str, optional
            Effective substitution group; defaults to the catalog group

        Returns
        -------
        PredictionRecord
        """
        group = group if group is not None else item.substitution_group
        requirement = self.monthly_requirement(estimate.rate, frequency)
        covered = requirement > 0 and self.resolve_coverage(requirement, group, group_stock)
        shortfall = self.compute_shortfall(requirement, current_stock, covered)

        record = PredictionRecord(
            item_name=item.name,
            unit=item.unit,
            frequency=frequency,
            estimated_consumption_rate=round_half_up(estimate.rate, 3),
            monthly_requirement=round_half_up(requirement, 2),
            source_mode=estimate.mode,
            manual_override=estimate.manual_override,
            shortfall_quantity=round_half_up(shortfall, 2),
            shortfall_value=round_half_up(shortfall * price, 2),
            covered_by_group=covered,
            substitution_group=group,
            group_stock=group_stock if group else None,
        )
        record.explanation = self._explain(record, current_stock)
        return record

    def _explain(self, record: PredictionRecord, current_stock: float) -> str:
        if record.frequency == UsageFrequency.ADHOC:
            return f"{record.item_name} is bought on demand only; no monthly forecast."

        source = "your target" if record.manual_override else (
            "usage history" if record.source_mode == SourceMode.HISTORICAL else "family size"
        )
        parts = [
            f"About {record.monthly_requirement:g} {record.unit} needed per month "
            f"(based on {source})."
        ]
        if record.covered_by_group:
            parts.append(
                f"Covered by {record.group_stock:g} {record.unit} of "
                f"'{record.substitution_group}' items in stock."
            )
        elif record.has_shortfall:
            parts.append(
                f"Buy {record.shortfall_quantity:g} {record.unit} "
                f"(Rs. {record.shortfall_value:,.0f}); {current_stock:g} on hand."
            )
        else:
            parts.append("Current stock is enough.")
        return " ".join(parts)


class PredictionPipeline:
    """
    Runs the full prediction pass over the catalog.

    Usage
    -----
    >>> pipeline = PredictionPipeline()
    >>> summary = pipeline.run(snapshot.catalog, inventory, history, family,
    ...                        as_of=date(2025, 6, 30))
    >>> summary.total_monthly_need_value
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or DEFAULT_CONFIG
        self.estimator = ConsumptionEstimator(self.config)
        self.projector = MonthlyNeedProjector(self.config)
        logger.info("PredictionPipeline initialized")

    # -- stage 1 ---------------------------------------------------------

    def is_excluded(
        self,
        item: CatalogItem,
        family: FamilyProfile,
        group: Optional[str],
        allowed_items: Sequence[str]
    ) -> bool:
        """Diet categories first, then the allow-list within substitution groups."""
        excluded_categories = self.config.prediction.diet_exclusions.get(family.diet_type.value, [])
        if item.category in excluded_categories:
            return True
        if allowed_items and group and item.name not in allowed_items:
            return True
        return False

    # -- helpers ---------------------------------------------------------

    @staticmethod
    def _index_inventory(inventory: Iterable[InventoryItem]) -> Dict[str, InventoryItem]:
        index = {}
        for inv in inventory:
            if inv.name in index:
                logger.warning(f"Duplicate inventory entry for '{inv.name}'; using the first")
                continue
            index[inv.name] = inv
        return index

    @staticmethod
    def stock_in_catalog_unit(item: CatalogItem, inv: InventoryItem) -> Tuple[float, float]:
        """
        (stock, price per unit) of ``inv`` expressed in the catalog unit.

        Stock held in a unit that cannot be converted counts as zero and
        is valued at the catalog reference price.
        """
        stock = convert_quantity(inv.quantity, inv.unit or item.unit, item.unit)
        per_catalog_unit = convert_quantity(1.0, item.unit, inv.unit or item.unit)
        if stock is None or per_catalog_unit is None:
            logger.warning(
                f"Cannot convert {inv.quantity} {inv.unit} of '{inv.name}' to {item.unit}; "
                f"treating stock as 0"
            )
            return 0.0, item.reference_price
        return stock, inv.price * per_catalog_unit

    @classmethod
    def effective_settings(
        cls,
        item: CatalogItem,
        inv: Optional[InventoryItem]
    ) -> Tuple[UsageFrequency, Optional[str], float, float]:
        """(frequency, group, price, stock) with inventory overrides applied, in catalog units."""
        if inv is None:
            return item.usage_frequency, item.substitution_group, item.reference_price, 0.0
        frequency = inv.usage_frequency or item.usage_frequency
        group = inv.substitution_group or item.substitution_group
        stock, price = cls.stock_in_catalog_unit(item, inv)
        return frequency, group, price, stock

    def group_stocks(
        self,
        inventory_index: Mapping[str, InventoryItem],
        catalog_index: Mapping[str, CatalogItem]
    ) -> Dict[str, float]:
        """Pooled quantity per substitution group across the inventory."""
        stocks: Dict[str, float] = {}
        for inv in inventory_index.values():
            catalog_item = catalog_index.get(inv.name)
            group = inv.substitution_group or (catalog_item.substitution_group if catalog_item else None)
            if not group:
                continue
            quantity = self.stock_in_catalog_unit(catalog_item, inv)[0] if catalog_item else inv.quantity
            stocks[group] = stocks.get(group, 0.0) + quantity
        return stocks

    def daily_value(self, rate: float, price: float, frequency: UsageFrequency) -> float:
        divisor = self.config.prediction.daily_value_divisors.get(frequency.value)
        if not divisor:
            return 0.0
        return rate * price / divisor

    # -- run -------------------------------------------------------------

    def run(
        self,
        catalog: Sequence[CatalogItem],
        inventory: Sequence[InventoryItem],
        history: Sequence[UsageHistoryEntry],
        family: FamilyProfile,
        manual_targets: Optional[Mapping[str, float]] = None,
        as_of: Optional[Union[date, datetime]] = None,
        allowed_items: Optional[Sequence[str]] = None
    ) -> PredictionSummary:
        """
        Predict monthly needs for every catalog item.

        Parameters
        ----------
        catalog : sequence of CatalogItem
            Items to consider, in output order
        inventory : sequence of InventoryItem
            Current pantry stock
        history : sequence of UsageHistoryEntry
            Usage log
        family : FamilyProfile
            Household profile (size and diet)
        manual_targets : mapping of name -> monthly quantity, optional
            User-set targets; values <= 0 are ignored
        as_of : date, optional
            End of the history window. Defaults to today, which makes the
            result depend on the run date.
        allowed_items : sequence of str, optional
            Overrides the configured allow-list

        Returns
        -------
        PredictionSummary
        """
        validate_family_profile(family.adult_count, family.child_count).raise_for_errors(InvalidInputError)
        if as_of is None:
            as_of = date.today()
            logger.debug(f"No as-of date given; using {as_of}")

        manual_targets = manual_targets or {}
        allowed = list(allowed_items) if allowed_items is not None else list(self.config.prediction.allowed_items)

        catalog_index = {item.name: item for item in catalog}
        inventory_index = self._index_inventory(inventory)
        stocks = self.group_stocks(inventory_index, catalog_index)

        summary = PredictionSummary()

        with LogContext(logger, f"Predicting monthly needs for {len(catalog)} catalog items"):
            history_summary: HistorySummary = summarize_history(history, catalog_index, as_of)
            summary.skipped_history_items = list(history_summary.unknown_items)

            for item in catalog:
                inv = inventory_index.get(item.name)
                frequency, group, price, stock = self.effective_settings(item, inv)

                if self.is_excluded(item, family, group, allowed):
                    summary.excluded_items.append(item.name)
                    continue

                estimate = self.estimator.estimate(
                    item,
                    history_summary,
                    family,
                    manual_target=manual_targets.get(item.name),
                    frequency=frequency,
                )

                record = self.projector.project(
                    item,
                    estimate,
                    frequency,
                    current_stock=stock,
                    price=price,
                    group_stock=stocks.get(group, 0.0) if group else None,
                    group=group,
                )

                if record.monthly_requirement <= 0 and frequency != UsageFrequency.ADHOC:
                    continue

                summary.records[item.name] = record
                summary.total_monthly_need_value += record.shortfall_value
                summary.total_daily_usage_value += self.daily_value(estimate.rate, price, frequency)

        summary.total_monthly_need_value = round_half_up(summary.total_monthly_need_value, 2)
        summary.total_daily_usage_value = round_half_up(summary.total_daily_usage_value, 2)

        logger.info(
            f"Predictions: {len(summary.records)} items, {len(summary.shortfalls)} to buy, "
            f"monthly need Rs. {summary.total_monthly_need_value:,.2f}, "
            f"daily usage Rs. {summary.total_daily_usage_value:,.2f}"
        )
        return summary


def predictions_to_dataframe(summary: PredictionSummary) -> pd.DataFrame:
    """
    Convert prediction records to a DataFrame for export.

    Parameters
    ----------
    summary : PredictionSummary
        Output of :meth:`PredictionPipeline.run`

    Returns
    -------
    pd.DataFrame
        One row per record, in catalog order
    """
    rows = [record.to_dict() for record in summary.records.values()]
    if not rows:
        return pd.DataFrame(columns=list(PredictionRecord.__dataclass_fields__.keys()))

    df = pd.DataFrame(rows)
    log_dataframe_info(logger, "predictions", df)
    return df


def shopping_list(summary: PredictionSummary) -> List[PredictionRecord]:
    """Items to buy, most expensive shortfall first."""
    return sorted(
        summary.shortfalls,
        key=lambda r: (-r.shortfall_value, r.item_name)
    )
