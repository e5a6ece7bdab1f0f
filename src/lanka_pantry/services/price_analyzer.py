"""
Price Analysis Service
======================
District comparison, cheaper alternatives, seasonal savings, ranked saving
strategies and IQR-based deal detection.

Key Algorithms:
1. Seasonal change
   - Vegetables: peak harvest (Jun-Sep) before off-season (Jan-Mar)
   - Fish: monsoon low (May-Aug) before calm season (Nov-Mar)
   - Changes are signed: negative means cheaper than baseline

2. IQR outliers
   - Q1 = sorted[floor(n/4)], Q3 = the ceil(3n/4)-th smallest value
   - Below Q1 - 1.5 x IQR is a good deal, above Q3 + 1.5 x IQR is overpriced
   - Fewer than 4 values: nothing is flagged
"""

import math
import re
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config import Config, DEFAULT_CONFIG
from ..data.reference import ReferenceData
from ..exceptions import InvalidInputError, NotFoundError
from ..models.forecasts import OutlierResult, SeasonalOutlook
from ..utils.constants import MONTH_NAMES
from ..utils.logger import get_logger, log_dataframe_info
from ..utils.numbers import round_half_up
from ..utils.validators import ensure_budget_tables

logger = get_logger(__name__)

VEGETABLE_SEASONS = ("peak_harvest", "off_season")
FISH_SEASONS = ("monsoon_low", "calm_season")

# Bonus priority for strategies that apply to most households
STRATEGY_BONUS = {
    "Seasonal Eating": 10,
    "Farmers Markets": 8,
}


def validate_month(month: Optional[int]) -> int:
    """Default to the current month; reject values outside 1-12."""
    if month is None:
        return date.today().month
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidInputError(f"Month must be an integer 1-12, got {month!r}")
    return month


def seasonal_change(
    variations: Mapping[str, Any],
    commodity: str,
    seasons: Sequence[str],
    month: int
) -> Tuple[Optional[str], float]:
    """
    First season of ``seasons`` covering ``month`` and its price change.

    Returns
    -------
    (season name or None, signed % change)
    """
    table = variations.get(commodity, {})
    for season in seasons:
        entry = table.get(season)
        if entry and month in entry.get("months", []):
            return season, float(entry.get("price_change", 0))
    return None, 0.0


def detect_outliers(values: Sequence[float], multiplier: float = 1.5, min_points: int = 4) -> OutlierResult:
    """
    Flag unusually low and high values with the IQR rule.

    Parameters
    ----------
    values : sequence of float
        Observed prices
    multiplier : float
        Fence width in IQRs (default: 1.5)
    min_points : int
        Below this many values nothing is flagged (default: 4)

    Returns
    -------
    OutlierResult
        ``low`` holds good deals and ``high`` overpriced values, both in
        input order
    """
    values = [float(v) for v in values]
    n = len(values)
    if n < min_points:
        return OutlierResult()

    ordered = np.sort(np.asarray(values, dtype=float))
    q1 = float(ordered[n // 4])
    q3 = float(ordered[math.ceil(n * 3 / 4) - 1])
    iqr = q3 - q1
    lower = q1 - multiplier * iqr
    upper = q3 + multiplier * iqr

    return OutlierResult(
        low=[v for v in values if v < lower],
        high=[v for v in values if v > upper],
        q1=q1,
        q3=q3,
        lower_bound=lower,
        upper_bound=upper,
    )


class PriceAnalyzer:
    """
    Price comparisons and savings advice over the economic tables.

    Usage
    -----
    >>> analyzer = PriceAnalyzer(ReferenceData.default())
    >>> analyzer.detect_outliers([100, 102, 98, 101, 99, 500]).high
    [500.0]
    """

    def __init__(self, reference: Optional[ReferenceData] = None, config: Optional[Config] = None):
        self.reference = reference or ReferenceData.default()
        self.data = self.reference.budget_tables
        self.config = (config or DEFAULT_CONFIG).forecast
        logger.info("PriceAnalyzer initialized")

    def _price(self, section: Optional[str], key: str) -> float:
        prices = self.data.get("food_prices", {})
        table = prices.get(section, {}) if section else prices
        entry = table.get(key) or {}
        return float(entry.get("price", 0.0))

    def compare_districts(self, district_names: Sequence[str]) -> pd.DataFrame:
        """
        Side-by-side food budget figures for several districts.

        Unknown names are dropped with a warning. Rows are sorted by median
        income, highest first.

        Returns
        -------
        pd.DataFrame
            Columns: name, sector, median_income, food_budget_min,
            food_budget_max, budget_percentage
        """
        ensure_budget_tables(self.data)
        rows = []
        for name in district_names:
            try:
                district = self.reference.district(name)
            except NotFoundError:
                logger.warning(f"District '{name}' not recognized; left out of comparison")
                continue
            budget = district.get("food_budget", {})
            midpoint = (budget.get("min", 0) + budget.get("max", 0)) / 2
            rows.append({
                "name": district["name"],
                "sector": district.get("sector", ""),
                "median_income": district["median_income"],
                "food_budget_min": budget.get("min", 0),
                "food_budget_max": budget.get("max", 0),
                "budget_percentage": round_half_up(midpoint / district["median_income"] * 100, 1),
            })

        columns = ["name", "sector", "median_income", "food_budget_min",
                   "food_budget_max", "budget_percentage"]
        df = pd.DataFrame(rows, columns=columns)
        if not df.empty:
            df = df.sort_values("median_income", ascending=False, kind="mergesort").reset_index(drop=True)
            log_dataframe_info(logger, "district_comparison", df)
        return df

    def find_cheapest_alternatives(self, item_category: str) -> List[Dict[str, Any]]:
        """
        Cheaper options within a category, cheapest first.

        Parameters
        ----------
        item_category : str
            "rice" or "protein"; anything else returns an empty list
        """
        ensure_budget_tables(self.data)
        prices = self.data.get("food_prices", {})

        if item_category == "rice":
            rice = prices.get("rice", {})
            samba = self._price("rice", "samba")
            options = [
                {
                    "type": rice_type,
                    "price": entry["price"],
                    "savings": round_half_up((samba - entry["price"]) / samba * 100, 1) if samba else 0.0,
                }
                for rice_type, entry in rice.items()
            ]
            return sorted(options, key=lambda o: o["price"])

        if item_category == "protein":
            options = [
                {"name": "Eggs (per kg equivalent)", "price": self._price("proteins", "eggs") * 20, "type": "eggs"},
                {"name": "Dhal", "price": self._price(None, "dhal_red"), "type": "legume"},
                {"name": "Soya Meat (per kg equivalent)", "price": self._price("proteins", "soya_meat") * 11, "type": "plant"},
                {"name": "Dried Fish (Salaya)", "price": self._price("proteins", "dried_fish_salaya"), "type": "fish"},
                {"name": "Fish (Linna)", "price": self._price("proteins", "fish_linna"), "type": "fish"},
                {"name": "Chicken", "price": self._price("proteins", "chicken_whole"), "type": "poultry"},
                {"name": "Beef", "price": self._price("proteins", "beef_round"), "type": "meat"},
                {"name": "Fish (Kelawalla)", "price": self._price("proteins", "fish_kelawalla"), "type": "fish"},
                {"name": "Mutton", "price": self._price("proteins", "mutton"), "type": "meat"},
            ]
            return sorted(options, key=lambda o: o["price"])

        logger.debug(f"No alternatives table for category '{item_category}'")
        return []

    def calculate_seasonal_savings(self, month: Optional[int] = None) -> SeasonalOutlook:
        """Signed vegetable and fish price changes for ``month`` with buying advice."""
        month = validate_month(month)
        ensure_budget_tables(self.data)
        variations = self.data.get("seasonal_variations", {})

        _, veg_change = seasonal_change(variations, "vegetables", VEGETABLE_SEASONS, month)
        _, fish_change = seasonal_change(variations, "fish", FISH_SEASONS, month)

        if veg_change < 0:
            veg_advice = "Great time to buy and preserve vegetables"
        elif veg_change > 0:
            veg_advice = "Consider alternatives or preserved items"
        else:
            veg_advice = "Vegetable prices at normal levels"

        if fish_change < 0:
            fish_advice = "Excellent season for fresh fish"
        elif fish_change > 0:
            fish_advice = "Consider dried fish or alternative proteins"
        else:
            fish_advice = "Fish prices at normal levels"

        return SeasonalOutlook(
            month=month,
            month_name=MONTH_NAMES[month - 1],
            vegetables_change=veg_change,
            vegetables_advice=veg_advice,
            fish_change=fish_change,
            fish_advice=fish_advice,
        )

    @staticmethod
    def calculate_strategy_priority(strategy: Mapping[str, Any]) -> int:
        """Leading percentage of the savings text plus a broad-applicability bonus."""
        priority = 0
        savings = str(strategy.get("savings", ""))
        if "%" in savings:
            match = re.match(r"\s*(\d+)", savings)
            if match:
                priority += int(match.group(1))
        priority += STRATEGY_BONUS.get(strategy.get("strategy"), 0)
        return priority

    def get_saving_strategies(self) -> List[Dict[str, Any]]:
        """Saving strategies with a ``priority`` field, highest first."""
        ensure_budget_tables(self.data)
        strategies = [
            dict(strategy, priority=self.calculate_strategy_priority(strategy))
            for strategy in self.data.get("saving_strategies", [])
        ]
        return sorted(strategies, key=lambda s: s["priority"], reverse=True)

    def detect_outliers(self, values: Sequence[float]) -> OutlierResult:
        return detect_outliers(values, self.config.iqr_multiplier, self.config.min_outlier_points)

    def flag_deals(self, prices: Mapping[str, float]) -> Dict[str, List[str]]:
        """
        Name the good deals and overpriced offers among named prices.

        Returns
        -------
        dict
            ``{"good_deals": [...], "overpriced": [...]}`` in input order
        """
        result = self.detect_outliers(list(prices.values()))
        low, high = set(result.low), set(result.high)
        flagged = {
            "good_deals": [name for name, price in prices.items() if float(price) in low],
            "overpriced": [name for name, price in prices.items() if float(price) in high],
        }
        if flagged["good_deals"] or flagged["overpriced"]:
            logger.info(
                f"Deals: {len(flagged['good_deals'])} good, {len(flagged['overpriced'])} overpriced"
            )
        return flagged
