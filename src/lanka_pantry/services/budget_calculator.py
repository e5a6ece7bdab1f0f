"""
Budget Calculation Service
==========================
Builds a full monthly food budget for a household from static tables.

Design Principles:
- Deterministic: the same profile always yields the same report
- Fail fast on bad input, an unknown district or a missing dataset
- Missing individual table keys fall back to a safe default
  (urban sector, samba rice, zero-priced line) with a warning

Category Rules (family size n):
- Staples: template rice x sector rice price, 0.65n kg dhal, max(2, 0.5n) kg flour
- Proteins: template eggs always; chicken, fish, mutton/beef and soya by diet
- Vegetables: template kg x purchase ratio x weighted 7-vegetable price
- Dairy: n x 2.5 L milk, none for vegans
- Oils/condiments: oil, coconuts, sugar, tea and a per-capita spice estimate
- Fruits: n x (2 + quintile) kg at a weighted 3-fruit price
- Utilities: fraction of an LPG cylinder
"""

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import Config, DEFAULT_CONFIG
from ..data.reference import ReferenceData
from ..exceptions import InvalidInputError, MissingDataError
from ..models.budget import (
    BudgetReport,
    BudgetTotals,
    CategoryBreakdown,
    DistrictRecommendation,
    LineItem,
    Recommendation,
)
from ..utils.constants import (
    COASTAL_DISTRICTS,
    COASTAL_TIP,
    FOOD_CATEGORIES,
    FRUIT_BASKET,
    HOME_GROWING_SECTORS,
    NORTH_EAST_DISTRICTS,
    NORTH_EAST_TIP,
    RECOMMENDATION_TIERS,
    SECTOR_TIPS,
    VEGETABLE_BASKET,
)
from ..utils.logger import get_logger
from ..utils.numbers import round_half_up, round_int
from ..utils.validators import ensure_budget_tables, validate_budget_inputs

logger = get_logger(__name__)

TEMPLATE_QUANTITY_KEYS = ['rice_kg', 'vegetables_kg', 'proteins_kg', 'eggs_count']


def _scaled(rule: Sequence[float], family_size: int) -> float:
    """Apply a (floor, per-capita) quantity rule."""
    floor, per_capita = rule
    return max(floor, family_size * per_capita)


def _line(name: str, quantity: float, unit: str, price: float, note: str = "") -> Tuple[LineItem, float]:
    """Line item plus its unrounded cost, which category totals are summed from."""
    cost = quantity * price
    item = LineItem(
        name=name,
        quantity=round_half_up(quantity, 1),
        unit=unit,
        price=price,
        cost=round_int(cost),
        note=note,
    )
    return item, cost


def _category(lines: List[Tuple[LineItem, float]]) -> CategoryBreakdown:
    return CategoryBreakdown(
        items=[item for item, _ in lines],
        total=round_int(sum(cost for _, cost in lines)),
    )


class BudgetCalculator:
    """
    Monthly food budget engine.

    Usage
    -----
    >>> calculator = BudgetCalculator(ReferenceData.default())
    >>> report = calculator.calculate_monthly_budget(4, "Colombo", 100000, "mixed")
    >>> report.totals.with_utilities
    50685
    """

    def __init__(self, reference: Optional[ReferenceData] = None, config: Optional[Config] = None):
        self.reference = reference or ReferenceData.default()
        self.data = self.reference.budget_tables
        self.config = (config or DEFAULT_CONFIG).budget
        logger.info(
            f"BudgetCalculator initialized: {len(self.data.get('districts', []))} districts"
        )

    # =========================================================================
    # TABLE ACCESS
    # =========================================================================

    def _price(self, section: Optional[str], key: str) -> float:
        """Price from the food price table; 0 with a warning when absent."""
        prices = self.data.get("food_prices", {})
        table = prices.get(section, {}) if section else prices
        entry = table.get(key)
        if not entry or "price" not in entry:
            location = f"{section}.{key}" if section else key
            logger.warning(f"Price for '{location}' missing from reference data; using 0")
            return 0.0
        return float(entry["price"])

    def _weighted_price(self, section: str, basket: Sequence[Tuple[str, float]]) -> float:
        return sum(self._price(section, key) * weight for key, weight in basket)

    def _sector_data(self, sector: str) -> Dict[str, Any]:
        sectors = self.data.get("sectors", {})
        if sector in sectors:
            return sectors[sector]
        return sectors.get(self.config.fallback_sector, {})

    def _consumption(self, key: str) -> float:
        patterns = self.data.get("consumption_patterns", {})
        if key not in patterns:
            logger.warning(f"Consumption pattern '{key}' missing from reference data; using 0")
            return 0.0
        return float(patterns[key])

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def get_income_quintile(self, monthly_income: float) -> Dict[str, Any]:
        """Highest bracket whose threshold is at or below the income, else the lowest."""
        quintiles = self.data.get("income_quintiles", [])
        if not quintiles:
            raise MissingDataError("Income quintile table is not loaded")
        for quintile in reversed(quintiles):
            if monthly_income >= quintile["monthly_income"]:
                return quintile
        return quintiles[0]

    def get_family_template(self, family_size: int) -> Dict[str, Any]:
        """
        Consumption template for the family size.

        Families above 8 scale the size_8_plus template proportionally.
        """
        templates = self.data.get("family_templates", {})
        template = templates.get(f"size_{min(family_size, 8)}")

        if template is None and family_size >= 8:
            base = templates.get("size_8_plus")
            if base is None:
                raise MissingDataError("Family template 'size_8_plus' is not loaded")
            template = dict(base)
            if family_size > 8:
                scale = family_size / 8
                template["people"] = family_size
                for key in TEMPLATE_QUANTITY_KEYS:
                    template[key] = round_int(base[key] * scale)

        if template is None:
            raise MissingDataError(f"No family template for size {family_size}")
        return template

    # =========================================================================
    # CATEGORY CALCULATIONS
    # =========================================================================

    def calculate_staples(self, family_size: int, sector: str, template: Dict[str, Any]) -> CategoryBreakdown:
        rice_types = self.data.get("food_prices", {}).get("rice", {})
        rice_type = str(self._sector_data(sector).get("preferred_rice_type", self.config.fallback_rice_type)).lower()
        if rice_type not in rice_types:
            rice_type = self.config.fallback_rice_type

        rice_price = self._price("rice", rice_type)
        dhal_kg = family_size * self._consumption("dhal_per_capita_kg")
        flour_kg = _scaled(self.config.flour_kg, family_size)

        return _category([
            _line(f"Rice ({rice_type})", template["rice_kg"], "kg", rice_price),
            _line("Red Dhal", dhal_kg, "kg", self._price(None, "dhal_red")),
            _line("Wheat Flour", flour_kg, "kg", self._price(None, "wheat_flour")),
        ])

    def calculate_proteins(self, family_size: int, diet_type: str, template: Dict[str, Any]) -> CategoryBreakdown:
        diet = self.data.get("dietary_preferences", {}).get(diet_type, {})
        sources = diet.get("protein_sources", [])

        lines = [_line("Eggs", template["eggs_count"], "each", self._price("proteins", "eggs"))]

        if "chicken" in sources:
            lines.append(_line(
                "Chicken", _scaled(self.config.chicken_kg, family_size), "kg",
                self._price("proteins", "chicken_whole"),
            ))

        if "fish" in sources:
            lines.append(_line(
                "Fish (Mixed)", _scaled(self.config.fish_kg, family_size), "kg",
                self._price("proteins", "fish_linna"),
            ))

        if "beef" in sources or "mutton" in sources:
            # Mutton preferred when the diet lists both
            if "mutton" in sources:
                name, price = "Mutton", self._price("proteins", "mutton")
            else:
                name, price = "Beef", self._price("proteins", "beef_round")
            lines.append(_line(name, _scaled(self.config.red_meat_kg, family_size), "kg", price))

        if "soya" in sources:
            lines.append(_line(
                "Soya Meat", _scaled(self.config.soya_packs, family_size), "packs",
                self._price("proteins", "soya_meat"),
            ))

        return _category(lines)

    def calculate_vegetables(self, family_size: int, sector: str, template: Dict[str, Any]) -> CategoryBreakdown:
        ratio = self.config.home_growing_purchase_ratio if sector in HOME_GROWING_SECTORS else 1.0
        purchased_kg = template["vegetables_kg"] * ratio
        avg_price = self._weighted_price("vegetables", VEGETABLE_BASKET)

        item, cost = _line(
            "Mixed Vegetables", purchased_kg, "kg", avg_price,
            note="Some home-grown" if sector != "urban" else "",
        )
        item.price = round_int(avg_price)
        return _category([(item, cost)])

    def calculate_dairy(self, family_size: int, diet_type: str) -> CategoryBreakdown:
        if diet_type == "vegan":
            return CategoryBreakdown(items=[], total=0)

        liters = family_size * self._consumption("milk_liters_per_capita")
        return _category([_line("Milk", liters, "liters", self._price("dairy", "milk_liquid"))])

    def calculate_oils_condiments(self, family_size: int) -> CategoryBreakdown:
        tea_grams = _scaled(self.config.tea_grams, family_size)
        tea_packs = math.ceil(tea_grams / self.config.tea_pack_grams)
        spices = family_size * self.config.spice_cost_per_capita

        spice_line = LineItem(
            name="Spices (Mixed)", quantity=1, unit="set",
            price=round_int(spices), cost=round_int(spices),
        )
        return _category([
            _line("Cooking Oil", _scaled(self.config.oil_liters, family_size), "liters",
                  self._price("oils_condiments", "vegetable_oil")),
            _line("Coconuts", _scaled(self.config.coconuts, family_size), "each",
                  self._price("oils_condiments", "coconut")),
            _line("Sugar", _scaled(self.config.sugar_kg, family_size), "kg",
                  self._price("oils_condiments", "sugar")),
            _line("Tea", tea_packs, "100g packs", self._price("oils_condiments", "tea_leaves")),
            (spice_line, spices),
        ])

    def calculate_fruits(self, family_size: int, quintile_number: int) -> CategoryBreakdown:
        fruit_kg = family_size * (self.config.fruit_base_kg + quintile_number)
        avg_price = self._weighted_price("fruits", FRUIT_BASKET)

        item, cost = _line("Mixed Fruits", fruit_kg, "kg", avg_price)
        item.price = round_int(avg_price)
        return _category([(item, cost)])

    def calculate_utilities(self, family_size: int = 1) -> CategoryBreakdown:
        """LPG share for the month; independent of family size."""
        fraction = self.config.lpg_monthly_fraction
        cylinder_price = self._price("utilities", "lpg_cylinder_12_5kg")
        item, cost = _line("LPG Gas (Monthly)", fraction, "cylinder", cylinder_price)
        item.quantity = fraction
        return _category([(item, cost)])

    # =========================================================================
    # REPORT
    # =========================================================================

    def generate_recommendation(self, total_budget: float, monthly_income: float) -> Recommendation:
        """Select the tier for the income share and attach its fixed advice."""
        percentage = total_budget / monthly_income * 100
        thresholds = self.config.tier_thresholds

        if percentage > thresholds["critical"]:
            status = "critical"
        elif percentage > thresholds["warning"]:
            status = "warning"
        elif percentage > thresholds["healthy"]:
            status = "healthy"
        else:
            status = "excellent"

        template, suggestions = RECOMMENDATION_TIERS[status]
        return Recommendation(
            status=status,
            message=template.format(pct=f"{round_half_up(percentage, 1):.1f}"),
            suggestions=list(suggestions),
        )

    def calculate_monthly_budget(
        self,
        family_size: int,
        district: str,
        monthly_income: float,
        diet_type: str = "mixed"
    ) -> BudgetReport:
        """
        Calculate the monthly food budget for a household.

        Parameters
        ----------
        family_size : int
            Number of people, at least 1
        district : str
            Exact district name
        monthly_income : float
            Household income in rupees, positive
        diet_type : str
            Key of the dietary preference table (default: "mixed")

        Returns
        -------
        BudgetReport

        Raises
        ------
        MissingDataError
            The economic dataset is absent or incomplete
        InvalidInputError
            Non-positive size or income, or an unknown diet
        NotFoundError
            The district is not recognized
        """
        ensure_budget_tables(self.data)
        validate_budget_inputs(
            family_size, monthly_income, diet_type, self.data["dietary_preferences"].keys()
        ).raise_for_errors(InvalidInputError)

        district_data = self.reference.district(district)
        sector = district_data.get("sector", self.config.fallback_sector)

        quintile = self.get_income_quintile(monthly_income)
        template = self.get_family_template(family_size)

        breakdown = {
            "staples": self.calculate_staples(family_size, sector, template),
            "proteins": self.calculate_proteins(family_size, diet_type, template),
            "vegetables": self.calculate_vegetables(family_size, sector, template),
            "dairy": self.calculate_dairy(family_size, diet_type),
            "oils_condiments": self.calculate_oils_condiments(family_size),
            "fruits": self.calculate_fruits(family_size, quintile["quintile"]),
            "utilities": self.calculate_utilities(family_size),
        }

        food_total = sum(breakdown[name].total for name in FOOD_CATEGORIES)
        with_utilities = food_total + breakdown["utilities"].total

        totals = BudgetTotals(
            food_only=round_int(food_total),
            with_utilities=round_int(with_utilities),
            per_capita=round_int(with_utilities / family_size),
            percentage_of_income=round_half_up(with_utilities / monthly_income * 100, 1),
        )
        recommendation = self.generate_recommendation(with_utilities, monthly_income)

        logger.info(
            f"Budget for {family_size} in {district_data['name']} ({diet_type}): "
            f"Rs. {totals.with_utilities:,} ({totals.percentage_of_income}% of income, "
            f"{recommendation.status})"
        )

        return BudgetReport(
            family_size=family_size,
            district=district_data["name"],
            sector=sector,
            monthly_income=monthly_income,
            diet_type=diet_type,
            quintile=quintile["name"],
            quintile_number=quintile["quintile"],
            breakdown=breakdown,
            totals=totals,
            recommendation=recommendation,
        )

    # =========================================================================
    # DISTRICT ADVICE
    # =========================================================================

    def get_district_specific_tips(self, district: Dict[str, Any]) -> List[str]:
        tips = list(SECTOR_TIPS.get(district.get("sector"), []))
        if district["name"] in COASTAL_DISTRICTS:
            tips.append(COASTAL_TIP)
        if district["name"] in NORTH_EAST_DISTRICTS:
            tips.append(NORTH_EAST_TIP)
        return tips

    def get_district_recommendation(self, district_name: str) -> DistrictRecommendation:
        """
        Budget range and shopping tips for a district.

        Raises
        ------
        NotFoundError
            The district is not recognized
        """
        ensure_budget_tables(self.data)
        district = self.reference.district(district_name)
        budget = district.get("food_budget", {})
        return DistrictRecommendation(
            district=district["name"],
            median_income=district["median_income"],
            recommended_budget_min=budget.get("min", 0),
            recommended_budget_max=budget.get("max", 0),
            sector=district.get("sector", ""),
            tips=self.get_district_specific_tips(district),
            population=district.get("population"),
        )
