"""
Household Data Model
====================
Catalog entries, pantry stock, usage history and the family profile.

Design Principles:
- Records are frozen; a mutation produces a replacement record
- Items are referenced by their exact catalog name, never by partial match
- Stock quantities never go negative
"""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..exceptions import InvalidInputError


class UsageFrequency(Enum):
    """How often an item is bought; controls the monthly multiplier."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ADHOC = "adhoc"

    @classmethod
    def parse(cls, value: Any) -> 'UsageFrequency':
        """Accept an enum member, its value, or the one-letter code (d/w/m/a)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text == member.value or text == member.value[0]:
                return member
        raise InvalidInputError(f"Unknown usage frequency '{value}'")


class SourceMode(Enum):
    """Where a consumption rate came from."""
    HISTORICAL = "historical"
    HEURISTIC = "heuristic"


class DietType(Enum):
    MIXED = "mixed"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    PESCATARIAN = "pescatarian"
    HALAL = "halal"
    BUDDHIST_HINDU = "buddhist_hindu"


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise InvalidInputError(f"Invalid date '{value}', expected YYYY-MM-DD")


@dataclass(frozen=True)
class CatalogItem:
    """
    A purchasable product from the static catalog.

    Attributes
    ----------
    name : str
        Unique key
    category : str
        Catalog category, used for diet exclusion
    unit : str
        kg, g, 100g, pcs, l, ml, pack, can, bundle or loaf
    reference_price : float
        Price per unit in rupees
    usage_frequency : UsageFrequency
        Default buying frequency
    substitution_group : str, optional
        Items sharing a group cover each other's stock needs
    calories_per_unit : float, optional
    """
    name: str
    category: str
    unit: str
    reference_price: float
    usage_frequency: UsageFrequency = UsageFrequency.WEEKLY
    substitution_group: Optional[str] = None
    calories_per_unit: Optional[float] = None

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'CatalogItem':
        try:
            return cls(
                name=str(row["name"]),
                category=str(row["category"]),
                unit=str(row["unit"]),
                reference_price=float(row["price"]),
                usage_frequency=UsageFrequency.parse(row.get("frequency", "weekly")),
                substitution_group=row.get("group") or None,
                calories_per_unit=row.get("calories"),
            )
        except KeyError as exc:
            raise InvalidInputError(f"Catalog row is missing field {exc}: {row}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "price": self.reference_price,
            "frequency": self.usage_frequency.value,
            "group": self.substitution_group,
            "calories": self.calories_per_unit,
        }


@dataclass(frozen=True)
class InventoryItem:
    """
    Current pantry stock for one catalog item.

    ``usage_frequency`` and ``substitution_group`` override the catalog
    defaults when set.
    """
    name: str
    quantity: float
    unit: str
    price: float
    min_threshold: float = 0.0
    usage_frequency: Optional[UsageFrequency] = None
    substitution_group: Optional[str] = None
    expiry_date: Optional[date] = None

    def __post_init__(self):
        if self.quantity < 0:
            object.__setattr__(self, 'quantity', 0.0)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_threshold

    def with_quantity(self, quantity: float) -> 'InventoryItem':
        """Return a copy holding ``quantity``, clamped at zero."""
        return replace(self, quantity=max(0.0, quantity))

    @classmethod
    def from_catalog(cls, item: CatalogItem, quantity: float,
                     price: Optional[float] = None) -> 'InventoryItem':
        return cls(
            name=item.name,
            quantity=quantity,
            unit=item.unit,
            price=item.reference_price if price is None else price,
            usage_frequency=item.usage_frequency,
            substitution_group=item.substitution_group,
        )

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'InventoryItem':
        try:
            frequency = row.get("frequency")
            expiry = row.get("expiry_date")
            return cls(
                name=str(row["name"]),
                quantity=float(row["quantity"]),
                unit=str(row["unit"]),
                price=float(row["price"]),
                min_threshold=float(row.get("min_threshold", 0.0)),
                usage_frequency=UsageFrequency.parse(frequency) if frequency else None,
                substitution_group=row.get("group") or None,
                expiry_date=_parse_date(expiry) if expiry else None,
            )
        except KeyError as exc:
            raise InvalidInputError(f"Inventory row is missing field {exc}: {row}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "price": self.price,
            "min_threshold": self.min_threshold,
            "frequency": self.usage_frequency.value if self.usage_frequency else None,
            "group": self.substitution_group,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
        }


@dataclass(frozen=True)
class ConsumedItem:
    item_name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class UsageHistoryEntry:
    """One cooking event. Entries are append-only and never edited."""
    date: date
    meal_name: str
    meal_type: str
    items: Tuple[ConsumedItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'UsageHistoryEntry':
        try:
            items = tuple(
                ConsumedItem(str(i["name"]), float(i["quantity"]), str(i.get("unit", "")))
                for i in row.get("items", [])
            )
            return cls(
                date=_parse_date(row["date"]),
                meal_name=str(row.get("meal_name", "")),
                meal_type=str(row.get("meal_type", "")),
                items=items,
            )
        except KeyError as exc:
            raise InvalidInputError(f"History entry is missing field {exc}: {row}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "meal_name": self.meal_name,
            "meal_type": self.meal_type,
            "items": [
                {"name": i.item_name, "quantity": i.quantity, "unit": i.unit}
                for i in self.items
            ],
        }


@dataclass(frozen=True)
class FamilyProfile:
    adult_count: int
    child_count: int = 0
    target_monthly_budget: Optional[float] = None
    diet_type: DietType = DietType.MIXED

    @property
    def family_size(self) -> int:
        return self.adult_count + self.child_count

    def with_changes(self, **changes) -> 'FamilyProfile':
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'FamilyProfile':
        diet = row.get("diet_type", DietType.MIXED.value)
        try:
            diet_type = diet if isinstance(diet, DietType) else DietType(diet)
        except ValueError:
            raise InvalidInputError(f"Unknown diet type '{diet}'")
        target = row.get("target_monthly_budget")
        return cls(
            adult_count=int(row.get("adult_count", 1)),
            child_count=int(row.get("child_count", 0)),
            target_monthly_budget=float(target) if target is not None else None,
            diet_type=diet_type,
        )
