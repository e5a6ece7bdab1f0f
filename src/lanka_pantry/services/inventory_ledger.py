"""
Inventory Ledger Service
========================
Pantry mutations that feed the consumption estimator: logging meals,
cooking recipes, recording purchases and removing items.

Design Principles:
- Inputs are never modified; every operation returns new collections
- Stock is clamped at zero on deduction
- History is append-only; one entry per meal
"""

from dataclasses import replace
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from ..exceptions import InvalidInputError, NotFoundError
from ..models.inventory import CatalogItem, ConsumedItem, InventoryItem, UsageHistoryEntry
from ..utils.logger import get_logger
from ..utils.numbers import convert_quantity

logger = get_logger(__name__)

LedgerState = Tuple[List[InventoryItem], List[UsageHistoryEntry]]


class InventoryLedger:
    """
    Applies household actions to an inventory/history snapshot.

    Usage
    -----
    >>> ledger = InventoryLedger()
    >>> inventory, history = ledger.log_meal(
    ...     inventory, history, "Rice and curry", "lunch", date(2025, 6, 1),
    ...     [ConsumedItem("Rice (Samba)", 500, "g")])
    """

    def __init__(self):
        logger.info("InventoryLedger initialized")

    @staticmethod
    def _find(inventory: Sequence[InventoryItem], name: str) -> Optional[int]:
        for index, item in enumerate(inventory):
            if item.name == name:
                return index
        return None

    def log_meal(
        self,
        inventory: Sequence[InventoryItem],
        history: Sequence[UsageHistoryEntry],
        meal_name: str,
        meal_type: str,
        meal_date: date,
        items: Sequence[ConsumedItem]
    ) -> LedgerState:
        """
        Deduct a meal's ingredients and append it to the history.

        Quantities are converted into each inventory item's unit. Ingredients
        not held in the inventory are still recorded in the history.

        Raises
        ------
        InvalidInputError
            The meal has no name or no ingredient with a positive quantity
        """
        if not meal_name:
            raise InvalidInputError("Meal name is required")
        used = [i for i in items if i.quantity > 0]
        if not used:
            raise InvalidInputError("Add at least one ingredient with a positive quantity")

        updated = list(inventory)
        for consumed in used:
            index = self._find(updated, consumed.item_name)
            if index is None:
                continue
            stock = updated[index]
            deduction = convert_quantity(consumed.quantity, consumed.unit or stock.unit, stock.unit)
            if deduction is None:
                logger.warning(
                    f"Cannot deduct {consumed.quantity} {consumed.unit} from '{stock.name}' "
                    f"held in {stock.unit}; stock unchanged"
                )
                continue
            updated[index] = stock.with_quantity(stock.quantity - deduction)
            if updated[index].quantity == 0 and stock.quantity < deduction:
                logger.warning(f"'{stock.name}' ran out while logging '{meal_name}'")

        entry = UsageHistoryEntry(
            date=meal_date,
            meal_name=meal_name,
            meal_type=meal_type,
            items=tuple(used),
        )
        logger.info(f"Logged meal '{meal_name}' on {meal_date} with {len(used)} ingredients")
        return updated, list(history) + [entry]

    def cook_recipe(
        self,
        inventory: Sequence[InventoryItem],
        history: Sequence[UsageHistoryEntry],
        recipe_name: str,
        ingredients: Sequence[ConsumedItem],
        servings: float,
        meal_date: date,
        meal_type: str = "meal"
    ) -> LedgerState:
        """Scale a recipe by ``servings`` and log it as a meal."""
        if servings <= 0:
            raise InvalidInputError(f"Servings must be positive, got {servings}")
        scaled = [
            ConsumedItem(i.item_name, i.quantity * servings, i.unit)
            for i in ingredients
        ]
        return self.log_meal(inventory, history, recipe_name, meal_type, meal_date, scaled)

    def record_purchase(
        self,
        inventory: Sequence[InventoryItem],
        catalog_item: CatalogItem,
        quantity: float,
        price: Optional[float] = None,
        unit: Optional[str] = None
    ) -> List[InventoryItem]:
        """
        Add bought stock, creating the inventory item on first purchase.

        Parameters
        ----------
        quantity : float
            Amount bought, in ``unit`` (default: the item's own unit)
        price : float, optional
            Price paid per unit; replaces the stored price when given
        """
        if quantity <= 0:
            raise InvalidInputError(f"Purchase quantity must be positive, got {quantity}")
        if price is not None and price < 0:
            raise InvalidInputError(f"Price cannot be negative, got {price}")

        updated = list(inventory)
        index = self._find(updated, catalog_item.name)

        if index is None:
            target_unit = catalog_item.unit
            amount = convert_quantity(quantity, unit or target_unit, target_unit)
            if amount is None:
                raise InvalidInputError(f"Cannot record {unit} for '{catalog_item.name}' sold in {target_unit}")
            updated.append(InventoryItem.from_catalog(catalog_item, amount, price))
            logger.info(f"New inventory item '{catalog_item.name}': {amount:g} {target_unit}")
            return updated

        stock = updated[index]
        amount = convert_quantity(quantity, unit or stock.unit, stock.unit)
        if amount is None:
            raise InvalidInputError(f"Cannot record {unit} for '{stock.name}' held in {stock.unit}")
        new_item = stock.with_quantity(stock.quantity + amount)
        if price is not None:
            new_item = replace(new_item, price=float(price))
        updated[index] = new_item
        logger.info(f"Restocked '{stock.name}': {stock.quantity:g} -> {new_item.quantity:g} {stock.unit}")
        return updated

    def remove_item(self, inventory: Sequence[InventoryItem], name: str) -> List[InventoryItem]:
        """Explicit user removal; history entries for the item are kept."""
        index = self._find(inventory, name)
        if index is None:
            raise NotFoundError(f"Inventory item '{name}' not found")
        logger.info(f"Removed '{name}' from inventory")
        return [item for i, item in enumerate(inventory) if i != index]

    @staticmethod
    def low_stock_items(inventory: Sequence[InventoryItem]) -> List[InventoryItem]:
        return [item for item in inventory if item.is_low_stock]

    @staticmethod
    def expiring_items(
        inventory: Sequence[InventoryItem],
        as_of: date,
        days: int = 3
    ) -> List[InventoryItem]:
        """Items expiring within ``days`` of ``as_of`` (already expired included), soonest first."""
        cutoff = as_of + timedelta(days=days)
        expiring = [
            item for item in inventory
            if item.expiry_date is not None and item.expiry_date <= cutoff
        ]
        return sorted(expiring, key=lambda item: item.expiry_date)
