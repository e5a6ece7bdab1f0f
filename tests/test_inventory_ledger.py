"""
Tests for meal logging, recipes and purchases.
"""

from datetime import date

import pytest

from lanka_pantry.exceptions import InvalidInputError, NotFoundError
from lanka_pantry.models.inventory import CatalogItem, ConsumedItem, InventoryItem, UsageFrequency
from lanka_pantry.services.inventory_ledger import InventoryLedger

MEAL_DAY = date(2025, 6, 28)


@pytest.fixture
def ledger():
    return InventoryLedger()


def _by_name(inventory):
    return {item.name: item for item in inventory}


def test_log_meal_deducts_in_inventory_unit(ledger, inventory, history):
    new_inventory, new_history = ledger.log_meal(
        inventory, history, "Rice and curry", "lunch", MEAL_DAY,
        [ConsumedItem("Rice (Samba)", 500, "g"), ConsumedItem("Eggs", 2, "pcs")],
    )

    stock = _by_name(new_inventory)
    assert stock["Rice (Samba)"].quantity == pytest.approx(0.5)
    assert stock["Eggs"].quantity == 8
    assert len(new_history) == len(history) + 1
    assert new_history[-1].meal_name == "Rice and curry"
    assert new_history[-1].date == MEAL_DAY


def test_log_meal_leaves_inputs_untouched(ledger, inventory, history):
    ledger.log_meal(inventory, history, "Omelette", "breakfast", MEAL_DAY, [ConsumedItem("Eggs", 3, "pcs")])

    assert _by_name(inventory)["Eggs"].quantity == 10
    assert len(history) == 2


def test_stock_is_clamped_at_zero(ledger, inventory, history):
    new_inventory, _ = ledger.log_meal(
        inventory, history, "Feast", "dinner", MEAL_DAY, [ConsumedItem("Eggs", 25, "pcs")]
    )
    assert _by_name(new_inventory)["Eggs"].quantity == 0


def test_items_not_in_stock_are_still_recorded(ledger, inventory, history):
    new_inventory, new_history = ledger.log_meal(
        inventory, history, "Kiribath", "breakfast", MEAL_DAY, [ConsumedItem("Coconut", 1, "pcs")]
    )

    assert len(new_inventory) == len(inventory)
    assert new_history[-1].items[0].item_name == "Coconut"


def test_incompatible_unit_leaves_stock_unchanged(ledger, inventory, history):
    new_inventory, _ = ledger.log_meal(
        inventory, history, "Curry", "lunch", MEAL_DAY, [ConsumedItem("Potatoes", 2, "pcs")]
    )
    assert _by_name(new_inventory)["Potatoes"].quantity == 0.5


@pytest.mark.parametrize("name, items", [
    ("Lunch", []),
    ("Lunch", [ConsumedItem("Eggs", 0, "pcs")]),
    ("", [ConsumedItem("Eggs", 1, "pcs")]),
])
def test_log_meal_rejects_empty_meals(ledger, inventory, history, name, items):
    with pytest.raises(InvalidInputError):
        ledger.log_meal(inventory, history, name, "lunch", MEAL_DAY, items)


def test_cook_recipe_scales_servings(ledger, inventory, history):
    ingredients = [ConsumedItem("Rice (Nadu)", 250, "g")]

    new_inventory, new_history = ledger.cook_recipe(
        inventory, history, "Fried rice", ingredients, servings=4, meal_date=MEAL_DAY
    )

    assert _by_name(new_inventory)["Rice (Nadu)"].quantity == pytest.approx(1.5)
    assert new_history[-1].items[0].quantity == 1000


def test_cook_recipe_rejects_zero_servings(ledger, inventory, history):
    with pytest.raises(InvalidInputError):
        ledger.cook_recipe(inventory, history, "Fried rice", [ConsumedItem("Eggs", 1, "pcs")], 0, MEAL_DAY)


class TestPurchases:

    def test_restock_existing_item(self, ledger, inventory):
        item = CatalogItem("Rice (Samba)", "Rice", "kg", 230, UsageFrequency.DAILY, "rice")

        updated = ledger.record_purchase(inventory, item, 5, price=245)

        rice = _by_name(updated)["Rice (Samba)"]
        assert rice.quantity == 6.0
        assert rice.price == 245.0

    def test_first_purchase_creates_item(self, ledger, inventory):
        item = CatalogItem("Fresh Milk", "Dairy", "l", 400, UsageFrequency.WEEKLY, "milk_fresh")

        updated = ledger.record_purchase(inventory, item, 500, unit="ml")

        milk = _by_name(updated)["Fresh Milk"]
        assert milk.quantity == 0.5
        assert milk.price == 400
        assert milk.substitution_group == "milk_fresh"

    @pytest.mark.parametrize("quantity, price", [(0, None), (-1, None), (1, -10)])
    def test_invalid_purchase(self, ledger, inventory, quantity, price):
        item = CatalogItem("Eggs", "Meats", "pcs", 55)
        with pytest.raises(InvalidInputError):
            ledger.record_purchase(inventory, item, quantity, price=price)

    def test_incompatible_purchase_unit(self, ledger, inventory):
        item = CatalogItem("Eggs", "Meats", "pcs", 55)
        with pytest.raises(InvalidInputError):
            ledger.record_purchase(inventory, item, 1, unit="kg")


def test_remove_item(ledger, inventory):
    updated = ledger.remove_item(inventory, "Potatoes")
    assert "Potatoes" not in _by_name(updated)

    with pytest.raises(NotFoundError):
        ledger.remove_item(updated, "Potatoes")


def test_low_stock_and_expiring(ledger, inventory):
    low = [item.name for item in ledger.low_stock_items(inventory)]
    assert low == ["Rice (Samba)"]

    expiring = ledger.expiring_items(inventory, as_of=date(2025, 6, 30), days=3)
    assert [item.name for item in expiring] == ["Eggs"]
    assert ledger.expiring_items(inventory, as_of=date(2025, 6, 20), days=3) == []


def test_negative_stock_is_clamped_on_creation():
    assert InventoryItem("Eggs", -4, "pcs", 55).quantity == 0
