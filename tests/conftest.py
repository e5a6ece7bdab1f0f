"""
Shared fixtures for the Lanka Pantry test suite.
"""

from datetime import date

import pytest

from lanka_pantry.config import Config
from lanka_pantry.data.reference import ReferenceData
from lanka_pantry.models.inventory import (
    CatalogItem,
    ConsumedItem,
    DietType,
    FamilyProfile,
    InventoryItem,
    UsageFrequency,
    UsageHistoryEntry,
)


@pytest.fixture(scope="session")
def reference():
    return ReferenceData.default()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def catalog():
    return (
        CatalogItem("Rice (Samba)", "Rice", "kg", 230, UsageFrequency.DAILY, "rice"),
        CatalogItem("Rice (Nadu)", "Rice", "kg", 220, UsageFrequency.DAILY, "rice"),
        CatalogItem("Potatoes", "Vegetables", "kg", 280, UsageFrequency.WEEKLY),
        CatalogItem("Eggs", "Meats", "pcs", 55, UsageFrequency.WEEKLY),
        CatalogItem("Fresh Milk", "Dairy", "l", 400, UsageFrequency.WEEKLY, "milk_fresh"),
        CatalogItem("Fish (Kelawalla)", "Seafood", "kg", 1800, UsageFrequency.WEEKLY, "fish_premium"),
        CatalogItem("Fish Fingers", "Frozen Food", "pack", 950, UsageFrequency.MONTHLY),
        CatalogItem("Basmati Rice", "Rice", "kg", 650, UsageFrequency.ADHOC, "rice_premium"),
    )


@pytest.fixture
def inventory():
    return [
        InventoryItem("Rice (Samba)", 1.0, "kg", 230, min_threshold=2.0),
        InventoryItem("Rice (Nadu)", 2.5, "kg", 220),
        InventoryItem("Potatoes", 0.5, "kg", 280),
        InventoryItem("Eggs", 10, "pcs", 55, min_threshold=6, expiry_date=date(2025, 7, 2)),
    ]


@pytest.fixture
def history():
    return [
        UsageHistoryEntry(
            date(2025, 6, 20), "Rice and curry", "lunch",
            (ConsumedItem("Potatoes", 500, "g"), ConsumedItem("Eggs", 2, "pcs")),
        ),
        UsageHistoryEntry(
            date(2025, 6, 25), "Potato curry", "dinner",
            (ConsumedItem("Potatoes", 1, "kg"),),
        ),
    ]


@pytest.fixture
def family():
    return FamilyProfile(adult_count=2)


@pytest.fixture
def vegan_family():
    return FamilyProfile(adult_count=2, diet_type=DietType.VEGAN)
