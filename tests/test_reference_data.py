"""
Tests for reference snapshots and the single-writer store.
"""

import pytest

from lanka_pantry.data.reference import ReferenceData, ReferenceDataStore
from lanka_pantry.exceptions import InvalidInputError, NotFoundError
from lanka_pantry.models.inventory import CatalogItem


def test_default_snapshot(reference):
    assert len(reference.catalog) == 75
    assert reference.has_item("Rice (Samba)")
    assert reference.catalog_item("rice (samba)") is None
    assert len(reference.district_names()) == 25
    assert reference.district("Colombo")["sector"] == "urban"


def test_unknown_district(reference):
    with pytest.raises(NotFoundError):
        reference.district("Atlantis")


def test_duplicate_catalog_names_rejected():
    item = CatalogItem("Eggs", "Meats", "pcs", 55)
    with pytest.raises(InvalidInputError):
        ReferenceData(catalog=(item, item))


def test_snapshot_owns_its_tables():
    tables = {"districts": [{"name": "Colombo"}]}
    snapshot = ReferenceData(budget_tables=tables)
    tables["districts"].append({"name": "Kandy"})

    assert snapshot.district_names() == ["Colombo"]


def test_district_records_are_copies(reference):
    record = reference.district("Colombo")
    record["median_income"] = 1
    record["food_budget"]["min"] = 0

    fresh = reference.district("Colombo")
    assert fresh["median_income"] != 1
    assert fresh["food_budget"]["min"] != 0


def test_snapshots_are_hashable(reference):
    assert hash(reference) == hash(reference)
    assert {reference: "current"}[reference] == "current"


class TestStore:

    def test_price_update_publishes_new_snapshot(self):
        store = ReferenceDataStore()
        before = store.snapshot

        after = store.update_catalog_price("Rice (Samba)", 245)

        assert after.version == before.version + 1
        assert after.catalog_item("Rice (Samba)").reference_price == 245
        assert before.catalog_item("Rice (Samba)").reference_price == 230
        assert store.snapshot is after

    def test_price_update_validation(self):
        store = ReferenceDataStore()
        with pytest.raises(InvalidInputError):
            store.update_catalog_price("Rice (Samba)", -1)
        with pytest.raises(NotFoundError):
            store.update_catalog_price("Saffron", 10)

    def test_add_and_remove_items(self):
        store = ReferenceDataStore()
        item = CatalogItem("Kithul Treacle", "Essentials", "bottle", 1200)

        store.add_catalog_item(item)
        assert store.snapshot.has_item("Kithul Treacle")
        with pytest.raises(InvalidInputError):
            store.add_catalog_item(item)

        store.remove_catalog_item("Kithul Treacle")
        assert not store.snapshot.has_item("Kithul Treacle")
        assert store.snapshot.version == 2

    def test_replace_tables(self, reference):
        store = ReferenceDataStore(reference)
        store.replace_budget_tables({})
        assert dict(store.snapshot.budget_tables) == {}
        assert reference.district_names()
