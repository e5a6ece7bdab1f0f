"""
Tests for loading snapshots and overrides and exporting results.
"""

import json
from datetime import date

import pandas as pd
import pytest

from lanka_pantry.exceptions import InvalidInputError, MissingDataError
from lanka_pantry.models.inventory import DietType
from lanka_pantry.services.analytics_engine import BudgetAnalyticsEngine
from lanka_pantry.services.budget_calculator import BudgetCalculator
from lanka_pantry.services.data_loader import HouseholdSnapshot, ReferenceDataLoader
from lanka_pantry.services.need_projector import PredictionPipeline
from lanka_pantry.services.output_generator import OutputGenerator, budget_to_dataframe

SNAPSHOT = {
    "family": {"adult_count": 2, "child_count": 1, "diet_type": "vegetarian"},
    "inventory": [
        {"name": "Rice (Samba)", "quantity": 2, "unit": "kg", "price": 230, "frequency": "d"},
        {"name": "Fresh Milk", "quantity": 1, "unit": "l", "price": 400, "expiry_date": "2025-07-01"},
    ],
    "history": [
        {"date": "2025-06-20", "meal_name": "Kiribath", "meal_type": "breakfast",
         "items": [{"name": "Rice (Samba)", "quantity": 400, "unit": "g"}]},
    ],
    "manual_targets": {"Fresh Milk": 8},
    "as_of": "2025-06-30",
}


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "household.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


class TestLoader:

    def test_load_snapshot(self, snapshot_path):
        snapshot = ReferenceDataLoader().load_snapshot(snapshot_path)

        assert snapshot.family.family_size == 3
        assert snapshot.family.diet_type == DietType.VEGETARIAN
        assert snapshot.inventory[1].expiry_date == date(2025, 7, 1)
        assert snapshot.history[0].items[0].quantity == 400
        assert snapshot.manual_targets == {"Fresh Milk": 8.0}
        assert snapshot.as_of == date(2025, 6, 30)
        assert snapshot.allowed_items is None

    def test_snapshot_round_trip(self, snapshot_path, tmp_path):
        loader = ReferenceDataLoader(tmp_path)
        snapshot = loader.load_snapshot(snapshot_path.name)

        loader.save_snapshot(snapshot, "copy.json")

        assert loader.load_snapshot("copy.json") == snapshot

    def test_missing_file(self, tmp_path):
        with pytest.raises(MissingDataError):
            ReferenceDataLoader(tmp_path).load_snapshot("nope.json")

    @pytest.mark.parametrize("payload", [
        [],
        {"inventory": []},
        {"family": {"adult_count": 0}},
        {"family": {"adult_count": 1}, "manual_targets": {"Eggs": "lots"}},
        {"family": {"adult_count": 1, "diet_type": "keto"}},
    ])
    def test_invalid_snapshots(self, tmp_path, payload):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(InvalidInputError):
            ReferenceDataLoader().load_snapshot(path)

    def test_catalog_from_csv(self, tmp_path):
        path = tmp_path / "catalog.csv"
        pd.DataFrame([
            {"name": "Rice (Samba)", "category": "Rice", "unit": "kg", "price": 240, "frequency": "d", "group": "rice"},
            {"name": "Eggs", "category": "Meats", "unit": "pcs", "price": 50, "frequency": "w", "group": None},
        ]).to_csv(path, index=False)

        reference = ReferenceDataLoader().load_reference(catalog_path=path)

        assert reference.item_names == ["Rice (Samba)", "Eggs"]
        assert reference.catalog_item("Eggs").substitution_group is None
        assert reference.catalog_item("Rice (Samba)").reference_price == 240
        assert reference.district_names()

    def test_catalog_csv_missing_columns(self, tmp_path):
        path = tmp_path / "catalog.csv"
        pd.DataFrame([{"name": "Eggs", "price": 50}]).to_csv(path, index=False)
        with pytest.raises(InvalidInputError):
            ReferenceDataLoader().load_catalog(path)

    def test_incomplete_budget_tables(self, tmp_path):
        path = tmp_path / "budget.json"
        path.write_text(json.dumps({"districts": []}), encoding="utf-8")
        with pytest.raises(MissingDataError):
            ReferenceDataLoader().load_budget_tables(path)

    def test_budget_tables_override(self, tmp_path, reference):
        tables = json.loads(json.dumps(dict(reference.budget_tables)))
        tables["food_prices"]["utilities"]["lpg_cylinder_12_5kg"]["price"] = 4000
        path = tmp_path / "budget.json"
        path.write_text(json.dumps(tables), encoding="utf-8")

        custom = ReferenceDataLoader().load_reference(budget_path=path)
        report = BudgetCalculator(custom).calculate_monthly_budget(4, "Colombo", 100000, "mixed")

        assert report.breakdown["utilities"].total == 2680


class TestOutput:

    def test_export_predictions(self, tmp_path, snapshot_path, reference):
        snapshot = ReferenceDataLoader().load_snapshot(snapshot_path)
        summary = PredictionPipeline().run(
            reference.catalog, snapshot.inventory, snapshot.history, snapshot.family,
            manual_targets=snapshot.manual_targets, as_of=snapshot.as_of,
        )

        exported = OutputGenerator(tmp_path / "out").export_predictions(summary)

        df = pd.read_csv(exported["predictions_csv"])
        assert len(df) == len(summary.records)
        assert "shopping_list_csv" in exported
        with open(exported["summary_json"], encoding="utf-8") as f:
            payload = json.load(f)
        assert payload["total_monthly_need_value"] == summary.total_monthly_need_value

    def test_export_budget_report(self, tmp_path, reference):
        report = BudgetCalculator(reference).calculate_monthly_budget(4, "Colombo", 100000, "mixed")

        exported = OutputGenerator(tmp_path).export_budget_report(report)

        with open(exported["budget_json"], encoding="utf-8") as f:
            assert json.load(f)["totals"]["with_utilities"] == 50685
        lines = pd.read_csv(exported["line_items_csv"])
        assert set(lines["category"]) == set(report.breakdown)
        assert lines["cost"].min() >= 0

    def test_export_complete_report(self, tmp_path, reference):
        report = BudgetAnalyticsEngine(reference).generate_complete_report(4, "Colombo", 100000, "mixed", month=1)

        exported = OutputGenerator(tmp_path).export_complete_report(report)

        with open(exported["complete_report_json"], encoding="utf-8") as f:
            payload = json.load(f)
        assert payload["sufficiency"]["status"] == "critical"
        assert len(payload["predictions"]) == 3
        assert len(payload["saving_strategies"]) == 5

    def test_budget_dataframe_one_row_per_line(self, reference):
        report = BudgetCalculator(reference).calculate_monthly_budget(2, "Kandy", 60000, "vegan")
        df = budget_to_dataframe(report)
        assert len(df) == sum(len(c.items) for c in report.breakdown.values())
        assert "dairy" not in set(df["category"])
