"""
Data Loading Service
=====================
Loads reference-data overrides and household snapshots from disk.

Design Principles:
- Never silently fail
- Validate the economic dataset before any engine sees it
- Log record counts for every file read

Usage:
    loader = ReferenceDataLoader()
    reference = loader.load_reference(catalog_path="catalog.csv")
    snapshot = loader.load_snapshot("household.json")
"""

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from ..data.catalog import CATALOG_ROWS
from ..data.reference import ReferenceData
from ..data.srilanka_budget import SRI_LANKA_BUDGET_DATA
from ..exceptions import InvalidInputError, MissingDataError
from ..models.inventory import (
    CatalogItem,
    FamilyProfile,
    InventoryItem,
    UsageHistoryEntry,
    _parse_date,
)
from ..utils.logger import get_logger, LogContext, log_dataframe_info
from ..utils.validators import ensure_budget_tables, validate_family_profile

logger = get_logger(__name__)

CATALOG_REQUIRED_COLUMNS = ['name', 'category', 'unit', 'price']


@dataclass
class HouseholdSnapshot:
    """
    Everything the prediction pipeline needs about one household.

    Attributes
    ----------
    family : FamilyProfile
    inventory : List[InventoryItem]
    history : List[UsageHistoryEntry]
    manual_targets : Dict[str, float]
        User-set monthly quantities by item name
    as_of : date, optional
        End of the history window
    allowed_items : List[str], optional
        Allow-list within substitution groups; None defers to the configured one
    """
    family: FamilyProfile
    inventory: List[InventoryItem] = field(default_factory=list)
    history: List[UsageHistoryEntry] = field(default_factory=list)
    manual_targets: Dict[str, float] = field(default_factory=dict)
    as_of: Optional[date] = None
    allowed_items: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "family": {
                "adult_count": self.family.adult_count,
                "child_count": self.family.child_count,
                "target_monthly_budget": self.family.target_monthly_budget,
                "diet_type": self.family.diet_type.value,
            },
            "inventory": [item.to_dict() for item in self.inventory],
            "history": [entry.to_dict() for entry in self.history],
            "manual_targets": dict(self.manual_targets),
            "as_of": self.as_of.isoformat() if self.as_of else None,
            "allowed_items": list(self.allowed_items) if self.allowed_items is not None else None,
        }


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise MissingDataError(f"File not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Invalid JSON in {path}: {exc}")


class ReferenceDataLoader:
    """
    Reads catalog, economic tables and household snapshots.

    Example
    -------
    >>> loader = ReferenceDataLoader("./data")
    >>> reference = loader.load_reference(budget_path="budget_2026.json")
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        self.data_dir = Path(data_dir) if data_dir else Path.cwd()
        logger.info(f"ReferenceDataLoader initialized: data_dir={self.data_dir}")

    def _resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.data_dir / path

    def load_catalog(self, path: Union[str, Path]) -> Tuple[CatalogItem, ...]:
        """
        Load a catalog from CSV or JSON.

        Both formats use the columns name, category, unit, price and,
        optionally, frequency, group, calories.
        """
        path = self._resolve(path)
        with LogContext(logger, f"Loading catalog from {path.name}"):
            if path.suffix.lower() == '.csv':
                if not path.exists():
                    raise MissingDataError(f"File not found: {path}")
                df = pd.read_csv(path, encoding='utf-8')
                log_dataframe_info(logger, path.name, df)
                missing = [c for c in CATALOG_REQUIRED_COLUMNS if c not in df.columns]
                if missing:
                    raise InvalidInputError(f"Catalog {path.name} is missing columns: {missing}")
                df = df.astype(object).where(pd.notnull(df), None)
                rows = df.to_dict(orient='records')
            else:
                rows = _read_json(path)
                if not isinstance(rows, list):
                    raise InvalidInputError(f"Catalog {path.name} must be a JSON array")

            catalog = tuple(CatalogItem.from_dict(row) for row in rows)

        logger.info(f"Loaded {len(catalog)} catalog items")
        return catalog

    def load_budget_tables(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load and validate an economic dataset.

        Raises
        ------
        MissingDataError
            File absent or required sections missing
        """
        path = self._resolve(path)
        tables = _read_json(path)
        if not isinstance(tables, dict):
            raise InvalidInputError(f"Economic dataset {path.name} must be a JSON object")
        ensure_budget_tables(tables)
        logger.info(
            f"Loaded economic dataset {path.name}: {len(tables.get('districts', []))} districts"
        )
        return tables

    def load_reference(
        self,
        catalog_path: Optional[Union[str, Path]] = None,
        budget_path: Optional[Union[str, Path]] = None
    ) -> ReferenceData:
        """Built-in tables, replaced by whichever files are given."""
        if catalog_path:
            catalog = self.load_catalog(catalog_path)
        else:
            catalog = tuple(CatalogItem.from_dict(row) for row in CATALOG_ROWS)
        tables = self.load_budget_tables(budget_path) if budget_path else SRI_LANKA_BUDGET_DATA
        return ReferenceData(catalog=catalog, budget_tables=tables)

    def load_snapshot(self, path: Union[str, Path]) -> HouseholdSnapshot:
        """
        Load a household snapshot.

        Expected keys: family, inventory, history, and optionally
        manual_targets, as_of, allowed_items.
        """
        path = self._resolve(path)
        raw = _read_json(path)
        if not isinstance(raw, dict) or "family" not in raw:
            raise InvalidInputError(f"Snapshot {path.name} must be an object with a 'family' entry")

        family = FamilyProfile.from_dict(raw["family"])
        validate_family_profile(family.adult_count, family.child_count).raise_for_errors(InvalidInputError)

        targets = {}
        for name, value in (raw.get("manual_targets") or {}).items():
            try:
                targets[name] = float(value)
            except (TypeError, ValueError):
                raise InvalidInputError(f"Manual target for '{name}' must be a number, got {value!r}")

        snapshot = HouseholdSnapshot(
            family=family,
            inventory=[InventoryItem.from_dict(row) for row in raw.get("inventory", [])],
            history=[UsageHistoryEntry.from_dict(row) for row in raw.get("history", [])],
            manual_targets=targets,
            as_of=_parse_date(raw["as_of"]) if raw.get("as_of") else None,
            allowed_items=list(raw["allowed_items"]) if raw.get("allowed_items") is not None else None,
        )
        logger.info(
            f"Loaded snapshot {path.name}: {len(snapshot.inventory)} inventory items, "
            f"{len(snapshot.history)} history entries"
        )
        return snapshot

    def save_snapshot(self, snapshot: HouseholdSnapshot, path: Union[str, Path]) -> Path:
        path = self._resolve(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(snapshot.to_dict(), f, indent=2)
        logger.info(f"Saved snapshot to {path}")
        return path
