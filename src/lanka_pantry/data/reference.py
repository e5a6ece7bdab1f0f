"""
Reference Data Snapshots
========================
Immutable views over the item catalog and the economic tables.

Design Principles:
- A snapshot never changes after it is handed out
- Updates go through one ReferenceDataStore, which swaps in a new snapshot
- Items are looked up by exact name only
"""

import copy
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..exceptions import InvalidInputError, NotFoundError
from ..models.inventory import CatalogItem
from ..utils.logger import get_logger
from .catalog import CATALOG_ROWS
from .srilanka_budget import SRI_LANKA_BUDGET_DATA

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class ReferenceData:
    """
    Read-only snapshot of the static inputs of every engine.

    Attributes
    ----------
    catalog : Tuple[CatalogItem, ...]
        Catalog in display order
    budget_tables : Mapping[str, Any]
        Economic dataset (districts, quintiles, prices, templates, ...).
        May be empty, in which case budget computations refuse to run.
    version : int
        Incremented by the store on every update
    """
    catalog: Tuple[CatalogItem, ...] = ()
    budget_tables: Mapping[str, Any] = field(default_factory=dict, repr=False)
    version: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'catalog', tuple(self.catalog))
        index = {}
        for item in self.catalog:
            if item.name in index:
                raise InvalidInputError(f"Duplicate catalog item '{item.name}'")
            index[item.name] = item
        object.__setattr__(self, '_index', MappingProxyType(index))
        # Own a private copy so later edits by the caller cannot leak in
        object.__setattr__(
            self, 'budget_tables', MappingProxyType(copy.deepcopy(dict(self.budget_tables)))
        )

    @classmethod
    def default(cls) -> 'ReferenceData':
        """Snapshot of the built-in catalog and 2025 economic dataset."""
        catalog = tuple(CatalogItem.from_dict(row) for row in CATALOG_ROWS)
        return cls(catalog=catalog, budget_tables=SRI_LANKA_BUDGET_DATA)

    @property
    def item_names(self) -> List[str]:
        return [item.name for item in self.catalog]

    def catalog_item(self, name: str) -> Optional[CatalogItem]:
        """Exact-name catalog lookup; None when the item is not listed."""
        return self._index.get(name)

    def has_item(self, name: str) -> bool:
        return name in self._index

    def table(self, name: str, default: Any = None) -> Any:
        return self.budget_tables.get(name, default)

    def district(self, name: str) -> Dict[str, Any]:
        """
        Copy of the district record with this exact name.

        Raises
        ------
        NotFoundError
            When the district is not in the dataset
        """
        for record in self.budget_tables.get("districts", []):
            if record["name"] == name:
                return copy.deepcopy(record)
        raise NotFoundError(f"District '{name}' not recognized")

    def district_names(self) -> List[str]:
        return sorted(d["name"] for d in self.budget_tables.get("districts", []))


class ReferenceDataStore:
    """
    Single-writer holder of the current reference snapshot.

    Every update builds a new ReferenceData; snapshots obtained earlier
    keep their original contents.

    Usage:
        store = ReferenceDataStore()
        before = store.snapshot
        store.update_catalog_price("Rice (Samba)", 245)
        assert before.catalog_item("Rice (Samba)").reference_price == 230
    """

    def __init__(self, initial: Optional[ReferenceData] = None):
        self._snapshot = initial or ReferenceData.default()
        logger.info(
            f"ReferenceDataStore initialized with {len(self._snapshot.catalog)} catalog items"
        )

    @property
    def snapshot(self) -> ReferenceData:
        return self._snapshot

    def _publish(self, catalog: Iterable[CatalogItem] = None,
                 budget_tables: Mapping[str, Any] = None) -> ReferenceData:
        current = self._snapshot
        self._snapshot = ReferenceData(
            catalog=tuple(current.catalog if catalog is None else catalog),
            budget_tables=current.budget_tables if budget_tables is None else budget_tables,
            version=current.version + 1,
        )
        return self._snapshot

    def update_catalog_price(self, name: str, price: float) -> ReferenceData:
        """Publish a snapshot with a new reference price for ``name``."""
        if price < 0:
            raise InvalidInputError(f"Price cannot be negative, got {price}")
        if not self._snapshot.has_item(name):
            raise NotFoundError(f"Catalog item '{name}' not found")

        catalog = [
            replace(item, reference_price=float(price)) if item.name == name else item
            for item in self._snapshot.catalog
        ]
        logger.info(f"Catalog price for '{name}' set to Rs. {price}")
        return self._publish(catalog=catalog)

    def add_catalog_item(self, item: CatalogItem) -> ReferenceData:
        if self._snapshot.has_item(item.name):
            raise InvalidInputError(f"Catalog item '{item.name}' already exists")
        logger.info(f"Catalog item '{item.name}' added")
        return self._publish(catalog=self._snapshot.catalog + (item,))

    def remove_catalog_item(self, name: str) -> ReferenceData:
        if not self._snapshot.has_item(name):
            raise NotFoundError(f"Catalog item '{name}' not found")
        logger.info(f"Catalog item '{name}' removed")
        return self._publish(catalog=[i for i in self._snapshot.catalog if i.name != name])

    def replace_budget_tables(self, tables: Mapping[str, Any]) -> ReferenceData:
        logger.info(f"Economic tables replaced ({len(tables)} sections)")
        return self._publish(budget_tables=tables)
