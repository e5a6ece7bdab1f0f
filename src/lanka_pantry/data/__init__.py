"""
Data Package
============
Built-in reference tables and the snapshot store that serves them.

Modules:
- catalog: Item catalog with reference prices and frequency tags
- srilanka_budget: 2025 district, quintile, price and seasonal tables
- reference: Immutable ReferenceData snapshots and the single-writer store
"""

from .reference import ReferenceData, ReferenceDataStore
from .catalog import CATALOG_ROWS
from .srilanka_budget import SRI_LANKA_BUDGET_DATA

__all__ = [
    'ReferenceData',
    'ReferenceDataStore',
    'CATALOG_ROWS',
    'SRI_LANKA_BUDGET_DATA',
]
