"""
Lanka Pantry
============
Household pantry predictions and district-aware food budgeting for
Sri Lankan families.

Packages:
- models: Catalog, inventory, prediction and budget data structures
- data: Built-in reference tables and the snapshot store
- services: Prediction, budget, price and forecast engines
- utils: Logging, validation, rounding and lookup tables
"""

__version__ = "1.0.0"

from .config import Config, DEFAULT_CONFIG
from .exceptions import PantryError, NotFoundError, InvalidInputError, MissingDataError

__all__ = [
    '__version__',
    'Config',
    'DEFAULT_CONFIG',
    'PantryError',
    'NotFoundError',
    'InvalidInputError',
    'MissingDataError',
]
