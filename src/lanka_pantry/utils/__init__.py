"""
Utils Package
=============
Utility functions for the Lanka Pantry prediction and budget engines.

Modules:
- logger: Centralized logging configuration
- validators: Input and reference-table validation
- constants: Static lookup tables
- numbers: Half-up rounding and unit conversion
"""

from .logger import get_logger, LogContext
from .validators import ValidationResult
from .numbers import round_half_up, round_int, convert_quantity

__all__ = [
    'get_logger',
    'LogContext',
    'ValidationResult',
    'round_half_up',
    'round_int',
    'convert_quantity',
]
