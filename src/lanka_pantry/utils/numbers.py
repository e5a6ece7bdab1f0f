"""
Numeric Helpers
===============
Rounding and unit conversion shared by the engines.

Currency figures are rounded half-up (0.5 always rounds away from zero for
positive values), not with Python's banker's rounding, so that a subtotal of
9420.5 rupees is reported as 9421.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

# Conversion factors into a base unit per dimension
_MASS = {'g': 1.0, 'kg': 1000.0, '100g': 100.0}
_VOLUME = {'ml': 1.0, 'l': 1000.0}
_KITCHEN_MEASURES = {'tbsp': 15.0, 'tsp': 5.0, 'cup': 240.0}


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round a number half-up to a fixed number of decimal places.

    Parameters
    ----------
    value : float
        Number to round
    digits : int
        Decimal places to keep (default: 0)

    Returns
    -------
    float
        Rounded value. With ``digits == 0`` the result is still a float;
        use :func:`round_int` for an integer.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    """Round half-up to the nearest integer."""
    return int(round_half_up(value, 0))


def convert_quantity(quantity: float, from_unit: str, to_unit: str) -> Optional[float]:
    """
    Convert a quantity between compatible units.

    Mass units (g, kg, 100g) convert among themselves, volume units (ml, l)
    among themselves, and the kitchen measures tbsp/tsp/cup are treated as
    grams or millilitres. Identical units always convert 1:1.

    Returns
    -------
    float or None
        Converted quantity, or None when the units are incompatible.
    """
    source = (from_unit or '').strip().lower()
    target = (to_unit or '').strip().lower()

    if source == target:
        return quantity

    if source in _KITCHEN_MEASURES:
        base = quantity * _KITCHEN_MEASURES[source]
        if target in _MASS:
            return base / _MASS[target]
        if target in _VOLUME:
            return base / _VOLUME[target]
        return None

    for table in (_MASS, _VOLUME):
        if source in table and target in table:
            return quantity * table[source] / table[target]

    return None
