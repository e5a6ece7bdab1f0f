"""
Error Taxonomy
==============
Exceptions raised by the prediction and budget engines.

All failures are synchronous and never retried: they describe bad input or
bad reference data, not transient faults.
"""


class PantryError(Exception):
    """Base class for every error raised by Lanka Pantry."""


class NotFoundError(PantryError, LookupError):
    """A referenced district or table key does not exist in the reference data."""


class InvalidInputError(PantryError, ValueError):
    """Caller supplied a non-positive family size or income, or an unknown diet."""


class MissingDataError(PantryError):
    """
    Static reference tables are absent or incomplete.

    Raised instead of producing a zero-filled report, so a broken dataset is
    never confused with a legitimately zero-cost category.
    """
