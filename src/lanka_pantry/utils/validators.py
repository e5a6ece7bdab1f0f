"""
Input Validation Utilities
==========================
Up-front checks for caller input and static reference tables.

Design Principles:
- Never silently fail - always log issues
- Return structured validation results
- Support partial validation (warn but continue)
- Provide actionable error messages
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type

from ..exceptions import InvalidInputError, MissingDataError, PantryError
from .constants import REQUIRED_BUDGET_SECTIONS
from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """
    Structured result of a validation operation.

    Attributes
    ----------
    is_valid : bool
        Overall validation status
    errors : List[str]
        Critical issues that prevent processing
    warnings : List[str]
        Non-critical issues to be aware of
    info : Dict[str, Any]
        Additional validation metadata
    """
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    def merge(self, other: 'ValidationResult') -> None:
        """Fold another result into this one."""
        for message in other.errors:
            self.add_error(message)
        self.warnings.extend(other.warnings)
        self.info.update(other.info)

    def raise_for_errors(self, exc_type: Type[PantryError] = InvalidInputError) -> None:
        """
        Log warnings and raise ``exc_type`` when any error was recorded.

        Parameters
        ----------
        exc_type : type
            Exception class raised with all error messages joined
        """
        for message in self.warnings:
            logger.warning(message)
        if not self.is_valid:
            message = "; ".join(self.errors)
            logger.error(f"Validation failed: {message}")
            raise exc_type(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info
        }


def validate_budget_inputs(
    family_size: Any,
    monthly_income: Any,
    diet_type: str,
    known_diets: Iterable[str]
) -> ValidationResult:
    """
    Check the scalar inputs of a budget calculation.

    Parameters
    ----------
    family_size : int
        Number of household members, must be >= 1
    monthly_income : float
        Household income in rupees, must be > 0
    diet_type : str
        Diet key, must be one of ``known_diets``
    known_diets : iterable of str
        Diet keys present in the reference tables

    Returns
    -------
    ValidationResult
    """
    result = ValidationResult()

    if isinstance(family_size, bool) or not isinstance(family_size, int):
        result.add_error(f"Family size must be a whole number, got {family_size!r}")
    elif family_size < 1:
        result.add_error(f"Family size must be at least 1, got {family_size}")

    if isinstance(monthly_income, bool) or not isinstance(monthly_income, (int, float)):
        result.add_error(f"Monthly income must be a number, got {monthly_income!r}")
    elif monthly_income <= 0:
        result.add_error(f"Monthly income must be positive, got {monthly_income}")

    diets = list(known_diets)
    if diet_type not in diets:
        result.add_error(f"Unknown diet type '{diet_type}'. Expected one of: {diets}")

    result.info["family_size"] = family_size
    result.info["diet_type"] = diet_type
    return result


def validate_family_profile(adult_count: Any, child_count: Any) -> ValidationResult:
    """Household must have at least one member and no negative counts."""
    result = ValidationResult()

    for label, value in (("adult_count", adult_count), ("child_count", child_count)):
        if isinstance(value, bool) or not isinstance(value, int):
            result.add_error(f"{label} must be a whole number, got {value!r}")
        elif value < 0:
            result.add_error(f"{label} cannot be negative, got {value}")

    if result.is_valid and adult_count + child_count < 1:
        result.add_error("Household must have at least one member")

    return result


def validate_budget_tables(tables: Optional[Mapping[str, Any]]) -> ValidationResult:
    """
    Check that the economic dataset carries every section the engines read.

    Empty sections count as missing.
    """
    result = ValidationResult()

    if not tables:
        result.add_error("Economic reference dataset is not loaded")
        return result

    missing = [s for s in REQUIRED_BUDGET_SECTIONS if not tables.get(s)]
    if missing:
        result.add_error(f"Economic reference dataset is missing sections: {missing}")

    result.info["sections"] = sorted(tables.keys())
    return result


def ensure_budget_tables(tables: Optional[Mapping[str, Any]]) -> None:
    """Raise :class:`MissingDataError` unless the dataset is complete."""
    validate_budget_tables(tables).raise_for_errors(MissingDataError)
