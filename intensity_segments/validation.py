"""
intensity_segments/validation.py
════════════════════════════════

Stateless input filters for :class:`~intensity_segments.segments.IntensityMap`.

The ``validate_*`` functions never raise; they collect every violation into a
:class:`ValidationResult`.  The ``require_*`` functions wrap them and raise the
matching :mod:`~intensity_segments.errors` exception, so the map can reject an
update before touching its state.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, List

from .errors import (
    InvalidAmountError,
    InvalidPositionError,
    InvalidRangeError,
)


@dataclass
class ValidationResult:
    """Outcome of a validation pass."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
        )

    def __bool__(self) -> bool:
        return self.is_valid


def is_number(value: Any) -> bool:
    """True for real numbers other than ``bool``."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _finite(value: Any) -> bool:
    # Integers never overflow; rationals too large for a float are still finite.
    if isinstance(value, numbers.Integral):
        return True
    try:
        return math.isfinite(value)
    except OverflowError:
        return True


def is_finite_number(value: Any) -> bool:
    return is_number(value) and _finite(value)


def is_integer_value(value: Any) -> bool:
    """True for finite numbers with no fractional part (``3``, ``3.0``)."""
    if not is_finite_number(value):
        return False
    return isinstance(value, numbers.Integral) or value == int(value)


def validate_interval(start: Any, end: Any) -> ValidationResult:
    errors: List[str] = []

    if not is_number(start) or not is_number(end):
        errors.append("from/to must be numbers")
        return ValidationResult(False, errors)

    if not _finite(start) or not _finite(end):
        errors.append("from/to must be finite numbers")
    elif start >= end:
        errors.append("from must be smaller than to")

    return ValidationResult(not errors, errors)


def validate_amount(amount: Any) -> ValidationResult:
    errors: List[str] = []

    if not is_number(amount):
        errors.append("amount must be a number")
        return ValidationResult(False, errors)

    if not _finite(amount):
        errors.append("amount must be a finite number")
    elif not is_integer_value(amount):
        errors.append("amount must be an integer")

    return ValidationResult(not errors, errors)


def validate_position(position: Any) -> ValidationResult:
    errors: List[str] = []

    if not is_number(position):
        errors.append("position must be a number")
        return ValidationResult(False, errors)

    if not _finite(position):
        errors.append("position must be a finite number")

    return ValidationResult(not errors, errors)


def validate_input(start: Any, end: Any, amount: Any) -> ValidationResult:
    """Validate the arguments of a range update in one pass."""
    return validate_interval(start, end).merge(validate_amount(amount))


# ---------------------------------------------------------------------------
# Raising variants
# ---------------------------------------------------------------------------

def require_interval(start: Any, end: Any) -> None:
    result = validate_interval(start, end)
    if not result.is_valid:
        raise InvalidRangeError(result.errors)


def require_amount(amount: Any) -> None:
    result = validate_amount(amount)
    if not result.is_valid:
        raise InvalidAmountError(result.errors)


def require_position(position: Any) -> None:
    result = validate_position(position)
    if not result.is_valid:
        raise InvalidPositionError(result.errors)


def require_input(start: Any, end: Any, amount: Any) -> None:
    """Raise for the first failing argument group (range before amount)."""
    require_interval(start, end)
    require_amount(amount)
