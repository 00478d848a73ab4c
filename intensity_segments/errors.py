# intensity_segments/errors.py
"""
Intensity Map Error Types

Exception hierarchy and structured error codes for the intensity map, its
input validators and the operation-script front-end.

Error Hierarchy:
────────────────
    IntensityError (base)
    ├── ValidationError        - rejected input, raised before any mutation
    │   ├── InvalidRangeError    - from/to not finite, or from >= to
    │   ├── InvalidAmountError   - amount not finite
    │   └── InvalidPositionError - query position not finite
    └── ScriptError            - operation-script syntax errors

Error Codes:
────────────
Each error carries a code of the form ISEG-NNNN:
  - 1000-1999: Validation errors
  - 2000-2999: Script errors
  - 9000-9999: Internal errors

Example Usage:
──────────────
    from intensity_segments.errors import InvalidRangeError

    try:
        imap.accumulate(30, 10, 1)
    except InvalidRangeError as exc:
        print(exc.to_gcc_format())
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Dict, List, Optional, Sequence


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorCategory(Enum):
    """Broad classification of what went wrong."""

    INVALID_RANGE = "invalid_range"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_POSITION = "invalid_position"
    INVALID_SNAPSHOT = "invalid_snapshot"
    SYNTAX = "syntax"
    INTERNAL = "internal"


class ErrorCode:
    """
    Structured error code rendered as ``PREFIX-NNNN``.

    Codes compare and hash by their rendered form so they can be used as
    dictionary keys in reports.
    """

    __slots__ = ("prefix", "number", "category")

    def __init__(self, prefix: str, number: int, category: ErrorCategory) -> None:
        self.prefix = prefix
        self.number = number
        self.category = category

    @property
    def code(self) -> str:
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.category.name})"

    def __hash__(self) -> int:
        return hash(self.code)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other
        return NotImplemented


class IntensityErrorCodes:
    """Predefined error codes."""

    # VALIDATION (1000-1999)
    INVALID_RANGE = ErrorCode("ISEG", 1000, ErrorCategory.INVALID_RANGE)
    INVALID_AMOUNT = ErrorCode("ISEG", 1001, ErrorCategory.INVALID_AMOUNT)
    INVALID_POSITION = ErrorCode("ISEG", 1002, ErrorCategory.INVALID_POSITION)
    INVALID_SNAPSHOT = ErrorCode("ISEG", 1003, ErrorCategory.INVALID_SNAPSHOT)

    # SCRIPT (2000-2999)
    SCRIPT_SYNTAX = ErrorCode("ISEG", 2000, ErrorCategory.SYNTAX)
    UNKNOWN_COMMAND = ErrorCode("ISEG", 2001, ErrorCategory.SYNTAX)
    WRONG_ARITY = ErrorCode("ISEG", 2002, ErrorCategory.SYNTAX)

    # INTERNAL (9000-9999)
    INTERNAL_ERROR = ErrorCode("ISEG", 9000, ErrorCategory.INTERNAL)


# ═══════════════════════════════════════════════════════════════════════════════
# SOURCE LOCATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SourceSpan:
    """Location inside an operation script (1-based line and column)."""

    line: int = 0
    column: int = 0
    source: str = "<script>"

    @classmethod
    def from_offset(cls, text: str, offset: int, source: str = "<script>") -> "SourceSpan":
        """Convert a character offset into *text* to a line/column span."""
        offset = max(0, min(offset, len(text)))
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return cls(line=line, column=column, source=source)

    def __str__(self) -> str:
        if self.line <= 0:
            return self.source
        return f"{self.source}:{self.line}:{self.column}"


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class IntensityError(Exception):
    """
    Base exception for all intensity map errors.

    Carries a structured :class:`ErrorCode` and an optional hint so the CLI
    can render it in either gcc style or JSON.
    """

    default_code: ErrorCode = IntensityErrorCodes.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.span = span
        self.hint = hint

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "code": self.code.code,
            "category": self.code.category.value,
            "message": self.message,
        }
        if self.span is not None:
            data["line"] = self.span.line
            data["column"] = self.span.column
        if self.hint:
            data["hint"] = self.hint
        return data

    def to_gcc_format(self) -> str:
        """One-line ``location: error: message [CODE]`` rendering."""
        location = str(self.span) if self.span is not None else "intensity-segments"
        text = f"{location}: error: {self.message} [{self.code}]"
        if self.hint:
            text += f"\n  hint: {self.hint}"
        return text

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ValidationError(IntensityError, ValueError):
    """Input rejected before any state change."""

    def __init__(self, errors: Sequence[str], code: Optional[ErrorCode] = None) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("Invalid input: " + ", ".join(self.errors), code=code)


class InvalidRangeError(ValidationError):
    """``from``/``to`` are not finite numbers, or ``from >= to``."""

    default_code = IntensityErrorCodes.INVALID_RANGE


class InvalidAmountError(ValidationError):
    """``amount`` is not a finite number."""

    default_code = IntensityErrorCodes.INVALID_AMOUNT


class InvalidPositionError(ValidationError):
    """A query position is not a finite number."""

    default_code = IntensityErrorCodes.INVALID_POSITION


class InvalidSnapshotError(ValidationError):
    """Serialized pairs could not be loaded back into a map."""

    default_code = IntensityErrorCodes.INVALID_SNAPSHOT


class ScriptError(IntensityError):
    """Operation script could not be parsed."""

    default_code = IntensityErrorCodes.SCRIPT_SYNTAX
