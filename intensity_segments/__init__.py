"""
intensity_segments — Piecewise-Constant Intensity Maps
======================================================

A sparse step function over the whole number line, updated by adding to or
overwriting half-open ranges ``[from, to)``.

Core modules
------------
segments
    ``IntensityMap``: canonical boundary/value representation with
    ``accumulate``, ``assign``, ``value_at`` and ``serialize``.
validation
    Stateless input filters and the ``require_*`` guards used by the map.
errors
    ``IntensityError`` hierarchy and ``ISEG-NNNN`` error codes.
script
    Parsimonious grammar for ``add`` / ``set`` / ``query`` / ``show`` scripts.
perf
    Timing and memory harness for stress workloads.
config
    ``BenchmarkConfig`` with environment overrides.
main
    Command-line interface (``intensity-segments`` / ``python -m``).

Quick start
-----------
>>> from intensity_segments import IntensityMap
>>> imap = IntensityMap()
>>> imap.accumulate(10, 30, 1)
>>> imap.accumulate(20, 40, 1)
>>> imap.serialize()
[[10, 1], [20, 2], [30, 1], [40, 0]]
>>> imap.value_at(25)
2
"""

from __future__ import annotations

import logging
from typing import List

__version__ = "1.0.0"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .errors import (  # noqa: E402
    IntensityError,
    InvalidAmountError,
    InvalidPositionError,
    InvalidRangeError,
    InvalidSnapshotError,
    ScriptError,
    ValidationError,
)
from .segments import IntensityMap  # noqa: E402
from .validation import ValidationResult  # noqa: E402

__all__: List[str] = [
    "__version__",
    "IntensityMap",
    "IntensityError",
    "ValidationError",
    "InvalidRangeError",
    "InvalidAmountError",
    "InvalidPositionError",
    "InvalidSnapshotError",
    "ScriptError",
    "ValidationResult",
]
