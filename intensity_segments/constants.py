"""
intensity_segments/constants.py
═══════════════════════════════

Shared numeric constants for the intensity map and its validators.
"""

from __future__ import annotations

from typing import Final

# Value of the function left of the first boundary (and everywhere on an
# empty map).
INITIAL_INTENSITY: Final[int] = 0

# Amount that leaves the function unchanged under ``accumulate``.
ZERO_INTENSITY: Final[int] = 0

# Largest integers that survive a round trip through an IEEE-754 double.
MAX_AMOUNT: Final[int] = 2 ** 53 - 1
MIN_AMOUNT: Final[int] = -MAX_AMOUNT

# Compact JSON separators used for the display format ``[[10,1],[30,0]]``.
JSON_SEPARATORS: Final = (",", ":")
