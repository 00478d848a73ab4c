# tests/conftest.py
"""
Shared fixtures for the intensity_segments test suite.
"""

from typing import Dict, List

import pytest

from intensity_segments import IntensityMap


class ReferenceModel:
    """Brute-force step function over the integer points of a window.

    Every boundary used by the tests lies strictly inside the window, so the
    list of value changes it reports is exactly the canonical serialization.
    """

    def __init__(self, lo: int = -10, hi: int = 110) -> None:
        self.lo = lo
        self.hi = hi
        self.points: Dict[int, int] = {x: 0 for x in range(lo, hi + 1)}

    def accumulate(self, start: int, end: int, amount: int) -> None:
        for x in range(start, end):
            self.points[x] += amount

    def assign(self, start: int, end: int, amount: int) -> None:
        for x in range(start, end):
            self.points[x] = amount

    def value_at(self, x: int) -> int:
        return self.points[x]

    def pairs(self) -> List[List[int]]:
        result: List[List[int]] = []
        previous = 0
        for x in range(self.lo, self.hi + 1):
            if self.points[x] != previous:
                result.append([x, self.points[x]])
                previous = self.points[x]
        return result


@pytest.fixture
def imap():
    """A fresh, empty map."""
    return IntensityMap()


@pytest.fixture
def layered():
    """The map ``[[10, 1], [20, 2], [30, 1], [40, 0]]``."""
    m = IntensityMap()
    m.accumulate(10, 30, 1)
    m.accumulate(20, 40, 1)
    return m


@pytest.fixture
def reference():
    return ReferenceModel()
