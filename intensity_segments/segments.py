"""
intensity_segments/segments.py
══════════════════════════════

Sparse step function over the whole number line.

``IntensityMap`` stores an ordered list of boundaries and, for every boundary,
the value the function takes from that boundary up to the next one::

    boundaries:  10    20    30    40
    values:       1     2     1     0

    f(x) = 0  for x < 10
           1  for 10 <= x < 20
           2  for 20 <= x < 30
           1  for 30 <= x < 40
           0  for x >= 40

The representation is kept canonical after every public call: no boundary
repeats the value of its left neighbour, and the first boundary never
carries the implicit leading zero.  Two maps describing the same function
therefore serialize identically.

Examples
--------
>>> imap = IntensityMap()
>>> imap.accumulate(10, 30, 1)
>>> imap.accumulate(20, 40, 1)
>>> imap.serialize()
[[10, 1], [20, 2], [30, 1], [40, 0]]
>>> imap.assign(15, 35, 5)
>>> str(imap)
'[[10,1],[15,5],[35,1],[40,0]]'
>>> imap.value_at(36)
1
"""

from __future__ import annotations

import collections.abc
import json
import logging
from typing import Any, Iterable, Iterator, List, Sequence, Tuple, Union

from sortedcontainers import SortedDict

from .constants import INITIAL_INTENSITY, JSON_SEPARATORS, ZERO_INTENSITY
from .errors import InvalidSnapshotError
from .validation import (
    is_finite_number,
    is_integer_value,
    require_input,
    require_position,
)

_log = logging.getLogger(__name__)

Number = Union[int, float]
Pair = Tuple[Number, int]


def _canonicalize(pairs: Iterable[Pair]) -> List[Pair]:
    """Drop every pair whose value equals its left neighbour's.

    The neighbour of the first pair is the implicit leading zero, so a
    leading zero run vanishes and a trailing zero run collapses to a single
    terminator.
    """
    kept: List[Pair] = []
    previous = INITIAL_INTENSITY
    for position, value in pairs:
        if value == previous:
            continue
        kept.append((position, value))
        previous = value
    return kept


class IntensityMap:
    """Piecewise-constant function with range accumulate / assign updates.

    Breakpoints live in a ``SortedDict`` mapping each boundary to the value
    the function takes from there up to the next boundary.

    Not thread-safe: callers sharing a map between threads must serialize
    every call themselves.
    """

    __slots__ = ("_breakpoints",)

    def __init__(self) -> None:
        self._breakpoints: SortedDict = SortedDict()

    # ---- Constructors ----------------------------------------------------

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[Any]]) -> "IntensityMap":
        """Rebuild a map from ``serialize()`` output.

        Positions must be finite and strictly increasing; values must be
        integers.  The result is canonicalized, so redundant pairs in the
        input are accepted and dropped.

        Raises
        ------
        InvalidSnapshotError
            If any pair is malformed.
        """
        accepted: List[Pair] = []
        errors: List[str] = []
        for index, pair in enumerate(pairs):
            if (
                isinstance(pair, (str, bytes))
                or not isinstance(pair, collections.abc.Sequence)
                or len(pair) != 2
            ):
                errors.append(f"pair {index} must be a [position, value] pair")
                continue
            position, value = pair
            if not is_finite_number(position):
                errors.append(f"pair {index}: position must be a finite number")
            elif accepted and position <= accepted[-1][0]:
                errors.append(f"pair {index}: positions must be strictly increasing")
            if not is_integer_value(value):
                errors.append(f"pair {index}: value must be an integer")
            if not errors:
                accepted.append((position, int(value)))
        if errors:
            raise InvalidSnapshotError(errors)

        imap = cls()
        imap._breakpoints.update(_canonicalize(accepted))
        return imap

    def copy(self) -> "IntensityMap":
        clone = IntensityMap()
        clone._breakpoints = self._breakpoints.copy()
        return clone

    # ---- Search helpers --------------------------------------------------

    def _floor_index(self, position: Number) -> int:
        """Index of the greatest boundary ``<= position``, or -1."""
        return self._breakpoints.bisect_right(position) - 1

    def _lookup(self, position: Number) -> int:
        index = self._floor_index(position)
        if index < 0:
            return INITIAL_INTENSITY
        return self._breakpoints.peekitem(index)[1]

    def _split(self, position: Number) -> None:
        """Make *position* a boundary without changing the function."""
        if position not in self._breakpoints:
            self._breakpoints[position] = self._lookup(position)

    def _merge_left(self, position: Number) -> None:
        """Drop the boundary at *position* if it repeats its left neighbour."""
        index = self._breakpoints.index(position)
        if index == 0:
            previous = INITIAL_INTENSITY
        else:
            previous = self._breakpoints.peekitem(index - 1)[1]
        if self._breakpoints[position] == previous:
            del self._breakpoints[position]

    # ---- Mutations -------------------------------------------------------

    def accumulate(self, start: Number, end: Number, amount: Number) -> None:
        """Add *amount* to the function on ``[start, end)``.

        Raises
        ------
        InvalidRangeError
            If *start*/*end* are not finite numbers or ``start >= end``.
        InvalidAmountError
            If *amount* is not a finite integer.
        """
        require_input(start, end, amount)
        amount = int(amount)
        if amount == ZERO_INTENSITY:
            return

        self._split(start)
        self._split(end)
        for position in self._breakpoints.irange(start, end, inclusive=(True, False)):
            self._breakpoints[position] += amount

        # Interior steps keep their differences, only the two ends can merge.
        self._merge_left(end)
        self._merge_left(start)
        _log.debug(
            "accumulate [%s, %s) += %s -> %d boundaries",
            start, end, amount, len(self._breakpoints),
        )

    def assign(self, start: Number, end: Number, amount: Number) -> None:
        """Set the function to *amount* on ``[start, end)``.

        Boundaries inside the span are discarded; the value the function had
        at *end* is re-attached there so everything outside the span is
        preserved.

        Raises
        ------
        InvalidRangeError
            If *start*/*end* are not finite numbers or ``start >= end``.
        InvalidAmountError
            If *amount* is not a finite integer.
        """
        require_input(start, end, amount)
        amount = int(amount)

        tail_value = self._lookup(end)
        inside = list(self._breakpoints.irange(start, end, inclusive=(True, False)))
        for position in inside:
            del self._breakpoints[position]
        self._breakpoints[start] = amount
        self._breakpoints[end] = tail_value

        self._merge_left(end)
        self._merge_left(start)
        _log.debug(
            "assign [%s, %s) = %s -> %d boundaries",
            start, end, amount, len(self._breakpoints),
        )

    def clear(self) -> None:
        """Reset to the zero function."""
        self._breakpoints.clear()

    # ---- Queries ---------------------------------------------------------

    def value_at(self, position: Number) -> int:
        """Value of the function at *position*.

        Raises
        ------
        InvalidPositionError
            If *position* is not a finite number.
        """
        require_position(position)
        return self._lookup(position)

    def serialize(self) -> List[List[Number]]:
        """Ordered ``[boundary, value]`` pairs exactly as stored."""
        return [[position, value] for position, value in self._breakpoints.items()]

    to_pairs = serialize

    def segments(self) -> List[Pair]:
        return list(self._breakpoints.items())

    def to_json(self) -> str:
        return json.dumps(self.serialize(), separators=JSON_SEPARATORS)

    @property
    def boundaries(self) -> Tuple[Number, ...]:
        return tuple(self._breakpoints.keys())

    @property
    def values(self) -> Tuple[int, ...]:
        return tuple(self._breakpoints.values())

    # ---- Dunder protocol -------------------------------------------------

    def __len__(self) -> int:
        return len(self._breakpoints)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._breakpoints.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntensityMap):
            return NotImplemented
        return list(self._breakpoints.items()) == list(other._breakpoints.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"IntensityMap({self.serialize()!r})"

    def __str__(self) -> str:
        return self.to_json()

    # Short names used by the operation scripts.
    add = accumulate
    set = assign
