#!/usr/bin/env python3
"""
examples/walkthrough.py
=======================

Step-by-step tour of ``IntensityMap`` using the Python API directly.

Usage::

    python examples/walkthrough.py
"""

from __future__ import annotations

import logging

from intensity_segments import IntensityMap, InvalidRangeError


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    segments = IntensityMap()
    print("Initial:", segments)

    segments.accumulate(10, 11, 1)
    print("After accumulate(10, 11, 1):", segments)
    print("Boundaries:", segments.segments())
    for position in (9, 10, 11, 12):
        print(f"Intensity at {position}:", segments.value_at(position))

    segments.accumulate(5, 20, 2)
    segments.assign(8, 12, -1)
    print("After accumulate(5, 20, 2), assign(8, 12, -1):", segments)

    try:
        segments.accumulate(20, 10, 1)
    except InvalidRangeError as exc:
        print("Rejected:", exc.to_gcc_format())
    print("Unchanged:", segments)


if __name__ == "__main__":
    main()
