"""
intensity_segments/perf.py
══════════════════════════

Timing and memory harness for :class:`~intensity_segments.segments.IntensityMap`.

Measurement only: nothing here affects the map's semantics.
"""

from __future__ import annotations

import logging
import time
import tracemalloc
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict

from .config import BenchmarkConfig
from .segments import IntensityMap

_log = logging.getLogger(__name__)


class PerformanceTimer:
    """Wall-clock stopwatch reporting milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        self._end = time.perf_counter()

    @property
    def exec_time(self) -> float:
        return (self._end - self._start) * 1000.0

    def reset(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "PerformanceTimer":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()


@dataclass
class PerformanceResult:
    """Aggregate of one :func:`run_test` call.

    ``exec_time`` and ``average_time`` are in milliseconds; ``mem_usage`` is
    the peak number of bytes traced while the workload ran.
    """
    operations: int
    exec_time: float
    mem_usage: int
    average_time: float

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)


def run_test(func: Callable[[], Any], iterations: int = 100) -> PerformanceResult:
    """Call *func* *iterations* times, timing the whole batch."""
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    was_tracing = tracemalloc.is_tracing()
    if not was_tracing:
        tracemalloc.start()
    tracemalloc.reset_peak()
    baseline, _ = tracemalloc.get_traced_memory()

    timer = PerformanceTimer()
    try:
        with timer:
            for _ in range(iterations):
                func()
        _, peak = tracemalloc.get_traced_memory()
    finally:
        if not was_tracing:
            tracemalloc.stop()

    result = PerformanceResult(
        operations=iterations,
        exec_time=timer.exec_time,
        mem_usage=max(0, peak - baseline),
        average_time=timer.exec_time / iterations,
    )
    _log.debug("run_test: %s", result)
    return result


def stress_workload(config: BenchmarkConfig) -> Callable[[], IntensityMap]:
    """Build the overlapping-add then unit-set workload described by *config*."""

    def workload() -> IntensityMap:
        imap = IntensityMap()
        for i in range(config.add_operations):
            imap.accumulate(i, i + config.span, 1)
        for i in range(config.set_operations):
            imap.assign(i, i + 1, 2)
        return imap

    return workload


def run_benchmark(config: BenchmarkConfig) -> PerformanceResult:
    """Run :func:`stress_workload` ``config.iterations`` times."""
    for warning in config.validate():
        _log.warning("Benchmark config: %s", warning)
    _log.info(
        "Benchmark: %d iterations of %d adds + %d sets",
        config.iterations, config.add_operations, config.set_operations,
    )
    return run_test(stress_workload(config), config.iterations)
