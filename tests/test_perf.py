# tests/test_perf.py
"""
Tests for the timing / memory harness.
"""

import pytest

from intensity_segments.config import BenchmarkConfig
from intensity_segments.perf import (
    PerformanceResult,
    PerformanceTimer,
    run_benchmark,
    run_test,
    stress_workload,
)


class TestPerformanceTimer:

    def test_exec_time_non_negative(self):
        timer = PerformanceTimer()
        timer.start()
        sum(range(1000))
        timer.stop()
        assert timer.exec_time >= 0

    def test_context_manager(self):
        with PerformanceTimer() as timer:
            sum(range(1000))
        assert timer.exec_time >= 0

    def test_reset(self):
        timer = PerformanceTimer()
        with timer:
            pass
        timer.reset()
        assert timer.exec_time == 0


class TestRunTest:

    def test_calls_function_iterations_times(self):
        calls = []
        result = run_test(lambda: calls.append(1), iterations=7)
        assert len(calls) == 7
        assert result.operations == 7
        assert result.average_time == pytest.approx(result.exec_time / 7)
        assert result.mem_usage >= 0

    def test_rejects_non_positive_iterations(self):
        with pytest.raises(ValueError):
            run_test(lambda: None, iterations=0)

    def test_result_json(self):
        result = PerformanceResult(operations=2, exec_time=4.0, mem_usage=10, average_time=2.0)
        assert result.to_json() == {
            "operations": 2,
            "exec_time": 4.0,
            "mem_usage": 10,
            "average_time": 2.0,
        }


class TestStressWorkload:

    def test_adds_only(self):
        config = BenchmarkConfig(add_operations=3, set_operations=0, span=10)
        imap = stress_workload(config)()
        assert imap.serialize() == [[0, 1], [1, 2], [2, 3], [10, 2], [11, 1], [12, 0]]

    def test_adds_then_sets(self):
        config = BenchmarkConfig(add_operations=3, set_operations=1, span=10)
        imap = stress_workload(config)()
        assert imap.serialize() == [[0, 2], [2, 3], [10, 2], [11, 1], [12, 0]]

    def test_unit_adds_stay_compact(self):
        config = BenchmarkConfig(add_operations=500, set_operations=0, span=1)
        imap = stress_workload(config)()
        assert imap.serialize() == [[0, 1], [500, 0]]

    def test_run_benchmark(self):
        config = BenchmarkConfig(iterations=2, add_operations=20, set_operations=5)
        result = run_benchmark(config)
        assert result.operations == 2
        assert result.exec_time >= 0
