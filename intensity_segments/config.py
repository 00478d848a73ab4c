"""
intensity_segments/config.py
════════════════════════════

Tuning knobs for the benchmark harness.

Defaults describe the standard stress scenario (1000 overlapping adds of
width 10 followed by 100 unit sets, repeated 10 times).  Every field can be
overridden from the environment::

    INTENSITY_BENCH_ITERATIONS=50 intensity-segments bench
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import List, Mapping, Optional

_log = logging.getLogger(__name__)

ENV_PREFIX = "INTENSITY_BENCH_"


@dataclass
class BenchmarkConfig:
    """Parameters of the accumulate/assign stress workload."""
    iterations: int = 10
    add_operations: int = 1000
    set_operations: int = 100
    span: int = 10
    max_exec_ms: Optional[float] = 1000.0

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        if self.iterations <= 0:
            warnings.append("iterations must be positive")
        if self.add_operations < 0:
            warnings.append("add_operations must be non-negative")
        if self.set_operations < 0:
            warnings.append("set_operations must be non-negative")
        if self.span <= 0:
            warnings.append("span must be positive")
        if self.max_exec_ms is not None and self.max_exec_ms <= 0:
            warnings.append("max_exec_ms must be positive")
        return warnings

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BenchmarkConfig":
        """Build a config from ``INTENSITY_BENCH_*`` variables.

        Unparseable values are logged and ignored.
        """
        env = os.environ if environ is None else environ
        config = cls()
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            try:
                value = float(raw) if f.name == "max_exec_ms" else int(raw)
            except ValueError:
                _log.warning("Ignoring %s%s=%r: not a number", ENV_PREFIX, f.name.upper(), raw)
                continue
            setattr(config, f.name, value)
        return config
