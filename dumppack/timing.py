"""Lightweight elapsed-time tracing for CLI phases."""

from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


def time_tracker(label: str = "task", *, log: logging.Logger | None = None) -> Callable[[], float]:
    """Start a monotonic timer; the returned callable logs and returns elapsed ms."""
    target = log or logger
    start = time.perf_counter_ns()

    def stop() -> float:
        elapsed_ms = (time.perf_counter_ns() - start) / 1e6
        target.debug("-> %s took %.2f ms", label, elapsed_ms)
        return elapsed_ms

    return stop
