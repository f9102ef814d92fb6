"""
Profiling utilities for the insert benchmark.

This module provides a context manager that measures a timed window:
- Wall-clock time (perf_counter)
- CPU usage (psutil)
- Resident memory at the edges of the window (psutil)

Nothing runs alongside the block while it is timed; RSS is read once
before the clock starts and once after it stops.

Usage example:
    from insert_bench.utils.profiler import profile_block

    with profile_block("batched") as stats:
        submit_rows()

    print(stats.elapsed_millis, stats.peak_rss_bytes)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    duration_seconds: float = field(default=0.0)
    peak_rss_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)

    @property
    def elapsed_millis(self) -> int:
        """Whole milliseconds elapsed in the block (truncated, never negative)."""
        return max(0, int(self.duration_seconds * 1000))


def _rss(process: psutil.Process) -> int:
    try:
        return process.memory_info().rss
    except psutil.Error:
        return 0


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.

    Notes
    -----
    ``peak_rss_bytes`` is the larger of the before and after RSS readings.
    Timing is recorded in ``finally`` so a block that raises still gets a
    duration; callers decide whether that duration is meaningful.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    rss_before = _rss(process)

    # CPU percent needs a priming call
    process.cpu_percent(interval=None)

    start = time.perf_counter()
    try:
        yield stats
    finally:
        stats.duration_seconds = time.perf_counter() - start
        stats.cpu_percent = process.cpu_percent(interval=None)
        peak_rss = max(rss_before, _rss(process))
        stats.peak_rss_bytes = peak_rss if peak_rss > 0 else None


__all__ = ["ProfileStats", "profile_block"]
