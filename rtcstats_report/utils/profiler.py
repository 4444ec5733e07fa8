"""
Profiling utilities for rtcstats-report.

Measures how long a normalization run takes and how much memory the process
holds while doing it:
- Wall-clock time (perf_counter)
- RSS before/after the block (psutil, when installed)

Usage example:
    from rtcstats_report.utils.profiler import profile_block

    with profile_block("snapshot.json") as stats:
        report = normalize(snapshot)

    print(stats.duration_seconds, stats.peak_rss_bytes)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

try:
    import psutil
except ImportError:  # pragma: no cover - optional until dependencies are installed
    psutil = None  # type: ignore[assignment]


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    peak_rss_bytes: Optional[int] = field(default=None)


def _current_rss(process: Any) -> Optional[int]:
    if process is None:
        return None
    try:
        return process.memory_info().rss
    except psutil.Error:
        return None


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager to time a block of code and record process RSS.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.

    Notes
    -----
    Normalization is short-lived and allocation-light, so RSS is sampled at the
    block boundaries only; `peak_rss_bytes` is the larger of the two samples.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process() if psutil else None
    rss_before = _current_rss(process)

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts

        rss_after = _current_rss(process)
        samples = [rss for rss in (rss_before, rss_after) if rss is not None]
        stats.peak_rss_bytes = max(samples) if samples else None


__all__ = ["ProfileStats", "profile_block"]
