"""Process memory sampling used by memory-profiling stopwatches."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemorySample:
    current: int
    peak: int


MemoryProbe = Callable[[], MemorySample]


def _peak_rss(info) -> int:
    # Windows reports the peak working set directly.
    peak = getattr(info, "peak_wset", None)
    if peak is not None:
        return int(peak)
    try:
        import resource
    except ImportError:  # pragma: no cover - non-Windows platforms ship resource
        return int(info.rss)
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS and kilobytes on Linux.
    return int(max_rss if sys.platform == "darwin" else max_rss * 1024)


class ProcessMemoryProbe:
    """Samples resident set size of the current process via psutil.

    Readings are process-wide; allocations made by other threads between
    two samples show up in the diff as noise.
    """

    def __init__(self, pid: int | None = None) -> None:
        self._process = psutil.Process(pid)

    def __call__(self) -> MemorySample:
        info = self._process.memory_info()
        current = int(info.rss)
        return MemorySample(current=current, peak=max(current, _peak_rss(info)))
