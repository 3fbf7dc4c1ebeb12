"""Stopwatch recording named checkpoints with optional memory snapshots.

A stopwatch measures one timeline: ``start()`` records a ``"start"``
checkpoint, ``checkpoint()`` appends named points, ``finish()`` records
``"end"``. Queries derive durations, diffs and per-name averages from the
recorded sequence.

Lookups by name or id scan from the newest checkpoint backwards, so a
repeated name (or a reused custom id) resolves to its latest occurrence.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Tuple

from ministopwatch.base import BaseStopwatch
from ministopwatch.checkpoint import RESERVED_NAMES, Checkpoint, generate_id
from ministopwatch.errors import (
    AlreadyRunningError,
    MemoryProfilingDisabledError,
    NotRunningError,
    ReservedNameError,
    StillRunningError,
)
from ministopwatch.memory import MemoryProbe, MemorySample, ProcessMemoryProbe
from ministopwatch.render import OutputMode, StopwatchRenderer

logger = logging.getLogger(__name__)


def _scale(seconds: float, in_milliseconds: bool) -> float:
    return seconds * 1000 if in_milliseconds else seconds


def _mean_step(values: List[float]) -> float:
    steps = [b - a for a, b in zip(values, values[1:])]
    return sum(steps) / len(steps)


class Stopwatch(BaseStopwatch):
    """Checkpoint recorder for a single, synchronous timeline.

    Not thread-safe: all calls on one instance must come from one caller in
    sequence. No locking is done.
    """

    def __init__(
        self,
        memory_profiling: bool = False,
        *,
        output_mode: OutputMode = OutputMode.TERMINAL,
        clock: Callable[[], float] = time.perf_counter,
        memory_probe: MemoryProbe | None = None,
        min_col_width: int = 10,
        max_col_width: int = 40,
    ) -> None:
        self._memory_profiling = memory_profiling
        self.output_mode = output_mode
        self.min_col_width = min_col_width
        self.max_col_width = max_col_width
        self._clock = clock
        self._memory_probe: MemoryProbe | None = None
        if memory_profiling:
            self._memory_probe = memory_probe or ProcessMemoryProbe()
        self._checkpoints: List[Checkpoint] = []
        self._running = False

    @property
    def memory_profiling(self) -> bool:
        return self._memory_profiling

    # ------------------------------------------------------------------ #
    # lifecycle
    # ------------------------------------------------------------------ #

    def start(self) -> Stopwatch:
        if self._running:
            raise AlreadyRunningError()
        self._checkpoints = [self._capture("start")]
        self._running = True
        logger.debug("Stopwatch started (memory_profiling=%s)", self._memory_profiling)
        return self

    def checkpoint(self, name: str, id: str | None = None) -> Stopwatch:
        if not self._running:
            raise NotRunningError()
        if name in RESERVED_NAMES:
            raise ReservedNameError(name)
        self._checkpoints.append(self._capture(name, id))
        return self

    def finish(self) -> Stopwatch:
        if not self._running:
            raise NotRunningError()
        self._checkpoints.append(self._capture("end"))
        self._running = False
        logger.debug(
            "Stopwatch finished: %d checkpoints in %.4f s",
            len(self._checkpoints),
            self._checkpoints[-1].time - self._checkpoints[0].time,
        )
        return self

    def reset(self) -> Stopwatch:
        self._checkpoints = []
        self._running = False
        return self

    def is_running(self) -> bool:
        return self._running

    def get_checkpoints(self) -> Tuple[Checkpoint, ...]:
        return tuple(self._checkpoints)

    # ------------------------------------------------------------------ #
    # time queries
    # ------------------------------------------------------------------ #

    def get_diff(self, first: str, second: str, in_milliseconds: bool = False) -> float | None:
        """Return ``time(second) - time(first)``; ``None`` if either is unknown.

        The sign is kept: swapping the arguments negates the result.
        """
        cp1 = self._find(first)
        cp2 = self._find(second)
        if cp1 is None or cp2 is None:
            return None
        return _scale(cp2.time - cp1.time, in_milliseconds)

    def get_time(self, in_milliseconds: bool = False) -> float | None:
        if self._running:
            raise StillRunningError()
        return self.get_diff("start", "end", in_milliseconds)

    def get_elapsed_time(self, in_milliseconds: bool = False) -> float | None:
        if not self._running:
            raise NotRunningError()
        start = self._find("start")
        if start is None:
            return None
        return _scale(self._clock() - start.time, in_milliseconds)

    def get_last_checkpoint_duration(self, in_milliseconds: bool = False) -> float | None:
        if not self._running:
            raise NotRunningError()
        if not self._checkpoints:
            return None
        return _scale(self._clock() - self._checkpoints[-1].time, in_milliseconds)

    def get_average_checkpoint_time(
        self, name: str, in_milliseconds: bool = False
    ) -> float | None:
        """Mean interval between consecutive checkpoints called ``name``.

        Checkpoints with other names recorded in between are ignored.
        Returns ``None`` with fewer than two matches.
        """
        times = [cp.time for cp in self._checkpoints if cp.name == name]
        if len(times) < 2:
            return None
        return _scale(_mean_step(times), in_milliseconds)

    # ------------------------------------------------------------------ #
    # memory queries
    # ------------------------------------------------------------------ #

    def get_memory_diff(self, first: str, second: str) -> int | None:
        self._require_memory()
        cp1 = self._find(first)
        cp2 = self._find(second)
        if cp1 is None or cp2 is None or cp1.memory is None or cp2.memory is None:
            return None
        return cp2.memory - cp1.memory

    def get_total_memory_diff(self) -> int | None:
        self._require_memory()
        if self._running:
            raise StillRunningError()
        return self.get_memory_diff("start", "end")

    def get_last_memory_diff(self) -> int | None:
        self._require_memory()
        if not self._running:
            raise NotRunningError()
        if not self._checkpoints or self._checkpoints[-1].memory is None:
            return None
        return self._sample_memory().current - self._checkpoints[-1].memory

    def get_average_checkpoint_memory_diff(self, name: str) -> float | None:
        self._require_memory()
        usage = [
            cp.memory for cp in self._checkpoints if cp.name == name and cp.memory is not None
        ]
        if len(usage) < 2:
            return None
        return _mean_step(usage)

    def get_current_memory_usage(self) -> int | None:
        """Live process memory minus the memory recorded at ``start``."""
        self._require_memory()
        if not self._running:
            raise NotRunningError()
        start = self._find("start")
        if start is None or start.memory is None:
            return None
        return self._sample_memory().current - start.memory

    # ------------------------------------------------------------------ #
    # rendering
    # ------------------------------------------------------------------ #

    def renderer(self) -> StopwatchRenderer:
        return StopwatchRenderer(
            self, min_col_width=self.min_col_width, max_col_width=self.max_col_width
        )

    def __str__(self) -> str:
        return self.renderer().render(self.output_mode)

    def _repr_html_(self) -> str:
        return self.renderer().render(OutputMode.MARKUP)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(running={self._running}, "
            f"checkpoints={len(self._checkpoints)}, "
            f"memory_profiling={self._memory_profiling})"
        )

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _capture(self, name: str, id: str | None = None) -> Checkpoint:
        if id is None:
            id = generate_id(name)
        if self._memory_probe is None:
            return Checkpoint(name=name, id=id, time=self._clock())
        sample = self._sample_memory()
        return Checkpoint(
            name=name,
            id=id,
            time=self._clock(),
            memory=sample.current,
            memory_peak=sample.peak,
        )

    def _sample_memory(self) -> MemorySample:
        assert self._memory_probe is not None
        return self._memory_probe()

    def _require_memory(self) -> None:
        if not self._memory_profiling:
            raise MemoryProfilingDisabledError()

    def _find(self, identifier: str) -> Checkpoint | None:
        for cp in reversed(self._checkpoints):
            if cp.matches(identifier):
                return cp
        return None
