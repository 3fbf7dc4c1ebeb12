"""Drop-in stopwatch that records nothing.

Swap it in for :class:`~ministopwatch.stopwatch.Stopwatch` to switch
instrumentation off without touching call sites.
"""

from __future__ import annotations

from typing import Tuple

from ministopwatch.base import BaseStopwatch
from ministopwatch.checkpoint import Checkpoint


class NullStopwatch(BaseStopwatch):
    def start(self) -> NullStopwatch:
        return self

    def checkpoint(self, name: str, id: str | None = None) -> NullStopwatch:
        return self

    def finish(self) -> NullStopwatch:
        return self

    def reset(self) -> NullStopwatch:
        return self

    def is_running(self) -> bool:
        return False

    def get_checkpoints(self) -> Tuple[Checkpoint, ...]:
        return ()

    def get_diff(self, first: str, second: str, in_milliseconds: bool = False) -> float | None:
        return None

    def get_memory_diff(self, first: str, second: str) -> int | None:
        return None

    def get_time(self, in_milliseconds: bool = False) -> float | None:
        return None

    def get_total_memory_diff(self) -> int | None:
        return None

    def get_last_checkpoint_duration(self, in_milliseconds: bool = False) -> float | None:
        return None

    def get_last_memory_diff(self) -> int | None:
        return None

    def get_elapsed_time(self, in_milliseconds: bool = False) -> float | None:
        return None

    def get_average_checkpoint_time(
        self, name: str, in_milliseconds: bool = False
    ) -> float | None:
        return None

    def get_average_checkpoint_memory_diff(self, name: str) -> float | None:
        return None

    def get_current_memory_usage(self) -> int | None:
        return None

    def __str__(self) -> str:
        return ""

    def _repr_html_(self) -> str:
        return ""
