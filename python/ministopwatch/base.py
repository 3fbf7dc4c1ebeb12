"""Capability interface shared by the real and the no-op stopwatch."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from ministopwatch.checkpoint import Checkpoint


class BaseStopwatch(ABC):
    """Records named checkpoints along a single timeline.

    Mutating methods return ``self`` so calls can be chained::

        sw.start().checkpoint("load").checkpoint("parse").finish()

    Entering a ``with`` block starts the stopwatch, leaving it finishes the
    stopwatch if it is still running.
    """

    @abstractmethod
    def start(self) -> BaseStopwatch: ...

    @abstractmethod
    def checkpoint(self, name: str, id: str | None = None) -> BaseStopwatch: ...

    @abstractmethod
    def finish(self) -> BaseStopwatch: ...

    @abstractmethod
    def reset(self) -> BaseStopwatch: ...

    @abstractmethod
    def is_running(self) -> bool: ...

    @abstractmethod
    def get_checkpoints(self) -> Tuple[Checkpoint, ...]: ...

    @abstractmethod
    def get_diff(self, first: str, second: str, in_milliseconds: bool = False) -> float | None: ...

    @abstractmethod
    def get_memory_diff(self, first: str, second: str) -> int | None: ...

    @abstractmethod
    def get_time(self, in_milliseconds: bool = False) -> float | None: ...

    @abstractmethod
    def get_total_memory_diff(self) -> int | None: ...

    @abstractmethod
    def get_last_checkpoint_duration(self, in_milliseconds: bool = False) -> float | None: ...

    @abstractmethod
    def get_last_memory_diff(self) -> int | None: ...

    @abstractmethod
    def get_elapsed_time(self, in_milliseconds: bool = False) -> float | None: ...

    @abstractmethod
    def get_average_checkpoint_time(
        self, name: str, in_milliseconds: bool = False
    ) -> float | None: ...

    @abstractmethod
    def get_average_checkpoint_memory_diff(self, name: str) -> float | None: ...

    @abstractmethod
    def get_current_memory_usage(self) -> int | None: ...

    @abstractmethod
    def __str__(self) -> str: ...

    def __enter__(self) -> BaseStopwatch:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.is_running():
            self.finish()
