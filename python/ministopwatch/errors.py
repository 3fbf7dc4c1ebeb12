"""Errors raised when a stopwatch or renderer is driven out of order."""

from __future__ import annotations


class StopwatchError(RuntimeError):
    pass


class AlreadyRunningError(StopwatchError):
    def __init__(self) -> None:
        super().__init__("Stopwatch is already running.")


class NotRunningError(StopwatchError):
    def __init__(self) -> None:
        super().__init__("Stopwatch is not running.")


class StillRunningError(StopwatchError):
    def __init__(self) -> None:
        super().__init__("Stopwatch is still running; call finish() first.")


class ReservedNameError(StopwatchError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"Cannot use reserved names 'start' or 'end' for checkpoint (got {name!r})."
        )
        self.name = name


class MemoryProfilingDisabledError(StopwatchError):
    def __init__(self) -> None:
        super().__init__("Memory profiling is disabled for this stopwatch.")


class NotFinishedError(StopwatchError):
    def __init__(self) -> None:
        super().__init__("Stopwatch must be finished before rendering data.")
