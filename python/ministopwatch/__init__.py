from .base import BaseStopwatch
from .checkpoint import Checkpoint
from .errors import (
    AlreadyRunningError,
    MemoryProfilingDisabledError,
    NotFinishedError,
    NotRunningError,
    ReservedNameError,
    StillRunningError,
    StopwatchError,
)
from .factory import create_stopwatch, resolve_output_mode
from .formatting import format_bytes, format_time
from .memory import MemorySample, ProcessMemoryProbe
from .null import NullStopwatch
from .render import AverageRow, CheckpointRow, OutputMode, StopwatchRenderer
from .stopwatch import Stopwatch

__all__ = [
    "BaseStopwatch",
    "Stopwatch",
    "NullStopwatch",
    "Checkpoint",
    "MemorySample",
    "ProcessMemoryProbe",
    "OutputMode",
    "StopwatchRenderer",
    "CheckpointRow",
    "AverageRow",
    "format_bytes",
    "format_time",
    "create_stopwatch",
    "resolve_output_mode",
    "StopwatchError",
    "AlreadyRunningError",
    "NotRunningError",
    "StillRunningError",
    "ReservedNameError",
    "MemoryProfilingDisabledError",
    "NotFinishedError",
]
