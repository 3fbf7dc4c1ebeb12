"""Stopwatch selection helpers driven by explicit arguments + env."""

from __future__ import annotations

import logging
import sys

from ministopwatch.base import BaseStopwatch
from ministopwatch.env import ENV
from ministopwatch.null import NullStopwatch
from ministopwatch.render import OutputMode
from ministopwatch.stopwatch import Stopwatch

logger = logging.getLogger(__name__)


def _notebook_kernel_loaded() -> bool:
    return "ipykernel" in sys.modules


def resolve_output_mode(value: OutputMode | str | None = None) -> OutputMode:
    """Resolve output mode ('terminal' | 'markup' | 'auto')."""

    if isinstance(value, OutputMode):
        return value
    mode = (value or ENV.OUTPUT_MODE.value or "auto").lower()
    if mode not in {"auto", "terminal", "markup"}:
        logger.warning("Unrecognized STOPWATCH_OUTPUT_MODE=%s; defaulting to auto", mode)
        mode = "auto"
    if mode == "terminal":
        return OutputMode.TERMINAL
    if mode == "markup":
        return OutputMode.MARKUP
    return OutputMode.MARKUP if _notebook_kernel_loaded() else OutputMode.TERMINAL


def create_stopwatch(
    enabled: bool | None = None,
    memory_profiling: bool | None = None,
    output_mode: OutputMode | str | None = None,
) -> BaseStopwatch:
    """Instantiate a Stopwatch, or a NullStopwatch when instrumentation is off."""

    if enabled is None:
        enabled = not ENV.DISABLED.value
    if not enabled:
        logger.debug("Instrumentation disabled; using NullStopwatch")
        return NullStopwatch()

    if memory_profiling is None:
        memory_profiling = ENV.MEMORY_PROFILING.value
    min_width = ENV.MIN_COL_WIDTH.value
    max_width = ENV.MAX_COL_WIDTH.value
    if min_width > max_width:
        logger.warning(
            "STOPWATCH_MIN_COL_WIDTH=%d exceeds STOPWATCH_MAX_COL_WIDTH=%d; using %d for both",
            min_width,
            max_width,
            max_width,
        )
        min_width = max_width
    return Stopwatch(
        memory_profiling=memory_profiling,
        output_mode=resolve_output_mode(output_mode),
        min_col_width=min_width,
        max_col_width=max_width,
    )
