from __future__ import annotations

import sys

import pytest

from ministopwatch import (
    NullStopwatch,
    OutputMode,
    Stopwatch,
    create_stopwatch,
    resolve_output_mode,
)
from ministopwatch.env import ENV, EnvBool, EnvWidth


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "STOPWATCH_DISABLED",
        "STOPWATCH_MEMORY_PROFILING",
        "STOPWATCH_OUTPUT_MODE",
        "STOPWATCH_MIN_COL_WIDTH",
        "STOPWATCH_MAX_COL_WIDTH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delitem(sys.modules, "ipykernel", raising=False)
    ENV.reload()
    yield
    monkeypatch.undo()
    ENV.reload()


def test_env_bool_parsing(monkeypatch):
    var = EnvBool(False)
    monkeypatch.setenv("STOPWATCH_TEST_FLAG", "yes")
    var._init("STOPWATCH_TEST_FLAG")
    assert var.value is True

    monkeypatch.setenv("STOPWATCH_TEST_FLAG", "maybe")
    var._init("STOPWATCH_TEST_FLAG")
    assert var.value is False


def test_env_width_rejects_invalid(monkeypatch, caplog):
    var = EnvWidth(10)
    monkeypatch.setenv("STOPWATCH_TEST_WIDTH", "2")
    var._init("STOPWATCH_TEST_WIDTH")
    assert var.value == 10
    assert "Ignoring STOPWATCH_TEST_WIDTH" in caplog.text


def test_resolve_output_mode_explicit():
    assert resolve_output_mode(OutputMode.MARKUP) is OutputMode.MARKUP
    assert resolve_output_mode("terminal") is OutputMode.TERMINAL
    assert resolve_output_mode("MARKUP") is OutputMode.MARKUP


def test_resolve_output_mode_auto(monkeypatch):
    assert resolve_output_mode() is OutputMode.TERMINAL
    monkeypatch.setitem(sys.modules, "ipykernel", object())
    assert resolve_output_mode("auto") is OutputMode.MARKUP


def test_resolve_output_mode_from_env(monkeypatch):
    monkeypatch.setenv("STOPWATCH_OUTPUT_MODE", "markup")
    ENV.reload()
    assert resolve_output_mode() is OutputMode.MARKUP


def test_resolve_output_mode_unknown_falls_back(caplog):
    assert resolve_output_mode("fancy") is OutputMode.TERMINAL
    assert "Unrecognized STOPWATCH_OUTPUT_MODE=fancy" in caplog.text


def test_create_stopwatch_defaults():
    sw = create_stopwatch()
    assert isinstance(sw, Stopwatch)
    assert sw.memory_profiling is False
    assert sw.output_mode is OutputMode.TERMINAL


def test_create_stopwatch_disabled_by_env(monkeypatch):
    monkeypatch.setenv("STOPWATCH_DISABLED", "1")
    ENV.reload()
    assert isinstance(create_stopwatch(), NullStopwatch)
    assert isinstance(create_stopwatch(enabled=True), Stopwatch)


def test_create_stopwatch_memory_from_env(monkeypatch):
    monkeypatch.setenv("STOPWATCH_MEMORY_PROFILING", "true")
    ENV.reload()
    assert create_stopwatch().memory_profiling is True
    assert create_stopwatch(memory_profiling=False).memory_profiling is False


def test_create_stopwatch_column_widths(monkeypatch):
    monkeypatch.setenv("STOPWATCH_MIN_COL_WIDTH", "50")
    monkeypatch.setenv("STOPWATCH_MAX_COL_WIDTH", "20")
    ENV.reload()
    sw = create_stopwatch()
    assert (sw.min_col_width, sw.max_col_width) == (20, 20)


def test_memory_profiling_with_real_probe():
    sw = create_stopwatch(memory_profiling=True).start().checkpoint("step").finish()
    for cp in sw.get_checkpoints():
        assert cp.memory > 0
        assert cp.memory_peak >= cp.memory
    assert isinstance(sw.get_total_memory_diff(), int)
