from __future__ import annotations

import pytest

from ministopwatch import MemorySample, Stopwatch


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMemory:
    def __init__(self, current: int = 1024 * 1024) -> None:
        self.current = current
        self.peak = current

    def __call__(self) -> MemorySample:
        return MemorySample(current=self.current, peak=self.peak)

    def grow(self, num_bytes: int) -> None:
        self.current += num_bytes
        self.peak = max(self.peak, self.current)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory() -> FakeMemory:
    return FakeMemory()


@pytest.fixture
def stopwatch(clock: FakeClock) -> Stopwatch:
    return Stopwatch(clock=clock)


@pytest.fixture
def memory_stopwatch(clock: FakeClock, memory: FakeMemory) -> Stopwatch:
    return Stopwatch(memory_profiling=True, clock=clock, memory_probe=memory)
