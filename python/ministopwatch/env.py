from __future__ import annotations

import logging
import os
from functools import partial
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)


class BaseEnv:
    def _init(self, name: str) -> None:
        raise NotImplementedError


T = TypeVar("T")


class EnvVar(BaseEnv, Generic[T]):
    def __init__(self, default_value: T, fn: Callable[[str], T]):
        self.default_value = default_value
        self.value = default_value
        self.fn = fn
        super().__init__()

    def _init(self, name: str) -> None:
        self.value = self.default_value
        env_value = os.getenv(name)
        if env_value is None:
            return
        try:
            self.value = self.fn(env_value)
        except ValueError as exc:
            logger.warning("Ignoring %s=%r (%s); using %r", name, env_value, exc, self.value)

    def __bool__(self):
        return bool(self.value)

    def __str__(self):
        return str(self.value)


def _TO_BOOL(value: str) -> bool:
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _TO_WIDTH(value: str) -> int:
    width = int(value)
    if width < 4:
        raise ValueError("column width must be at least 4")
    return width


STOPWATCH_ENV_PREFIX = "STOPWATCH_"
EnvInt = partial(EnvVar[int], fn=int)
EnvBool = partial(EnvVar[bool], fn=_TO_BOOL)
EnvStr = partial(EnvVar[str], fn=lambda x: x.strip().lower())
EnvWidth = partial(EnvVar[int], fn=_TO_WIDTH)


class EnvClassSingleton:
    _instance: EnvClassSingleton | None = None
    DISABLED = EnvBool(False)
    MEMORY_PROFILING = EnvBool(False)
    OUTPUT_MODE = EnvStr("auto")
    MIN_COL_WIDTH = EnvWidth(10)
    MAX_COL_WIDTH = EnvWidth(40)

    def __new__(cls):
        # single instance
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Re-read every ``STOPWATCH_*`` variable from the environment."""
        for attr_name in dir(self):
            if attr_name.startswith("_") or attr_name == "reload":
                continue
            attr_value = getattr(self, attr_name)
            assert isinstance(attr_value, BaseEnv)
            attr_value._init(f"{STOPWATCH_ENV_PREFIX}{attr_name}")


ENV = EnvClassSingleton()
