from __future__ import annotations

import uuid
from dataclasses import dataclass

RESERVED_NAMES = frozenset({"start", "end"})


def generate_id(name: str) -> str:
    """Build a unique checkpoint id prefixed with the checkpoint name."""
    return f"{name}_{uuid.uuid4().hex[:13]}"


@dataclass(frozen=True)
class Checkpoint:
    name: str
    id: str
    time: float
    memory: int | None = None
    memory_peak: int | None = None

    def matches(self, identifier: str) -> bool:
        return self.name == identifier or self.id == identifier
