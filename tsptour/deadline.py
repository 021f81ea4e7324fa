from __future__ import annotations
import time
from typing import Callable, Optional


class Deadline:
    """Fixed wall-clock cutoff: `start + limit` seconds on `clock`."""

    def __init__(self, limit: float, start: Optional[float] = None,
                 clock: Callable[[], float] = time.perf_counter):
        self.limit = float(limit)
        self.clock = clock
        self.start = clock() if start is None else start

    @classmethod
    def started(cls, limit: float) -> "Deadline":
        return cls(limit)

    def elapsed(self) -> float:
        return self.clock() - self.start

    def remaining(self) -> float:
        return self.limit - self.elapsed()

    def expired(self) -> bool:
        return self.elapsed() > self.limit

    def __repr__(self):
        return f"Deadline(limit={self.limit}, start={self.start})"
