"""Explicit timing and counter accumulator threaded through the algorithms."""

from __future__ import annotations

import time
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Timings:
    """Collects elapsed seconds and event counts keyed by name.

    A Timings value is owned by the caller: algorithms only add to it, never
    reset it.  Two accumulators from separate runs can be combined with
    merge().
    """

    elapsed: Dict[str, float] = field(default_factory=dict)
    counters: Dict[str, int] = field(default_factory=dict)

    @contextmanager
    def timed(self, key: str):
        """Add the wall time spent inside the ``with`` block to ``elapsed[key]``."""
        start = time.perf_counter()
        try:
            yield self
        finally:
            self.elapsed[key] = self.elapsed.get(key, 0.0) + (time.perf_counter() - start)

    def count(self, key: str, n: int = 1) -> None:
        self.counters[key] = self.counters.get(key, 0) + n

    def reset(self) -> None:
        self.elapsed.clear()
        self.counters.clear()

    def merge(self, other: "Timings") -> "Timings":
        """Add every entry of ``other`` into this accumulator and return it."""
        for key, seconds in other.elapsed.items():
            self.elapsed[key] = self.elapsed.get(key, 0.0) + seconds
        for key, n in other.counters.items():
            self.counters[key] = self.counters.get(key, 0) + n
        return self

    def as_dict(self) -> Dict[str, Dict]:
        return {"elapsed": dict(self.elapsed), "counters": dict(self.counters)}


def timed(timings: Optional[Timings], key: str):
    """``timings.timed(key)``, or a no-op context when no accumulator is given."""
    if timings is None:
        return nullcontext()
    return timings.timed(key)


def count(timings: Optional[Timings], key: str, n: int = 1) -> None:
    if timings is not None:
        timings.count(key, n)
