# MIT License (see LICENSE)
"""
Lightweight timing of simulation sections.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    for _ in range(100):
        sim.step()
    print(profiler.stats.summary()["step"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples (seconds) keyed by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'total_ms', 'mean_ms', 'max_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            total = sum(times)
            out[name] = {
                "n": n,
                "total_ms": 1e3 * total,
                "mean_ms": 1e3 * total / n,
                "max_ms": 1e3 * max(times),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Times `with profiler.section(name):` blocks into ProfileStats."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
