from __future__ import annotations

import collections
import contextlib
import os
import time
from typing import TYPE_CHECKING, NamedTuple, TypedDict

if TYPE_CHECKING:
    from collections.abc import Generator

# Module-level state, not thread-safe. Algorithms run synchronously in the caller's thread.

MAX_SAMPLES_PER_METRIC = 10_000

_enabled = os.environ.get("LEXIGRAPH_METRICS", "").lower() in ("1", "true", "yes")
_samples: dict[str, collections.deque[Sample]] = {}


class Sample(NamedTuple):
    """One timed algorithm run and the size of the graph it ran on."""

    duration_ms: float
    vertices: int
    edges: int


class MetricSummary(TypedDict):
    """Summary statistics for a single metric."""

    count: int
    total_ms: float
    avg_ms: float
    min_ms: float
    max_ms: float
    max_vertices: int
    max_edges: int


def enable() -> None:
    """Enable metrics collection."""
    global _enabled
    _enabled = True


def disable() -> None:
    """Disable metrics collection. Already collected samples are kept."""
    global _enabled
    _enabled = False


def is_enabled() -> bool:
    return _enabled


def clear() -> None:
    """Clear all collected metrics."""
    _samples.clear()


def summary() -> dict[str, MetricSummary]:
    """Summarize metrics by name, sorted by name."""
    result = dict[str, MetricSummary]()
    for name, samples in sorted(_samples.items()):
        if not samples:
            continue
        durations = [s.duration_ms for s in samples]
        total = sum(durations)
        result[name] = MetricSummary(
            count=len(durations),
            total_ms=total,
            avg_ms=total / len(durations),
            min_ms=min(durations),
            max_ms=max(durations),
            max_vertices=max(s.vertices for s in samples),
            max_edges=max(s.edges for s in samples),
        )
    return result


@contextlib.contextmanager
def timed(name: str, *, vertices: int = 0, edges: int = 0) -> Generator[None]:
    """Time an algorithm run on a graph with ``vertices`` and ``edges``.

    Usage:
        with metrics.timed("coloring.dsatur", vertices=graph.n, edges=graph.m):
            ...

    Metrics are only collected when enabled via LEXIGRAPH_METRICS=1 or enable().
    Each name keeps its latest MAX_SAMPLES_PER_METRIC samples.
    """
    if not _enabled:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        series = _samples.get(name)
        if series is None:
            series = _samples[name] = collections.deque(maxlen=MAX_SAMPLES_PER_METRIC)
        series.append(Sample(duration_ms, vertices, edges))
