from __future__ import annotations

import logging

from lexigraph import exceptions
from lexigraph.config import io as config_io

logger = logging.getLogger(__name__)


class IterationGuard:
    """Counts loop iterations and aborts once a limit is passed.

    Create one before the loop and call increment() at the end of each
    iteration. Once the counter goes past the limit, IterationLimitError is raised.

    Usage:
        guard = IterationGuard(limit=n * n + 100, name="dijkstra")
        while queue:
            ...
            guard.increment()
    """

    _limit: int
    _counter: int
    _name: str

    def __init__(self, limit: int | None = None, name: str = "loop") -> None:
        """Create a guard.

        Args:
            limit: Maximum number of iterations. Defaults to limits.default_loop_limit
                from the merged config.
            name: Loop name used in the error message.
        """
        if limit is None:
            limit = config_io.get_default_loop_limit()
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        self._limit = limit
        self._counter = 0
        self._name = name

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def remaining(self) -> int:
        return self._limit - self._counter

    def increment(self) -> None:
        """Count one iteration.

        Raises:
            IterationLimitError: If the counter went past the limit.
        """
        self._counter += 1
        if self._counter > self._limit:
            logger.debug(f"{self._name} hit its iteration limit ({self._limit})")
            raise exceptions.IterationLimitError(
                self._limit, f"{self._name} exceeded its limit of {self._limit} iterations"
            )

    def reset(self) -> None:
        self._counter = 0


def graph_loop_limit(n: int, m: int, padding: int | None = None) -> int:
    """Iteration cap for loops bounded by the size of a graph: m + n^2 + padding."""
    if padding is None:
        padding = config_io.get_loop_padding()
    return max(1, m + n * n + padding)
