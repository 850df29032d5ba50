"""Value types of the graph model: Color, Vertex and Edge."""

from __future__ import annotations

import dataclasses
import functools
import uuid
from typing import Any, Self, override

from lexigraph import exceptions

UNCOLORED = -1


def _new_id() -> str:
    return uuid.uuid4().hex


@functools.total_ordering
class Color:
    """A color number. -1 means uncolored, positive numbers are actual colors.

    Colors compare and hash by number, so they can be used as dict keys and
    sorted. Numbers below -1 are rejected.
    """

    __slots__ = ("_number",)

    _number: int

    def __init__(self, number: int = UNCOLORED) -> None:
        if number < UNCOLORED:
            raise exceptions.InvalidColorError(f"Color number must be >= -1, got {number}")
        self._number = number

    @property
    def number(self) -> int:
        return self._number

    @property
    def is_colored(self) -> bool:
        return self._number > 0

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Color):
            return self._number == other._number
        return NotImplemented

    def __lt__(self, other: Color) -> bool:
        return self._number < other._number

    @override
    def __hash__(self) -> int:
        return hash(self._number)

    def __int__(self) -> int:
        return self._number

    @override
    def __repr__(self) -> str:
        return f"Color({self._number})"


@dataclasses.dataclass(eq=False)
class Vertex[T]:
    """A graph vertex.

    Attributes:
        label: Human-readable name; non-string labels are converted with str().
        data: Optional payload.
        id: Unique identifier, generated when not given.

    Two vertices are equal when id, label and data are all equal. The hash only
    uses the id, so mutating label or data does not move a vertex inside a dict.
    """

    label: str = ""
    data: T | None = None
    id: str = dataclasses.field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if not isinstance(self.label, str):
            self.label = str(self.label)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.id == other.id and self.label == other.label and self.data == other.data

    @override
    def __hash__(self) -> int:
        return hash(self.id)

    @override
    def __repr__(self) -> str:
        return f"Vertex({self.label!r})"

    @override
    def __str__(self) -> str:
        return self.label


@dataclasses.dataclass(eq=False)
class Edge[T]:
    """A directed link from ``x`` (tail) to ``y`` (head).

    In an undirected graph the orientation is ignored by the graph queries,
    but the edge still remembers which endpoint was given first.
    """

    x: Vertex[Any]
    y: Vertex[Any]
    data: T | None = None
    color: Color | None = None
    id: str = dataclasses.field(default_factory=_new_id)

    def equivalent(self, other: Edge[Any]) -> bool:
        """Same endpoints, data and color, regardless of id."""
        return (
            self.x == other.x
            and self.y == other.y
            and self.data == other.data
            and self.color == other.color
        )

    def symmetric(self) -> Self:
        """Copy with swapped endpoints, keeping id, data and color."""
        return dataclasses.replace(self, x=self.y, y=self.x)

    def touches(self, vertex: Vertex[Any]) -> bool:
        return self.x == vertex or self.y == vertex

    @property
    def is_loop(self) -> bool:
        return self.x == self.y

    def other_end(self, vertex: Vertex[Any]) -> Vertex[Any]:
        """Return the endpoint opposite to ``vertex``.

        Raises:
            ValueError: If the edge does not touch ``vertex``.
        """
        if self.x == vertex:
            return self.y
        if self.y == vertex:
            return self.x
        raise ValueError(f"{self!r} does not touch {vertex!r}")

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.id == other.id and self.equivalent(other)

    @override
    def __hash__(self) -> int:
        return hash(self.id)

    @override
    def __repr__(self) -> str:
        return f"Edge({self.x.label!r} -> {self.y.label!r})"


class VertexBuilder:
    """Creates vertices with consecutive numeric labels: "1", "2", ..."""

    _next: int

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def build[T](self, data: T | None = None) -> Vertex[T]:
        vertex = Vertex[T](label=str(self._next), data=data)
        self._next += 1
        return vertex

    def build_many(self, count: int) -> list[Vertex[Any]]:
        return [self.build() for _ in range(count)]
