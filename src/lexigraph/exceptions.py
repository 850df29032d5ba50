from difflib import get_close_matches
from typing import override

# Fuzzy matching constants
_FUZZY_CUTOFF = 0.6
_FUZZY_MIN_LENGTH = 3


def _fuzzy_suggest(query: str, candidates: list[str]) -> str | None:
    """Return best fuzzy match if found, else None."""
    if not candidates or len(query) < _FUZZY_MIN_LENGTH:
        return None
    matches = get_close_matches(query, candidates, n=1, cutoff=_FUZZY_CUTOFF)
    return matches[0] if matches else None


class LexigraphError(Exception):
    """Base exception for lexigraph errors."""

    def format_user_message(self) -> str:
        """Format a user-friendly error message."""
        return str(self)

    def get_suggestion(self) -> str | None:
        """Return actionable suggestion for resolving the error."""
        return None


class LexiconError(LexigraphError):
    """Base class for Lexicon container errors."""

    pass


class LexiconIndexError(LexiconError, IndexError):
    """Raised when an index falls outside [0, size)."""

    _index: int
    _size: int

    def __init__(self, index: int, size: int) -> None:
        self._index = index
        self._size = size
        super().__init__(f"Index {index} out of range for Lexicon of size {size}")

    @property
    def index(self) -> int:
        return self._index

    @property
    def size(self) -> int:
        return self._size

    @override
    def get_suggestion(self) -> str:
        if self._size == 0:
            return "The Lexicon is empty"
        return f"Use an index between 0 and {self._size - 1}"

    @override
    def __reduce__(self) -> tuple[type, tuple[int, int]]:
        return (self.__class__, (self._index, self._size))


class EmptyLexiconError(LexiconError, LookupError):
    """Raised when first() or last() is called on an empty Lexicon."""

    def __init__(self, message: str = "The Lexicon is empty") -> None:
        super().__init__(message)

    @override
    def get_suggestion(self) -> str:
        return "Pass a default value, e.g. first(None), to avoid this error"


class GraphError(LexigraphError):
    """Base class for graph-related errors."""

    pass


class VertexNotFoundError(GraphError, ValueError):
    """Raised when a vertex argument is not part of the graph."""

    _label: str
    _available: list[str]

    def __init__(self, label: str, available_labels: list[str] | None = None) -> None:
        self._label = label
        self._available = available_labels or []
        super().__init__(f"Vertex '{label}' is not in the graph")

    @override
    def format_user_message(self) -> str:
        msg = str(self)
        if match := _fuzzy_suggest(self._label, self._available):
            msg += f"\n  Did you mean: '{match}'?"
        return msg

    @override
    def get_suggestion(self) -> str:
        return "Add the vertex to the graph before using it"

    @override
    def __reduce__(self) -> tuple[type, tuple[str, list[str]]]:
        return (self.__class__, (self._label, self._available))


class EdgeNotFoundError(GraphError, ValueError):
    """Raised when an edge argument is not part of the graph."""

    pass


class UnreachableVertexError(GraphError):
    """Raised when no path leads from a source vertex to a destination vertex."""

    _source: str
    _destination: str

    def __init__(self, source: str, destination: str) -> None:
        self._source = source
        self._destination = destination
        super().__init__(f"Vertex '{destination}' is not reachable from '{source}'")

    @override
    def get_suggestion(self) -> str:
        return "Check that the distance to the destination is finite before asking for a path"

    @override
    def __reduce__(self) -> tuple[type, tuple[str, str]]:
        return (self.__class__, (self._source, self._destination))


class CyclicGraphError(GraphError):
    """Raised when an operation requires an acyclic graph."""

    @override
    def get_suggestion(self) -> str:
        return "Remove the edges closing the cycle, or use a traversal instead"


class InvalidWeightError(GraphError, ValueError):
    """Raised when a distance function returns a negative or NaN weight."""

    pass


class InvalidColorError(LexigraphError, ValueError):
    """Raised when a color number is below -1."""

    pass


class IterationLimitError(LexigraphError):
    """Raised when a loop exceeds its iteration cap."""

    _limit: int

    def __init__(self, limit: int, message: str | None = None) -> None:
        self._limit = limit
        super().__init__(message or f"Loop exceeded its limit of {limit} iterations")

    @property
    def limit(self) -> int:
        return self._limit

    @override
    def get_suggestion(self) -> str:
        return "Raise limits.padding in the lexigraph config, or check the graph for inconsistent edges"

    @override
    def __reduce__(self) -> tuple[type, tuple[int, str]]:
        return (self.__class__, (self._limit, str(self)))


class ConfigError(LexigraphError):
    """Base class for configuration errors."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when config value fails validation."""

    pass
