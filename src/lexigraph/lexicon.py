"""Lexicon: a growable, order-preserving sequence with acceptance policies.

A Lexicon behaves like a list whose mutations are filtered by two policies:

- accept_duplicates: when False, a value equal to one already stored is rejected.
- accept_null_values: when False, None is rejected.

Rejected mutations are reported by the return value (False / None), never by an
exception, so batch operations can report partial success. Index errors and
empty-container errors are raised as LexiconIndexError and EmptyLexiconError.

Every add/get/set/remove/clear notifies the listeners registered for that event,
synchronously and in registration order, once the operation has completed.
"""

from __future__ import annotations

import collections.abc
import contextlib
import logging
import random
import threading
from typing import TYPE_CHECKING, Any, overload, override

from lexigraph import exceptions
from lexigraph.config import io as config_io
from lexigraph.types import LexiconEvent, LexiconListener

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class Lexicon[T](collections.abc.Sequence[T]):
    """Index-addressable sequence enforcing duplicate and null policies.

    Policies default to the ``lexicon`` section of the lexigraph config. They are
    applied before the seed elements are added, so seeding a Lexicon that refuses
    duplicates silently drops repeated values.

    Policy toggles (set_accept_duplicates, set_accept_null_values) are
    side-effecting: turning a policy on purges the elements that violate it.
    """

    _array: list[T | None]
    _size: int
    _accept_duplicates: bool
    _accept_null_values: bool
    _synchronized_access: bool
    _lock: threading.RLock
    _listeners: dict[LexiconEvent, list[LexiconListener]]

    def __init__(
        self,
        elements: Iterable[T | None] | None = None,
        *,
        accept_duplicates: bool | None = None,
        accept_null_values: bool | None = None,
        synchronized_access: bool | None = None,
        initial_capacity: int | None = None,
    ) -> None:
        defaults = config_io.get_lexicon_defaults()
        self._accept_duplicates = (
            defaults.accept_duplicates if accept_duplicates is None else accept_duplicates
        )
        self._accept_null_values = (
            defaults.accept_null_values if accept_null_values is None else accept_null_values
        )
        self._synchronized_access = (
            defaults.synchronized_access if synchronized_access is None else synchronized_access
        )
        capacity = defaults.initial_capacity if initial_capacity is None else initial_capacity
        if capacity < 0:
            raise ValueError(f"initial_capacity must be >= 0, got {capacity}")

        self._array = [None] * capacity
        self._size = 0
        self._lock = threading.RLock()
        self._listeners = {event: [] for event in LexiconEvent}

        if elements is not None:
            self.add_all(elements)

    @classmethod
    def of(cls, *elements: T | None, **policies: Any) -> Lexicon[T]:
        """Build a Lexicon from varargs: ``Lexicon.of(1, 2, 3, accept_duplicates=False)``."""
        return cls(elements, **policies)

    # --- Locking & notification ---

    def _guard(self) -> contextlib.AbstractContextManager[Any]:
        if self._synchronized_access:
            return self._lock
        return contextlib.nullcontext()

    def _notify(self, event: LexiconEvent, index: int, value: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(index, value)

    def add_listener(self, event: LexiconEvent, listener: LexiconListener) -> None:
        """Register a callback called with (index, value) after each ``event``."""
        self._listeners[LexiconEvent(event)].append(listener)

    def remove_listener(self, event: LexiconEvent, listener: LexiconListener) -> bool:
        """Unregister a callback. Returns False if it was not registered."""
        listeners = self._listeners[LexiconEvent(event)]
        if listener not in listeners:
            return False
        listeners.remove(listener)
        return True

    def listeners(self, event: LexiconEvent) -> list[LexiconListener]:
        return list(self._listeners[LexiconEvent(event)])

    def on_add(self, listener: LexiconListener) -> LexiconListener:
        """Register an ADD listener. Usable as a decorator."""
        self.add_listener(LexiconEvent.ADD, listener)
        return listener

    def on_get(self, listener: LexiconListener) -> LexiconListener:
        self.add_listener(LexiconEvent.GET, listener)
        return listener

    def on_set(self, listener: LexiconListener) -> LexiconListener:
        self.add_listener(LexiconEvent.SET, listener)
        return listener

    def on_remove(self, listener: LexiconListener) -> LexiconListener:
        self.add_listener(LexiconEvent.REMOVE, listener)
        return listener

    def on_clear(self, listener: LexiconListener) -> LexiconListener:
        self.add_listener(LexiconEvent.CLEAR, listener)
        return listener

    # --- Capacity ---

    @property
    def capacity(self) -> int:
        return len(self._array)

    def ensure_capacity(self, min_capacity: int) -> int:
        """Grow the backing storage to hold at least ``min_capacity`` elements.

        Grows to twice the current capacity, or exactly ``min_capacity`` if that is
        larger. Never shrinks. Returns the resulting capacity.
        """
        with self._guard():
            current = len(self._array)
            if min_capacity > current:
                new_capacity = max(min_capacity, current * 2)
                self._array.extend([None] * (new_capacity - current))
            return len(self._array)

    def trim_to_size(self) -> int:
        """Shrink the backing storage to the logical size. Returns the new capacity."""
        with self._guard():
            del self._array[self._size :]
            return len(self._array)

    # --- Policies ---

    @property
    def accept_duplicates(self) -> bool:
        return self._accept_duplicates

    @property
    def accept_null_values(self) -> bool:
        return self._accept_null_values

    @property
    def synchronized_access(self) -> bool:
        return self._synchronized_access

    def set_accept_duplicates(self, accept: bool) -> Lexicon[T]:
        """Change the duplicate policy. Refusing duplicates purges existing ones.

        The first occurrence of each value is kept; later ones are removed,
        each removal firing a REMOVE event.
        """
        with self._guard():
            self._accept_duplicates = accept
            if not accept:
                removed = self.delete_duplicates()
                if removed:
                    logger.debug(f"Purged {removed} duplicate(s) after refusing duplicates")
        return self

    def set_accept_null_values(self, accept: bool) -> Lexicon[T]:
        """Change the null policy. Refusing nulls purges existing None values."""
        with self._guard():
            self._accept_null_values = accept
            if not accept:
                removed = self.delete_nulls()
                if removed:
                    logger.debug(f"Purged {removed} None value(s) after refusing nulls")
        return self

    def set_synchronized_access(self, synchronized: bool) -> Lexicon[T]:
        """Serialize every single operation under a per-instance lock.

        Compound sequences (e.g. check-then-add) are still not atomic.
        """
        with self._lock:
            self._synchronized_access = synchronized
        return self

    def accepts(self, value: T | None, *, ignore_index: int | None = None) -> bool:
        """Tell whether ``value`` passes the null and duplicate policies.

        Args:
            value: Candidate value.
            ignore_index: Slot excluded from the duplicate check (the slot being replaced).
        """
        if value is None and not self._accept_null_values:
            return False
        if not self._accept_duplicates:
            for i in range(self._size):
                if i != ignore_index and self._array[i] == value:
                    return False
        return True

    # --- Index checks ---

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise exceptions.LexiconIndexError(index, self._size)

    # --- Mutation ---

    def add(self, value: T | None) -> bool:
        """Append ``value``. Returns False if a policy rejected it."""
        with self._guard():
            if not self.accepts(value):
                return False
            self.ensure_capacity(self._size + 1)
            index = self._size
            self._array[index] = value
            self._size += 1
        self._notify(LexiconEvent.ADD, index, value)
        return True

    def add_all(self, values: Iterable[T | None]) -> bool:
        """Append every value in order. Returns True only if none was rejected."""
        all_added = True
        for value in list(values):
            if not self.add(value):
                all_added = False
        return all_added

    def extend(self, values: Iterable[T | None]) -> bool:
        return self.add_all(values)

    def insert(self, index: int, value: T | None) -> bool:
        """Insert ``value`` before ``index`` (``index == len`` appends).

        Raises:
            LexiconIndexError: If index is outside [0, size].
        """
        with self._guard():
            if not 0 <= index <= self._size:
                raise exceptions.LexiconIndexError(index, self._size)
            if not self.accepts(value):
                return False
            self.ensure_capacity(self._size + 1)
            self._array[index + 1 : self._size + 1] = self._array[index : self._size]
            self._array[index] = value
            self._size += 1
        self._notify(LexiconEvent.ADD, index, value)
        return True

    def _replace(self, index: int, value: T | None) -> tuple[bool, T | None]:
        """Store ``value`` at ``index``; returns (accepted, previous element)."""
        with self._guard():
            self._check_index(index)
            if not self.accepts(value, ignore_index=index):
                return False, None
            previous = self._array[index]
            self._array[index] = value
        self._notify(LexiconEvent.SET, index, value)
        return True, previous

    def set(self, index: int, value: T | None) -> T | None:
        """Replace the element at ``index`` and return the previous one.

        Returns None without touching the storage if a policy rejected ``value``.
        Use replace() when None may be stored and a rejection must be told apart
        from a replaced None. A value equal to the one it replaces is not a
        duplicate of itself.

        Raises:
            LexiconIndexError: If index is outside [0, size).
        """
        return self._replace(index, value)[1]

    def replace(self, index: int, value: T | None) -> bool:
        """Like set(), but returns False if a policy rejected ``value``.

        Raises:
            LexiconIndexError: If index is outside [0, size).
        """
        return self._replace(index, value)[0]

    def set_or_add(self, index: int, value: T | None) -> bool:
        """Set ``index`` when it exists, append otherwise. Returns False on rejection."""
        if 0 <= index < len(self):
            return self.replace(index, value)
        return self.add(value)

    def swap(self, index1: int, index2: int) -> None:
        """Exchange two elements. Fires a SET event for each index."""
        with self._guard():
            self._check_index(index1)
            self._check_index(index2)
            first, second = self._array[index1], self._array[index2]
            self._array[index1], self._array[index2] = second, first
        self._notify(LexiconEvent.SET, index1, second)
        self._notify(LexiconEvent.SET, index2, first)

    def remove_at(self, index: int) -> T | None:
        """Remove and return the element at ``index``, shifting the tail left.

        Raises:
            LexiconIndexError: If index is outside [0, size).
        """
        with self._guard():
            self._check_index(index)
            removed = self._array[index]
            self._array[index : self._size - 1] = self._array[index + 1 : self._size]
            self._size -= 1
            self._array[self._size] = None
        self._notify(LexiconEvent.REMOVE, index, removed)
        return removed

    def remove(self, value: T | None) -> bool:
        """Remove the first element equal to ``value``. Returns False if absent."""
        with self._guard():
            index = self.index_of(value)
            if index == -1:
                return False
            self.remove_at(index)
        return True

    def remove_all(self, values: Iterable[T | None]) -> bool:
        """Remove one occurrence of each value. Returns True only if all were found."""
        all_removed = True
        for value in list(values):
            if not self.remove(value):
                all_removed = False
        return all_removed

    def remove_if(self, predicate: Callable[[T | None], bool]) -> bool:
        """Remove every element matching ``predicate``. Returns True if any was removed."""
        removed_any = False
        with self._guard():
            for i in range(self._size - 1, -1, -1):
                if predicate(self._array[i]):
                    self.remove_at(i)
                    removed_any = True
        return removed_any

    def retain_all(self, values: Iterable[T | None]) -> bool:
        """Keep only elements equal to one of ``values``. Returns True if anything changed."""
        keep = list(values)
        return self.remove_if(lambda element: element not in keep)

    def clear(self) -> None:
        """Remove every element. Capacity is kept. Fires one CLEAR event (-1, None)."""
        with self._guard():
            for i in range(self._size):
                self._array[i] = None
            self._size = 0
        self._notify(LexiconEvent.CLEAR, -1, None)

    # --- Access ---

    def get(self, index: int, default: Any = _MISSING) -> T | None:
        """Return the element at ``index``.

        Args:
            index: Position in [0, size).
            default: Returned instead of raising when the index is out of range.

        Raises:
            LexiconIndexError: If index is out of range and no default was given.
        """
        with self._guard():
            if not 0 <= index < self._size:
                if default is not _MISSING:
                    return default
                raise exceptions.LexiconIndexError(index, self._size)
            value = self._array[index]
        self._notify(LexiconEvent.GET, index, value)
        return value

    def first(self, default: Any = _MISSING) -> T | None:
        """Return the first element.

        Raises:
            EmptyLexiconError: If the Lexicon is empty and no default was given.
        """
        with self._guard():
            if self._size == 0:
                if default is not _MISSING:
                    return default
                raise exceptions.EmptyLexiconError()
            return self.get(0)

    def last(self, default: Any = _MISSING) -> T | None:
        """Return the last element.

        Raises:
            EmptyLexiconError: If the Lexicon is empty and no default was given.
        """
        with self._guard():
            if self._size == 0:
                if default is not _MISSING:
                    return default
                raise exceptions.EmptyLexiconError()
            return self.get(self._size - 1)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Lexicon[T]: ...

    @override
    def __getitem__(self, index: int | slice) -> T | None | Lexicon[T]:
        if isinstance(index, slice):
            with self._guard():
                items = self._array[: self._size][index]
            return self._spawn(items)
        if index < 0:
            index += self._size
        return self.get(index)

    # --- Search ---

    def contains(self, value: object) -> bool:
        return self.index_of(value) != -1

    @override
    def __contains__(self, value: object) -> bool:
        return self.contains(value)

    def index_of(self, value: object) -> int:
        """Return the index of the first element equal to ``value``, or -1."""
        with self._guard():
            for i in range(self._size):
                if self._array[i] == value:
                    return i
        return -1

    @override
    def index(self, value: Any, start: int = 0, stop: int | None = None) -> int:
        with self._guard():
            begin, end, _ = slice(start, stop).indices(self._size)
            for i in range(begin, end):
                if self._array[i] == value:
                    return i
        raise ValueError(f"{value!r} is not in Lexicon")

    def search(self, value: object) -> list[int]:
        """Return every index holding a value equal to ``value``."""
        with self._guard():
            return [i for i in range(self._size) if self._array[i] == value]

    @override
    def count(self, value: Any) -> int:
        return len(self.search(value))

    def has_null(self) -> bool:
        return self.index_of(None) != -1

    def find_nulls(self) -> list[int]:
        return self.search(None)

    def delete_nulls(self) -> int:
        """Remove every None. Returns how many were removed."""
        return self._delete_where(lambda i: self._array[i] is None)

    def has_duplicates(self) -> bool:
        with self._guard():
            for i in range(self._size - 1):
                for j in range(i + 1, self._size):
                    if self._array[i] == self._array[j]:
                        return True
        return False

    def find_duplicates(self) -> list[tuple[int, int]]:
        """Return every index pair (i, j), i < j, holding equal values."""
        with self._guard():
            return [
                (i, j)
                for i in range(self._size - 1)
                for j in range(i + 1, self._size)
                if self._array[i] == self._array[j]
            ]

    def delete_duplicates(self) -> int:
        """Remove later occurrences of repeated values. Returns how many were removed."""
        return self._delete_where(
            lambda i: any(self._array[j] == self._array[i] for j in range(i))
        )

    def _delete_where(self, should_delete: Callable[[int], bool]) -> int:
        # Walk from the end so pending indices are not shifted by removals.
        removed = 0
        with self._guard():
            for i in range(self._size - 1, -1, -1):
                if should_delete(i):
                    self.remove_at(i)
                    removed += 1
        return removed

    # --- Reordering ---

    def sort(self, key: Callable[[T], Any] | None = None, *, reverse: bool = False) -> None:
        """Sort in place. Ties keep their relative order. No events are fired."""
        with self._guard():
            live: list[Any] = self._array[: self._size]
            live.sort(key=key, reverse=reverse)
            self._array[: self._size] = live

    def disarray(self, rng: random.Random | None = None) -> None:
        """Shuffle in place with a uniform random permutation. No events are fired."""
        with self._guard():
            live = self._array[: self._size]
            (rng or random).shuffle(live)
            self._array[: self._size] = live

    def reverse(self) -> None:
        with self._guard():
            self._array[: self._size] = self._array[: self._size][::-1]

    # --- Conversion ---

    def _spawn(self, items: Iterable[T | None]) -> Lexicon[T]:
        return Lexicon(
            items,
            accept_duplicates=self._accept_duplicates,
            accept_null_values=self._accept_null_values,
            synchronized_access=self._synchronized_access,
        )

    def copy(self) -> Lexicon[T]:
        """Shallow copy with the same policies and no listeners."""
        return self._spawn(self.to_list())

    def to_list(self) -> list[T | None]:
        with self._guard():
            return self._array[: self._size]

    # --- Dunder protocol ---

    @override
    def __len__(self) -> int:
        return self._size

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    @override
    def __iter__(self) -> Iterator[T]:
        # Lazy and restartable; size is re-read at every step.
        i = 0
        while True:
            with self._guard():
                if i >= self._size:
                    return
                value = self._array[i]
            yield value  # pyright: ignore[reportReturnType] - None only when nulls are accepted
            i += 1

    @override
    def __reversed__(self) -> Iterator[T]:
        return iter(self.to_list()[::-1])  # pyright: ignore[reportReturnType]

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Lexicon):
            return self.to_list() == other.to_list()
        if isinstance(other, collections.abc.Sequence) and not isinstance(other, (str, bytes)):
            return self.to_list() == list(other)
        return NotImplemented

    __hash__ = None  # pyright: ignore[reportAssignmentType] - mutable, like list

    @override
    def __repr__(self) -> str:
        return (
            f"Lexicon({self.to_list()!r}, accept_duplicates={self._accept_duplicates}, "
            + f"accept_null_values={self._accept_null_values}, "
            + f"synchronized_access={self._synchronized_access})"
        )
