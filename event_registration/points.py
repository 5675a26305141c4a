"""Ordered, markable registry of 2D points.

:class:`PointRegistry` stores integer points in insertion order. It is the
backbone of the dot-matrix logo: the layout appends one entry per lit pixel,
renderers walk the entries, and the animation stepper moves a named cursor
across them while tagging the point that is currently highlighted.

Rules:

* Entries are append-only and immutable; index order equals insertion order.
* Appending a coordinate that already exists stores a new entry with the next
  *generation* (1, 2, 3, ...). Generations are dense per coordinate.
* Any number of named cursors can walk the sequence independently. A cursor
  that runs off either end becomes unset.
* Marks (tags) are a side table keyed by coordinate only, so marking a point
  affects every generation stored there.
* :class:`PointStats` count and bounding box only consider generation 1.

The registry is a plain in-process structure with no locking; callers that
share it between threads must serialize access themselves.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from event_registration.types import Point, Tag

DEFAULT_CURSOR = "default"
MAX_GENERATIONS = 1024

# (x, y, generation)
EntryKey = Tuple[int, int, int]


class RegistryError(Exception):
    """Base class for point registry failures."""


class TooManyCollisionsError(RegistryError):
    """Raised when a coordinate already holds ``MAX_GENERATIONS`` entries."""


@dataclass(frozen=True)
class Entry:
    """One stored point.

    Attributes:
        x: Column coordinate.
        y: Row coordinate.
        generation: 1 for the first append of ``(x, y)``, 2 for the second, ...
        payload: Caller data attached at append time.
    """

    x: int
    y: int
    generation: int
    payload: Any = None

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class PointStats:
    """Count and bounding box over first-generation entries.

    Bounds are ``None`` while the registry is empty.
    """

    count: int = 0
    min_x: Optional[int] = None
    max_x: Optional[int] = None
    min_y: Optional[int] = None
    max_y: Optional[int] = None


def _check_coordinates(x: Any, y: Any) -> None:
    for name, value in (("x", x), ("y", y)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Coordinate {name} must be an int, got {value!r}")


def _check_cursor(cursor: Any) -> None:
    if not isinstance(cursor, str) or cursor == "":
        raise ValueError(f"Invalid cursor name: {cursor!r}")


class PointRegistry:
    """Append-only list of points with generations, cursors and marks."""

    def __init__(self) -> None:
        self._entries: List[Entry] = []
        self._index: Dict[EntryKey, int] = {}
        self._marks: Dict[Point, Tag] = {}
        self._cursors: Dict[str, int] = {}
        self._stats: PointStats = PointStats()

    # -------- Building --------

    def append(self, x: int, y: int, payload: Any = None) -> Entry:
        """Append a point to the end of the list.

        Args:
            x: Column coordinate.
            y: Row coordinate.
            payload: Arbitrary data stored with the point.

        Returns:
            Entry: The stored entry, carrying its assigned generation.

        Raises:
            TypeError: If a coordinate is not an ``int``.
            TooManyCollisionsError: If ``(x, y)`` has no free generation left.
        """
        _check_coordinates(x, y)

        generation = 1
        while (x, y, generation) in self._index:
            generation += 1
            if generation > MAX_GENERATIONS:
                raise TooManyCollisionsError(
                    f"Point {(x, y)} was appended more than {MAX_GENERATIONS} times"
                )

        entry = Entry(x=x, y=y, generation=generation, payload=payload)
        self._index[(x, y, generation)] = len(self._entries)
        self._entries.append(entry)

        if generation == 1:
            self._stats = _extend_stats(self._stats, x, y)
        return entry

    # -------- Lookup --------

    def get(self, x: int, y: int, generation: int = 1) -> Optional[Entry]:
        """Return the entry stored at ``(x, y)`` with the given generation."""
        _check_coordinates(x, y)
        index = self._index.get((x, y, generation))
        return None if index is None else self._entries[index]

    def get_first_generation(self, x: int, y: int) -> Optional[Entry]:
        """Return the first entry appended at ``(x, y)`` or ``None``."""
        return self.get(x, y, 1)

    def length(self) -> int:
        """Total number of entries across all generations."""
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        # Iterating never moves a named cursor.
        return iter(list(self._entries))

    def first_generation(self) -> Iterator[Entry]:
        """Yield generation-1 entries in insertion order."""
        for entry in list(self._entries):
            if entry.generation == 1:
                yield entry

    # -------- Cursors --------

    def first(self, cursor: str = DEFAULT_CURSOR) -> Optional[Entry]:
        """Move ``cursor`` to the first entry and return it."""
        _check_cursor(cursor)
        if not self._entries:
            self._cursors.pop(cursor, None)
            return None
        self._cursors[cursor] = 0
        return self._entries[0]

    def last(self, cursor: str = DEFAULT_CURSOR) -> Optional[Entry]:
        """Move ``cursor`` to the last entry and return it."""
        _check_cursor(cursor)
        if not self._entries:
            self._cursors.pop(cursor, None)
            return None
        self._cursors[cursor] = len(self._entries) - 1
        return self._entries[-1]

    def has_prev(self, cursor: str = DEFAULT_CURSOR) -> bool:
        _check_cursor(cursor)
        index = self._cursors.get(cursor)
        return index is not None and index > 0

    def has_next(self, cursor: str = DEFAULT_CURSOR) -> bool:
        _check_cursor(cursor)
        index = self._cursors.get(cursor)
        return index is not None and index + 1 < len(self._entries)

    def prev(self, cursor: str = DEFAULT_CURSOR) -> Optional[Entry]:
        """Step ``cursor`` back one entry.

        If there is no predecessor (or the cursor is unset) the cursor is
        unset and ``None`` is returned.
        """
        if not self.has_prev(cursor):
            self._cursors.pop(cursor, None)
            return None
        self._cursors[cursor] -= 1
        return self._entries[self._cursors[cursor]]

    def next(self, cursor: str = DEFAULT_CURSOR) -> Optional[Entry]:
        """Step ``cursor`` forward one entry.

        If there is no successor (or the cursor is unset) the cursor is unset
        and ``None`` is returned.
        """
        if not self.has_next(cursor):
            self._cursors.pop(cursor, None)
            return None
        self._cursors[cursor] += 1
        return self._entries[self._cursors[cursor]]

    def current(self, cursor: str = DEFAULT_CURSOR) -> Optional[Entry]:
        """Return the entry under ``cursor`` without moving it."""
        _check_cursor(cursor)
        index = self._cursors.get(cursor)
        return None if index is None else self._entries[index]

    # -------- Marks --------

    def set_mark(self, x: int, y: int, tag: Tag = True) -> None:
        """Tag ``(x, y)``. A previous tag is overwritten."""
        _check_coordinates(x, y)
        self._marks[(x, y)] = True if tag is None else tag

    def get_mark(self, x: int, y: int) -> Optional[Tag]:
        _check_coordinates(x, y)
        return self._marks.get((x, y))

    def unmark(self, x: int, y: int) -> None:
        _check_coordinates(x, y)
        self._marks.pop((x, y), None)

    def unmark_all(self) -> None:
        self._marks.clear()

    def marked(self) -> Dict[Point, Tag]:
        """Snapshot of all current marks."""
        return dict(self._marks)

    # -------- Statistics --------

    def get_stats(self) -> PointStats:
        """Return count and bounding box of first-generation entries."""
        return self._stats

    def __repr__(self) -> str:
        return f"PointRegistry(length={len(self._entries)}, stats={self._stats})"


def _extend_stats(stats: PointStats, x: int, y: int) -> PointStats:
    if stats.count == 0:
        return PointStats(count=1, min_x=x, max_x=x, min_y=y, max_y=y)
    assert stats.min_x is not None and stats.max_x is not None
    assert stats.min_y is not None and stats.max_y is not None
    return PointStats(
        count=stats.count + 1,
        min_x=min(stats.min_x, x),
        max_x=max(stats.max_x, x),
        min_y=min(stats.min_y, y),
        max_y=max(stats.max_y, y),
    )
