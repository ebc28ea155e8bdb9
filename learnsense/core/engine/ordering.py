"""
Explicit most-recent-first ordering for score histories.
"""
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, TypeVar, overload

T = TypeVar("T")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def timestamp_sort_key(value: Optional[datetime]) -> datetime:
    """Comparable key for naive, aware or missing timestamps; missing sorts oldest."""
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RecentFirst(Sequence[T]):
    """
    Immutable sequence whose index 0 is the most recent sample.

    The difficulty adapter, the performance predictor and the learning path
    optimizer read ``scores[0]`` as "latest" and ``scores[:5]`` as "recent",
    so they only accept this wrapper. Build it with ``RecentFirst(...)`` when
    the data is already newest first, or with the ``from_oldest_first`` /
    ``sorted_by`` constructors otherwise.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()):
        self._items = tuple(items)

    @classmethod
    def from_oldest_first(cls, items: Iterable[T]) -> "RecentFirst[T]":
        return cls(reversed(tuple(items)))

    @classmethod
    def sorted_by(cls, items: Iterable[T], timestamp: Callable[[T], Optional[datetime]]) -> "RecentFirst[T]":
        """Sort by timestamp, newest first; records without one go last."""
        return cls(sorted(items, key=lambda item: timestamp_sort_key(timestamp(item)), reverse=True))

    def map(self, fn: Callable[[T], Any]) -> "RecentFirst[Any]":
        return RecentFirst(fn(item) for item in self._items)

    def filter(self, predicate: Callable[[T], bool]) -> "RecentFirst[T]":
        return RecentFirst(item for item in self._items if predicate(item))

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> "RecentFirst[T]": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RecentFirst(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RecentFirst):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"RecentFirst({list(self._items)!r})"


def require_recent_first(value: Any, name: str) -> None:
    """Reject bare sequences where most-recent-first order is assumed."""
    if not isinstance(value, RecentFirst):
        raise TypeError(
            f"{name} must be a RecentFirst sequence (index 0 = most recent), "
            f"got {type(value).__name__}"
        )
