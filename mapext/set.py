"""Persistent ordered set, stored as a map whose values are all Unit"""

from __future__ import annotations

from typing import Any, Callable, Generator, Iterable, Optional, Type, override

from mapext.common import LexOrdered, Unit
from mapext.map import PMap

__all__ = ["PSet"]


class PSet[T](LexOrdered[T]):
    """Immutable set of totally ordered elements, traversed in ascending order."""

    def __init__(self, entries: PMap[T, Unit]) -> None:
        self._entries = entries

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> PSet[T]:
        """Create an empty set.

        Args:
            _ty: Optional type hint (unused).
        """
        return _PSET_EMPTY

    @staticmethod
    def singleton(value: T) -> PSet[T]:
        return PSet(PMap.singleton(value, Unit.instance()))

    @staticmethod
    def mk(values: Iterable[T]) -> PSet[T]:
        """Create a set from an iterable of values; duplicates collapse."""
        return PSet(PMap.mk((value, Unit.instance()) for value in values))

    @staticmethod
    def keys_of[V](pmap: PMap[T, V]) -> PSet[T]:
        """The key set of a map, sharing the map's tree shape.

        Time Complexity: O(n), no comparisons
        """
        return PSet(pmap.map_values(lambda _: Unit.instance()))

    @override
    def size(self) -> int:
        return self._entries.size()

    @override
    def iter(self) -> Generator[T]:
        yield from self._entries.keys()

    def insert(self, value: T) -> PSet[T]:
        """Insert a value. O(log n)."""
        if self._entries.contains(value):
            return self
        return PSet(self._entries.put(value, Unit.instance()))

    def remove(self, value: T) -> PSet[T]:
        """Remove a value if present. O(log n)."""
        entries = self._entries.remove(value)
        return self if entries is self._entries else PSet(entries)

    def contains(self, value: T) -> bool:
        """Check membership. O(log n)."""
        return self._entries.contains(value)

    def fold[Z](self, fn: Callable[[Z, T], Z], acc: Z) -> Z:
        """Left fold over the elements in ascending order."""
        result = acc
        for value in self.iter():
            result = fn(result, value)
        return result

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def __rshift__(self, value: T) -> PSet[T]:
        """Alias for insert()."""
        return self.insert(value)

    def __repr__(self) -> str:
        return f"PSet({{{', '.join(repr(value) for value in self.iter())}}})"


_PSET_EMPTY: PSet[Any] = PSet(PMap.empty())
