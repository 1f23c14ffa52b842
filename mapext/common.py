"""Shared types and comparison helpers for the persistent collections.

Keys are compared with `compare`, which only needs `==` and `<`, so any
totally ordered type works as a map key or set element.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from itertools import zip_longest
from typing import Any, Iterable, Iterator, List

__all__ = [
    "Box",
    "Impossible",
    "LexOrdered",
    "Ordering",
    "Unit",
    "compare",
    "compare_lex",
]


class Impossible(Exception):
    """Raised when a tree reaches a state its invariants rule out."""

    pass


@dataclass
class Box[T]:
    """Mutable cell for threading an accumulator through a fold.

    Only used while a result is under construction; the boxed value is
    returned to the caller, never the box.
    """

    value: T


@dataclass(frozen=True)
class Unit:
    """Placeholder value for maps that only care about their keys."""

    @staticmethod
    def instance() -> Unit:
        return _UNIT


_UNIT = Unit()


class Ordering(Enum):
    Lt = -1
    Eq = 0
    Gt = 1


def compare[T](a: T, b: T) -> Ordering:
    if a == b:
        return Ordering.Eq
    elif a < b:  # type: ignore[operator]
        return Ordering.Lt
    else:
        return Ordering.Gt


_END = object()


def compare_lex[T](xs: Iterable[T], ys: Iterable[T]) -> Ordering:
    """Lexicographic comparison; a sequence that runs out first is smaller."""
    for x, y in zip_longest(xs, ys, fillvalue=_END):
        if x is _END:
            return Ordering.Lt
        if y is _END:
            return Ordering.Gt
        result = compare(x, y)
        if result != Ordering.Eq:
            return result
    return Ordering.Eq


@total_ordering
class LexOrdered[U](metaclass=ABCMeta):
    """Base for finite ordered collections.

    Subclasses supply `size` and an in-order `iter`; length, truthiness,
    iteration and lexicographic comparison over the elements follow from
    those two.
    """

    @abstractmethod
    def size(self) -> int: ...

    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def null(self) -> bool:
        return self.size() == 0

    def list(self) -> List[U]:
        return list(self.iter())

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.null()

    def __iter__(self) -> Iterator[U]:
        return self.iter()

    def _same_kind(self, other: Any) -> bool:
        # PMapEmpty and PMapBranch are peers, PMap and PSet are not
        return isinstance(other, LexOrdered) and _kind(self) is _kind(other)

    def __eq__(self, other: Any) -> bool:
        if not self._same_kind(other):
            return False
        return self.size() == other.size() and (
            compare_lex(self.iter(), other.iter()) == Ordering.Eq
        )

    def __lt__(self, other: Any) -> bool:
        if not self._same_kind(other):
            return NotImplemented
        return compare_lex(self.iter(), other.iter()) == Ordering.Lt


def _kind(obj: LexOrdered[Any]) -> type:
    """The class that derives directly from LexOrdered, e.g. PMap or PSet."""
    for cls in type(obj).__mro__:
        if LexOrdered in cls.__bases__:
            return cls
    raise Impossible
