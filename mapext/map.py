"""Persistent ordered map based on weight-balanced trees"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterable,
    Iterator,
    Optional,
    Tuple,
    Type,
    Union,
    override,
)

from mapext.common import (
    Box,
    Impossible,
    LexOrdered,
    Ordering,
    compare,
)

if TYPE_CHECKING:
    from mapext.set import PSet

__all__ = ["PMap"]


@dataclass(frozen=True)
class Missing:
    pass


_MISSING = Missing()

# Weights are size + 1. Neither subtree may outweigh its sibling by more
# than _DELTA; a single rotation needs the inner grandchild lighter than
# _RATIO times the outer one.
_DELTA = 3
_RATIO = 2


# sealed
class PMap[K, V](LexOrdered[Tuple[K, V]]):
    """Immutable map from totally ordered keys to values.

    Traversal is always in ascending key order. Every update returns a new
    map that shares unchanged subtrees with the old one; the old map stays
    valid and unchanged.
    """

    @staticmethod
    def empty(
        _kty: Optional[Type[K]] = None, _vty: Optional[Type[V]] = None
    ) -> PMap[K, V]:
        """Create an empty map.

        Args:
            _kty: Optional key type hint (unused).
            _vty: Optional value type hint (unused).
        """
        return _PMAP_EMPTY

    @staticmethod
    def singleton(key: K, value: V) -> PMap[K, V]:
        """Create a map holding exactly one entry."""
        return PMapBranch(1, _PMAP_EMPTY, key, value, _PMAP_EMPTY)

    @staticmethod
    def mk(pairs: Iterable[Tuple[K, V]]) -> PMap[K, V]:
        """Create a map from key-value pairs.

        Time Complexity: O(n log n)

        Args:
            pairs: Iterable of (key, value) tuples. When a key repeats, the
                last pair for it wins.

        Returns:
            A map containing the given entries.
        """
        box: Box[PMap[K, V]] = Box(PMap.empty())
        for key, value in pairs:
            box.value = box.value.put(key, value)
        return box.value

    @override
    def null(self) -> bool:
        match self:
            case PMapEmpty():
                return True
            case PMapBranch():
                return False
            case _:
                raise Impossible

    @override
    def size(self) -> int:
        """Number of entries. O(1)."""
        match self:
            case PMapEmpty():
                return 0
            case PMapBranch(_size, _, _, _, _):
                return _size
            case _:
                raise Impossible

    @override
    def iter(self) -> Iterator[Tuple[K, V]]:
        """Iterate over (key, value) pairs in ascending key order."""
        match self:
            case PMapEmpty():
                return
            case PMapBranch(_, left, key, value, right):
                yield from left.iter()
                yield (key, value)
                yield from right.iter()

    def keys(self) -> Iterator[K]:
        for key, _ in self.iter():
            yield key

    def values(self) -> Iterator[V]:
        for _, value in self.iter():
            yield value

    def items(self) -> Iterator[Tuple[K, V]]:
        yield from self.iter()

    def keys_set(self) -> PSet[K]:
        """The keys of this map as a set, sharing this map's tree shape.

        Time Complexity: O(n), no key comparisons
        """
        from mapext.set import PSet

        return PSet.keys_of(self)

    def get(self, key: K, default: Union[V, Missing] = _MISSING) -> V:
        """Get the value stored under a key.

        Time Complexity: O(log n)

        Args:
            key: The key to look up.
            default: Returned when the key is absent.

        Raises:
            KeyError: If the key is absent and no default was given.
        """
        found = _pmap_find_branch(self, key)
        if found is not None:
            return found._value
        elif isinstance(default, Missing):
            raise KeyError(key)
        else:
            return default

    def lookup(self, key: K) -> Optional[V]:
        """Get the value stored under a key, or None if it is absent."""
        found = _pmap_find_branch(self, key)
        return None if found is None else found._value

    def contains(self, key: K) -> bool:
        """Check whether the key is present. O(log n)."""
        return _pmap_find_branch(self, key) is not None

    def put(self, key: K, value: V) -> PMap[K, V]:
        """Insert an entry, overwriting any value already stored under the key.

        Time Complexity: O(log n)
        Space Complexity: O(log n) for path copying
        """
        return _pmap_put(self, key, value)

    def remove(self, key: K) -> PMap[K, V]:
        """Remove the entry for a key. Removing an absent key is a no-op.

        Time Complexity: O(log n)
        Space Complexity: O(log n) for path copying
        """
        return _pmap_remove(self, key)

    def filter(self, predicate: Callable[[K, V], bool]) -> PMap[K, V]:
        """Keep the entries whose key and value satisfy the predicate.

        The predicate is applied once per entry, in ascending key order.
        """
        box: Box[PMap[K, V]] = Box(PMap.empty())
        for key, value in self.iter():
            if predicate(key, value):
                box.value = box.value.put(key, value)
        return box.value

    def map_values[W](self, fn: Callable[[V], W]) -> PMap[K, W]:
        """Transform every value, reusing the tree shape of this map."""
        return _pmap_map_values(self, fn)

    def fold_with_key[Z](self, fn: Callable[[Z, K, V], Z], acc: Z) -> Z:
        """Left fold over the entries in ascending key order.

        Args:
            fn: Takes the accumulator, a key and its value; returns the new
                accumulator.
            acc: The initial accumulator.

        Returns:
            The accumulator after the last entry.
        """
        result = acc
        for key, value in self.items():
            result = fn(result, key, value)
        return result

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __rshift__(self, pair: Tuple[K, V]) -> PMap[K, V]:
        """Alias for put()."""
        key, value = pair
        return self.put(key, value)

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {value!r}" for key, value in self.iter())
        return f"PMap({{{body}}})"


@dataclass(frozen=True, eq=False, repr=False)
class PMapEmpty[K, V](PMap[K, V]):
    pass


_PMAP_EMPTY: PMap[Any, Any] = PMapEmpty()


@dataclass(frozen=True, eq=False, repr=False)
class PMapBranch[K, V](PMap[K, V]):
    _size: int
    _left: PMap[K, V]
    _key: K
    _value: V
    _right: PMap[K, V]


def _pmap_find_branch[K, V](pmap: PMap[K, V], key: K) -> Optional[PMapBranch[K, V]]:
    # Iterative descent; returns the branch holding the key
    node = pmap
    while True:
        match node:
            case PMapEmpty():
                return None
            case PMapBranch(_, left, branch_key, _, right):
                cmp = compare(key, branch_key)
                if cmp == Ordering.Eq:
                    return node
                node = left if cmp == Ordering.Lt else right
            case _:
                raise Impossible


def _pmap_put[K, V](pmap: PMap[K, V], key: K, value: V) -> PMap[K, V]:
    match pmap:
        case PMapEmpty():
            return PMapBranch(1, _PMAP_EMPTY, key, value, _PMAP_EMPTY)
        case PMapBranch(size, left, branch_key, branch_value, right):
            cmp = compare(key, branch_key)
            if cmp == Ordering.Lt:
                return _pmap_balance(
                    _pmap_put(left, key, value), branch_key, branch_value, right
                )
            elif cmp == Ordering.Gt:
                return _pmap_balance(
                    left, branch_key, branch_value, _pmap_put(right, key, value)
                )
            else:
                return PMapBranch(size, left, key, value, right)
        case _:
            raise Impossible


def _pmap_remove[K, V](pmap: PMap[K, V], key: K) -> PMap[K, V]:
    match pmap:
        case PMapEmpty():
            return pmap
        case PMapBranch(_, left, branch_key, branch_value, right):
            cmp = compare(key, branch_key)
            if cmp == Ordering.Lt:
                new_left = _pmap_remove(left, key)
                if new_left is left:
                    return pmap
                return _pmap_balance(new_left, branch_key, branch_value, right)
            elif cmp == Ordering.Gt:
                new_right = _pmap_remove(right, key)
                if new_right is right:
                    return pmap
                return _pmap_balance(left, branch_key, branch_value, new_right)
            else:
                return _pmap_glue(left, right)
        case _:
            raise Impossible


def _pmap_glue[K, V](left: PMap[K, V], right: PMap[K, V]) -> PMap[K, V]:
    """Join two maps where every key in left is below every key in right."""
    match right:
        case PMapEmpty():
            return left
        case PMapBranch():
            min_key, min_value, rest = _pmap_pop_min(right)
            return _pmap_balance(left, min_key, min_value, rest)
        case _:
            raise Impossible


def _pmap_pop_min[K, V](pmap: PMap[K, V]) -> Tuple[K, V, PMap[K, V]]:
    match pmap:
        case PMapBranch(_, PMapEmpty(), key, value, right):
            return (key, value, right)
        case PMapBranch(_, left, key, value, right):
            min_key, min_value, rest = _pmap_pop_min(left)
            return (min_key, min_value, _pmap_balance(rest, key, value, right))
        case _:
            raise Impossible


def _pmap_node[K, V](
    left: PMap[K, V], key: K, value: V, right: PMap[K, V]
) -> PMap[K, V]:
    return PMapBranch(left.size() + 1 + right.size(), left, key, value, right)


def _weight(pmap: PMap[Any, Any]) -> int:
    return pmap.size() + 1


def _pmap_balance[K, V](
    left: PMap[K, V], key: K, value: V, right: PMap[K, V]
) -> PMap[K, V]:
    left_size = left.size()
    right_size = right.size()
    if _weight(left) > _DELTA * _weight(right):
        match left:
            case PMapBranch(_, ll, lkey, lvalue, lr):
                if _weight(lr) < _RATIO * _weight(ll):
                    # Single rotation right
                    return _pmap_node(
                        ll, lkey, lvalue, _pmap_node(lr, key, value, right)
                    )
                match lr:
                    case PMapBranch(_, lrl, lrkey, lrvalue, lrr):
                        # Double rotation left-right
                        return _pmap_node(
                            _pmap_node(ll, lkey, lvalue, lrl),
                            lrkey,
                            lrvalue,
                            _pmap_node(lrr, key, value, right),
                        )
                    case _:
                        raise Impossible
            case _:
                raise Impossible
    elif _weight(right) > _DELTA * _weight(left):
        match right:
            case PMapBranch(_, rl, rkey, rvalue, rr):
                if _weight(rl) < _RATIO * _weight(rr):
                    # Single rotation left
                    return _pmap_node(
                        _pmap_node(left, key, value, rl), rkey, rvalue, rr
                    )
                match rl:
                    case PMapBranch(_, rll, rlkey, rlvalue, rlr):
                        # Double rotation right-left
                        return _pmap_node(
                            _pmap_node(left, key, value, rll),
                            rlkey,
                            rlvalue,
                            _pmap_node(rlr, rkey, rvalue, rr),
                        )
                    case _:
                        raise Impossible
            case _:
                raise Impossible
    return PMapBranch(left_size + 1 + right_size, left, key, value, right)


def _pmap_map_values[K, V, W](pmap: PMap[K, V], fn: Callable[[V], W]) -> PMap[K, W]:
    match pmap:
        case PMapEmpty():
            return PMap.empty()
        case PMapBranch(size, left, key, value, right):
            new_left = _pmap_map_values(left, fn)
            new_value = fn(value)
            new_right = _pmap_map_values(right, fn)
            return PMapBranch(size, new_left, key, new_value, new_right)
        case _:
            raise Impossible
