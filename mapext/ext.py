"""Helper operations over persistent ordered maps.

Each function builds a fresh result by folding over its input, starting from
an empty map. Inputs are never modified. Wherever two source entries land on
the same result key, the one visited later wins: sequences are visited left
to right, maps and sets in ascending key order.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from mapext.common import Box
from mapext.map import PMap
from mapext.set import PSet

__all__ = [
    "all_entries",
    "any_entry",
    "filter_group_by",
    "filter_map",
    "find",
    "frequencies",
    "from_list_by",
    "from_list_dedupe_by",
    "group_by",
    "invert",
    "keep_only",
    "map_keys",
    "partition",
    "remove_many",
    "remove_when",
    "unzip",
]


def group_by[K, T](key_of: Callable[[T], K], items: Iterable[T]) -> PMap[K, List[T]]:
    """Group items into buckets by the key each one produces.

    Example:
        >>> group_by(len, ["tree", "apple", "leaf"])
        PMap({4: ['tree', 'leaf'], 5: ['apple']})

    Args:
        key_of: Extracts the grouping key from an item.
        items: The items to group. Their order is kept inside each bucket.

    Returns:
        A map from every key that occurs to the list of items producing it.
    """
    box: Box[PMap[K, List[T]]] = Box(PMap.empty())
    for item in items:
        _add_to_bucket(box, key_of(item), item)
    return box.value


def filter_group_by[K, T](
    key_of: Callable[[T], Optional[K]], items: Iterable[T]
) -> PMap[K, List[T]]:
    """Like group_by, but items whose key is None are left out."""
    box: Box[PMap[K, List[T]]] = Box(PMap.empty())
    for item in items:
        key = key_of(item)
        if key is not None:
            _add_to_bucket(box, key, item)
    return box.value


def _add_to_bucket[K, T](box: Box[PMap[K, List[T]]], key: K, item: T) -> None:
    # Buckets are fresh lists, only appended to before the map is returned
    bucket = box.value.lookup(key)
    if bucket is None:
        box.value = box.value.put(key, [item])
    else:
        bucket.append(item)


def from_list_by[K, T](key_of: Callable[[T], K], items: Iterable[T]) -> PMap[K, T]:
    """Index items by the key each one produces.

    Example:
        >>> from_list_by(len, ["tree", "apple", "leaf"])
        PMap({4: 'leaf', 5: 'apple'})

    Args:
        key_of: Extracts the key from an item.
        items: The items to index, visited left to right.

    Returns:
        A map from each key to the last item that produced it.
    """
    box: Box[PMap[K, T]] = Box(PMap.empty())
    for item in items:
        key = key_of(item)
        if box.value.contains(key):
            logging.debug("from_list_by: key %r reassigned to %r", key, item)
        box.value = box.value.put(key, item)
    return box.value


def from_list_dedupe_by[K, T](
    combine: Callable[[T, T], T], key_of: Callable[[T], K], items: Iterable[T]
) -> PMap[K, T]:
    """Index items by key, merging items that share a key.

    Args:
        combine: Called as combine(existing, item) when item's key is already
            present; its result is stored under the key.
        key_of: Extracts the key from an item.
        items: The items to index, visited left to right.
    """
    box: Box[PMap[K, T]] = Box(PMap.empty())
    for item in items:
        key = key_of(item)
        if box.value.contains(key):
            box.value = box.value.put(key, combine(box.value.get(key), item))
        else:
            box.value = box.value.put(key, item)
    return box.value


def frequencies[T](items: Iterable[T]) -> PMap[T, int]:
    """Count how many times each distinct item occurs."""
    box: Box[PMap[T, int]] = Box(PMap.empty())
    for item in items:
        box.value = box.value.put(item, box.value.get(item, 0) + 1)
    return box.value


def remove_when[K, V](
    predicate: Callable[[K, V], bool], pmap: PMap[K, V]
) -> PMap[K, V]:
    """Drop the entries satisfying the predicate, keeping all others."""
    return pmap.filter(lambda key, value: not predicate(key, value))


def remove_many[K, V](keys: PSet[K], pmap: PMap[K, V]) -> PMap[K, V]:
    """Remove every key in the set. Keys the map lacks are ignored."""
    return keys.fold(lambda acc, key: acc.remove(key), pmap)


def keep_only[K, V](keys: PSet[K], pmap: PMap[K, V]) -> PMap[K, V]:
    """Keep only the entries whose key is in the set.

    This is the complement of remove_many: for any set and map, the two
    results split the map's keys between them with no overlap.
    """

    def step(acc: PMap[K, V], key: K) -> PMap[K, V]:
        if pmap.contains(key):
            return acc.put(key, pmap.get(key))
        return acc

    return keys.fold(step, PMap.empty())


def map_keys[K, K2, V](fn: Callable[[K], K2], pmap: PMap[K, V]) -> PMap[K2, V]:
    """Replace every key with fn(key), keeping values unchanged.

    Example:
        >>> map_keys(lambda k: k + 1, PMap.mk([(5, "Jack"), (10, "Jill")]))
        PMap({6: 'Jack', 11: 'Jill'})

    When fn sends several keys to the same new key, the entry with the
    largest original key survives.

    Args:
        fn: Maps an old key to its new key.
        pmap: The source map.

    Returns:
        A map keyed by the transformed keys.
    """

    def step(acc: PMap[K2, V], key: K, value: V) -> PMap[K2, V]:
        new_key = fn(key)
        if acc.contains(new_key):
            logging.debug(
                "map_keys: %r overwrites an earlier entry at %r", key, new_key
            )
        return acc.put(new_key, value)

    return pmap.fold_with_key(step, PMap.empty())


def filter_map[K, V, W](
    fn: Callable[[K, V], Optional[W]], pmap: PMap[K, V]
) -> PMap[K, W]:
    """Transform values and drop entries in a single pass.

    Entries for which fn returns None are dropped; all others keep their key
    and take fn's result as their new value.

    None always means "drop", so an entry cannot be kept with None as its
    value: filter_map(lambda _, v: v, m) == m only holds when no value in
    m is None.
    """

    def step(acc: PMap[K, W], key: K, value: V) -> PMap[K, W]:
        new_value = fn(key, value)
        return acc if new_value is None else acc.put(key, new_value)

    return pmap.fold_with_key(step, PMap.empty())


def invert[K, V](pmap: PMap[K, V]) -> PMap[V, K]:
    """Swap keys and values.

    Example:
        >>> invert(PMap.singleton("key", "value"))
        PMap({'value': 'key'})

    Values must be totally ordered. When several keys share a value, the
    largest of those keys becomes the value's entry in the result.
    """

    def step(acc: PMap[V, K], key: K, value: V) -> PMap[V, K]:
        if acc.contains(value):
            logging.debug("invert: %r overwrites an earlier key for %r", key, value)
        return acc.put(value, key)

    return pmap.fold_with_key(step, PMap.empty())


def find[K, V](
    predicate: Callable[[K, V], bool], pmap: PMap[K, V]
) -> Optional[Tuple[K, V]]:
    """Find the entry with the smallest key satisfying the predicate.

    Iteration stops at the first match.

    Example:
        >>> find(lambda _, v: v == "Jill", PMap.mk([(9, "Jill"), (7, "Jill")]))
        (7, 'Jill')

    Returns:
        The matching (key, value) pair, or None if no entry matches.
    """
    for key, value in pmap.items():
        if predicate(key, value):
            return (key, value)
    return None


def any_entry[K, V](predicate: Callable[[K, V], bool], pmap: PMap[K, V]) -> bool:
    return find(predicate, pmap) is not None


def all_entries[K, V](predicate: Callable[[K, V], bool], pmap: PMap[K, V]) -> bool:
    return find(lambda key, value: not predicate(key, value), pmap) is None


def partition[K, V](
    predicate: Callable[[K, V], bool], pmap: PMap[K, V]
) -> Tuple[PMap[K, V], PMap[K, V]]:
    """Split a map into (entries satisfying predicate, all other entries).

    The predicate is called exactly once per entry.
    """
    kept: Box[PMap[K, V]] = Box(PMap.empty())
    dropped: Box[PMap[K, V]] = Box(PMap.empty())
    for key, value in pmap.items():
        target = kept if predicate(key, value) else dropped
        target.value = target.value.put(key, value)
    return (kept.value, dropped.value)


def unzip[K, A, B](pmap: PMap[K, Tuple[A, B]]) -> Tuple[PMap[K, A], PMap[K, B]]:
    """Split a map of pairs into a map of first halves and one of second halves."""
    firsts = pmap.map_values(lambda pair: pair[0])
    seconds = pmap.map_values(lambda pair: pair[1])
    return (firsts, seconds)
