from mapext.common import Box, Impossible, Ordering, Unit
from mapext.ext import (
    all_entries,
    any_entry,
    filter_group_by,
    filter_map,
    find,
    frequencies,
    from_list_by,
    from_list_dedupe_by,
    group_by,
    invert,
    keep_only,
    map_keys,
    partition,
    remove_many,
    remove_when,
    unzip,
)
from mapext.map import PMap
from mapext.set import PSet

__all__ = [
    "Box",
    "Impossible",
    "Ordering",
    "PMap",
    "PSet",
    "Unit",
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
