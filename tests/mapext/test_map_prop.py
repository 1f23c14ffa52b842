"""Property-based tests for PMap and PSet using Hypothesis."""

from typing import List, Tuple

from hypothesis import assume, given
from hypothesis import strategies as st

from mapext.map import PMap
from mapext.set import PSet
from tests.mapext.hypo import configure_hypo

configure_hypo()


@st.composite
def map_strategy(
    draw, key_strategy=st.integers(), value_strategy=st.integers()
) -> PMap[int, int]:
    pairs = draw(
        st.lists(st.tuples(key_strategy, value_strategy), min_size=0, max_size=30)
    )
    return PMap.mk(pairs)


@given(st.lists(st.tuples(st.integers(), st.integers()), max_size=50))
def test_mk_matches_dict_model(pairs: List[Tuple[int, int]]):
    """Building from pairs agrees with a dict built the same way, sorted by key."""
    pmap = PMap.mk(pairs)
    expected = dict(pairs)

    assert list(pmap.items()) == sorted(expected.items())
    assert pmap.size() == len(expected)


@given(map_strategy(), st.integers(), st.integers())
def test_put_then_get(pmap, key, value):
    new_pmap = pmap.put(key, value)

    assert new_pmap.get(key) == value
    keys = list(new_pmap.keys())
    assert keys == sorted(keys)
    assert new_pmap.size() == pmap.size() + (0 if pmap.contains(key) else 1)


@given(map_strategy(), st.integers())
def test_remove_then_missing(pmap, key):
    new_pmap = pmap.remove(key)

    assert not new_pmap.contains(key)
    assert dict(new_pmap.items()) == {k: v for k, v in pmap.items() if k != key}


@given(map_strategy(), st.integers())
def test_remove_absent_key_is_noop(pmap, key):
    assume(not pmap.contains(key))
    assert pmap.remove(key) is pmap


@given(map_strategy())
def test_filter_matches_comprehension(pmap):
    filtered = pmap.filter(lambda k, v: (k + v) % 2 == 0)
    assert list(filtered.items()) == [
        (k, v) for k, v in pmap.items() if (k + v) % 2 == 0
    ]


@given(st.lists(st.integers(), max_size=50))
def test_set_matches_builtin_set(values: List[int]):
    pset = PSet.mk(values)
    assert pset.list() == sorted(set(values))
    for value in values:
        assert pset.contains(value)
