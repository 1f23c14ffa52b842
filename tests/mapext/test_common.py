"""Tests for the shared comparison helpers."""

from mapext.common import Box, Ordering, Unit, compare, compare_lex


def test_compare_numbers():
    assert compare(1, 2) == Ordering.Lt
    assert compare(2, 1) == Ordering.Gt
    assert compare(1, 1) == Ordering.Eq


def test_compare_mixed_int_float():
    """Ints and floats compare by value through the operators."""
    assert compare(1, 1.0) == Ordering.Eq
    assert compare(1, 1.5) == Ordering.Lt
    assert compare(2.5, 2) == Ordering.Gt


def test_compare_strings_and_tuples():
    assert compare("apple", "banana") == Ordering.Lt
    assert compare((1, "b"), (1, "a")) == Ordering.Gt
    assert compare((1, "a"), (1, "a")) == Ordering.Eq


def test_compare_lex_equal_sequences():
    assert compare_lex(iter([1, 2, 3]), iter([1, 2, 3])) == Ordering.Eq
    assert compare_lex(iter([]), iter([])) == Ordering.Eq


def test_compare_lex_prefix_is_smaller():
    assert compare_lex(iter([1, 2]), iter([1, 2, 3])) == Ordering.Lt
    assert compare_lex(iter([1, 2, 3]), iter([1, 2])) == Ordering.Gt


def test_compare_lex_first_difference_decides():
    assert compare_lex(iter([1, 5]), iter([2, 0, 0])) == Ordering.Lt
    assert compare_lex(iter([3]), iter([2, 9])) == Ordering.Gt


def test_box_holds_updates():
    box = Box(0)
    box.value = box.value + 5
    assert box.value == 5


def test_unit_singleton():
    assert Unit.instance() is Unit.instance()
    assert Unit.instance() == Unit()


def test_lex_ordered_derives_all_operators():
    from mapext.set import PSet

    small = PSet.mk([1, 2])
    large = PSet.mk([1, 3])

    assert small < large
    assert small <= large
    assert large > small
    assert large >= small
    assert small == PSet.mk([2, 1])
    assert small != large
    assert len(small) == 2
    assert bool(small)
    assert not PSet.empty()
    assert list(iter(large)) == [1, 3]
