"""
Tests for the autoequals.pythonutils.sequences file.
"""

from autoequals.pythonutils.sequences import unsorted_sequences_equal, collection_hash_code
from itertools import permutations
import numpy as np
import pytest


class _Explosive:
    """Blows up if anyone tries to compare or hash it"""
    def __eq__(self, other):
        raise RuntimeError("_Explosive was compared")

    def __hash__(self):
        raise RuntimeError("_Explosive was hashed")


def test_empty():
    assert unsorted_sequences_equal([], [])
    assert unsorted_sequences_equal((), set())
    assert not unsorted_sequences_equal([], [1])


def test_order_independence():
    """Every permutation should be equal and hash the same"""
    seq = [1, 2, 2, 'x', None, (3, 4)]
    expected_hash = collection_hash_code(seq)
    for perm in permutations(seq):
        assert unsorted_sequences_equal(seq, perm)
        assert unsorted_sequences_equal(perm, seq)
        assert collection_hash_code(perm) == expected_hash


def test_multiplicity():
    assert not unsorted_sequences_equal(['a'], ['a', 'a'])
    assert not unsorted_sequences_equal([1, 1, 2], [1, 2, 2])
    assert not unsorted_sequences_equal([1, 2, 2], [1, 1, 2])
    assert collection_hash_code(['a']) != collection_hash_code(['a', 'a'])
    assert collection_hash_code([1, 1, 2]) != collection_hash_code([1, 2, 2])


def test_different_lengths_short_circuit():
    """Elements would raise if compared or hashed, so getting False back means they never were"""
    assert not unsorted_sequences_equal([_Explosive()], [_Explosive(), _Explosive()])
    assert not unsorted_sequences_equal([_Explosive(), _Explosive()], [])


def test_none_elements():
    """A None element is still an element"""
    assert not unsorted_sequences_equal([None], [])
    assert not unsorted_sequences_equal([1, None], [1])
    assert unsorted_sequences_equal([None, 1], [1, None])
    assert not unsorted_sequences_equal([None, None], [None, 0])
    assert collection_hash_code([None]) != collection_hash_code([])


def test_iterators():
    """One-shot iterators are consumed once and still compared correctly"""
    assert unsorted_sequences_equal(iter([1, 2, 3]), (x for x in [3, 2, 1]))
    assert not unsorted_sequences_equal(iter([1, 2, 3]), (x for x in [3, 2]))
    assert collection_hash_code(x for x in [1, 2, 3]) == collection_hash_code({3, 2, 1})


def test_mixed_containers():
    assert unsorted_sequences_equal([1, 2, 3], (3, 2, 1))
    assert unsorted_sequences_equal({1, 2, 3}, [2, 3, 1])
    assert unsorted_sequences_equal(np.array([1, 2, 3]), [3, 1, 2])
    assert collection_hash_code(np.array([1, 2, 3])) == collection_hash_code([3, 1, 2])


def test_unhashable_elements():
    """Unhashable elements are matched using equality alone"""
    assert unsorted_sequences_equal([[1], [2], {'a': 1}], [{'a': 1}, [2], [1]])
    assert not unsorted_sequences_equal([[1], [2]], [[1], [1]])
    assert not unsorted_sequences_equal([[1, 2]], [[2, 1]])


def test_unhashable_matches_hashable():
    """Equal elements are matched even when only one of them can be hashed"""
    assert unsorted_sequences_equal([frozenset({1})], [{1}])
    assert unsorted_sequences_equal([{1}], [frozenset({1})])
    assert unsorted_sequences_equal([frozenset({1}), {2}, 3], [3, frozenset({2}), {1}])
    assert not unsorted_sequences_equal([frozenset({1}), frozenset({1})], [{1}, {2}])


def test_custom_eq_and_hasher():
    """Case-insensitive strings"""
    eq = lambda a, b: a.lower() == b.lower()
    hasher = lambda s: hash(s.lower())

    assert unsorted_sequences_equal(['A', 'b'], ['B', 'a'], eq=eq, hasher=hasher)
    assert not unsorted_sequences_equal(['A', 'b'], ['B', 'b'], eq=eq, hasher=hasher)
    assert collection_hash_code(['A', 'b'], hasher=hasher) == collection_hash_code(['B', 'a'], hasher=hasher)


def test_hash_range():
    for seq in [[], [0], [-1], list(range(1000)), ['apples'] * 50]:
        h = collection_hash_code(seq)
        assert isinstance(h, int)
        assert -(1 << 63) <= h < (1 << 63)


def test_empty_hash_is_not_null_sentinel():
    assert collection_hash_code([]) != 0
    assert collection_hash_code([]) == collection_hash_code(())


def test_non_iterable_propagates():
    with pytest.raises(TypeError):
        unsorted_sequences_equal(1, [1])
    with pytest.raises(TypeError):
        collection_hash_code(1)
