"""
Order-independent equality and hash codes for sequences

Sequences are treated as multisets: the order of elements does not matter, but the number of times each element
appears does. Both functions accept an iterable of any kind (list, tuple, set, generator, numpy array, ...), and will
consume one-shot iterators.

Element equality and hashing can be overridden with the `eq` and `hasher` arguments. They must be consistent with one
another (eq(x, y) implies hasher(x) == hasher(y)) for the hash/equality contract to hold.
"""

from loguru import logger
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Callable, Iterable, Optional
    from typing_extensions import Self


    ElementEq = Callable[[Any, Any], bool]
    ElementHasher = Callable[[Any], int]


_HASH_BITS = 64
_HASH_MASK = (1 << _HASH_BITS) - 1

# Starting value of every collection hash, so an empty collection does not hash to the null sentinel 0
_COLLECTION_HASH_SEED = 0xCBF29CE484222325

# Added to every element hash before mixing so the null sentinel 0 still contributes a nonzero amount
_MIX_GAMMA = 0x9E3779B97F4A7C15

# Bucket key of elements the hasher rejects
_UNHASHABLE = object()


def _default_eq(a: 'Any', b: 'Any') -> 'bool':
    return bool(a == b)


def _default_hasher(obj: 'Any') -> 'int':
    return 0 if obj is None else hash(obj)


def unsorted_sequences_equal(seq_a: 'Iterable', seq_b: 'Iterable', eq: 'ElementEq' = _default_eq,
    hasher: 'ElementHasher' = _default_hasher) -> 'bool':
    """
    Determines whether the two sequences contain the same elements the same number of times, in any order.

    Sequences of different lengths are never equal, and their elements are never compared. Two empty sequences are
    equal. A ``None`` element counts as an element, so ``[None]`` and ``[]`` are not equal.

    Args:
        seq_a (Iterable): the first sequence
        seq_b (Iterable): the second sequence
        eq (Callable[[Any, Any], bool]): element equality. Defaults to the elements' own ``==``
        hasher (Callable[[Any], int]): element hash, used to bucket elements before checking `eq`. Elements for which
            this raises a TypeError are compared using `eq` alone. Defaults to ``hash()``, with ``None`` hashing to 0

    Returns:
        bool: True if the sequences are equal as multisets
    """
    return _sequence_mismatch(seq_a, seq_b, eq, hasher) is None


def _sequence_mismatch(seq_a: 'Iterable', seq_b: 'Iterable', eq: 'ElementEq' = _default_eq,
    hasher: 'ElementHasher' = _default_hasher) -> 'Optional[str]':
    """Returns None if the sequences are equal as multisets, otherwise a string describing why they are not"""
    list_a, list_b = list(seq_a), list(seq_b)

    if len(list_a) != len(list_b):
        return "Sequences had different lengths: %d != %d" % (len(list_a), len(list_b))

    table = _FrequencyTable.from_iterable(list_a, eq, hasher)
    for i, element in enumerate(list_b):
        if not table.remove(element):
            return "Element at index %d of b occurs more times in b than in a" % i

    return None


def collection_hash_code(seq: 'Iterable', hasher: 'ElementHasher' = _default_hasher) -> 'int':
    """
    Computes a hash code for the given sequence that does not depend on the order of its elements.

    Each element hash is passed through a 64-bit mixing function and the results are summed. Summing is commutative,
    so any permutation of the sequence hashes the same, while mixing makes repeated elements change the result in a
    way that is unlikely to be cancelled out by other elements.

    Args:
        seq (Iterable): the sequence to hash
        hasher (Callable[[Any], int]): element hash. Defaults to ``hash()``, with ``None`` hashing to 0

    Returns:
        int: a signed 64-bit hash code
    """
    total = _COLLECTION_HASH_SEED
    for element in seq:
        total = (total + _mix64(hasher(element))) & _HASH_MASK

    # Fold back into a signed integer, the same range hash() returns on 64-bit builds
    return total - (1 << _HASH_BITS) if total >= (1 << (_HASH_BITS - 1)) else total


def _mix64(h: 'int') -> 'int':
    """splitmix64 finalizer"""
    h = (h + _MIX_GAMMA) & _HASH_MASK
    h = ((h ^ (h >> 30)) * 0xBF58476D1CE4E5B9) & _HASH_MASK
    h = ((h ^ (h >> 27)) * 0x94D049BB133111EB) & _HASH_MASK
    return h ^ (h >> 31)


class _FrequencyTable:
    """
    Counts occurrences of elements, using a user-defined equality and hash.

    Elements are kept in buckets keyed by their hash, and each bucket is a list of [element, count] pairs that are
    searched linearly using `eq`. Elements that cannot be hashed all share a single bucket. An unhashable element can
    still be equal to a hashable one, so lookups that miss their own bucket fall back on scanning the rest.
    """

    def __init__(self: 'Self', eq: 'ElementEq', hasher: 'ElementHasher'):
        self._eq, self._hasher = eq, hasher
        self._buckets = {}
        self._unhashable = []

    @classmethod
    def from_iterable(cls, elements: 'Iterable', eq: 'ElementEq', hasher: 'ElementHasher') -> 'Self':
        table = cls(eq, hasher)
        for element in elements:
            table.add(element)
        return table

    def add(self: 'Self', element: 'Any') -> 'None':
        """Adds one occurrence of element"""
        key = self._key(element)
        bucket = self._unhashable if key is _UNHASHABLE else self._buckets.setdefault(key, [])
        for entry in bucket:
            if self._eq(entry[0], element):
                entry[1] += 1
                break
        else:
            bucket.append([element, 1])

    def remove(self: 'Self', element: 'Any') -> 'bool':
        """Removes one occurrence of element, returning False if there were none left to remove"""
        key = self._key(element)
        if key is _UNHASHABLE:
            candidates = [self._unhashable, *self._buckets.values()]
        else:
            candidates = [self._buckets.get(key, []), self._unhashable]

        for bucket in candidates:
            for i, entry in enumerate(bucket):
                if self._eq(entry[0], element):
                    entry[1] -= 1
                    if entry[1] == 0:
                        del bucket[i]
                    return True
        return False

    def _key(self: 'Self', element: 'Any') -> 'Any':
        try:
            return self._hasher(element)
        except TypeError:
            logger.debug("Element of type {} is unhashable, comparing it by equality only", type(element).__name__)
            return _UNHASHABLE
