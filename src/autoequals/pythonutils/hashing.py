"""
Hash codes for values, chosen by declared type.

Hash codes are consistent with :func:`~autoequals.pythonutils.equality.type_equal` under the same declared type: equal
values always have equal hash codes. Sequence hash codes do not depend on element order.
"""

import functools
from .dispatch import ComparisonCategory, classify, value_element_type
from .sequences import collection_hash_code
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any


# Hash code of a missing value, regardless of declared type
NULL_HASH = 0


def type_hash_code(obj: 'Any', tp: 'Any') -> 'int':
    """Computes the hash code of `obj` using the strategy for declared type `tp`.

    NOTE: ``None`` always hashes to 0. Callers combining hash codes should keep in mind that a present value can also
    hash to 0 (eg: ``0`` itself under ``int``)

    Args:
        obj (Any): the value to hash
        tp (Any): the declared type of `obj`, used to pick how it is hashed. See
            :func:`~autoequals.pythonutils.dispatch.classify`

    Returns:
        int: the hash code
    """
    if obj is None:
        return NULL_HASH

    category = classify(tp)

    if category is ComparisonCategory.SEQUENCE:
        elem_tp = value_element_type(obj, tp)
        return collection_hash_code(obj, hasher=functools.partial(type_hash_code, tp=elem_tp))

    # TEXTUAL, SCALAR and FALLBACK all use the value's own hash, which is content based for str
    return hash(obj)


hash_code = type_hash_code
