"""
Classifies declared types into the comparison category used to check equality and compute hash codes

Categories:
    - TEXTUAL: exactly ``str``, compared by content
    - SCALAR: exactly one of a closed set of primitive value types (see ``pytypes._SCALAR_TYPES``)
    - SEQUENCE: ``Iterable``/``Iterable[T]``, or any iterable class or generic alias of one (``list[int]``,
        ``set``, ``np.ndarray``, ...), compared as a multiset
    - FALLBACK: everything else, compared with the value's own ``==`` and ``hash()``

The declared type decides the category, never the runtime type of the value being compared.
"""

import collections.abc
import functools
import typing
from enum import Enum
import numpy as np
from loguru import logger
from .pytypes import _TEXT_TYPE, _SCALAR_TYPES, _SEQUENCE_CAPABILITIES, _NON_SEQUENCE_ITERABLES, \
    _OPAQUE_SEQUENCE_ORIGINS
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any


class ComparisonCategory(Enum):
    TEXTUAL = 'textual'
    SCALAR = 'scalar'
    SEQUENCE = 'sequence'
    FALLBACK = 'fallback'


def classify(tp: 'Any') -> 'ComparisonCategory':
    """Returns the comparison category of the given declared type.

    Total over all inputs: anything that is not recognized (including non-type objects) is FALLBACK. Results are cached
    for hashable type descriptors.

    NOTE: unions are not unwrapped, so a nullable collection declared as ``Optional[Iterable[int]]`` is FALLBACK and
    compared with its own (ordered) '=='. Declare it as ``Iterable[int]`` instead, None is handled the same either way.

    Args:
        tp (Any): the declared type. Can be a class, a typing generic alias (``typing.Iterable[int]``), or a builtin
            generic alias (``list[str]``)

    Returns:
        ComparisonCategory: the category to dispatch on
    """
    try:
        return _classify_cached(tp)
    except TypeError:
        # Unhashable type descriptor, can't use the cache
        return _classify(tp)


@functools.lru_cache(maxsize=None)
def _classify_cached(tp):
    return _classify(tp)


def _classify(tp):
    if tp is _TEXT_TYPE:
        return ComparisonCategory.TEXTUAL

    if isinstance(tp, type) and tp in _SCALAR_TYPES:
        return ComparisonCategory.SCALAR

    if tp is typing.Any or tp is object:
        return ComparisonCategory.FALLBACK

    if _is_sequence_type(tp):
        return ComparisonCategory.SEQUENCE

    logger.debug("Declared type {!r} is not textual, scalar or iterable, using fallback equality", tp)
    return ComparisonCategory.FALLBACK


def _is_sequence_type(tp):
    """True if tp is exactly the generic iterable capability, or structurally conforms to it"""
    origin = typing.get_origin(tp)

    # Exact match, either bare or parameterised
    if any(tp is c or origin is c for c in _SEQUENCE_CAPABILITIES):
        return True

    # Structural conformance of the class itself, or of the generic alias' origin
    cls = origin if origin is not None else tp
    if not isinstance(cls, type):
        return False
    try:
        return issubclass(cls, collections.abc.Iterable) and not issubclass(cls, _NON_SEQUENCE_ITERABLES)
    except TypeError:
        return False


def element_type(tp: 'Any') -> 'Any':
    """Returns the declared element type of a sequence type, or ``typing.Any`` if there is none to be found

    The element type is the first type argument, eg: ``int`` for ``Iterable[int]``, ``set[int]`` and
    ``tuple[int, ...]``. Heterogeneous tuples (``tuple[int, str]``) and non-sequence types have no element type.
    """
    if classify(tp) is not ComparisonCategory.SEQUENCE:
        return typing.Any

    origin = typing.get_origin(tp)
    if origin is None or any(origin is o for o in _OPAQUE_SEQUENCE_ORIGINS):
        return typing.Any

    args = typing.get_args(tp)
    if not args:
        return typing.Any

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return args[0] if len(args) == 1 else typing.Any

    return args[0]


def value_element_type(value: 'Any', tp: 'Any') -> 'Any':
    """Same as :func:`element_type`, but looks at `value` when the declared type can't name its elements

    Rows of a multi-dimensional numpy array are themselves arrays, so they are compared and hashed as sequences.
    """
    elem_tp = element_type(tp)
    if elem_tp is typing.Any and classify(tp) is ComparisonCategory.SEQUENCE and isinstance(value, np.ndarray) \
            and value.ndim > 1:
        return np.ndarray
    return elem_tp
