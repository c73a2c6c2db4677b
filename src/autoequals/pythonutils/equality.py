"""
Utils for determining equality of values based on their declared type

Handled categories (see :mod:`~autoequals.pythonutils.dispatch`):
    - textual: str, compared by content
    - scalar: int, float, bool, Decimal, datetime, timedelta and fixed-width numpy numbers, compared with '=='
    - sequence: any iterable type, compared as a multiset (order doesn't matter, number of occurrences does)
    - falls back on built-in __eq__
"""

import functools
import operator
import typing
import numpy as np
from dataclasses import dataclass
from .dispatch import ComparisonCategory, classify, value_element_type
from .hashing import type_hash_code
from .sequences import _sequence_mismatch
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Optional, Type
    from typing_extensions import Self


_MAX_STR_LEN = 1000


def equals(a: 'Any', b: 'Any', declared_type: 'Any', selector: 'Optional[str]' = None, raise_err: 'bool' = False) -> 'bool':
    """
    Determines whether a and b are equal when both are considered to be of type `declared_type`.

    The declared type, not the runtime types of a and b, picks how they are compared. For example, two lists declared
    as ``Iterable[int]`` are equal if they hold the same ints in any order, while the same lists declared as ``object``
    are compared with list's own '=='.

    Args:
        a (Any): object to check equality
        b (Any): object to check equality
        declared_type (Any): the type both objects are declared as. Can be a class or a typing generic alias
        selector (Optional[str]): if not None, the name of an attribute (can be a dotted path, eg: 'owner.name') to get
            from both objects and check equality of instead of the objects themselves. `declared_type` is then the
            declared type of that attribute. Defaults to None.
        raise_err (bool): if True, then an ``EqualityError`` will be raised whenever `a` and `b` are unequal, with a
            message describing why. Defaults to False.

    Returns:
        bool: True if the objects are equal
    """
    if selector is not None:
        if not isinstance(selector, str):
            raise TypeError("`selector` arg must be str, not %s" % repr(type(selector).__name__))
        selector = selector.lstrip('.')
        if selector == '':
            selector = None

    if selector is None:
        return type_equal(a, b, declared_type, raise_err=raise_err)

    _failed_obj_name = 'a'
    try:
        _check_a = get_property_value(a, selector)
        _failed_obj_name = 'b'
        _check_b = get_property_value(b, selector)
    except AttributeError:
        raise EqualityCheckingError("Could not use `selector` with value %s on object `%s`" % (repr(selector), _failed_obj_name))

    try:
        return type_equal(_check_a, _check_b, declared_type, raise_err=raise_err)
    except EqualityError:
        raise EqualityError(a, b, "Objects had different sub-objects using `selector` %s" % repr(selector))


def type_equal(a: 'Any', b: 'Any', tp: 'Any', raise_err: 'bool' = False) -> 'bool':
    """Checks equality of a and b using the strategy for declared type `tp`

    ``None`` is only equal to ``None``. Sequence elements are checked recursively using the declared element type.
    """
    if a is b:
        return True

    if a is None or b is None:
        return _eq_check(False, a, b, raise_err, message='Only one of the objects is None')

    category = classify(tp)

    if category is ComparisonCategory.SEQUENCE:
        elem_tp = value_element_type(a, tp)
        if elem_tp is typing.Any:
            elem_tp = value_element_type(b, tp)
        reason = _sequence_mismatch(a, b, eq=functools.partial(type_equal, tp=elem_tp),
            hasher=functools.partial(type_hash_code, tp=elem_tp))
        return _eq_check(reason is None, a, b, raise_err, message=reason)

    elif category is ComparisonCategory.TEXTUAL:
        return _eq_check(a == b, a, b, raise_err, message='Text contents differ')

    elif category is ComparisonCategory.SCALAR:
        return _eq_check(bool(a == b), a, b, raise_err, message=None)

    # Elements of opaque containers can be arrays, where '==' is elementwise
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return _eq_check(np.array_equal(a, b), a, b, raise_err, message='Numpy array_equal found discrepancies')

    return _eq_check(bool(a == b), a, b, raise_err, message='Using built-in __eq__ equality measure')


def get_property_value(obj: 'Any', name: 'str') -> 'Any':
    """Returns the attribute `name` of `obj`. Dotted names are followed through sub-objects"""
    return operator.attrgetter(name)(obj)


@dataclass(frozen=True, eq=False)
class TypedValue:
    """
    A value along with the type it is declared as, which determines how it is compared and hashed.

    Hashable and comparable with '==', so it can be used as a dictionary key or set element. Two TypedValue's are
    equal if they have the same declared type and their values are equal under it.
    """
    value: 'Any'
    declared_type: 'Any'

    @classmethod
    def infer(cls: 'Type[Self]', value: 'Any') -> 'Self':
        """Builds a TypedValue declared as the runtime type of `value`"""
        return cls(value, type(value))

    def equals(self: 'Self', other: 'Any') -> 'bool':
        return type_equal(self.value, other, self.declared_type)

    def hash_code(self: 'Self') -> 'int':
        return type_hash_code(self.value, self.declared_type)

    def __eq__(self: 'Self', other: 'Any') -> 'bool':
        if not isinstance(other, TypedValue):
            return NotImplemented
        return self.declared_type == other.declared_type and self.equals(other.value)

    def __hash__(self: 'Self') -> 'int':
        return self.hash_code()


def _eq_check(checked, a, b, raise_err, message=None):
    """bool equal check, determine whether or not we need to raise an error with info, or just return true/false"""
    if not checked:
        if raise_err:
            raise EqualityError(a, b, message)
        return False
    return True


def _limit_str(a, limit=_MAX_STR_LEN):
    a_str = repr(a)
    return a_str if len(a_str) < limit else (a_str[:limit] + '...')


class EqualityError(Exception):
    """Error raised whenever an :func:`~autoequals.pythonutils.equality.equals` check returns false and `raise_err=True`"""

    def __init__(self, a, b, message=None):
        message = "Values are not equal" if message is None else message
        super().__init__("Object a (%s) is not equal to object b (%s)\na: %s\nb: %s\nMessage: %s" % \
            (repr(type(a).__name__), repr(type(b).__name__), _limit_str(a), _limit_str(b), message))


class EqualityCheckingError(Exception):
    """Error raised whenever there is an unexpected problem attempting to check equality between two objects"""
