"""
Type constants used to classify declared types for comparison
"""

import collections.abc
import datetime
import decimal
import typing
import numpy as np


# The single type compared as text content
_TEXT_TYPE = str

# Closed set of primitive value types. Membership is by exact type, subclasses and other widths are not scalar
_SCALAR_TYPES = frozenset((
    int, float, bool, decimal.Decimal, datetime.datetime, datetime.timedelta,
    np.int32, np.int64, np.float32, np.float64, np.bool_,
))

# Generic 'iterable of T' capabilities that are matched exactly, parameterised or not
_SEQUENCE_CAPABILITIES = (collections.abc.Iterable, typing.Iterable)

# Iterable types whose own equality is not a multiset of their iteration
_NON_SEQUENCE_ITERABLES = (str, bytes, bytearray, memoryview, collections.abc.Mapping)

# Container origins whose type arguments do not name an element type
_OPAQUE_SEQUENCE_ORIGINS = (np.ndarray,)
