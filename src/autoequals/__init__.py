"""
Type-aware structural equality and order-independent hash codes.

    >>> from typing import Iterable
    >>> from autoequals import equals, hash_code
    >>> equals([1, 2, 3], [3, 1, 2], Iterable[int])
    True
    >>> hash_code([1, 2, 3], Iterable[int]) == hash_code([3, 1, 2], Iterable[int])
    True

Debug logging goes through loguru and is disabled by default, call ``logger.enable('autoequals')`` to see it.
"""

from loguru import logger
from .pythonutils import *
from .pythonutils import __all__

logger.disable('autoequals')
