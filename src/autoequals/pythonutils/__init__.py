from .dispatch import ComparisonCategory, classify, element_type, value_element_type
from .sequences import unsorted_sequences_equal, collection_hash_code
from .hashing import type_hash_code, hash_code
from .equality import equals, type_equal, get_property_value, TypedValue, EqualityError, EqualityCheckingError

__all__ = ['ComparisonCategory', 'classify', 'element_type', 'value_element_type', 'unsorted_sequences_equal',
    'collection_hash_code', 'type_hash_code', 'hash_code', 'equals', 'type_equal', 'get_property_value', 'TypedValue',
    'EqualityError', 'EqualityCheckingError']
