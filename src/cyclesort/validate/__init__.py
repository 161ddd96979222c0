"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_sort
        equals_oracle
        equals_oracle_keys

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_permutation
        permutation_counter_diff
        count_misplaced
        assert_no_mutation
"""

from .oracle import ORACLE_NAME, equals_oracle, equals_oracle_keys, oracle_sort
from .properties import (
    assert_no_mutation,
    count_misplaced,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    permutation_counter_diff,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "equals_oracle_keys",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "count_misplaced",
    "assert_no_mutation",
]
