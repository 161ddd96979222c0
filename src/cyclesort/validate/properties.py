"""
Property helpers for validating sorting results.

Used by the test-suite and by the benchmark runner's sanity checks.

Public API (stable):
    is_nondecreasing(xs, *, key=None) -> bool
    first_nondecreasing_violation_index(xs, *, key=None) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    count_misplaced(xs, *, key=None) -> int
    assert_no_mutation(before, after) -> None

Notes
-----
- Permutation checks use `collections.Counter`, so elements must be hashable.
- `count_misplaced` is the exact number of writes cycle sort performs: every
  position whose value differs from the sorted output is written once, and
  no other position is touched.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Optional, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "count_misplaced",
    "assert_no_mutation",
]

KeyFn = Optional[Callable[[Any], Any]]


def _keys(xs: Sequence[Any], key: KeyFn) -> Sequence[Any]:
    return xs if key is None else [key(x) for x in xs]


def is_nondecreasing(xs: Sequence[Any], *, key: KeyFn = None) -> bool:
    """Return True iff key(xs[i]) <= key(xs[i+1]) for all i."""
    return first_nondecreasing_violation_index(xs, key=key) is None


def first_nondecreasing_violation_index(xs: Sequence[Any], *, key: KeyFn = None) -> int | None:
    """
    Return the first index i where xs[i] > xs[i+1], or None if nondecreasing.

    Only `<` is used, so this works for any element type cycle sort accepts:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    ks = _keys(xs, key)
    for i in range(len(ks) - 1):
        if ks[i + 1] < ks[i]:
            return i
    return None


def is_permutation(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Return True iff `a` and `b` hold the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Any], b: Sequence[Any]) -> Dict[Any, int]:
    """
    Return value -> (count in a) - (count in b), omitting zero entries.

    An empty dict means identical multiplicities.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def count_misplaced(xs: Sequence[Any], *, key: KeyFn = None) -> int:
    """
    Number of positions whose key differs from the sorted output.

    Sorting leaves equal keys in one contiguous run, so a position counts as
    placed whenever its key matches the key the sorted sequence has there.
    """
    ks = list(_keys(xs, key))
    return sum(1 for got, want in zip(ks, sorted(ks)) if got != want)


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert that two sequences are element-wise equal, i.e. an algorithm that
    promises a fresh output did not touch its input.

    Raises AssertionError naming the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x}, after={y}")
