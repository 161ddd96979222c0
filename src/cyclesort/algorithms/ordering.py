"""
Comparator adapters.

Every sorter in this package works from a single strict predicate
`is_less(a, b) -> bool`. Equality is derived from it (neither side is less),
so the same machinery serves natural ordering, three-way comparators and
key functions.

Public API (stable):
    natural_less(a, b) -> bool
    less_from_cmp(cmp) -> IsLess
    less_from_key(key) -> IsLess
    reversed_less(is_less) -> IsLess
    are_equal(a, b, is_less) -> bool
    is_sorted(xs, is_less) -> bool
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

IsLess = Callable[[Any, Any], bool]

__all__ = [
    "IsLess",
    "natural_less",
    "less_from_cmp",
    "less_from_key",
    "reversed_less",
    "are_equal",
    "is_sorted",
]


def natural_less(a: Any, b: Any) -> bool:
    return a < b


def less_from_cmp(cmp: Callable[[Any, Any], int]) -> IsLess:
    """
    Wrap a three-way comparator (negative / zero / positive, the
    `functools.cmp_to_key` convention) as a strict is-less predicate.
    """
    if not callable(cmp):
        raise TypeError(f"cmp must be callable; got {type(cmp).__name__}")

    def is_less(a: Any, b: Any) -> bool:
        return cmp(a, b) < 0

    return is_less


def less_from_key(key: Callable[[Any], Any]) -> IsLess:
    """Order elements by `key(element)` under its natural ordering."""
    if not callable(key):
        raise TypeError(f"key must be callable; got {type(key).__name__}")

    def is_less(a: Any, b: Any) -> bool:
        return key(a) < key(b)

    return is_less


def reversed_less(is_less: IsLess) -> IsLess:
    """Flip an ordering so the largest elements come first."""

    def is_greater(a: Any, b: Any) -> bool:
        return is_less(b, a)

    return is_greater


def are_equal(a: Any, b: Any, is_less: IsLess) -> bool:
    return not is_less(a, b) and not is_less(b, a)


def is_sorted(xs: Sequence[Any], is_less: IsLess) -> bool:
    """Return True iff no element is less than its predecessor."""
    return all(not is_less(xs[i + 1], xs[i]) for i in range(len(xs) - 1))
