"""
Oracle for sorting correctness.

Python's built-in `sorted()` is the ground truth. Cycle sort is unstable, so
when sorting by a key the oracle can only be matched on the key sequence;
records with equal keys may come out in a different order.

Public API (stable):
    oracle_sort(a, *, key=None, reverse=False) -> list
    equals_oracle(a, out) -> bool
    equals_oracle_keys(a, out, key) -> bool
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle", "equals_oracle_keys"]


def oracle_sort(
    a: Sequence[Any],
    *,
    key: Optional[Callable[[Any], Any]] = None,
    reverse: bool = False,
) -> List[Any]:
    """Return a new sorted list; never mutates `a`."""
    return sorted(a, key=key, reverse=reverse)


def equals_oracle(a: Sequence[Any], out: Sequence[Any]) -> bool:
    """True iff `out` is exactly `oracle_sort(a)` (natural ordering)."""
    return list(out) == oracle_sort(a)


def equals_oracle_keys(
    a: Sequence[Any],
    out: Sequence[Any],
    key: Callable[[Any], Any],
    *,
    reverse: bool = False,
) -> bool:
    """
    True iff the keys of `out` match the keys of the oracle output.

    Use this for unstable sorts by key, where only the key sequence is
    determined.
    """
    expected = [key(x) for x in oracle_sort(a, key=key, reverse=reverse)]
    return [key(x) for x in out] == expected
