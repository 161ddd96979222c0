"""
Cycle sort: an unstable, in-place comparison sort that minimizes writes.

The permutation taking the input to sorted order is decomposed into cycles,
and each cycle is rotated into place one element at a time. Every element
that is not already in its final position is written exactly once, so the
write count equals the number of misplaced positions. Comparisons are
O(n^2) in every case, including presorted input.

Public API (stable):
    cycle_sort(seq, *, key=None, reverse=False) -> int
    cycle_sort_by(seq, cmp) -> int
    cycle_sort_by_key(seq, key) -> int

All three mutate `seq` in place and return the number of writes made.
`seq` may be any object supporting len(), integer indexing and item
assignment (list, bytearray, array.array, 1-D numpy.ndarray, ...).

Benchmark adapters (see `cyclesort.algorithms`):
    sort(a, *, config=None) -> list         # new list, `a` untouched
    sort_in_place(a, *, config=None) -> int # writes

Notes
-----
- If the comparator or key function raises, the exception propagates and
  `seq` is left partially permuted: same elements, some order.
- Behaviour under an inconsistent comparator is unspecified.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, MutableSequence, Optional

from .ordering import (
    IsLess,
    are_equal,
    less_from_cmp,
    less_from_key,
    natural_less,
    reversed_less,
)

__all__ = [
    "cycle_sort",
    "cycle_sort_by",
    "cycle_sort_by_key",
    "sort",
    "sort_in_place",
]

_CONFIG_KEYS = {"reverse"}


def cycle_sort(
    seq: MutableSequence[Any],
    *,
    key: Optional[Callable[[Any], Any]] = None,
    reverse: bool = False,
) -> int:
    """
    Sort `seq` in place by natural ordering and return the number of writes.

    Parameters
    ----------
    seq : mutable sequence
        Sequence to sort. Elements must be mutually comparable with `<`
        (or their keys must be, when `key` is given).
    key : callable, optional
        Extract a comparison key from each element, as in `list.sort`.
    reverse : bool
        Sort in descending order.

    Returns
    -------
    int
        Number of element writes performed.

    Examples
    --------
    >>> a = [1, 4, 1, 5, 9, 2]
    >>> cycle_sort(a)
    5
    >>> a
    [1, 1, 2, 4, 5, 9]
    """
    is_less = natural_less if key is None else less_from_key(key)
    if reverse:
        is_less = reversed_less(is_less)
    return _cycle_impl(seq, is_less)


def cycle_sort_by(seq: MutableSequence[Any], cmp: Callable[[Any, Any], int]) -> int:
    """
    Sort `seq` in place with a three-way comparator and return the writes.

    `cmp(a, b)` returns a negative number if a < b, zero if they are equal
    and a positive number if a > b.

    >>> a = ["davidii", "demissa", "deltoidea", "decapetala", "dahurica"]
    >>> cycle_sort_by(a, lambda x, y: (x < y) - (x > y))
    4
    >>> a
    ['demissa', 'deltoidea', 'decapetala', 'davidii', 'dahurica']
    """
    return _cycle_impl(seq, less_from_cmp(cmp))


def cycle_sort_by_key(seq: MutableSequence[Any], key: Callable[[Any], Any]) -> int:
    """
    Sort `seq` in place by `key(element)` and return the writes.

    >>> a = ["zwölf", "zzxjoanw", "zymbel"]
    >>> cycle_sort_by_key(a, len)
    2
    >>> a
    ['zwölf', 'zymbel', 'zzxjoanw']
    """
    return _cycle_impl(seq, less_from_key(key))


def _cycle_impl(seq: MutableSequence[Any], is_less: IsLess) -> int:
    n = len(seq)
    if n < 2:
        return 0

    writes = 0
    for start in range(n - 1):
        item = seq[start]
        pos = _rank(seq, item, start, is_less)

        # already in place relative to the rest
        if pos == start:
            continue

        pos = _skip_duplicates(seq, item, pos, is_less)
        item = _place(seq, item, pos)
        writes += 1

        # Until the cycle closes, seq[start] still holds a stale copy of the
        # element placed first; put the held item there if a comparison fails.
        try:
            while pos != start:
                pos = _rank(seq, item, start, is_less)
                pos = _skip_duplicates(seq, item, pos, is_less)
                item = _place(seq, item, pos)
                writes += 1
        except BaseException:
            seq[start] = item
            raise

    return writes


def _place(seq: MutableSequence[Any], item: Any, pos: int) -> Any:
    """Write `item` at `pos` and return the element it displaced."""
    displaced = seq[pos]
    seq[pos] = item
    return displaced


def _rank(seq: MutableSequence[Any], item: Any, start: int, is_less: IsLess) -> int:
    """`start` plus the number of elements after `start` strictly less than `item`."""
    pos = start
    for i in range(start + 1, len(seq)):
        if is_less(seq[i], item):
            pos += 1
    return pos


def _skip_duplicates(seq: MutableSequence[Any], item: Any, pos: int, is_less: IsLess) -> int:
    # place `item` after any equal elements already sitting in its slot range
    while are_equal(item, seq[pos], is_less):
        pos += 1
    return pos


# ------------------------- benchmark adapters ------------------------- #

def _parse_config(config: Optional[Dict[str, Any]]) -> bool:
    if config is None:
        return False
    if not isinstance(config, dict):
        raise ValueError("config must be a dict or None")
    unknown = set(config) - _CONFIG_KEYS
    if unknown:
        raise ValueError(
            f"Unknown cycle_sort config keys: {sorted(unknown)}. Supported: {sorted(_CONFIG_KEYS)}"
        )
    return bool(config.get("reverse", False))


def sort(a: List[Any], *, config: Optional[Dict[str, Any]] = None) -> List[Any]:
    """Return a new cycle-sorted list; `a` is not mutated."""
    out = list(a)
    cycle_sort(out, reverse=_parse_config(config))
    return out


def sort_in_place(a: List[Any], *, config: Optional[Dict[str, Any]] = None) -> int:
    """Cycle-sort `a` in place and return the number of writes."""
    return cycle_sort(a, reverse=_parse_config(config))
