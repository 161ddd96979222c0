"""
In-place cycle sort, minimizing writes to the sequence being sorted.

    >>> from cyclesort import sort, sort_by
    >>> a = [5, 1, 4, 2, 8]
    >>> sort(a)
    3
    >>> a
    [1, 2, 4, 5, 8]

`sort` is `cycle_sort` (natural ordering, optional `key`/`reverse`) and
`sort_by` is `cycle_sort_by` (three-way comparator). Every entry point
returns the number of writes performed.
"""

from .algorithms.cycle_sort import cycle_sort, cycle_sort_by, cycle_sort_by_key
from .algorithms.ordering import are_equal, is_sorted

sort = cycle_sort
sort_by = cycle_sort_by

__version__ = "0.1.0"

__all__ = [
    "cycle_sort",
    "cycle_sort_by",
    "cycle_sort_by_key",
    "sort",
    "sort_by",
    "are_equal",
    "is_sorted",
]
