"""
Sorting algorithms.

Each algorithm module exposes the benchmark contract
    sort(a, *, config=None) -> list                 # never mutates `a`
    sort_in_place(a, *, config=None) -> int | None  # writes, if tracked
so the runner can resolve it by name as `cyclesort.algorithms.<name>`.

The in-place cycle sort entry points are re-exported from `cyclesort`.
"""
