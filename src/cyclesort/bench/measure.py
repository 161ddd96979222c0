"""
Timing and write-count harness for in-place sorters.

Each sample copies the input OUTSIDE the timed block, then times exactly one
call to `sort_in_place(copy, config=...)` with a monotonic ns clock. The
sorter's return value is its write count (None if the algorithm does not
track writes); it is recorded from the first sample, since every sample sorts
the same input.

Public API (stable):
    time_sort_call(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns per completed sample
        "writes": int | None,
        "sorted_ok": bool | None,           # output checked against the oracle
        "status": "ok" | "timeout" | "error",
        "error": str | None,
        "timed_out_on_repeat": int | None,  # 0-based repeat index
    }
"""

from __future__ import annotations

import gc
import time
from typing import Any, Callable, Dict, List, Optional

from cyclesort.validate import oracle_sort

__all__ = ["time_sort_call"]


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., Optional[int]],
    a: List[Any],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    validate: bool = True,
) -> Dict[str, Any]:
    """
    Time repeated calls to `algo_fn(copy_of_a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for records).
    algo_fn : Callable[..., int | None]
        In-place sorter returning its write count, e.g.
        `cyclesort.algorithms.cycle_sort.sort_in_place`.
    a : list
        Input. Never handed to `algo_fn` directly; each call gets a copy.
    config : dict | None
        Passed through unchanged.
    repeats : int
        Number of timed samples.
    warmup : bool
        Make one untimed call first.
    disable_gc : bool
        Collect, then disable GC for the timed loop; prior state is restored.
    timeout_seconds : float
        If one sample exceeds this, mark status="timeout" and stop sampling.
    validate : bool
        Compare the first sample's output against the oracle.

    Returns
    -------
    dict
        See module docstring.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "writes": None,
        "sorted_ok": None,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    # sorter exceptions are recorded in the result, not raised
    if warmup and repeats > 0:
        try:
            algo_fn(list(a), config=config)
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a)
            try:
                t0 = time.perf_counter_ns()
                writes = algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))

            if r == 0:
                result["writes"] = None if writes is None else int(writes)
                if validate:
                    reverse = bool((config or {}).get("reverse", False))
                    result["sorted_ok"] = arg == oracle_sort(a, reverse=reverse)

            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
