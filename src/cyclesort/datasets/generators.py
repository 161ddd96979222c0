"""
Dataset generators for cycle sort benchmarks.

Cycle sort always costs O(n^2) comparisons, but its write count depends
entirely on how many elements are out of place, so the distributions below
are chosen to span that range:

- "sorted":        [0, 1, ..., n-1]; zero writes.
- "reversed":      [n-1, ..., 0]; every position but the middle is written.
- "nearly_sorted": sorted, then ceil(swap_frac * n) random index swaps.
- "random":        integers drawn uniformly from an inclusive range.
- "few_uniques":   up to k distinct values, heavy on duplicates (exercises
                   the duplicate-skipping step).

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- `spec` is {"dist": <name>, "params": {...}}; "params" may be omitted.
- Ranges given as params["range"] == [lo, hi] are inclusive on both ends.
- Deterministic dists ("sorted", "reversed") ignore `rng`.
- Returns a Python list[int]; the sorters stay NumPy-agnostic.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "sorted",
    "reversed",
    "nearly_sorted",
    "random",
    "few_uniques",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset"]

_DEFAULT_RANGE: Tuple[int, int] = (0, 2**31 - 1)


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements. Must be >= 0.
    spec : dict
        {"dist": "random", "params": {"range": [lo, hi]}}
        {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
        {"dist": "few_uniques", "params": {"k": 8, "range": [lo, hi]}}
        {"dist": "sorted"} / {"dist": "reversed"}
    rng : numpy.random.Generator
        Caller-owned, seeded upstream.

    Raises
    ------
    ValueError
        On a negative/non-int `n`, an unknown dist, or malformed params.
    """
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    n = int(n)
    if n < 0:
        raise ValueError("n must be nonnegative")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist")
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )
    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")

    if dist == "sorted":
        return list(range(n))

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        num_swaps = int(np.ceil(swap_frac * n))
        if n == 0 or num_swaps == 0:
            return arr
        idxs = rng.integers(0, n, size=(num_swaps, 2))
        for i, j in idxs.tolist():
            # i == j is a no-op, so the effective swap count may be lower
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "random":
        lo, hi = _parse_range(params, dist)
        return rng.integers(lo, hi, size=n, endpoint=True, dtype=np.int64).tolist()

    # few_uniques
    k = params.get("k")
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    lo, hi = _parse_range(params, dist)
    if n == 0:
        return []
    actual_k = min(k, n, hi - lo + 1)
    # distinct values by rejection; the range can be far wider than k
    values: List[int] = []
    seen = set()
    while len(values) < actual_k:
        for v in rng.integers(lo, hi, size=2 * (actual_k - len(values)), endpoint=True).tolist():
            if v not in seen:
                seen.add(v)
                values.append(v)
                if len(values) == actual_k:
                    break
    picks = rng.integers(0, actual_k, size=n)
    return [values[t] for t in picks.tolist()]


# ------------------------- helpers ------------------------- #


def _parse_range(params: Dict[str, Any], dist: str) -> Tuple[int, int]:
    if "range" not in params:
        return _DEFAULT_RANGE
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list/tuple [min, max]")
    if not all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in spec):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(spec[0]), int(spec[1])
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x
