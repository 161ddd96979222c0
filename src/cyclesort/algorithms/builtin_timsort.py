"""
Reference baseline: Python's built-in `list.sort` (Timsort).

Same adapter contract as `cycle_sort` so the benchmark runner can time both
side by side. Timsort does not expose its write count, so `sort_in_place`
returns None.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = ["sort", "sort_in_place"]


def _reverse_flag(config: Optional[Dict[str, Any]]) -> bool:
    if config is None:
        return False
    if not isinstance(config, dict):
        raise ValueError("config must be a dict or None")
    return bool(config.get("reverse", False))


def sort(a: List[Any], *, config: Optional[Dict[str, Any]] = None) -> List[Any]:
    return sorted(a, reverse=_reverse_flag(config))


def sort_in_place(a: List[Any], *, config: Optional[Dict[str, Any]] = None) -> None:
    a.sort(reverse=_reverse_flag(config))
    return None
