"""
Benchmark harness: `time_sort_call` for single measurements, and
`cyclesort.bench.runner` for YAML-driven sweeps.
"""

from .measure import time_sort_call

__all__ = ["time_sort_call"]
