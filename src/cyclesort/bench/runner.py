"""
Experiment runner: times cycle sort (and baselines) over a size sweep from a
YAML config, recording both wall time and write counts.

Usage (from repo root):
    python -m cyclesort.bench.runner experiments/configs/01_writes_vs_dist.yaml
    cyclesort-bench experiments/configs/01_writes_vs_dist.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # python/numpy/pandas versions, cpu/ram, git commit
    - results.jsonl           # one line per timing sample, plus status lines
    - summary.csv             # per (algo, n): median/IQR/min/max ns, writes

Design notes:
- For each size n, ONE dataset is generated and every algorithm sorts a copy.
- An algorithm that times out or errors at size n is skipped for larger n.
- Algorithms are resolved by name as `cyclesort.algorithms.<name>` and must
  expose `sort_in_place(a, *, config=None)`.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from cyclesort.bench.measure import time_sort_call
from cyclesort.datasets import make_dataset

__all__ = ["AlgoSpec", "run_experiment", "main"]

_console = Console()

_REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
]

_SUMMARY_COLUMNS = [
    "algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns", "writes",
]


@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Callable[..., Optional[int]]
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a YAML mapping")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = base_dir / f"{stamp}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip() or None


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        label = str(entry.get("label", name))
        if label in seen:
            raise ValueError(f"Duplicate algorithm label in config: {label}")
        seen.add(label)

        try:
            mod = importlib.import_module(f"cyclesort.algorithms.{name}")
        except ImportError as e:
            raise ImportError(
                f"Could not import algorithm module 'cyclesort.algorithms.{name}': {e!r}"
            ) from e

        if not callable(getattr(mod, "sort_in_place", None)):
            raise AttributeError(
                f"Algorithm module '{name}' must define `sort_in_place(a, *, config=None)`"
            )

        config = entry.get("config") or {}
        if not isinstance(config, dict):
            raise ValueError(f"Algorithm '{label}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=label, sort_fn=mod.sort_in_place, config=config))
    return specs


# ------------------------- aggregation & display ------------------------- #

def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    empty = pd.DataFrame(columns=_SUMMARY_COLUMNS)
    if not jsonl_path.exists():
        return empty
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return empty
    df = df[df["time_ns"].notna()].copy()
    if df.empty:
        return empty
    if "writes" not in df.columns:
        df["writes"] = np.nan
    df["writes"] = pd.to_numeric(df["writes"], errors="coerce")

    out = df.groupby(["algo", "n"], as_index=False).agg(
        samples_ok=("time_ns", "count"),
        median_ns=("time_ns", "median"),
        iqr_ns=("time_ns", lambda s: s.quantile(0.75) - s.quantile(0.25)),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
        writes=("writes", "max"),
    )
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = (
        out[["median_ns", "iqr_ns", "min_ns", "max_ns"]].round().astype("int64")
    )
    # writes is NA for algorithms that do not track them
    out["writes"] = out["writes"].astype("Int64")
    return out[_SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms / writes)")
    table.add_column("Algorithm", style="bold")
    picks = sorted({sizes[0], sizes[len(sizes) // 2], sizes[-1]})
    for n in picks:
        table.add_column(f"n={n}", justify="right")

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for n in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == n)]
            if s.empty:
                row.append("—")
                continue
            rec = s.iloc[0]
            cell = f"{rec['median_ns'] / 1e6:.2f} ± {rec['iqr_ns'] / 1e6:.2f}"
            if not pd.isna(rec["writes"]):
                cell += f" / {int(rec['writes'])}w"
            row.append(cell)
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    """
    Run one experiment described by the YAML file at `config_path`.

    Returns the run directory holding the outputs listed in the module
    docstring. Raises ValueError for a malformed config.
    """
    cfg = _load_yaml(config_path)

    missing = [k for k in _REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes = [int(n) for n in cfg["sizes"]]
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])

    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    algos = _resolve_algorithms(list(cfg["algorithms"]))

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    skipped = {a.name: False for a in algos}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(n, dataset_spec, rng)

        for spec in algos:
            if skipped[spec.name]:
                continue

            res = time_sort_call(
                algo_name=spec.name,
                algo_fn=spec.sort_fn,
                a=base_a,
                config=spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": spec.name,
                        "n": n,
                        "dataset": dataset_spec,
                        "trial": trial_idx,
                        "time_ns": int(t_ns),
                        "writes": res["writes"],
                        "config": spec.config,
                    },
                    results_path,
                )

            if res["sorted_ok"] is False:
                _console.print(f"[bold red]{spec.name} produced unsorted output at n={n}[/]")

            status = res["status"]
            if status != "ok":
                skipped[spec.name] = True
                _append_jsonl(
                    {
                        "algo": spec.name,
                        "n": n,
                        "status": status,
                        "error": res["error"],
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "config": spec.config,
                    },
                    results_path,
                )
                _console.print(f"[yellow]{spec.name}: {status} at n={n}; skipping larger sizes[/]")

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_summary(summary_df, sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {path}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Benchmark cycle sort (time and writes) from a YAML config."
    )
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
