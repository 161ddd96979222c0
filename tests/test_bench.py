"""Timing harness and YAML experiment runner."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
import yaml

from cyclesort.algorithms import builtin_timsort
from cyclesort.bench import runner, time_sort_call
from cyclesort.algorithms.cycle_sort import sort_in_place


def _timed(**overrides):
    kwargs = dict(
        algo_name="cycle_sort",
        algo_fn=sort_in_place,
        a=[5, 1, 4, 2, 8],
        config=None,
        repeats=3,
        warmup=True,
        disable_gc=True,
        timeout_seconds=30.0,
    )
    kwargs.update(overrides)
    return time_sort_call(**kwargs)


def test_time_sort_call_records_writes_and_leaves_input() -> None:
    a = [5, 1, 4, 2, 8]
    res = _timed(a=a)
    assert res["status"] == "ok"
    assert len(res["samples_ns"]) == 3
    assert all(t >= 0 for t in res["samples_ns"])
    assert res["writes"] == 3
    assert res["sorted_ok"] is True
    assert a == [5, 1, 4, 2, 8]


def test_time_sort_call_reverse_config_validates() -> None:
    res = _timed(config={"reverse": True})
    assert res["status"] == "ok"
    assert res["sorted_ok"] is True


def test_time_sort_call_reverse_with_duplicates_matches_descending_oracle() -> None:
    res = _timed(a=[3, 1, 3, 2, 3, 0, 1], config={"reverse": True})
    assert res["sorted_ok"] is True
    assert res["writes"] == 4


def test_time_sort_call_flags_unsorted_output() -> None:
    def reverse_instead(a, *, config=None):
        a.reverse()
        return 0

    res = _timed(algo_fn=reverse_instead, config={"reverse": True})
    assert res["status"] == "ok"
    assert res["sorted_ok"] is False


def test_time_sort_call_baseline_has_no_writes() -> None:
    res = _timed(algo_name="builtin_timsort", algo_fn=builtin_timsort.sort_in_place)
    assert res["status"] == "ok"
    assert res["writes"] is None
    assert res["sorted_ok"] is True


def test_time_sort_call_reports_errors() -> None:
    def broken(a, *, config=None):
        raise RuntimeError("nope")

    res = _timed(algo_fn=broken, warmup=False)
    assert res["status"] == "error"
    assert "nope" in res["error"]
    assert res["samples_ns"] == []

    res = _timed(algo_fn=broken, warmup=True)
    assert res["error"].startswith("warmup failed")


def test_time_sort_call_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        _timed(repeats=-1)
    with pytest.raises(ValueError):
        _timed(timeout_seconds=0)


def test_adapter_rejects_unknown_config() -> None:
    with pytest.raises(ValueError, match="Unknown cycle_sort config keys"):
        sort_in_place([2, 1], config={"stable": True})
    with pytest.raises(ValueError):
        sort_in_place([2, 1], config=["reverse"])


def _write_config(tmp_path: Path, **overrides) -> Path:
    cfg = {
        "experiment_name": "smoke",
        "output_dir": str(tmp_path / "runs"),
        "seed": 123,
        "repeats": 2,
        "warmup": False,
        "disable_gc": False,
        "timeout_seconds": 30.0,
        "dataset": {"dist": "random", "params": {"range": [0, 50]}},
        "sizes": [0, 8, 32],
        "algorithms": [
            {"name": "cycle_sort"},
            {"name": "cycle_sort", "label": "cycle_sort_desc", "config": {"reverse": True}},
            {"name": "builtin_timsort"},
        ],
    }
    cfg.update(overrides)
    path = tmp_path / "experiment.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def test_run_experiment_writes_outputs(tmp_path: Path) -> None:
    run_dir = runner.run_experiment(_write_config(tmp_path))

    for name in ("results.jsonl", "summary.csv", "meta.json", "config_resolved.yaml"):
        assert (run_dir / name).exists()

    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    assert "python" in meta and "machine" in meta

    lines = (run_dir / "results.jsonl").read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert len(records) == 3 * 3 * 2
    assert all(r["time_ns"] >= 0 for r in records)

    summary = pd.read_csv(run_dir / "summary.csv")
    assert set(summary["algo"]) == {"cycle_sort", "cycle_sort_desc", "builtin_timsort"}
    assert (summary["samples_ok"] == 2).all()
    cyc = summary[(summary["algo"] == "cycle_sort") & (summary["n"] == 0)]
    assert int(cyc["writes"].iloc[0]) == 0
    assert summary[summary["algo"] == "builtin_timsort"]["writes"].isna().all()


def test_run_experiment_skips_failed_algorithm(tmp_path: Path, monkeypatch) -> None:
    def failing(a, *, config=None):
        raise RuntimeError("bad sorter")

    monkeypatch.setattr(builtin_timsort, "sort_in_place", failing)
    run_dir = runner.run_experiment(_write_config(tmp_path))

    records = [
        json.loads(line)
        for line in (run_dir / "results.jsonl").read_text(encoding="utf-8").splitlines()
    ]
    errors = [r for r in records if r.get("status") == "error"]
    # size 0 fails and the larger sizes are skipped
    assert len(errors) == 1
    assert errors[0]["algo"] == "builtin_timsort" and errors[0]["n"] == 0


def test_run_experiment_validates_config(tmp_path: Path) -> None:
    path = _write_config(tmp_path)
    cfg = yaml.safe_load(path.read_text(encoding="utf-8"))
    del cfg["seed"]
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    with pytest.raises(ValueError, match="seed"):
        runner.run_experiment(path)

    with pytest.raises(ImportError):
        runner.run_experiment(_write_config(tmp_path, algorithms=[{"name": "no_such_sort"}]))

    with pytest.raises(ValueError, match="Duplicate"):
        runner.run_experiment(
            _write_config(tmp_path, algorithms=[{"name": "cycle_sort"}, {"name": "cycle_sort"}])
        )


def test_main_reports_missing_config(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        runner.main([str(tmp_path / "missing.yaml")])
