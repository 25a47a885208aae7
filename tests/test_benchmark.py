"""Tests for the benchmark runner."""

from __future__ import annotations

from itertools import accumulate
from typing import Any

import numpy as np
import pytest

from fenwick.benchmark import _REGISTRY
from fenwick.benchmark.baselines import NaiveArray
from fenwick.benchmark.runner import (
    QUERY,
    UPDATE,
    ResultMismatchError,
    make_workload,
    run_benchmark,
    run_structure,
)
from fenwick.tree import FenwickTree


class RecordingLogger:
    """Stands in for ExperimentLogger and keeps what was logged."""

    def __init__(self) -> None:
        self.params: dict[str, Any] = {}
        self.metrics: dict[str, float] = {}

    def log_params(self, params: dict[str, Any], prefix: str = "") -> None:
        self.params.update(params)

    def log_metrics(self, metrics: dict[str, float], step: int | None = None) -> None:
        self.metrics.update(metrics)


class OffByOneArray(NaiveArray):
    def prefix_sum(self, idx: int) -> Any:
        return super().prefix_sum(idx) + 1


def _config(**bench: Any) -> dict:
    cfg = {
        "size": 64,
        "n_ops": 500,
        "update_fraction": 0.5,
        "max_delta": 10,
        "dtype": "int64",
        "structures": ["fenwick", "naive", "running_sum"],
        "progress": False,
    }
    cfg.update(bench)
    return {"seed": 1, "benchmark": cfg}


def test_make_workload_shapes_and_ranges() -> None:
    rng = np.random.default_rng(0)
    wl = make_workload(size=10, n_ops=300, update_fraction=0.5, max_delta=7, rng=rng)
    assert len(wl) == 300
    assert wl.indices.min() >= 0 and wl.indices.max() < 10
    assert wl.deltas.min() >= 0 and wl.deltas.max() < 7
    assert set(np.unique(wl.kinds)) <= {UPDATE, QUERY}


def test_make_workload_update_fraction_extremes() -> None:
    rng = np.random.default_rng(0)
    assert (make_workload(8, 50, 1.0, 5, rng).kinds == UPDATE).all()
    assert (make_workload(8, 50, 0.0, 5, rng).kinds == QUERY).all()


def test_run_structure_checksum_matches_brute_force() -> None:
    rng = np.random.default_rng(5)
    wl = make_workload(size=16, n_ops=200, update_fraction=0.6, max_delta=9, rng=rng)

    shadow = [0] * 16
    expected = 0
    for kind, idx, delta in zip(wl.kinds, wl.indices, wl.deltas):
        if kind == UPDATE:
            shadow[idx] += int(delta)
        else:
            expected += list(accumulate(shadow))[idx]
    expected += sum(shadow)

    result = run_structure(FenwickTree(16, dtype="int64"), wl)
    assert result["checksum"] == float(expected)
    assert result["seconds"] >= 0
    assert result["ops_per_sec"] > 0


def test_run_benchmark_structures_agree() -> None:
    logger = RecordingLogger()
    results = run_benchmark(_config(), logger=logger)

    assert set(results) == {"fenwick", "naive", "running_sum"}
    assert len({r["checksum"] for r in results.values()}) == 1
    assert logger.params["benchmark"]["size"] == 64
    assert "fenwick/ops_per_sec" in logger.metrics
    assert "running_sum/seconds" in logger.metrics


def test_run_benchmark_is_reproducible() -> None:
    first = run_benchmark(_config(structures=["fenwick"]))
    second = run_benchmark(_config(structures=["fenwick"]))
    assert first["fenwick"]["checksum"] == second["fenwick"]["checksum"]


def test_run_benchmark_detects_mismatch(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(_REGISTRY, "off_by_one", OffByOneArray)
    with pytest.raises(ResultMismatchError):
        run_benchmark(_config(structures=["fenwick", "off_by_one"], update_fraction=0.2))
