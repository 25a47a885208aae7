"""Timed comparison of prefix-sum structures on a shared random workload."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import numpy as np
from tqdm import tqdm

import fenwick.benchmark.baselines  # noqa: F401  (registers the structures)
from fenwick.benchmark import create_structure
from fenwick.utils.logging import ExperimentLogger
from fenwick.utils.seeding import seed_everything

UPDATE = 0
QUERY = 1


class ResultMismatchError(RuntimeError):
    """Two structures answered the same workload differently."""


@dataclass
class Workload:
    """Interleaved point updates and prefix-sum queries.

    ``kinds[k]`` is :data:`UPDATE` or :data:`QUERY`; ``deltas[k]`` is
    ignored for queries.
    """

    size: int
    kinds: np.ndarray
    indices: np.ndarray
    deltas: np.ndarray

    def __len__(self) -> int:
        return len(self.kinds)


def make_workload(
    size: int,
    n_ops: int,
    update_fraction: float,
    max_delta: int,
    rng: np.random.Generator,
) -> Workload:
    """Draw *n_ops* operations, each an update with probability
    *update_fraction*. Deltas are non-negative integers below *max_delta*."""
    kinds = np.where(rng.random(n_ops) < update_fraction, UPDATE, QUERY)
    return Workload(
        size=size,
        kinds=kinds,
        indices=rng.integers(0, size, size=n_ops),
        deltas=rng.integers(0, max_delta, size=n_ops),
    )


def run_structure(
    structure: Any,
    workload: Workload,
    progress: bool = False,
    desc: str | None = None,
) -> dict[str, float]:
    """Execute *workload* against *structure*.

    Returns ``seconds`` (wall time), ``ops_per_sec`` and ``checksum`` (sum
    of every query answer plus the final total).
    """
    checksum = 0
    ops = zip(workload.kinds.tolist(), workload.indices.tolist(), workload.deltas.tolist())
    start = time.perf_counter()
    for kind, idx, delta in tqdm(ops, total=len(workload), desc=desc, disable=not progress):
        if kind == UPDATE:
            structure.add(idx, delta)
        else:
            checksum += structure.prefix_sum(idx)
    seconds = time.perf_counter() - start
    checksum += structure.total()
    return {
        "seconds": seconds,
        "ops_per_sec": len(workload) / seconds if seconds > 0 else float("inf"),
        "checksum": float(checksum),
    }


def run_benchmark(
    config: dict, logger: ExperimentLogger | None = None
) -> dict[str, dict[str, float]]:
    """Run every configured structure on the same workload.

    Steps: seed → build workload → run each structure → cross-check → log.
    """
    bench_cfg = config["benchmark"]
    rng = seed_everything(config.get("seed", 0))
    workload = make_workload(
        size=bench_cfg["size"],
        n_ops=bench_cfg["n_ops"],
        update_fraction=bench_cfg["update_fraction"],
        max_delta=bench_cfg["max_delta"],
        rng=rng,
    )

    if logger is not None:
        logger.log_params(config)

    results: dict[str, dict[str, float]] = {}
    for name in bench_cfg["structures"]:
        structure = create_structure(
            name, bench_cfg["size"], dtype=bench_cfg.get("dtype", "int64")
        )
        results[name] = run_structure(
            structure, workload, progress=bench_cfg.get("progress", False), desc=name
        )

    # ── cross-check ───────────────────────────────────────────────────────
    checksums = {name: r["checksum"] for name, r in results.items()}
    if len(set(checksums.values())) > 1:
        raise ResultMismatchError(f"structures disagree on query answers: {checksums}")

    if logger is not None:
        logger.log_metrics(
            {f"{name}/{key}": value for name, r in results.items() for key, value in r.items()}
        )
    return results
