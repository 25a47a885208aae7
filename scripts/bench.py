#!/usr/bin/env python3
"""Benchmark entry point: Fenwick tree vs. naive prefix-sum structures."""

from __future__ import annotations

import argparse

from fenwick.benchmark.runner import run_benchmark
from fenwick.utils.config import load_config
from fenwick.utils.logging import ExperimentLogger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare prefix-sum structures on a random update/query workload",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python scripts/bench.py
  python scripts/bench.py --workload configs/workloads/query_heavy.yaml
  python scripts/bench.py --set benchmark.size=65536 --set "benchmark.structures=[fenwick, naive]"
  python scripts/bench.py --no-mlflow
""",
    )
    parser.add_argument(
        "--config",
        default="configs/default.yaml",
        help="Path to base config (default: configs/default.yaml)",
    )
    parser.add_argument("--workload", default=None, help="Path to workload config override")
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="overrides",
        metavar="KEY=VALUE",
        help="Override config values (e.g. --set benchmark.n_ops=100000)",
    )
    parser.add_argument(
        "--no-mlflow", action="store_true", help="Skip MLflow tracking for this run"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    config = load_config(
        default_path=args.config,
        workload_path=args.workload,
        overrides=args.overrides,
    )
    bench_cfg = config["benchmark"]
    print(f"Size: {bench_cfg['size']}  Ops: {bench_cfg['n_ops']}")
    print(f"Update fraction: {bench_cfg['update_fraction']}")

    if args.no_mlflow:
        results = run_benchmark(config)
    else:
        with ExperimentLogger(
            experiment_name=config["mlflow"]["experiment_name"],
            tracking_uri=config["mlflow"]["tracking_uri"],
        ) as logger:
            results = run_benchmark(config, logger=logger)

    for name, r in sorted(results.items(), key=lambda kv: kv[1]["seconds"]):
        print(f"{name:>12}: {r['seconds']:.4f}s  ({r['ops_per_sec']:,.0f} ops/s)")


if __name__ == "__main__":
    main()
