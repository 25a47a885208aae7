"""YAML benchmark config: layered merging, CLI overrides and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

REQUIRED_BENCHMARK_KEYS = ("size", "n_ops", "update_fraction", "max_delta", "structures")


class ConfigError(ValueError):
    """Raised when a benchmark config is missing keys or holds bad values."""


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (returns a new dict)."""
    merged = base.copy()
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def apply_overrides(config: dict, overrides: list[str]) -> dict:
    """Apply dot-notation CLI overrides like ``benchmark.size=1024``.

    Values are parsed as YAML scalars, so ``"false"`` becomes ``False`` and
    ``"[fenwick, naive]"`` becomes a list.
    """
    for override in overrides:
        key_path, sep, raw_value = override.partition("=")
        if not sep or not key_path:
            raise ConfigError(f"Override must be key=value, got: {override!r}")
        node = config
        *parents, leaf = key_path.split(".")
        for k in parents:
            node = node.setdefault(k, {})
        node[leaf] = yaml.safe_load(raw_value)
    return config


def validate_config(config: dict) -> dict:
    """Check the ``benchmark`` section and return *config* unchanged."""
    bench = config.get("benchmark")
    if not isinstance(bench, dict):
        raise ConfigError("config has no 'benchmark' section")

    missing = [k for k in REQUIRED_BENCHMARK_KEYS if k not in bench]
    if missing:
        raise ConfigError(f"benchmark config is missing: {', '.join(missing)}")

    if int(bench["size"]) < 1:
        raise ConfigError(f"benchmark.size must be >= 1, got {bench['size']}")
    if int(bench["n_ops"]) < 0:
        raise ConfigError(f"benchmark.n_ops must be >= 0, got {bench['n_ops']}")
    if not 0.0 <= float(bench["update_fraction"]) <= 1.0:
        raise ConfigError(
            f"benchmark.update_fraction must lie in [0, 1], got {bench['update_fraction']}"
        )
    if int(bench["max_delta"]) < 1:
        raise ConfigError(f"benchmark.max_delta must be >= 1, got {bench['max_delta']}")
    if not bench["structures"]:
        raise ConfigError("benchmark.structures must name at least one structure")
    return config


def load_config(
    default_path: str | Path = "configs/default.yaml",
    workload_path: str | Path | None = None,
    overrides: list[str] | None = None,
) -> dict[str, Any]:
    """Build a config by merging default, then workload, then CLI overrides."""
    config = load_yaml(default_path)
    if workload_path:
        config = deep_merge(config, load_yaml(workload_path))
    if overrides:
        config = apply_overrides(config, overrides)
    return validate_config(config)
