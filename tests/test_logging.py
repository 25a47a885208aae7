"""Tests for the MLflow experiment logger helpers."""

from __future__ import annotations

from fenwick.utils.logging import ExperimentLogger


def test_flatten_nested_config() -> None:
    config = {"seed": 1, "benchmark": {"size": 8, "structures": ["fenwick"]}}
    assert ExperimentLogger.flatten(config) == {
        "seed": "1",
        "benchmark.size": "8",
        "benchmark.structures": "['fenwick']",
    }


def test_flatten_with_prefix() -> None:
    assert ExperimentLogger.flatten({"a": {"b": 2}}, prefix="run") == {"run.a.b": "2"}
