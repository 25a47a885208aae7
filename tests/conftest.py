"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from fenwick.tree import FenwickTree

SCENARIO_VALUES = [5, 80, 50, 1, 20]


@pytest.fixture
def configs_dir() -> Path:
    """Path to the configs/ directory."""
    return Path(__file__).resolve().parent.parent / "configs"


@pytest.fixture
def default_config(configs_dir: Path) -> dict:
    """Load the default config dict."""
    from fenwick.utils.config import load_yaml

    return load_yaml(configs_dir / "default.yaml")


@pytest.fixture
def scenario_tree() -> FenwickTree:
    """Integer tree seeded with ``[5, 80, 50, 1, 20]``."""
    return FenwickTree.from_slice(SCENARIO_VALUES)


@pytest.fixture
def small_tree() -> FenwickTree:
    """Size-8 integer tree holding ``[1, 1, 3, 1, 1, 0, 0, 0]``, built by
    point updates."""
    tree = FenwickTree(8, dtype="int64")
    tree.add(0, 1)  # sum = 1
    tree.add(1, 1)  # sum = 2
    tree.add(2, 3)  # sum = 5
    tree.add(3, 1)  # sum = 6
    tree.add(4, 1)  # sum = 7
    return tree
