"""Naive prefix-sum structures the Fenwick tree is measured against."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from fenwick.benchmark import register
from fenwick.tree import FenwickTree

register("fenwick")(FenwickTree)


class PrefixSumBaseline(ABC):
    """Interface shared by the baselines (and satisfied by FenwickTree)."""

    def __init__(self, size: int, dtype: DTypeLike = np.float64) -> None:
        self.size = size

    @abstractmethod
    def add(self, idx: int, delta: Any) -> None:
        """Add *delta* to element *idx*."""

    @abstractmethod
    def prefix_sum(self, idx: int) -> Any:
        """Sum of elements ``0..=idx``."""

    @abstractmethod
    def total(self) -> Any:
        """Sum of all elements."""

    def __len__(self) -> int:
        return self.size


@register("naive")
class NaiveArray(PrefixSumBaseline):
    """Plain value array: O(1) update, O(n) prefix sum."""

    def __init__(self, size: int, dtype: DTypeLike = np.float64) -> None:
        super().__init__(size, dtype)
        self._values = np.zeros(size, dtype=dtype)

    def add(self, idx: int, delta: Any) -> None:
        self._values[idx] += delta

    def prefix_sum(self, idx: int) -> Any:
        return self._values[: idx + 1].sum().item()

    def total(self) -> Any:
        return self._values.sum().item()


@register("running_sum")
class RunningSumArray(PrefixSumBaseline):
    """Precomputed running sums: O(n) update, O(1) prefix sum."""

    def __init__(self, size: int, dtype: DTypeLike = np.float64) -> None:
        super().__init__(size, dtype)
        self._sums = np.zeros(size, dtype=dtype)

    def add(self, idx: int, delta: Any) -> None:
        self._sums[idx:] += delta

    def prefix_sum(self, idx: int) -> Any:
        return self._sums[idx].item()

    def total(self) -> Any:
        return self._sums[-1].item() if self.size else 0
