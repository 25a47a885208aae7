"""Fenwick tree (binary indexed tree) for O(log n) prefix sums."""

from __future__ import annotations

from itertools import accumulate
from typing import Any, Iterable, Iterator

import numpy as np
from numpy.typing import DTypeLike

from fenwick.errors import IndexOutOfRange, PreconditionViolated


def lsb(n: int) -> int:
    """Lowest set bit of *n* (``0`` for ``0``)."""
    return n & -n


def next_power_of_two(n: int) -> int:
    """Smallest power of two ``>= n``, and never less than 1."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def _scalar(value: Any) -> Any:
    # Unwrap numpy scalars; object-dtype slots already hold plain objects.
    return value.item() if isinstance(value, np.generic) else value


class FenwickTree:
    """Prefix-sum array with O(log n) point updates and queries.

    Public indices are 0-based and every range is inclusive on both ends:
    ``prefix_sum(i)`` covers ``0..=i`` and ``range_sum(i, j)`` covers
    ``i..=j``.

    Internally the tree is stored 1-based in a NumPy array of
    ``capacity + 1`` slots, where ``capacity`` is the smallest power of two
    ``>= size``. Slot 0 is an always-zero sentinel and slot ``i`` holds the
    sum of the ``lsb(i)`` logical elements ending at 1-based position ``i``.
    Padding positions past ``size`` stay zero, so slot ``capacity`` always
    holds the grand total.

    The element type is any NumPy dtype supporting ``+``, ``-``, zero and
    ordering. Use ``dtype=object`` for ``Fraction``/``Decimal`` values.

    Index and precondition checks run only when Python is not started with
    ``-O``; optimized runs skip them and callers must keep indices valid.
    """

    def __init__(self, size: int, dtype: DTypeLike = np.float64) -> None:
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.size = size
        self.capacity = next_power_of_two(size)
        self._tree = np.zeros(self.capacity + 1, dtype=dtype)
        self._zero = self._tree[0]

    # ── construction ──────────────────────────────────────────────────────

    @classmethod
    def from_slice(cls, values: Any, dtype: DTypeLike | None = None) -> FenwickTree:
        """Build a tree seeded with the (unsummed) *values* in O(n).

        Each slot is pushed once into the next slot its update traversal
        would visit, instead of running a full O(log n) ``add`` per value.
        When *dtype* is omitted it is inferred from *values*.
        """
        seeds = np.asarray(values, dtype=dtype)
        if seeds.ndim != 1:
            raise ValueError(f"expected a 1-D sequence, got shape {seeds.shape}")

        tree = cls(len(seeds), dtype=seeds.dtype)
        data = tree._tree
        data[1 : tree.size + 1] = seeds
        for i in range(1, tree.capacity + 1):
            parent = i + lsb(i)
            if parent <= tree.capacity:
                data[parent] += data[i]
        return tree

    @classmethod
    def from_iterable(cls, iterable: Iterable[Any], dtype: DTypeLike | None = None) -> FenwickTree:
        """Build a tree from any iterable of values."""
        return cls.from_slice(list(iterable), dtype=dtype)

    # ── point updates ─────────────────────────────────────────────────────

    def add(self, idx: int, delta: Any) -> None:
        """Add *delta* to element *idx*."""
        if __debug__:
            self._check_index(idx)
        i = idx + 1
        while i <= self.capacity:
            self._tree[i] += delta
            i += lsb(i)

    def sub(self, idx: int, delta: Any) -> None:
        """Subtract *delta* from element *idx*.

        Kept separate from :meth:`add` so unsigned dtypes never see a
        negated delta.
        """
        if __debug__:
            self._check_index(idx)
        i = idx + 1
        while i <= self.capacity:
            self._tree[i] -= delta
            i += lsb(i)

    def set(self, idx: int, value: Any) -> None:
        """Overwrite element *idx* with *value*."""
        current = self.get(idx)
        if current <= value:
            self.add(idx, value - current)
        else:
            self.sub(idx, current - value)

    # ── queries ───────────────────────────────────────────────────────────

    def prefix_sum(self, idx: int) -> Any:
        """Sum of elements ``0..=idx``."""
        if __debug__:
            self._check_index(idx)
        total = self._zero
        i = idx + 1
        while i > 0:
            total += self._tree[i]
            i -= lsb(i)
        return _scalar(total)

    def range_sum(self, start: int, end: int) -> Any:
        """Sum of elements ``start..=end``.

        Walks down from ``end + 1`` and from ``start`` until both paths
        meet, so the shared tail of the two prefix sums is never read.
        """
        if __debug__:
            self._check_index(start)
            self._check_index(end)
            if start > end:
                raise PreconditionViolated(f"malformed range: start {start} > end {end}")
        total = self._zero
        hi = end + 1
        lo = start
        while hi > lo:
            total += self._tree[hi]
            hi -= lsb(hi)
        while lo > hi:
            total -= self._tree[lo]
            lo -= lsb(lo)
        return _scalar(total)

    def get(self, idx: int) -> Any:
        """Value of element *idx*."""
        return self.range_sum(idx, idx)

    def total(self) -> Any:
        """Sum of all elements, read from the root slot."""
        return _scalar(self._tree[self.capacity])

    def end(self) -> int:
        """Largest valid index (``-1`` for an empty tree)."""
        return self.size - 1

    # ── rank queries ──────────────────────────────────────────────────────

    def rank_query(self, value: Any) -> int | None:
        """Largest index with ``prefix_sum(index) <= value``, or ``None``.

        Requires every element to be non-negative.
        """
        pos = self._descend(value, strict=False)
        pos = min(pos, self.size)
        return pos - 1 if pos > 0 else None

    def min_rank_query(self, value: Any) -> int | None:
        """Smallest index with ``prefix_sum(index) >= value``, or ``None``
        when ``total() < value``.

        Requires every element to be non-negative.
        """
        pos = self._descend(value, strict=True)
        return pos if pos < self.size else None

    def _descend(self, value: Any, strict: bool) -> int:
        """Binary-lifting search over the tree layout.

        Returns the largest 1-based count ``pos`` whose prefix sum is
        ``< value`` (*strict*) or ``<= value``. Every visited slot is
        checked for negativity as a spot check of the rank-query
        precondition.
        """
        pos = 0
        acc = self._zero
        step = self.capacity
        while step > 0:
            nxt = pos + step
            if nxt <= self.capacity:
                node = self._tree[nxt]
                if __debug__ and node < self._zero:
                    raise PreconditionViolated(
                        "rank queries require non-negative elements"
                    )
                candidate = acc + node
                if (candidate < value) if strict else (candidate <= value):
                    acc = candidate
                    pos = nxt
            step >>= 1
        return pos

    # ── bulk views ────────────────────────────────────────────────────────

    def values(self) -> list[Any]:
        """Logical element values, recovered in O(n) by undoing the
        linear build."""
        data = self._tree.copy()
        for i in range(self.capacity, 0, -1):
            parent = i + lsb(i)
            if parent <= self.capacity:
                data[parent] -= data[i]
        return [_scalar(v) for v in data[1 : self.size + 1]]

    def prefix_sums(self) -> Iterator[Any]:
        """Yield ``prefix_sum(i)`` for every index in order."""
        return accumulate(self.values())

    def __iter__(self) -> Iterator[Any]:
        return self.prefix_sums()

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self.size}, dtype={self._tree.dtype}, "
            f"total={self.total()!r})"
        )

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < self.size:
            raise IndexOutOfRange(idx, self.size)
