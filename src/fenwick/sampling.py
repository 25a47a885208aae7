"""Proportional (weighted) sampling on top of a Fenwick tree."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from fenwick.errors import IndexOutOfRange, PreconditionViolated
from fenwick.tree import FenwickTree


class WeightedSampler:
    """Draws indices with probability proportional to their weight.

    Weights live in a float64 :class:`FenwickTree`, so updating a weight
    and drawing a sample are both O(log n). A shadow array keeps the exact
    per-index weights, which makes :meth:`weight` O(1) and lets updates
    apply the exact delta.

    Drawing uses ``min_rank_query(u)`` with ``u`` in ``(0, total]``, so an
    index with zero weight is never returned.

    Repeated float updates leave round-off residue in the tree's inner
    slots. The tree is rebuilt from the shadow array whenever that residue
    shows: a descent meets a negative slot, lands on a zero-weight index,
    or every weight has dropped to zero.
    """

    def __init__(
        self,
        weights: ArrayLike,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        weights = np.asarray(weights, dtype=np.float64)
        if weights.ndim != 1:
            raise ValueError(f"weights must be 1-D, got shape {weights.shape}")
        if (weights < 0).any():
            raise PreconditionViolated("weights must be non-negative")

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._weights = weights.copy()
        self._n_positive = int(np.count_nonzero(self._weights > 0))
        self._tree = FenwickTree.from_slice(self._weights, dtype=np.float64)

    # ── weights ───────────────────────────────────────────────────────────

    def update(self, idx: int, weight: float) -> None:
        """Replace the weight at *idx*."""
        if not 0 <= idx < len(self):
            raise IndexOutOfRange(idx, len(self))
        if weight < 0:
            raise PreconditionViolated(f"weight must be non-negative, got {weight}")

        old = self._weights[idx]
        self._weights[idx] = weight
        self._n_positive += int(weight > 0) - int(old > 0)
        if self._n_positive == 0:
            self._rebuild()
        else:
            self._tree.add(idx, weight - old)

    def weight(self, idx: int) -> float:
        return float(self._weights[idx])

    @property
    def total(self) -> float:
        """Sum of all weights (O(1))."""
        return float(self._tree.total())

    @property
    def tree(self) -> FenwickTree:
        return self._tree

    # ── sampling ──────────────────────────────────────────────────────────

    def sample(self) -> int:
        """Draw one index with replacement."""
        total = self._require_mass()
        return self._select(total * (1.0 - self.rng.random()))

    def sample_batch(self, batch_size: int) -> np.ndarray:
        """Draw *batch_size* indices with replacement, one per equal
        segment of the cumulative weight range (stratified)."""
        total = self._require_mass()
        indices = np.empty(batch_size, dtype=np.int64)
        if batch_size == 0:
            return indices
        segment = total / batch_size
        for i in range(batch_size):
            hi = segment * (i + 1)
            indices[i] = self._select(hi - segment * self.rng.random())
        return indices

    def pop(self) -> int:
        """Draw one index and zero its weight (sampling without
        replacement)."""
        sel = self.sample()
        self.update(sel, 0.0)
        return sel

    def sample_without_replacement(self, k: int) -> np.ndarray:
        """Draw *k* distinct indices, zeroing each one as it is drawn."""
        if k > self._n_positive:
            raise PreconditionViolated(
                f"cannot draw {k} distinct indices, only {self._n_positive} have positive weight"
            )
        return np.array([self.pop() for _ in range(k)], dtype=np.int64)

    def __len__(self) -> int:
        return len(self._weights)

    # ── internals ─────────────────────────────────────────────────────────

    def _rebuild(self) -> None:
        self._tree = FenwickTree.from_slice(self._weights, dtype=np.float64)

    def _require_mass(self) -> float:
        total = self.total
        if self._n_positive == 0 or total <= 0:
            raise PreconditionViolated("cannot sample: total weight is zero")
        return total

    def _find(self, u: float) -> int | None:
        try:
            sel = self._tree.min_rank_query(u)
        except PreconditionViolated:
            return None
        if sel is not None and self._weights[sel] > 0:
            return sel
        return None

    def _select(self, u: float) -> int:
        sel = self._find(u)
        if sel is None:
            self._rebuild()
            sel = self._find(u)
        if sel is None:
            # u still sits past the last prefix sum after a clean rebuild
            sel = int(np.flatnonzero(self._weights > 0)[-1])
        return sel
