"""Exception types raised by the Fenwick tree and its consumers."""

from __future__ import annotations


class FenwickError(Exception):
    """Base class for all Fenwick tree errors."""


class IndexOutOfRange(FenwickError, IndexError):
    """An index fell outside ``[0, end()]``."""

    def __init__(self, idx: int, size: int) -> None:
        super().__init__(f"index {idx} out of range for tree of size {size}")
        self.idx = idx
        self.size = size


class PreconditionViolated(FenwickError, ValueError):
    """A documented precondition did not hold (malformed range, negative
    element during a rank query, empty sampler, ...)."""
