"""Generic Fenwick tree with rank queries and weighted sampling."""

from __future__ import annotations

from fenwick.errors import FenwickError, IndexOutOfRange, PreconditionViolated
from fenwick.sampling import WeightedSampler
from fenwick.tree import FenwickTree

__all__ = [
    "FenwickError",
    "FenwickTree",
    "IndexOutOfRange",
    "PreconditionViolated",
    "WeightedSampler",
]

__version__ = "0.1.0"
