from __future__ import annotations

from itertools import combinations
from math import comb
from typing import FrozenSet, Iterator, Sequence, TypeVar

T = TypeVar("T")


def choose(items: Sequence[T], k: int) -> Iterator[FrozenSet[T]]:
    """
    Lazily yield every k-subset of `items` exactly once, as frozensets.

    Subsets come out in lexicographic index order, so the enumeration is stable for
    a given input order. Nothing beyond the current subset is held in memory.
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")
    for combo in combinations(items, k):
        yield frozenset(combo)


def count_choose(n: int, k: int) -> int:
    return comb(n, k) if 0 <= k <= n else 0
