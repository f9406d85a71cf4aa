"""Fixed-size batching of pipeline items."""
from __future__ import annotations

from typing import Iterator, List, Sequence, TypeVar

T = TypeVar("T")


def batch_count(total: int, batch_size: int) -> int:
    if batch_size <= 0:
        raise ValueError("batch_size must be a positive integer")
    return (total + batch_size - 1) // batch_size


def iter_batches(items: Sequence[T], batch_size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of *items*; the final batch may be shorter."""

    if batch_size <= 0:
        raise ValueError("batch_size must be a positive integer")
    for start in range(0, len(items), batch_size):
        yield list(items[start : start + batch_size])
