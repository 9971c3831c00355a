"""Splitting id lists into fixed-size request batches."""
from typing import Iterable, List, NamedTuple, Sequence, TypeVar

T = TypeVar('T')


class Batch(NamedTuple):
    """A zero-based group of at most ``batch_size`` items."""
    index: int
    items: List


def split_batches(items: Sequence[T], batch_size: int) -> List[Batch]:
    """
    Partition items into ordered batches.

    Every batch except possibly the last holds exactly ``batch_size`` items;
    concatenating the batches gives back the input.

    Args:
        items: Ordered items (typically media item ids)
        batch_size: Maximum items per batch, at least 1

    Returns:
        List of Batch(index, items)

    Example:
        >>> split_batches(['a', 'b', 'c'], 2)
        [Batch(index=0, items=['a', 'b']), Batch(index=1, items=['c'])]
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    items = list(items)
    return [
        Batch(index, items[start:start + batch_size])
        for index, start in enumerate(range(0, len(items), batch_size))
    ]


def distinct(items: Iterable[T]) -> List[T]:
    """Drop repeats, keeping the first occurrence of each item."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
