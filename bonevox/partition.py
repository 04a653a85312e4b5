"""Partitioning of a key-sorted node list into buckets of balanced size."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Sequence

from .morton import OctreeNode

REFINEMENT_FACTOR = 2
"""Number of parts an oversized bucket is split into per refinement pass."""


def _as_keys(keys: Iterable[int]) -> list[int]:
    return [int(key) for key in keys]


def _sorted_boundaries(boundaries: Iterable[int]) -> list[int]:
    ordered = sorted({int(b) for b in boundaries})
    if len(ordered) < 2:
        raise ValueError("at least two distinct bucket boundaries are needed")
    return ordered


def equal_distribution(globalsize: int, parts: int) -> list[int]:
    """Split globalsize items into parts chunks whose sizes differ by at most one."""
    if parts < 1:
        raise ValueError(f"parts must be at least 1, got {parts}")
    if globalsize < 0:
        raise ValueError(f"globalsize must be non-negative, got {globalsize}")
    average = globalsize / parts
    return [int(average * (i + 1)) - int(average * i) for i in range(parts)]


def bucket_starts(keys: Sequence[int], boundaries: Iterable[int]) -> list[int]:
    """Return the index in keys at which each bucket begins, plus the end.

    Bucket i holds the keys from boundary i up to, but not including,
    boundary i + 1. The first bucket starts at index 0 and the last one ends
    at len(keys). keys must be sorted.
    """
    key_list = _as_keys(keys)
    edges = _sorted_boundaries(boundaries)
    count = len(edges) - 1
    starts = [0] * (count + 1)
    starts[count] = len(key_list)
    for i in range(1, count):
        starts[i] = bisect_left(key_list, edges[i], starts[i - 1], starts[count])
    return starts


def bucket_sizes(starts: Sequence[int]) -> list[int]:
    """Return the number of items in each bucket given by its start indices."""
    if len(starts) < 2:
        raise ValueError("at least two bucket positions are needed")
    return [end - begin for begin, end in zip(starts, starts[1:])]


def refine_boundaries(
    boundaries: Iterable[int], keys: Sequence[int], max_size: float
) -> tuple[list[int], bool]:
    """Split every bucket holding more than max_size keys in one pass.

    New boundaries are placed at even fractions of the bucket's key range,
    truncated to whole keys. Returns the new sorted boundaries and whether
    any boundary was added.
    """
    edges = _sorted_boundaries(boundaries)
    sizes = bucket_sizes(bucket_starts(keys, edges))
    refined = set(edges)
    for low, high, size in zip(edges, edges[1:], sizes):
        if max_size < size:
            width = (high - low) / REFINEMENT_FACTOR
            refined.update(int(low + width * i) for i in range(1, REFINEMENT_FACTOR))
    result = sorted(refined)
    return result, len(result) != len(edges)


def fill_buckets(
    histogram: Sequence[int],
    histogram_sizes: Sequence[int],
    bucket_sizes: Sequence[int],
) -> tuple[list[int], list[int]]:
    """Group consecutive histogram buckets into target buckets of wanted sizes.

    histogram holds the start positions of the histogram buckets followed by
    the end; histogram_sizes their sizes; bucket_sizes the sizes aimed at.
    A shortfall in one target bucket is carried over to the next. The last
    target bucket takes whatever remains. Returns the target buckets in the
    same position format together with their actual sizes.
    """
    if len(histogram) != len(histogram_sizes) + 1:
        raise ValueError(
            f"{len(histogram)} histogram positions for {len(histogram_sizes)} sizes"
        )
    if not bucket_sizes:
        raise ValueError("at least one target bucket is needed")

    available = len(histogram_sizes)
    positions = [histogram[0]]
    actual: list[int] = []
    h = 0
    diff = 0
    for target in bucket_sizes:
        current = 0
        while h != available and current + histogram_sizes[h] <= target - diff:
            current += histogram_sizes[h]
            h += 1
        positions.append(histogram[h])
        diff += current - target
        actual.append(current)

    actual[-1] += sum(histogram_sizes[h:])
    positions[-1] = histogram[-1]
    return positions, actual


def merge_duplicates(nodes: Iterable[OctreeNode]) -> list[OctreeNode]:
    """Sort nodes by key and keep one node per key.

    Nodes sorting before the first node of positive weight are dropped. For
    each key the last node of positive weight wins; without one, the first
    node of that key is kept.
    """
    ordered = sorted(nodes)
    start = next((i for i, node in enumerate(ordered) if node.w > 0), None)
    if start is None:
        return []
    merged = [ordered[start]]
    for node in ordered[start + 1:]:
        if merged[-1].key < node.key:
            merged.append(node)
        elif node.w > 0:
            merged[-1] = node
    return merged