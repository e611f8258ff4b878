"""Segment tree supporting range multiplication and point queries."""

from __future__ import annotations


class SegmentTree:
    """Holds one multiplicative factor per index, all starting at 1.0."""

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError("SegmentTree size must not be negative")
        self._size = size
        capacity = size * 4
        self._tree = [1.0] * capacity
        self._lazy = [1.0] * capacity

    def __len__(self) -> int:
        return self._size

    def range_multiply(self, left: int, right: int, factor: float) -> None:
        """Multiply every factor in the inclusive range [left, right] by ``factor``."""
        if self._size == 0:
            raise RuntimeError("SegmentTree.range_multiply called on empty tree")
        if left > right:
            raise ValueError("SegmentTree.range_multiply invalid range")
        if left < 0 or right >= self._size:
            raise IndexError("SegmentTree.range_multiply index out of range")
        self._update(1, 0, self._size - 1, left, right, float(factor))

    def point_query(self, index: int) -> float:
        """Return the accumulated factor at ``index``."""
        if self._size == 0 or not 0 <= index < self._size:
            raise IndexError("SegmentTree.point_query index out of range")
        node, low, high = 1, 0, self._size - 1
        accumulated = 1.0
        while True:
            accumulated *= self._lazy[node]
            if low == high:
                return self._tree[node] * accumulated
            mid = low + (high - low) // 2
            if index <= mid:
                node, high = node * 2, mid
            else:
                node, low = node * 2 + 1, mid + 1

    def _update(self, node: int, low: int, high: int, query_low: int, query_high: int, factor: float) -> None:
        if query_low <= low and high <= query_high:
            self._apply(node, factor, low, high)
            return

        self._push(node, low, high)

        mid = low + (high - low) // 2
        left, right = node * 2, node * 2 + 1
        if query_low <= mid:
            self._update(left, low, mid, query_low, min(query_high, mid), factor)
        if query_high > mid:
            self._update(right, mid + 1, high, max(query_low, mid + 1), query_high, factor)

        self._tree[node] = self._tree[left] * self._tree[right]

    def _apply(self, node: int, factor: float, low: int, high: int) -> None:
        self._tree[node] *= factor
        if low != high:
            self._lazy[node] *= factor

    def _push(self, node: int, low: int, high: int) -> None:
        if low == high:
            return
        factor = self._lazy[node]
        if factor == 1.0:
            return
        mid = low + (high - low) // 2
        self._apply(node * 2, factor, low, mid)
        self._apply(node * 2 + 1, factor, mid + 1, high)
        self._lazy[node] = 1.0