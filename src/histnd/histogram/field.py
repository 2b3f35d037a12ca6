"""
histnd.histogram.field
======================

Count buffer and touched-extent bookkeeping.

HistogramField
  Flat numpy int64 buffer of size prod(bin_counts), addressed through
  histnd.geometry.indexer (dimension 0 fastest). Zero-initialized, written
  only by the importer, read by the exporter.

ExtentTracker
  Per-dimension min/max bin index that ever received an increment. Used by
  the exporter to trim empty outer bins.
"""

from __future__ import annotations

from typing import Sequence, Tuple
import sys

import numpy as np

from histnd.geometry.indexer import linearize


UNSEEN_MIN = sys.maxsize
UNSEEN_MAX = -1


class HistogramField:
    def __init__(self, bin_counts: Sequence[int]) -> None:
        self.bin_counts: Tuple[int, ...] = tuple(int(n) for n in bin_counts)
        size = 1
        for n in self.bin_counts:
            size *= n
        self._counts = np.zeros(size, dtype=np.int64)

    @property
    def size(self) -> int:
        return int(self._counts.shape[0])

    @property
    def flat(self) -> np.ndarray:
        """Read-only view of the buffer in linear (dimension-0 fastest) order."""
        view = self._counts.view()
        view.flags.writeable = False
        return view

    def offset(self, position: Sequence[int]) -> int:
        return linearize(position, self.bin_counts)

    def get(self, position: Sequence[int]) -> int:
        return int(self._counts[self.offset(position)])

    def set(self, position: Sequence[int], value: int) -> None:
        self._counts[self.offset(position)] = value

    def increment(self, position: Sequence[int]) -> int:
        idx = self.offset(position)
        value = int(self._counts[idx]) + 1
        self._counts[idx] = value
        return value

    def total(self) -> int:
        return int(self._counts.sum())

    def max_count(self) -> int:
        if self.size == 0:
            return 0
        return int(self._counts.max())

    def as_array(self) -> np.ndarray:
        """
        N-d read-only view with shape bin_counts (axis d = dimension d).

        Fortran order keeps axis 0 fastest, matching the flat layout.
        """
        return self.flat.reshape(self.bin_counts, order="F")


class ExtentTracker:
    def __init__(self, dims: int) -> None:
        self.min_seen = [UNSEEN_MIN] * int(dims)
        self.max_seen = [UNSEEN_MAX] * int(dims)

    @property
    def dims(self) -> int:
        return len(self.min_seen)

    def update(self, position: Sequence[int]) -> None:
        for d, p in enumerate(position):
            if p < self.min_seen[d]:
                self.min_seen[d] = p
            if p > self.max_seen[d]:
                self.max_seen[d] = p

    def seen(self, dim: int) -> bool:
        return self.max_seen[dim] != UNSEEN_MAX

    def bounds(self, dim: int) -> Tuple[int, int]:
        return self.min_seen[dim], self.max_seen[dim]
