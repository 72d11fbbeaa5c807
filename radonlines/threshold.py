"""Thresholds that keep a given fraction of the largest values."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np


class PeakThreshold:
    """Values of a ``length`` by ``width`` map, sorted from largest to smallest."""

    def __init__(self, values, length: int, width: int) -> None:
        length = int(length)
        width = int(width)
        if length < 0 or width < 0:
            raise ValueError("length and width must not be negative")
        size = length * width
        flat = np.asarray(values, dtype=float).ravel()
        if flat.size < size:
            raise ValueError(f"expected at least {size} values, got {flat.size}")
        self.length = length
        self.width = width
        self.size = size
        self._sorted = np.sort(flat[:size])[::-1]

    @property
    def sorted_values(self) -> np.ndarray:
        """The values in descending order."""
        return self._sorted.copy()

    def threshold(self, rate: float) -> float:
        """The value below which all but the top ``rate`` fraction lie.

        Returns the ``ceil(size * rate)``-th largest value, counting from one.
        """
        index = math.ceil(self.size * rate)
        if not 1 <= index <= self.size:
            raise ValueError(f"rate {rate} selects no value among {self.size}")
        return float(self._sorted[index - 1])


def imthresh(values: Iterable[float], rate: float) -> float:
    """The value at zero-based position ``ceil(n * rate)`` of the descending order."""
    data = sorted((float(v) for v in values), reverse=True)
    index = math.ceil(len(data) * rate)
    if not 0 <= index < len(data):
        raise IndexError(f"rate {rate} selects no value among {len(data)}")
    return data[index]