"""Numerical gradient along one axis of an array."""

from __future__ import annotations

import numpy as np


def gradient(matrix, axis: int = 0) -> np.ndarray:
    """Differences along ``axis``: one-sided at both ends, central inside.

    The first and last entries are forward and backward differences, every
    other entry is half the difference of its two neighbours.
    """
    data = np.asarray(matrix)
    if not np.iscomplexobj(data):
        data = data.astype(float)
    if data.ndim == 0:
        raise ValueError("matrix must have at least one dimension")
    if not -data.ndim <= axis < data.ndim:
        raise ValueError(f"axis {axis} is out of range for {data.ndim} dimensions")
    if data.shape[axis] < 2:
        raise ValueError("at least two values are needed along the axis")

    moved = np.moveaxis(data, axis, -1)
    out = np.empty_like(moved)
    out[..., 0] = moved[..., 1] - moved[..., 0]
    out[..., 1:-1] = (moved[..., 2:] - moved[..., :-2]) / 2
    out[..., -1] = moved[..., -1] - moved[..., -2]
    return np.moveaxis(out, -1, axis)