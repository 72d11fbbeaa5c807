"""Radon transform by superposition of point-mass projections.

Each non-zero pixel is split into four sub-masses offset by a quarter pixel
to the NE, NW, SE and SW of its centre, and every sub-mass is spread over
the two nearest rho bins by linear interpolation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

DEG2RAD = 3.14159265358979 / 180.0


@dataclass(frozen=True)
class RadonResult:
    """Projections of an image.

    ``projections`` has one row per rho value and one column per angle.
    ``theta`` holds the angles in degrees, ``rho`` the offsets of the rows.
    """

    projections: np.ndarray
    rho: np.ndarray
    theta: np.ndarray


def degree_range(start: float, stop: float, step: float) -> np.ndarray:
    """Angles ``start, start + step, ...`` for ``int((stop - start) / step + 1)`` values."""
    if step == 0:
        raise ValueError("step must not be zero")
    count = int((stop - start) / step + 1)
    if count <= 0:
        return np.empty(0, dtype=float)
    return start + np.arange(count, dtype=float) * step


def _origin(shape: tuple[int, int]) -> tuple[int, int]:
    rows, cols = shape
    return max(0, (cols - 1) // 2), max(0, (rows - 1) // 2)


def _r_last(shape: tuple[int, int]) -> int:
    rows, cols = shape
    x_origin, y_origin = _origin(shape)
    dy = rows - 1 - y_origin
    dx = cols - 1 - x_origin
    return int(math.ceil(math.sqrt(float(dy * dy + dx * dx)))) + 1


def _check_shape(shape: Iterable[int]) -> tuple[int, int]:
    dims = tuple(int(d) for d in shape)
    if len(dims) != 2:
        raise ValueError("shape must have exactly two dimensions")
    if any(d < 0 for d in dims):
        raise ValueError("shape dimensions must not be negative")
    return dims  # type: ignore[return-value]


def rho_axis(shape: Iterable[int]) -> np.ndarray:
    """Rho values of the projection rows for an image of ``(rows, cols)``."""
    dims = _check_shape(shape)
    r_last = _r_last(dims)
    return np.arange(-r_last, r_last + 1, dtype=float)


def _project(
    image: np.ndarray,
    radians: np.ndarray,
    r_first: int,
    r_size: int,
) -> np.ndarray:
    x_origin, y_origin = _origin(image.shape)
    rows, cols = np.nonzero(image)
    pixels = image[rows, cols] * 0.25
    x = cols.astype(float) - x_origin
    y = y_origin - rows.astype(float)

    out = np.zeros((r_size, radians.size), dtype=float)
    for k, angle in enumerate(radians):
        cosine = math.cos(angle)
        sine = math.sin(angle)
        x_terms = ((x - 0.25) * cosine, (x + 0.25) * cosine)
        y_terms = ((y - 0.25) * sine, (y + 0.25) * sine)
        column = np.zeros(r_size, dtype=float)
        for y_term in y_terms:
            for x_term in x_terms:
                r = x_term + y_term - r_first
                lower = r.astype(np.int64)
                delta = r - lower
                column += np.bincount(
                    lower, weights=pixels * (1.0 - delta), minlength=r_size
                )[:r_size]
                column += np.bincount(
                    lower + 1, weights=pixels * delta, minlength=r_size
                )[:r_size]
        out[:, k] = column
    return out


def radon(image, theta) -> RadonResult:
    """Radon transform of a 2-D image along the angles ``theta`` (degrees).

    Angles are measured counter-clockwise from the horizontal axis; the
    origin is the image centre rounded to the upper left. Complex images
    are transformed part by part.
    """
    data = np.asarray(image)
    if data.ndim != 2:
        raise ValueError("image must be two-dimensional")
    if not (np.issubdtype(data.dtype, np.number) or data.dtype == np.bool_):
        raise TypeError("image must hold numbers")
    angles = np.asarray(theta, dtype=float).ravel()
    radians = angles * DEG2RAD

    rho = rho_axis(data.shape)
    r_first = int(rho[0])
    r_size = rho.size

    if np.iscomplexobj(data):
        real = _project(np.ascontiguousarray(data.real, dtype=float), radians, r_first, r_size)
        imag = _project(np.ascontiguousarray(data.imag, dtype=float), radians, r_first, r_size)
        projections = real + 1j * imag
    else:
        projections = _project(data.astype(float), radians, r_first, r_size)

    return RadonResult(projections=projections, rho=rho, theta=angles)