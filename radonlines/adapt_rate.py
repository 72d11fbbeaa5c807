"""Choosing the fraction of strongest gradient peaks to keep.

For each candidate rate the peaks above the matching threshold form a mask,
the mean area of its connected regions is measured, and the rate is chosen
where that measure stops growing and then reaches its lowest point.
"""

from __future__ import annotations

import argparse
import math
import sys
from typing import Iterable

import numpy as np
from scipy import ndimage

from radonlines.textio import read_numbers
from radonlines.threshold import PeakThreshold

RATE_MIN = 0.001
RATE_MAX = 0.003
RATE_STEP = 0.0002
RATE_COUNT = round((RATE_MAX - RATE_MIN) / RATE_STEP) + 1

_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def rate_candidates() -> list[float]:
    """The peak rates that are tried, from the smallest to the largest."""
    return [RATE_MIN + index * RATE_STEP for index in range(RATE_COUNT)]


def _borders(length: int, im_height: float) -> tuple[int, int]:
    top = int(math.floor(length - im_height * 0.99) / 2)
    bottom = int(math.floor(length + im_height * 0.99) / 2)
    return top, bottom


def peak_mask(values, threshold: float, length: int, width: int, im_height: float) -> np.ndarray:
    """Mask of the values above ``threshold`` on a ``width`` by ``length`` grid.

    Rows before ``floor(length - 0.99 * im_height) / 2`` and from
    ``floor(length + 0.99 * im_height) / 2`` on are cleared, removing the
    peaks caused by the image border.
    """
    length = int(length)
    width = int(width)
    if length < 0 or width < 0:
        raise ValueError("length and width must not be negative")
    size = length * width
    flat = np.asarray(values, dtype=float).ravel()
    if flat.size < size:
        raise ValueError(f"expected at least {size} values, got {flat.size}")
    mask = flat[:size].reshape(width, length) > threshold
    top, bottom = _borders(length, im_height)
    mask[: min(max(top, 0), width)] = False
    mask[min(max(bottom, 0), width):] = False
    return mask


def mean_component_area(mask, count_background: bool = True) -> float:
    """Foreground area divided by the number of 8-connected regions.

    With ``count_background`` the background counts as one more region.
    Returns NaN when there is nothing to divide by.
    """
    data = np.asarray(mask)
    if data.ndim != 2:
        raise ValueError("mask must be two-dimensional")
    labeled, count = ndimage.label(data != 0, structure=_EIGHT_CONNECTED)
    area = float(np.count_nonzero(labeled))
    denominator = count + 1 if count_background else count
    if denominator == 0:
        return math.nan
    return area / denominator


def arg_max(values: Iterable[float]) -> int:
    """Index of the first largest value."""
    items = list(values)
    if not items:
        raise ValueError("no values to search")
    best = 0
    for index, value in enumerate(items[1:], start=1):
        if items[best] < value:
            best = index
    return best


def arg_min(values: Iterable[float]) -> int:
    """Index of the first smallest value."""
    items = list(values)
    if not items:
        raise ValueError("no values to search")
    best = 0
    for index, value in enumerate(items[1:], start=1):
        if items[best] > value:
            best = index
    return best


def select_rate_index(pixes: Iterable[float]) -> int:
    """Index of the lowest value after the first run of rising maxima ends."""
    values = list(pixes)
    if not values:
        raise ValueError("no values to choose from")
    stop = len(values)
    for index in range(len(values)):
        if arg_max(values[: index + 1]) != index:
            stop = index
            break
    start = stop - 1
    return start + arg_min(values[start:])


def adaptive_rate(values, thresholds: PeakThreshold, im_height: float) -> float:
    """The candidate rate chosen for ``values`` sorted in ``thresholds``."""
    rates = rate_candidates()
    pixes = [
        mean_component_area(
            peak_mask(
                values,
                thresholds.threshold(rate),
                thresholds.length,
                thresholds.width,
                im_height,
            ),
            True,
        )
        for rate in rates
    ]
    return rates[select_rate_index(pixes)]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Choose the fraction of gradient peaks to keep."
    )
    parser.add_argument("values", nargs="?", default="G.txt")
    parser.add_argument("--length", type=int, default=497)
    parser.add_argument("--width", type=int, default=801)
    parser.add_argument("--height", type=float, default=360)
    args = parser.parse_args(argv)

    try:
        values = read_numbers(args.values)
    except OSError as error:
        print(f"Could not open the file {args.values}: {error}", file=sys.stderr)
        return 1

    try:
        thresholds = PeakThreshold(values, args.length, args.width)
        rate = adaptive_rate(values, thresholds, args.height)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    print(f"{rate:.6g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())