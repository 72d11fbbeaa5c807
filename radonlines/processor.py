"""Radon transform of a normalised image followed by its gradient along rho."""

from __future__ import annotations

import argparse
import os
import sys
from itertools import accumulate

import numpy as np
from PIL import Image

from radonlines.gradient import gradient
from radonlines.radon import DEG2RAD, radon, rho_axis
from radonlines.threshold import PeakThreshold


def load_grayscale(path: str | os.PathLike) -> np.ndarray:
    """Load an image file as an 8-bit grayscale array."""
    with Image.open(path) as picture:
        return np.asarray(picture.convert("L"), dtype=np.uint8)


def pretreat(image) -> np.ndarray:
    """Scale pixels to ``[0, 1]`` by dividing by 255 and subtract their mean."""
    data = np.asarray(image, dtype=float)
    if data.ndim != 2:
        raise ValueError("image must be two-dimensional")
    if data.size == 0:
        raise ValueError("image must not be empty")
    scaled = data / 255
    return scaled - scaled.mean()


def _interval_degrees(degree_min: float, degree_max: float, degree_interval: float) -> np.ndarray:
    if degree_interval == 0:
        raise ValueError("degree interval must not be zero")
    count = int((degree_max - degree_min) / degree_interval + 1)
    if count < 1:
        raise ValueError("the degree range holds no angle")
    steps = [float(degree_min)] + [float(degree_interval)] * (count - 1)
    return np.fromiter(accumulate(steps), dtype=float, count=count)


class RadonProcessor:
    """Projections of an image with one row per angle and their rho gradient."""

    def __init__(
        self,
        image,
        degree_min: float,
        degree_max: float,
        degree_interval: float,
    ) -> None:
        self.degrees = _interval_degrees(degree_min, degree_max, degree_interval)
        self.radians = self.degrees * DEG2RAD
        self.pretreated = pretreat(image)
        rows, cols = self.pretreated.shape
        self.center = (max(0, (cols - 1) // 2), max(0, (rows - 1) // 2))
        self.rho = rho_axis(self.pretreated.shape)
        self.radon_matrix = radon(self.pretreated, self.degrees).projections.T
        self.gradient_matrix = gradient(self.radon_matrix, axis=1)
        self._peaks = PeakThreshold(self.gradient_matrix, *self.gradient_matrix.shape)

    def threshold(self, rate: float) -> float:
        """Gradient value that the top ``rate`` fraction of entries reach."""
        return self._peaks.threshold(rate)

    def format_rows(self, start: int, stop: int) -> str:
        """Rows ``start`` to ``stop`` (exclusive) of the gradient matrix as nested lists."""
        total = self.gradient_matrix.shape[0]
        if not 0 <= start <= stop <= total:
            raise ValueError(f"rows {start}:{stop} are outside 0:{total}")
        rows = (
            "[" + ", ".join(f"{value:.16g}" for value in row) + "]"
            for row in self.gradient_matrix[start:stop]
        )
        return "[" + ",\n ".join(rows) + "]"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Radon transform of an image and its gradient along rho."
    )
    parser.add_argument("image", nargs="?", default="bmc1.bmp")
    parser.add_argument("--min", dest="degree_min", type=float, default=10.0)
    parser.add_argument("--max", dest="degree_max", type=float, default=170.0)
    parser.add_argument("--step", dest="degree_interval", type=float, default=0.2)
    parser.add_argument("--rows", type=int, nargs=2, metavar=("START", "STOP"))
    args = parser.parse_args(argv)

    try:
        image = load_grayscale(args.image)
    except OSError as error:
        print(f"Could not open the file {args.image}: {error}", file=sys.stderr)
        return 1

    try:
        processor = RadonProcessor(
            image, args.degree_min, args.degree_max, args.degree_interval
        )
        rows, cols = processor.gradient_matrix.shape
        print(f"Radon Matrix size : ({rows}, {cols})")
        if args.rows:
            print(processor.format_rows(*args.rows))
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())