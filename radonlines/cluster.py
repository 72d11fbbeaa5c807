"""Grouping gradient peaks into the two fascia and the muscle fibres."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

import numpy as np
from scipy import ndimage

from radonlines.adapt_rate import adaptive_rate, arg_max, peak_mask
from radonlines.textio import read_numbers
from radonlines.threshold import PeakThreshold

CLUSTER_SIZE = 3
_MAX_ITERATIONS = 10
_EPSILON = 1.0
_ATTEMPTS = 50
_SEED = 0

_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)

Point = tuple[int, int]


@dataclass(frozen=True)
class ClusterResult:
    """Peaks of a gradient map and the groups found among them.

    Points are ``(x, y)`` pairs: column and row of the map.
    """

    rate: float
    threshold: float
    mask: np.ndarray
    points: np.ndarray
    labels: np.ndarray
    centers: np.ndarray
    low_fascia: list[Point]
    high_fascia: list[Point]
    fiber: list[Point]


def mask_points(mask) -> np.ndarray:
    """``(x, y)`` of every non-zero entry, in row-major order."""
    data = np.asarray(mask)
    if data.ndim != 2:
        raise ValueError("mask must be two-dimensional")
    rows, cols = np.nonzero(data)
    return np.column_stack((cols, rows)).astype(int)


def _nearest(data: np.ndarray, centers: np.ndarray) -> np.ndarray:
    distances = ((data[:, None, :] - centers[None, :, :]) ** 2).sum(axis=2)
    return distances.argmin(axis=1)


def _means(data: np.ndarray, labels: np.ndarray, centers: np.ndarray) -> np.ndarray:
    labels = labels.copy()
    k = len(centers)
    counts = np.bincount(labels, minlength=k)
    for cluster in np.flatnonzero(counts == 0):
        distances = ((data - centers[labels]) ** 2).sum(axis=1)
        distances[counts[labels] <= 1] = -1.0
        donor = int(distances.argmax())
        counts[labels[donor]] -= 1
        labels[donor] = cluster
        counts[cluster] = 1
    sums = np.zeros_like(centers)
    np.add.at(sums, labels, data)
    return sums / counts[:, None]


def _seed_centers(data: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    n = len(data)
    first = int(rng.integers(n))
    chosen = [first]
    distances = ((data - data[first]) ** 2).sum(axis=1)
    while len(chosen) < k:
        total = distances.sum()
        if total <= 0:
            index = int(rng.integers(n))
        else:
            index = int(rng.choice(n, p=distances / total))
        chosen.append(index)
        distances = np.minimum(distances, ((data - data[index]) ** 2).sum(axis=1))
    return data[chosen].copy()


def _run(data: np.ndarray, k: int, rng: np.random.Generator):
    centers = _seed_centers(data, k, rng)
    labels = _nearest(data, centers)
    for _ in range(_MAX_ITERATIONS):
        updated = _means(data, labels, centers)
        shift = float(((updated - centers) ** 2).sum(axis=1).max())
        centers = updated
        labels = _nearest(data, centers)
        if shift <= _EPSILON**2:
            break
    compactness = float(((data - centers[labels]) ** 2).sum())
    return labels, centers, compactness


def kmeans(points, k: int, attempts: int = 1, seed=None) -> tuple[np.ndarray, np.ndarray]:
    """K-means with k-means++ seeding; the most compact of ``attempts`` runs wins.

    Returns the label of every point and the ``k`` centres.
    """
    data = np.asarray(points, dtype=float)
    if data.ndim == 1:
        data = data[:, None]
    if data.ndim != 2:
        raise ValueError("points must be a list of coordinates")
    k = int(k)
    attempts = int(attempts)
    if k < 1:
        raise ValueError("k must be at least one")
    if attempts < 1:
        raise ValueError("attempts must be at least one")
    if len(data) < k:
        raise ValueError(f"cannot form {k} clusters from {len(data)} points")

    rng = np.random.default_rng(seed)
    best = None
    for _ in range(attempts):
        labels, centers, compactness = _run(data, k, rng)
        if best is None or compactness < best[2]:
            best = (labels, centers, compactness)
    return best[0], best[1]


def classify_points(points, labels, centers) -> list[list[Point]]:
    """Points grouped by cluster, clusters ordered by centre x from largest down."""
    centers = np.asarray(centers, dtype=float)
    k = len(centers)
    order = sorted(range(k), key=lambda cluster: -int(centers[cluster][0]))
    rank = {cluster: position for position, cluster in enumerate(order)}
    groups: list[list[Point]] = [[] for _ in range(k)]
    for point, label in zip(np.asarray(points, dtype=float), np.asarray(labels).ravel()):
        groups[rank[int(label)]].append((int(round(point[0])), int(round(point[1]))))
    return groups


def _dimensions(shape) -> tuple[int, int]:
    rows, cols = (int(d) for d in shape)
    if rows < 0 or cols < 0:
        raise ValueError("shape dimensions must not be negative")
    return rows, cols


def _grid(values, rows: int, cols: int) -> np.ndarray:
    flat = np.asarray(values, dtype=float).ravel()
    size = rows * cols
    if flat.size < size:
        raise ValueError(f"expected at least {size} values, got {flat.size}")
    return flat[:size].reshape(rows, cols)


def _components(points, rows: int, cols: int) -> tuple[np.ndarray, int]:
    canvas = np.zeros((rows, cols), dtype=bool)
    for x, y in points:
        if not (0 <= x < cols and 0 <= y < rows):
            raise ValueError(f"point ({x}, {y}) lies outside a {rows}x{cols} map")
        canvas[y, x] = True
    return ndimage.label(canvas, structure=_EIGHT_CONNECTED)


def point_of_fascia(points, values, shape) -> list[Point]:
    """Points of the 8-connected region whose values add up to the most."""
    rows, cols = _dimensions(shape)
    labeled, count = _components(points, rows, cols)
    if count == 0:
        raise ValueError("no points to group")
    grid = _grid(values, rows, cols)
    weights = np.bincount(labeled.ravel(), weights=grid.ravel(), minlength=count + 1)[1:]
    best = arg_max(weights) + 1
    region_rows, region_cols = np.nonzero(labeled == best)
    return list(zip(region_cols.tolist(), region_rows.tolist()))


def points_of_fiber(points, values, shape) -> list[Point]:
    """Position of the largest value in each 8-connected region of the points."""
    rows, cols = _dimensions(shape)
    labeled, count = _components(points, rows, cols)
    flat_values = _grid(values, rows, cols).ravel()
    flat_labels = labeled.ravel()
    result: list[Point] = []
    for label in range(1, count + 1):
        indices = np.flatnonzero(flat_labels == label)
        best = int(indices[int(np.argmax(flat_values[indices]))])
        row, col = divmod(best, cols)
        result.append((col, row))
    return result


def cluster_peaks(values, length: int, width: int, im_height: float) -> ClusterResult:
    """Threshold a ``width`` by ``length`` gradient map and group its peaks."""
    thresholds = PeakThreshold(values, length, width)
    rate = adaptive_rate(values, thresholds, im_height)
    threshold = thresholds.threshold(rate)
    mask = peak_mask(values, threshold, length, width, im_height)
    points = mask_points(mask)
    labels, centers = kmeans(points, CLUSTER_SIZE, _ATTEMPTS, _SEED)
    groups = classify_points(points, labels, centers)
    shape = (int(width), int(length))
    return ClusterResult(
        rate=rate,
        threshold=threshold,
        mask=mask,
        points=points,
        labels=labels,
        centers=centers,
        low_fascia=point_of_fascia(groups[0], values, shape),
        high_fascia=point_of_fascia(groups[2], values, shape),
        fiber=points_of_fiber(groups[1], values, shape),
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Group gradient peaks into fascia and fibres."
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
        result = cluster_peaks(values, args.length, args.width, args.height)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1

    print(f"thresh : {result.threshold:.6g}")
    print(f"Point num : {len(result.points)}")
    for center in result.centers:
        print(f"[{int(center[0])}, {int(center[1])}]")
    print(f"low fascia : {len(result.low_fascia)} points")
    print(f"high fascia : {len(result.high_fascia)} points")
    print(f"fiber : {len(result.fiber)} points")
    return 0


if __name__ == "__main__":
    sys.exit(main())