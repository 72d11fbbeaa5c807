import numpy as np
import pytest

from radonlines.adapt_rate import rate_candidates
from radonlines.cluster import (
    classify_points,
    cluster_peaks,
    kmeans,
    main,
    mask_points,
    point_of_fascia,
    points_of_fiber,
)
from radonlines.textio import write_numbers


def _three_columns():
    grid = np.zeros((100, 100))
    for row in range(10):
        for offset, col in enumerate((90, 50, 10)):
            grid[20 + row, col] = 1000 - (3 * row + offset)
    return grid.ravel()


def test_mask_points_row_major_xy():
    mask = np.zeros((3, 4), dtype=bool)
    mask[0, 3] = True
    mask[2, 1] = True
    mask[1, 0] = True
    points = mask_points(mask)
    assert points.tolist() == [[3, 0], [0, 1], [1, 2]]


def test_kmeans_separates_blobs():
    blobs = [(0.0, 0.0), (20.0, 0.0), (0.0, 20.0)]
    offsets = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    points = np.array([(bx + ox, by + oy) for bx, by in blobs for ox, oy in offsets])
    labels, centers = kmeans(points, 3, 5, 1)
    groups = [set(labels[i * 4:(i + 1) * 4].tolist()) for i in range(3)]
    assert all(len(group) == 1 for group in groups)
    assert len(set().union(*groups)) == 3
    for i, (bx, by) in enumerate(blobs):
        label = labels[i * 4]
        assert centers[label] == pytest.approx([bx + 0.5, by + 0.5])


def test_kmeans_labels_nearest_center():
    rng = np.random.default_rng(7)
    points = rng.random((40, 2)) * 50
    labels, centers = kmeans(points, 4, 3, 2)
    distances = ((points[:, None, :] - centers[None]) ** 2).sum(axis=2)
    assert labels.tolist() == distances.argmin(axis=1).tolist()


def test_kmeans_too_few_points():
    with pytest.raises(ValueError):
        kmeans([(0, 0), (1, 1), (2, 2)], 4)


def test_classify_points_orders_by_center_x():
    points = [(1, 0), (9, 0), (5, 0)]
    labels = [0, 1, 2]
    centers = [[1.0, 0.0], [9.0, 0.0], [5.0, 0.0]]
    groups = classify_points(points, labels, centers)
    assert groups == [[(9, 0)], [(5, 0)], [(1, 0)]]


def test_classify_points_ties_keep_cluster_order():
    points = [(6, 1), (5, 2)]
    labels = [0, 1]
    centers = [[5.7, 1.0], [5.2, 2.0]]
    groups = classify_points(points, labels, centers)
    assert groups == [[(6, 1)], [(5, 2)]]


def test_point_of_fascia_picks_heaviest_region():
    shape = (5, 6)
    values = np.zeros(shape)
    light = [(0, 0), (1, 1)]
    heavy = [(4, 3), (5, 3)]
    for x, y in light:
        values[y, x] = 1.0
    for x, y in heavy:
        values[y, x] = 5.0
    assert point_of_fascia(light + heavy, values.ravel(), shape) == heavy


def test_point_of_fascia_joins_diagonal_neighbours():
    shape = (5, 6)
    values = np.zeros(shape)
    values[0, 0] = 10.0
    values[1, 1] = 10.0
    values[3, 4] = 1.0
    result = point_of_fascia([(1, 1), (0, 0), (4, 3)], values.ravel(), shape)
    assert result == [(0, 0), (1, 1)]


def test_point_of_fascia_errors():
    with pytest.raises(ValueError):
        point_of_fascia([], np.zeros(30), (5, 6))
    with pytest.raises(ValueError):
        point_of_fascia([(6, 0)], np.zeros(30), (5, 6))


def test_points_of_fiber_finds_maximum_per_region():
    shape = (5, 6)
    values = np.zeros(shape)
    values[0, 0] = 2.0
    values[0, 1] = 7.0
    values[4, 4] = 3.0
    values[4, 5] = 9.0
    points = [(0, 0), (1, 0), (4, 4), (5, 4)]
    assert points_of_fiber(points, values.ravel(), shape) == [(1, 0), (5, 4)]


def test_points_of_fiber_no_points():
    assert points_of_fiber([], np.zeros(30), (5, 6)) == []


def test_cluster_peaks_three_columns():
    result = cluster_peaks(_three_columns(), 100, 100, 100)
    assert any(result.rate == candidate for candidate in rate_candidates())
    assert np.count_nonzero(result.mask) == len(result.points)
    assert result.low_fascia
    assert all(x == 90 for x, _ in result.low_fascia)
    assert result.high_fascia
    assert all(x == 10 for x, _ in result.high_fascia)
    assert result.fiber == [(50, 20)]


def test_main_runs_on_file(tmp_path, capsys):
    path = tmp_path / "G.txt"
    write_numbers(path, _three_columns())
    code = main([str(path), "--length", "100", "--width", "100", "--height", "100"])
    assert code == 0
    assert "Point num" in capsys.readouterr().out


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.txt")]) == 1