import math

import pytest

from radonlines.lines import (
    Line,
    LineMapper,
    angle_mean,
    line_from_peak,
    main,
    read_lines,
)

THETA = [10.0 + 0.2 * i for i in range(801)]
RHO = [float(k) for k in range(-248, 249)]


def _on_line(mapper, line, point):
    x, y = point
    return (x - mapper.center_y) * math.cos(line.theta) + (mapper.center_x - y) * math.sin(
        line.theta
    )


def test_end_points_lie_on_the_line():
    mapper = LineMapper(360, 338, THETA, RHO)
    line = mapper.line((325, 305), 11.2366)
    assert _on_line(mapper, line, line.point1) == pytest.approx(line.rho)
    assert _on_line(mapper, line, line.point2) == pytest.approx(line.rho)


def test_end_points_on_image_edges_and_weight_kept():
    line = line_from_peak(360, 338, THETA, RHO, (325, 305), 11.2366)
    assert line.point1[0] == 0.0
    assert line.point2[0] == 338.0
    assert line.g == 11.2366


def test_mapper_and_function_agree():
    mapper = LineMapper(360, 338, THETA, RHO)
    assert mapper.line((100, 50), 2.0) == line_from_peak(360, 338, THETA, RHO, (100, 50), 2.0)


def test_first_position_gives_first_angle():
    line = line_from_peak(100, 80, [30.0, 40.0, 50.0], [0.0, 1.0, 2.0], (5, 1), 1.0)
    assert line.theta == pytest.approx(math.radians(30.0))


def test_rho_axis_from_zero_gives_peak_x():
    line = line_from_peak(100, 80, [30.0, 40.0, 50.0], [0.0, 1.0, 2.0], (7.5, 2), 1.0)
    assert line.rho == pytest.approx(7.5)


def test_centers_from_image_size():
    mapper = LineMapper(360, 338, THETA, RHO)
    assert (mapper.center_x, mapper.center_y) == (180.0, 169.0)


def test_empty_axis_raises():
    with pytest.raises(ValueError):
        LineMapper(10, 10, [], RHO)
    with pytest.raises(ValueError):
        LineMapper(10, 10, THETA, [])


def test_zero_sine_raises():
    with pytest.raises(ValueError):
        line_from_peak(10, 10, [0.0, 10.0], [0.0, 1.0], (1, 1), 1.0)


def test_default_line_is_zero():
    line = Line()
    assert (line.point1, line.point2, line.theta, line.rho, line.g) == (
        (0.0, 0.0),
        (0.0, 0.0),
        0.0,
        0.0,
        0.0,
    )


def test_read_lines_groups_of_seven(tmp_path):
    path = tmp_path / "lines.txt"
    numbers = list(range(1, 15)) + [99, 98]
    path.write_text("\n".join(str(n) for n in numbers) + "\n")
    lines = read_lines(path)
    assert len(lines) == 2
    assert lines[0] == Line((1.0, 2.0), (3.0, 4.0), 5.0, 6.0, 7.0)
    assert lines[1].g == 14.0


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_lines(tmp_path / "absent.txt")


def test_angle_mean_of_equal_angles():
    lines = [Line(theta=1.3182, g=g) for g in (1.0, 5.0, 2.5)]
    assert angle_mean([lines]) == pytest.approx(1.3182)


def test_angle_mean_weighted():
    lines = [Line(theta=1.0, g=1.0), Line(theta=3.0, g=1.0)]
    assert angle_mean([lines]) == pytest.approx(2.0)


def test_angle_mean_sets_match_flat_list():
    first = [Line(theta=0.5, g=2.0), Line(theta=1.5, g=1.0)]
    second = [Line(theta=1.0, g=4.0)]
    assert angle_mean([first, second]) == pytest.approx(angle_mean([first + second]))


def test_angle_mean_without_weight_raises():
    with pytest.raises(ValueError):
        angle_mean([[Line(theta=1.0, g=0.0)]])


def test_main_angle_mean(tmp_path, capsys):
    path = tmp_path / "lines.txt"
    path.write_text("0 0 1 1 1.3182 5 2\n0 0 1 1 1.3182 6 3\n")
    assert main(["angle-mean", str(path)]) == 0
    assert capsys.readouterr().out.strip() == "1.3182"


def test_main_line(tmp_path, capsys):
    path = tmp_path / "result_r"
    path.write_text("\n".join(str(v) for v in range(-248, 249)) + "\n")
    assert main(["line", str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("point1: (0, ")
    assert out[1].startswith("point2: (338, ")
    assert out[-1] == "G: 11.2366"


def test_main_missing_file(tmp_path):
    assert main(["line", str(tmp_path / "absent")]) == 1