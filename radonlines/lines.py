"""Straight lines recovered from peaks of a Radon transform.

A peak is given as ``(x, y)`` positions in the projection matrix, counted
from one: ``x`` along rho, ``y`` along theta. The theta and rho axes are
mapped linearly onto those positions. The line is described by its
end points on the left and right edges of the image.
"""

from __future__ import annotations

import argparse
import math
import os
import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

from radonlines.radon import degree_range
from radonlines.textio import read_numbers

PI = 3.14159265358979323846
_FIELDS_PER_LINE = 7

Point = tuple[float, float]


@dataclass(frozen=True)
class Line:
    """A line with two end points, its angle in radians, its offset and its weight."""

    point1: Point = (0.0, 0.0)
    point2: Point = (0.0, 0.0)
    theta: float = 0.0
    rho: float = 0.0
    g: float = 0.0


def _axis(values, name: str) -> tuple[float, float]:
    items = [float(v) for v in values]
    if not items:
        raise ValueError(f"{name} axis must not be empty")
    count = len(items)
    first, last = items[0], items[-1]
    slope = (last - first) / count
    intercept = (count * first - last) / count
    return slope, intercept


def _peak(peak: Sequence[float]) -> Point:
    x, y = peak
    return float(x), float(y)


class LineMapper:
    """Turns peaks into lines for one image size and one pair of axes."""

    def __init__(self, image_length: int, image_width: int, theta, rho) -> None:
        self.image_length = int(image_length)
        self.image_width = int(image_width)
        self._k_theta, self._b_theta = _axis(theta, "theta")
        self._k_rho, self._b_rho = _axis(rho, "rho")
        self.center_x = float((self.image_length + 1) // 2)
        self.center_y = float((self.image_width + 1) // 2)

    def line(self, peak: Sequence[float], peak_g: float) -> Line:
        """The line for a peak at ``(x, y)`` with weight ``peak_g``.

        Raises ValueError for a horizontal angle, whose sine is zero.
        """
        x, y = _peak(peak)
        theta = (self._k_theta * y + self._b_theta) * PI / 180
        rho = self._k_rho + x + self._b_rho
        sine = math.sin(theta)
        cosine = math.cos(theta)
        if sine == 0:
            raise ValueError("a line whose angle has zero sine has no end points")
        y1 = self.center_x - (rho + self.center_y * cosine) / sine
        y2 = self.center_x - (rho - (self.image_width - self.center_y) * cosine) / sine
        return Line(
            point1=(0.0, y1),
            point2=(float(self.image_width), y2),
            theta=theta,
            rho=rho,
            g=float(peak_g),
        )


def line_from_peak(
    image_length: int,
    image_width: int,
    theta,
    rho,
    peak: Sequence[float],
    peak_g: float,
) -> Line:
    """The line for one peak, without keeping the mapping around."""
    return LineMapper(image_length, image_width, theta, rho).line(peak, peak_g)


def read_lines(path: str | os.PathLike) -> list[Line]:
    """Lines stored as groups of seven numbers.

    Each group holds ``x1 y1 x2 y2 theta rho G``; an incomplete last group
    is ignored.
    """
    numbers = read_numbers(path)
    complete = len(numbers) - len(numbers) % _FIELDS_PER_LINE
    groups = (
        numbers[start : start + _FIELDS_PER_LINE]
        for start in range(0, complete, _FIELDS_PER_LINE)
    )
    return [
        Line(point1=(x1, y1), point2=(x2, y2), theta=theta, rho=rho, g=g)
        for x1, y1, x2, y2, theta, rho, g in groups
    ]


def angle_mean(line_sets: Iterable[Iterable[Line]]) -> float:
    """Mean angle of all lines of all sets, weighted by their ``g``."""
    weighted = 0.0
    total = 0.0
    for lines in line_sets:
        for line in lines:
            weighted += line.theta * line.g
            total += line.g
    if total == 0:
        raise ValueError("the lines carry no weight")
    return weighted / total


def _print_line(line: Line) -> None:
    print(f"point1: ({line.point1[0]:.6g}, {line.point1[1]:.6g})")
    print(f"point2: ({line.point2[0]:.6g}, {line.point2[1]:.6g})")
    print(f"theta: {line.theta:.6g}")
    print(f"rho: {line.rho:.6g}")
    print(f"G: {line.g:.6g}")


def _run_line(args) -> int:
    try:
        rho = read_numbers(args.rho_file)
    except OSError as error:
        print(f"Could not open the file {args.rho_file}: {error}", file=sys.stderr)
        return 1
    try:
        theta = degree_range(args.degree_min, args.degree_max, args.degree_interval)
        mapper = LineMapper(args.length, args.width, theta, rho)
        line = mapper.line(tuple(args.peak), args.g)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    _print_line(line)
    return 0


def _run_angle_mean(args) -> int:
    try:
        lines = read_lines(args.lines_file)
    except OSError as error:
        print(f"Could not open the file {args.lines_file}: {error}", file=sys.stderr)
        return 1
    try:
        mean = angle_mean([lines])
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    print(f"{mean:.6g}")
    return 0


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lines from Radon transform peaks.")
    commands = parser.add_subparsers(dest="command")

    line = commands.add_parser("line", help="line of one peak")
    line.add_argument("rho_file", nargs="?", default="result_r")
    line.add_argument("--length", type=int, default=360)
    line.add_argument("--width", type=int, default=338)
    line.add_argument("--peak", type=float, nargs=2, metavar=("X", "Y"), default=[325.0, 305.0])
    line.add_argument("--g", type=float, default=11.2366)
    line.add_argument("--min", dest="degree_min", type=float, default=10.0)
    line.add_argument("--max", dest="degree_max", type=float, default=170.0)
    line.add_argument("--step", dest="degree_interval", type=float, default=0.2)

    mean = commands.add_parser("angle-mean", help="weighted mean angle of stored lines")
    mean.add_argument("lines_file", nargs="?", default="lines.txt")
    return parser


def main(argv=None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["line"])
    if args.command == "angle-mean":
        return _run_angle_mean(args)
    return _run_line(args)


if __name__ == "__main__":
    sys.exit(main())