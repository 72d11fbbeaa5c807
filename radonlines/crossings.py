"""Crossings between lines and removal of the lines that cross.

Two lines cross when their angles differ and their intersection, measured
from the image centre, lies inside an area ``area_len`` by ``area_wid``
times the image size around the image.
"""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass
from typing import Sequence

from radonlines.lines import Line, read_lines


@dataclass(frozen=True)
class Cross:
    """Intersection of the lines at indices ``lines`` at ``point``.

    ``point`` holds the rounded intersection shifted by the image centre,
    first along the image length, then along its width.
    """

    lines: tuple[int, int]
    point: tuple[float, float]


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _intersection(
    first: Line, second: Line, center_len: int, center_wid: int
) -> tuple[float, float] | None:
    a = math.sin(first.theta)
    b = -math.cos(first.theta)
    c = math.sin(second.theta)
    d = -math.cos(second.theta)
    e = -first.rho
    f = -second.rho
    det = a * d - b * c
    if det == 0:
        return None
    y = _round_half_away((d * e - b * f) / det) + center_len
    x = _round_half_away((a * f - e * c) / det) + center_wid
    return y, x


def get_crosses(
    lines: Sequence[Line],
    im_len: int,
    im_wid: int,
    area_len: int,
    area_wid: int,
) -> list[Cross]:
    """Every pair ``i < j`` of lines with different angles that meet inside the area."""
    im_len = int(im_len)
    im_wid = int(im_wid)
    center_len = (im_len + 1) // 2
    center_wid = (im_wid + 1) // 2
    low_y = 1 - im_len * (area_len - 1)
    high_y = im_len * area_len
    low_x = 1 - im_wid * (area_wid - 1)
    high_x = im_wid * area_wid

    crosses: list[Cross] = []
    for i, first in enumerate(lines):
        for j in range(i + 1, len(lines)):
            second = lines[j]
            if first.theta == second.theta:
                continue
            point = _intersection(first, second, center_len, center_wid)
            if point is None:
                continue
            y, x = point
            if low_y < y < high_y and low_x < x < high_x:
                crosses.append(Cross(lines=(i, j), point=(y, x)))
    return crosses


def lines_denoise(
    lines: Sequence[Line],
    im_len: int,
    im_wid: int,
    area_len: int,
    area_wid: int,
    angle_mean: float,
) -> list[int]:
    """Sorted indices of lines to discard.

    Of every crossing pair, the line whose angle lies further from
    ``angle_mean`` is dropped; on a tie the second line is dropped.
    """
    discard: set[int] = set()
    for cross in get_crosses(lines, im_len, im_wid, area_len, area_wid):
        i, j = cross.lines
        distance_i = abs(lines[i].theta - angle_mean)
        distance_j = abs(lines[j].theta - angle_mean)
        discard.add(i if distance_i > distance_j else j)
    return sorted(discard)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crossings of stored lines.")
    commands = parser.add_subparsers(dest="command")

    for name, text in (
        ("cross", "list the crossing pairs of lines"),
        ("denoise", "list the lines to discard"),
    ):
        command = commands.add_parser(name, help=text)
        command.add_argument("lines_file", nargs="?", default="lines.txt")
        command.add_argument("--length", type=int, default=360)
        command.add_argument("--width", type=int, default=338)
        command.add_argument("--area-length", dest="area_len", type=int, default=2)
        command.add_argument("--area-width", dest="area_wid", type=int, default=2)
        if name == "denoise":
            command.add_argument("--angle-mean", dest="angle_mean", type=float, default=1.3182)
    return parser


def main(argv=None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["denoise"])

    try:
        lines = read_lines(args.lines_file)
    except OSError as error:
        print(f"Could not open the file {args.lines_file}: {error}", file=sys.stderr)
        return 1

    if args.command == "cross":
        crosses = get_crosses(lines, args.length, args.width, args.area_len, args.area_wid)
        for number, cross in enumerate(crosses):
            print(f"No {number} : ({cross.lines[0]}, {cross.lines[1]})")
        return 0

    discard = lines_denoise(
        lines, args.length, args.width, args.area_len, args.area_wid, args.angle_mean
    )
    for number, index in enumerate(discard):
        print(f"No. {number} : {index}")
    return 0


if __name__ == "__main__":
    sys.exit(main())