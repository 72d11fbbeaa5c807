"""Reading and writing whitespace-separated lists of numbers."""

from __future__ import annotations

import os
import re
from typing import Iterable

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def read_numbers(path: str | os.PathLike) -> list[float]:
    """Read numbers separated by whitespace, stopping at the first token that is not one.

    Raises FileNotFoundError when the file cannot be found.
    """
    numbers: list[float] = []
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            for token in line.split():
                if not _NUMBER.fullmatch(token):
                    return numbers
                numbers.append(float(token))
    return numbers


def write_numbers(path: str | os.PathLike, values: Iterable[float]) -> None:
    """Write one number per line with six significant digits."""
    with open(path, "w", encoding="utf-8") as handle:
        for value in values:
            handle.write(f"{float(value):.6g}\n")