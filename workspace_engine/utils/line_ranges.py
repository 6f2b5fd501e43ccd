"""
Parsing of human-entered line range expressions such as "1-800, 1001-1500".
"""

from typing import Iterable, NamedTuple

from workspace_engine.exceptions import RangeFormatError


class LineRange(NamedTuple):
    """Inclusive, 1-based line range."""

    start: int
    end: int


def parse_line_ranges(expr: str) -> list[LineRange]:
    """
    Parse a comma separated list of "start-end" ranges.

    Ranges are returned in request order, without merging or sorting. The start
    is clamped to at least 1 and the end to at least the start; ends past the
    end of a file are left to slicing.

    Raises:
        RangeFormatError: If a range does not have two integer bounds
    """
    ranges: list[LineRange] = []
    for token in expr.split(","):
        token = token.strip()
        if not token:
            continue
        bounds = [b.strip() for b in token.split("-")]
        if len(bounds) != 2:
            raise RangeFormatError(f"Invalid lines range format: {token!r}")
        try:
            start = int(bounds[0])
            end = int(bounds[1])
        except ValueError:
            raise RangeFormatError(f"Invalid lines range format: {token!r}")
        start = max(1, start)
        end = max(start, end)
        ranges.append(LineRange(start, end))
    return ranges


def format_line_ranges(ranges: Iterable[LineRange]) -> str:
    return ", ".join(f"{r.start}-{r.end}" for r in ranges)
