"""
Initial-state file format.

    <rows> <cols>
    <n_living_cells>
    <row_1> <col_1>
    ...
    <row_n> <col_n>

All values are whitespace-separated non-negative integers; line breaks
are not significant.
"""

import logging
import re
from pathlib import Path

from lifegame.grid import Grid
from lifegame.errors import MalformedInput

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"\S+")
_NON_NEGATIVE_INT = re.compile(r"[0-9]+")


class _Tokens:
    """Integer reader over the whitespace-separated tokens of a text."""

    def __init__(self, text: str, source: str):
        self.source = source
        self._tokens = [
            (match.group(), lineno)
            for lineno, line in enumerate(text.splitlines(), start=1)
            for match in _TOKEN.finditer(line)
        ]
        self._pos = 0
        self._last_line = max(1, len(text.splitlines()))

    def next_int(self, what: str) -> int:
        if self._pos >= len(self._tokens):
            raise MalformedInput(f"unexpected end of input while reading {what}",
                                 self.source, self._last_line)
        token, lineno = self._tokens[self._pos]
        self._pos += 1
        if not _NON_NEGATIVE_INT.fullmatch(token):
            raise MalformedInput(f"expected a non-negative integer for {what}, got {token!r}",
                                 self.source, lineno)
        return int(token)

    def remaining(self) -> int:
        return len(self._tokens) - self._pos


def parse(text: str, source: str = "<string>") -> Grid:
    """
    Parse an initial configuration and build the grid.

    The whole text is read before the grid is constructed, so a
    MalformedInput error never leaves a partial grid behind.

    Raises:
        MalformedInput: bad token or premature end of input
        InvalidDimensions: zero rows or columns
        OutOfRange: a living cell outside the grid
    """
    tokens = _Tokens(text, source)
    rows = tokens.next_int("rows")
    cols = tokens.next_int("cols")
    count = tokens.next_int("number of living cells")

    living = []
    for k in range(1, count + 1):
        row = tokens.next_int(f"row of living cell {k}")
        col = tokens.next_int(f"column of living cell {k}")
        living.append((row, col))

    extra = tokens.remaining()
    if extra:
        logger.warning("%s: ignoring %d trailing token(s) after the last cell", source, extra)

    grid = Grid(rows, cols, living)
    logger.info("Loaded %dx%d grid with %d live cells from %s",
                rows, cols, grid.population, source)
    return grid


def load(path) -> Grid:
    """Read and parse an initial-state file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise MalformedInput(f"not valid UTF-8 text ({e.reason})", source=str(path)) from e
    return parse(text, source=str(path))


def dumps(grid: Grid) -> str:
    """Format the living cells of a grid in the initial-state format."""
    living = grid.living_cells()
    lines = [f"{grid.rows} {grid.cols}", str(len(living))]
    lines.extend(f"{row} {col}" for row, col in living)
    return "\n".join(lines) + "\n"


def dump(grid: Grid, path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(grid))
