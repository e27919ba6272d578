"""Exceptions raised by the grid engine and the pattern loader."""


class GridError(Exception):
    """Base class for every error raised by lifegame."""


class InvalidDimensions(GridError, ValueError):
    """Grid rows or columns are not positive integers, or too large to allocate."""

    def __init__(self, rows, cols, reason: str | None = None):
        self.rows = rows
        self.cols = cols
        if reason is None:
            reason = "grid dimensions must be positive integers"
        super().__init__(f"{reason}, got {rows!r} x {cols!r}")


class OutOfRange(GridError, IndexError):
    """A cell coordinate lies outside the grid extent."""

    def __init__(self, row, col, rows: int, cols: int):
        self.row = row
        self.col = col
        self.rows = rows
        self.cols = cols
        super().__init__(f"cell ({row!r}, {col!r}) is outside a {rows} x {cols} grid")


class MalformedInput(GridError, ValueError):
    """The initial-state text could not be parsed."""

    def __init__(self, message: str, source: str = "<string>", line: int | None = None):
        self.source = source
        self.line = line
        where = source if line is None else f"{source}:{line}"
        super().__init__(f"{where}: {message}")
