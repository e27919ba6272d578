"""
Conway's Game of Life - grid engine

Rules:
1. Any live cell with fewer than two live neighbors dies (underpopulation)
2. Any live cell with two or three live neighbors lives on (stasis)
3. Any live cell with more than three live neighbors dies (overpopulation)
4. Any dead cell with exactly three live neighbors becomes alive (reproduction)

The board is toroidal: the grid wraps from top to bottom and from left to right.
"""

import logging
import operator
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from lifegame.errors import InvalidDimensions, OutOfRange

logger = logging.getLogger(__name__)

DEAD = 0
ALIVE = 1


def next_state(current: int, neighbors: int) -> int:
    """Return the state of a cell in the next generation."""
    if current not in (DEAD, ALIVE):
        raise ValueError(f"cell state must be 0 or 1, got {current!r}")
    if not 0 <= neighbors <= 8:
        raise ValueError(f"neighbor count must be in [0, 8], got {neighbors!r}")

    if current == ALIVE:
        return ALIVE if neighbors in (2, 3) else DEAD
    return ALIVE if neighbors == 3 else DEAD


def apply_rules(board: np.ndarray, neighbors: np.ndarray) -> np.ndarray:
    """Vectorized version of next_state over a whole board (or band)."""
    # Birth: dead cell with exactly 3 neighbors
    birth = (board == DEAD) & (neighbors == 3)
    # Survival: live cell with 2 or 3 neighbors
    survive = (board == ALIVE) & ((neighbors == 2) | (neighbors == 3))
    return (birth | survive).astype(np.uint8)


def neighbor_counts(board: np.ndarray) -> np.ndarray:
    """Count live neighbors of every cell using wrap-around shifts."""
    neighbors = np.zeros_like(board)
    for dy in range(-1, 2):
        for dx in range(-1, 2):
            if dx == 0 and dy == 0:
                continue
            neighbors += np.roll(np.roll(board, dy, axis=0), dx, axis=1)
    return neighbors


def band_neighbor_counts(board: np.ndarray, start: int, stop: int) -> np.ndarray:
    """
    Count live neighbors for rows [start, stop) of the board.

    Only reads the board, so disjoint bands can be computed concurrently.
    """
    rows, cols = board.shape
    i = np.arange(start, stop)
    j = np.arange(cols)
    row_sets = ((i + rows - 1) % rows, i, (i + 1) % rows)
    col_sets = ((j + cols - 1) % cols, j, (j + 1) % cols)

    neighbors = np.zeros((stop - start, cols), dtype=board.dtype)
    for ri, r in enumerate(row_sets):
        for ci, c in enumerate(col_sets):
            if ri == 1 and ci == 1:
                continue
            neighbors += board[np.ix_(r, c)]
    return neighbors


def partition_rows(rows: int, workers: int) -> list[tuple[int, int]]:
    """Split [0, rows) into at most `workers` contiguous, non-empty bands."""
    count = min(workers, rows)
    bounds = np.linspace(0, rows, count + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:])]


def _check_index(value, name: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    return operator.index(value)


class Grid:
    """
    Board of binary cells stored row-major in a single uint8 buffer.

    Cell (i, j) lives at index i * cols + j. The grid owns its buffer:
    `cells` is a read-only view and duplication only happens via copy().
    """

    __hash__ = None

    def __init__(self, rows: int, cols: int, living=()):
        """
        Args:
            rows: Number of rows, > 0
            cols: Number of columns, > 0
            living: Iterable of (row, col) pairs of initially alive cells

        Raises:
            InvalidDimensions: rows or cols is not a positive integer, or the
                buffer cannot be allocated
            OutOfRange: a coordinate lies outside the grid
        """
        try:
            rows = _check_index(rows, "rows")
            cols = _check_index(cols, "cols")
        except TypeError:
            raise InvalidDimensions(rows, cols) from None
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(rows, cols)

        self._rows = rows
        self._cols = cols
        try:
            self._cells = np.zeros(rows * cols, dtype=np.uint8)
        except (MemoryError, ValueError):
            raise InvalidDimensions(rows, cols, "grid is too large to allocate") from None
        self.generation = 0

        for row, col in living:
            self._cells[self._offset(row, col)] = ALIVE

        logger.debug("Created %dx%d grid with %d live cells", rows, cols, self.population)

    @classmethod
    def from_array(cls, array) -> "Grid":
        """Build a grid from a 2-D array of 0/1 values."""
        board = np.asarray(array)
        if board.ndim != 2 or 0 in board.shape:
            raise InvalidDimensions(*(board.shape + (0, 0))[:2])
        if not np.isin(board, (DEAD, ALIVE)).all():
            raise ValueError("cell values must be 0 or 1")

        grid = cls(*board.shape)
        grid._cells = board.astype(np.uint8).ravel().copy()
        return grid

    def _offset(self, i, j) -> int:
        i = _check_index(i, "row")
        j = _check_index(j, "col")
        if not (0 <= i < self._rows and 0 <= j < self._cols):
            raise OutOfRange(i, j, self._rows, self._cols)
        return i * self._cols + j

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    @property
    def cells(self) -> np.ndarray:
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        return int(self._cells.sum())

    def get(self, i: int, j: int) -> int:
        """Return 1 if cell (i, j) is alive, 0 otherwise."""
        return int(self._cells[self._offset(i, j)])

    def __getitem__(self, key) -> int:
        i, j = key
        return self.get(i, j)

    def count_neighbors(self, i: int, j: int) -> int:
        """Count live neighbors of (i, j) with toroidal wrapping."""
        self._offset(i, j)
        rows, cols = self._rows, self._cols
        left, right = (j + cols - 1) % cols, (j + 1) % cols
        down, up = (i + rows - 1) % rows, (i + 1) % rows

        count = 0
        for ri, r in enumerate((down, i, up)):
            for ci, c in enumerate((left, j, right)):
                if ri == 1 and ci == 1:
                    continue  # skip the cell itself
                count += int(self._cells[r * cols + c])
        return count

    def neighbor_counts(self) -> np.ndarray:
        """Neighbor count of every cell as a (rows, cols) array."""
        return neighbor_counts(self._board())

    def living_cells(self) -> list[tuple[int, int]]:
        """Coordinates of the living cells in row-major order."""
        return [divmod(int(k), self._cols) for k in np.flatnonzero(self._cells)]

    def to_array(self) -> np.ndarray:
        return self._board().copy()

    def _board(self) -> np.ndarray:
        return self._cells.reshape(self._rows, self._cols)

    def update(self, workers: int = 1) -> None:
        """
        Advance the board by one generation.

        The next generation is computed from the current one only, into a
        scratch buffer which then replaces the current buffer.

        Args:
            workers: Number of threads; rows are split into contiguous bands
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers!r}")

        board = self._board()
        scratch = np.empty_like(self._cells)
        out = scratch.reshape(self._rows, self._cols)

        bands = partition_rows(self._rows, workers)
        if len(bands) == 1:
            out[...] = apply_rules(board, neighbor_counts(board))
        else:
            with ThreadPoolExecutor(max_workers=len(bands)) as pool:
                futures = [pool.submit(self._update_band, board, out, start, stop)
                           for start, stop in bands]
                for future in futures:
                    future.result()

        assert scratch.size == self._rows * self._cols
        assert scratch.max(initial=0) <= ALIVE

        self._cells = scratch
        self.generation += 1

    @staticmethod
    def _update_band(board: np.ndarray, out: np.ndarray, start: int, stop: int) -> None:
        out[start:stop] = apply_rules(board[start:stop], band_neighbor_counts(board, start, stop))

    def step(self, generations: int = 1, workers: int = 1) -> None:
        """Apply update() `generations` times."""
        for _ in range(generations):
            self.update(workers=workers)

    def copy(self) -> "Grid":
        other = Grid.__new__(Grid)
        other._rows = self._rows
        other._cols = self._cols
        other._cells = self._cells.copy()
        other.generation = self.generation
        return other

    def __copy__(self) -> "Grid":
        return self.copy()

    def __deepcopy__(self, memo) -> "Grid":
        return self.copy()

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __repr__(self):
        return (f"Grid(rows={self._rows}, cols={self._cols}, "
                f"population={self.population}, generation={self.generation})")

    def __str__(self):
        board = self._board()
        return "\n".join("".join("#" if v else "." for v in row) for row in board)
