"""
Named initial configurations.

Each pattern returns the (row, col) coordinates of its living cells with
the pattern's bounding box anchored at (row, col).
"""

import numpy as np

from lifegame.grid import Grid


def block(row: int = 0, col: int = 0) -> list[tuple[int, int]]:
    """2x2 still life."""
    return [(row, col), (row, col + 1), (row + 1, col), (row + 1, col + 1)]


def blinker(row: int = 0, col: int = 0, vertical: bool = False) -> list[tuple[int, int]]:
    """Period-2 oscillator, three cells in a line."""
    if vertical:
        return [(row + k, col) for k in range(3)]
    return [(row, col + k) for k in range(3)]


def glider(row: int = 0, col: int = 0) -> list[tuple[int, int]]:
    """
    Glider moving one cell down and one cell right every 4 generations.

        . # .
        . . #
        # # #
    """
    return [
        (row, col + 1),
        (row + 1, col + 2),
        (row + 2, col), (row + 2, col + 1), (row + 2, col + 2),
    ]


# Gosper glider gun, 9 rows x 36 columns
_GUN = [
    # left block
    (4, 0), (4, 1), (5, 0), (5, 1),
    # left part
    (4, 10), (5, 10), (6, 10), (3, 11), (7, 11), (2, 12), (8, 12), (2, 13), (8, 13),
    (5, 14), (3, 15), (7, 15), (4, 16), (5, 16), (6, 16), (5, 17),
    # right part
    (2, 20), (3, 20), (4, 20), (2, 21), (3, 21), (4, 21), (1, 22), (5, 22),
    (0, 24), (1, 24), (5, 24), (6, 24),
    # right block
    (2, 34), (2, 35), (3, 34), (3, 35),
]


def glider_gun(row: int = 0, col: int = 0) -> list[tuple[int, int]]:
    """Gosper glider gun; needs a 9x36 box."""
    return [(row + dy, col + dx) for dy, dx in _GUN]


def random_cells(rows: int, cols: int, density: float = 0.3,
                 seed: int | None = None) -> list[tuple[int, int]]:
    """Each cell is alive with probability `density`."""
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density!r}")
    if seed is not None:
        np.random.seed(seed)
    alive = np.random.random((rows, cols)) < density
    return [(int(r), int(c)) for r, c in zip(*np.nonzero(alive))]


PATTERNS = {
    "block": block,
    "blinker": blinker,
    "glider": glider,
    "gun": glider_gun,
}


def make_grid(name: str, rows: int, cols: int, row: int = 1, col: int = 1,
              density: float = 0.3, seed: int | None = None) -> Grid:
    """
    Build a grid holding one named pattern, or a random soup for "random".

    Raises:
        KeyError: unknown pattern name
        OutOfRange: the pattern does not fit at (row, col)
    """
    if name == "random":
        return Grid(rows, cols, random_cells(rows, cols, density=density, seed=seed))
    if name not in PATTERNS:
        raise KeyError(f"unknown pattern {name!r}, expected one of "
                       f"{', '.join(sorted(PATTERNS) + ['random'])}")
    return Grid(rows, cols, PATTERNS[name](row, col))
