"""Conway's Game of Life on a toroidal grid."""

from lifegame.errors import GridError, InvalidDimensions, MalformedInput, OutOfRange
from lifegame.grid import ALIVE, DEAD, Grid, next_state
from lifegame.loader import dump, dumps, load, parse

__version__ = "1.0.0"

__all__ = [
    "ALIVE",
    "DEAD",
    "Grid",
    "GridError",
    "InvalidDimensions",
    "MalformedInput",
    "OutOfRange",
    "dump",
    "dumps",
    "load",
    "next_state",
    "parse",
]
