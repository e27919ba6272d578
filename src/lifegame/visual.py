"""
Conway's Game of Life - pygame window

Controls:
    SPACE       - Pause/Resume simulation
    N           - Advance one generation while paused
    UP/DOWN     - Increase/Decrease speed
    +/-         - Grow/Shrink the window
    Q / ESC     - Quit
"""
import logging

import pygame

from lifegame import config
from lifegame.grid import Grid

logger = logging.getLogger(__name__)


def cell_size(rows: int, cols: int, width: int, height: int) -> tuple[float, float]:
    """Width and height in pixels of one cell when the grid fills the area."""
    return width / cols, height / rows


def cell_rects(grid: Grid, width: int, height: int) -> list[tuple[int, int, int, int]]:
    """(x, y, w, h) of every living cell, row 0 at the top of the area."""
    wcell, hcell = cell_size(grid.rows, grid.cols, width, height)
    rects = []
    for i in range(grid.rows):
        top, bottom = round(i * hcell), round((i + 1) * hcell)
        for j in range(grid.cols):
            if grid.get(i, j):
                left, right = round(j * wcell), round((j + 1) * wcell)
                rects.append((left, top, right - left, bottom - top))
    return rects


def grid_lines(rows: int, cols: int, width: int, height: int) -> list[tuple[tuple[int, int], tuple[int, int]]]:
    """Segments separating columns and rows."""
    wcell, hcell = cell_size(rows, cols, width, height)
    lines = [((round(j * wcell), 0), (round(j * wcell), height - 1)) for j in range(cols)]
    lines += [((0, round(i * hcell)), (width - 1, round(i * hcell))) for i in range(rows)]
    return lines


class Renderer:
    """Draws a grid onto a surface; reads the grid, never modifies it."""

    def __init__(self, cell_color=config.CELL_COLOR, grid_color=config.GRID_COLOR,
                 background=config.BLACK):
        self.cell_color = cell_color
        self.grid_color = grid_color
        self.background = background

    def draw(self, surface: pygame.Surface, grid: Grid) -> None:
        width, height = surface.get_size()
        surface.fill(self.background)

        wcell, hcell = cell_size(grid.rows, grid.cols, width, height)
        if min(wcell, hcell) >= config.MIN_CELL_SIZE_FOR_GRID:  # avoid clutter on dense grids
            for start, end in grid_lines(grid.rows, grid.cols, width, height):
                pygame.draw.line(surface, self.grid_color, start, end)

        for rect in cell_rects(grid, width, height):
            pygame.draw.rect(surface, self.cell_color, rect)


class Viewer:
    """
    Host loop: alternates drawing the current generation and advancing it.

    Holds a non-owning reference to the grid; updates and draws happen on
    the same thread, one after the other.
    """

    def __init__(self, grid: Grid, width: int = config.WINDOW_WIDTH,
                 height: int = config.WINDOW_HEIGHT, speed: int = config.DEFAULT_SPEED,
                 workers: int = 1):
        pygame.init()

        self.grid = grid
        self.workers = workers
        self.renderer = Renderer()
        self.width = width
        self.height = height
        self._open_window()

        self.running = True              # the simulation starts immediately
        self.step_requested = False
        self.speed = speed               # generations per second

        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)

    def _open_window(self):
        self.screen = pygame.display.set_mode((self.width, self.height + config.STATUS_BAR_HEIGHT))
        pygame.display.set_caption(config.WINDOW_TITLE)
        self.board_surface = pygame.Surface((self.width, self.height))

    def _resize(self, delta: int):
        def clamp(size):
            return min(max(size + delta, config.MIN_WINDOW_SIZE), config.MAX_WINDOW_SIZE)

        width, height = clamp(self.width), clamp(self.height)
        if (width, height) != (self.width, self.height):
            self.width, self.height = width, height
            self._open_window()
            logger.debug("Window resized to %dx%d", self.width, self.height)

    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False

            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    return False

                elif event.key == pygame.K_SPACE:
                    self.running = not self.running

                elif event.key == pygame.K_n:
                    self.step_requested = True

                elif event.key == pygame.K_UP:
                    self.speed = min(self.speed + config.SPEED_STEP, config.MAX_SPEED)

                elif event.key == pygame.K_DOWN:
                    self.speed = max(self.speed - config.SPEED_STEP, config.MIN_SPEED)

                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self._resize(config.ZOOM_STEP)

                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    self._resize(-config.ZOOM_STEP)

        return True

    def draw(self):
        self.renderer.draw(self.board_surface, self.grid)
        self.screen.fill(config.BLACK)
        self.screen.blit(self.board_surface, (0, 0))
        self.draw_ui()
        pygame.display.flip()

    def draw_ui(self):
        bar_top = self.height
        pygame.draw.rect(self.screen, (30, 30, 30), (0, bar_top, self.width, config.STATUS_BAR_HEIGHT))

        status = "RUNNING" if self.running else "PAUSED"
        color = config.CELL_COLOR if self.running else config.YELLOW
        text = self.font.render(
            f"[{status}]  Gen: {self.grid.generation}  Cells: {self.grid.population}  Speed: {self.speed} gen/s",
            True,
            color
        )
        self.screen.blit(text, (10, bar_top + 7))

    def run(self):
        logger.info("Opening %dx%d window for a %dx%d grid",
                    self.width, self.height, self.grid.rows, self.grid.cols)
        try:
            self.draw()
            while self.handle_events():
                if self.running or self.step_requested:
                    self.grid.update(workers=self.workers)
                    self.step_requested = False

                self.draw()
                self.clock.tick(self.speed if self.running else 60)
        finally:
            pygame.quit()

        logger.info("Stopped at generation %d", self.grid.generation)
