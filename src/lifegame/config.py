"""Default settings. Command-line flags override these per run."""

from pathlib import Path

DEFAULT_PATTERN_FILE = Path("data") / "glider.dat"

# Window
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 800
WINDOW_TITLE = "Life game"
MIN_WINDOW_SIZE = 200
MAX_WINDOW_SIZE = 2000
ZOOM_STEP = 100

# Colors
BLACK = (0, 0, 0)              # background
CELL_COLOR = (191, 255, 191)   # alive cells
GRID_COLOR = (64, 64, 64)      # grid lines
YELLOW = (255, 255, 0)         # paused UI
WHITE = (255, 255, 255)        # text

# Simulation speed, in generations per second
DEFAULT_SPEED = 10
MIN_SPEED = 1
MAX_SPEED = 60
SPEED_STEP = 5

# Hide grid lines when cells are smaller than this (pixels)
MIN_CELL_SIZE_FOR_GRID = 4

STATUS_BAR_HEIGHT = 30

# Headless runs and benchmarks
GENERATIONS = 100
SEED = 42
DENSITY = 0.3
BENCHMARK_SIZES = [32, 64, 128, 256, 512, 1024]
BENCHMARK_WORKERS = [1, 2, 4, 8]
BENCHMARK_CSV = Path("benchmarks") / "benchmark_sequential.csv"
DASHBOARD_PNG = Path("benchmarks") / "worker_scaling.png"
