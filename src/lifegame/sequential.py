"""
Headless simulation runs and benchmarks.
"""

import logging
import time
from pathlib import Path

import pandas as pd

from lifegame import config
from lifegame.grid import Grid
from lifegame.patterns import random_cells

logger = logging.getLogger(__name__)

BENCHMARK_COLUMNS = [
    "grid_size", "workers", "generations", "total_time_ms",
    "time_per_gen_ms", "throughput_mcells_s", "initial_live_cells", "final_live_cells",
]


def print_grid(grid: Grid) -> None:
    """Print the grid to console."""
    print("\033[H", end="")  # Move cursor to home position
    print(grid)
    print()


def run_simulation(grid: Grid, generations: int, workers: int = 1,
                   visualize: bool = False, delay: float = 0.1) -> dict:
    """
    Advance a grid by a number of generations without a window.

    Args:
        grid: Grid to advance in place
        generations: Number of generations to simulate
        workers: Threads used by each update
        visualize: Print each generation to the terminal
        delay: Pause between printed generations, in seconds

    Returns:
        Dictionary with timing and statistics
    """
    if generations < 0:
        raise ValueError(f"generations must be >= 0, got {generations!r}")

    rows, cols = grid.shape
    initial_live = grid.population
    logger.info("Running %d generations on a %dx%d grid (%d worker(s), %d live cells)",
                generations, rows, cols, workers, initial_live)

    if visualize:
        print("\033[2J", end="")  # Clear screen
        print_grid(grid)

    elapsed_ms = 0.0
    for gen in range(generations):
        start = time.perf_counter()
        grid.update(workers=workers)
        elapsed_ms += (time.perf_counter() - start) * 1000

        if visualize:
            print_grid(grid)
            print(f"Generation: {grid.generation}, Live cells: {grid.population}")
            time.sleep(delay)

    final_live = grid.population
    per_gen = elapsed_ms / generations if generations else 0.0
    throughput = rows * cols * generations / elapsed_ms / 1000 if elapsed_ms > 0 else 0.0

    logger.info("Simulation complete: %d live cells, %.2f ms total, %.4f ms per generation",
                final_live, elapsed_ms, per_gen)

    return {
        "rows": rows,
        "cols": cols,
        "workers": workers,
        "generations": generations,
        "initial_live_cells": initial_live,
        "final_live_cells": final_live,
        "total_time_ms": elapsed_ms,
        "time_per_gen_ms": per_gen,
        "throughput_mcells_s": throughput,
    }


def benchmark(sizes=None, workers=None, generations: int = config.GENERATIONS,
              seed: int = config.SEED, density: float = config.DENSITY,
              output=None) -> pd.DataFrame:
    """
    Time square grids of each size with each worker count.

    Every (size, workers) run starts from the same random soup, so final
    populations must agree across worker counts.

    Args:
        sizes: Grid sizes to test
        workers: Worker counts to test
        generations: Number of generations per run
        seed: Random seed for the initial soup
        density: Fraction of initially alive cells
        output: Optional CSV path for the results
    """
    sizes = config.BENCHMARK_SIZES if sizes is None else sizes
    workers = config.BENCHMARK_WORKERS if workers is None else workers

    results = []
    for size in sizes:
        initial = Grid(size, size, random_cells(size, size, density=density, seed=seed))
        for count in workers:
            result = run_simulation(initial.copy(), generations, workers=count)
            results.append({
                "grid_size": size,
                "workers": count,
                "generations": generations,
                "total_time_ms": result["total_time_ms"],
                "time_per_gen_ms": result["time_per_gen_ms"],
                "throughput_mcells_s": result["throughput_mcells_s"],
                "initial_live_cells": result["initial_live_cells"],
                "final_live_cells": result["final_live_cells"],
            })
            print(f"Size {size:>5}x{size:<5} workers {count:>2} done: "
                  f"{result['total_time_ms']:>10.2f} ms")

    df = pd.DataFrame(results, columns=BENCHMARK_COLUMNS)

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False, float_format="%.6f")
        logger.info("Results saved to %s", output)

    return df


def print_summary(df: pd.DataFrame) -> None:
    print("\n" + "=" * 72)
    print("SUMMARY")
    print("=" * 72)
    print(f"{'Size':>10} | {'Workers':>7} | {'Total (ms)':>12} | {'Per Gen (ms)':>14} | {'M cells/s':>12}")
    print("-" * 72)
    for r in df.itertuples(index=False):
        print(f"{r.grid_size:>10} | {r.workers:>7} | {r.total_time_ms:>12.2f} | "
              f"{r.time_per_gen_ms:>14.4f} | {r.throughput_mcells_s:>12.2f}")
    print("=" * 72)
