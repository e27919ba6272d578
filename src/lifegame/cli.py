#!/usr/bin/env python3
"""
lifegame command line.

Usage examples:
  # Open a window on the default pattern (./data/glider.dat)
  lifegame

  # Open a window on another initial-state file
  lifegame view data/gun.dat

  # Run 500 generations without a window, printing each one
  lifegame run data/glider.dat -g 500 --visualize

  # Benchmark grid sizes against worker counts, then plot the results
  lifegame benchmark --sizes 64 256 1024 --workers 1 2 4
  lifegame analyze benchmarks/benchmark_sequential.csv

  # Write an initial-state file
  lifegame pattern gun --rows 40 --cols 60 --row 5 --col 5 > data/gun.dat
"""

import argparse
import logging
import sys

from lifegame import config
from lifegame.errors import GridError
from lifegame.loader import dumps, load
from lifegame.logging_config import setup_logging
from lifegame.patterns import PATTERNS, make_grid

logger = logging.getLogger(__name__)

COMMANDS = ("view", "run", "benchmark", "analyze", "pattern")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    common.add_argument("--log-file", default=None, help="also write logs to this file")

    parser = argparse.ArgumentParser(
        prog="lifegame",
        description="Conway's Game of Life on a toroidal grid.",
        epilog="Without a command, 'view' is assumed.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("view", parents=[common], help="simulate in a window")
    p.add_argument("path", nargs="?", default=str(config.DEFAULT_PATTERN_FILE))
    p.add_argument("--width", type=positive_int, default=config.WINDOW_WIDTH)
    p.add_argument("--height", type=positive_int, default=config.WINDOW_HEIGHT)
    p.add_argument("--speed", type=positive_int, default=config.DEFAULT_SPEED,
                   help="generations per second")
    p.add_argument("-w", "--workers", type=positive_int, default=1)

    p = sub.add_parser("run", parents=[common], help="simulate without a window")
    p.add_argument("path", nargs="?", default=str(config.DEFAULT_PATTERN_FILE))
    p.add_argument("-g", "--generations", type=int, default=config.GENERATIONS)
    p.add_argument("-w", "--workers", type=positive_int, default=1)
    p.add_argument("--visualize", action="store_true", help="print every generation")
    p.add_argument("--delay", type=float, default=0.1)

    p = sub.add_parser("benchmark", parents=[common], help="time grid sizes and worker counts")
    p.add_argument("--sizes", type=positive_int, nargs="+", default=config.BENCHMARK_SIZES)
    p.add_argument("--workers", type=positive_int, nargs="+", default=config.BENCHMARK_WORKERS)
    p.add_argument("-g", "--generations", type=positive_int, default=config.GENERATIONS)
    p.add_argument("--seed", type=int, default=config.SEED)
    p.add_argument("--density", type=float, default=config.DENSITY)
    p.add_argument("-o", "--output", default=str(config.BENCHMARK_CSV))

    p = sub.add_parser("analyze", parents=[common], help="plot benchmark results")
    p.add_argument("csv", nargs="?", default=str(config.BENCHMARK_CSV))
    p.add_argument("-o", "--output", default=str(config.DASHBOARD_PNG))

    p = sub.add_parser("pattern", parents=[common], help="write an initial-state file to stdout")
    p.add_argument("name", choices=sorted(PATTERNS) + ["random"])
    p.add_argument("--rows", type=int, required=True)
    p.add_argument("--cols", type=int, required=True)
    p.add_argument("--row", type=int, default=1, help="top row of the pattern")
    p.add_argument("--col", type=int, default=1, help="left column of the pattern")
    p.add_argument("--density", type=float, default=config.DENSITY)
    p.add_argument("--seed", type=int, default=None)

    return parser


def cmd_view(args) -> int:
    from lifegame.visual import Viewer

    grid = load(args.path)
    Viewer(grid, width=args.width, height=args.height, speed=args.speed,
           workers=args.workers).run()
    return 0


def cmd_run(args) -> int:
    from lifegame.sequential import run_simulation

    grid = load(args.path)
    result = run_simulation(grid, args.generations, workers=args.workers,
                            visualize=args.visualize, delay=args.delay)
    print(f"Grid size: {result['rows']} x {result['cols']}")
    print(f"Generations: {result['generations']}")
    print(f"Initial live cells: {result['initial_live_cells']}")
    print(f"Final live cells: {result['final_live_cells']}")
    print(f"Total time: {result['total_time_ms']:.2f} ms")
    print(f"Time per generation: {result['time_per_gen_ms']:.4f} ms")
    return 0


def cmd_benchmark(args) -> int:
    from lifegame.sequential import benchmark, print_summary

    df = benchmark(sizes=args.sizes, workers=args.workers, generations=args.generations,
                   seed=args.seed, density=args.density, output=args.output)
    print_summary(df)
    return 0


def cmd_analyze(args) -> int:
    from lifegame.analysis import analyze

    analyze(args.csv, args.output)
    return 0


def cmd_pattern(args) -> int:
    grid = make_grid(args.name, args.rows, args.cols, row=args.row, col=args.col,
                     density=args.density, seed=args.seed)
    sys.stdout.write(dumps(grid))
    return 0


HANDLERS = {
    "view": cmd_view,
    "run": cmd_run,
    "benchmark": cmd_benchmark,
    "analyze": cmd_analyze,
    "pattern": cmd_pattern,
}


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help")):
        argv = ["view"] + argv

    args = build_parser().parse_args(argv)
    # pattern output goes to stdout, keep logs out of it
    stream = sys.stderr if args.command == "pattern" else sys.stdout
    setup_logging(getattr(logging, args.log_level), args.log_file, stream=stream)

    try:
        return HANDLERS[args.command](args)
    except (GridError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
