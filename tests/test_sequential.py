import pandas as pd
import pytest

from lifegame.grid import Grid
from lifegame.patterns import blinker, glider
from lifegame.sequential import BENCHMARK_COLUMNS, benchmark, print_summary, run_simulation


def test_run_simulation_advances_grid():
    grid = Grid(20, 20, glider(1, 1))

    result = run_simulation(grid, 8)

    assert grid.generation == 8
    assert sorted(grid.living_cells()) == sorted(glider(3, 3))
    assert result["rows"] == result["cols"] == 20
    assert result["generations"] == 8
    assert result["initial_live_cells"] == result["final_live_cells"] == 5
    assert result["total_time_ms"] >= 0
    assert result["time_per_gen_ms"] == pytest.approx(result["total_time_ms"] / 8)


def test_run_simulation_with_workers():
    grid = Grid(9, 9, blinker(4, 3))

    result = run_simulation(grid, 3, workers=3)

    assert result["workers"] == 3
    assert grid.living_cells() == blinker(3, 4, vertical=True)


def test_zero_generations():
    grid = Grid(5, 5, blinker(2, 1))

    result = run_simulation(grid, 0)

    assert grid.generation == 0
    assert result["time_per_gen_ms"] == 0.0
    assert result["throughput_mcells_s"] == 0.0


def test_negative_generations():
    with pytest.raises(ValueError):
        run_simulation(Grid(3, 3), -1)


def test_visualize_prints_generations(capsys):
    grid = Grid(5, 5, blinker(2, 1))

    run_simulation(grid, 2, visualize=True, delay=0)

    out = capsys.readouterr().out
    assert "Generation: 1, Live cells: 3" in out
    assert "Generation: 2, Live cells: 3" in out
    assert ".###." in out


def test_benchmark_table(tmp_path, capsys):
    output = tmp_path / "bench" / "results.csv"

    df = benchmark(sizes=[8, 16], workers=[1, 2], generations=3, seed=1, output=output)

    assert list(df.columns) == BENCHMARK_COLUMNS
    assert len(df) == 4
    assert df["grid_size"].tolist() == [8, 8, 16, 16]
    assert df["workers"].tolist() == [1, 2, 1, 2]
    # same soup per size, so worker count cannot change the outcome
    assert (df.groupby("grid_size")["final_live_cells"].nunique() == 1).all()

    saved = pd.read_csv(output)
    assert list(saved.columns) == BENCHMARK_COLUMNS
    assert len(saved) == 4

    print_summary(df)
    assert "SUMMARY" in capsys.readouterr().out


def test_benchmark_without_output():
    df = benchmark(sizes=[4], workers=[1], generations=1)

    assert len(df) == 1
