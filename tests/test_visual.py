import pytest

from lifegame import visual
from lifegame.grid import Grid
from lifegame.visual import cell_rects, cell_size, grid_lines


def test_cell_size_fills_area():
    assert cell_size(4, 8, 800, 400) == (100.0, 100.0)
    assert cell_size(3, 3, 100, 100) == (100 / 3, 100 / 3)


def test_cell_rects_for_living_cells():
    grid = Grid(2, 2, [(0, 1), (1, 0)])

    assert cell_rects(grid, 100, 100) == [(50, 0, 50, 50), (0, 50, 50, 50)]


def test_cell_rects_tile_the_area():
    grid = Grid.from_array([[1] * 3] * 3)

    rects = cell_rects(grid, 100, 100)

    assert len(rects) == 9
    assert sum(w * h for _, _, w, h in rects) == 100 * 100


def test_cell_rects_empty_grid():
    assert cell_rects(Grid(5, 5), 100, 100) == []


def test_grid_lines():
    lines = grid_lines(2, 4, 200, 100)

    assert len(lines) == 6
    assert lines[0] == ((0, 0), (0, 99))
    assert lines[1] == ((50, 0), (50, 99))
    assert lines[4] == ((0, 0), (199, 0))
    assert lines[5] == ((0, 50), (199, 50))


def test_viewer_shuts_display_down_on_error(monkeypatch):
    quit_calls = []
    monkeypatch.setattr(visual.pygame, "quit", lambda: quit_calls.append(True))

    viewer = visual.Viewer.__new__(visual.Viewer)
    viewer.width = viewer.height = 100
    viewer.grid = Grid(3, 3)

    def broken_draw():
        raise RuntimeError("draw failed")

    viewer.draw = broken_draw

    with pytest.raises(RuntimeError):
        viewer.run()
    assert quit_calls == [True]
