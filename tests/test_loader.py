import logging

import pytest

from lifegame.errors import InvalidDimensions, MalformedInput, OutOfRange
from lifegame.grid import Grid
from lifegame.loader import dump, dumps, load, parse
from lifegame.patterns import glider


def test_parse_glider():
    grid = parse("20 20\n5\n1 2\n2 3\n3 1\n3 2\n3 3\n")

    assert grid.shape == (20, 20)
    assert grid.living_cells() == glider(1, 1)
    assert grid.generation == 0


def test_whitespace_is_insignificant():
    text = "  4\t6\n\n  2   0 0\n\n\n 3   5   \n\n"

    grid = parse(text)

    assert grid.shape == (4, 6)
    assert grid.living_cells() == [(0, 0), (3, 5)]


def test_no_living_cells():
    grid = parse("3 3\n0\n")

    assert grid.population == 0


def test_repeated_cells():
    grid = parse("3 3\n3\n1 1\n1 1\n0 2\n")

    assert grid.living_cells() == [(0, 2), (1, 1)]


@pytest.mark.parametrize("text", [
    "",
    "   \n",
    "3",
    "3 3",
    "3 3\n2\n0 0\n",
    "3 3\n2\n0 0\n1",
])
def test_premature_end_of_input(text):
    with pytest.raises(MalformedInput, match="unexpected end of input"):
        parse(text)


@pytest.mark.parametrize("text", [
    "abc 3\n0\n",
    "3 3\nx\n",
    "3 3\n1\n1.5 2\n",
    "-1 3\n0\n",
    "3 3\n1\n0 -1\n",
    "3 3\n1\n0 +1\n",
    "3e1 3\n0\n",
])
def test_malformed_tokens(text):
    with pytest.raises(MalformedInput, match="non-negative integer"):
        parse(text)


def test_malformed_input_reports_line():
    with pytest.raises(MalformedInput) as excinfo:
        parse("3 3\n2\n0 0\n1 x\n", source="bad.dat")

    assert excinfo.value.line == 4
    assert excinfo.value.source == "bad.dat"
    assert str(excinfo.value).startswith("bad.dat:4:")


def test_malformed_input_is_a_value_error():
    with pytest.raises(ValueError):
        parse("nope")


def test_zero_dimensions():
    with pytest.raises(InvalidDimensions):
        parse("0 5\n0\n")


@pytest.mark.parametrize("text", ["3 4\n1\n3 0\n", "3 4\n1\n0 4\n"])
def test_cell_outside_grid(text):
    with pytest.raises(OutOfRange):
        parse(text)


def test_trailing_tokens_are_ignored(caplog):
    with caplog.at_level(logging.WARNING, logger="lifegame.loader"):
        grid = parse("3 3\n1\n1 1\n2 2\n")

    assert grid.living_cells() == [(1, 1)]
    assert "ignoring 2 trailing token(s)" in caplog.text


def test_load_file(tmp_path):
    path = tmp_path / "blinker.dat"
    path.write_text("5 5\n3\n2 1\n2 2\n2 3\n")

    grid = load(path)

    assert grid.living_cells() == [(2, 1), (2, 2), (2, 3)]


def test_load_reports_file_name(tmp_path):
    path = tmp_path / "broken.dat"
    path.write_text("5 5\n3\n2 1\n")

    with pytest.raises(MalformedInput) as excinfo:
        load(path)

    assert excinfo.value.source == str(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.dat")


def test_bundled_patterns_load(data_dir):
    glider_grid = load(data_dir / "glider.dat")
    gun = load(data_dir / "gun.dat")
    blinker_grid = load(data_dir / "blinker.dat")

    assert glider_grid.living_cells() == glider(1, 1)
    assert gun.shape == (40, 60)
    assert gun.population == 36
    assert blinker_grid.population == 3


def test_dumps_format():
    grid = Grid(4, 5, [(3, 1), (0, 2)])

    assert dumps(grid) == "4 5\n2\n0 2\n3 1\n"


def test_dumps_after_updates_parses_back():
    grid = Grid(12, 12, glider(3, 3))
    grid.step(6)

    assert parse(dumps(grid)) == grid


def test_dump_writes_file(tmp_path):
    grid = Grid(3, 3, [(1, 1)])
    path = tmp_path / "one.dat"

    dump(grid, path)

    assert load(path) == grid


def test_load_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "binary.dat"
    path.write_bytes(b"3 3\n1\n\xff\xfe 1\n")

    with pytest.raises(MalformedInput, match="not valid UTF-8") as excinfo:
        load(path)

    assert excinfo.value.source == str(path)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
