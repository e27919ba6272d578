import logging
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

DATA_DIR = Path(__file__).parent.parent / "data"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI attaches handlers to captured streams; drop them after each test."""
    yield
    logging.getLogger("lifegame").handlers.clear()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR
