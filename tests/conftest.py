import logging
from pathlib import Path

import numpy as np
import pytest
from fastapi.testclient import TestClient
from loguru import logger

from container_models import Grid, MatrixContainer, UNIT_RANGE
from main import app


class PropagateHandler(logging.Handler):
    """Handler that propagates loguru records to standard logging."""

    def emit(self, record: logging.LogRecord) -> None:
        logging.getLogger(record.name).handle(record)


@pytest.fixture
def caplog(caplog):
    """Fixture to enable caplog to capture loguru logs."""
    handler_id = logger.add(PropagateHandler(), format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="session")
def ramp_grid() -> Grid:
    """3x3 grid holding the values 0 up to 8 in row-major order."""
    return [[0.0, 1.0, 2.0], [3.0, 4.0, 5.0], [6.0, 7.0, 8.0]]


@pytest.fixture(scope="session")
def bimodal_grid() -> Grid:
    """8x8 grid with a low-valued left half and a high-valued right half, plus mild noise."""
    rng = np.random.default_rng(42)
    data = np.where(np.arange(8) < 4, 10.0, 90.0)[np.newaxis, :].repeat(8, axis=0)
    return (data + rng.uniform(-1.0, 1.0, size=data.shape)).tolist()


@pytest.fixture
def ramp_matrix(ramp_grid: Grid) -> MatrixContainer:
    return MatrixContainer(data=np.asarray(ramp_grid, dtype=np.float32))


@pytest.fixture
def unit_matrix() -> MatrixContainer:
    """Float matrix already in [0, 1]."""
    return MatrixContainer(
        data=np.linspace(0.0, 1.0, 12, dtype=np.float32).reshape(3, 4),
        value_range=UNIT_RANGE,
    )


@pytest.fixture
def byte_matrix() -> MatrixContainer:
    return MatrixContainer(
        data=np.array([[0, 10, 20], [200, 220, 255]], dtype=np.uint8)
    )


@pytest.fixture
def write_grid_file(tmp_path: Path):
    """Write `content` to a grid file in a temporary directory and return its path."""

    def _write(content: str, name: str = "grid.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
