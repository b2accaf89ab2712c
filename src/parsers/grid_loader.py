import csv
from pathlib import Path

from loguru import logger
from returns.io import impure_safe

from container_models import Grid
from exceptions import LoadError
from utils.logger import log_railway_function

DELIMITER = ";"
FALLBACK_VALUE = 0.0


def _parse_field(field: str, row_index: int, column_index: int) -> float:
    try:
        return float(field)
    except ValueError:
        logger.debug(
            f"Unparsable field {field!r} at row {row_index}, column {column_index}, "
            f"using {FALLBACK_VALUE}"
        )
        return FALLBACK_VALUE


def _parse_rows(rows: list[list[str]]) -> Grid:
    return [
        [
            _parse_field(field, row_index, column_index)
            for column_index, field in enumerate(row)
        ]
        for row_index, row in enumerate(rows)
        if row
    ]


@log_railway_function(
    "Failed to load grid file",
    "Successfully loaded grid file",
)
@impure_safe
def load_grid(grid_file: Path | str) -> Grid:
    """
    Load a grid from a semicolon-delimited text file without a header row.

    Each line becomes one row of the grid. Fields that do not parse as a number are
    replaced by ``0.0``, blank lines are skipped and a leading UTF-8 byte order mark is
    ignored. The row lengths are kept as they are in the file, rectangularity is
    checked when the grid is analyzed.

    :param grid_file: Path to the delimited text file.
    :returns: The parsed rows, wrapped in an `IOResult`.
    :raises LoadError: If the file cannot be opened, decoded or split into fields.
    """
    path = Path(grid_file)
    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            rows = list(csv.reader(handle, delimiter=DELIMITER))
    except (OSError, UnicodeDecodeError, csv.Error) as err:
        raise LoadError(f"Cannot read grid file '{path}': {err}") from err

    grid = _parse_rows(rows)
    logger.debug(f"Read {len(grid)} row(s) from {path}")
    return grid
