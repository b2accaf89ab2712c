"""Matrix container architecture.

This module defines the data container passed between the stages of the
analysis pipeline.

Architecture
------------
::

    +--------------------------------------+
    |           MatrixContainer            |
    |--------------------------------------|
    | data        : MatrixData (read-only) |
    | value_range : ValueRange | None      |
    | height      : int (rows)             |
    | width       : int (columns)          |
    +--------------------------------------+
    | is_uint8 -> bool                     |
    | is_binary -> bool                    |
    +--------------------------------------+

- :data:`Grid` is the raw, row-major input as produced by the loader.
- :class:`MatrixContainer` holds one stage's output as a 2D NumPy array. The
  array is flagged read-only on construction, every stage produces a new
  container instead of editing the one it received.
- ``value_range`` records the interval the elements are known to live in.
  Raw grid data has no range; normalized data does.
- Compared by data equality: same dtype, shape and elements.
"""

from __future__ import annotations
from typing import Self

import numpy as np
from pydantic import BaseModel, ConfigDict, model_validator

from container_models.base import MatrixData

type Grid = list[list[float]]

UINT8_MAX = float(np.iinfo(np.uint8).max)


class ValueRange(BaseModel):
    lower: float
    upper: float

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def lower_below_upper(self) -> Self:
        if self.lower >= self.upper:
            raise ValueError(
                f"The lower bound ({self.lower}) should be smaller than the upper bound ({self.upper})."
            )
        return self

    @property
    def span(self) -> float:
        return self.upper - self.lower


UNIT_RANGE = ValueRange(lower=0.0, upper=1.0)
BYTE_RANGE = ValueRange(lower=0.0, upper=UINT8_MAX)


class MatrixContainer(BaseModel):
    data: MatrixData
    value_range: ValueRange | None = None

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra="forbid",
    )

    @property
    def height(self) -> int:
        """Return the height (number of rows) of the matrix."""
        return self.data.shape[0]

    @property
    def width(self) -> int:
        """Return the width (number of columns) of the matrix."""
        return self.data.shape[1]

    @property
    def is_uint8(self) -> bool:
        return self.data.dtype == np.uint8

    @property
    def is_binary(self) -> bool:
        """True when every element is either 0 or 255."""
        return self.is_uint8 and bool(np.all((self.data == 0) | (self.data == 255)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixContainer):
            return NotImplemented
        return self.data.dtype == other.data.dtype and np.array_equal(
            self.data, other.data
        )

    def __hash__(self) -> int:
        return hash((self.data.dtype.str, self.data.shape, self.data.tobytes()))
