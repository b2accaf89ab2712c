"""Normalization mutations.

.. seealso::

    :class:`Normalize`
        Min-max rescale a matrix into a fixed output range.
"""

from typing import override

import numpy as np

from computations.operations import DEFAULT_OPERATIONS
from container_models import MatrixContainer, ValueRange
from container_models.protocols import MatrixOperations
from exceptions import ProcessingError
from mutations.base import MatrixMutation


class Normalize(MatrixMutation):
    """
    Linearly rescale a matrix so its minimum maps to `lower` and its maximum to `upper`.

    ``out = (in - min) / (max - min) * (upper - lower) + lower``

    With `as_uint8` the result is rounded half to even and stored as 8-bit integers,
    which requires the target range to lie within [0, 255]. A constant matrix has no
    spread to rescale; every element then becomes `lower`.
    """

    def __init__(
        self,
        lower: float = 0.0,
        upper: float = 1.0,
        as_uint8: bool = False,
        operations: MatrixOperations = DEFAULT_OPERATIONS,
    ) -> None:
        super().__init__(operations)
        self.value_range = ValueRange(lower=lower, upper=upper)
        if as_uint8 and not (0 <= lower and upper <= 255):
            raise ValueError(
                f"An 8-bit target range must lie within [0, 255], got [{lower}, {upper}]"
            )
        self.as_uint8 = as_uint8

    @override
    def apply_on_matrix(self, matrix: MatrixContainer) -> MatrixContainer:
        if not np.all(np.isfinite(matrix.data)):
            raise ProcessingError("Cannot normalize a matrix with non-finite values")

        normalized = self.operations.normalize(
            matrix.data, self.value_range.lower, self.value_range.upper
        )
        data = (
            np.rint(normalized).astype(np.uint8)
            if self.as_uint8
            else normalized.astype(np.float32)
        )
        return MatrixContainer(data=data, value_range=self.value_range)
