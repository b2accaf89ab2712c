"""Binarization and polarity mutations for 8-bit matrices."""

from typing import override

import numpy as np
from loguru import logger

from container_models import BYTE_RANGE, MatrixContainer
from exceptions import ProcessingError
from mutations.base import MatrixMutation


def _require_uint8(matrix: MatrixContainer, stage: str) -> None:
    if not matrix.is_uint8:
        raise ProcessingError(
            f"{stage} requires 8-bit input, got dtype {matrix.data.dtype}"
        )


class OtsuThreshold(MatrixMutation):
    """
    Binarize an 8-bit matrix with Otsu's method.

    The threshold is taken from the matrix's own 256-bin histogram. Elements strictly
    above the threshold become 255, all others 0. A matrix holding a single distinct
    value has no split and comes out all 0.
    """

    @override
    def apply_on_matrix(self, matrix: MatrixContainer) -> MatrixContainer:
        _require_uint8(matrix, "Otsu threshold")
        threshold = self.operations.threshold(matrix.data)
        logger.info(f"Otsu threshold: {threshold:g}")
        data = np.where(matrix.data > threshold, 255, 0).astype(np.uint8)
        return MatrixContainer(data=data, value_range=BYTE_RANGE)


class Invert(MatrixMutation):
    """Map every 8-bit element ``v`` to ``255 - v``."""

    @override
    def apply_on_matrix(self, matrix: MatrixContainer) -> MatrixContainer:
        _require_uint8(matrix, "Inversion")
        return MatrixContainer(
            data=self.operations.invert(matrix.data), value_range=BYTE_RANGE
        )
