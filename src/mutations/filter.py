from typing import override

import numpy as np
from loguru import logger

from computations.kernels import (
    SMALL_GAUSSIAN_KERNELS,
    create_gaussian_kernel_1d,
    sigma_from_kernel_size,
)
from computations.operations import DEFAULT_OPERATIONS
from container_models import MatrixContainer
from container_models.protocols import MatrixOperations
from exceptions import ProcessingError
from mutations.base import MatrixMutation
from utils.constants import BorderMode


class GaussianBlur(MatrixMutation):
    """
    Smooth a matrix with a separable Gaussian kernel.

    The 1D kernel is applied along the rows and then along the columns, which equals a
    convolution with the normalized 2D kernel. Output dimensions match the input.

    Parameters
    ----------
    kernel_size : int
        Kernel width and height in elements, a positive odd integer.
    sigma : float
        Standard deviation in elements. Values ``<= 0`` derive the kernel from its size,
        see :func:`~computations.kernels.create_gaussian_kernel_1d`.
    border : BorderMode
        How values beyond the matrix edge are synthesized.
    fill_value : float
        Padding value used with :attr:`BorderMode.CONSTANT`.
    """

    def __init__(
        self,
        kernel_size: int = 5,
        sigma: float = 1.0,
        border: BorderMode = BorderMode.CONSTANT,
        fill_value: float = 0.0,
        operations: MatrixOperations = DEFAULT_OPERATIONS,
    ) -> None:
        super().__init__(operations)
        self.kernel = create_gaussian_kernel_1d(kernel_size, sigma)
        self.kernel_size = kernel_size
        self.sigma = sigma
        self.border = border
        self.fill_value = fill_value

    def _describe_sigma(self) -> str:
        if self.sigma > 0:
            return f"sigma={self.sigma:.3f}"
        if self.kernel_size in SMALL_GAUSSIAN_KERNELS:
            return "binomial weights"
        return f"sigma={sigma_from_kernel_size(self.kernel_size):.3f} derived"

    @property
    def skip_predicate(self) -> bool:
        """A 1x1 kernel is the identity, there is nothing to smooth."""
        if self.kernel_size == 1:
            logger.debug("Skipping Gaussian blur, kernel size is 1")
            return True
        return False

    @override
    def apply_on_matrix(self, matrix: MatrixContainer) -> MatrixContainer:
        logger.info(
            f"Applying {self.kernel_size}x{self.kernel_size} Gaussian blur "
            f"({self._describe_sigma()}, border={self.border})"
        )
        try:
            blurred = self.operations.convolve(
                matrix.data, self.kernel, self.border, self.fill_value
            )
        except (ValueError, RuntimeError, FloatingPointError) as err:
            raise ProcessingError(f"Gaussian convolution failed: {err}") from err

        if not np.all(np.isfinite(blurred)):
            raise ProcessingError("Gaussian convolution produced non-finite values")

        dtype = matrix.data.dtype
        if np.issubdtype(dtype, np.integer):
            info = np.iinfo(dtype)
            data = np.clip(np.rint(blurred), info.min, info.max).astype(dtype)
        else:
            data = blurred.astype(dtype)
        return MatrixContainer(data=data, value_range=matrix.value_range)
