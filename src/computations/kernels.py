"""Gaussian kernel construction used by the smoothing stage."""

import numpy as np
from numpy.typing import NDArray

# Fixed binomial kernels used for small sizes when sigma is derived
SMALL_GAUSSIAN_KERNELS: dict[int, tuple[float, ...]] = {
    1: (1.0,),
    3: (0.25, 0.5, 0.25),
    5: (0.0625, 0.25, 0.375, 0.25, 0.0625),
    7: (0.03125, 0.109375, 0.21875, 0.28125, 0.21875, 0.109375, 0.03125),
}


def sigma_from_kernel_size(kernel_size: int) -> float:
    """
    Derive a Gaussian sigma from the kernel size.

    Uses the convention ``σ = 0.3 · ((k - 1) / 2 - 1) + 0.8`` so that a 3×3 kernel
    gets ``σ = 0.8`` and a 5×5 kernel gets ``σ = 1.1``.

    :param kernel_size: Odd kernel size in pixels.
    :returns: The derived standard deviation in pixels.
    """
    return 0.3 * ((kernel_size - 1) * 0.5 - 1) + 0.8


def create_gaussian_kernel_1d(kernel_size: int, sigma: float) -> NDArray[np.float64]:
    """
    Create a normalized 1D Gaussian kernel.

    The kernel is ``exp(-x² / 2σ²)`` sampled at integer offsets centred on zero and
    normalized to sum to 1. Separable convolution with the same kernel along both
    axes is equivalent to the 2D outer-product kernel, which then sums to 1 as well.

    When ``sigma <= 0`` the kernel is derived from its size: sizes up to 7 use the
    fixed binomial weights of :data:`SMALL_GAUSSIAN_KERNELS`, as OpenCV's
    ``getGaussianKernel`` does, and larger sizes use the sampled Gaussian with
    :func:`sigma_from_kernel_size`.

    :param kernel_size: Kernel size, must be a positive odd integer.
    :param sigma: Standard deviation in pixels, or ``<= 0`` to derive it.
    :returns: The kernel as a 1D float64 array of length ``kernel_size``.
    """
    if kernel_size < 1 or kernel_size % 2 == 0:
        raise ValueError(f"Kernel size must be a positive odd integer, got {kernel_size}")
    if sigma <= 0:
        if kernel_size in SMALL_GAUSSIAN_KERNELS:
            return np.array(SMALL_GAUSSIAN_KERNELS[kernel_size], dtype=np.float64)
        sigma = sigma_from_kernel_size(kernel_size)

    radius = (kernel_size - 1) // 2
    coords = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-(coords**2) / (2 * sigma**2))
    return kernel / np.sum(kernel)
