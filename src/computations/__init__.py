"""
Stateless numeric building blocks.

Loosely coupled functionality that does not operate on a container, such as kernel
construction and the array-level implementation of the matrix operations, lives here.
"""

from .kernels import create_gaussian_kernel_1d, sigma_from_kernel_size
from .operations import DEFAULT_OPERATIONS, ArrayOperations

__all__ = (
    "ArrayOperations",
    "DEFAULT_OPERATIONS",
    "create_gaussian_kernel_1d",
    "sigma_from_kernel_size",
)
