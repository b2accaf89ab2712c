"""
Matrix Mutations Module
=======================

This package contains all available `MatrixMutation` implementations.

Each mutation represents a single analysis stage that can be applied to a
`MatrixContainer`. Mutations are designed to be composable and can be chained
together using a pipeline (e.g. `returns.pipeline.flow` with `bind`).
"""

from .base import MatrixMutation
from .filter import GaussianBlur
from .normalization import Normalize
from .threshold import Invert, OtsuThreshold


__all__ = ["MatrixMutation", "GaussianBlur", "Normalize", "Invert", "OtsuThreshold"]
