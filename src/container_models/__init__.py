"""
Immutable data container models for railway-oriented programming pipelines.

This module provides Pydantic-based data models that are propagated through railway
functions in functional pipelines. These models serve as type-safe, validated containers
for grid data, ensuring data integrity as it flows through the analysis stages.

Notes
-----
These models are designed specifically for railway-oriented programming where data
flows through a sequence of transformations. The containers are frozen and hold
read-only arrays, so each stage receives unmodified input and a failing stage can
never leave a half-edited matrix behind.
"""

from .matrix import BYTE_RANGE, UNIT_RANGE, Grid, MatrixContainer, ValueRange


__all__ = ["BYTE_RANGE", "UNIT_RANGE", "Grid", "MatrixContainer", "ValueRange"]
