from collections.abc import Sequence
from functools import partial
from typing import Annotated

from numpy import array, float32, number
from numpy.typing import DTypeLike, NDArray
from pydantic import AfterValidator, BeforeValidator, PlainSerializer


def serialize_ndarray[T: number](array_: NDArray[T]) -> list[T]:
    """Serialize numpy array to a Python list for JSON serialization."""
    return array_.tolist()


def coerce_to_array[T: number](
    dtype: DTypeLike, value: Sequence[T] | NDArray[T] | None
) -> NDArray[T] | None:
    """
    Coerce input to dtype numpy array.

    Handles JSON deserialization where Python creates float64 values by default.
    """
    if isinstance(value, Sequence):
        try:
            return array(value, dtype=dtype)
        except OverflowError as ofe:
            raise ValueError("Array's value(s) out of range") from ofe

    return value


def validate_shape(n_dims: int, value: NDArray) -> NDArray:
    if (array_dims := len(value.shape)) != n_dims:
        raise ValueError(
            f"Array shape mismatch, expected {n_dims} dimension(s), but got {array_dims}"
        )
    return value


def validate_not_empty(value: NDArray) -> NDArray:
    if value.size == 0:
        raise ValueError(f"Array must not be empty, got shape {value.shape}")
    return value


def freeze(value: NDArray) -> NDArray:
    """Mark the array read-only so a stage cannot alter a matrix it was handed."""
    value.setflags(write=False)
    return value


# Tier 1: Base types
type NumericArray = Annotated[
    NDArray[number],
    BeforeValidator(partial(coerce_to_array, float32)),
    PlainSerializer(serialize_ndarray),
]

# Tier 2: Shape and data types
type NumericArray2D = Annotated[
    NumericArray,
    AfterValidator(partial(validate_shape, 2)),
    AfterValidator(validate_not_empty),
]

# Tier 3: Semantic context
type MatrixData = Annotated[NumericArray2D, AfterValidator(freeze)]  # Shape: (H, W)
