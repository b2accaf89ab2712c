"""
Turn stage matrices into inline PNG rasters.

A stage matrix is first quantized to 8-bit grayscale, then PNG encoded and finally
wrapped into a ``data:image/png;base64,...`` URL that a host can embed directly.
"""

import base64
import binascii

import numpy as np
from pydantic import BaseModel, ConfigDict
from returns.result import safe

from computations.operations import DEFAULT_OPERATIONS
from container_models import MatrixContainer
from container_models.matrix import UINT8_MAX
from container_models.protocols import MatrixOperations
from exceptions import EncodingError, ProcessingError
from utils.logger import log_railway_function

DATA_URL_PREFIX = "data:image/png;base64,"
RANGE_TOLERANCE = 1e-3


class Raster(BaseModel):
    png: bytes
    width: int
    height: int
    data_url: str

    model_config = ConfigDict(frozen=True, extra="forbid")


def quantize(matrix: MatrixContainer) -> np.ndarray:
    """
    Map the matrix onto 8-bit grayscale pixels.

    `uint8` data passes through unchanged. Any other data is rescaled from its value
    range onto [0, 255] with round half to even; values may stray at most
    ``RANGE_TOLERANCE`` outside the range (float noise) and are clipped back.

    :param matrix: The stage matrix to quantize.
    :returns: A 2D `uint8` array with the same shape as the matrix.
    :raises ProcessingError: If the data is not 2D, contains non-finite values,
        has no value range, or lies outside its value range.
    """
    data = matrix.data
    if data.ndim != 2:
        raise ProcessingError(f"Can only rasterize 2D data, got {data.ndim} dimension(s)")
    if matrix.is_uint8:
        return data
    if not np.all(np.isfinite(data)):
        raise ProcessingError("Cannot rasterize non-finite values")
    if (value_range := matrix.value_range) is None:
        raise ProcessingError(
            f"Cannot rasterize {data.dtype} data without a known value range"
        )
    lowest, highest = float(np.min(data)), float(np.max(data))
    if (
        lowest < value_range.lower - RANGE_TOLERANCE
        or highest > value_range.upper + RANGE_TOLERANCE
    ):
        raise ProcessingError(
            f"Values [{lowest}, {highest}] lie outside the value range "
            f"[{value_range.lower}, {value_range.upper}]"
        )
    scaled = (data.astype(np.float64) - value_range.lower) * (
        UINT8_MAX / value_range.span
    )
    return np.clip(np.rint(scaled), 0, UINT8_MAX).astype(np.uint8)


def encode_png(
    pixels: np.ndarray, operations: MatrixOperations = DEFAULT_OPERATIONS
) -> bytes:
    """Losslessly encode 8-bit grayscale pixels as PNG."""
    try:
        return operations.encode(pixels)
    except (OSError, ValueError, TypeError) as err:
        raise ProcessingError(f"PNG encoding failed: {err}") from err


def to_data_url(png: bytes) -> str:
    try:
        return DATA_URL_PREFIX + base64.b64encode(png).decode("ascii")
    except TypeError as err:
        raise EncodingError(f"Cannot base64 encode {type(png).__name__}") from err


def decode_data_url(data_url: str) -> bytes:
    """
    Recover the PNG bytes from a data URL produced by :func:`to_data_url`.

    :raises EncodingError: If the URL has the wrong prefix or an invalid payload.
    """
    if not data_url.startswith(DATA_URL_PREFIX):
        raise EncodingError(f"Not a PNG data URL: {data_url[:32]!r}")
    try:
        return base64.b64decode(data_url.removeprefix(DATA_URL_PREFIX), validate=True)
    except binascii.Error as err:
        raise EncodingError(f"Invalid base64 payload: {err}") from err


@log_railway_function("Failed to rasterize matrix")
@safe
def rasterize(
    matrix: MatrixContainer, operations: MatrixOperations = DEFAULT_OPERATIONS
) -> Raster:
    png = encode_png(quantize(matrix), operations)
    return Raster(
        png=png,
        width=matrix.width,
        height=matrix.height,
        data_url=to_data_url(png),
    )
