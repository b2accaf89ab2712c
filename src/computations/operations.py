"""
Array operations backing the analysis stages.

:class:`ArrayOperations` implements :class:`~container_models.protocols.MatrixOperations`
on top of NumPy, SciPy, scikit-image and Pillow. The stages in ``mutations`` and
``renders`` only call the protocol methods, none of these libraries leak into the
pipeline logic.
"""

from io import BytesIO

import numpy as np
from numpy.typing import NDArray
from PIL.Image import fromarray
from scipy.ndimage import correlate1d
from skimage.filters import threshold_otsu

from utils.constants import BorderMode


class ArrayOperations:
    def normalize(
        self, data: NDArray[np.number], lower: float, upper: float
    ) -> NDArray[np.float64]:
        """
        Min-max normalize `data` to the interval [lower, upper].

        The extremes map exactly onto the bounds. Constant input has no spread to
        rescale and maps to `lower` everywhere.
        """
        values = np.asarray(data, dtype=np.float64)
        imin, imax = np.min(values), np.max(values)
        if imax == imin:
            return np.full(values.shape, lower, dtype=np.float64)
        norm = (values - imin) / (imax - imin)
        return lower + (upper - lower) * norm

    def convolve(
        self,
        data: NDArray[np.number],
        kernel: NDArray[np.float64],
        border: BorderMode,
        fill_value: float,
    ) -> NDArray[np.float64]:
        """Separable convolution with a symmetric 1D kernel: Y-direction then X-direction."""
        values = np.asarray(data, dtype=np.float64)
        temp = correlate1d(values, kernel, axis=0, mode=border.value, cval=fill_value)
        return correlate1d(temp, kernel, axis=1, mode=border.value, cval=fill_value)

    def threshold(self, data: NDArray[np.uint8]) -> float:
        """
        Otsu threshold over the 256-bin histogram of `data`.

        A single-valued histogram has no split, the threshold is that value so every
        element ends up in the low class.
        """
        if np.min(data) == np.max(data):
            return float(data.flat[0])
        return float(threshold_otsu(data))

    def invert(self, data: NDArray[np.uint8]) -> NDArray[np.uint8]:
        return np.invert(data)

    def encode(self, pixels: NDArray[np.uint8]) -> bytes:
        """Encode 8-bit grayscale pixels as a PNG byte stream."""
        buffer = BytesIO()
        fromarray(pixels).save(buffer, format="PNG")
        return buffer.getvalue()


DEFAULT_OPERATIONS = ArrayOperations()
