from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from utils.constants import BorderMode


class MatrixOperations(Protocol):
    """
    Numeric capabilities the pipeline stages rely on.

    Stages only talk to this interface, so the library doing the actual array work
    can be swapped without touching the pipeline logic.
    """

    def normalize(
        self, data: NDArray[np.number], lower: float, upper: float
    ) -> NDArray[np.float64]: ...

    def convolve(
        self,
        data: NDArray[np.number],
        kernel: NDArray[np.float64],
        border: BorderMode,
        fill_value: float,
    ) -> NDArray[np.float64]: ...

    def threshold(self, data: NDArray[np.uint8]) -> float: ...

    def invert(self, data: NDArray[np.uint8]) -> NDArray[np.uint8]: ...

    def encode(self, pixels: NDArray[np.uint8]) -> bytes: ...
