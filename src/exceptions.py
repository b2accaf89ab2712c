class GridLensError(Exception):
    """Base class for all errors raised while loading or analyzing a grid."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InputError(GridLensError):
    """Raised when a grid violates a structural precondition (empty or ragged)."""


class LoadError(GridLensError):
    """Raised when a grid file cannot be opened or read."""


class ProcessingError(GridLensError):
    """Raised when a numeric stage cannot produce a valid matrix."""


class EncodingError(GridLensError):
    """Raised when a raster cannot be turned into its inline text form."""
