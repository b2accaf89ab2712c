from enum import StrEnum


class BorderMode(StrEnum):
    """
    How values outside the matrix edge are synthesized during convolution.

    The values are the matching `scipy.ndimage` mode names.
    """

    CONSTANT = "constant"  # k k k | a b c d, with k the fill value
    REFLECT = "reflect"  # c b a | a b c d, edge sample repeated
    MIRROR = "mirror"  # d c b | a b c d, edge sample not repeated


class StageName(StrEnum):
    NORMALIZED = "Normalized"
    GAUSSIAN = "Gaussian"
    THRESHOLD = "Threshold"
    INVERTED = "Inverted"
