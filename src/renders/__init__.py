"""
Rendering of analysis stages for visual inspection.

Every observable stage of the analysis is turned into a lossless 8-bit grayscale
PNG and handed to the host as an inline data URL. `rasterize` is designed for
railway-oriented pipelines and returns a `Result` container.

Notes
-----
- `uint8` stages are encoded as is, other stages are rescaled from their value range
- Round half to even is used when mapping floats onto pixel levels
"""

from .raster import Raster, decode_data_url, encode_png, quantize, rasterize, to_data_url


__all__ = (
    "Raster",
    "decode_data_url",
    "encode_png",
    "quantize",
    "rasterize",
    "to_data_url",
)
