"""
Stage 1: Resampling (PixelGrid -> monochrome CellGrid).

- Non-overlapping block averaging only; no interpolation.
- Each averaged colour is reduced to one luminance value with fixed weights.
- Pure: the source grid is never modified.
"""

from .module import (
    BLUE_WEIGHT,
    GREEN_WEIGHT,
    LUMINANCE_WEIGHTS,
    RED_WEIGHT,
    effective_cells,
    resample,
    to_gray,
    to_gray_array,
)

__all__ = [
    "BLUE_WEIGHT",
    "GREEN_WEIGHT",
    "LUMINANCE_WEIGHTS",
    "RED_WEIGHT",
    "effective_cells",
    "resample",
    "to_gray",
    "to_gray_array",
]
