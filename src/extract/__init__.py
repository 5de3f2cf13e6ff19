"""
Stage 2: Extraction (CellGrid -> ThreeDTable | FlatTable).

Coordinates are plain cell indices (not rescaled to source pixels).
scale_factor is applied arithmetically; zero/negative values are not rejected here.
"""

from .module import MAX_INTENSITY, extract, scaled_intensity

__all__ = ["MAX_INTENSITY", "extract", "scaled_intensity"]
