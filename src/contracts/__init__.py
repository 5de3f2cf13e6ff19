"""
Canonical pipeline contracts.

These models are the schema boundary between stages:
- PixelGrid: decoded source image (input to resampling)
- CellGrid: block-averaged, monochrome grid (resampling -> extraction)
- ThreeDTable / FlatTable: extracted data (extraction -> CSV rendering)

Stage code should consume/produce these contract objects (not ad-hoc arrays or dicts).
"""

from .grid import CellGrid, InvalidInputError, PixelGrid
from .table import ExtractedTable, ExtractMode, FlatTable, ThreeDRecord, ThreeDTable

__all__ = [
    "CellGrid",
    "ExtractMode",
    "ExtractedTable",
    "FlatTable",
    "InvalidInputError",
    "PixelGrid",
    "ThreeDRecord",
    "ThreeDTable",
]
