from __future__ import annotations

import numpy as np

from contracts.grid import CellGrid
from contracts.table import ExtractedTable, ExtractMode, FlatTable, ThreeDRecord, ThreeDTable

MAX_INTENSITY = 255.0


def scaled_intensity(cells: CellGrid, scale_factor: float) -> list[list[float]]:
    """
    [row][col] = red * scale_factor / 255.0, as plain Python floats.

    The red channel is the intensity source (cells are assumed monochrome).
    """

    red = cells.intensity.astype(np.float64)
    return (red * float(scale_factor) / MAX_INTENSITY).tolist()


def extract(cells: CellGrid, scale_factor: float, mode: ExtractMode) -> ExtractedTable:
    mode = ExtractMode(mode)
    values = scaled_intensity(cells, scale_factor)

    if mode == ExtractMode.THREE_D:
        records = [
            ThreeDRecord(x=x, y=y, value=v)
            for y, row in enumerate(values)
            for x, v in enumerate(row)
        ]
        return ThreeDTable(records=records)

    return FlatTable(matrix=values)
