from __future__ import annotations

from typing import Any

import numpy as np

from contracts.grid import CellGrid, InvalidInputError, PixelGrid

# Luminance weights (sum to 1.00). Applied in R, G, B order, then truncated.
RED_WEIGHT = 0.21
GREEN_WEIGHT = 0.72
BLUE_WEIGHT = 0.07
LUMINANCE_WEIGHTS: tuple[float, float, float] = (RED_WEIGHT, GREEN_WEIGHT, BLUE_WEIGHT)


def to_gray(color: tuple[int, int, int]) -> int:
    r, g, b = color
    return int(RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b)


def to_gray_array(rgb: np.ndarray) -> np.ndarray:
    """
    Vectorised `to_gray` over an (..., 3) array.

    Evaluated in float64 with the same operation order as `to_gray`, so results are
    identical cell-for-cell. Inputs are non-negative, so astype() truncation == floor.
    """

    channels = rgb.astype(np.float64)
    gray = RED_WEIGHT * channels[..., 0] + GREEN_WEIGHT * channels[..., 1] + BLUE_WEIGHT * channels[..., 2]
    return gray.astype(np.int64)


def effective_cells(*, source: int, requested: int) -> int:
    """
    requested <= 0 => no reduction (source size); otherwise never upsample.
    """

    if requested <= 0:
        return source
    return min(source, requested)


def _as_pixel_grid(pixels: Any) -> PixelGrid:
    if isinstance(pixels, PixelGrid):
        if pixels.width < 1 or pixels.height < 1:
            raise InvalidInputError("source image must be at least 1x1")
        return pixels
    return PixelGrid.from_array(pixels)


def resample(pixels: PixelGrid, target_cols: int, target_rows: int) -> CellGrid:
    """
    Block-average `pixels` down to target_cols x target_rows cells, then reduce each cell
    to grayscale.

    Block size is floor(W / cols) x floor(H / rows); trailing source columns/rows that do
    not fill a whole block are dropped (not padded). Channel means use integer division.
    """

    grid = _as_pixel_grid(pixels)
    width, height = grid.width, grid.height

    cols = effective_cells(source=width, requested=int(target_cols))
    rows = effective_cells(source=height, requested=int(target_rows))
    h_distance = width // cols
    v_distance = height // rows
    n_pixels = h_distance * v_distance

    # (rows, v, cols, h, 3) view of the covered region; sum each block per channel.
    covered = grid.data[: rows * v_distance, : cols * h_distance].astype(np.int64)
    sums = covered.reshape(rows, v_distance, cols, h_distance, 3).sum(axis=(1, 3))
    averaged = sums // n_pixels

    intensity = to_gray_array(averaged).astype(np.uint8)
    cells = np.repeat(intensity[:, :, np.newaxis], 3, axis=2)
    cells.setflags(write=False)

    return CellGrid(data=cells, h_distance=h_distance, v_distance=v_distance)
